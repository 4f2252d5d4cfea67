"""
Blog entry persistence (raw SQL).
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol

import asyncpg

from core import db

from .schemas import Entry


class EntryStore(Protocol):
    async def fetch_all_entries(self) -> list[Entry]: ...

    async def insert_entry(self, created: datetime, title: str, author: str, text: str) -> None: ...


class EntryRepository:
    """
    asyncpg-backed EntryStore. The pool is owned by the application lifespan.
    """

    def __init__(self, pool: asyncpg.Pool) -> None:
        self._pool = pool

    async def fetch_all_entries(self) -> list[Entry]:
        rows = await db.fetch_all(
            self._pool,
            """
            SELECT created, title, author, text
            FROM blog_entry
            ORDER BY id ASC
            """,
        )
        return [Entry.model_validate(row) for row in rows]

    async def insert_entry(self, created: datetime, title: str, author: str, text: str) -> None:
        await db.execute(
            self._pool,
            """
            INSERT INTO blog_entry (created, title, author, text)
            VALUES ($1, $2, $3, $4)
            """,
            created,
            title,
            author,
            text,
        )
