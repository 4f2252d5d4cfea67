"""
Entry use cases, independent of FastAPI routing.

Both operations talk to an injected EntryStore; failures propagate as the
typed errors from `entries/errors.py` and `core/db.py` and are turned into
responses by `core/errors.py`.
"""

from __future__ import annotations

import logging

from . import decoder
from .repository import EntryStore
from .schemas import Entry

CREATED_CONFIRMATION = "created"

logger = logging.getLogger(__name__)


async def list_entries(store: EntryStore) -> list[Entry]:
    logger.debug("handling list_entries")
    return await store.fetch_all_entries()


async def create_entry(store: EntryStore, raw_body: bytes | str) -> str:
    logger.debug("handling create_entry")
    entry = decoder.decode_and_validate(raw_body)
    await store.insert_entry(entry.created, entry.title, entry.author, entry.text)
    logger.info("entry_created title=%r author=%s", entry.title, entry.author)
    return CREATED_CONFIRMATION
