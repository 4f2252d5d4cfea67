"""
Blog entry API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from . import service
from .repository import EntryRepository, EntryStore
from .schemas import Entry

router = APIRouter()


def get_entry_store(request: Request) -> EntryStore:
    return EntryRepository(request.app.state.pool)


@router.get("/entries", response_model=list[Entry])
async def list_entries(store: EntryStore = Depends(get_entry_store)) -> list[Entry]:
    return await service.list_entries(store)


@router.post("/entries")
async def create_entry(request: Request, store: EntryStore = Depends(get_entry_store)) -> str:
    """
    Body is read raw so decode and validation failures are reported by
    `entries/decoder.py` instead of FastAPI's own 422 handling.
    """
    raw_body = await request.body()
    return await service.create_entry(store, raw_body)
