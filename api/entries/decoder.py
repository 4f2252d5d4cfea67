"""
Request body -> validated Entry.

Two explicit stages:
1. `parse`    raw JSON -> Entry               (EntryDecodeError)
2. `validate` Entry -> field constraints      (EntryValidationError)
"""

from __future__ import annotations

from pydantic import ValidationError as PydanticValidationError

from . import validation
from .errors import EntryDecodeError
from .schemas import Entry


def _describe_decode_error(exc: PydanticValidationError) -> str:
    problems = []
    for err in exc.errors(include_url=False):
        loc = ".".join(str(part) for part in err.get("loc") or ()) or "body"
        problems.append(f"{loc}: {err.get('msg') or 'invalid value'}")
    return "; ".join(problems) or "Malformed entry payload."


def parse(raw_body: bytes | str) -> Entry:
    if not raw_body or not raw_body.strip():
        raise EntryDecodeError("Request body is empty.")
    try:
        return Entry.decode(raw_body)
    except PydanticValidationError as exc:
        raise EntryDecodeError(_describe_decode_error(exc)) from exc


def decode_and_validate(raw_body: bytes | str) -> Entry:
    entry = parse(raw_body)
    validation.validate(entry)
    return entry
