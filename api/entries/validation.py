"""
Declarative field constraints for blog entries.

Constraints are expressed as a pydantic model and checked against an already
decoded Entry. Pydantic evaluates every field, so all violations come back
together instead of stopping at the first one.
"""

from __future__ import annotations

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from .errors import EntryValidationError, FieldViolation
from .schemas import Entry

TITLE_MIN_LENGTH = 10
TITLE_MAX_LENGTH = 100
TEXT_MIN_LENGTH = 10

FIELD_ORDER = ("title", "author", "text")


class EntryConstraints(BaseModel):
    title: str = Field(..., min_length=TITLE_MIN_LENGTH, max_length=TITLE_MAX_LENGTH)
    author: str
    text: str = Field(..., min_length=TEXT_MIN_LENGTH)

    @field_validator("author")
    @classmethod
    def _author_is_bare_address(cls, value: str) -> str:
        # Bare addresses only: "Name <addr>" is rejected, no DNS lookups.
        try:
            validate_email(value, check_deliverability=False)
        except EmailNotValidError as exc:
            raise ValueError(f"value is not a valid email address: {exc}") from exc
        return value


def _violation_from_error(error: dict) -> FieldViolation:
    loc = error.get("loc") or ("entry",)
    return FieldViolation(field=str(loc[0]), message=str(error.get("msg") or "invalid value"))


def _sort_key(violation: FieldViolation) -> int:
    try:
        return FIELD_ORDER.index(violation.field)
    except ValueError:
        return len(FIELD_ORDER)


def check_entry(entry: Entry) -> list[FieldViolation]:
    """
    Return every violated constraint (empty list when the entry is valid).

    The entry is never modified; the author is checked as given.
    """
    try:
        EntryConstraints(title=entry.title, author=entry.author, text=entry.text)
    except PydanticValidationError as exc:
        violations = [_violation_from_error(err) for err in exc.errors(include_url=False)]
        return sorted(violations, key=_sort_key)
    return []


def validate(entry: Entry) -> None:
    violations = check_entry(entry)
    if violations:
        raise EntryValidationError(violations)
