"""
Entry payload errors.

Decode and validation failures are kept apart so callers can tell
"could not even parse" from "parsed but semantically invalid".
"""

from __future__ import annotations

from dataclasses import dataclass

from core.errors import ClientInputError

VIOLATION_SEPARATOR = "; "


@dataclass(frozen=True)
class FieldViolation:
    field: str
    message: str

    def describe(self) -> str:
        return f"{self.field}: {self.message}"


class EntryDecodeError(ClientInputError):
    pass


class EntryValidationError(ClientInputError):
    def __init__(self, violations: list[FieldViolation]) -> None:
        self.violations = list(violations)
        super().__init__(VIOLATION_SEPARATOR.join(v.describe() for v in self.violations))

    @property
    def fields(self) -> list[str]:
        return [v.field for v in self.violations]
