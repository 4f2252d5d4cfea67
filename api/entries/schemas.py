"""
Pydantic schemas for blog entries.
"""

from __future__ import annotations

from pydantic import AwareDatetime, BaseModel, ConfigDict


class Entry(BaseModel):
    """
    One blog post.

    Only shape is enforced here (four fields, `created` carries an offset).
    Field constraints live in `entries/validation.py`.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    created: AwareDatetime
    title: str
    author: str
    text: str

    def encode(self) -> str:
        return self.model_dump_json()

    @classmethod
    def decode(cls, raw: bytes | str) -> "Entry":
        return cls.model_validate_json(raw)
