"""Schemas for guestbook submissions and listings."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from guestbook.core.security import FIELD_MAX_LEN


class GuestBookForm(BaseModel):
    """Name and email posted to the guestbook form; both required after trimming."""

    name: str = Field(..., min_length=1, max_length=FIELD_MAX_LEN)
    email: str = Field(..., min_length=1, max_length=FIELD_MAX_LEN)

    @field_validator("name", "email", mode="before")
    @classmethod
    def strip_whitespace(cls, v: object) -> object:
        return v.strip() if isinstance(v, str) else v


class GuestBookEntryOut(BaseModel):
    """Public view of a guestbook entry; email is never listed."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
