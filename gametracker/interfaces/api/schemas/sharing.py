"""Library sharing schemas."""

from datetime import datetime

from pydantic import BaseModel, Field


class ShareListUpdate(BaseModel):
    to_users: list[str] = Field(default_factory=list)


class ShareListRead(BaseModel):
    to_users: list[str]


class SharedWithMeRead(BaseModel):
    from_user: str
    display_name: str | None
    shared_at: datetime | None
