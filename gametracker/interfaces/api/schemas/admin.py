"""Schemas for administrative actions."""

from datetime import date

from pydantic import BaseModel, Field


class TestNotificationRequest(BaseModel):
    service: str = Field(default="both", pattern="^(email|ntfy|both)$")
    game_id: str = Field(default="test", max_length=64)
    game_name: str = Field(default="Test Game", min_length=1, max_length=255)
    release_date: date | None = None
    kind: str = Field(default="test", pattern="^(test|30days|7days|release)$")


class ChannelOutcomeRead(BaseModel):
    status: str
    detail: str | None
    target: str | None


class TestNotificationResponse(BaseModel):
    results: dict[str, ChannelOutcomeRead]
    game_info: dict


class SweepSummaryRead(BaseModel):
    users: int
    games_checked: int
    released: int
    reminders_sent: int
    errors: int


class PriceRefreshSummaryRead(BaseModel):
    total: int
    updated: int
    not_found: int
    errors: int


class DirectorySyncDetailRead(BaseModel):
    username: str
    action: str
    changes: list[str] = []
    error: str | None = None


class DirectorySyncRead(BaseModel):
    total: int
    updated: int
    errors: int
    details: list[DirectorySyncDetailRead]
