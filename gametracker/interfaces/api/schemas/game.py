"""Catalog and library schemas."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from gametracker.domain.entities import GAME_STATUSES

_STATUS_PATTERN = "^(" + "|".join(GAME_STATUSES) + ")$"


class CatalogResultRead(BaseModel):
    id: str
    name: str
    source: str
    release_date: date | None
    cover_url: str | None
    external_pricing_id: str | None

    model_config = ConfigDict(from_attributes=True)


class PriceRead(BaseModel):
    pricing_id: str
    formatted_price: str
    currency: str
    discount_percent: int
    original_price: str | None


class TrackedGameCreate(BaseModel):
    game_id: str = Field(..., min_length=1, max_length=64)
    name: str = Field(..., min_length=1, max_length=255)
    status: str = Field(..., pattern=_STATUS_PATTERN)
    release_date: date | None = None
    cover_url: str | None = None
    external_pricing_id: str | None = Field(default=None, max_length=64)


class TrackedGameRead(BaseModel):
    game_id: str
    name: str
    cover_url: str | None
    release_date: date | None
    status: str
    external_pricing_id: str | None
    last_price: str | None
    last_price_updated: datetime | None

    model_config = ConfigDict(from_attributes=True)


class MetadataRefreshRead(BaseModel):
    total: int
    updated: int
    errors: int
    details: list[dict]
