"""Transient records produced by external catalog and pricing providers."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date


@dataclass(frozen=True)
class ProviderResult:
    """One search hit as normalized from a single provider."""

    id: str
    name: str
    source: str
    release_date: date | None = None
    cover_url: str | None = None
    external_pricing_id: str | None = None

    @property
    def name_key(self) -> str:
        return self.name.lower()


@dataclass(frozen=True)
class MergedResult:
    """De-duplicated search record, gap-filled from every provider."""

    id: str
    name: str
    source: str
    release_date: date | None = None
    cover_url: str | None = None
    external_pricing_id: str | None = None

    @classmethod
    def from_provider_result(cls, result: ProviderResult) -> "MergedResult":
        return cls(
            id=result.id,
            name=result.name,
            source=result.source,
            release_date=result.release_date,
            cover_url=result.cover_url,
            external_pricing_id=result.external_pricing_id,
        )

    def with_values(self, **changes: object) -> "MergedResult":
        return replace(self, **changes)


@dataclass(frozen=True)
class PriceQuote:
    """Current store price for a title."""

    formatted_price: str
    currency: str
    discount_percent: int = 0
    original_price: str | None = None


__all__ = ["MergedResult", "PriceQuote", "ProviderResult"]
