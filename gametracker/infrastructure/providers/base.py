"""Shared interfaces for external catalog and pricing providers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date, datetime, timezone
from typing import Any

import aiohttp

from gametracker.domain.entities import PriceQuote, ProviderResult
from gametracker.utils import parse_iso_date


class CatalogProvider(ABC):
    """A searchable game catalog.

    Implementations map the provider's own JSON into :class:`ProviderResult`
    objects whose ids are ``<source>_<native id>``. They may raise on network
    or payload errors; isolation is the caller's job.
    """

    source: str = ""

    @property
    def configured(self) -> bool:
        return True

    @abstractmethod
    async def search(self, session: aiohttp.ClientSession, query: str) -> list[ProviderResult]:
        """Return the provider's hits for ``query``."""

    def make_id(self, native_id: Any) -> str:
        return f"{self.source}_{native_id}"


class PricingProvider(ABC):
    """A store that can quote the current price of a title."""

    @abstractmethod
    async def get_price(
        self, session: aiohttp.ClientSession, pricing_id: str
    ) -> PriceQuote | None:
        """Return the current price, or ``None`` when the store has none."""


def date_from_timestamp(value: Any) -> date | None:
    if value in (None, ""):
        return None
    try:
        return datetime.fromtimestamp(int(value), tz=timezone.utc).date()
    except (TypeError, ValueError, OverflowError, OSError):
        return None


def date_from_text(value: Any) -> date | None:
    if not isinstance(value, str):
        return None
    return parse_iso_date(value)


__all__ = [
    "CatalogProvider",
    "PricingProvider",
    "date_from_text",
    "date_from_timestamp",
]
