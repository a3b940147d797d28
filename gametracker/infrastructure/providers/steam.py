"""Steam store pricing provider."""

from __future__ import annotations

import aiohttp

from gametracker.domain.entities import PriceQuote

from .base import PricingProvider

STEAM_APPDETAILS_URL = "https://store.steampowered.com/api/appdetails"


class SteamPricingProvider(PricingProvider):
    def __init__(self, country_code: str = "il", language: str = "en") -> None:
        self._country_code = country_code
        self._language = language

    async def get_price(
        self, session: aiohttp.ClientSession, pricing_id: str
    ) -> PriceQuote | None:
        params = {"appids": pricing_id, "cc": self._country_code, "l": self._language}
        async with session.get(STEAM_APPDETAILS_URL, params=params) as response:
            response.raise_for_status()
            payload = await response.json(content_type=None) or {}

        entry = payload.get(str(pricing_id)) or {}
        if not entry.get("success"):
            return None
        overview = (entry.get("data") or {}).get("price_overview")
        if not overview:
            return None
        return PriceQuote(
            formatted_price=overview.get("final_formatted") or "",
            currency=overview.get("currency") or "",
            discount_percent=int(overview.get("discount_percent") or 0),
            original_price=overview.get("initial_formatted") or None,
        )


__all__ = ["SteamPricingProvider"]
