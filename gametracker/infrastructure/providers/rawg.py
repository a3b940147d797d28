"""RAWG catalog provider."""

from __future__ import annotations

import asyncio
import logging
import re
from typing import Any

import aiohttp

from gametracker.domain.entities import ProviderResult

from .base import CatalogProvider, date_from_text

logger = logging.getLogger(__name__)

RAWG_GAMES_URL = "https://api.rawg.io/api/games"
# RAWG store id for Steam.
STEAM_STORE_ID = 1
PAGE_SIZE = 10
_STEAM_APP_PATTERN = re.compile(r"/app/(\d+)")


class RawgProvider(CatalogProvider):
    """Search RAWG, then look up each hit's detail page for its Steam app id."""

    source = "rawg"

    def __init__(self, api_key: str | None) -> None:
        self._api_key = api_key

    @property
    def configured(self) -> bool:
        return bool(self._api_key)

    async def search(self, session: aiohttp.ClientSession, query: str) -> list[ProviderResult]:
        params = {"key": self._api_key or "", "search": query, "page_size": str(PAGE_SIZE)}
        async with session.get(RAWG_GAMES_URL, params=params) as response:
            response.raise_for_status()
            payload = await response.json(content_type=None)

        games = [game for game in (payload or {}).get("results") or [] if game.get("name")]
        steam_ids = await asyncio.gather(
            *(self._steam_app_id(session, game.get("id")) for game in games)
        )
        return [
            ProviderResult(
                id=self.make_id(game.get("id")),
                name=game["name"],
                source=self.source,
                release_date=date_from_text(game.get("released")),
                cover_url=game.get("background_image") or None,
                external_pricing_id=steam_id,
            )
            for game, steam_id in zip(games, steam_ids)
        ]

    async def _steam_app_id(self, session: aiohttp.ClientSession, game_id: Any) -> str | None:
        """Return the Steam app id listed on the game's RAWG detail page, if any."""

        try:
            async with session.get(
                f"{RAWG_GAMES_URL}/{game_id}", params={"key": self._api_key or ""}
            ) as response:
                response.raise_for_status()
                detail = await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as exc:
            logger.debug("RAWG detail lookup for %s failed: %s", game_id, exc)
            return None

        for entry in (detail or {}).get("stores") or []:
            store = entry.get("store") or {}
            url = entry.get("url_en") or entry.get("url")
            if store.get("id") == STEAM_STORE_ID and url:
                match = _STEAM_APP_PATTERN.search(url)
                if match:
                    return match.group(1)
        return None


__all__ = ["RawgProvider"]
