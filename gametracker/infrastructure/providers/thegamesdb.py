"""TheGamesDB catalog provider (only used when an API key is configured)."""

from __future__ import annotations

from typing import Any

import aiohttp

from gametracker.domain.entities import ProviderResult

from .base import CatalogProvider, date_from_text

THEGAMESDB_SEARCH_URL = "https://api.thegamesdb.net/v1/Games/ByGameName"
DEFAULT_IMAGE_BASE = "https://cdn.thegamesdb.net/images/"
RESULT_LIMIT = 10


class TheGamesDbProvider(CatalogProvider):
    source = "thegamesdb"

    def __init__(self, api_key: str | None) -> None:
        self._api_key = api_key

    @property
    def configured(self) -> bool:
        return bool(self._api_key)

    async def search(self, session: aiohttp.ClientSession, query: str) -> list[ProviderResult]:
        params = {"apikey": self._api_key or "", "name": query, "include": "boxart"}
        async with session.get(THEGAMESDB_SEARCH_URL, params=params) as response:
            response.raise_for_status()
            payload = await response.json(content_type=None) or {}

        data = payload.get("data") or {}
        games = data.get("games")
        if not games:
            return []
        if isinstance(games, dict):
            games = [games]

        include = payload.get("include") or {}
        boxart = include.get("boxart") or {}
        image_base = (
            (boxart.get("base_url") or {}).get("original")
            or (include.get("base_url") or {}).get("image_base")
            or DEFAULT_IMAGE_BASE
        )
        artwork = boxart.get("data") or {}

        results: list[ProviderResult] = []
        for game in games[:RESULT_LIMIT]:
            name = game.get("game_title") or game.get("game_name") or ""
            if not name:
                continue
            results.append(
                ProviderResult(
                    id=self.make_id(game.get("id")),
                    name=name,
                    source=self.source,
                    release_date=date_from_text(game.get("release_date")),
                    cover_url=_cover_url(artwork.get(str(game.get("id"))), image_base),
                    # TheGamesDB has no store ids.
                    external_pricing_id=None,
                )
            )
        return results


def _cover_url(images: Any, image_base: str) -> str | None:
    if isinstance(images, dict):
        images = [images]
    if not isinstance(images, list) or not images:
        return None
    front = next((image for image in images if image.get("side") == "front"), images[0])
    filename = front.get("filename")
    return f"{image_base}{filename}" if filename else None


__all__ = ["TheGamesDbProvider"]
