"""IGDB catalog provider."""

from __future__ import annotations

from typing import Any

import aiohttp

from gametracker.domain.entities import ProviderResult

from .base import CatalogProvider, date_from_timestamp

IGDB_GAMES_URL = "https://api.igdb.com/v4/games"
IGDB_COVER_URL = "https://images.igdb.com/igdb/image/upload/t_cover_big/{image_id}.jpg"
# IGDB ``external_games.category`` value for Steam.
STEAM_CATEGORY = 1
RESULT_LIMIT = 10


class IgdbProvider(CatalogProvider):
    source = "igdb"

    def __init__(self, client_id: str | None, bearer_token: str | None) -> None:
        self._client_id = client_id
        self._bearer_token = bearer_token

    @property
    def configured(self) -> bool:
        return bool(self._client_id and self._bearer_token)

    async def search(self, session: aiohttp.ClientSession, query: str) -> list[ProviderResult]:
        escaped = query.replace("\\", "\\\\").replace('"', '\\"')
        body = (
            f'search "{escaped}"; '
            "fields id,name,first_release_date,cover.image_id,"
            "external_games.category,external_games.uid; "
            f"limit {RESULT_LIMIT};"
        )
        headers = {
            "Client-ID": self._client_id or "",
            "Authorization": f"Bearer {self._bearer_token}",
            "Accept": "application/json",
        }
        async with session.post(IGDB_GAMES_URL, data=body, headers=headers) as response:
            response.raise_for_status()
            payload = await response.json(content_type=None)

        return [self._to_result(game) for game in payload or [] if game.get("name")]

    def _to_result(self, game: dict[str, Any]) -> ProviderResult:
        cover = game.get("cover") or {}
        image_id = cover.get("image_id") if isinstance(cover, dict) else None
        return ProviderResult(
            id=self.make_id(game.get("id")),
            name=game["name"],
            source=self.source,
            release_date=date_from_timestamp(game.get("first_release_date")),
            cover_url=IGDB_COVER_URL.format(image_id=image_id) if image_id else None,
            external_pricing_id=_steam_app_id(game.get("external_games")),
        )


def _steam_app_id(external_games: Any) -> str | None:
    if not isinstance(external_games, list):
        return None
    for external in external_games:
        if isinstance(external, dict) and external.get("category") == STEAM_CATEGORY:
            uid = external.get("uid")
            if uid:
                return str(uid)
    return None


__all__ = ["IgdbProvider"]
