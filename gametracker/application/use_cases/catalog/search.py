"""Search every configured catalog provider concurrently and merge the hits."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence

import aiohttp

from gametracker.config import get_settings
from gametracker.domain.entities import MergedResult, ProviderResult
from gametracker.infrastructure.providers import CatalogProvider, build_catalog_providers

from .merge import merge_provider_results

logger = logging.getLogger(__name__)


class CatalogSearchService:
    """Fan a query out to ``providers`` and merge what comes back.

    A provider that raises or exceeds ``timeout`` contributes no hits; the
    search as a whole never fails because of one provider.
    """

    def __init__(self, providers: Sequence[CatalogProvider], *, timeout: float) -> None:
        self._providers = list(providers)
        self._timeout = timeout

    async def search(self, query: str) -> list[MergedResult]:
        query = (query or "").strip()
        if not query:
            return []

        providers = [provider for provider in self._providers if provider.configured]
        if not providers:
            logger.warning("No catalog provider is configured; search for %r skipped", query)
            return []

        async with aiohttp.ClientSession() as session:
            batches = await asyncio.gather(
                *(self._search_one(provider, session, query) for provider in providers)
            )
        return merge_provider_results(batches)

    async def _search_one(
        self, provider: CatalogProvider, session: aiohttp.ClientSession, query: str
    ) -> list[ProviderResult]:
        try:
            return await asyncio.wait_for(provider.search(session, query), self._timeout)
        except asyncio.TimeoutError:
            logger.warning("%s search for %r timed out after %ss", provider.source, query, self._timeout)
        except Exception:
            logger.exception("%s search for %r failed", provider.source, query)
        return []


def build_search_service() -> CatalogSearchService:
    settings = get_settings()
    return CatalogSearchService(
        build_catalog_providers(settings), timeout=settings.provider_timeout_seconds
    )


async def merge_search(query: str) -> list[MergedResult]:
    """Search the configured providers and return merged results."""

    return await build_search_service().search(query)


__all__ = ["CatalogSearchService", "build_search_service", "merge_search"]
