"""Tests for the concurrent catalog search."""

from __future__ import annotations

import asyncio
import logging

import pytest

from gametracker.application.use_cases.catalog import CatalogSearchService
from gametracker.domain.entities import ProviderResult
from gametracker.infrastructure.providers import CatalogProvider


class StaticProvider(CatalogProvider):
    def __init__(self, source: str, names: list[str], *, configured: bool = True) -> None:
        self.source = source
        self._names = names
        self._configured = configured
        self.queries: list[str] = []

    @property
    def configured(self) -> bool:
        return self._configured

    async def search(self, session, query):
        self.queries.append(query)
        return [
            ProviderResult(id=self.make_id(index), name=name, source=self.source)
            for index, name in enumerate(self._names)
        ]


class BrokenProvider(CatalogProvider):
    source = "broken"

    async def search(self, session, query):
        raise ConnectionError("provider is down")


class SlowProvider(CatalogProvider):
    source = "slow"

    async def search(self, session, query):
        await asyncio.sleep(5)
        return [ProviderResult(id="slow_1", name="Never", source=self.source)]


@pytest.mark.anyio
async def test_failing_and_slow_providers_degrade_to_no_results(caplog) -> None:
    service = CatalogSearchService(
        [BrokenProvider(), SlowProvider(), StaticProvider("rawg", ["Nova", "Echo"])],
        timeout=0.05,
    )

    with caplog.at_level(logging.WARNING):
        results = await service.search("nova")

    assert [result.name for result in results] == ["Nova", "Echo"]
    assert "timed out" in caplog.text
    assert "broken search" in caplog.text


@pytest.mark.anyio
async def test_results_are_merged_in_provider_order() -> None:
    service = CatalogSearchService(
        [StaticProvider("igdb", ["Nova"]), StaticProvider("rawg", ["NOVA", "Echo"])],
        timeout=1,
    )

    results = await service.search("nova")

    assert [(result.id, result.name) for result in results] == [
        ("igdb_0", "Nova"),
        ("rawg_1", "Echo"),
    ]


@pytest.mark.anyio
async def test_unconfigured_providers_are_not_queried() -> None:
    unconfigured = StaticProvider("thegamesdb", ["Nova"], configured=False)
    service = CatalogSearchService([unconfigured, StaticProvider("igdb", ["Nova"])], timeout=1)

    results = await service.search("nova")

    assert unconfigured.queries == []
    assert [result.source for result in results] == ["igdb"]


@pytest.mark.anyio
async def test_blank_queries_return_nothing() -> None:
    provider = StaticProvider("igdb", ["Nova"])
    service = CatalogSearchService([provider], timeout=1)

    assert await service.search("   ") == []
    assert provider.queries == []
