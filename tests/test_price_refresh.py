"""Tests for the weekly price refresh job."""

from __future__ import annotations

import asyncio
from datetime import date

import pytest

from gametracker.application.use_cases.prices import run_price_refresh
from gametracker.domain.entities import PriceQuote
from gametracker.infrastructure.providers import PricingProvider
from gametracker.infrastructure.repositories import TrackedGameRepository


class FakePricing(PricingProvider):
    def __init__(self, quotes: dict[str, object]) -> None:
        self._quotes = quotes
        self.calls: list[str] = []

    async def get_price(self, session, pricing_id):
        self.calls.append(pricing_id)
        value = self._quotes.get(pricing_id)
        if isinstance(value, Exception):
            raise value
        if value == "hang":
            await asyncio.sleep(5)
        return value


def _quote(price: str) -> PriceQuote:
    return PriceQuote(formatted_price=price, currency="ILS")


@pytest.mark.anyio
async def test_prices_are_cached_on_every_game(session, session_factory, make_user, track_game) -> None:
    alice = make_user("alice")
    bob = make_user("bob")
    track_game(alice, "1", "Nova", release_date=date(2020, 1, 1), status="wishlist", external_pricing_id="620")
    track_game(bob, "1", "Nova", release_date=date(2020, 1, 1), status="playing", external_pricing_id="620")
    track_game(alice, "2", "No Store", release_date=None)
    provider = FakePricing({"620": _quote("₪42.00")})

    summary = await run_price_refresh(session_factory=session_factory, pricing_provider=provider)

    assert summary.as_dict() == {"total": 2, "updated": 2, "not_found": 0, "errors": 0}
    assert provider.calls == ["620"]
    session.expire_all()
    stored = TrackedGameRepository(session).get(bob.id, "1")
    assert stored.last_price == "₪42.00"
    assert stored.last_price_updated is not None


@pytest.mark.anyio
async def test_failures_and_missing_prices_are_counted_separately(
    session, session_factory, make_user, track_game
) -> None:
    alice = make_user("alice")
    track_game(alice, "1", "Free", release_date=date(2020, 1, 1), status="done", external_pricing_id="1")
    track_game(alice, "2", "Broken", release_date=date(2020, 1, 1), status="done", external_pricing_id="2")
    track_game(alice, "3", "Slow", release_date=date(2020, 1, 1), status="done", external_pricing_id="3")
    track_game(alice, "4", "Paid", release_date=date(2020, 1, 1), status="done", external_pricing_id="4")
    provider = FakePricing({"1": None, "2": RuntimeError("store down"), "3": "hang", "4": _quote("$9.99")})

    summary = await run_price_refresh(
        session_factory=session_factory, pricing_provider=provider, timeout=0.05
    )

    assert summary.total == 4
    assert summary.updated == 1
    assert summary.not_found == 1
    assert summary.errors == 2
    session.expire_all()
    assert TrackedGameRepository(session).get(alice.id, "2").last_price is None
    assert TrackedGameRepository(session).get(alice.id, "4").last_price == "$9.99"


@pytest.mark.anyio
async def test_a_failing_pricing_id_is_queried_once(
    session, session_factory, make_user, track_game
) -> None:
    alice = make_user("alice")
    bob = make_user("bob")
    track_game(alice, "1", "Nova", release_date=date(2020, 1, 1), status="done", external_pricing_id="620")
    track_game(bob, "1", "Nova", release_date=date(2020, 1, 1), status="done", external_pricing_id="620")
    provider = FakePricing({"620": RuntimeError("store down")})

    summary = await run_price_refresh(session_factory=session_factory, pricing_provider=provider)

    assert provider.calls == ["620"]
    assert summary.errors == 2
    assert summary.updated == 0
