"""Weekly refresh of the cached store price of tracked games."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import asdict, dataclass

import aiohttp
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from gametracker.config import get_settings
from gametracker.domain.entities import PriceQuote
from gametracker.infrastructure.database import SessionLocal
from gametracker.infrastructure.providers import PricingProvider, build_pricing_provider
from gametracker.infrastructure.repositories import TrackedGameRepository
from gametracker.utils import now_in_app_naive_datetime

logger = logging.getLogger(__name__)


@dataclass
class PriceRefreshSummary:
    total: int = 0
    updated: int = 0
    not_found: int = 0
    errors: int = 0

    def as_dict(self) -> dict[str, int]:
        return asdict(self)


async def fetch_price(
    provider: PricingProvider,
    pricing_id: str,
    *,
    session: aiohttp.ClientSession | None = None,
    timeout: float | None = None,
) -> PriceQuote | None:
    """Return the current price for ``pricing_id`` (``None`` when unknown)."""

    timeout = timeout or get_settings().provider_timeout_seconds
    if session is not None:
        return await asyncio.wait_for(provider.get_price(session, pricing_id), timeout)
    async with aiohttp.ClientSession() as http:
        return await asyncio.wait_for(provider.get_price(http, pricing_id), timeout)


async def run_price_refresh(
    *,
    session_factory: Callable[[], Session] | None = None,
    pricing_provider: PricingProvider | None = None,
    timeout: float | None = None,
) -> PriceRefreshSummary:
    """Re-quote every tracked game with a pricing id and cache the price.

    Each pricing id is looked up at most once per run, and games sharing it
    share the outcome. A failed or timed out lookup is logged and counted as an
    error for every such game, which keeps its previous cached price.
    """

    session_factory = session_factory or SessionLocal
    provider = pricing_provider or build_pricing_provider()
    timeout = timeout or get_settings().provider_timeout_seconds
    summary = PriceRefreshSummary()
    quotes: dict[str, PriceQuote | None] = {}
    failed: set[str] = set()

    session = session_factory()
    try:
        repository = TrackedGameRepository(session)
        games = repository.list_with_pricing_id()
        summary.total = len(games)

        async with aiohttp.ClientSession() as http:
            for game in games:
                pricing_id = game.external_pricing_id
                if pricing_id in failed:
                    summary.errors += 1
                    continue
                if pricing_id not in quotes:
                    try:
                        quotes[pricing_id] = await fetch_price(
                            provider, pricing_id, session=http, timeout=timeout
                        )
                    except asyncio.TimeoutError:
                        failed.add(pricing_id)
                        summary.errors += 1
                        logger.warning("Price lookup for %s timed out", pricing_id)
                        continue
                    except Exception:
                        failed.add(pricing_id)
                        summary.errors += 1
                        logger.exception("Price lookup for %s failed", pricing_id)
                        continue

                quote = quotes[pricing_id]
                if quote is None:
                    summary.not_found += 1
                    continue

                try:
                    repository.update_price(
                        game.id,
                        price=quote.formatted_price,
                        updated_at=now_in_app_naive_datetime(),
                    )
                except SQLAlchemyError:
                    session.rollback()
                    summary.errors += 1
                    logger.exception("Could not store the price of %s", game.name)
                    continue
                summary.updated += 1
    finally:
        session.close()

    logger.info(
        "Price refresh: %s games, %s updated, %s without price, %s errors",
        summary.total,
        summary.updated,
        summary.not_found,
        summary.errors,
    )
    return summary


__all__ = ["PriceRefreshSummary", "fetch_price", "run_price_refresh"]
