"""Catalog search and store price endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from gametracker.application.use_cases.catalog import merge_search
from gametracker.application.use_cases.prices import fetch_price
from gametracker.domain.entities import User
from gametracker.infrastructure.providers import build_pricing_provider
from gametracker.interfaces.api.dependencies import get_current_user
from gametracker.interfaces.api.schemas import CatalogResultRead, PriceRead

router = APIRouter(prefix="/games", tags=["games"])


@router.get("/search", response_model=list[CatalogResultRead])
async def search_games(
    q: str = Query(..., min_length=1, max_length=200),
    _: User = Depends(get_current_user),
):
    """Search every configured catalog and return de-duplicated results."""

    results = await merge_search(q)
    return [CatalogResultRead.model_validate(result) for result in results]


@router.get("/price/{pricing_id}", response_model=PriceRead)
async def get_game_price(pricing_id: str, _: User = Depends(get_current_user)):
    if not pricing_id.isdigit():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid pricing id")

    try:
        quote = await fetch_price(build_pricing_provider(), pricing_id)
    except Exception as exc:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY, detail="Price lookup failed"
        ) from exc

    if quote is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Price not found")
    return PriceRead(
        pricing_id=pricing_id,
        formatted_price=quote.formatted_price,
        currency=quote.currency,
        discount_percent=quote.discount_percent,
        original_price=quote.original_price,
    )
