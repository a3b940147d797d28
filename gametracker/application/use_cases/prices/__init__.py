"""Use cases for store prices."""

from .price_refresh import PriceRefreshSummary, fetch_price, run_price_refresh

__all__ = ["PriceRefreshSummary", "fetch_price", "run_price_refresh"]
