"""External game catalog and pricing providers."""

from gametracker.config import Settings, get_settings

from .base import CatalogProvider, PricingProvider
from .igdb import IgdbProvider
from .rawg import RawgProvider
from .steam import SteamPricingProvider
from .thegamesdb import TheGamesDbProvider


def build_catalog_providers(settings: Settings | None = None) -> list[CatalogProvider]:
    """Return the catalog providers in merge-priority order."""

    settings = settings or get_settings()
    return [
        IgdbProvider(settings.igdb_client_id, settings.igdb_bearer_token),
        RawgProvider(settings.rawg_api_key),
        TheGamesDbProvider(settings.thegamesdb_api_key),
    ]


def build_pricing_provider(settings: Settings | None = None) -> PricingProvider:
    settings = settings or get_settings()
    return SteamPricingProvider(country_code=settings.steam_country_code)


__all__ = [
    "CatalogProvider",
    "IgdbProvider",
    "PricingProvider",
    "RawgProvider",
    "SteamPricingProvider",
    "TheGamesDbProvider",
    "build_catalog_providers",
    "build_pricing_provider",
]
