"""Use cases for searching external game catalogs."""

from .merge import merge_provider_results
from .search import CatalogSearchService, build_search_service, merge_search

__all__ = [
    "CatalogSearchService",
    "build_search_service",
    "merge_provider_results",
    "merge_search",
]
