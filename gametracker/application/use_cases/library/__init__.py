"""Use cases for managing a user's game library."""

from .add_or_update_game import LibraryChange, add_or_update_game
from .list_games import list_games
from .refresh_library_metadata import (
    MetadataRefreshReport,
    metadata_changes,
    refresh_library_metadata,
)
from .remove_game import remove_game

__all__ = [
    "LibraryChange",
    "MetadataRefreshReport",
    "add_or_update_game",
    "list_games",
    "metadata_changes",
    "refresh_library_metadata",
    "remove_game",
]
