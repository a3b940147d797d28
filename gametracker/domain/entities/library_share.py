"""Domain entity representing a read-only grant on a user's library."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class LibraryShare:
    """``from_username`` lets ``to_username`` view their library."""

    from_username: str
    to_username: str
    shared_at: datetime | None = None


__all__ = ["LibraryShare"]
