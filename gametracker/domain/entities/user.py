"""Domain entity representing a user."""

from dataclasses import dataclass
from datetime import datetime

USER_ORIGIN_LOCAL = "local"
USER_ORIGIN_LDAP = "ldap"


def canonical_username(username: str | None) -> str:
    """Return the canonical (trimmed, lowercase) form of ``username``.

    Every lookup, write and comparison on usernames goes through this helper so
    that "Alice" and "alice" can never become two accounts.
    """

    return (username or "").strip().lower()


@dataclass
class User:
    """Core attributes describing an application user."""

    id: int | None
    username: str
    display_name: str
    email: str | None
    ntfy_topic: str | None
    password: str | None
    can_manage_users: bool
    origin: str
    shares_library: bool
    created_at: datetime | None

    def __post_init__(self) -> None:
        self.username = canonical_username(self.username)

    def is_admin(self) -> bool:
        """Return ``True`` when the user may manage other users."""

        return self.can_manage_users


__all__ = ["USER_ORIGIN_LDAP", "USER_ORIGIN_LOCAL", "User", "canonical_username"]
