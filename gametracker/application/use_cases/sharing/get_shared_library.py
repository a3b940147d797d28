"""Use case returning the read-only view of somebody else's library."""

from collections.abc import Sequence

from sqlalchemy.orm import Session

from gametracker.domain.entities import TrackedGame, canonical_username
from gametracker.infrastructure.repositories import (
    LibraryShareRepository,
    TrackedGameRepository,
    UserRepository,
)


def get_shared_library(session: Session, *, viewer: str, owner: str) -> Sequence[TrackedGame]:
    """Return ``owner``'s games when they are shared with ``viewer``.

    Raises ``PermissionError`` when no share exists.
    """

    viewer = canonical_username(viewer)
    owner = canonical_username(owner)
    if viewer != owner and not LibraryShareRepository(session).exists(owner, viewer):
        raise PermissionError("This library is not shared with you")

    owner_user = UserRepository(session).get_by_username(owner)
    if owner_user is None:
        return []
    return TrackedGameRepository(session).list_for_user(owner_user.id)
