"""Use case letting a viewer drop a library shared with them."""

from sqlalchemy.orm import Session

from gametracker.infrastructure.repositories import LibraryShareRepository


def revoke_share(session: Session, *, viewer: str, owner: str) -> None:
    if not LibraryShareRepository(session).delete(owner, viewer):
        raise ValueError("Share not found")
