"""Use cases listing library shares."""

from sqlalchemy.orm import Session

from gametracker.domain.entities import LibraryShare, User
from gametracker.infrastructure.repositories import LibraryShareRepository, UserRepository


def list_shared_with(session: Session, owner: str) -> list[str]:
    """Return the usernames ``owner`` shares their library with."""

    return [share.to_username for share in LibraryShareRepository(session).list_from(owner)]


def list_shared_with_me(session: Session, viewer: str) -> list[tuple[LibraryShare, User | None]]:
    """Return the shares granted to ``viewer`` along with each owner's account."""

    users = UserRepository(session)
    return [
        (share, users.get_by_username(share.from_username))
        for share in LibraryShareRepository(session).list_to(viewer)
    ]


def list_public_libraries(session: Session) -> list[User]:
    """Return the users whose library is flagged as shared."""

    return list(UserRepository(session).list_sharing())
