"""Use case replacing the list of users a library is shared with."""

from collections.abc import Iterable

from sqlalchemy.orm import Session

from gametracker.domain.entities import canonical_username
from gametracker.infrastructure.repositories import LibraryShareRepository, UserRepository


def set_library_shares(
    session: Session, *, owner: str, to_usernames: Iterable[str]
) -> list[str]:
    """Share ``owner``'s library with exactly ``to_usernames``.

    Names are lowercased and de-duplicated, the owner is dropped, and unknown
    users are rejected. Returns the stored list.
    """

    owner = canonical_username(owner)
    targets: list[str] = []
    for username in to_usernames:
        username = canonical_username(username)
        if username and username != owner and username not in targets:
            targets.append(username)

    known = set(UserRepository(session).list_usernames())
    unknown = [username for username in targets if username not in known]
    if unknown:
        msg = f"Unknown users: {', '.join(unknown)}"
        raise ValueError(msg)

    LibraryShareRepository(session).replace_for(owner, targets)
    return sorted(targets)
