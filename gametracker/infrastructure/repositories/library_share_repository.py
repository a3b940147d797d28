"""Persistence helpers for library sharing grants."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from sqlalchemy.orm import Session

from gametracker.domain.entities import LibraryShare, canonical_username
from gametracker.infrastructure.models import LibraryShareModel
from gametracker.utils import now_in_app_naive_datetime


class LibraryShareRepository:
    """Provide read and write access to :class:`LibraryShare` grants."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_from(self, from_username: str) -> Sequence[LibraryShare]:
        query = (
            self.session.query(LibraryShareModel)
            .filter(LibraryShareModel.from_username == canonical_username(from_username))
            .order_by(LibraryShareModel.to_username)
        )
        return [self._to_entity(model) for model in query.all()]

    def list_to(self, to_username: str) -> Sequence[LibraryShare]:
        query = (
            self.session.query(LibraryShareModel)
            .filter(LibraryShareModel.to_username == canonical_username(to_username))
            .order_by(LibraryShareModel.from_username)
        )
        return [self._to_entity(model) for model in query.all()]

    def exists(self, from_username: str, to_username: str) -> bool:
        model = self.session.get(
            LibraryShareModel,
            (canonical_username(from_username), canonical_username(to_username)),
        )
        return model is not None

    def replace_for(self, from_username: str, to_usernames: Iterable[str]) -> None:
        owner = canonical_username(from_username)
        self.session.query(LibraryShareModel).filter(
            LibraryShareModel.from_username == owner
        ).delete(synchronize_session=False)
        now = now_in_app_naive_datetime()
        for to_username in to_usernames:
            self.session.add(
                LibraryShareModel(
                    from_username=owner,
                    to_username=canonical_username(to_username),
                    shared_at=now,
                )
            )
        self.session.commit()

    def delete(self, from_username: str, to_username: str) -> bool:
        deleted = (
            self.session.query(LibraryShareModel)
            .filter(LibraryShareModel.from_username == canonical_username(from_username))
            .filter(LibraryShareModel.to_username == canonical_username(to_username))
            .delete(synchronize_session=False)
        )
        self.session.commit()
        return deleted > 0

    @staticmethod
    def _to_entity(model: LibraryShareModel) -> LibraryShare:
        return LibraryShare(
            from_username=model.from_username,
            to_username=model.to_username,
            shared_at=model.shared_at,
        )


__all__ = ["LibraryShareRepository"]
