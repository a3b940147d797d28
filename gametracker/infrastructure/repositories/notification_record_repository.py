"""Durable store of the release reminders that have already been sent."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from gametracker.domain.entities import REMINDER_KINDS, NotificationRecord, canonical_username
from gametracker.infrastructure.models import NotificationRecordModel
from gametracker.utils import now_in_app_naive_datetime

logger = logging.getLogger(__name__)


class NotificationRecordRepository:
    """Answer "was this reminder sent?" and record that it was.

    Keys are ``(lowercased username, str(game_id), kind)``. The table is used as
    a set: rows are only ever inserted, and inserting an existing key is a
    no-op.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def was_sent(self, username: str, game_id: str | int, kind: str) -> bool:
        return self._get_model(username, game_id, kind) is not None

    def mark_sent(self, username: str, game_id: str | int, kind: str) -> None:
        if self.was_sent(username, game_id, kind):
            return

        model = NotificationRecordModel(
            username=canonical_username(username),
            game_id=str(game_id),
            kind=_validate_kind(kind),
            sent_at=now_in_app_naive_datetime(),
        )
        self.session.add(model)
        try:
            self.session.commit()
        except IntegrityError:
            # Another writer recorded the same key first.
            self.session.rollback()
            logger.debug(
                "Reminder %s for %s/%s was already recorded", kind, username, game_id
            )

    def list_for_user(self, username: str) -> Sequence[NotificationRecord]:
        query = (
            self.session.query(NotificationRecordModel)
            .filter(NotificationRecordModel.username == canonical_username(username))
            .order_by(NotificationRecordModel.sent_at, NotificationRecordModel.id)
        )
        return [self._to_entity(model) for model in query.all()]

    def _get_model(
        self, username: str, game_id: str | int, kind: str
    ) -> NotificationRecordModel | None:
        return (
            self.session.query(NotificationRecordModel)
            .filter(NotificationRecordModel.username == canonical_username(username))
            .filter(NotificationRecordModel.game_id == str(game_id))
            .filter(NotificationRecordModel.kind == _validate_kind(kind))
            .first()
        )

    @staticmethod
    def _to_entity(model: NotificationRecordModel) -> NotificationRecord:
        return NotificationRecord(
            username=model.username,
            game_id=model.game_id,
            kind=model.kind,
            sent_at=model.sent_at,
        )


def _validate_kind(kind: str) -> str:
    if kind not in REMINDER_KINDS:
        msg = f"Unknown reminder kind '{kind}'"
        raise ValueError(msg)
    return kind


__all__ = ["NotificationRecordRepository"]
