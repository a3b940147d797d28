"""Persistence helpers for games tracked in user libraries."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy.orm import Session

from gametracker.domain.entities import (
    GAME_STATUS_UNRELEASED,
    GAME_STATUS_WISHLIST,
    TrackedGame,
    effective_status,
)
from gametracker.infrastructure.models import TrackedGameModel


class TrackedGameRepository:
    """Provide CRUD operations for :class:`TrackedGame` objects.

    Every write goes through :func:`effective_status`, so a row without a
    release date is always stored as ``unreleased``.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_for_user(self, user_id: int) -> Sequence[TrackedGame]:
        query = (
            self.session.query(TrackedGameModel)
            .filter(TrackedGameModel.user_id == user_id)
            .order_by(TrackedGameModel.name)
        )
        return [self._to_entity(model) for model in query.all()]

    def list_awaiting_release(self, user_id: int) -> Sequence[TrackedGame]:
        query = (
            self.session.query(TrackedGameModel)
            .filter(TrackedGameModel.user_id == user_id)
            .filter(TrackedGameModel.status == GAME_STATUS_UNRELEASED)
            .filter(TrackedGameModel.release_date.is_not(None))
            .order_by(TrackedGameModel.release_date)
        )
        return [self._to_entity(model) for model in query.all()]

    def list_with_pricing_id(self) -> Sequence[TrackedGame]:
        query = (
            self.session.query(TrackedGameModel)
            .filter(TrackedGameModel.external_pricing_id.is_not(None))
            .order_by(TrackedGameModel.id)
        )
        return [self._to_entity(model) for model in query.all()]

    def get(self, user_id: int, game_id: str) -> TrackedGame | None:
        model = self._get_model(user_id, game_id)
        return self._to_entity(model) if model else None

    def upsert(self, game: TrackedGame) -> TrackedGame:
        model = self._get_model(game.user_id, game.game_id)
        if model is None:
            model = TrackedGameModel(user_id=game.user_id, game_id=str(game.game_id))
        self._apply_entity_to_model(model, game)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update_metadata(
        self,
        user_id: int,
        game_id: str,
        *,
        changes: dict[str, object],
    ) -> TrackedGame:
        model = self._get_model(user_id, game_id)
        if model is None:
            msg = f"Game {game_id} is not in the library"
            raise ValueError(msg)
        for field_name, value in changes.items():
            setattr(model, field_name, value)
        model.status = effective_status(model.status, model.release_date)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def mark_released(self, user_id: int, game_id: str) -> bool:
        """Move a game from ``unreleased`` to ``wishlist``.

        The update is conditional on the row still being ``unreleased`` so a
        concurrent user-driven status change is never overwritten. Returns
        ``True`` when this call performed the transition.
        """

        updated = (
            self.session.query(TrackedGameModel)
            .filter(TrackedGameModel.user_id == user_id)
            .filter(TrackedGameModel.game_id == str(game_id))
            .filter(TrackedGameModel.status == GAME_STATUS_UNRELEASED)
            .filter(TrackedGameModel.release_date.is_not(None))
            .update({TrackedGameModel.status: GAME_STATUS_WISHLIST}, synchronize_session=False)
        )
        self.session.commit()
        return updated == 1

    def update_price(self, tracked_game_id: int, *, price: str, updated_at: datetime) -> None:
        self.session.query(TrackedGameModel).filter(
            TrackedGameModel.id == tracked_game_id
        ).update(
            {
                TrackedGameModel.last_price: price,
                TrackedGameModel.last_price_updated: updated_at,
            },
            synchronize_session=False,
        )
        self.session.commit()

    def delete(self, user_id: int, game_id: str) -> bool:
        deleted = (
            self.session.query(TrackedGameModel)
            .filter(TrackedGameModel.user_id == user_id)
            .filter(TrackedGameModel.game_id == str(game_id))
            .delete(synchronize_session=False)
        )
        self.session.commit()
        return deleted > 0

    def _get_model(self, user_id: int, game_id: str) -> TrackedGameModel | None:
        return (
            self.session.query(TrackedGameModel)
            .filter(TrackedGameModel.user_id == user_id)
            .filter(TrackedGameModel.game_id == str(game_id))
            .first()
        )

    @staticmethod
    def _apply_entity_to_model(model: TrackedGameModel, game: TrackedGame) -> None:
        model.name = game.name
        model.cover_url = game.cover_url
        model.release_date = game.release_date
        model.status = effective_status(game.status, game.release_date)
        model.external_pricing_id = game.external_pricing_id
        model.last_price = game.last_price
        model.last_price_updated = game.last_price_updated

    @staticmethod
    def _to_entity(model: TrackedGameModel) -> TrackedGame:
        return TrackedGame(
            id=model.id,
            user_id=model.user_id,
            game_id=model.game_id,
            name=model.name,
            cover_url=model.cover_url,
            release_date=model.release_date,
            status=model.status,
            external_pricing_id=model.external_pricing_id,
            last_price=model.last_price,
            last_price_updated=model.last_price_updated,
            created_at=model.created_at,
        )


__all__ = ["TrackedGameRepository"]
