"""Persistence layer for user data."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from gametracker.domain.entities import User, canonical_username
from gametracker.infrastructure.models import UserModel


class UserRepository:
    """Provide CRUD operations for user entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list(self, skip: int = 0, limit: int | None = 100) -> Sequence[User]:
        query = self.session.query(UserModel).order_by(UserModel.username).offset(skip)
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def list_usernames(self) -> list[str]:
        query = self.session.query(UserModel.username).order_by(UserModel.username)
        return [canonical_username(username) for (username,) in query.all()]

    def list_sharing(self) -> Sequence[User]:
        query = (
            self.session.query(UserModel)
            .filter(UserModel.shares_library.is_(True))
            .order_by(UserModel.username)
        )
        return [self._to_entity(model) for model in query.all()]

    def list_by_origin(self, origin: str) -> Sequence[User]:
        query = (
            self.session.query(UserModel)
            .filter(UserModel.origin == origin)
            .order_by(UserModel.username)
        )
        return [self._to_entity(model) for model in query.all()]

    def get(self, user_id: int) -> User | None:
        model = self.session.get(UserModel, user_id)
        return self._to_entity(model) if model else None

    def get_by_username(self, username: str) -> User | None:
        model = self._get_model(username)
        return self._to_entity(model) if model else None

    def create(self, user: User) -> User:
        model = UserModel()
        self._apply_entity_to_model(model, user)
        if user.created_at is not None:
            model.created_at = user.created_at
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, user: User) -> User:
        model = self.session.get(UserModel, user.id) if user.id is not None else None
        if model is None:
            msg = f"User with id {user.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, user)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def set_email(self, username: str, email: str) -> None:
        """Remember ``email`` for ``username`` (used after directory lookups)."""

        self.session.query(UserModel).filter(
            UserModel.username == canonical_username(username)
        ).update({UserModel.email: email}, synchronize_session=False)
        self.session.commit()

    def delete(self, user_id: int) -> None:
        model = self.session.get(UserModel, user_id)
        if model is None:
            msg = f"User with id {user_id} not found"
            raise ValueError(msg)
        self.session.delete(model)
        self.session.commit()

    def _get_model(self, username: str) -> UserModel | None:
        return (
            self.session.query(UserModel)
            .filter(UserModel.username == canonical_username(username))
            .first()
        )

    @staticmethod
    def _apply_entity_to_model(model: UserModel, user: User) -> None:
        model.username = canonical_username(user.username)
        model.display_name = user.display_name or model.username
        model.email = user.email
        model.ntfy_topic = user.ntfy_topic
        model.password = user.password
        model.can_manage_users = user.can_manage_users
        model.origin = user.origin
        model.shares_library = user.shares_library

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            username=model.username,
            display_name=model.display_name,
            email=model.email,
            ntfy_topic=model.ntfy_topic,
            password=model.password,
            can_manage_users=bool(model.can_manage_users),
            origin=model.origin,
            shares_library=bool(model.shares_library),
            created_at=model.created_at,
        )


__all__ = ["UserRepository"]
