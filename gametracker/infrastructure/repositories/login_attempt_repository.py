"""Persistence of failed login counters."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Session

from gametracker.domain.entities import LoginAttempt
from gametracker.infrastructure.models import LoginAttemptModel


class LoginAttemptRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, client_key: str) -> LoginAttempt | None:
        model = self.session.get(LoginAttemptModel, client_key)
        return self._to_entity(model) if model is not None else None

    def record_failure(self, client_key: str, *, now: datetime) -> LoginAttempt:
        """Count one more failure, opening a new window when none is open."""

        model = self.session.get(LoginAttemptModel, client_key)
        if model is None:
            model = LoginAttemptModel(client_key=client_key, failures=0, first_failure_at=now)
        model.failures = (model.failures or 0) + 1
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def clear(self, client_key: str) -> None:
        model = self.session.get(LoginAttemptModel, client_key)
        if model is None:
            return
        self.session.delete(model)
        self.session.commit()

    @staticmethod
    def _to_entity(model: LoginAttemptModel) -> LoginAttempt:
        return LoginAttempt(
            client_key=model.client_key,
            failures=model.failures,
            first_failure_at=model.first_failure_at,
        )


__all__ = ["LoginAttemptRepository"]
