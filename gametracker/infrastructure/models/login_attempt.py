"""SQLAlchemy model for failed login counters."""

from sqlalchemy import Column, DateTime, Integer, String

from gametracker.infrastructure.database import Base


class LoginAttemptModel(Base):
    """Failed logins of one client inside the current lockout window."""

    __tablename__ = "login_attempt"

    client_key = Column(String(255), primary_key=True)
    failures = Column(Integer, nullable=False, default=0)
    first_failure_at = Column(DateTime(), nullable=False)


__all__ = ["LoginAttemptModel"]
