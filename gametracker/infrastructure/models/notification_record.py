"""SQLAlchemy model for the log of reminders already sent."""

from sqlalchemy import Column, DateTime, Integer, String, UniqueConstraint

from gametracker.infrastructure.database import Base
from gametracker.utils import now_in_app_naive_datetime


class NotificationRecordModel(Base):
    """One row per (username, game, reminder kind) that has been sent."""

    __tablename__ = "notification_record"
    __table_args__ = (
        UniqueConstraint("username", "game_id", "kind", name="uq_notification_record_key"),
    )

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(120), nullable=False, index=True)
    game_id = Column(String(64), nullable=False)
    kind = Column(String(20), nullable=False)
    sent_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)


__all__ = ["NotificationRecordModel"]
