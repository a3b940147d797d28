"""SQLAlchemy model for library sharing grants."""

from sqlalchemy import CheckConstraint, Column, DateTime, String

from gametracker.infrastructure.database import Base
from gametracker.utils import now_in_app_naive_datetime


class LibraryShareModel(Base):
    """``from_username`` shares their library with ``to_username``."""

    __tablename__ = "library_share"
    __table_args__ = (
        CheckConstraint("from_username <> to_username", name="ck_library_share_not_self"),
    )

    from_username = Column(String(120), primary_key=True)
    to_username = Column(String(120), primary_key=True, index=True)
    shared_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)


__all__ = ["LibraryShareModel"]
