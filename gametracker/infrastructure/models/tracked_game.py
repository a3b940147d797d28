"""SQLAlchemy model for games tracked in user libraries."""

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, String, UniqueConstraint, func
from sqlalchemy.orm import relationship

from gametracker.infrastructure.database import Base


class TrackedGameModel(Base):
    """Database representation of one entry in a user's library."""

    __tablename__ = "tracked_game"
    __table_args__ = (UniqueConstraint("user_id", "game_id", name="uq_tracked_game_user_game"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    game_id = Column(String(64), nullable=False)
    name = Column(String(255), nullable=False)
    cover_url = Column(String(500), nullable=True)
    release_date = Column(Date, nullable=True)
    status = Column(String(20), nullable=False, index=True)
    external_pricing_id = Column(String(64), nullable=True, index=True)
    last_price = Column(String(50), nullable=True)
    last_price_updated = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())

    user = relationship("UserModel", back_populates="games")


__all__ = ["TrackedGameModel"]
