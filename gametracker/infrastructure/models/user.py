"""SQLAlchemy model for the user table."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String, func
from sqlalchemy.orm import relationship
from sqlalchemy.sql import expression

from gametracker.infrastructure.database import Base


class UserModel(Base):
    """Database representation of an application user."""

    __tablename__ = "user"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(120), nullable=False, unique=True, index=True)
    display_name = Column(String(120), nullable=False)
    email = Column(String(255), nullable=True)
    ntfy_topic = Column(String(120), nullable=True)
    password = Column(String(255), nullable=True)
    can_manage_users = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )
    origin = Column(String(20), nullable=False, default="local", server_default="local")
    shares_library = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )
    created_at = Column(DateTime, nullable=False, server_default=func.now())

    games = relationship(
        "TrackedGameModel",
        back_populates="user",
        cascade="all, delete-orphan",
    )


__all__ = ["UserModel"]
