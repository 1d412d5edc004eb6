"""User model for storing registered credentials."""
from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from models.favorite import FavoriteMovie
    from models.user_session import UserSession


class User(Base, TimestampMixin):
    """User model - a username and its password hash. Immutable after registration."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)
    username: Mapped[str] = mapped_column(
        String(150),
        unique=True,
        index=True,
    )
    password_hash: Mapped[str] = mapped_column(
        String(255),
        comment="$pbkdf2-sha256$<rounds>$<salt>$<checksum>",
    )

    sessions: Mapped[list["UserSession"]] = relationship(
        back_populates="user",
        cascade="all, delete-orphan",
    )
    favorites: Mapped[list["FavoriteMovie"]] = relationship(
        back_populates="user",
        cascade="all, delete-orphan",
    )
