"""Favorite model - one row per (username, movie) pair."""
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from models.user import User


class FavoriteMovie(Base, TimestampMixin):
    """A catalog movie id in a user's favorite set."""

    __tablename__ = "favorite_movies"
    __table_args__ = (
        UniqueConstraint("username", "movie_id", name="uq_favorite_movies_username_movie_id"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    username: Mapped[str] = mapped_column(
        ForeignKey("users.username", ondelete="CASCADE"),
        index=True,
    )
    movie_id: Mapped[int] = mapped_column(
        Integer,
        comment="Provider-assigned catalog id",
    )

    user: Mapped["User"] = relationship(back_populates="favorites")
