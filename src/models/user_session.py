"""Session model for logged-in clients."""
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from models.user import User


class UserSession(Base, TimestampMixin):
    """
    A login session, identified by an opaque bearer token.

    Tokens are stored hashed - plaintext is only returned once at login.
    The token_prefix allows identification without exposing the full token.
    """

    __tablename__ = "sessions"

    id: Mapped[int] = mapped_column(primary_key=True)
    username: Mapped[str] = mapped_column(
        ForeignKey("users.username", ondelete="CASCADE"),
        index=True,
    )
    token_hash: Mapped[str] = mapped_column(
        String(64),
        unique=True,
        index=True,
        comment="SHA-256 hash of the token",
    )
    token_prefix: Mapped[str] = mapped_column(
        String(12),
        comment="First 12 chars for identification, e.g., 'cg_abc12345'",
    )

    user: Mapped["User"] = relationship(back_populates="sessions")

    @property
    def issued_at(self) -> datetime:
        """When the session was issued."""
        return self.created_at
