"""SQLAlchemy models."""
from models.base import Base, TimestampMixin
from models.favorite import FavoriteMovie
from models.user import User
from models.user_session import UserSession

__all__ = ["Base", "FavoriteMovie", "TimestampMixin", "User", "UserSession"]
