"""Pydantic schemas for favorites endpoints."""
from pydantic import BaseModel, Field

from schemas.catalog import MovieDetail


class FavoriteIdsResponse(BaseModel):
    """The current user's favorite movie ids, sorted ascending."""

    movie_ids: list[int]


class FavoriteStatusResponse(BaseModel):
    """Whether a movie is in the current user's favorites."""

    movie_id: int
    is_favorite: bool


class FavoriteMoviesResponse(BaseModel):
    """Favorite movies with details; ids whose details could not be fetched are skipped."""

    items: list[MovieDetail]
    skipped: int = Field(ge=0, description="Number of favorite ids whose details failed to load")
    skipped_ids: list[int] = []
