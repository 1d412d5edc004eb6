"""
Pydantic schemas for catalog data.

Two layers: `Provider*` models decode the catalog provider's JSON strictly (any
missing required field fails validation), and the public models are what the
gateway returns and the API serializes.
"""
from pydantic import BaseModel, ConfigDict, Field, field_validator

# Largest movie id a favorite can reference (signed 32-bit INTEGER column)
MAX_MOVIE_ID = 2**31 - 1


class ProviderGenre(BaseModel):
    """Genre as reported by the provider."""

    name: str


class ProviderMovie(BaseModel):
    """Movie summary entry in a provider listing or search result."""

    id: int
    title: str
    overview: str
    poster_path: str | None = None


class ProviderPage(BaseModel):
    """A page of provider results."""

    page: int
    results: list[ProviderMovie]
    total_pages: int = Field(ge=0)
    total_results: int = Field(default=0, ge=0)


class ProviderMovieDetail(ProviderMovie):
    """Full provider movie record from the detail endpoint."""

    release_date: str | None = None
    runtime: int | None = None
    vote_average: float = Field(ge=0, le=10)
    genres: list[ProviderGenre] = []

    @field_validator("release_date", mode="before")
    @classmethod
    def empty_release_date_to_none(cls, v: str | None) -> str | None:
        """The provider sends an empty string for unknown release dates."""
        return v or None


class Genre(BaseModel):
    """Movie genre."""

    model_config = ConfigDict(from_attributes=True)

    name: str


class MovieSummary(BaseModel):
    """Movie summary returned from listings, searches, and favorites."""

    id: int
    title: str
    overview: str
    poster_path: str | None = None
    poster_url: str | None = Field(
        default=None,
        description="Full image URL built from poster_path, or null when there is no poster",
    )


class MovieDetail(MovieSummary):
    """Movie details fetched per id."""

    release_date: str | None = None
    runtime_minutes: int | None = None
    vote_average: float = Field(ge=0, le=10)
    genres: list[Genre] = []


class MoviePage(BaseModel):
    """One page of movie summaries."""

    page: int
    items: list[MovieSummary]
    total_pages: int = Field(ge=1)
    total_results: int = 0
