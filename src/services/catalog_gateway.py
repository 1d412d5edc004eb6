"""
Read-through gateway to the external movie catalog provider (TMDB v3).

The gateway is stateless apart from its HTTP client: nothing is cached, and a
single instance is safe to share across concurrent requests.
"""
import logging
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from core.config import Settings
from schemas.catalog import (
    Genre,
    MovieDetail,
    MoviePage,
    MovieSummary,
    ProviderMovie,
    ProviderMovieDetail,
    ProviderPage,
)
from services.exceptions import (
    CatalogMalformedError,
    CatalogNotFoundError,
    CatalogUnauthorizedError,
    CatalogUnavailableError,
    InvalidPageError,
    InvalidQueryError,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

USER_AGENT = "CineGuide/1.0"

# The provider serves at most this many pages of any listing, whatever total_pages says
MAX_PROVIDER_PAGES = 500


def build_poster_url(image_base_url: str, poster_path: str | None) -> str | None:
    """Join the image base URL and a provider poster path; None when there is no poster."""
    if not poster_path:
        return None
    return f"{image_base_url.rstrip('/')}/{poster_path.lstrip('/')}"


def check_page(page: int) -> None:
    """Reject pages below 1 or past the provider's page cap before any network call."""
    if page < 1:
        raise InvalidPageError(page)
    if page > MAX_PROVIDER_PAGES:
        raise InvalidPageError(page, MAX_PROVIDER_PAGES)


class CatalogGateway:
    """Paginated, searchable view over the catalog provider."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        image_base_url: str = "https://image.tmdb.org/t/p/w500",
        language: str = "en-US",
    ) -> None:
        self._client = client
        self.image_base_url = image_base_url
        self.language = language

    @classmethod
    def from_settings(cls, settings: Settings) -> "CatalogGateway":
        """Build a gateway with its own HTTP client from application settings."""
        client = httpx.AsyncClient(
            base_url=settings.tmdb_api_url,
            timeout=settings.tmdb_timeout,
            headers={
                "Authorization": f"Bearer {settings.tmdb_api_token}",
                "Accept": "application/json",
                "User-Agent": USER_AGENT,
            },
        )
        return cls(
            client,
            image_base_url=settings.tmdb_image_base_url,
            language=settings.tmdb_language,
        )

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------

    async def list_popular(self, page: int = 1) -> MoviePage:
        """
        Get one page of popular movies.

        Raises:
            InvalidPageError: If page < 1, or page exceeds the provider's total pages.
            CatalogUnauthorizedError / CatalogUnavailableError / CatalogMalformedError
        """
        check_page(page)
        payload = await self._get("/movie/popular", params={"page": page})
        return self._to_page(page, payload)

    async def search(self, query: str, page: int = 1) -> MoviePage:
        """
        Search movies by title.

        An empty (or whitespace-only) query fails without contacting the provider.
        The query is URL-encoded by the HTTP client.

        Raises:
            InvalidQueryError: If the query is empty.
            InvalidPageError: If page < 1, or page exceeds the provider's total pages.
            CatalogUnauthorizedError / CatalogUnavailableError / CatalogMalformedError
        """
        query = query.strip()
        if not query:
            raise InvalidQueryError()
        check_page(page)
        payload = await self._get("/search/movie", params={"query": query, "page": page})
        return self._to_page(page, payload)

    async def get_detail(self, movie_id: int) -> MovieDetail:
        """
        Get details for a single movie.

        Raises:
            CatalogNotFoundError: If the provider has no movie with this id.
            CatalogUnauthorizedError / CatalogUnavailableError / CatalogMalformedError
        """
        payload = await self._get(
            f"/movie/{movie_id}",
            not_found=CatalogNotFoundError(movie_id),
        )
        movie = self._decode(ProviderMovieDetail, payload)
        return MovieDetail(
            **self._summary(movie).model_dump(),
            release_date=movie.release_date,
            runtime_minutes=movie.runtime,
            vote_average=movie.vote_average,
            genres=[Genre(name=g.name) for g in movie.genres],
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _get(
        self,
        path: str,
        params: dict[str, Any] | None = None,
        not_found: Exception | None = None,
    ) -> Any:
        """GET a provider path and return the decoded JSON body, mapping failures to typed errors."""
        request_params = {"language": self.language, **(params or {})}
        try:
            response = await self._client.get(path, params=request_params)
        except httpx.HTTPError as e:
            logger.warning("Catalog request to %s failed: %s", path, e)
            raise CatalogUnavailableError(f"Catalog provider request failed: {e}") from e

        if response.status_code == 401:
            logger.error("Catalog provider rejected the access token (path=%s)", path)
            raise CatalogUnauthorizedError()
        if response.status_code == 404 and not_found is not None:
            raise not_found
        if not response.is_success:
            logger.warning(
                "Catalog provider returned %s for %s", response.status_code, path,
            )
            raise CatalogUnavailableError(
                f"Catalog provider returned status {response.status_code}",
            )

        try:
            return response.json()
        except ValueError as e:
            raise CatalogMalformedError(f"Catalog response for {path} is not JSON") from e

    @staticmethod
    def _decode(model: type[ModelT], payload: Any) -> ModelT:
        """Strictly decode a provider payload."""
        try:
            return model.model_validate(payload)
        except ValidationError as e:
            logger.warning("Malformed catalog response: %s", e)
            raise CatalogMalformedError(
                f"Catalog response does not match {model.__name__}: "
                f"{e.error_count()} validation error(s)",
            ) from e

    def _summary(self, movie: ProviderMovie) -> MovieSummary:
        return MovieSummary(
            id=movie.id,
            title=movie.title,
            overview=movie.overview,
            poster_path=movie.poster_path,
            poster_url=build_poster_url(self.image_base_url, movie.poster_path),
        )

    def _to_page(self, page: int, payload: Any) -> MoviePage:
        data = self._decode(ProviderPage, payload)
        # An empty search reports zero pages; page 1 of it is still a valid, empty page
        total_pages = min(max(data.total_pages, 1), MAX_PROVIDER_PAGES)
        if page > total_pages:
            raise InvalidPageError(page, total_pages)
        return MoviePage(
            page=page,
            items=[self._summary(movie) for movie in data.results],
            total_pages=total_pages,
            total_results=data.total_results,
        )
