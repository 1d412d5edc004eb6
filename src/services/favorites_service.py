"""Service layer for per-user favorite movie sets."""
import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

from sqlalchemy import delete, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.expression import Executable

from models.favorite import FavoriteMovie
from schemas.catalog import MovieDetail
from services.exceptions import CatalogError

logger = logging.getLogger(__name__)

DetailFetcher = Callable[[int], Awaitable[MovieDetail]]

# Upper bound on concurrent provider calls while resolving one favorites listing
MAX_CONCURRENT_FETCHES = 8


@dataclass
class FavoritesListing:
    """Favorite movies with details, plus the ids whose details could not be fetched."""

    items: list[MovieDetail] = field(default_factory=list)
    skipped_ids: list[int] = field(default_factory=list)

    @property
    def skipped(self) -> int:
        """Number of ids skipped because their details failed to load."""
        return len(self.skipped_ids)


def _insert_ignoring_conflicts(db: AsyncSession, username: str, movie_id: int) -> Executable:
    """Build an INSERT that is a no-op when (username, movie_id) already exists."""
    dialect = postgresql if db.get_bind().dialect.name == "postgresql" else sqlite
    return (
        dialect.insert(FavoriteMovie)
        .values(username=username, movie_id=movie_id)
        .on_conflict_do_nothing(index_elements=["username", "movie_id"])
    )


async def add(db: AsyncSession, username: str, movie_id: int) -> None:
    """
    Add a movie to a user's favorites.

    Idempotent union: adding an id already present succeeds with no change. The
    insert is a single statement, so concurrent adds cannot produce duplicates.

    Note:
        Does not commit. Caller (session generator) handles commit at request end.
    """
    await db.execute(_insert_ignoring_conflicts(db, username, movie_id))


async def remove(db: AsyncSession, username: str, movie_id: int) -> None:
    """
    Remove a movie from a user's favorites.

    Idempotent difference: removing an absent id succeeds with no change.

    Note:
        Does not commit. Caller (session generator) handles commit at request end.
    """
    await db.execute(
        delete(FavoriteMovie).where(
            FavoriteMovie.username == username,
            FavoriteMovie.movie_id == movie_id,
        ),
    )


async def get_ordered_ids(db: AsyncSession, username: str) -> list[int]:
    """Get a user's favorite ids in the order they were added."""
    result = await db.execute(
        select(FavoriteMovie.movie_id)
        .where(FavoriteMovie.username == username)
        .order_by(FavoriteMovie.created_at, FavoriteMovie.id),
    )
    return list(result.scalars().all())


async def list_ids(db: AsyncSession, username: str) -> set[int]:
    """Get a user's favorite ids. Empty set if the user has no favorites yet."""
    return set(await get_ordered_ids(db, username))


async def contains(db: AsyncSession, username: str, movie_id: int) -> bool:
    """Check whether a movie is in a user's favorites."""
    result = await db.execute(
        select(FavoriteMovie.id).where(
            FavoriteMovie.username == username,
            FavoriteMovie.movie_id == movie_id,
        ),
    )
    return result.first() is not None


async def list_detailed(
    db: AsyncSession,
    username: str,
    detail_fetcher: DetailFetcher,
    max_concurrency: int = MAX_CONCURRENT_FETCHES,
) -> FavoritesListing:
    """
    Resolve a user's favorites to movie details.

    Details are fetched concurrently, one call per id, with at most
    `max_concurrency` calls in flight. A catalog failure for one id is logged and
    that id is skipped; it does not fail the whole listing. Items keep the order
    the ids were added in.
    """
    movie_ids = await get_ordered_ids(db, username)
    semaphore = asyncio.Semaphore(max_concurrency)

    async def fetch(movie_id: int) -> MovieDetail | None:
        try:
            async with semaphore:
                return await detail_fetcher(movie_id)
        except CatalogError as e:
            logger.warning(
                "Skipping favorite %s for %s: %s", movie_id, username, e.message,
            )
            return None

    details = await asyncio.gather(*(fetch(movie_id) for movie_id in movie_ids))

    listing = FavoritesListing()
    for movie_id, detail in zip(movie_ids, details):
        if detail is None:
            listing.skipped_ids.append(movie_id)
        else:
            listing.items.append(detail)
    return listing
