"""
Single entry point for client operations.

The facade holds no state of its own beyond its collaborators: a database session
and a catalog gateway. Identity-scoped operations take an explicit, already-resolved
UserSession; there is no process-wide login state.
"""
from sqlalchemy.ext.asyncio import AsyncSession

from models.user_session import UserSession
from schemas.catalog import MovieDetail, MoviePage
from services import credential_service, favorites_service, session_service
from services.catalog_gateway import CatalogGateway
from services.favorites_service import FavoritesListing


class QueryFacade:
    """Routes client operations to the credential, session, favorites, and catalog services."""

    def __init__(self, db: AsyncSession, catalog: CatalogGateway) -> None:
        self.db = db
        self.catalog = catalog

    # Accounts

    async def register(self, username: str, password: str) -> tuple[UserSession, str]:
        """Register a user and log them in immediately."""
        user = await credential_service.register(self.db, username, password)
        return await session_service.issue_session(self.db, user)

    async def login(self, username: str, password: str) -> tuple[UserSession, str]:
        return await session_service.login(self.db, username, password)

    async def logout(self, token: str) -> None:
        await session_service.logout(self.db, token)

    async def current_session(self, token: str) -> UserSession:
        """Resolve a bearer token; raises NotAuthenticatedError if it has no session."""
        return await session_service.resolve(self.db, token)

    # Catalog

    async def list_popular(self, page: int = 1) -> MoviePage:
        return await self.catalog.list_popular(page)

    async def search(self, query: str, page: int = 1) -> MoviePage:
        return await self.catalog.search(query, page)

    async def get_detail(self, movie_id: int) -> MovieDetail:
        return await self.catalog.get_detail(movie_id)

    # Favorites

    async def list_favorite_ids(self, session: UserSession) -> set[int]:
        return await favorites_service.list_ids(self.db, session.username)

    async def is_favorite(self, session: UserSession, movie_id: int) -> bool:
        return await favorites_service.contains(self.db, session.username, movie_id)

    async def add_favorite(self, session: UserSession, movie_id: int) -> None:
        await favorites_service.add(self.db, session.username, movie_id)

    async def remove_favorite(self, session: UserSession, movie_id: int) -> None:
        await favorites_service.remove(self.db, session.username, movie_id)

    async def toggle_favorite(self, session: UserSession, movie_id: int) -> bool:
        """
        Flip a movie's favorite membership.

        Exactly one of add/remove runs, chosen by current membership.

        Returns:
            True if the movie is a favorite after the call, False otherwise.
        """
        if await self.is_favorite(session, movie_id):
            await self.remove_favorite(session, movie_id)
            return False
        await self.add_favorite(session, movie_id)
        return True

    async def list_favorites(self, session: UserSession) -> FavoritesListing:
        """Favorite movies with details; ids whose details fail to load are skipped and counted."""
        return await favorites_service.list_detailed(
            self.db, session.username, self.catalog.get_detail,
        )
