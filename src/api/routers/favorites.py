"""Favorites endpoints. All routes act on the caller's own favorite set."""
from fastapi import APIRouter, Depends, Path

from api.dependencies import get_current_session, get_query_facade
from models.user_session import UserSession
from schemas.errors import ErrorResponse
from schemas.catalog import MAX_MOVIE_ID
from schemas.favorite import FavoriteIdsResponse, FavoriteMoviesResponse, FavoriteStatusResponse
from services.query_facade import QueryFacade

router = APIRouter(
    prefix="/favorites",
    tags=["favorites"],
    responses={401: {"model": ErrorResponse}},
)


@router.get("/", response_model=FavoriteIdsResponse)
async def list_favorite_ids(
    session: UserSession = Depends(get_current_session),
    facade: QueryFacade = Depends(get_query_facade),
) -> FavoriteIdsResponse:
    """List favorite movie ids."""
    movie_ids = await facade.list_favorite_ids(session)
    return FavoriteIdsResponse(movie_ids=sorted(movie_ids))


@router.get("/movies", response_model=FavoriteMoviesResponse)
async def list_favorite_movies(
    session: UserSession = Depends(get_current_session),
    facade: QueryFacade = Depends(get_query_facade),
) -> FavoriteMoviesResponse:
    """
    List favorite movies with details.

    Movies whose details cannot be loaded from the catalog are left out and counted
    in `skipped`.
    """
    listing = await facade.list_favorites(session)
    return FavoriteMoviesResponse(
        items=listing.items,
        skipped=listing.skipped,
        skipped_ids=listing.skipped_ids,
    )


@router.get("/{movie_id}", response_model=FavoriteStatusResponse)
async def get_favorite_status(
    movie_id: int = Path(gt=0, le=MAX_MOVIE_ID),
    session: UserSession = Depends(get_current_session),
    facade: QueryFacade = Depends(get_query_facade),
) -> FavoriteStatusResponse:
    """Check whether a movie is a favorite."""
    is_favorite = await facade.is_favorite(session, movie_id)
    return FavoriteStatusResponse(movie_id=movie_id, is_favorite=is_favorite)


@router.put("/{movie_id}", status_code=204)
async def add_favorite(
    movie_id: int = Path(gt=0, le=MAX_MOVIE_ID),
    session: UserSession = Depends(get_current_session),
    facade: QueryFacade = Depends(get_query_facade),
) -> None:
    """Add a movie to favorites. Adding a movie that is already a favorite is a no-op."""
    await facade.add_favorite(session, movie_id)


@router.delete("/{movie_id}", status_code=204)
async def remove_favorite(
    movie_id: int = Path(gt=0, le=MAX_MOVIE_ID),
    session: UserSession = Depends(get_current_session),
    facade: QueryFacade = Depends(get_query_facade),
) -> None:
    """Remove a movie from favorites. Removing a movie that is not a favorite is a no-op."""
    await facade.remove_favorite(session, movie_id)


@router.post("/{movie_id}/toggle", response_model=FavoriteStatusResponse)
async def toggle_favorite(
    movie_id: int = Path(gt=0, le=MAX_MOVIE_ID),
    session: UserSession = Depends(get_current_session),
    facade: QueryFacade = Depends(get_query_facade),
) -> FavoriteStatusResponse:
    """Add the movie if it is not a favorite, remove it if it is."""
    is_favorite = await facade.toggle_favorite(session, movie_id)
    return FavoriteStatusResponse(movie_id=movie_id, is_favorite=is_favorite)
