"""Catalog endpoints: popular listing, title search, and movie details."""
from fastapi import APIRouter, Depends, Path, Query

from api.dependencies import get_query_facade
from schemas.catalog import MAX_MOVIE_ID, MovieDetail, MoviePage
from schemas.errors import ErrorResponse
from services.query_facade import QueryFacade

router = APIRouter(prefix="/movies", tags=["movies"])

CATALOG_ERRORS = {
    502: {"model": ErrorResponse},
    503: {"model": ErrorResponse},
}


@router.get(
    "/popular",
    response_model=MoviePage,
    responses={400: {"model": ErrorResponse}, **CATALOG_ERRORS},
)
async def list_popular(
    page: int = Query(default=1, description="1-indexed page number"),
    facade: QueryFacade = Depends(get_query_facade),
) -> MoviePage:
    """List popular movies, one provider page at a time."""
    return await facade.list_popular(page)


@router.get(
    "/search",
    response_model=MoviePage,
    responses={400: {"model": ErrorResponse}, **CATALOG_ERRORS},
)
async def search_movies(
    query: str = Query(default="", description="Title text to search for"),
    page: int = Query(default=1, description="1-indexed page number"),
    facade: QueryFacade = Depends(get_query_facade),
) -> MoviePage:
    """Search movies by title. An empty query is rejected."""
    return await facade.search(query, page)


@router.get(
    "/{movie_id}",
    response_model=MovieDetail,
    responses={404: {"model": ErrorResponse}, **CATALOG_ERRORS},
)
async def get_movie(
    movie_id: int = Path(gt=0, le=MAX_MOVIE_ID),
    facade: QueryFacade = Depends(get_query_facade),
) -> MovieDetail:
    """Get details for a single movie."""
    return await facade.get_detail(movie_id)
