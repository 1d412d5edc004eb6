"""FastAPI application entry point."""
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.routers import auth, favorites, health, movies
from core.config import get_settings
from db.session import init_db
from services.catalog_gateway import CatalogGateway
from services.exceptions import NotAuthenticatedError, ServiceError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(fastapi_app: FastAPI) -> AsyncGenerator[None]:
    """Manage application lifespan - startup and shutdown."""
    app_settings = get_settings()

    # Startup: make sure tables exist, open the catalog provider client
    await init_db()
    if not app_settings.tmdb_api_token:
        logger.warning("API_TMDB_TOKEN is not set; catalog requests will be rejected")
    fastapi_app.state.catalog_gateway = CatalogGateway.from_settings(app_settings)

    yield

    # Shutdown: close the catalog provider client
    await fastapi_app.state.catalog_gateway.aclose()


app_settings = get_settings()

app = FastAPI(
    title="CineGuide API",
    description="Browse and search a movie catalog and keep a list of favorite movies.",
    version="0.1.0",
    lifespan=lifespan,
)


@app.exception_handler(ServiceError)
async def service_error_handler(_request: Request, exc: ServiceError) -> JSONResponse:
    """Render typed service failures with their status code and error code."""
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, NotAuthenticatedError) else None
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.error, "detail": exc.message},
        headers=headers,
    )


app.add_middleware(
    CORSMiddleware,
    allow_origins=app_settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(auth.router)
app.include_router(movies.router)
app.include_router(favorites.router)
