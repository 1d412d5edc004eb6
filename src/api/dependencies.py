"""FastAPI dependencies for injection."""
from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from core.auth import get_bearer_token, get_current_session
from db.session import get_async_session
from services.catalog_gateway import CatalogGateway
from services.query_facade import QueryFacade


def get_catalog_gateway(request: Request) -> CatalogGateway:
    """Return the catalog gateway created at application startup."""
    return request.app.state.catalog_gateway


def get_query_facade(
    db: AsyncSession = Depends(get_async_session),
    catalog: CatalogGateway = Depends(get_catalog_gateway),
) -> QueryFacade:
    """Build the per-request facade over the request's database session."""
    return QueryFacade(db, catalog)


__all__ = [
    "get_bearer_token",
    "get_catalog_gateway",
    "get_current_session",
    "get_query_facade",
]
