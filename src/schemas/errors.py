"""Error response schema shared by all endpoints."""
from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Body returned for every typed service failure."""

    error: str = Field(description="Stable error code, e.g. 'invalid_page' or 'duplicate_user'")
    detail: str = Field(description="Human-readable error message")
