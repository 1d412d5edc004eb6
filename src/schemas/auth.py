"""Pydantic schemas for registration, login, and session endpoints."""
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


def normalize_username(v: str) -> str:
    """Strip surrounding whitespace from a username."""
    return v.strip() if isinstance(v, str) else v


class RegisterRequest(BaseModel):
    """Schema for registering a new user."""

    username: str = Field(..., min_length=1, max_length=150)
    password: str = Field(..., min_length=1)
    confirm_password: str = Field(..., min_length=1)

    @field_validator("username", mode="before")
    @classmethod
    def strip_username(cls, v: str) -> str:
        """Usernames are compared after stripping whitespace."""
        return normalize_username(v)

    @model_validator(mode="after")
    def check_passwords_match(self) -> "RegisterRequest":
        """Reject registration when the confirmation does not match."""
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match.")
        return self


class LoginRequest(BaseModel):
    """Schema for logging in. Both fields must be filled in."""

    username: str = Field(..., min_length=1, max_length=150)
    password: str = Field(..., min_length=1)

    @field_validator("username", mode="before")
    @classmethod
    def strip_username(cls, v: str) -> str:
        """Usernames are compared after stripping whitespace."""
        return normalize_username(v)


class SessionResponse(BaseModel):
    """Current session metadata. Never includes the token."""

    model_config = ConfigDict(from_attributes=True)

    username: str
    token_prefix: str
    issued_at: datetime


class SessionCreateResponse(SessionResponse):
    """
    Response when a session is issued by login or registration.

    IMPORTANT: The `token` field contains the plaintext bearer token and is only
    shown once. It cannot be retrieved again.
    """

    token: str = Field(
        ...,
        description="The plaintext session token. Send as 'Authorization: Bearer <token>'.",
    )
