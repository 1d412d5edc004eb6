"""Registration, login, and logout endpoints."""
from fastapi import APIRouter, Depends

from api.dependencies import get_bearer_token, get_current_session, get_query_facade
from models.user_session import UserSession
from schemas.auth import LoginRequest, RegisterRequest, SessionCreateResponse, SessionResponse
from schemas.errors import ErrorResponse
from services.query_facade import QueryFacade

router = APIRouter(prefix="/auth", tags=["auth"])


def _session_created(session: UserSession, token: str) -> SessionCreateResponse:
    return SessionCreateResponse(
        username=session.username,
        token_prefix=session.token_prefix,
        issued_at=session.issued_at,
        token=token,
    )


@router.post(
    "/register",
    response_model=SessionCreateResponse,
    status_code=201,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def register(
    data: RegisterRequest,
    facade: QueryFacade = Depends(get_query_facade),
) -> SessionCreateResponse:
    """
    Register a new user and log them in.

    Passwords need at least 6 characters with an uppercase letter, a lowercase
    letter, and a digit.

    IMPORTANT: The session token is only returned once. Store it securely.
    """
    session, token = await facade.register(data.username, data.password)
    return _session_created(session, token)


@router.post(
    "/login",
    response_model=SessionCreateResponse,
    responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def login(
    data: LoginRequest,
    facade: QueryFacade = Depends(get_query_facade),
) -> SessionCreateResponse:
    """Log in with username and password and receive a new session token."""
    session, token = await facade.login(data.username, data.password)
    return _session_created(session, token)


@router.post("/logout", status_code=204)
async def logout(
    token: str = Depends(get_bearer_token),
    facade: QueryFacade = Depends(get_query_facade),
) -> None:
    """
    Discard the current session.

    Logging out a session that is already closed is a no-op.
    """
    await facade.logout(token)


@router.get(
    "/me",
    response_model=SessionResponse,
    responses={401: {"model": ErrorResponse}},
)
async def get_me(
    session: UserSession = Depends(get_current_session),
) -> SessionResponse:
    """Get the current session."""
    return SessionResponse.model_validate(session)
