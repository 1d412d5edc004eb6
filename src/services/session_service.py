"""Service layer for issuing, resolving, and revoking login sessions."""
import hashlib
import logging
import secrets

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from models.user import User
from models.user_session import UserSession
from services import credential_service
from services.exceptions import (
    InvalidCredentialsError,
    NotAuthenticatedError,
    UserNotFoundError,
)

logger = logging.getLogger(__name__)

TOKEN_PREFIX = "cg_"


def generate_token() -> tuple[str, str, str]:
    """
    Generate a secure session token.

    Returns:
        Tuple of (plaintext_token, token_hash, token_prefix).
        The plaintext should only be shown once at login.
    """
    raw = secrets.token_urlsafe(32)
    plaintext = f"{TOKEN_PREFIX}{raw}"
    token_hash = hash_token(plaintext)
    token_prefix = plaintext[:12]  # "cg_" + first 9 chars of raw
    return plaintext, token_hash, token_prefix


def hash_token(token: str) -> str:
    """Hash a token for comparison against stored hashes."""
    return hashlib.sha256(token.encode()).hexdigest()


async def issue_session(db: AsyncSession, user: User) -> tuple[UserSession, str]:
    """
    Create a session bound to an already-verified user.

    Returns:
        Tuple of (UserSession model, plaintext_token).

    Note:
        Does not commit. Caller (session generator) handles commit at request end.
    """
    plaintext, token_hash, token_prefix = generate_token()
    session = UserSession(
        username=user.username,
        token_hash=token_hash,
        token_prefix=token_prefix,
    )
    db.add(session)
    await db.flush()
    await db.refresh(session)
    return session, plaintext


async def login(
    db: AsyncSession,
    username: str,
    password: str,
) -> tuple[UserSession, str]:
    """
    Verify credentials and issue a new session.

    Raises:
        UserNotFoundError: Propagated unchanged from credential verification.
        InvalidCredentialsError: Propagated unchanged from credential verification.
    """
    try:
        user = await credential_service.verify(db, username, password)
    except (UserNotFoundError, InvalidCredentialsError) as e:
        logger.info("Login failed for %s: %s", username, e.error)
        raise

    session, plaintext = await issue_session(db, user)
    logger.info("Logged in as %s (session %s)", username, session.token_prefix)
    return session, plaintext


async def resolve(db: AsyncSession, plaintext_token: str) -> UserSession:
    """
    Resolve a plaintext token to its session.

    Hashes the input token before lookup, so lookup time does not depend on how much
    of a guessed token is correct.

    Raises:
        NotAuthenticatedError: If no open session matches the token.
    """
    result = await db.execute(
        select(UserSession).where(UserSession.token_hash == hash_token(plaintext_token)),
    )
    session = result.scalar_one_or_none()
    if session is None:
        raise NotAuthenticatedError("Invalid or expired session")
    return session


async def logout(db: AsyncSession, plaintext_token: str) -> bool:
    """
    Discard the session for a token.

    Idempotent: logging out an unknown or already-closed session is a no-op.

    Returns:
        True if a session was discarded, False if none matched.
    """
    result = await db.execute(
        delete(UserSession).where(UserSession.token_hash == hash_token(plaintext_token)),
    )
    discarded = result.rowcount > 0
    if discarded:
        logger.info("Logged out session %s", plaintext_token[:12])
    return discarded
