"""Service layer for user credentials: registration, password hashing, and verification."""
import logging
import re
from functools import lru_cache

from passlib.context import CryptContext
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import get_settings
from models.user import User
from services.exceptions import (
    DuplicateUserError,
    InvalidCredentialsError,
    UserNotFoundError,
    WeakPasswordError,
)

logger = logging.getLogger(__name__)

HASH_SCHEME = "pbkdf2_sha256"

# At least 6 characters with one lowercase letter, one uppercase letter and one digit
PASSWORD_PATTERN = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d).{6,}$", re.DOTALL)


def is_strong_password(password: str) -> bool:
    """Check a password against the registration policy."""
    return PASSWORD_PATTERN.match(password) is not None


@lru_cache
def get_password_context(rounds: int) -> CryptContext:
    """Get the (cached) password hashing context for a PBKDF2 round count."""
    return CryptContext(
        schemes=[HASH_SCHEME],
        deprecated="auto",
        pbkdf2_sha256__rounds=rounds,
    )


def hash_password(password: str, iterations: int | None = None) -> str:
    """
    Hash a password with salted PBKDF2-HMAC-SHA256.

    Args:
        password: Plaintext password.
        iterations: PBKDF2 rounds. Defaults to PASSWORD_HASH_ITERATIONS.

    Returns:
        Modular crypt encoding: `$pbkdf2-sha256$<rounds>$<salt>$<checksum>`.
    """
    if iterations is None:
        iterations = get_settings().password_hash_iterations
    return get_password_context(iterations).hash(password)


def check_password(password: str, encoded: str) -> bool:
    """
    Check a plaintext password against a stored hash.

    Unrecognized or corrupt encodings never match.
    """
    context = get_password_context(get_settings().password_hash_iterations)
    try:
        return context.verify(password, encoded)
    except ValueError:
        return False


async def get_user_by_username(db: AsyncSession, username: str) -> User | None:
    """Get a user by exact username."""
    result = await db.execute(select(User).where(User.username == username))
    return result.scalar_one_or_none()


async def register(db: AsyncSession, username: str, password: str) -> User:
    """
    Register a new user.

    The password policy is checked before anything is hashed or stored.

    Raises:
        WeakPasswordError: If the password violates the policy.
        DuplicateUserError: If the username is already taken, including when a
            concurrent registration wins the race for the unique constraint.

    Note:
        Does not commit. Caller (session generator) handles commit at request end.
    """
    if not is_strong_password(password):
        raise WeakPasswordError()

    if await get_user_by_username(db, username) is not None:
        raise DuplicateUserError(username)

    user = User(username=username, password_hash=hash_password(password))
    try:
        async with db.begin_nested():
            db.add(user)
            await db.flush()
    except IntegrityError as e:
        # Another request inserted the same username between our SELECT and INSERT
        raise DuplicateUserError(username) from e

    await db.refresh(user)
    logger.info("Registered user %s", username)
    return user


async def verify(db: AsyncSession, username: str, password: str) -> User:
    """
    Verify a username/password pair.

    Raises:
        UserNotFoundError: If no user has this username.
        InvalidCredentialsError: If the password does not match.
    """
    user = await get_user_by_username(db, username)
    if user is None:
        raise UserNotFoundError(username)
    if not check_password(password, user.password_hash):
        raise InvalidCredentialsError()
    return user
