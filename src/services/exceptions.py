"""Shared exceptions for service layer operations."""


class ServiceError(Exception):
    """
    Base exception for every typed failure a service operation can raise.

    `error` is a stable machine-readable code; `status_code` is the HTTP status the
    API layer responds with.
    """

    error: str = "service_error"
    status_code: int = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


# =============================================================================
# Credentials / sessions
# =============================================================================


class DuplicateUserError(ServiceError):
    """Raised when registering a username that already exists."""

    error = "duplicate_user"
    status_code = 409

    def __init__(self, username: str) -> None:
        self.username = username
        super().__init__(f"Username already taken: {username}")


class UserNotFoundError(ServiceError):
    """Raised when no user matches the given username."""

    error = "user_not_found"
    status_code = 404

    def __init__(self, username: str) -> None:
        self.username = username
        super().__init__(f"No user found with username: {username}")


class InvalidCredentialsError(ServiceError):
    """Raised when the password does not match the stored hash."""

    error = "invalid_credentials"
    status_code = 401

    def __init__(self) -> None:
        super().__init__("Invalid credentials")


class WeakPasswordError(ServiceError):
    """Raised at registration when the password violates the password policy."""

    error = "weak_password"
    status_code = 400

    def __init__(self) -> None:
        super().__init__(
            "Password must be at least 6 characters long and include at least one "
            "uppercase letter, one lowercase letter, and one number.",
        )


class NotAuthenticatedError(ServiceError):
    """Raised when an identity-scoped operation has no valid session."""

    error = "not_authenticated"
    status_code = 401

    def __init__(self, message: str = "Not authenticated") -> None:
        super().__init__(message)


# =============================================================================
# Catalog
# =============================================================================


class InvalidQueryError(ServiceError):
    """Raised when a search query is empty."""

    error = "invalid_query"
    status_code = 400

    def __init__(self) -> None:
        super().__init__("Search query must not be empty")


class InvalidPageError(ServiceError):
    """Raised when a page is below 1 or beyond the provider's total page count."""

    error = "invalid_page"
    status_code = 400

    def __init__(self, page: int, total_pages: int | None = None) -> None:
        self.page = page
        self.total_pages = total_pages
        if total_pages is None:
            message = f"Page must be >= 1, got {page}"
        else:
            message = f"Page {page} is out of range (1-{total_pages})"
        super().__init__(message)


class CatalogError(ServiceError):
    """Base exception for failures reported by, or talking to, the catalog provider."""

    error = "catalog_error"
    status_code = 502


class CatalogNotFoundError(CatalogError):
    """Raised when the provider reports no movie with the requested id."""

    error = "not_found"
    status_code = 404

    def __init__(self, movie_id: int) -> None:
        self.movie_id = movie_id
        super().__init__(f"Movie not found: {movie_id}")


class CatalogUnauthorizedError(CatalogError):
    """Raised when the provider rejects the configured access token."""

    error = "catalog_unauthorized"
    status_code = 502

    def __init__(self) -> None:
        super().__init__("Catalog provider rejected the access token")


class CatalogUnavailableError(CatalogError):
    """Raised on transport failure or a non-success provider status."""

    error = "catalog_unavailable"
    status_code = 503


class CatalogMalformedError(CatalogError):
    """Raised when a provider response cannot be decoded into the expected shape."""

    error = "catalog_malformed"
    status_code = 502
