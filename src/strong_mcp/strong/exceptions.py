"""Strong backend exceptions."""


class StrongError(Exception):
    """Base exception for Strong errors."""
    pass


class AuthenticationError(StrongError):
    """Raised when authentication fails."""
    pass


class TokenExpiredError(AuthenticationError):
    """Raised when the access token cannot be refreshed."""
    pass


class APIError(StrongError):
    """Raised when an API call fails."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        code: str | None = None,
        description: str | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.code = code
        self.description = description


class PayloadError(StrongError):
    """Raised when a response body does not have the expected structure."""

    def __init__(self, payload: str, message: str):
        super().__init__(f"Malformed {payload}: {message}")
        self.payload = payload
