"""Exceptions raised by the TheTVDB client."""


class TVDBError(Exception):
    """Base exception for TheTVDB API errors."""

    pass


class TVDBAuthError(TVDBError):
    """Raised when the API key is invalid or the bearer token cannot be used."""

    pass


class TVDBNotFoundError(TVDBError):
    """Raised when a series, episode or other resource is not found."""

    pass


class TVDBRateLimitError(TVDBError):
    """Raised when TheTVDB rate limit is exceeded."""

    def __init__(self, retry_after: int = 1):
        self.retry_after = retry_after
        super().__init__(f"Rate limit exceeded. Retry after {retry_after} seconds.")


class TVDBServerError(TVDBError):
    """Raised when TheTVDB answers with a 5XX status."""

    def __init__(self, status_code: int):
        self.status_code = status_code
        super().__init__(f"TheTVDB server error {status_code}")


class TVDBResponseError(TVDBError):
    """Raised when a response cannot be decoded into the expected data."""

    pass
