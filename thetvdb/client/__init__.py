"""Async TheTVDB v3 API client."""

from thetvdb.client.client import TVDBClient
from thetvdb.client.errors import (
    TVDBAuthError,
    TVDBError,
    TVDBNotFoundError,
    TVDBRateLimitError,
    TVDBResponseError,
    TVDBServerError,
)
from thetvdb.client.token import BearerToken, decode_token

__all__ = [
    "TVDBClient",
    "BearerToken",
    "decode_token",
    "TVDBError",
    "TVDBAuthError",
    "TVDBNotFoundError",
    "TVDBRateLimitError",
    "TVDBServerError",
    "TVDBResponseError",
]
