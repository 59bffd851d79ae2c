"""Async client for TheTVDB v3 API.

Example:
    async with TVDBClient(api_key="KEY") as client:
        results = await client.search(SearchBy.name("Planet Earth II"))
        series = await client.series(results[0])
"""

from thetvdb.client import (
    TVDBAuthError,
    TVDBClient,
    TVDBError,
    TVDBNotFoundError,
    TVDBRateLimitError,
    TVDBResponseError,
    TVDBServerError,
)
from thetvdb.params import (
    EpisodeParams,
    EpisodeQuery,
    EpisodeQueryParams,
    ImageQueryParams,
    SearchBy,
    SeriesFilterKey,
    SeriesFilterKeys,
    UpdatedParams,
)

__version__ = "0.1.0"

__all__ = [
    "TVDBClient",
    # Errors
    "TVDBError",
    "TVDBAuthError",
    "TVDBNotFoundError",
    "TVDBRateLimitError",
    "TVDBServerError",
    "TVDBResponseError",
    # Params
    "SearchBy",
    "EpisodeParams",
    "EpisodeQuery",
    "EpisodeQueryParams",
    "SeriesFilterKey",
    "SeriesFilterKeys",
    "ImageQueryParams",
    "UpdatedParams",
]
