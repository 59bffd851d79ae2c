"""TheTVDB v3 API client.

Provides async access to every TheTVDB v3 endpoint. Handles login, keeps the
bearer token fresh and retries a request once when the API rejects the
token.

API Documentation: https://api.thetvdb.com/swagger
"""

import asyncio
import functools
from datetime import UTC, datetime
from email.utils import parsedate_to_datetime
from typing import Any

import httpx
from pydantic import TypeAdapter, ValidationError

from thetvdb.client.errors import (
    TVDBAuthError,
    TVDBError,
    TVDBNotFoundError,
    TVDBRateLimitError,
    TVDBResponseError,
    TVDBServerError,
)
from thetvdb.client.token import BearerToken, decode_token
from thetvdb.config import settings
from thetvdb.logger import get_logger
from thetvdb.models import (
    Actor,
    Episode,
    EpisodePage,
    EpisodeQueryPage,
    EpisodeSummary,
    FilteredSeries,
    Image,
    ImageQueryKey,
    Language,
    Movie,
    SearchSeries,
    Series,
    SeriesImages,
    SeriesUpdate,
)
from thetvdb.params import (
    EpisodeParams,
    EpisodeQueryParams,
    HasID,
    ImageQueryParams,
    SearchBy,
    SeriesFilterKeys,
    UpdatedParams,
    resolve_id,
)

logger = get_logger(__name__)


@functools.cache
def _type_adapter(model_type: Any) -> TypeAdapter:
    return TypeAdapter(model_type)


def _normalize_language(abbreviation: str) -> str:
    abbreviation = abbreviation.strip().lower()
    if not abbreviation:
        raise ValueError("Language abbreviation must not be empty")
    return abbreviation


class TVDBClient:
    """Async client for TheTVDB v3 API.

    The client logs in lazily on the first request. Language sensitive
    endpoints send the configured language as ``Accept-Language``.

    Requests, token renewals and errors are logged as structlog events
    (``tvdb_login``, ``tvdb_get_series``...). Call
    ``thetvdb.logger.configure_logging()`` once at startup to render them;
    tokens and the API key are masked.

    Example:
        async with TVDBClient(api_key="KEY") as client:
            results = await client.search(SearchBy.name("Planet Earth II"))
            series = await client.series(results[0])
            page = await client.series_episodes(series.episode_params())
    """

    def __init__(
        self,
        api_key: str | None = None,
        language: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        token_refresh_margin: int | None = None,
    ):
        """Initialize TheTVDB client.

        Args:
            api_key: TheTVDB API key. Uses settings.tvdb_api_key if None.
            language: Language abbreviation (default: settings.tvdb_language)
            base_url: API base URL. Uses settings.tvdb_base_url if None.
            timeout: Request timeout in seconds. Uses settings.request_timeout if None.
            token_refresh_margin: Seconds before expiry at which the token is
                renewed. Uses settings.token_refresh_margin if None.
        """
        if api_key is None and settings.tvdb_api_key is not None:
            api_key = settings.tvdb_api_key.get_secret_value()
        self._api_key = api_key or ""
        self._language = _normalize_language(language or settings.tvdb_language)
        self._base_url = (base_url or settings.tvdb_base_url).rstrip("/")
        self._timeout = timeout if timeout is not None else settings.request_timeout
        self._refresh_margin = (
            token_refresh_margin
            if token_refresh_margin is not None
            else settings.token_refresh_margin
        )
        self._client: httpx.AsyncClient | None = None
        self._token: BearerToken | None = None
        self._token_lock = asyncio.Lock()

    async def __aenter__(self) -> "TVDBClient":
        """Enter async context manager."""
        self._client = httpx.AsyncClient(
            timeout=self._timeout,
            headers={"Accept": "application/json"},
        )
        return self

    async def __aexit__(
        self,
        _exc_type: Any,
        _exc_val: Any,
        _exc_tb: Any,
    ) -> None:
        """Exit async context manager."""
        if self._client:
            await self._client.aclose()
            self._client = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Get HTTP client, ensuring it's initialized.

        Raises:
            RuntimeError: If client not initialized (not in context manager)
        """
        if self._client is None:
            raise RuntimeError("TVDBClient must be used as async context manager")
        return self._client

    # =========================================================================
    # Language
    # =========================================================================

    @property
    def language(self) -> str:
        """Language abbreviation sent with language sensitive requests."""
        return self._language

    def set_language(self, language: Language | str) -> None:
        """Set the language used for series, episode and image data.

        Args:
            language: Language returned by ``languages()`` or an abbreviation like "de"

        Raises:
            ValueError: Empty abbreviation
        """
        abbreviation = language.abbreviation if isinstance(language, Language) else language
        self._language = _normalize_language(abbreviation)
        logger.debug("tvdb_language_set", language=self._language)

    # =========================================================================
    # Authentication
    # =========================================================================

    @property
    def token(self) -> str | None:
        """Current bearer token, if logged in."""
        return self._token.value if self._token else None

    @property
    def token_issued_at(self) -> datetime | None:
        return self._token.issued_at if self._token else None

    @property
    def token_expires_at(self) -> datetime | None:
        return self._token.expires_at if self._token else None

    @property
    def has_valid_token(self) -> bool:
        """Check whether the token can be used without renewing it first."""
        return self._token is not None and not self._token.expires_within(self._refresh_margin)

    async def login(self) -> None:
        """Obtain a new bearer token with the API key.

        Raises:
            TVDBAuthError: API key missing or rejected
            TVDBError: Transport or API errors
        """
        if not self._api_key:
            raise TVDBAuthError("TheTVDB API key is not configured")

        response = await self._send("POST", "/login", json={"apikey": self._api_key})
        if response.status_code == 401:
            logger.warning("tvdb_login_rejected")
            raise TVDBAuthError("Invalid API key")
        self._raise_for_status(response, "/login")

        self._token = self._decode_token_response(response, "/login")
        logger.info("tvdb_login", expires_at=self._token.expires_at.isoformat())

    async def refresh_token(self) -> None:
        """Renew the current token, logging in again if the API refuses.

        Without a token this is the same as ``login()``.
        """
        if self._token is None:
            await self.login()
            return

        response = await self._send(
            "GET",
            "/refresh_token",
            headers={"Authorization": f"Bearer {self._token.value}"},
        )
        if response.status_code == 401:
            logger.info("tvdb_token_refresh_rejected")
            self._token = None
            await self.login()
            return
        self._raise_for_status(response, "/refresh_token")

        self._token = self._decode_token_response(response, "/refresh_token")
        logger.info("tvdb_token_refreshed", expires_at=self._token.expires_at.isoformat())

    async def ensure_valid_token(self) -> None:
        """Make sure a token exists and does not expire within the refresh margin.

        A token that is about to expire is refreshed; a missing or expired one
        is replaced by logging in. Concurrent callers wait for a single renewal.
        """
        async with self._token_lock:
            if self.has_valid_token:
                return
            if self._token is not None and not self._token.is_expired():
                await self.refresh_token()
            else:
                await self.login()

    def _decode_token_response(self, response: httpx.Response, endpoint: str) -> BearerToken:
        payload = self._json(response, endpoint)
        raw_token = payload.get("token") if isinstance(payload, dict) else None
        if not raw_token or not isinstance(raw_token, str):
            raise TVDBResponseError(f"No token in response from {endpoint}")
        return decode_token(raw_token)

    # =========================================================================
    # Request Helpers
    # =========================================================================

    def _url(self, endpoint: str) -> str:
        return f"{self._base_url}{endpoint}"

    async def _send(self, method: str, endpoint: str, **kwargs: Any) -> httpx.Response:
        """Send a request, translating transport errors."""
        logger.debug("tvdb_request", method=method, endpoint=endpoint, params=kwargs.get("params"))
        try:
            return await self.client.request(method, self._url(endpoint), **kwargs)
        except httpx.TimeoutException as e:
            logger.warning("tvdb_timeout", endpoint=endpoint)
            raise TVDBError(f"Request timeout: {e}") from e
        except httpx.HTTPError as e:
            logger.warning("tvdb_http_error", endpoint=endpoint, error=str(e))
            raise TVDBError(f"HTTP error: {e}") from e

    def _headers(self, localized: bool) -> dict[str, str]:
        if self._token is None:
            raise TVDBAuthError("Not logged in")
        headers = {
            "Authorization": f"Bearer {self._token.value}",
            "Content-Type": "application/json",
        }
        if localized:
            headers["Accept-Language"] = self._language
        return headers

    async def _request(
        self,
        method: str,
        endpoint: str,
        params: dict[str, Any] | None = None,
        localized: bool = False,
    ) -> httpx.Response:
        """Make authenticated request to TheTVDB API.

        A 401 answer means the token was revoked or expired early: log in
        again once and repeat the request.

        Args:
            method: HTTP method
            endpoint: API endpoint (without base URL)
            params: Query parameters
            localized: Send Accept-Language

        Raises:
            TVDBAuthError: Invalid API key (401 after re-login)
            TVDBNotFoundError: Resource not found (404)
            TVDBRateLimitError: Rate limit exceeded (429)
            TVDBServerError: Server errors (5XX)
            TVDBError: Other API errors
        """
        await self.ensure_valid_token()
        used_token = self._token

        response = await self._send(
            method, endpoint, params=params, headers=self._headers(localized)
        )
        if response.status_code == 401:
            logger.info("tvdb_token_rejected", endpoint=endpoint)
            async with self._token_lock:
                # Another request may already have logged in again
                if self._token is used_token:
                    await self.login()
            response = await self._send(
                method, endpoint, params=params, headers=self._headers(localized)
            )

        self._raise_for_status(response, endpoint)
        return response

    def _raise_for_status(self, response: httpx.Response, endpoint: str) -> None:
        status = response.status_code
        if status < 400:
            return

        if status == 401:
            raise TVDBAuthError("Invalid API key")
        if status == 404:
            raise TVDBNotFoundError(f"Resource not found: {endpoint}")
        if status == 429:
            try:
                retry_after = int(response.headers.get("Retry-After", 1))
            except ValueError:
                retry_after = 1
            raise TVDBRateLimitError(retry_after)
        if 500 <= status < 600:
            logger.warning("tvdb_server_error", endpoint=endpoint, status=status)
            raise TVDBServerError(status)

        error_msg = response.text[:200] if response.text else "Unknown error"
        raise TVDBError(f"TheTVDB API error {status}: {error_msg}")

    def _json(self, response: httpx.Response, endpoint: str) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise TVDBResponseError(f"Invalid JSON from {endpoint}: {e}") from e

    def _validate(self, model_type: Any, data: Any, endpoint: str) -> Any:
        try:
            return _type_adapter(model_type).validate_python(data)
        except ValidationError as e:
            logger.warning("tvdb_invalid_response", endpoint=endpoint, errors=e.error_count())
            raise TVDBResponseError(f"Invalid response from {endpoint}: {e}") from e

    async def _get(
        self,
        endpoint: str,
        params: dict[str, Any] | None = None,
        localized: bool = False,
    ) -> dict[str, Any]:
        """GET an endpoint and return the decoded JSON object."""
        response = await self._request("GET", endpoint, params, localized)
        payload = self._json(response, endpoint)
        if not isinstance(payload, dict):
            raise TVDBResponseError(f"Unexpected response from {endpoint}")
        return payload

    async def _get_data(
        self,
        model_type: Any,
        endpoint: str,
        params: dict[str, Any] | None = None,
        localized: bool = False,
    ) -> Any:
        """GET an endpoint and validate the ``data`` member of the envelope."""
        payload = await self._get(endpoint, params, localized)
        if "data" not in payload:
            raise TVDBResponseError(f"No data in response from {endpoint}")
        data = payload["data"]
        if data is None and getattr(model_type, "__origin__", None) is list:
            data = []
        return self._validate(model_type, data, endpoint)

    # =========================================================================
    # Search
    # =========================================================================

    async def search(self, search_by: SearchBy) -> list[SearchSeries]:
        """Search series by name, IMDb id, Zap2it id or slug.

        Args:
            search_by: Search criterion, e.g. ``SearchBy.name("Planet Earth")``

        Returns:
            List of matching series

        Raises:
            TVDBNotFoundError: Nothing matched (the API answers 404)
        """
        results = await self._get_data(
            list[SearchSeries], "/search/series", search_by.query_params(), localized=True
        )
        logger.info(
            "tvdb_search",
            field=search_by.field.value,
            query=search_by.value,
            results_count=len(results),
        )
        return results

    # =========================================================================
    # Series
    # =========================================================================

    async def series(self, series_id: int | HasID) -> Series:
        """Get full series information.

        Args:
            series_id: Series id or an object carrying it (SearchSeries, ...)

        Raises:
            TVDBNotFoundError: Series not found
        """
        sid = resolve_id(series_id)
        series = await self._get_data(Series, f"/series/{sid}", localized=True)
        logger.info("tvdb_get_series", series_id=sid, name=series.series_name)
        return series

    async def series_last_modified(self, series_id: int | HasID) -> datetime:
        """Get when a series was last modified, without downloading it.

        Returns:
            Aware UTC datetime from the ``Last-Modified`` header

        Raises:
            TVDBResponseError: Header missing or not an HTTP date
        """
        sid = resolve_id(series_id)
        endpoint = f"/series/{sid}"
        response = await self._request("HEAD", endpoint)

        header = response.headers.get("Last-Modified")
        if not header:
            raise TVDBResponseError("Last modified data missing")
        try:
            last_modified = parsedate_to_datetime(header)
        except (TypeError, ValueError) as e:
            raise TVDBResponseError(f"Invalid Last-Modified header: {header!r}") from e

        if last_modified.tzinfo is None:
            last_modified = last_modified.replace(tzinfo=UTC)
        return last_modified.astimezone(UTC)

    async def series_actors(self, series_id: int | HasID) -> list[Actor]:
        """Get the actors of a series."""
        sid = resolve_id(series_id)
        actors = await self._get_data(list[Actor], f"/series/{sid}/actors")
        logger.info("tvdb_get_series_actors", series_id=sid, actors_count=len(actors))
        return actors

    async def series_episodes(self, params: EpisodeParams | int | HasID) -> EpisodePage:
        """Get one page (up to 100 episodes) of a series' episodes.

        Args:
            params: Episode params, or a series id/object for the first page

        Returns:
            EpisodePage that can produce params for the neighbouring pages
        """
        if not isinstance(params, EpisodeParams):
            params = EpisodeParams(resolve_id(params))

        endpoint = f"/series/{params.series_id}/episodes"
        payload = await self._get(endpoint, params.query_params())
        page = self._validate(EpisodePage, payload, endpoint)
        page.series_id = params.series_id

        logger.info(
            "tvdb_get_series_episodes",
            series_id=params.series_id,
            page=page.current_page,
            episodes_count=len(page.episodes),
        )
        return page

    async def series_episodes_query(self, params: EpisodeQueryParams) -> EpisodeQueryPage:
        """Get one page of a series' episodes matching the query filters.

        Example:
            params = EpisodeQueryParams.create(318408, aired_season=1)
            page = await client.series_episodes_query(params)
        """
        endpoint = f"/series/{params.series_id}/episodes/query"
        payload = await self._get(endpoint, params.query_params(), localized=True)
        page = self._validate(EpisodeQueryPage, payload, endpoint)
        page.series_id = params.series_id
        page.query = params.query

        logger.info(
            "tvdb_query_series_episodes",
            series_id=params.series_id,
            page=page.current_page,
            episodes_count=len(page.episodes),
        )
        return page

    async def series_episodes_summary(self, series_id: int | HasID) -> EpisodeSummary:
        """Get season and episode counts of a series."""
        sid = resolve_id(series_id)
        summary = await self._get_data(EpisodeSummary, f"/series/{sid}/episodes/summary")
        logger.info(
            "tvdb_get_episodes_summary",
            series_id=sid,
            aired_episodes=summary.aired_episodes,
        )
        return summary

    async def series_filter(
        self,
        series_id: int | HasID,
        filter_keys: SeriesFilterKeys,
    ) -> FilteredSeries:
        """Get only the selected fields of a series.

        Raises:
            ValueError: No filter keys given
        """
        if filter_keys.is_empty():
            raise ValueError("No series filter keys provided")

        sid = resolve_id(series_id)
        series = await self._get_data(
            FilteredSeries,
            f"/series/{sid}/filter",
            {"keys": filter_keys.query_value()},
            localized=True,
        )
        logger.info("tvdb_filter_series", series_id=sid, keys=filter_keys.query_value())
        return series

    async def series_images(self, series_id: int | HasID) -> SeriesImages:
        """Get the number of images of a series per key type."""
        sid = resolve_id(series_id)
        images = await self._get_data(SeriesImages, f"/series/{sid}/images", localized=True)
        logger.info("tvdb_get_series_images", series_id=sid)
        return images

    async def series_images_query(
        self,
        series_id: int | HasID,
        params: ImageQueryParams | None = None,
    ) -> list[Image]:
        """Get series images matching key type, resolution and sub key.

        Args:
            series_id: Series id or an object carrying it
            params: Image filters; valid values come from ``series_images_query_params``
        """
        sid = resolve_id(series_id)
        params = params or ImageQueryParams()
        images = await self._get_data(
            list[Image],
            f"/series/{sid}/images/query",
            params.query_params(),
            localized=True,
        )
        logger.info("tvdb_query_series_images", series_id=sid, images_count=len(images))
        return images

    async def series_images_query_params(self, series_id: int | HasID) -> list[ImageQueryKey]:
        """Get the image filters available for a series."""
        sid = resolve_id(series_id)
        keys = await self._get_data(
            list[ImageQueryKey], f"/series/{sid}/images/query/params", localized=True
        )
        logger.info("tvdb_get_image_query_params", series_id=sid, keys_count=len(keys))
        return keys

    # =========================================================================
    # Episodes
    # =========================================================================

    async def episode(self, episode_id: int | HasID) -> Episode:
        """Get full episode information.

        Raises:
            TVDBNotFoundError: Episode not found
        """
        eid = resolve_id(episode_id)
        episode = await self._get_data(Episode, f"/episodes/{eid}", localized=True)

        # Unknown ids come back as an empty episode instead of a 404
        if episode.id != eid:
            raise TVDBNotFoundError(f"Resource not found: /episodes/{eid}")

        logger.info("tvdb_get_episode", episode_id=eid, name=episode.episode_name)
        return episode

    # =========================================================================
    # Languages
    # =========================================================================

    async def languages(self) -> list[Language]:
        """Get all languages supported by TheTVDB."""
        languages = await self._get_data(list[Language], "/languages")
        logger.info("tvdb_get_languages", languages_count=len(languages))
        return languages

    async def language_by_id(self, language_id: int | HasID) -> Language:
        """Get a language by its TheTVDB id."""
        lid = resolve_id(language_id)
        language = await self._get_data(Language, f"/languages/{lid}")
        logger.info("tvdb_get_language", language_id=lid, abbreviation=language.abbreviation)
        return language

    # =========================================================================
    # Updates
    # =========================================================================

    async def updated(self, params: UpdatedParams) -> list[SeriesUpdate]:
        """Get series updated in a time range (at most one week per request)."""
        updates = await self._get_data(
            list[SeriesUpdate], "/updated/query", params.query_params(), localized=True
        )
        logger.info("tvdb_get_updated", updates_count=len(updates))
        return updates

    # =========================================================================
    # Movies
    # =========================================================================

    async def movie(self, movie_id: int | HasID) -> Movie:
        """Get full movie information.

        Raises:
            TVDBNotFoundError: Movie not found
        """
        mid = resolve_id(movie_id)
        movie = await self._get_data(Movie, f"/movies/{mid}", localized=True)
        logger.info("tvdb_get_movie", movie_id=mid, runtime=movie.runtime)
        return movie
