"""Request parameters and their query-string encoding.

Each parameter type knows how to render itself as the query dict passed to
httpx. Only values that were actually set are sent; keys use the camelCase
names expected by TheTVDB v3 API.
"""

from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from enum import Enum
from typing import Any, Protocol


class HasID(Protocol):
    """Any response object carrying a TheTVDB id."""

    id: Any


def resolve_id(value: "int | HasID") -> int:
    """Get a numeric id from an int or a response object.

    Args:
        value: Plain id or an object with an ``id`` attribute (Series, Episode...)

    Returns:
        Integer id

    Raises:
        ValueError: If the value carries no usable id
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid id: {value!r}")
    if isinstance(value, int):
        return value
    item_id = getattr(value, "id", None)
    if isinstance(item_id, int) and not isinstance(item_id, bool):
        return item_id
    raise ValueError(f"Invalid id: {value!r}")


def _check_page(page: int) -> None:
    if page < 1:
        raise ValueError(f"page must be >= 1, got {page}")


# =============================================================================
# Search
# =============================================================================


class SearchField(str, Enum):
    """Field used to look up series with ``TVDBClient.search``."""

    NAME = "name"
    IMDB_ID = "imdbId"
    ZAP2IT_ID = "zap2itId"
    SLUG = "slug"


@dataclass(frozen=True)
class SearchBy:
    """Series search criterion.

    Example:
        >>> SearchBy.name("Planet Earth").query_params()
        {'name': 'Planet Earth'}
    """

    field: SearchField
    value: str

    @classmethod
    def name(cls, name: str) -> "SearchBy":
        """Search by (partial) series name."""
        return cls(SearchField.NAME, name)

    @classmethod
    def imdb_id(cls, imdb_id: str) -> "SearchBy":
        """Search by IMDb id, e.g. ``tt5491994``."""
        return cls(SearchField.IMDB_ID, imdb_id)

    @classmethod
    def zap2it_id(cls, zap2it_id: str) -> "SearchBy":
        """Search by Zap2it id."""
        return cls(SearchField.ZAP2IT_ID, zap2it_id)

    @classmethod
    def slug(cls, slug: str) -> "SearchBy":
        """Search by website slug."""
        return cls(SearchField.SLUG, slug)

    def query_params(self) -> dict[str, str]:
        return {self.field.value: self.value}


# =============================================================================
# Episodes
# =============================================================================


@dataclass(frozen=True)
class EpisodeParams:
    """Parameters for ``TVDBClient.series_episodes``."""

    series_id: int
    page: int = 1

    def __post_init__(self) -> None:
        _check_page(self.page)

    def with_page(self, page: int) -> "EpisodeParams":
        """Copy of these parameters pointing at another page."""
        return replace(self, page=page)

    def query_params(self) -> dict[str, int]:
        return {"page": self.page}


@dataclass(frozen=True)
class EpisodeQuery:
    """Optional episode filters for ``/series/{id}/episodes/query``."""

    absolute_number: int | None = None
    aired_season: int | None = None
    aired_episode: int | None = None
    dvd_season: int | None = None
    dvd_episode: int | None = None
    imdb_id: str | None = None

    def query_params(self) -> dict[str, Any]:
        params: dict[str, Any] = {}
        if self.absolute_number is not None:
            params["absoluteNumber"] = self.absolute_number
        if self.aired_season is not None:
            params["airedSeason"] = self.aired_season
        if self.aired_episode is not None:
            params["airedEpisode"] = self.aired_episode
        if self.dvd_season is not None:
            params["dvdSeason"] = self.dvd_season
        if self.dvd_episode is not None:
            params["dvdEpisode"] = self.dvd_episode
        if self.imdb_id is not None:
            params["imdbId"] = self.imdb_id
        return params

    def is_empty(self) -> bool:
        return not self.query_params()


@dataclass(frozen=True)
class EpisodeQueryParams:
    """Parameters for ``TVDBClient.series_episodes_query``.

    Example:
        >>> params = EpisodeQueryParams(318408, query=EpisodeQuery(aired_season=1))
        >>> params.query_params()
        {'page': 1, 'airedSeason': 1}
    """

    series_id: int
    page: int = 1
    query: EpisodeQuery = field(default_factory=EpisodeQuery)

    def __post_init__(self) -> None:
        _check_page(self.page)

    @classmethod
    def create(cls, series_id: int, page: int = 1, **filters: Any) -> "EpisodeQueryParams":
        """Build parameters from keyword filters (aired_season=1, ...)."""
        return cls(series_id, page, EpisodeQuery(**filters))

    def with_page(self, page: int) -> "EpisodeQueryParams":
        """Copy of these parameters pointing at another page, same filters."""
        return replace(self, page=page)

    def query_params(self) -> dict[str, Any]:
        return {"page": self.page, **self.query.query_params()}


# =============================================================================
# Series filter
# =============================================================================


class SeriesFilterKey(str, Enum):
    """Series fields that can be requested from ``/series/{id}/filter``.

    ``lastUpdated`` is not listed: the v3 API never returns it for filter
    requests.
    """

    NETWORK_ID = "networkId"
    AIRS_TIME = "airsTime"
    SITE_RATING = "siteRating"
    SERIES_NAME = "seriesName"
    FIRST_AIRED = "firstAired"
    RUNTIME = "runtime"
    OVERVIEW = "overview"
    BANNER = "banner"
    GENRE = "genre"
    AIRS_DAY_OF_WEEK = "airsDayOfWeek"
    IMDB_ID = "imdbId"
    ADDED_BY = "addedBy"
    SITE_RATING_COUNT = "siteRatingCount"
    ID = "id"
    STATUS = "status"
    NETWORK = "network"
    RATING = "rating"
    ZAP2IT_ID = "zap2itId"
    ADDED = "added"
    SLUG = "slug"
    ALIASES = "aliases"
    SEASON = "season"
    POSTER = "poster"
    FANART = "fanart"
    LANGUAGE = "language"


class SeriesFilterKeys:
    """Ordered, duplicate-free set of series filter keys.

    Example:
        >>> keys = SeriesFilterKeys().add(SeriesFilterKey.SERIES_NAME, "firstAired")
        >>> keys.query_value()
        'seriesName,firstAired'
    """

    def __init__(self, *keys: SeriesFilterKey | str):
        self._keys: list[SeriesFilterKey] = []
        self.add(*keys)

    @classmethod
    def all(cls) -> "SeriesFilterKeys":
        """All filterable keys."""
        return cls(*SeriesFilterKey)

    def add(self, *keys: SeriesFilterKey | str) -> "SeriesFilterKeys":
        """Add keys, ignoring ones already present.

        Raises:
            ValueError: Unknown key name
        """
        for key in keys:
            filter_key = SeriesFilterKey(key)
            if filter_key not in self._keys:
                self._keys.append(filter_key)
        return self

    def is_empty(self) -> bool:
        return not self._keys

    def query_value(self) -> str:
        return ",".join(key.value for key in self._keys)

    def __len__(self) -> int:
        return len(self._keys)

    def __iter__(self):
        return iter(self._keys)

    def __contains__(self, key: object) -> bool:
        try:
            return SeriesFilterKey(key) in self._keys
        except ValueError:
            return False

    def __repr__(self) -> str:
        return f"SeriesFilterKeys({self.query_value()!r})"


# =============================================================================
# Images
# =============================================================================


@dataclass(frozen=True)
class ImageQueryParams:
    """Parameters for ``TVDBClient.series_images_query``.

    Valid combinations for a series are returned by
    ``TVDBClient.series_images_query_params``.
    """

    key_type: str | None = None
    resolution: str | None = None
    sub_key: str | None = None

    def query_params(self) -> dict[str, str]:
        params: dict[str, str] = {}
        if self.key_type is not None:
            params["keyType"] = self.key_type
        if self.resolution is not None:
            params["resolution"] = self.resolution
        if self.sub_key is not None:
            params["subKey"] = self.sub_key
        return params


# =============================================================================
# Updates
# =============================================================================


def _timestamp(moment: datetime) -> int:
    # Naive datetimes are taken as UTC
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return int(moment.timestamp())


@dataclass(frozen=True)
class UpdatedParams:
    """Time range for ``TVDBClient.updated``."""

    from_time: datetime
    to_time: datetime | None = None

    def query_params(self) -> dict[str, int]:
        params = {"fromTime": _timestamp(self.from_time)}
        if self.to_time is not None:
            params["toTime"] = _timestamp(self.to_time)
        return params
