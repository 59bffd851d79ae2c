"""Series related response models."""

from datetime import UTC, date, datetime, time
from enum import Enum
from typing import Any

from pydantic import Field, field_validator

from thetvdb import urls
from thetvdb.models.fields import (
    TVDBModel,
    empty_to_none,
    parse_airs_time,
    parse_date,
    parse_date_time,
    parse_timestamp,
    zero_to_none,
)
from thetvdb.params import EpisodeParams, EpisodeQueryParams


class SeriesStatus(str, Enum):
    """Airing status of a series."""

    ENDED = "Ended"
    CONTINUING = "Continuing"
    UPCOMING = "Upcoming"
    UNKNOWN = ""


def _parse_status(value: Any) -> Any:
    if value is None:
        return SeriesStatus.UNKNOWN
    return value


def _null_to_list(value: Any) -> Any:
    return [] if value is None else value


class EpisodeParamsMixin:
    """Builds episode request parameters for the series this object describes."""

    def episode_params(self, page: int = 1) -> EpisodeParams:
        """Parameters for ``TVDBClient.series_episodes``."""
        if self.id is None:
            raise ValueError("Series id is missing")
        return EpisodeParams(self.id, page)

    def episode_query_params(self, page: int = 1, **filters: Any) -> EpisodeQueryParams:
        """Parameters for ``TVDBClient.series_episodes_query``.

        Args:
            page: Page number (1-based)
            **filters: EpisodeQuery fields (aired_season, aired_episode, ...)
        """
        if self.id is None:
            raise ValueError("Series id is missing")
        return EpisodeQueryParams.create(self.id, page, **filters)


class SeriesImageMixin:
    """Image and website URLs shared by the series models."""

    def banner_url(self) -> str | None:
        return urls.image_url(getattr(self, "banner", None))

    def poster_url(self) -> str | None:
        return urls.image_url(getattr(self, "poster", None))

    def fanart_url(self) -> str | None:
        return urls.image_url(getattr(self, "fanart", None))

    def website_url(self) -> str | None:
        """Public TheTVDB page of the series."""
        return urls.series_website_url(getattr(self, "slug", None))


class SearchSeries(EpisodeParamsMixin, SeriesImageMixin, TVDBModel):
    """Series summary returned by ``TVDBClient.search``.

    Contains less information than Series; use the id to fetch the rest.
    """

    id: int
    series_name: str | None = None
    aliases: list[str] = Field(default_factory=list)
    banner: str | None = None
    first_aired: date | None = None
    network: str | None = None
    overview: str | None = None
    slug: str = ""
    status: SeriesStatus = SeriesStatus.UNKNOWN

    @field_validator("banner", "network", "series_name", "overview", mode="before")
    @classmethod
    def _empty_string(cls, v: Any) -> Any:
        return empty_to_none(v)

    @field_validator("first_aired", mode="before")
    @classmethod
    def _date(cls, v: Any) -> Any:
        return parse_date(v)

    @field_validator("status", mode="before")
    @classmethod
    def _status(cls, v: Any) -> Any:
        return _parse_status(v)

    @field_validator("aliases", mode="before")
    @classmethod
    def _list(cls, v: Any) -> Any:
        return _null_to_list(v)


class Series(EpisodeParamsMixin, SeriesImageMixin, TVDBModel):
    """Full series record returned by ``TVDBClient.series``."""

    id: int
    series_name: str | None = None
    aliases: list[str] = Field(default_factory=list)
    added: datetime | None = None
    added_by: int | None = None
    airs_day_of_week: str | None = None
    airs_time: time | None = None
    season: str = ""
    banner: str | None = None
    poster: str | None = None
    fanart: str | None = None
    first_aired: date | None = None
    genre: list[str] = Field(default_factory=list)
    imdb_id: str | None = None
    last_updated: datetime | None = None
    network: str | None = None
    network_id: str | None = None
    overview: str | None = None
    rating: str | None = None
    runtime: str = ""
    language: str = ""
    site_rating: float | None = None
    site_rating_count: int = 0
    slug: str = ""
    status: SeriesStatus = SeriesStatus.UNKNOWN
    zap2it_id: str | None = Field(default=None, alias="zap2itId")

    @field_validator(
        "series_name",
        "airs_day_of_week",
        "banner",
        "poster",
        "fanart",
        "imdb_id",
        "network",
        "network_id",
        "overview",
        "rating",
        "zap2it_id",
        mode="before",
    )
    @classmethod
    def _empty_string(cls, v: Any) -> Any:
        return empty_to_none(v)

    @field_validator("added", mode="before")
    @classmethod
    def _date_time(cls, v: Any) -> Any:
        return parse_date_time(v)

    @field_validator("airs_time", mode="before")
    @classmethod
    def _airs_time(cls, v: Any) -> Any:
        return parse_airs_time(v)

    @field_validator("first_aired", mode="before")
    @classmethod
    def _date(cls, v: Any) -> Any:
        return parse_date(v)

    @field_validator("last_updated", mode="before")
    @classmethod
    def _timestamp(cls, v: Any) -> Any:
        return parse_timestamp(v)

    @field_validator("site_rating", mode="before")
    @classmethod
    def _rating(cls, v: Any) -> Any:
        return zero_to_none(v)

    @field_validator("status", mode="before")
    @classmethod
    def _status(cls, v: Any) -> Any:
        return _parse_status(v)

    @field_validator("aliases", "genre", mode="before")
    @classmethod
    def _list(cls, v: Any) -> Any:
        return _null_to_list(v)

    @field_validator("season", "runtime", "language", mode="before")
    @classmethod
    def _null_string(cls, v: Any) -> Any:
        return "" if v is None else v

    def get_year(self) -> int | None:
        """Year of the first airing, if known."""
        return self.first_aired.year if self.first_aired else None


class FilteredSeries(EpisodeParamsMixin, SeriesImageMixin, TVDBModel):
    """Partial series record returned by ``TVDBClient.series_filter``.

    Only the requested keys are present; everything else is None.
    """

    id: int | None = None
    series_name: str | None = None
    aliases: list[str] | None = None
    added: datetime | None = None
    added_by: int | None = None
    airs_day_of_week: str | None = None
    airs_time: time | None = None
    season: str | None = None
    banner: str | None = None
    poster: str | None = None
    fanart: str | None = None
    first_aired: date | None = None
    genre: list[str] | None = None
    imdb_id: str | None = None
    last_updated: datetime | None = None
    network: str | None = None
    network_id: str | None = None
    overview: str | None = None
    rating: str | None = None
    runtime: str | None = None
    language: str | None = None
    site_rating: float | None = None
    site_rating_count: int | None = None
    slug: str | None = None
    status: SeriesStatus | None = None
    zap2it_id: str | None = Field(default=None, alias="zap2itId")

    @field_validator(
        "series_name",
        "airs_day_of_week",
        "season",
        "banner",
        "poster",
        "fanart",
        "imdb_id",
        "network",
        "network_id",
        "overview",
        "rating",
        "runtime",
        "language",
        "slug",
        "zap2it_id",
        mode="before",
    )
    @classmethod
    def _empty_string(cls, v: Any) -> Any:
        return empty_to_none(v)

    @field_validator("added", mode="before")
    @classmethod
    def _date_time(cls, v: Any) -> Any:
        return parse_date_time(v)

    @field_validator("airs_time", mode="before")
    @classmethod
    def _airs_time(cls, v: Any) -> Any:
        return parse_airs_time(v)

    @field_validator("first_aired", mode="before")
    @classmethod
    def _date(cls, v: Any) -> Any:
        return parse_date(v)

    @field_validator("last_updated", mode="before")
    @classmethod
    def _timestamp(cls, v: Any) -> Any:
        return parse_timestamp(v)

    @field_validator("site_rating", mode="before")
    @classmethod
    def _rating(cls, v: Any) -> Any:
        return zero_to_none(v)


class Actor(TVDBModel):
    """Actor of a series."""

    id: int
    series_id: int
    name: str = ""
    role: str = ""
    sort_order: int = 0
    image: str | None = None
    image_author: int | None = None
    image_added: datetime | None = None
    last_updated: datetime | None = None

    @field_validator("image", mode="before")
    @classmethod
    def _empty_string(cls, v: Any) -> Any:
        return empty_to_none(v)

    @field_validator("image_added", "last_updated", mode="before")
    @classmethod
    def _date_time(cls, v: Any) -> Any:
        return parse_date_time(v)

    def image_url(self) -> str | None:
        return urls.image_url(self.image)


class SeriesUpdate(EpisodeParamsMixin, TVDBModel):
    """Series changed in the range given to ``TVDBClient.updated``."""

    id: int
    last_updated: datetime

    @field_validator("last_updated", mode="before")
    @classmethod
    def _timestamp(cls, v: Any) -> Any:
        if isinstance(v, int) and not isinstance(v, bool):
            return datetime.fromtimestamp(v, tz=UTC)
        return v
