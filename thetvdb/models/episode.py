"""Episode models and episode pagination."""

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from thetvdb import urls
from thetvdb.models.fields import (
    TVDBModel,
    empty_to_none,
    int_to_bool,
    parse_date,
    parse_date_time,
    parse_timestamp,
    zero_to_none,
)
from thetvdb.params import EpisodeParams, EpisodeQuery, EpisodeQueryParams


class EpisodeLanguage(TVDBModel):
    """Languages in which the episode name and overview are available."""

    episode_name: str = ""
    overview: str = ""


class Episode(TVDBModel):
    """Episode record returned by ``TVDBClient.episode`` and the episode pages."""

    id: int
    series_id: int = 0
    aired_season: int | None = None
    aired_season_id: int | None = Field(default=None, alias="airedSeasonID")
    aired_episode_number: int = 0
    episode_name: str | None = None
    first_aired: date | None = None
    guest_stars: list[str] = Field(default_factory=list)
    directors: list[str] = Field(default_factory=list)
    writers: list[str] = Field(default_factory=list)
    overview: str | None = None
    language: EpisodeLanguage = Field(default_factory=EpisodeLanguage)
    production_code: str | None = None
    show_url: str | None = None
    last_updated: datetime | None = None
    dvd_discid: str | None = None
    dvd_season: int | None = None
    dvd_episode_number: float | None = None
    dvd_chapter: int | None = None
    absolute_number: int | None = None
    filename: str | None = None
    last_updated_by: int | None = None
    airs_after_season: int | None = None
    airs_before_season: int | None = None
    airs_before_episode: int | None = None
    thumb_author: int | None = None
    thumb_added: datetime | None = None
    thumb_width: str | None = None
    thumb_height: str | None = None
    imdb_id: str | None = None
    content_rating: str | None = None
    site_rating: float | None = None
    site_rating_count: int = 0
    is_movie: bool = False

    @field_validator(
        "episode_name",
        "overview",
        "production_code",
        "show_url",
        "dvd_discid",
        "filename",
        "imdb_id",
        mode="before",
    )
    @classmethod
    def _empty_string(cls, v: Any) -> Any:
        return empty_to_none(v)

    @field_validator("first_aired", mode="before")
    @classmethod
    def _date(cls, v: Any) -> Any:
        return parse_date(v)

    @field_validator("thumb_added", mode="before")
    @classmethod
    def _date_time(cls, v: Any) -> Any:
        return parse_date_time(v)

    @field_validator("last_updated", mode="before")
    @classmethod
    def _timestamp(cls, v: Any) -> Any:
        return parse_timestamp(v)

    @field_validator("site_rating", mode="before")
    @classmethod
    def _rating(cls, v: Any) -> Any:
        return zero_to_none(v)

    @field_validator("is_movie", mode="before")
    @classmethod
    def _bool(cls, v: Any) -> Any:
        return False if v is None else int_to_bool(v)

    @field_validator("guest_stars", "directors", "writers", mode="before")
    @classmethod
    def _list(cls, v: Any) -> Any:
        return [] if v is None else v

    def filename_url(self) -> str | None:
        """Episode thumbnail URL."""
        return urls.image_url(self.filename)


class EpisodeSummary(TVDBModel):
    """Season and episode counts of a series.

    The API sends the episode counts as strings; they are decoded to int.
    """

    aired_seasons: list[str] = Field(default_factory=list)
    aired_episodes: int = 0
    dvd_seasons: list[str] = Field(default_factory=list)
    dvd_episodes: int = 0


# =============================================================================
# Pagination
# =============================================================================


class PageLinks(BaseModel):
    """Page numbers of a paginated response."""

    first: int = 1
    last: int = 1
    next: int | None = None
    prev: int | None = None

    @property
    def current(self) -> int:
        if self.next is not None:
            return self.next - 1
        if self.prev is not None:
            return self.prev + 1
        return self.first


class PaginatedPage(BaseModel):
    """Shared page navigation for the episode pages."""

    model_config = ConfigDict(populate_by_name=True)

    episodes: list[Episode] = Field(default_factory=list, alias="data")
    links: PageLinks = Field(default_factory=PageLinks)
    series_id: int = Field(default=0, exclude=True)

    @property
    def current_page(self) -> int:
        return self.links.current

    @property
    def first_page(self) -> int:
        return self.links.first

    @property
    def last_page(self) -> int:
        return self.links.last

    @property
    def next_page(self) -> int | None:
        return self.links.next

    @property
    def prev_page(self) -> int | None:
        return self.links.prev

    @field_validator("episodes", mode="before")
    @classmethod
    def _null_list(cls, v: Any) -> Any:
        return [] if v is None else v


class EpisodePage(PaginatedPage):
    """One page of ``/series/{id}/episodes``."""

    def next_page_params(self) -> EpisodeParams | None:
        if self.next_page is None:
            return None
        return EpisodeParams(self.series_id, self.next_page)

    def prev_page_params(self) -> EpisodeParams | None:
        if self.prev_page is None:
            return None
        return EpisodeParams(self.series_id, self.prev_page)

    def first_page_params(self) -> EpisodeParams:
        return EpisodeParams(self.series_id, self.first_page)

    def last_page_params(self) -> EpisodeParams:
        return EpisodeParams(self.series_id, self.last_page)


class EpisodeQueryPage(PaginatedPage):
    """One page of ``/series/{id}/episodes/query``.

    Params built from this page keep the filters of the query that produced it.
    """

    query: EpisodeQuery = Field(default_factory=EpisodeQuery, exclude=True)

    def _params(self, page: int) -> EpisodeQueryParams:
        return EpisodeQueryParams(self.series_id, page, self.query)

    def next_page_params(self) -> EpisodeQueryParams | None:
        if self.next_page is None:
            return None
        return self._params(self.next_page)

    def prev_page_params(self) -> EpisodeQueryParams | None:
        if self.prev_page is None:
            return None
        return self._params(self.prev_page)

    def first_page_params(self) -> EpisodeQueryParams:
        return self._params(self.first_page)

    def last_page_params(self) -> EpisodeQueryParams:
        return self._params(self.last_page)
