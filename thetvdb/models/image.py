"""Series image models."""

from typing import Any

from pydantic import Field, field_validator

from thetvdb import urls
from thetvdb.models.fields import TVDBModel, empty_to_none


class SeriesImages(TVDBModel):
    """Number of images available per key type."""

    fanart: int | None = None
    poster: int | None = None
    season: int | None = None
    seasonwide: int | None = None
    series: int | None = None


class ImageRatingsInfo(TVDBModel):
    """User ratings of an image."""

    average: float = 0.0
    count: int = 0


class Image(TVDBModel):
    """Image returned by ``TVDBClient.series_images_query``."""

    id: int
    key_type: str = ""
    sub_key: str | None = None
    file_name: str = ""
    language_id: int | None = None
    language: str = ""
    resolution: str | None = None
    ratings_info: ImageRatingsInfo = Field(default_factory=ImageRatingsInfo)
    thumbnail: str = ""

    @field_validator("sub_key", "resolution", mode="before")
    @classmethod
    def _empty_string(cls, v: Any) -> Any:
        return empty_to_none(v)

    def file_name_url(self) -> str | None:
        """Full size image URL."""
        return urls.image_url(self.file_name)

    def thumbnail_url(self) -> str | None:
        return urls.image_url(self.thumbnail)


class ImageQueryKey(TVDBModel):
    """Allowed image query parameters for one key type."""

    key_type: str
    language_id: str | None = None
    resolution: list[str] = Field(default_factory=list)
    sub_key: list[str] = Field(default_factory=list)

    @field_validator("language_id", mode="before")
    @classmethod
    def _language_id(cls, v: Any) -> Any:
        v = empty_to_none(v)
        return str(v) if isinstance(v, int) else v

    @field_validator("resolution", "sub_key", mode="before")
    @classmethod
    def _list(cls, v: Any) -> Any:
        return [] if v is None else v
