"""Movie models.

Unlike the series endpoints, ``/movies/{id}`` answers with snake_case keys,
so these models are plain pydantic models without alias generation.
"""

import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from thetvdb import urls
from thetvdb.models.fields import empty_to_none, parse_date


class Genre(BaseModel):
    """Movie genre."""

    id: int
    name: str = ""
    url: str = ""

    def full_url(self) -> str | None:
        """Public TheTVDB page of the genre."""
        return urls.genre_page_url(self.url)


class Translation(BaseModel):
    """Movie title and overview in one language."""

    language_code: str
    name: str = ""
    overview: str | None = None
    is_primary: bool = False
    tagline: str | None = None

    @field_validator("overview", "tagline", mode="before")
    @classmethod
    def _empty_string(cls, v: Any) -> Any:
        return empty_to_none(v)


class ReleaseDate(BaseModel):
    """Release of a movie in a country."""

    model_config = ConfigDict(populate_by_name=True)

    kind: str = Field(alias="type")
    date: datetime.date | None = None
    country: str = ""

    @field_validator("date", mode="before")
    @classmethod
    def _date(cls, v: Any) -> Any:
        return parse_date(v)


class Artwork(BaseModel):
    """Poster, background or other artwork of a movie."""

    id: str
    artwork_type: str = ""
    url: str = ""
    thumb_url: str = ""
    tags: str | None = None
    is_primary: bool = False
    width: int = 0
    height: int = 0

    @field_validator("id", mode="before")
    @classmethod
    def _id(cls, v: Any) -> Any:
        return str(v) if isinstance(v, int) else v

    @field_validator("tags", mode="before")
    @classmethod
    def _empty_string(cls, v: Any) -> Any:
        return empty_to_none(v)

    def full_url(self) -> str | None:
        return urls.image_url(self.url)

    def full_thumb_url(self) -> str | None:
        return urls.image_url(self.thumb_url)


class Trailer(BaseModel):
    """Movie trailer."""

    url: str
    name: str = ""


class RemoteID(BaseModel):
    """Id of the movie on another site (IMDb, TMDB...)."""

    id: str
    source_id: int
    source_name: str = ""
    url: str = ""


class Person(BaseModel):
    """Cast or crew member of a movie."""

    id: str
    name: str = ""
    role: str | None = None
    people_image: str | None = None
    role_image: str | None = None
    is_featured: bool = False
    people_id: str = ""
    imdb_id: str | None = None
    people_twitter: str | None = None
    people_facebook: str | None = None
    people_instagram: str | None = None

    @field_validator("id", "people_id", mode="before")
    @classmethod
    def _id(cls, v: Any) -> Any:
        return str(v) if isinstance(v, int) else v

    @field_validator(
        "role",
        "people_image",
        "role_image",
        "imdb_id",
        "people_twitter",
        "people_facebook",
        "people_instagram",
        mode="before",
    )
    @classmethod
    def _empty_string(cls, v: Any) -> Any:
        return empty_to_none(v)

    def people_image_url(self) -> str | None:
        return urls.image_url(self.people_image)

    def role_image_url(self) -> str | None:
        return urls.image_url(self.role_image)


class People(BaseModel):
    """Cast and crew of a movie, grouped by job."""

    actors: list[Person] = Field(default_factory=list)
    directors: list[Person] = Field(default_factory=list)
    producers: list[Person] = Field(default_factory=list)
    writers: list[Person] = Field(default_factory=list)

    @field_validator("actors", "directors", "producers", "writers", mode="before")
    @classmethod
    def _list(cls, v: Any) -> Any:
        return [] if v is None else v


class Movie(BaseModel):
    """Movie record returned by ``TVDBClient.movie``."""

    id: int
    url: str = ""
    runtime: int = 0
    genres: list[Genre] = Field(default_factory=list)
    translations: list[Translation] = Field(default_factory=list)
    release_dates: list[ReleaseDate] = Field(default_factory=list)
    artworks: list[Artwork] = Field(default_factory=list)
    trailers: list[Trailer] = Field(default_factory=list)
    remoteids: list[RemoteID] = Field(default_factory=list)
    people: People = Field(default_factory=People)

    @field_validator(
        "genres",
        "translations",
        "release_dates",
        "artworks",
        "trailers",
        "remoteids",
        mode="before",
    )
    @classmethod
    def _list(cls, v: Any) -> Any:
        return [] if v is None else v

    def get_title(self, language_code: str | None = None) -> str | None:
        """Movie title in a language, falling back to the primary translation.

        Args:
            language_code: Three-letter code used by TheTVDB, e.g. "eng"
        """
        if language_code:
            for translation in self.translations:
                if translation.language_code == language_code:
                    return translation.name
        for translation in self.translations:
            if translation.is_primary:
                return translation.name
        return self.translations[0].name if self.translations else None

    def get_genre_names(self) -> list[str]:
        return [g.name for g in self.genres]

    def get_imdb_id(self) -> str | None:
        for remote_id in self.remoteids:
            if remote_id.source_name.upper() == "IMDB":
                return remote_id.id
        return None
