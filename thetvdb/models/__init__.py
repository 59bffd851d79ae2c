"""Typed TheTVDB v3 responses."""

from thetvdb.models.episode import (
    Episode,
    EpisodeLanguage,
    EpisodePage,
    EpisodeQueryPage,
    EpisodeSummary,
    PageLinks,
)
from thetvdb.models.image import Image, ImageQueryKey, ImageRatingsInfo, SeriesImages
from thetvdb.models.language import Language
from thetvdb.models.movie import (
    Artwork,
    Genre,
    Movie,
    People,
    Person,
    ReleaseDate,
    RemoteID,
    Trailer,
    Translation,
)
from thetvdb.models.series import (
    Actor,
    FilteredSeries,
    SearchSeries,
    Series,
    SeriesStatus,
    SeriesUpdate,
)

__all__ = [
    # Series
    "SearchSeries",
    "Series",
    "FilteredSeries",
    "SeriesStatus",
    "SeriesUpdate",
    "Actor",
    # Episodes
    "Episode",
    "EpisodeLanguage",
    "EpisodePage",
    "EpisodeQueryPage",
    "EpisodeSummary",
    "PageLinks",
    # Images
    "SeriesImages",
    "Image",
    "ImageRatingsInfo",
    "ImageQueryKey",
    # Languages
    "Language",
    # Movies
    "Movie",
    "Genre",
    "Translation",
    "ReleaseDate",
    "Artwork",
    "Trailer",
    "RemoteID",
    "People",
    "Person",
]
