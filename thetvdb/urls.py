"""Public TheTVDB website URLs.

The API only returns relative paths for images, series pages and movie
genres; these helpers resolve them against the website.
"""

from urllib.parse import urljoin

SERIES_BASE_URL = "https://www.thetvdb.com/series/"
BANNER_BASE_URL = "https://www.thetvdb.com/banners/"
MOVIE_GENRE_BASE_URL = "https://www.thetvdb.com/movies/genres/"


def image_url(path: str | None) -> str | None:
    """Resolve an image path (banner, poster, fanart, thumbnail...).

    Args:
        path: Path relative to the banners directory, e.g. "posters/318408-1.jpg"

    Returns:
        Full URL or None if no path
    """
    if not path:
        return None
    return urljoin(BANNER_BASE_URL, path)


def series_website_url(slug: str | None) -> str | None:
    """Get the public website page of a series from its slug."""
    if not slug:
        return None
    return urljoin(SERIES_BASE_URL, slug)


def genre_page_url(url: str | None) -> str | None:
    """Get the public page of a movie genre."""
    if not url:
        return None
    return urljoin(MOVIE_GENRE_BASE_URL, url)
