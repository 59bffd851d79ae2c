"""Language model."""

from thetvdb.models.fields import TVDBModel


class Language(TVDBModel):
    """Language supported by TheTVDB.

    Can be passed to ``TVDBClient.set_language``.
    """

    id: int
    abbreviation: str
    name: str = ""
    english_name: str = ""
