"""Decoders for the loosely typed values TheTVDB v3 returns.

The API uses empty strings and zeros where a value is unknown, and its own
date formats. These functions are used as ``mode="before"`` validators.
"""

from datetime import UTC, date, datetime, time
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

DATE_FORMAT = "%Y-%m-%d"
DATE_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"
AIRS_TIME_FORMATS = ("%I:%M %p", "%H:%M")
ZERO_DATE_TIME = "0000-00-00 00:00:00"


class TVDBModel(BaseModel):
    """Base for models decoded from camelCase API payloads."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def empty_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


def zero_to_none(value: Any) -> Any:
    if value is None or value == 0:
        return None
    return value


def parse_date(value: Any) -> date | None:
    """Parse ``YYYY-MM-DD``; empty means unknown."""
    if value is None or isinstance(value, date):
        return value
    if not str(value).strip():
        return None
    return datetime.strptime(str(value).strip(), DATE_FORMAT).date()


def parse_date_time(value: Any) -> datetime | None:
    """Parse ``YYYY-MM-DD HH:MM:SS`` as UTC; empty or all-zero means unknown."""
    if value is None or isinstance(value, datetime):
        return value
    text = str(value).strip()
    if not text or text == ZERO_DATE_TIME:
        return None
    return datetime.strptime(text, DATE_TIME_FORMAT).replace(tzinfo=UTC)


def parse_airs_time(value: Any) -> time | None:
    """Parse the air time of a series, e.g. ``9:00 PM``."""
    if value is None or isinstance(value, time):
        return value
    text = " ".join(str(value).split()).upper()
    if not text:
        return None
    for fmt in AIRS_TIME_FORMATS:
        try:
            return datetime.strptime(text, fmt).time()
        except ValueError:
            continue
    raise ValueError(f"Invalid airs time: {value!r}")


def parse_timestamp(value: Any) -> datetime | None:
    """Convert Unix seconds to an aware UTC datetime; 0 means unknown."""
    if value is None or isinstance(value, datetime):
        return value
    seconds = int(value)
    if seconds == 0:
        return None
    return datetime.fromtimestamp(seconds, tz=UTC)


def int_to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return int(value) != 0
