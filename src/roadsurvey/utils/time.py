from __future__ import annotations

from datetime import datetime

DATE_FORMAT = "%d/%m/%Y"
TIME_FORMAT = "%H:%M:%S"

# Layouts seen in survey exports besides ISO 8601.
_FALLBACK_FORMATS = (
    "%d/%m/%Y %H:%M:%S",
    "%Y/%m/%d %H:%M:%S",
    "%d-%m-%Y %H:%M:%S",
)


def parse_survey_timestamp(value: str) -> datetime:
    """Parse a log timestamp into a naive wall-clock datetime.

    An explicit UTC offset is dropped without conversion: the clock reading
    recorded by the survey vehicle is what gets reported.
    """

    text = str(value).strip()
    if not text:
        raise ValueError("empty timestamp")
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        dt = datetime.fromisoformat(text)
    except ValueError:
        dt = None
        for fmt in _FALLBACK_FORMATS:
            try:
                dt = datetime.strptime(text, fmt)
                break
            except ValueError:
                continue
        if dt is None:
            raise ValueError(f"unrecognized timestamp: {value!r}") from None
    return dt.replace(tzinfo=None)


def format_survey_date(dt: datetime) -> str:
    return dt.strftime(DATE_FORMAT)


def format_survey_time(dt: datetime) -> str:
    return dt.strftime(TIME_FORMAT)
