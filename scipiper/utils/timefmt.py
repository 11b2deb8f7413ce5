"""
Canonical text form for build times.

Build records and indicator files carry times as strings so they can be
committed and diffed. All times are written in UTC with microsecond
precision, which is lossless for the datetimes held in the status store.
"""

from datetime import datetime, timezone

TIME_FORMAT = "%Y-%m-%d %H:%M:%S.%f %z"

# Accepted on read only; written by older indicator files and shell recipes.
_LEGACY_FORMATS = (
    "%Y-%m-%d %H:%M:%S %z",
    "%Y-%m-%d %H:%M:%S.%f",
    "%Y-%m-%d %H:%M:%S",
)


def to_utc(value: datetime) -> datetime:
    """Return value as an aware UTC datetime; naive values are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def format_time(value: datetime) -> str:
    """
    Format a datetime in the canonical text form.

    Examples:
        datetime(2017, 8, 25, 15, 0, tzinfo=timezone.utc)
            -> '2017-08-25 15:00:00.000000 +0000'
    """
    return to_utc(value).strftime(TIME_FORMAT)


def parse_time(text: str) -> datetime:
    """
    Parse a time string written by format_time (or a legacy variant).

    Raises:
        ValueError: If text matches none of the accepted formats
    """
    text = text.strip()
    for fmt in (TIME_FORMAT, *_LEGACY_FORMATS):
        try:
            return to_utc(datetime.strptime(text, fmt))
        except ValueError:
            continue
    raise ValueError(f"Unrecognized time string: {text!r}")


def now_utc() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def from_timestamp(seconds: float) -> datetime:
    """Convert epoch seconds (e.g. a file mtime) to an aware UTC datetime."""
    return datetime.fromtimestamp(seconds, tz=timezone.utc)
