"""Duration values in settings files.

Retry delays and priority timeouts may be written as:
- unit strings: "30s", "5m", "6h", "2d", or compounds such as "1h30m"
- ISO-8601: "PT30S", "PT5M", "P2D", "PT1H30M"
- bare numbers (int, float or numeric string), read as seconds
"""

import re
from datetime import timedelta
from typing import Union

DurationInput = Union[str, int, float, timedelta]

_UNIT_SECONDS = {"s": 1, "m": 60, "h": 3600, "d": 86400}

_NUMERIC = re.compile(r"\d+(?:\.\d+)?")
_COMPOUND = re.compile(r"(?:\d+[smhd])+")
_COMPOUND_PART = re.compile(r"(\d+)([smhd])")
_ISO8601 = re.compile(r"P(?:(\d+)D)?(?:T(?:(\d+)H)?(?:(\d+)M)?(?:(\d+(?:\.\d+)?)S)?)?")


class DurationParseError(ValueError):
    """A settings value could not be read as a positive duration."""


def parse_duration(value: DurationInput) -> timedelta:
    """
    Convert a settings value into a positive timedelta.

    Raises:
        DurationParseError: If the value is malformed, zero or negative

    Examples:
        >>> parse_duration("1h30m")
        datetime.timedelta(seconds=5400)
        >>> parse_duration("PT30S")
        datetime.timedelta(seconds=30)
    """
    # bool is an int subclass; True is not "1 second"
    if isinstance(value, bool):
        raise DurationParseError(f"Invalid duration: {value!r}")

    if isinstance(value, timedelta):
        duration = value
    elif isinstance(value, (int, float)):
        duration = timedelta(seconds=value)
    elif isinstance(value, str):
        duration = timedelta(seconds=_seconds_from_text(value))
    else:
        raise DurationParseError(f"Unsupported duration type: {type(value).__name__}")

    if duration <= timedelta(0):
        raise DurationParseError(f"Duration must be positive: {value!r}")
    return duration


def _seconds_from_text(text: str) -> float:
    compact = re.sub(r"\s+", "", text)
    if not compact:
        raise DurationParseError("Duration string cannot be empty")

    if _NUMERIC.fullmatch(compact):
        return float(compact)

    upper = compact.upper()
    if upper.startswith("P"):
        match = _ISO8601.fullmatch(upper)
        if match is None or upper in ("P", "PT") or upper.endswith("T"):
            raise DurationParseError(
                f"Invalid ISO-8601 duration: '{text}'. Expected e.g. 'PT30S', 'PT5M' or 'P2D'"
            )
        days, hours, minutes, seconds = match.groups()
        return (
            int(days or 0) * _UNIT_SECONDS["d"]
            + int(hours or 0) * _UNIT_SECONDS["h"]
            + int(minutes or 0) * _UNIT_SECONDS["m"]
            + float(seconds or 0)
        )

    lower = compact.lower()
    if not _COMPOUND.fullmatch(lower):
        raise DurationParseError(
            f"Invalid duration: '{text}'. Use digits followed by s, m, h or d, e.g. '30s' or '1h30m'"
        )
    return float(sum(int(n) * _UNIT_SECONDS[unit] for n, unit in _COMPOUND_PART.findall(lower)))


def validate_duration_range(
    duration: timedelta,
    minimum: timedelta,
    maximum: timedelta,
    label: str = "Duration",
) -> None:
    """Raise DurationParseError unless minimum <= duration <= maximum."""
    if duration < minimum:
        raise DurationParseError(
            f"{label} too short: {format_duration(duration)} (minimum {format_duration(minimum)})"
        )
    if duration > maximum:
        raise DurationParseError(
            f"{label} too long: {format_duration(duration)} (maximum {format_duration(maximum)})"
        )


def format_duration(duration: timedelta) -> str:
    """Largest whole unit, pluralized: '1 second', '5 minutes', '6 hours'."""
    seconds = int(duration.total_seconds())
    for unit, size in (("day", 86400), ("hour", 3600), ("minute", 60)):
        if seconds >= size:
            count = seconds // size
            return f"{count} {unit}{'' if count == 1 else 's'}"
    return f"{seconds} second{'' if seconds == 1 else 's'}"
