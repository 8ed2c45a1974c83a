from datetime import datetime, timezone
from typing import Any, Optional

from core import constants


def from_hex(value: Any) -> int:
    """Decode a balance that may be a hex string, a decimal string or a number."""
    if value is None:
        return 0
    if isinstance(value, bool):
        raise ValueError(f"Invalid balance value: {value!r}")
    if isinstance(value, (int, float)):
        return int(value)
    if isinstance(value, str):
        s = value.strip()
        if s.lower().startswith("0x"):
            digits = s[2:]
            return int(digits, 16) if digits else 0
        if not s:
            return 0
        return int(s)
    raise ValueError(f"Invalid balance value: {value!r}")


def from_optional_hex(value: Any) -> Optional[int]:
    if value is None:
        return None
    return from_hex(value)


def to_milliseconds(timestamp: Any) -> int:
    """Normalize an integer or float millisecond timestamp to integer milliseconds."""
    if timestamp is None:
        return 0
    return int(round(float(timestamp)))


def day_bucket(timestamp_ms: int) -> int:
    """UTC midnight (seconds) of the day containing `timestamp_ms`."""
    seconds = timestamp_ms // constants.MILLISECONDS_PER_SECOND
    return seconds - seconds % constants.SECONDS_PER_DAY


def day_to_milliseconds(day: str, fmt: str = constants.REWARD_REPORT_DAY_FORMAT) -> int:
    try:
        parsed = datetime.strptime(day, fmt).replace(tzinfo=timezone.utc)
    except ValueError:
        return 0
    return int(parsed.timestamp()) * constants.MILLISECONDS_PER_SECOND
