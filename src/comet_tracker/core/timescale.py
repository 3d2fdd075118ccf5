"""
Calendar instant <-> continuous day count (Julian day).

    JD = unix_seconds / 86400 + 2440587.5
"""

from __future__ import annotations

import math
from datetime import datetime, timedelta, timezone
from typing import Union

from comet_tracker.core.constants import JD_UNIX_EPOCH, SECONDS_PER_DAY

Instant = Union[datetime, float]

_UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def to_julian_day(instant: Instant) -> float:
    """
    Convert an instant to a Julian day.

    Args:
        instant: datetime (naive values are taken as UTC) or a Julian day float,
            which is passed through unchanged.

    Returns:
        Julian day (days)
    """
    if isinstance(instant, datetime):
        if instant.tzinfo is None:
            instant = instant.replace(tzinfo=timezone.utc)
        # timedelta arithmetic keeps microseconds exact before the float division
        delta = instant - _UNIX_EPOCH
        seconds = delta.days * SECONDS_PER_DAY + delta.seconds + delta.microseconds / 1e6
        return seconds / SECONDS_PER_DAY + JD_UNIX_EPOCH

    jd = float(instant)
    if not math.isfinite(jd):
        raise ValueError(f"Julian day must be finite. Got: {instant}")
    return jd


def from_julian_day(jd: float) -> datetime:
    """Inverse of to_julian_day. Returns an aware UTC datetime."""
    if not math.isfinite(jd):
        raise ValueError(f"Julian day must be finite. Got: {jd}")
    return _UNIX_EPOCH + timedelta(days=jd - JD_UNIX_EPOCH)
