"""Conversion of TPV records into Fix values."""

from __future__ import annotations

import math
from typing import Any, Mapping, Optional

from ..constants import (
    DEFAULT_ALTITUDE_M,
    FIELD_ALT,
    FIELD_LAT,
    FIELD_LON,
    FIELD_TIME,
    UNKNOWN_TIME,
)
from ..errors import IncompleteFixError
from .gpsd_types import Fix


def _is_number(value: Any) -> bool:
    # bool is an int subclass but never a coordinate
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _to_float(value: Any) -> Optional[float]:
    # Integers beyond the float range overflow; treat them like infinity
    try:
        number = float(value)
    except OverflowError:
        return None
    return number if math.isfinite(number) else None


def _required_coordinate(record: Mapping[str, Any], field: str) -> float:
    if field not in record or record[field] is None:
        raise IncompleteFixError(f"missing {field}")
    value = record[field]
    if not _is_number(value):
        raise IncompleteFixError(f"non-numeric {field}")
    number = _to_float(value)
    if number is None:
        raise IncompleteFixError(f"non-finite {field}")
    return number


def _optional_altitude(record: Mapping[str, Any]) -> float:
    value = record.get(FIELD_ALT)
    if _is_number(value):
        number = _to_float(value)
        if number is not None:
            return number
    return DEFAULT_ALTITUDE_M


def _optional_time(record: Mapping[str, Any]) -> str:
    value: Optional[Any] = record.get(FIELD_TIME)
    return value if isinstance(value, str) else UNKNOWN_TIME


def extract_fix(record: Mapping[str, Any]) -> Fix:
    """Build a Fix from a decoded TPV record.

    Latitude and longitude are copied verbatim (no range check); altitude
    falls back to 0.0 and time to an empty string.

    Raises:
        IncompleteFixError: ``lat`` or ``lon`` is missing, non-numeric or
            not finite.
    """
    latitude = _required_coordinate(record, FIELD_LAT)
    longitude = _required_coordinate(record, FIELD_LON)
    return Fix(
        latitude=latitude,
        longitude=longitude,
        altitude_m=_optional_altitude(record),
        timestamp=_optional_time(record),
    )


__all__ = ["extract_fix"]
