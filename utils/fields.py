"""Data-driven field lookup for provider payloads.

Providers name the same value differently ("lat" vs "latitude", "org"
vs "connection.isp"). Callers describe the candidates as ordered key
paths (see config.LOCATION_FIELD_CANDIDATES) and these helpers walk them.
"""

import math
from typing import Any

_MISSING = object()


def lookup_path(payload: Any, path: tuple[str, ...]) -> Any:
    """Read a nested key path from a decoded JSON object.

    Args:
        payload: Decoded JSON (normally a dict)
        path: Keys to follow, e.g. ("connection", "isp")

    Returns:
        Value found, or None if any step is missing or not an object.
    """
    current = payload
    for key in path:
        if not isinstance(current, dict):
            return None
        current = current.get(key, _MISSING)
        if current is _MISSING:
            return None
    return current


def first_present(payload: Any, candidates: tuple[tuple[str, ...], ...]) -> Any:
    """Return the first non-null value among candidate key paths.

    An empty string is a present value; only a missing key or JSON null
    moves on to the next candidate.

    Args:
        payload: Decoded JSON object
        candidates: Key paths in priority order

    Returns:
        First present value, or None if no candidate is present.
    """
    for path in candidates:
        value = lookup_path(payload, path)
        if value is not None:
            return value
    return None


def parse_coordinate(value: Any) -> float | None:
    """Parse a latitude/longitude value.

    Accepts numbers and numeric strings. Booleans, other types,
    NaN and infinities count as absent.

    Args:
        value: Raw provider value

    Returns:
        Finite float or None.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        return None
    try:
        number = float(value)
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return number


def parse_flag(value: Any) -> bool:
    """Interpret a provider flag.

    Only a literal JSON true counts; strings like "true" or 1 do not.
    """
    return value is True
