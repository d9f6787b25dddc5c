"""Normalize CSS lengths into device-independent points."""

import math

# Reference body size for relative units
EM_SIZE = 16.0
PT_TO_DP = 1.33


def _to_float(text: str) -> float | None:
    try:
        value = float(text)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def parse_size(token: str) -> float | None:
    """Convert a length token (``16px``, ``1em``, ``12pt``, ``2``) to points.

    Returns None for anything that does not parse; callers treat that as
    "property not applied".
    """
    if token.endswith("px"):
        return _to_float(token[:-2])
    if token.endswith("em"):
        value = _to_float(token[:-2])
        return value * EM_SIZE if value is not None else None
    if token.endswith("pt"):
        value = _to_float(token[:-2])
        return value * PT_TO_DP if value is not None else None
    return _to_float(token)
