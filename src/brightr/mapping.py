"""Conversion between raw backlight levels and perceptual percentages.

Percentages are gamma corrected: ``raw ~ percent ** exponent``. An exponent of
1 keeps the mapping linear; 2-4 is usually closer to how brightness is
perceived. The bottom of the raw range is ``min_raw`` rather than zero so a
floor configured by the user maps to 0%.
"""

from __future__ import annotations

import math

from brightr.errors import InvalidInput


def check_exponent(exponent: float) -> float:
    exponent = float(exponent)
    if not math.isfinite(exponent) or exponent <= 0:
        raise InvalidInput(f"exponent must be a positive number, got {exponent}")
    return exponent


def _clamp(value: float, lo: float, hi: float) -> float:
    return min(max(value, lo), hi)


def raw_to_percent(raw: int, max_raw: int, min_raw: int = 0, exponent: float = 1.0) -> float:
    exponent = check_exponent(exponent)
    span = max_raw - min_raw
    if span <= 0:
        return 0.0
    p = _clamp((raw - min_raw) / span, 0.0, 1.0)
    return 100.0 * p ** (1.0 / exponent)


def percent_to_raw(percent: float, max_raw: int, min_raw: int = 0, exponent: float = 1.0) -> int:
    exponent = check_exponent(exponent)
    p = (_clamp(float(percent), 0.0, 100.0) / 100.0) ** exponent
    raw = round(min_raw + p * (max_raw - min_raw))
    return int(_clamp(raw, min_raw, max_raw))
