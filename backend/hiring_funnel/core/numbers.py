from __future__ import annotations

import math


def round_half_up(value: float, digits: int = 0) -> float:
    """Round halves towards +infinity (2.5 -> 3, -2.5 -> -2) instead of to even."""
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def round_days(value: float) -> int:
    return int(round_half_up(value))


def round_tenth(value: float) -> float:
    return round_half_up(value, 1)


def mean_tenth(samples: list[float]) -> float | None:
    if not samples:
        return None
    return round_tenth(sum(samples) / len(samples))


def percent_tenth(part: int, whole: int) -> float:
    if whole <= 0:
        return 0
    return round_half_up(part * 1000 / whole) / 10
