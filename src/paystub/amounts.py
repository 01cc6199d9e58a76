from __future__ import annotations

import math
from typing import Any


def to_amount(value: Any) -> float:
    """Coerce a numeric field, treating missing, invalid and negative values as zero."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number) or number < 0:
        return 0.0
    return number


def to_count(value: Any) -> int:
    return int(to_amount(value))
