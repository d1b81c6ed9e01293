from __future__ import annotations

import math


def round_meters(value: float) -> int:
    """Round half up, the way the browser UI rounds distances."""
    return int(math.floor(float(value) + 0.5))


def format_location(latitude: float, longitude: float, *, digits: int = 4) -> str:
    return f"{latitude:.{digits}f}, {longitude:.{digits}f}"


def format_accuracy(accuracy: float) -> str:
    return f"±{round_meters(accuracy)}m"
