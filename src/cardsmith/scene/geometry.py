"""Grid snapping and clamping. Pure functions, no state."""

import math


def snap(value: float, grid_size: float) -> float:
    """
    Round value to the nearest multiple of grid_size (halves round up).

    A non-positive grid disables snapping and returns value unchanged.

    Examples:
        >>> snap(29, 20)
        20
        >>> snap(30, 20)
        40
    """
    if grid_size <= 0:
        return value
    return math.floor(value / grid_size + 0.5) * grid_size


def clamp_min(value: float, floor: float) -> float:
    """Return max(value, floor)."""
    return max(value, floor)


def to_pixels(value: float) -> int:
    """Round a coordinate to a whole pixel (halves round up)."""
    return int(math.floor(value + 0.5))
