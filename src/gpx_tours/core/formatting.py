"""Display strings for tour statistics.

Ties round away from zero (2.5 m -> "3 m", 1.25 km -> "1.3 km") rather than
to the nearest even digit as ``round()`` and ``format()`` do.
"""

from datetime import timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from .models import ElevationStats, Tour


def round_fixed(value: float, places: int = 0) -> str:
    """Fixed-point string of ``value`` with ties rounded away from zero."""
    exponent = Decimal(1).scaleb(-places)
    return str(Decimal(value).quantize(exponent, rounding=ROUND_HALF_UP))


def format_meters(value: float) -> str:
    return f"{round_fixed(value)}m"


def format_distance(distance_km: float) -> str:
    if distance_km < 1:
        return f"{round_fixed(distance_km * 1000)} m"
    return f"{round_fixed(distance_km, 1)} km"


def format_duration(duration: Optional[timedelta]) -> str:
    """Render as "Hh Mm", or "Mm" under an hour. Empty for a missing or zero span."""
    if not duration:
        return ""
    total_minutes = int(duration.total_seconds() // 60)
    hours, minutes = divmod(total_minutes, 60)
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"


def format_elevation_range(elevation: ElevationStats) -> str:
    if elevation.min is None or elevation.max is None:
        return ""
    return f"{format_meters(elevation.min)} - {format_meters(elevation.max)}"


def tour_summary_line(tour: Tour) -> str:
    """One-line sidebar text, e.g. "12.4 km • 2h 5m • ↗340m"."""
    parts = [format_distance(tour.total_distance_km)]
    duration = format_duration(tour.time.duration)
    if duration:
        parts.append(duration)
    if tour.elevation.gain > 0:
        parts.append(f"↗{format_meters(tour.elevation.gain)}")
    return " • ".join(parts)
