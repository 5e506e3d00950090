"""Parse GPX tours and compute trip statistics."""

from .core.batch import load_tour, load_tours
from .core.gpx import MalformedDocument, parse_gpx
from .core.stats import compute_statistics, haversine_km

__all__ = [
    "MalformedDocument",
    "compute_statistics",
    "haversine_km",
    "load_tour",
    "load_tours",
    "parse_gpx",
]
