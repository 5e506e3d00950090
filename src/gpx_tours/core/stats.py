"""Trip statistics: distance, elevation, time span and bounds."""

import math
from typing import Iterable, Optional

from gpx_tours.models import Point, Segment
from .models import BoundingBox, ElevationStats, TimeSpan, Tour

EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance between two lat/lon pairs in kilometers."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)
    a = (
        math.sin(d_phi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    )
    return 2 * EARTH_RADIUS_KM * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def segment_distance_km(segment: Segment) -> float:
    pts = segment.points
    return sum(
        haversine_km(a.latitude, a.longitude, b.latitude, b.longitude)
        for a, b in zip(pts, pts[1:])
    )


def segment_elevation_change(segment: Segment) -> tuple[float, float]:
    """Return (gain, loss) in meters.

    A point without elevation breaks the chain: neither of its neighbours
    pairs across it.
    """
    gain = loss = 0.0
    pts = segment.points
    for prev, cur in zip(pts, pts[1:]):
        if prev.elevation is None or cur.elevation is None:
            continue
        delta = cur.elevation - prev.elevation
        if delta > 0:
            gain += delta
        else:
            loss += -delta
    return gain, loss


def bounding_box(points: Iterable[Point]) -> Optional[BoundingBox]:
    lats, lons = [], []
    for p in points:
        lats.append(p.latitude)
        lons.append(p.longitude)
    if not lats:
        return None
    return BoundingBox(north=max(lats), south=min(lats), east=max(lons), west=min(lons))


def compute_statistics(tour: Tour) -> Tour:
    """Return a copy of ``tour`` with its derived fields computed.

    Distance, gain/loss and the time span come from track segments only.
    Elevation min/max and the bounding box cover track and route points.
    Waypoints feed none of the aggregates.
    """
    segments = [seg for track in tour.tracks for seg in track.segments]
    track_points = [p for seg in segments for p in seg.points]
    route_points = [p for route in tour.routes for p in route.points]
    all_points = track_points + route_points

    distance = sum(segment_distance_km(seg) for seg in segments)

    gain = loss = 0.0
    for seg in segments:
        seg_gain, seg_loss = segment_elevation_change(seg)
        gain += seg_gain
        loss += seg_loss

    elevations = [p.elevation for p in all_points if p.elevation is not None]
    timestamps = [p.timestamp for p in track_points if p.timestamp is not None]

    return tour.model_copy(update={
        "bounding_box": bounding_box(all_points),
        "total_distance_km": distance,
        "elevation": ElevationStats(
            min=min(elevations) if elevations else None,
            max=max(elevations) if elevations else None,
            gain=gain,
            loss=loss,
        ),
        "time": TimeSpan(
            start=min(timestamps) if timestamps else None,
            end=max(timestamps) if timestamps else None,
        ),
    })
