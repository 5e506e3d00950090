"""GeoJSON overlay data for drawing tours on a web map."""

import json
from typing import Optional

from ..core.formatting import format_distance, format_duration, format_elevation_range, format_meters
from ..core.models import Tour


def _popup_properties(tour: Tour) -> dict:
    props = {
        "name": tour.name,
        "description": tour.description,
        "distance": format_distance(tour.total_distance_km),
    }
    elevation_range = format_elevation_range(tour.elevation)
    if elevation_range:
        props["elevation"] = elevation_range
    if tour.elevation.gain > 0:
        props["elevation_gain"] = format_meters(tour.elevation.gain)
    duration = format_duration(tour.time.duration)
    if duration:
        props["duration"] = duration
    return props


def tour_to_geojson(tour: Tour, color: Optional[str] = None) -> dict:
    """Build a FeatureCollection for one tour.

    Tracks become MultiLineStrings, routes dashed LineStrings and waypoints
    Points. Lines need at least two points to be drawn, so shorter segments
    and routes are left out. Coordinates are [lon, lat].
    """
    base = {"source_id": tour.source_id, "color": color}
    popup = _popup_properties(tour)
    features = []

    for track in tour.tracks:
        lines = [
            [[p.longitude, p.latitude] for p in seg.points]
            for seg in track.segments if len(seg.points) > 1
        ]
        if not lines:
            continue
        features.append({
            "type": "Feature",
            "geometry": {"type": "MultiLineString", "coordinates": lines},
            "properties": {**base, **popup, "kind": "track", "track_name": track.name, "dashed": False},
        })

    for route in tour.routes:
        if len(route.points) < 2:
            continue
        features.append({
            "type": "Feature",
            "geometry": {
                "type": "LineString",
                "coordinates": [[p.longitude, p.latitude] for p in route.points],
            },
            "properties": {**base, **popup, "kind": "route", "route_name": route.name, "dashed": True},
        })

    for wp in tour.waypoints:
        props = {**base, "kind": "waypoint", "name": wp.name or "Waypoint", "description": wp.description}
        if wp.elevation is not None:
            props["elevation"] = format_meters(wp.elevation)
        features.append({
            "type": "Feature",
            "geometry": {"type": "Point", "coordinates": [wp.longitude, wp.latitude]},
            "properties": props,
        })

    collection = {"type": "FeatureCollection", "features": features}
    if tour.bounding_box is not None:
        b = tour.bounding_box
        collection["bbox"] = [b.west, b.south, b.east, b.north]
    return collection


def export_geojson(tours: list[Tour], colors: dict[str, str], output_path: str) -> int:
    """Write all tours as one FeatureCollection. Returns the feature count."""
    features = []
    for tour in tours:
        features.extend(tour_to_geojson(tour, colors.get(tour.source_id))["features"])
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump({"type": "FeatureCollection", "features": features}, f, indent=2)
    return len(features)
