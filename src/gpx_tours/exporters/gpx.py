"""GPX export of a parsed tour."""

import gpxpy.gpx

from ..core.models import Tour


def tour_to_gpx(tour: Tour) -> gpxpy.gpx.GPX:
    gpx = gpxpy.gpx.GPX()
    gpx.name = tour.name or None
    gpx.description = tour.description or None

    for track in tour.tracks:
        gpx_track = gpxpy.gpx.GPXTrack(name=track.name or None)
        for segment in track.segments:
            gpx_segment = gpxpy.gpx.GPXTrackSegment()
            for p in segment.points:
                gpx_segment.points.append(gpxpy.gpx.GPXTrackPoint(
                    latitude=p.latitude,
                    longitude=p.longitude,
                    elevation=p.elevation,
                    time=p.timestamp,
                ))
            gpx_track.segments.append(gpx_segment)
        gpx.tracks.append(gpx_track)

    for route in tour.routes:
        gpx_route = gpxpy.gpx.GPXRoute(name=route.name or None)
        for p in route.points:
            gpx_route.points.append(gpxpy.gpx.GPXRoutePoint(
                latitude=p.latitude,
                longitude=p.longitude,
                elevation=p.elevation,
                name=p.name or None,
            ))
        gpx.routes.append(gpx_route)

    for wp in tour.waypoints:
        gpx.waypoints.append(gpxpy.gpx.GPXWaypoint(
            latitude=wp.latitude,
            longitude=wp.longitude,
            elevation=wp.elevation,
            name=wp.name or None,
            description=wp.description or None,
        ))

    return gpx


def export_gpx(tour: Tour, output_path: str) -> None:
    """Write the tour as a GPX 1.1 file."""
    with open(output_path, "w", encoding="utf-8") as f:
        f.write(tour_to_gpx(tour).to_xml(version="1.1"))
