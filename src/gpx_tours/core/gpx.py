"""GPX document parsing.

Walks the XML tree directly instead of going through ``gpxpy.parse`` so that a
single bad point is skipped rather than failing the whole document.
"""

import logging
import math
import re
from datetime import date, datetime, timezone
from typing import Optional

from gpxpy.gpx import GPXException
from gpxpy.gpxfield import parse_time
from lxml import etree

from gpx_tours.models import Point, Route, RoutePoint, Segment, Track, Waypoint
from .models import Tour

logger = logging.getLogger(__name__)

_EXTENSION_RE = re.compile(r"\.[^/.]+$")
_DATE_ONLY_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class MalformedDocument(ValueError):
    """The document is not well-formed XML or has no <gpx> root."""

    def __init__(self, source_id: str, reason: str):
        super().__init__(f"{source_id}: {reason}")
        self.source_id = source_id
        self.reason = reason


def _local(el) -> Optional[str]:
    # Comments and processing instructions have a non-string tag
    if not isinstance(el.tag, str):
        return None
    return etree.QName(el).localname


def _children(el, name: str) -> list:
    return [c for c in el if _local(c) == name]


def _child(el, name: str):
    for c in el:
        if _local(c) == name:
            return c
    return None


def _child_text(el, name: str) -> str:
    child = _child(el, name) if el is not None else None
    if child is None:
        return ""
    return "".join(child.itertext()).strip()


def _parse_float(text: Optional[str]) -> Optional[float]:
    if text is None:
        return None
    try:
        value = float(text.strip())
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def _parse_timestamp(text: str) -> Optional[datetime]:
    if not text:
        return None
    if _DATE_ONLY_RE.match(text):
        # A bare date is midnight UTC of that day
        try:
            day = date.fromisoformat(text)
        except ValueError:
            logger.debug("Ignoring unparsable timestamp %r", text)
            return None
        return datetime(day.year, day.month, day.day, tzinfo=timezone.utc)
    try:
        ts = parse_time(text)
    except (GPXException, ValueError):
        logger.debug("Ignoring unparsable timestamp %r", text)
        return None
    if ts is not None and ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts


def _parse_coordinates(el) -> Optional[tuple[float, float]]:
    lat = _parse_float(el.get("lat"))
    lon = _parse_float(el.get("lon"))
    if lat is None or lon is None:
        return None
    if not (-90 <= lat <= 90 and -180 <= lon <= 180):
        return None
    return lat, lon


def _parse_point(el) -> Optional[Point]:
    coords = _parse_coordinates(el)
    if coords is None:
        logger.debug("Dropping <%s> with lat=%r lon=%r", _local(el), el.get("lat"), el.get("lon"))
        return None
    return Point(
        latitude=coords[0],
        longitude=coords[1],
        elevation=_parse_float(_child_text(el, "ele")),
        timestamp=_parse_timestamp(_child_text(el, "time")),
    )


def _parse_track(el) -> Optional[Track]:
    segments = []
    for seg_el in _children(el, "trkseg"):
        points = [p for p in map(_parse_point, _children(seg_el, "trkpt")) if p is not None]
        if points:
            segments.append(Segment(points=points))
    if not segments:
        return None
    return Track(name=_child_text(el, "name"), segments=segments)


def _parse_route(el) -> Optional[Route]:
    points = []
    for pt_el in _children(el, "rtept"):
        coords = _parse_coordinates(pt_el)
        if coords is None:
            logger.debug("Dropping <rtept> with lat=%r lon=%r", pt_el.get("lat"), pt_el.get("lon"))
            continue
        points.append(RoutePoint(
            latitude=coords[0],
            longitude=coords[1],
            elevation=_parse_float(_child_text(pt_el, "ele")),
            name=_child_text(pt_el, "name"),
        ))
    if not points:
        return None
    return Route(name=_child_text(el, "name"), points=points)


def _parse_waypoint(el) -> Optional[Waypoint]:
    coords = _parse_coordinates(el)
    if coords is None:
        logger.debug("Dropping <wpt> with lat=%r lon=%r", el.get("lat"), el.get("lon"))
        return None
    return Waypoint(
        latitude=coords[0],
        longitude=coords[1],
        elevation=_parse_float(_child_text(el, "ele")),
        name=_child_text(el, "name"),
        description=_child_text(el, "desc"),
    )


def strip_extension(source_id: str) -> str:
    """Drop a trailing ``.ext`` from a file name; keep the name if nothing is left."""
    return _EXTENSION_RE.sub("", source_id) or source_id


def _metadata_text(root, tag: str) -> str:
    # GPX 1.1 keeps name/desc under <metadata>, GPX 1.0 directly under <gpx>
    return _child_text(_child(root, "metadata"), tag) or _child_text(root, tag)


def _first_text(root, tag: str) -> str:
    # Document metadata, then every track in order, then every route
    text = _metadata_text(root, tag)
    if text:
        return text
    for kind in ("trk", "rte"):
        for el in _children(root, kind):
            text = _child_text(el, tag)
            if text:
                return text
    return ""


def resolve_name(root, source_id: str) -> str:
    """Document title, else the first named track, else the first named route,
    else the file name without its extension."""
    return _first_text(root, "name") or strip_extension(source_id)


def resolve_description(root) -> str:
    """Same search order as resolve_name; empty when nothing is found."""
    return _first_text(root, "desc")


def _parse_root(document_text: str, source_id: str):
    if not document_text or not document_text.strip():
        raise MalformedDocument(source_id, "Document is empty")

    # Encoding is forced because the text is already decoded; a stale
    # encoding declaration in the prolog must not be honoured.
    parser = etree.XMLParser(
        encoding="utf-8", resolve_entities=False, no_network=True, remove_comments=True,
    )
    try:
        data = document_text.encode("utf-8")
    except UnicodeEncodeError as e:
        raise MalformedDocument(source_id, "Invalid text encoding") from e
    try:
        root = etree.fromstring(data, parser)
    except etree.XMLSyntaxError as e:
        raise MalformedDocument(source_id, f"Invalid GPX file format: {e}") from e

    if root is None or _local(root) != "gpx":
        found = _local(root) if root is not None else None
        raise MalformedDocument(source_id, f"Invalid GPX file format: root element is <{found}>, expected <gpx>")
    return root


def parse_gpx(document_text: str, source_id: str) -> Tour:
    """Parse GPX text into a Tour with empty statistics.

    Raises MalformedDocument if the text is not XML or the root is not <gpx>.
    Points with missing or invalid coordinates are skipped, as are segments,
    tracks and routes left without points.
    """
    root = _parse_root(document_text, source_id)

    tracks = [t for t in map(_parse_track, _children(root, "trk")) if t is not None]
    routes = [r for r in map(_parse_route, _children(root, "rte")) if r is not None]
    waypoints = [w for w in map(_parse_waypoint, _children(root, "wpt")) if w is not None]

    tour = Tour(
        source_id=source_id,
        name=resolve_name(root, source_id),
        description=resolve_description(root),
        tracks=tracks,
        routes=routes,
        waypoints=waypoints,
    )
    logger.info(
        "Parsed %s: %d track(s), %d route(s), %d waypoint(s), %d point(s)",
        source_id, len(tracks), len(routes), len(waypoints), tour.point_count,
    )
    return tour
