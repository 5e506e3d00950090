"""Tests for domain Pydantic models."""
import pytest
from pydantic import ValidationError


class TestPoint:
    def test_valid_point(self):
        from gpx_tours.models import Point
        p = Point(latitude=47.6, longitude=-122.3)
        assert p.elevation is None
        assert p.timestamp is None

    def test_lat_out_of_range(self):
        from gpx_tours.models import Point
        with pytest.raises(ValidationError):
            Point(latitude=91.0, longitude=0.0)

    def test_lon_out_of_range(self):
        from gpx_tours.models import Point
        with pytest.raises(ValidationError):
            Point(latitude=0.0, longitude=-181.0)

    def test_nan_rejected(self):
        from gpx_tours.models import Point
        with pytest.raises(ValidationError):
            Point(latitude=float("nan"), longitude=0.0)

    def test_frozen(self):
        from gpx_tours.models import Point
        p = Point(latitude=1.0, longitude=1.0)
        with pytest.raises(ValidationError):
            p.latitude = 2.0


class TestContainers:
    def test_segment_requires_a_point(self):
        from gpx_tours.models import Segment
        with pytest.raises(ValidationError):
            Segment(points=[])

    def test_track_requires_a_segment(self):
        from gpx_tours.models import Track
        with pytest.raises(ValidationError):
            Track(name="Empty", segments=[])

    def test_track_points_flatten_segments(self):
        from gpx_tours.models import Point, Segment, Track
        t = Track(name="T", segments=[
            Segment(points=[Point(latitude=1, longitude=1)]),
            Segment(points=[Point(latitude=2, longitude=2), Point(latitude=3, longitude=3)]),
        ])
        assert [p.latitude for p in t.points] == [1, 2, 3]

    def test_route_requires_a_point(self):
        from gpx_tours.models import Route
        with pytest.raises(ValidationError):
            Route(name="R", points=[])

    def test_route_point_label_defaults_empty(self):
        from gpx_tours.models import RoutePoint
        assert RoutePoint(latitude=0, longitude=0).name == ""

    def test_waypoint_defaults(self):
        from gpx_tours.models import Waypoint
        wp = Waypoint(latitude=0.0, longitude=0.0)
        assert wp.name == ""
        assert wp.description == ""


class TestBoundingBox:
    def test_single_point_box_is_valid(self):
        from gpx_tours.core.models import BoundingBox
        b = BoundingBox(north=1, south=1, east=2, west=2)
        assert b.lat_range == 0
        assert b.center_lon == 2

    def test_north_below_south_rejected(self):
        from gpx_tours.core.models import BoundingBox
        with pytest.raises(ValidationError):
            BoundingBox(north=1, south=2, east=2, west=1)

    def test_east_below_west_rejected(self):
        from gpx_tours.core.models import BoundingBox
        with pytest.raises(ValidationError):
            BoundingBox(north=2, south=1, east=1, west=2)

    def test_union(self):
        from gpx_tours.core.models import BoundingBox
        a = BoundingBox(north=48.0, south=47.0, east=9.0, west=8.0)
        b = BoundingBox(north=47.5, south=46.0, east=10.0, west=8.5)
        u = a.union(b)
        assert (u.north, u.south, u.east, u.west) == (48.0, 46.0, 10.0, 8.0)


class TestTour:
    def test_defaults(self):
        from gpx_tours.core.models import Tour
        t = Tour(source_id="x.gpx")
        assert t.tracks == [] and t.routes == [] and t.waypoints == []
        assert t.bounding_box is None
        assert t.total_distance_km == 0.0
        assert t.time.duration is None
        assert t.point_count == 0

    def test_negative_distance_rejected(self):
        from gpx_tours.core.models import Tour
        with pytest.raises(ValidationError):
            Tour(source_id="x.gpx", total_distance_km=-1.0)

    def test_negative_gain_rejected(self):
        from gpx_tours.core.models import ElevationStats
        with pytest.raises(ValidationError):
            ElevationStats(gain=-5.0)
