"""Pydantic models for tours and the derived statistics attached to them."""

from datetime import datetime, timedelta
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from gpx_tours.models import Route, Track, Waypoint


class BoundingBox(BaseModel):
    model_config = ConfigDict(frozen=True)

    north: float = Field(ge=-90, le=90)
    south: float = Field(ge=-90, le=90)
    east: float = Field(ge=-180, le=180)
    west: float = Field(ge=-180, le=180)

    @model_validator(mode="after")
    def check_north_ge_south(self) -> "BoundingBox":
        if self.north < self.south:
            raise ValueError(f"north ({self.north}) must not be less than south ({self.south})")
        return self

    @model_validator(mode="after")
    def check_east_ge_west(self) -> "BoundingBox":
        if self.east < self.west:
            raise ValueError(f"east ({self.east}) must not be less than west ({self.west})")
        return self

    @property
    def lat_range(self) -> float:
        return self.north - self.south

    @property
    def lon_range(self) -> float:
        return self.east - self.west

    @property
    def center_lat(self) -> float:
        return (self.north + self.south) / 2

    @property
    def center_lon(self) -> float:
        return (self.east + self.west) / 2

    def union(self, other: "BoundingBox") -> "BoundingBox":
        """Smallest box enclosing both boxes."""
        return BoundingBox(
            north=max(self.north, other.north),
            south=min(self.south, other.south),
            east=max(self.east, other.east),
            west=min(self.west, other.west),
        )


class ElevationStats(BaseModel):
    model_config = ConfigDict(frozen=True)

    min: Optional[float] = None
    max: Optional[float] = None
    gain: float = Field(default=0.0, ge=0)
    loss: float = Field(default=0.0, ge=0)


class TimeSpan(BaseModel):
    model_config = ConfigDict(frozen=True)

    start: Optional[datetime] = None
    end: Optional[datetime] = None

    @property
    def duration(self) -> Optional[timedelta]:
        if self.start is None or self.end is None:
            return None
        return self.end - self.start


class Tour(BaseModel):
    """One parsed GPX document.

    ``parse_gpx`` leaves the derived fields at their empty defaults;
    ``compute_statistics`` returns a copy with them filled in.
    """
    model_config = ConfigDict(frozen=True)

    source_id: str
    name: str = ""
    description: str = ""
    tracks: list[Track] = Field(default_factory=list)
    routes: list[Route] = Field(default_factory=list)
    waypoints: list[Waypoint] = Field(default_factory=list)
    bounding_box: Optional[BoundingBox] = None
    total_distance_km: float = Field(default=0.0, ge=0)
    elevation: ElevationStats = Field(default_factory=ElevationStats)
    time: TimeSpan = Field(default_factory=TimeSpan)

    @property
    def point_count(self) -> int:
        return (
            sum(len(seg.points) for t in self.tracks for seg in t.segments)
            + sum(len(r.points) for r in self.routes)
        )


class TourFailure(BaseModel):
    model_config = ConfigDict(frozen=True)

    source_id: str
    reason: str


class BatchResult(BaseModel):
    """Outcome of loading several documents together."""
    tours: list[Tour] = Field(default_factory=list)
    failures: list[TourFailure] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures
