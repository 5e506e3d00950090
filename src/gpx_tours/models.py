"""Pydantic domain models for parsed GPX geometry."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Point(BaseModel):
    model_config = ConfigDict(frozen=True)

    latitude: float = Field(ge=-90, le=90, allow_inf_nan=False)
    longitude: float = Field(ge=-180, le=180, allow_inf_nan=False)
    elevation: Optional[float] = None
    timestamp: Optional[datetime] = None


class RoutePoint(Point):
    name: str = ""


class Segment(BaseModel):
    model_config = ConfigDict(frozen=True)

    points: list[Point] = Field(min_length=1)


class Track(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = ""
    segments: list[Segment] = Field(min_length=1)

    @property
    def points(self) -> list[Point]:
        return [p for seg in self.segments for p in seg.points]


class Route(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = ""
    points: list[RoutePoint] = Field(min_length=1)


class Waypoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    latitude: float = Field(ge=-90, le=90, allow_inf_nan=False)
    longitude: float = Field(ge=-180, le=180, allow_inf_nan=False)
    elevation: Optional[float] = None
    name: str = ""
    description: str = ""
