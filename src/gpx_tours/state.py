"""Session state for the gpx-tours MCP server.

Holds the tours loaded so far plus the UI-only metadata attached to them:
display color and visibility, both keyed by source id. One instance is
created by the server and handed to every tool group.
"""

from typing import Optional

from pydantic import BaseModel, Field

from gpx_tours.config import get_palette
from gpx_tours.core.formatting import format_distance, tour_summary_line
from gpx_tours.core.models import BoundingBox, Tour


class SessionState(BaseModel):
    tours: list[Tour] = []
    colors: dict[str, str] = {}
    visible: dict[str, bool] = {}
    palette: tuple[str, ...] = Field(default_factory=get_palette, min_length=1)
    color_index: int = Field(default=0, ge=0)

    def _next_color(self) -> str:
        color = self.palette[self.color_index % len(self.palette)]
        self.color_index += 1
        return color

    def add_tour(self, tour: Tour) -> str:
        """Add a tour and return its color.

        A tour whose source id is already loaded replaces the old one in place
        and keeps its color.
        """
        for i, existing in enumerate(self.tours):
            if existing.source_id == tour.source_id:
                self.tours[i] = tour
                self.visible[tour.source_id] = True
                return self.colors[tour.source_id]

        color = self._next_color()
        self.tours.append(tour)
        self.colors[tour.source_id] = color
        self.visible[tour.source_id] = True
        return color

    def get_tour(self, source_id: str) -> Optional[Tour]:
        return next((t for t in self.tours if t.source_id == source_id), None)

    def remove_tour(self, source_id: str) -> bool:
        tour = self.get_tour(source_id)
        if tour is None:
            return False
        self.tours.remove(tour)
        self.colors.pop(source_id, None)
        self.visible.pop(source_id, None)
        return True

    def clear(self) -> None:
        self.tours = []
        self.colors = {}
        self.visible = {}
        self.color_index = 0

    def set_visible(self, source_id: str, visible: bool) -> bool:
        if self.get_tour(source_id) is None:
            return False
        self.visible[source_id] = visible
        return True

    def is_visible(self, source_id: str) -> bool:
        return self.visible.get(source_id, False)

    def visible_tours(self) -> list[Tour]:
        return [t for t in self.tours if self.is_visible(t.source_id)]

    def total_visible_distance_km(self) -> float:
        return sum(t.total_distance_km for t in self.visible_tours())

    def combined_bounds(self, visible_only: bool = False) -> Optional[BoundingBox]:
        """Box enclosing every tour that has bounds, or None."""
        tours = self.visible_tours() if visible_only else self.tours
        combined = None
        for tour in tours:
            if tour.bounding_box is None:
                continue
            combined = tour.bounding_box if combined is None else combined.union(tour.bounding_box)
        return combined

    def tour_row(self, tour: Tour) -> dict:
        return {
            "source_id": tour.source_id,
            "name": tour.name,
            "color": self.colors.get(tour.source_id),
            "visible": self.is_visible(tour.source_id),
            "summary": tour_summary_line(tour),
        }

    def summary(self) -> dict:
        bounds = self.combined_bounds()
        return {
            "total_tours": len(self.tours),
            "active_tours": len(self.visible_tours()),
            "total_distance": format_distance(self.total_visible_distance_km()),
            "bounds": bounds.model_dump() if bounds else None,
            "tours": [self.tour_row(t) for t in self.tours],
        }
