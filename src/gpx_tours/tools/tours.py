"""Tour tools: load_gpx_files, list_tours, get_tour, set_tour_visibility, remove_tour, clear_tours."""

import json
import logging

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from ..config import get_max_workers
from ..core.batch import load_tours, read_documents
from ..core.formatting import format_distance, format_duration, format_elevation_range
from ..core.models import Tour
from ..state import SessionState
from ._prereqs import require_tour

logger = logging.getLogger(__name__)


def _tour_details(session: SessionState, tour: Tour) -> dict:
    b = tour.bounding_box
    return {
        **session.tour_row(tour),
        "description": tour.description,
        "tracks": len(tour.tracks),
        "routes": len(tour.routes),
        "waypoints": len(tour.waypoints),
        "points": tour.point_count,
        "distance_km": round(tour.total_distance_km, 3),
        "distance": format_distance(tour.total_distance_km),
        "elevation": {
            "min": tour.elevation.min,
            "max": tour.elevation.max,
            "gain": round(tour.elevation.gain, 1),
            "loss": round(tour.elevation.loss, 1),
            "range": format_elevation_range(tour.elevation) or None,
        },
        "time": {
            "start": tour.time.start.isoformat() if tour.time.start else None,
            "end": tour.time.end.isoformat() if tour.time.end else None,
            "duration_s": tour.time.duration.total_seconds() if tour.time.duration else None,
            "duration": format_duration(tour.time.duration) or None,
        },
        "bounds": b.model_dump() if b else None,
    }


def register_tour_tools(mcp: FastMCP, session: SessionState):

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False))
    async def load_gpx_files(file_paths: list[str]) -> str:
        """Load one or more GPX files and compute their trip statistics.

        Each file is parsed independently: a broken file is reported by name
        and does not stop the others from loading. Loading a file whose name
        is already loaded replaces that tour.
        **Next:** list_tours or get_tour to inspect results, export_geojson to draw them.

        Args:
            file_paths: Absolute paths to .gpx files.
        """
        if not file_paths:
            return "Error: No GPX files selected. Please select files with .gpx extension."

        documents, failures = read_documents(file_paths)
        result = await load_tours(documents, max_workers=get_max_workers())
        failures = failures + result.failures

        # Files sharing a name share a source id; the last one read is kept
        loaded = {}
        replaced = []
        for tour in result.tours:
            if (tour.source_id in loaded or session.get_tour(tour.source_id) is not None) \
                    and tour.source_id not in replaced:
                replaced.append(tour.source_id)
            loaded[tour.source_id] = tour
            session.add_tour(tour)

        lines = []
        if loaded:
            lines.append(f"Loaded {len(loaded)} tour(s):")
            lines.extend(f"  {t.name} ({t.source_id}): {session.tour_row(t)['summary']}" for t in loaded.values())
        if replaced:
            lines.append(f"Replaced previously loaded: {', '.join(replaced)}")
        if failures:
            lines.append(f"Failed to parse {len(failures)} file(s):")
            lines.extend(f"  {f.source_id}: {f.reason}" for f in failures)
        return "\n".join(lines)

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))
    def list_tours() -> str:
        """List loaded tours with color, visibility and a one-line summary."""
        if not session.tours:
            return "No tours loaded."
        return json.dumps([session.tour_row(t) for t in session.tours], indent=2)

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))
    def get_tour(source_id: str) -> str:
        """Return full statistics for one tour.

        Args:
            source_id: File name the tour was loaded from (as shown by list_tours).
        """
        try:
            tour = require_tour(session, source_id)
        except ValueError as e:
            return f"Error: {e}"
        return json.dumps(_tour_details(session, tour), indent=2)

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False))
    def set_tour_visibility(source_id: str, visible: bool = True) -> str:
        """Show or hide a tour. Hidden tours are left out of totals and exports.

        Args:
            source_id: File name the tour was loaded from.
            visible: True to show, False to hide.
        """
        try:
            require_tour(session, source_id)
        except ValueError as e:
            return f"Error: {e}"
        session.set_visible(source_id, visible)
        return (
            f"{source_id} is now {'visible' if visible else 'hidden'}. "
            f"Active tours: {len(session.visible_tours())}, "
            f"total distance: {format_distance(session.total_visible_distance_km())}"
        )

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=True))
    def remove_tour(source_id: str) -> str:
        """Remove one tour from the session.

        Args:
            source_id: File name the tour was loaded from.
        """
        try:
            require_tour(session, source_id)
        except ValueError as e:
            return f"Error: {e}"
        session.remove_tour(source_id)
        logger.info("Removed tour %s", source_id)
        return f"Removed {source_id}. {len(session.tours)} tour(s) remain."

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=True))
    def clear_tours() -> str:
        """Remove all tours and reset color assignment."""
        count = len(session.tours)
        session.clear()
        return f"Cleared {count} tour(s)."
