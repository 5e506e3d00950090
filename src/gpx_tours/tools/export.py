"""Export tools: export_tour_gpx, export_geojson."""

import logging
import os
from pathlib import Path
from mcp.server.fastmcp import FastMCP

from ..config import require_home_outputs
from ..exporters.gpx import export_gpx as do_export_gpx
from ..exporters.geojson import export_geojson as do_export_geojson
from ..state import SessionState
from ._prereqs import require_tour

logger = logging.getLogger(__name__)


def _validate_output_path(output_path: str) -> None:
    """Raise ValueError if output_path resolves outside the user's home directory."""
    if not require_home_outputs():
        return
    resolved = Path(output_path).expanduser().resolve()
    home = Path.home().resolve()
    try:
        resolved.relative_to(home)
    except ValueError:
        raise ValueError(
            f"Output path {output_path!r} is outside the home directory. "
            "Use a path within your home directory."
        )


def register_export_tools(mcp: FastMCP, session: SessionState):

    @mcp.tool()
    def export_tour_gpx(source_id: str, output_path: str) -> str:
        """Export one loaded tour as a clean GPX 1.1 file.

        Points that were dropped while parsing are not written back.

        Args:
            source_id: File name the tour was loaded from.
            output_path: Where to save the .gpx file (absolute path)
        """
        try:
            tour = require_tour(session, source_id)
            _validate_output_path(output_path)
        except ValueError as e:
            return f"Error: {e}"

        os.makedirs(os.path.dirname(output_path) or ".", exist_ok=True)
        do_export_gpx(tour, output_path)
        logger.info("Exported %s to %s", source_id, output_path)
        return f"GPX exported to {output_path}"

    @mcp.tool()
    def export_geojson(output_path: str, visible_only: bool = True) -> str:
        """Export tours as a GeoJSON FeatureCollection for a web map overlay.

        Tracks are MultiLineStrings, routes dashed LineStrings and waypoints
        Points; every feature carries the tour color and popup statistics.

        Args:
            output_path: Where to save the .geojson file (absolute path)
            visible_only: Skip hidden tours (default True).
        """
        tours = session.visible_tours() if visible_only else session.tours
        if not tours:
            return "Error: No tours to export. Load GPX files first with load_gpx_files."

        try:
            _validate_output_path(output_path)
        except ValueError as e:
            return f"Error: {e}"

        os.makedirs(os.path.dirname(output_path) or ".", exist_ok=True)
        count = do_export_geojson(tours, session.colors, output_path)
        return f"GeoJSON exported to {output_path} ({len(tours)} tour(s), {count} features)"
