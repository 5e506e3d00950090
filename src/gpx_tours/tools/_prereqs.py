"""Prerequisite checking helpers for MCP tools."""


def require_tour(session, source_id: str):
    """Return the loaded tour for source_id or raise ValueError.

    Usage in a tool:
        try:
            tour = require_tour(session, source_id)
        except ValueError as e:
            return f"Error: {e}"
    """
    if not session.tours:
        raise ValueError("Load GPX files first with load_gpx_files.")
    tour = session.get_tour(source_id)
    if tour is None:
        known = ", ".join(t.source_id for t in session.tours)
        raise ValueError(f"No tour loaded from {source_id!r}. Loaded: {known}")
    return tour
