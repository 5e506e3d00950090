"""Status tool and resource: get_status, state://session."""

import json
from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from ..state import SessionState


def register_status_tools(mcp: FastMCP, session: SessionState):

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))
    def get_status() -> str:
        """Return a summary of the loaded tours.

        Shows tour counts, total distance of the visible tours, the combined
        bounds and one row per tour with its color and visibility.
        """
        return json.dumps(session.summary(), indent=2)

    @mcp.resource("state://session")
    def session_state() -> str:
        """Current session summary as JSON."""
        return json.dumps(session.summary(), indent=2)
