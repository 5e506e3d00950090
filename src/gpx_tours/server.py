"""MCP server for gpx-tours.

Registers all tools against one session and runs via stdio transport.
"""

import logging
import sys

from mcp.server.fastmcp import FastMCP

from .config import get_log_level
from .state import SessionState
from .tools.tours import register_tour_tools
from .tools.export import register_export_tools
from .tools.status import register_status_tools

mcp = FastMCP(
    "gpx-tours",
    instructions="Load GPX files and report trip statistics: distance, elevation, duration and bounds",
)

session = SessionState()

# Register all tool groups
register_tour_tools(mcp, session)
register_export_tools(mcp, session)
register_status_tools(mcp, session)


def main():
    # stdout carries the MCP transport
    logging.basicConfig(
        stream=sys.stderr,
        level=get_log_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
