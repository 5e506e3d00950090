"""Tests for state://session MCP resource."""
import json


def test_state_resource_registered():
    from gpx_tours.server import mcp

    resources = {str(r.uri): r for r in mcp._resource_manager._resources.values()}
    assert "state://session" in resources, (
        f"state://session not registered. Registered: {list(resources.keys())}"
    )


def test_state_resource_content_matches_summary():
    """Resource content should return valid JSON with the summary keys."""
    from gpx_tours.server import mcp, session

    resources = {str(r.uri): r for r in mcp._resource_manager._resources.values()}
    resource = resources.get("state://session")
    assert resource is not None

    result = resource.fn()
    parsed = json.loads(result)
    assert parsed.keys() == session.summary().keys()
