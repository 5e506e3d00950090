"""Tests for the tour and export MCP tools."""
import json

import pytest
from unittest.mock import MagicMock


GOOD = """<gpx><metadata><name>Evening Run</name></metadata><trk><trkseg>
  <trkpt lat="52.50" lon="13.40"><ele>34</ele><time>2024-03-01T18:00:00Z</time></trkpt>
  <trkpt lat="52.51" lon="13.41"><ele>40</ele><time>2024-03-01T18:40:00Z</time></trkpt>
</trkseg></trk></gpx>"""


def _get_tools(session):
    from gpx_tours.tools.tours import register_tour_tools
    from gpx_tours.tools.export import register_export_tools
    tools = {}
    mock_mcp = MagicMock()
    def capture(**kwargs):
        def decorator(fn):
            tools[fn.__name__] = fn
            return fn
        return decorator
    mock_mcp.tool = capture
    register_tour_tools(mock_mcp, session)
    register_export_tools(mock_mcp, session)
    return tools


@pytest.fixture
def session():
    from gpx_tours.state import SessionState
    return SessionState(palette=("#AA0000", "#00AA00"))


@pytest.fixture
def gpx_files(tmp_path):
    good = tmp_path / "run.gpx"
    good.write_text(GOOD)
    broken = tmp_path / "broken.gpx"
    broken.write_text("<gpx><trk>")
    return good, broken


@pytest.mark.anyio
async def test_load_reports_successes_and_failures(session, gpx_files):
    tools = _get_tools(session)
    good, broken = gpx_files
    result = await tools["load_gpx_files"](file_paths=[str(good), str(broken)])
    assert "Loaded 1 tour(s)" in result
    assert "Evening Run" in result
    assert "Failed to parse 1 file(s)" in result
    assert "broken.gpx" in result
    assert [t.source_id for t in session.tours] == ["run.gpx"]
    assert session.colors["run.gpx"] == "#AA0000"


@pytest.mark.anyio
async def test_load_with_no_files(session):
    tools = _get_tools(session)
    result = await tools["load_gpx_files"](file_paths=[])
    assert result.startswith("Error:")


@pytest.mark.anyio
async def test_load_same_file_name_twice_counts_once(session, tmp_path):
    tools = _get_tools(session)
    first = tmp_path / "a" / "run.gpx"
    second = tmp_path / "b" / "run.gpx"
    first.parent.mkdir()
    second.parent.mkdir()
    first.write_text(GOOD)
    second.write_text(GOOD.replace("Evening Run", "Second Run"))
    result = await tools["load_gpx_files"](file_paths=[str(first), str(second)])
    assert "Loaded 1 tour(s)" in result
    assert "Replaced previously loaded: run.gpx" in result
    assert len(session.tours) == 1
    assert session.tours[0].name == "Second Run"


@pytest.mark.anyio
async def test_reload_reports_replacement(session, gpx_files):
    tools = _get_tools(session)
    first = await tools["load_gpx_files"](file_paths=[str(gpx_files[0])])
    assert "Replaced" not in first
    result = await tools["load_gpx_files"](file_paths=[str(gpx_files[0])])
    assert "Loaded 1 tour(s)" in result
    assert "Replaced previously loaded: run.gpx" in result
    assert session.colors["run.gpx"] == "#AA0000"


@pytest.mark.anyio
async def test_get_tour_returns_statistics(session, gpx_files):
    tools = _get_tools(session)
    await tools["load_gpx_files"](file_paths=[str(gpx_files[0])])
    data = json.loads(tools["get_tour"](source_id="run.gpx"))
    assert data["name"] == "Evening Run"
    assert data["elevation"]["gain"] == pytest.approx(6.0)
    assert data["elevation"]["range"] == "34m - 40m"
    assert data["time"]["duration"] == "40m"
    assert data["time"]["duration_s"] == 2400
    assert data["bounds"]["north"] == pytest.approx(52.51)
    assert data["distance_km"] > 0


def test_get_tour_without_tours(session):
    tools = _get_tools(session)
    assert tools["get_tour"](source_id="x.gpx").startswith("Error:")


@pytest.mark.anyio
async def test_list_and_toggle(session, gpx_files):
    tools = _get_tools(session)
    assert tools["list_tours"]() == "No tours loaded."
    await tools["load_gpx_files"](file_paths=[str(gpx_files[0])])
    rows = json.loads(tools["list_tours"]())
    assert rows[0]["visible"] is True
    result = tools["set_tour_visibility"](source_id="run.gpx", visible=False)
    assert "hidden" in result
    assert "Active tours: 0" in result
    assert json.loads(tools["list_tours"]())[0]["visible"] is False


@pytest.mark.anyio
async def test_toggle_unknown_tour(session, gpx_files):
    tools = _get_tools(session)
    await tools["load_gpx_files"](file_paths=[str(gpx_files[0])])
    result = tools["set_tour_visibility"](source_id="other.gpx", visible=False)
    assert result.startswith("Error:")
    assert "run.gpx" in result


@pytest.mark.anyio
async def test_remove_and_clear(session, gpx_files):
    tools = _get_tools(session)
    await tools["load_gpx_files"](file_paths=[str(gpx_files[0])])
    assert "Removed run.gpx" in tools["remove_tour"](source_id="run.gpx")
    assert session.tours == []
    await tools["load_gpx_files"](file_paths=[str(gpx_files[0])])
    assert tools["clear_tours"]() == "Cleared 1 tour(s)."


@pytest.mark.anyio
async def test_export_tools_write_files(session, gpx_files, tmp_path, monkeypatch):
    from pathlib import Path
    monkeypatch.setattr(Path, "home", lambda: tmp_path)
    tools = _get_tools(session)
    await tools["load_gpx_files"](file_paths=[str(gpx_files[0])])

    gpx_out = tmp_path / "exports" / "run.gpx"
    assert "GPX exported" in tools["export_tour_gpx"](source_id="run.gpx", output_path=str(gpx_out))
    assert gpx_out.exists()

    geo_out = tmp_path / "exports" / "tours.geojson"
    result = tools["export_geojson"](output_path=str(geo_out))
    assert "1 tour(s)" in result
    assert json.loads(geo_out.read_text())["type"] == "FeatureCollection"


@pytest.mark.anyio
async def test_export_outside_home_rejected(session, gpx_files, tmp_path, monkeypatch):
    from pathlib import Path
    monkeypatch.setattr(Path, "home", lambda: tmp_path / "home")
    monkeypatch.delenv("GPX_TOURS_RESTRICT_EXPORTS", raising=False)
    tools = _get_tools(session)
    await tools["load_gpx_files"](file_paths=[str(gpx_files[0])])
    result = tools["export_geojson"](output_path=str(tmp_path / "elsewhere.geojson"))
    assert result.startswith("Error:")
    assert "outside the home directory" in result


def test_export_geojson_with_nothing_visible(session):
    tools = _get_tools(session)
    assert tools["export_geojson"](output_path="/tmp/x.geojson").startswith("Error:")
