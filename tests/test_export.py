import asyncio

import pytest

from sugar_story.cli import main
from sugar_story.app import SugarStory
from sugar_story.render_altair import save_html, surface_to_chart
from sugar_story.render_matplotlib import save_png

from conftest import FlakyFetch


@pytest.fixture
def story(scenario_frame):
    story = SugarStory(fetch=FlakyFetch(scenario_frame), retry_delay=0)
    asyncio.run(story.start())
    return story


def all_params(spec):
    # layered charts may keep parameters at the top or on a layer
    found = list(spec.get("params", []))
    for layer in spec.get("layer", []):
        found.extend(layer.get("params", []))
    return found


def test_overview_chart_has_no_params(story):
    spec = surface_to_chart(story.surface, story.controls, story.narrative.text).to_dict()
    assert all_params(spec) == []
    assert spec["width"] == story.surface.width
    assert spec["title"]["text"] == story.narrative.text
    marks = {layer["mark"]["type"] for layer in spec["layer"]}
    assert {"rect", "rule", "text"} <= marks


def test_explore_chart_binds_sugar_slider(story):
    story.select_scene(2)
    spec = surface_to_chart(story.surface, story.controls).to_dict()

    param = all_params(spec)[0]
    assert param["name"] == "min_sugar"
    assert param["bind"]["input"] == "range"
    assert param["bind"]["max"] == 55

    circles = [layer for layer in spec["layer"] if layer["mark"]["type"] == "circle"]
    assert len(circles) == 1
    encoding = circles[0]["encoding"]
    assert "min_sugar" in encoding["opacity"]["condition"]["test"]
    assert [t["field"] for t in encoding["tooltip"]] == ["beverage", "prep", "category", "calories", "sugar"]


def test_empty_surface_refuses_export(surface):
    with pytest.raises(ValueError):
        surface_to_chart(surface)


def test_save_html_and_png(story, tmp_path):
    html = save_html(surface_to_chart(story.surface), tmp_path / "out" / "scene.html")
    png = save_png(story.surface, tmp_path / "out" / "scene.png")
    assert "vegaEmbed" in html.read_text()
    assert png.stat().st_size > 0


def test_cli_writes_every_scene(tmp_path, scenario_frame):
    data = tmp_path / "drinks.csv"
    scenario_frame.to_csv(data, index=False)
    out = tmp_path / "out"

    assert main(["--data", str(data), "--out-dir", str(out), "--png"]) == 0
    for i in range(3):
        assert (out / f"scene_{i}.html").exists()
        assert (out / f"scene_{i}.png").exists()


def test_cli_reports_missing_data(tmp_path, capsys):
    assert main(["--data", str(tmp_path / "nope.csv"), "--out-dir", str(tmp_path)]) == 1
    assert "ERROR" in capsys.readouterr().out
