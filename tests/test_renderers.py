import pytest

from sugar_story import config
from sugar_story.colors import sugar_color
from sugar_story.filtering import build_controls
from sugar_story.renderers import (
    CategoryOverview,
    InteractiveExplore,
    RankedTop,
    category_averages,
    max_sugar_record,
    top_sugar,
)
from sugar_story.surface import PointerEvent

from conftest import make_record


def callout_texts(surface):
    return [s.text for s in surface.select("annotation-group", "text")]


# ------------------------------------------------------------
# Derived series
# ------------------------------------------------------------
def test_category_averages_scenario(scenario_dataset):
    avg = category_averages(scenario_dataset)
    assert avg["category"].tolist() == ["Classic"]
    assert avg["avg_sugar"].iloc[0] == pytest.approx(37.5)


def test_category_averages_sorted_with_stable_ties():
    dataset = (
        make_record("a", 10, category="Tea"),
        make_record("b", 30, category="Coffee"),
        make_record("c", 10, category="Juice"),
        make_record("d", 50, category="Coffee"),
    )
    avg = category_averages(dataset)
    assert avg["category"].tolist() == ["Coffee", "Tea", "Juice"]
    assert avg["avg_sugar"].tolist() == [40, 10, 10]


def test_top_sugar_picks_highest_without_touching_dataset(menu):
    before = list(menu)
    top = top_sugar(menu)

    assert len(top) == 10
    assert [r.sugar for r in top] == sorted((r.sugar for r in menu), reverse=True)[:10]
    # equal sugar keeps dataset order
    assert [r.beverage for r in top[:3]] == ["Java Chip", "Frappuccino", "Caramel Frappuccino"]
    assert list(menu) == before


def test_top_sugar_scenario(scenario_dataset):
    assert [(r.beverage, r.sugar) for r in top_sugar(scenario_dataset)] == [("A", 55), ("B", 20)]


def test_max_sugar_first_wins():
    dataset = (make_record("x", 5), make_record("y", 60), make_record("z", 60))
    assert max_sugar_record(dataset).beverage == "y"


# ------------------------------------------------------------
# Scene 0
# ------------------------------------------------------------
def test_category_overview_bars(surface, controls, tooltips, scenario_dataset):
    callout = CategoryOverview(surface, controls, tooltips).render(scenario_dataset)

    bars = surface.select("bars", "rect")
    assert len(bars) == 1
    bar = bars[0]
    assert bar.attrs["height"] == 0
    # y domain niced up to 40 over a 460px plot
    assert bar.final["height"] == pytest.approx(431.25)
    assert bar.final["fill"] == sugar_color(37.5)
    assert bar.settles_at == config.OVERVIEW_GROW_MS

    label = surface.select("bar-label")[0]
    assert label.text == "37.5g"
    assert label.attrs["opacity"] == 0
    assert label.transitions[0].delay == config.OVERVIEW_GROW_MS

    assert callout.title == "Sugariest Category"
    assert callout_texts(surface) == ["Sugariest Category", "Classic: 37.5g avg sugar"]
    assert surface.shapes[-1].group == "annotation-group"


def test_category_overview_orders_bars(surface, controls, tooltips, menu):
    CategoryOverview(surface, controls, tooltips).render(menu)
    names = [b.datum["category"] for b in surface.select("bars")]
    assert names[0] == "Frappuccino® Blended Coffee"
    assert names[-1] == "Coffee"
    heights = [b.final["height"] for b in surface.select("bars")]
    assert heights == sorted(heights, reverse=True)


# ------------------------------------------------------------
# Scene 1
# ------------------------------------------------------------
def test_ranked_top_bars_and_labels(surface, controls, tooltips, menu):
    RankedTop(surface, controls, tooltips).render(menu)

    bars = surface.select("bars")
    assert len(bars) == 10
    assert [b.transitions[0].delay for b in bars] == [i * 100 for i in range(10)]
    assert bars[0].final["width"] == pytest.approx(surface.width - 200)
    assert all(b.attrs["width"] == 0 for b in bars)

    labels = surface.select("bar-label")
    assert {l.transitions[0].delay for l in labels} == {1500 + 9 * 100}
    assert labels[0].text == "84g"

    assert callout_texts(surface) == ["Top Sugar Bomb", "Java Chip (Tall)", "84g sugar"]


def test_ranked_top_scenario(surface, controls, tooltips, scenario_dataset):
    callout = RankedTop(surface, controls, tooltips).render(scenario_dataset)
    assert [b.datum.beverage for b in surface.select("bars")] == ["A", "B"]
    assert callout.label == "A (Tall)\n55g sugar"


def test_ranked_top_title_and_exact_grams(surface, controls, tooltips):
    dataset = (make_record("Syrup Shot", 123.4567), make_record("Latte", 17))
    callout = RankedTop(surface, controls, tooltips).render(dataset)

    assert [s.text for s in surface.select("chart-title")] == ["Top 10 Sugar Bombs"]
    assert surface.select("bar-label")[0].text == "123.4567g"
    assert callout.label == "Syrup Shot (Tall)\n123.4567g sugar"


# ------------------------------------------------------------
# Scene 2
# ------------------------------------------------------------
def test_explore_points(surface, controls, tooltips, menu):
    callout = InteractiveExplore(surface, controls, tooltips).render(menu)

    points = surface.select("points")
    assert len(points) == len(menu)
    assert [p.datum for p in points] == list(menu)
    assert points[5].transitions[0].delay == 5 * config.POINT_STAGGER_MS
    assert all(p.final["r"] == 4 for p in points)
    assert points[0].final["fill"] == sugar_color(menu[0].sugar)

    assert [s.text for s in surface.select("legend", "text")] == [
        "< 30g (Lower)", "30–49g (Moderate)", "≥ 50g (High)",
    ]
    assert callout.label == "Java Chip (84g)"


def test_explore_scenario_annotates_a(surface, controls, tooltips, scenario_dataset):
    callout = InteractiveExplore(surface, controls, tooltips).render(scenario_dataset)
    assert callout_texts(surface) == ["Highest Sugar Drink", "A (55g)"]
    point_a = surface.select("points")[0]
    assert callout.x == point_a.attrs["cx"]
    assert callout.y == point_a.attrs["cy"]


def test_hover_shows_tooltip_and_restores_filter_style(surface, controls, tooltips, menu):
    build_controls(controls, 84)
    InteractiveExplore(surface, controls, tooltips).render(menu)
    controls.slider.set_value(50)

    latte = surface.select("points")[0]
    assert latte.final["r"] == 2 and latte.final["opacity"] == 0.05

    latte.dispatch("mouseover", PointerEvent(300, 200))
    assert latte.final["r"] == 8 and latte.final["opacity"] == 1
    assert "<strong>Latte</strong>" in tooltips.tooltip.html
    assert (tooltips.tooltip.left, tooltips.tooltip.top) == (310, 172)
    assert tooltips.tooltip.visible

    latte.dispatch("mouseout")
    assert latte.final["r"] == 2 and latte.final["opacity"] == 0.05
    assert not tooltips.tooltip.visible
