# renderers.py
# The three scene charts: category overview, top-10 sugar bombs, explore-everything scatter

from typing import List, Optional

import pandas as pd

from sugar_story import config
from sugar_story.annotations import Callout, annotate
from sugar_story.axes import axis_bottom, axis_label, axis_left, chart_title
from sugar_story.colors import LEGEND_ENTRIES, sugar_color
from sugar_story.filtering import FilterController
from sugar_story.records import BeverageRecord, Dataset, format_amount
from sugar_story.scales import BandScale, LinearScale
from sugar_story.surface import Controls, PointerEvent, Shape, Surface
from sugar_story.tooltip import TooltipManager


# ------------------------------------------------------------
# Derived series (pure; never touch the shared dataset)
# ------------------------------------------------------------
def category_averages(dataset: Dataset) -> pd.DataFrame:
    """Mean sugar per clean category, highest first; ties keep first-seen order."""
    df = pd.DataFrame({
        "category": [r.clean_category for r in dataset],
        "sugar": [r.sugar for r in dataset],
    })
    avg = (
        df.groupby("category", sort=False, as_index=False)["sugar"].mean()
        .rename(columns={"sugar": "avg_sugar"})
    )
    return avg.sort_values("avg_sugar", ascending=False, kind="mergesort").reset_index(drop=True)


def top_sugar(dataset: Dataset, n: int = config.TOP_N) -> List[BeverageRecord]:
    # sorted() copies and is stable, so equal sugar keeps dataset order
    return sorted(dataset, key=lambda r: r.sugar, reverse=True)[:n]


def max_sugar_record(dataset: Dataset) -> BeverageRecord:
    return max(dataset, key=lambda r: r.sugar)


# ------------------------------------------------------------
# Renderers
# ------------------------------------------------------------
class ChartRenderer:
    def __init__(self, surface: Surface, controls: Controls, tooltips: TooltipManager):
        self.surface = surface
        self.controls = controls
        self.tooltips = tooltips
        self.margin = config.MARGIN
        self.width = surface.width - self.margin["left"] - self.margin["right"]
        self.height = surface.height - self.margin["top"] - self.margin["bottom"]

    def render(self, dataset: Dataset) -> Callout:
        raise NotImplementedError


class CategoryOverview(ChartRenderer):
    title = "Average Sugar Content by Drink Category"

    def render(self, dataset: Dataset) -> Callout:
        m, surface = self.margin, self.surface
        avg = category_averages(dataset)
        rows = list(avg.itertuples(index=False))

        x = BandScale([r.category for r in rows], (0, self.width), padding=0.3)
        y = LinearScale((0, avg["avg_sugar"].max()), (self.height, 0)).nice()
        baseline = m["top"] + self.height

        chart_title(surface, self.title)

        for row in rows:
            surface.append("rect", "bars", {
                "x": m["left"] + x(row.category), "y": baseline,
                "width": x.bandwidth, "height": 0,
                "fill": sugar_color(row.avg_sugar), "stroke": config.STROKE, "stroke-width": 1,
            }, datum={"category": row.category, "avg_sugar": float(row.avg_sugar)}).transition(
                config.OVERVIEW_GROW_MS,
                y=m["top"] + y(row.avg_sugar),
                height=self.height - y(row.avg_sugar),
            )

        # labels wait for the bars
        for row in rows:
            surface.append("text", "bar-label", {
                "x": m["left"] + x.center(row.category), "y": m["top"] + y(row.avg_sugar) - 5,
                "text-anchor": "middle", "font-size": 11, "fill": "#222", "opacity": 0,
            }, text=f"{row.avg_sugar:.1f}g").transition(
                config.LABEL_FADE_MS, delay=config.OVERVIEW_GROW_MS, opacity=1,
            )

        axis_bottom(surface, x, m["left"], baseline, rotate_labels=True)
        axis_left(surface, y, m["left"], m["top"])
        axis_label(surface, "Average Sugar (grams)", 20, m["top"] + self.height / 2, vertical=True)

        top = rows[0]
        callout = Callout(
            x=m["left"] + x.center(top.category),
            y=m["top"] + y(top.avg_sugar),
            title="Sugariest Category",
            label=f"{top.category}: {top.avg_sugar:.1f}g avg sugar",
            dx=0, dy=-40,
        )
        annotate(surface, [callout])
        return callout


class RankedTop(ChartRenderer):
    title = f"Top {config.TOP_N} Sugar Bombs"

    def render(self, dataset: Dataset) -> Callout:
        m, surface = self.margin, self.surface
        top = top_sugar(dataset)

        x = LinearScale((0, max(r.sugar for r in top)), (0, self.width))
        y = BandScale([r.label for r in top], (0, self.height), padding=0.2)

        chart_title(surface, self.title)

        for i, record in enumerate(top):
            surface.append("rect", "bars", {
                "x": m["left"], "y": m["top"] + y(record.label),
                "width": 0, "height": y.bandwidth,
                "fill": sugar_color(record.sugar), "stroke": config.STROKE, "stroke-width": 1,
            }, datum=record).transition(
                config.RANKED_GROW_MS, delay=i * config.RANKED_STAGGER_MS, width=x(record.sugar),
            )

        # last bar starts (n-1) staggers late
        labels_at = config.RANKED_GROW_MS + (len(top) - 1) * config.RANKED_STAGGER_MS
        for record in top:
            surface.append("text", "bar-label", {
                "x": m["left"] + x(record.sugar) + 5, "y": m["top"] + y.center(record.label) + 4,
                "text-anchor": "start", "font-size": 11, "fill": "#222", "opacity": 0,
            }, text=f"{format_amount(record.sugar)}g").transition(
                config.LABEL_FADE_MS, delay=labels_at, opacity=1,
            )

        axis_left(surface, y, m["left"], m["top"], font_size=11)
        axis_bottom(surface, x, m["left"], m["top"] + self.height)
        axis_label(surface, "Sugar Content (grams)",
                   m["left"] + self.width / 2, m["top"] + self.height + m["bottom"] - 10)

        highest = top[0]
        callout = Callout(
            x=m["left"] + x(highest.sugar),
            y=m["top"] + y.center(highest.label),
            title="Top Sugar Bomb",
            label=f"{highest.label}\n{format_amount(highest.sugar)}g sugar",
            dx=30, dy=-30,
        )
        annotate(surface, [callout])
        return callout


class PointHover:
    """Hover behaviour for scatter points; restores the filter's style on leave."""

    def __init__(self, tooltips: TooltipManager, sugar_filter: FilterController):
        self.tooltips = tooltips
        self.sugar_filter = sugar_filter

    def enter(self, point: Shape, event: Optional[PointerEvent]) -> None:
        point.transition(config.HOVER_MS, r=8, opacity=1)
        if event is None:
            event = PointerEvent(point.attrs["cx"], point.attrs["cy"])
        self.tooltips.show(point.datum, event)

    def leave(self, point: Shape, event: Optional[PointerEvent]) -> None:
        point.transition(config.HOVER_MS, **self.sugar_filter.style_for(point.datum))
        self.tooltips.hide()


class InteractiveExplore(ChartRenderer):
    title = "Calories vs Sugar: Explore All Starbucks Drinks"

    def render(self, dataset: Dataset) -> Callout:
        m, surface = self.margin, self.surface

        x = LinearScale((0, max(r.calories for r in dataset)), (0, self.width))
        y = LinearScale((0, max(r.sugar for r in dataset)), (self.height, 0))

        chart_title(surface, self.title)

        sugar_filter = FilterController(self.controls)
        hover = PointHover(self.tooltips, sugar_filter)
        points = []
        for i, record in enumerate(dataset):
            point = surface.append("circle", "points", {
                "cx": m["left"] + x(record.calories), "cy": m["top"] + y(record.sugar), "r": 0,
                "fill": sugar_color(record.sugar), "stroke": config.STROKE,
                "stroke-width": 0.5, "opacity": 0.7,
            }, datum=record)
            point.on("mouseover", hover.enter).on("mouseout", hover.leave)
            point.transition(config.POINT_GROW_MS, delay=i * config.POINT_STAGGER_MS, r=4)
            points.append(point)

        axis_bottom(surface, x, m["left"], m["top"] + self.height)
        axis_left(surface, y, m["left"], m["top"])
        axis_label(surface, "Calories",
                   m["left"] + self.width / 2, m["top"] + self.height + m["bottom"] - 10)
        axis_label(surface, "Sugar (grams)", 20, m["top"] + self.height / 2, vertical=True)

        self._legend(surface.width - 160, 60)
        sugar_filter.bind(points)

        peak = max_sugar_record(dataset)
        callout = Callout(
            x=m["left"] + x(peak.calories),
            y=m["top"] + y(peak.sugar),
            title="Highest Sugar Drink",
            label=f"{peak.beverage} ({format_amount(peak.sugar)}g)",
            dx=40, dy=-40,
        )
        annotate(self.surface, [callout])
        return callout

    def _legend(self, left: float, top: float) -> None:
        for i, (label, color) in enumerate(LEGEND_ENTRIES):
            row = top + i * 20
            self.surface.append("rect", "legend", {
                "x": left, "y": row - 5, "width": 12, "height": 12, "fill": color,
            })
            self.surface.append("text", "legend", {
                "x": left + 18, "y": row + 5, "text-anchor": "start", "font-size": 12, "fill": "#222",
            }, text=label)
