# render_altair.py
# Export a settled surface as an Altair (Vega-Lite) chart and save it as HTML.
# Every encoding is in surface pixels (scale=None), so the layout matches what
# the scene computed. The sugar slider, when present, becomes a bound Vega-Lite
# parameter so the saved page keeps the filter.

import math
from pathlib import Path
from typing import List, Optional

import altair as alt
import pandas as pd

from sugar_story import config
from sugar_story.filtering import DIMMED, EMPHASIZED
from sugar_story.records import BeverageRecord
from sugar_story.surface import Controls, Slider, Surface

ANCHORS = {"start": "left", "middle": "center", "end": "right"}


def _px(field: str, channel=alt.X):
    if channel in (alt.X, alt.Y):
        return channel(f"{field}:Q", scale=None, axis=None)
    return channel(f"{field}:Q", scale=None)


def _area(r: float) -> float:
    return math.pi * r * r


def _rect_layer(shapes) -> alt.Chart:
    rows = []
    for s in shapes:
        a = s.final
        rows.append({
            "x": a["x"], "x2": a["x"] + a["width"], "y": a["y"], "y2": a["y"] + a["height"],
            "fill": a.get("fill", "#999"), "stroke": a.get("stroke", "transparent"),
            "stroke_width": a.get("stroke-width", 0), "opacity": a.get("opacity", 1),
        })
    return alt.Chart(pd.DataFrame(rows)).mark_rect().encode(
        x=_px("x"), x2=alt.X2("x2:Q"), y=_px("y", alt.Y), y2=alt.Y2("y2:Q"),
        color=alt.Color("fill:N", scale=None),
        stroke=alt.Stroke("stroke:N", scale=None),
        strokeWidth=_px("stroke_width", alt.StrokeWidth),
        opacity=_px("opacity", alt.Opacity),
    )


def _rule_layer(shapes) -> alt.Chart:
    rows = [
        {"x": a["x1"], "y": a["y1"], "x2": a["x2"], "y2": a["y2"], "stroke": a.get("stroke", config.STROKE)}
        for a in (s.final for s in shapes)
    ]
    return alt.Chart(pd.DataFrame(rows)).mark_rule(strokeWidth=1).encode(
        x=_px("x"), x2=alt.X2("x2:Q"), y=_px("y", alt.Y), y2=alt.Y2("y2:Q"),
        color=alt.Color("stroke:N", scale=None),
    )


def sugar_param(slider: Slider) -> alt.Parameter:
    return alt.param(
        name="min_sugar",
        value=slider.value,
        bind=alt.binding_range(
            min=slider.minimum, max=slider.maximum, step=slider.step,
            name="Minimum sugar (g): ",
        ),
    )


def _circle_layer(shapes, min_sugar: Optional[alt.Parameter]) -> alt.Chart:
    rows = []
    for s in shapes:
        a = s.final
        row = {
            "x": a["cx"], "y": a["cy"], "size": _area(a.get("r", 4)),
            "fill": a.get("fill", "#999"), "opacity": a.get("opacity", 1),
        }
        if isinstance(s.datum, BeverageRecord):
            row.update({
                "beverage": s.datum.beverage, "prep": s.datum.prep,
                "category": s.datum.clean_category,
                "calories": s.datum.calories, "sugar": s.datum.sugar,
            })
        rows.append(row)
    df = pd.DataFrame(rows)
    has_records = "sugar" in df.columns

    encoding = {
        "x": _px("x"), "y": _px("y", alt.Y),
        "color": alt.Color("fill:N", scale=None),
        "size": _px("size", alt.Size),
        "opacity": _px("opacity", alt.Opacity),
    }
    if has_records:
        encoding["tooltip"] = [
            alt.Tooltip("beverage:N", title="Beverage"),
            alt.Tooltip("prep:N", title="Prep"),
            alt.Tooltip("category:N", title="Category"),
            alt.Tooltip("calories:Q", title="Calories"),
            alt.Tooltip("sugar:Q", title="Sugar (g)"),
        ]
    chart = alt.Chart(df).mark_circle(stroke=config.STROKE, strokeWidth=0.5)

    if min_sugar is not None and has_records:
        emphasized = alt.datum.sugar >= min_sugar
        encoding["opacity"] = alt.condition(
            emphasized, alt.value(EMPHASIZED["opacity"]), alt.value(DIMMED["opacity"])
        )
        encoding["size"] = alt.condition(
            emphasized, alt.value(_area(EMPHASIZED["r"])), alt.value(_area(DIMMED["r"]))
        )
    return chart.encode(**encoding)


def _text_layers(shapes) -> List[alt.Chart]:
    rows = []
    for s in shapes:
        a = s.final
        rows.append({
            "x": a["x"], "y": a["y"], "text": s.text or "",
            "anchor": a.get("text-anchor", "start"),
            "font_size": a.get("font-size", 11),
            "weight": a.get("font-weight", "normal"),
            "fill": a.get("fill", "#222"),
            "opacity": a.get("opacity", 1),
            "angle": a.get("angle", 0) % 360,
        })
    df = pd.DataFrame(rows)
    layers = []
    # align/size/weight are mark properties, so one layer per combination
    for (anchor, size, weight), part in df.groupby(["anchor", "font_size", "weight"], sort=False):
        layers.append(
            alt.Chart(part).mark_text(
                font=config.NATURE_SANS, align=ANCHORS.get(anchor, "left"),
                baseline="alphabetic", fontSize=float(size), fontWeight=weight,
            ).encode(
                x=_px("x"), y=_px("y", alt.Y), text="text:N",
                color=alt.Color("fill:N", scale=None),
                opacity=_px("opacity", alt.Opacity),
                angle=_px("angle", alt.Angle),
            )
        )
    return layers


def surface_to_chart(surface: Surface, controls: Optional[Controls] = None,
                     narrative: Optional[str] = None) -> alt.LayerChart:
    if not surface.shapes:
        raise ValueError("Nothing to export: the surface is empty")
    alt.data_transformers.disable_max_rows()

    slider = controls.slider if controls is not None else None
    min_sugar = sugar_param(slider) if slider is not None else None
    layers = []
    # keep the surface's stacking: walk shapes in order, one layer per run of a kind
    run, kind = [], None
    for shape in surface.shapes + [None]:
        if shape is not None and shape.kind == kind:
            run.append(shape)
            continue
        if run:
            if kind == "rect":
                layers.append(_rect_layer(run))
            elif kind == "line":
                layers.append(_rule_layer(run))
            elif kind == "circle":
                layers.append(_circle_layer(run, min_sugar))
            elif kind == "text":
                layers.extend(_text_layers(run))
        if shape is not None:
            run, kind = [shape], shape.kind

    chart = alt.layer(*layers).properties(width=surface.width, height=surface.height)
    if min_sugar is not None:
        chart = chart.add_params(min_sugar)
    if narrative:
        chart = chart.properties(title=alt.TitleParams(
            text=narrative, anchor="start", fontSize=13, color="gray", font=config.NATURE_SANS,
        ))
    return chart.configure_view(stroke=None)


def save_html(chart: alt.TopLevelMixin, path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    chart.save(str(path))
    return path
