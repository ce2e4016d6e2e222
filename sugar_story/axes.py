# axes.py
# Chart furniture: title, axes with ticks, axis labels

from typing import List, Tuple, Union

from sugar_story import config
from sugar_story.scales import BandScale, LinearScale
from sugar_story.surface import Surface

TICK = 6

Scale = Union[BandScale, LinearScale]


def _ticks(scale: Scale) -> List[Tuple[float, str]]:
    if isinstance(scale, BandScale):
        return [(scale.center(key), key) for key in scale.domain]
    return [(scale(v), f"{v:g}") for v in scale.ticks()]


def chart_title(surface: Surface, text: str) -> None:
    surface.append("text", "chart-title", {
        "x": surface.width / 2, "y": 30, "text-anchor": "middle",
        "font-size": 18, "font-weight": "bold", "fill": "#222",
    }, text=text)


def axis_bottom(surface: Surface, scale: Scale, left: float, baseline: float,
                rotate_labels: bool = False) -> None:
    r0, r1 = scale.range
    surface.append("line", "axis", {
        "x1": left + r0, "y1": baseline, "x2": left + r1, "y2": baseline, "stroke": config.STROKE,
    })
    for pos, label in _ticks(scale):
        x = left + pos
        surface.append("line", "axis", {
            "x1": x, "y1": baseline, "x2": x, "y2": baseline + TICK, "stroke": config.STROKE,
        })
        attrs = {"x": x, "y": baseline + TICK + 12, "font-size": 10, "fill": "#222"}
        if rotate_labels:
            attrs.update({"text-anchor": "end", "angle": -45})
        else:
            attrs["text-anchor"] = "middle"
        surface.append("text", "axis", attrs, text=label)


def axis_left(surface: Surface, scale: Scale, left: float, top: float, font_size: int = 10) -> None:
    r0, r1 = scale.range
    surface.append("line", "axis", {
        "x1": left, "y1": top + r0, "x2": left, "y2": top + r1, "stroke": config.STROKE,
    })
    for pos, label in _ticks(scale):
        y = top + pos
        surface.append("line", "axis", {
            "x1": left - TICK, "y1": y, "x2": left, "y2": y, "stroke": config.STROKE,
        })
        surface.append("text", "axis", {
            "x": left - TICK - 3, "y": y + 3, "text-anchor": "end",
            "font-size": font_size, "fill": "#222",
        }, text=label)


def axis_label(surface: Surface, text: str, x: float, y: float, vertical: bool = False) -> None:
    attrs = {"x": x, "y": y, "text-anchor": "middle", "font-size": 12, "fill": "#222"}
    if vertical:
        attrs["angle"] = -90
    surface.append("text", "axis-label", attrs, text=text)
