# annotations.py
# Callouts ("highest value here") drawn on top of a finished chart

from dataclasses import dataclass
from typing import Iterable

from sugar_story import config
from sugar_story.surface import Surface

GROUP = "annotation-group"
LINE_HEIGHT = 14


@dataclass(frozen=True)
class Callout:
    """Anchor in surface pixels; the note sits at anchor + (dx, dy)."""
    x: float
    y: float
    title: str
    label: str
    dx: float = 0
    dy: float = -40


def annotate(surface: Surface, callouts: Iterable[Callout]) -> None:
    for note in callouts:
        nx, ny = note.x + note.dx, note.y + note.dy
        surface.append("line", GROUP, {
            "x1": note.x, "y1": note.y, "x2": nx, "y2": ny,
            "stroke": config.STROKE, "stroke-width": 1,
        })
        anchor = "start" if note.dx > 0 else "end" if note.dx < 0 else "middle"
        lines = note.label.split("\n")
        # stack title and label lines upwards from the note point
        top = ny - LINE_HEIGHT * len(lines) - 4
        surface.append("text", GROUP, {
            "x": nx, "y": top, "text-anchor": anchor,
            "font-weight": "bold", "font-size": 12, "fill": "#222",
        }, text=note.title)
        for i, line in enumerate(lines):
            surface.append("text", GROUP, {
                "x": nx, "y": top + LINE_HEIGHT * (i + 1), "text-anchor": anchor,
                "font-size": 11, "fill": "#222",
            }, text=line)
