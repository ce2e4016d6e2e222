# render_matplotlib.py
# Static PNG of a settled surface (all animations finished)

from pathlib import Path

import matplotlib.pyplot as plt
from matplotlib.patches import Circle, Rectangle

from sugar_story.surface import Surface

DPI = 100
PX_TO_PT = 0.75
ALIGN = {"start": "left", "middle": "center", "end": "right"}


def surface_to_figure(surface: Surface) -> plt.Figure:
    fig = plt.figure(figsize=(surface.width / DPI, surface.height / DPI), dpi=DPI)
    ax = fig.add_axes([0, 0, 1, 1])
    ax.set_xlim(0, surface.width)
    ax.set_ylim(surface.height, 0)  # surface y grows downwards
    ax.axis("off")

    for z, shape in enumerate(surface.shapes):
        a = shape.final
        alpha = a.get("opacity", 1)
        if shape.kind == "rect":
            ax.add_patch(Rectangle(
                (a["x"], a["y"]), a["width"], a["height"],
                facecolor=a.get("fill", "#999"), edgecolor=a.get("stroke", "none"),
                linewidth=a.get("stroke-width", 0) * PX_TO_PT, alpha=alpha, zorder=z,
            ))
        elif shape.kind == "circle":
            ax.add_patch(Circle(
                (a["cx"], a["cy"]), a.get("r", 4),
                facecolor=a.get("fill", "#999"), edgecolor=a.get("stroke", "none"),
                linewidth=a.get("stroke-width", 0) * PX_TO_PT, alpha=alpha, zorder=z,
            ))
        elif shape.kind == "line":
            ax.plot([a["x1"], a["x2"]], [a["y1"], a["y2"]], color=a.get("stroke", "#333"),
                    linewidth=a.get("stroke-width", 1) * PX_TO_PT, alpha=alpha, zorder=z)
        elif shape.kind == "text":
            # SVG angles turn clockwise, matplotlib counter-clockwise
            ax.text(a["x"], a["y"], shape.text or "",
                    ha=ALIGN.get(a.get("text-anchor", "start"), "left"), va="baseline",
                    rotation=-a.get("angle", 0), rotation_mode="anchor",
                    fontsize=a.get("font-size", 11) * PX_TO_PT,
                    fontweight=a.get("font-weight", "normal"),
                    color=a.get("fill", "#222"), alpha=alpha, zorder=z)
    return fig


def save_png(surface: Surface, path, dpi: int = 200) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fig = surface_to_figure(surface)
    fig.savefig(path, dpi=dpi)
    plt.close(fig)
    return path
