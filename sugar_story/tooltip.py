# tooltip.py
# The one hover tooltip of the page. Created at start-up, reused by every scene.

from typing import List, Optional

from sugar_story import config
from sugar_story.records import BeverageRecord, format_amount
from sugar_story.surface import PointerEvent, Transition

OFFSET_X = 10
OFFSET_Y = -28


class Tooltip:
    def __init__(self):
        self.html = ""
        self.left = 0.0
        self.top = 0.0
        self.opacity = 0.0
        self.transitions: List[Transition] = []

    @property
    def visible(self) -> bool:
        return (self.transitions[-1].attrs["opacity"] if self.transitions else self.opacity) > 0

    def fade(self, opacity: float, duration: int) -> None:
        # a new fade replaces the one in flight
        self.transitions = [Transition({"opacity": opacity}, duration)]


def tooltip_html(record: BeverageRecord) -> str:
    return (
        f"<strong>{record.beverage}</strong><br/>"
        f"{record.prep}<br/>"
        f"<em>{record.clean_category}</em><br/>"
        f"Calories: {format_amount(record.calories)}<br/>"
        f"Sugar: {format_amount(record.sugar)}g"
    )


class TooltipManager:
    def __init__(self, tooltip: Optional[Tooltip] = None):
        self.tooltip = tooltip or Tooltip()

    def show(self, record: BeverageRecord, event: PointerEvent) -> None:
        tip = self.tooltip
        tip.fade(1.0, config.TOOLTIP_IN_MS)
        # content and position change together
        tip.html, tip.left, tip.top = (
            tooltip_html(record), event.page_x + OFFSET_X, event.page_y + OFFSET_Y
        )

    def hide(self) -> None:
        self.tooltip.fade(0.0, config.TOOLTIP_OUT_MS)
