# colors.py
# Traffic-light coloring for sugar grams, shared by every scene

from enum import Enum

from sugar_story import config


class Tier(Enum):
    LOWER = ("Lower", "#00704a")
    MODERATE = ("Moderate", "#f4c430")
    HIGH = ("High", "#c42e3c")

    def __init__(self, label: str, color: str):
        self.label = label
        self.color = color


def sugar_tier(grams: float) -> Tier:
    # descending thresholds, first match wins
    if grams >= config.HIGH_SUGAR:
        return Tier.HIGH
    if grams >= config.MODERATE_SUGAR:
        return Tier.MODERATE
    return Tier.LOWER


def sugar_color(grams: float) -> str:
    return sugar_tier(grams).color


# Legend rows: representative grams inside each tier
LEGEND_ENTRIES = [
    (f"< {config.MODERATE_SUGAR}g (Lower)", sugar_color(20)),
    (f"{config.MODERATE_SUGAR}–{config.HIGH_SUGAR - 1}g (Moderate)", sugar_color(40)),
    (f"≥ {config.HIGH_SUGAR}g (High)", sugar_color(60)),
]
