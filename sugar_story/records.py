# records.py
# One drink from the menu, as the scenes see it

from dataclasses import dataclass
from typing import Optional, Tuple

from sugar_story import config


def clean_category(raw: Optional[str]) -> str:
    """Strip decorative marks and whitespace; absent or blank becomes "Other"."""
    if raw is None or not isinstance(raw, str):
        return config.DEFAULT_CATEGORY
    cleaned = raw
    for mark in config.CATEGORY_MARKS:
        cleaned = cleaned.replace(mark, "")
    cleaned = cleaned.strip()
    return cleaned or config.DEFAULT_CATEGORY


def format_amount(value: float) -> str:
    """Exact decimal text for a menu amount; whole numbers lose the trailing .0."""
    value = float(value)
    return str(int(value)) if value.is_integer() else repr(value)


@dataclass(frozen=True)
class BeverageRecord:
    beverage: str
    category: str
    clean_category: str
    prep: str
    calories: float
    sugar: float

    @property
    def label(self) -> str:
        return f"{self.beverage} ({self.prep})"


Dataset = Tuple[BeverageRecord, ...]
