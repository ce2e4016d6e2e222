import pandas as pd
import pytest

from sugar_story.records import BeverageRecord, clean_category
from sugar_story.surface import Controls, Surface
from sugar_story.tooltip import TooltipManager


def make_record(beverage, sugar, calories=100, category="Classic", prep="Tall"):
    return BeverageRecord(
        beverage=beverage,
        category=category,
        clean_category=clean_category(category),
        prep=prep,
        calories=calories,
        sugar=sugar,
    )


class FlakyFetch:
    """Async fetcher that fails a fixed number of times before returning the frame."""

    def __init__(self, frame, failures=0):
        self.frame = frame
        self.failures = failures
        self.attempts = 0

    async def __call__(self, source):
        self.attempts += 1
        if self.attempts <= self.failures:
            raise ConnectionError(f"network down (attempt {self.attempts})")
        return self.frame.copy()


@pytest.fixture
def scenario_frame():
    """The two-drink scenario: same category once with a trademark mark."""
    return pd.DataFrame({
        "Beverage": ["A", "B"],
        "Beverage_category": ["Classic™", "Classic"],
        "Beverage_prep": ["Tall", "Grande"],
        "Calories": [100, 150],
        " Sugars (g)": [55, 20],
    })


@pytest.fixture
def scenario_dataset():
    return (
        make_record("A", 55, calories=100, category="Classic™", prep="Tall"),
        make_record("B", 20, calories=150, category="Classic", prep="Grande"),
    )


@pytest.fixture
def menu():
    """A dozen drinks over three categories, with sugar ties."""
    rows = [
        ("Latte", "Classic Espresso Drinks", 17),
        ("Mocha", "Classic Espresso Drinks", 35),
        ("Frappuccino", "Frappuccino® Blended Coffee", 60),
        ("Caramel Frappuccino", "Frappuccino® Blended Coffee", 60),
        ("Java Chip", "Frappuccino® Blended Coffee", 84),
        ("Brewed Coffee", "Coffee", 0),
        ("Iced Tea", "Tazo® Tea Drinks", 10),
        ("Chai", "Tazo® Tea Drinks", 45),
        ("Green Tea Latte", "Tazo® Tea Drinks", 45),
        ("Hot Chocolate", "Signature Espresso Drinks", 40),
        ("White Mocha", "Signature Espresso Drinks", 52),
        ("Smoothie", "Smoothies", 32),
    ]
    return tuple(
        make_record(name, sugar, calories=100 + 10 * i, category=category)
        for i, (name, category, sugar) in enumerate(rows)
    )


@pytest.fixture
def surface():
    return Surface(960, 600)


@pytest.fixture
def controls():
    return Controls()


@pytest.fixture
def tooltips():
    return TooltipManager()
