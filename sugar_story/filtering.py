# filtering.py
# "Minimum sugar" slider: dims the points below the threshold, never removes them

import logging
from typing import Dict, List, Optional

from sugar_story import config
from sugar_story.records import BeverageRecord, format_amount
from sugar_story.surface import Controls, Shape, Slider

logger = logging.getLogger(__name__)

SLIDER_ID = "sugarSlider"
VALUE_ID = "sliderVal"
EMPHASIZED = {"opacity": 0.8, "r": 4}
DIMMED = {"opacity": 0.05, "r": 2}


def value_text(threshold: float) -> str:
    return f" {format_amount(threshold)}g"


def build_controls(controls: Controls, max_sugar: float) -> Slider:
    controls.add_label("sugarSliderLabel", "Minimum sugar (g):")
    slider = controls.add_slider(SLIDER_ID, 0, max_sugar, config.SLIDER_STEP, value=0)
    controls.add_label(VALUE_ID, value_text(0), bold=True)
    return slider


def is_emphasized(record: BeverageRecord, threshold: float) -> bool:
    return record.sugar >= threshold


class FilterController:
    def __init__(self, controls: Controls):
        self.controls = controls
        self.threshold = 0.0
        self.points: List[Shape] = []

    @property
    def slider(self) -> Optional[Slider]:
        return self.controls.get(SLIDER_ID)

    def style_for(self, record: BeverageRecord) -> Dict[str, float]:
        return dict(EMPHASIZED if is_emphasized(record, self.threshold) else DIMMED)

    def bind(self, points: List[Shape]) -> None:
        """Attach to the scene's points; a scene without the slider keeps all points emphasized."""
        self.points = list(points)
        slider = self.slider
        if slider is None:
            return
        slider.on_input(self.apply)
        self.apply(slider.value)

    def apply(self, threshold: float) -> None:
        self.threshold = threshold
        label = self.controls.get(VALUE_ID)
        if label is not None:
            label.text = value_text(threshold)
        for point in self.points:
            point.retarget(**self.style_for(point.datum))
        logger.debug("Sugar filter at %sg: %d of %d points emphasized", threshold,
                     sum(is_emphasized(p.datum, threshold) for p in self.points), len(self.points))
