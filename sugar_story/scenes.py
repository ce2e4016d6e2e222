# scenes.py
# The three-step narrative and the controller that switches between its scenes

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Type

from sugar_story import config
from sugar_story.filtering import build_controls
from sugar_story.records import Dataset
from sugar_story.renderers import CategoryOverview, ChartRenderer, InteractiveExplore, RankedTop
from sugar_story.state import AppState
from sugar_story.surface import Controls, NarrativeText, SceneButtons, Surface
from sugar_story.tooltip import TooltipManager

logger = logging.getLogger(__name__)


def sugar_filter_controls(controls: Controls, dataset: Dataset) -> None:
    build_controls(controls, max(r.sugar for r in dataset))


@dataclass(frozen=True)
class Scene:
    index: int
    description: str
    renderer: Type[ChartRenderer]
    controls: Optional[Callable[[Controls, Dataset], None]] = None


SCENES = (
    Scene(0, config.SCENE_DESCRIPTIONS[0], CategoryOverview),
    Scene(1, config.SCENE_DESCRIPTIONS[1], RankedTop),
    Scene(2, config.SCENE_DESCRIPTIONS[2], InteractiveExplore, controls=sugar_filter_controls),
)


class SceneController:
    """Owns the current scene; every switch clears the page before the new chart is drawn."""

    def __init__(self, state: AppState, surface: Surface, controls: Controls,
                 narrative: NarrativeText, buttons: SceneButtons, tooltips: TooltipManager,
                 reload: Callable[[], object]):
        self.state = state
        self.surface = surface
        self.controls = controls
        self.narrative = narrative
        self.buttons = buttons
        self.tooltips = tooltips
        self.reload = reload
        buttons.on_click(self.select_scene)

    def select_scene(self, index: int) -> None:
        if not 0 <= index < len(SCENES):
            raise ValueError(f"No scene {index}; expected 0..{len(SCENES) - 1}")

        if not self.state.loaded:
            logger.info("Data not loaded yet")
            self.narrative.update(config.LOADING_MESSAGE)
            self.reload()
            return

        self.state.current_scene = index
        self.buttons.activate(index)
        self.surface.clear()
        self.controls.clear()

        dataset = self.state.dataset
        if not dataset:
            self._show_no_data()
            return

        scene = SCENES[index]
        if scene.controls is not None:
            scene.controls(self.controls, dataset)
        self.narrative.update(scene.description)
        logger.debug("Rendering scene %d with %s", index, scene.renderer.__name__)
        scene.renderer(self.surface, self.controls, self.tooltips).render(dataset)

    def render_initial(self) -> None:
        self.select_scene(self.state.current_scene)

    def _show_no_data(self) -> None:
        logger.warning("Dataset is empty; nothing to chart")
        self.narrative.update(config.NO_DATA_MESSAGE)
        self.surface.append("text", "no-data", {
            "x": self.surface.width / 2, "y": self.surface.height / 2,
            "text-anchor": "middle", "font-size": 18, "fill": "#555",
        }, text="No data")
