# state.py
# Application-wide state. Each field has exactly one writer:
#   dataset        -> DataLoader (once, after a successful load)
#   current_scene  -> SceneController
#   tooltip        -> created by the application at start-up

from dataclasses import dataclass
from typing import Optional

from sugar_story.records import Dataset
from sugar_story.tooltip import Tooltip


@dataclass
class AppState:
    tooltip: Tooltip
    dataset: Optional[Dataset] = None
    current_scene: int = 0

    @property
    def loaded(self) -> bool:
        return self.dataset is not None
