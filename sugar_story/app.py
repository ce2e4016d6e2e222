# app.py
# Wires the page mount points, shared state, loader and scene controller together

import asyncio
import logging
from typing import Optional

from sugar_story import config
from sugar_story.loader import DataLoader, Fetcher
from sugar_story.records import Dataset
from sugar_story.scenes import SCENES, SceneController
from sugar_story.state import AppState
from sugar_story.surface import Controls, NarrativeText, SceneButtons, Surface
from sugar_story.tooltip import TooltipManager

logger = logging.getLogger(__name__)


class SugarStory:
    def __init__(self, source: str = config.DATA_SOURCE, fetch: Optional[Fetcher] = None,
                 width: int = config.WIDTH, height: int = config.HEIGHT,
                 retry_delay: float = config.RETRY_DELAY_SECONDS):
        self.surface = Surface(width, height)
        self.controls = Controls()
        self.narrative = NarrativeText()
        self.buttons = SceneButtons(len(SCENES))
        # the tooltip node lives for the whole session
        self.tooltips = TooltipManager()
        self.state = AppState(tooltip=self.tooltips.tooltip)

        self.controller = SceneController(
            self.state, self.surface, self.controls, self.narrative,
            self.buttons, self.tooltips, reload=self.request_load,
        )
        self.loader = DataLoader(
            self.state, self.narrative, source=source, fetch=fetch,
            retry_delay=retry_delay, on_loaded=self.controller.render_initial,
        )
        self._load_task: Optional[asyncio.Task] = None

    def request_load(self) -> Optional[asyncio.Task]:
        """Start a load unless one is already in flight.

        Inside a running event loop the load is scheduled and its task returned,
        so retry delays never block other interactions.

        Without a running loop (the CLI and plain scripts) the load runs to
        completion before returning, retry delays included. Interactive callers
        should go through ``start()`` instead.
        """
        if self._load_task is not None and not self._load_task.done():
            return self._load_task
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running event loop; loading synchronously")
            asyncio.run(self.loader.load())
            return None
        self._load_task = loop.create_task(self.loader.load())
        return self._load_task

    async def start(self) -> Optional[Dataset]:
        return await self.request_load()

    def select_scene(self, index: int) -> None:
        self.buttons.click(index)
