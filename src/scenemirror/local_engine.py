"""In-process engine session over an in-memory source document.

Implements the engine boundary without rendering anything: it keeps the
current source, derives the element-state tree from it (resolved tracks,
local and root-timeline start times) and raises the same events a real
preview engine would. Used by the CLI to inspect documents offline and
by the test suite.
"""

import copy
import logging

from . import engine
from .engine import EngineSession
from .paths import find_node
from .scene import SceneNode

logger = logging.getLogger(__name__)


class LocalSession(EngineSession):
    def __init__(self, host=None, mode: str = "interactive", credential: str | None = None):
        super().__init__(host, mode, credential)
        self.source: dict | None = None
        self.time = 0.0
        self.active_element_ids: list[str] = []
        self.active_composition_id: str | None = None
        self.is_playing = False

    async def open(self) -> None:
        logger.debug("Local session ready (mode=%s)", self.mode)
        await self.emit(engine.READY)

    async def set_source(self, source: dict, incremental: bool = False) -> None:
        # A rejected document raises before any event and leaves the
        # current source and state in place.
        accepted = copy.deepcopy(source)
        state = SceneNode.from_dict(accepted)

        if not incremental:
            await self.emit(engine.LOAD_START)

        self.source = accepted
        self.state = state
        await self.emit(engine.STATE_CHANGE, self.state)

        if not incremental:
            await self.emit(engine.LOAD_COMPLETE)

    async def set_time(self, seconds: float) -> None:
        self.time = seconds
        await self.emit(engine.TIME_CHANGE, seconds)

    async def set_active_elements(self, element_ids: list[str]) -> None:
        self.active_element_ids = list(element_ids)
        await self.emit(engine.ACTIVE_ELEMENTS_CHANGE, list(element_ids))

    def set_active_composition(self, element_id: str | None) -> None:
        # Programmatic focus changes are not echoed back as events.
        self.active_composition_id = element_id

    def find_element(self, predicate, tree: SceneNode | None = None) -> SceneNode | None:
        return find_node(tree if tree is not None else self.state, predicate)

    def get_source(self, tree: SceneNode | None = None) -> dict:
        tree = tree if tree is not None else self.state
        if tree is None:
            return copy.deepcopy(self.source) if self.source is not None else {"elements": []}
        return copy.deepcopy(tree.to_source())

    async def play(self) -> None:
        self.is_playing = True
        await self.emit(engine.PLAY)

    async def pause(self) -> None:
        self.is_playing = False
        await self.emit(engine.PAUSE)
