"""Boundary to the external preview engine.

The engine renders, animates and plays the composition; this package only
talks to one session of it. A session is created with a host surface, a
mode and a credential, accepts source documents and playback commands,
and reports back through named events.

Events and handler arguments:
  ready                       ()
  load_start                  ()
  load_complete               ()
  play                        ()
  pause                       ()
  time_change                 (seconds)
  active_elements_change      (element_ids)
  active_composition_change   (element_id or None)
  state_change                (root SceneNode)

Handlers may be plain functions or coroutine functions; coroutine results
are awaited by the session before the next event is delivered.
"""

import abc
import inspect
from collections.abc import Callable

from .scene import SceneNode


READY = "ready"
LOAD_START = "load_start"
LOAD_COMPLETE = "load_complete"
PLAY = "play"
PAUSE = "pause"
TIME_CHANGE = "time_change"
ACTIVE_ELEMENTS_CHANGE = "active_elements_change"
ACTIVE_COMPOSITION_CHANGE = "active_composition_change"
STATE_CHANGE = "state_change"

ENGINE_EVENTS = {
    READY, LOAD_START, LOAD_COMPLETE, PLAY, PAUSE, TIME_CHANGE,
    ACTIVE_ELEMENTS_CHANGE, ACTIVE_COMPOSITION_CHANGE, STATE_CHANGE,
}

VALID_MODES = {"interactive", "player"}


class EngineSession(abc.ABC):
    """One live session of the preview engine.

    Subclasses implement the engine calls. Event plumbing (``on`` and
    ``emit``) is shared: one handler per event, replaced on re-registration.
    """

    def __init__(self, host, mode: str, credential: str | None):
        if mode not in VALID_MODES:
            raise ValueError(
                f"Invalid engine mode '{mode}'. Valid: {sorted(VALID_MODES)}"
            )
        self.host = host
        self.mode = mode
        self.credential = credential
        self.state: SceneNode | None = None
        self.disposed = False
        self._handlers: dict[str, Callable] = {}

    def on(self, event: str, handler: Callable | None) -> None:
        """Register (or with None, remove) the handler for an event."""
        if event not in ENGINE_EVENTS:
            raise ValueError(
                f"Unknown engine event '{event}'. Valid: {sorted(ENGINE_EVENTS)}"
            )
        if handler is None:
            self._handlers.pop(event, None)
        else:
            self._handlers[event] = handler

    async def emit(self, event: str, *args) -> None:
        """Deliver an event to its handler, awaiting coroutine handlers."""
        if self.disposed:
            return
        handler = self._handlers.get(event)
        if handler is None:
            return
        result = handler(*args)
        if inspect.isawaitable(result):
            await result

    # ── Engine calls ──────────────────────────────────────────────

    async def open(self) -> None:
        """Wait until the engine is usable, then raise ``ready``."""
        await self.emit(READY)

    @abc.abstractmethod
    async def set_source(self, source: dict, incremental: bool = False) -> None:
        """Replace the composition. ``incremental`` marks an edit of the
        current document rather than a new one."""

    @abc.abstractmethod
    async def set_time(self, seconds: float) -> None:
        """Seek on the root timeline."""

    @abc.abstractmethod
    async def set_active_elements(self, element_ids: list[str]) -> None:
        ...

    @abc.abstractmethod
    def set_active_composition(self, element_id: str | None) -> None:
        ...

    @abc.abstractmethod
    def find_element(
        self,
        predicate: Callable[[SceneNode], bool],
        tree: SceneNode | None = None,
    ) -> SceneNode | None:
        """First element matching predicate in tree (default: live state)."""

    @abc.abstractmethod
    def get_source(self, tree: SceneNode | None = None) -> dict:
        """Source document for tree (default: live state)."""

    def dispose(self) -> None:
        """Release the session. Events are no longer delivered."""
        self.disposed = True
        self._handlers.clear()


# Signature of the callable that opens a session: (host, mode, credential).
SessionFactory = Callable[[object, str, str | None], EngineSession]
