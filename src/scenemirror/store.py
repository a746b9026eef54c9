"""Editor store — owns the engine session and turns editing intents into calls.

One store drives one engine session at a time. Engine events land in the
CompositionNavigator; commands read the engine's live state, build an edited
copy, push it back with set_source(..., incremental=True) and let the
resulting state_change snapshot refresh the navigator.

Every command is a no-op when no session exists. Structural commands
(create/delete/rearrange) edit a copy of the state they read, so callers
must await one before issuing the next against the same composition.
"""

import copy
import logging
import uuid

import httpx

from . import engine
from .config import load_config
from .engine import EngineSession, SessionFactory
from .navigator import CompositionNavigator
from .persistence import submit_video
from .scene import SceneNode
from .source import default_source, load_source
from .tracks import next_track, swap_tracks, target_track

logger = logging.getLogger(__name__)


class EditorStore:
    """Observable mirror of one engine session plus the editing commands."""

    def __init__(
        self,
        session_factory: SessionFactory,
        config: dict | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.config = config if config is not None else load_config()
        self.session_factory = session_factory
        self.session: EngineSession | None = None
        self.navigator = CompositionNavigator()

        self.is_loading = True
        self.is_playing = False
        # Set by the UI while the user drags the playhead.
        self.is_scrubbing = False
        self.timeline_scale = self.config["timeline"]["scale"]

        self._http_client = http_client
        self._owns_http_client = False

    # ── Read-through state ────────────────────────────────────────

    @property
    def state(self) -> SceneNode | None:
        return self.navigator.state.tree

    @property
    def tracks(self) -> dict[int, list[SceneNode]]:
        return self.navigator.state.tracks_view

    @property
    def active_parents(self) -> list[dict] | None:
        return self.navigator.state.active_parent_path

    @property
    def active_element_ids(self) -> list[str]:
        return self.navigator.state.active_element_ids

    @property
    def active_composition_id(self) -> str | None:
        return self.navigator.state.active_composition_id

    @property
    def time(self) -> float:
        return self.navigator.state.time

    @property
    def preview_time(self) -> float:
        return self.navigator.state.preview_time

    # ── Session lifecycle ─────────────────────────────────────────

    async def initialize(self, host) -> EngineSession:
        """Open a fresh engine session on host, disposing any previous one.

        Navigator state belongs to the session and starts over.
        """
        self.dispose()

        engine_cfg = self.config["engine"]
        session = self.session_factory(host, engine_cfg["mode"], engine_cfg["token"])
        self.session = session
        self.navigator = CompositionNavigator()
        self.is_loading = True
        self.is_playing = False
        self._wire(session)
        logger.info("Engine session opened (mode=%s)", engine_cfg["mode"])

        await session.open()
        return session

    def dispose(self) -> None:
        if self.session is not None:
            self.session.dispose()
            self.session = None
            logger.info("Engine session disposed")

    async def aclose(self) -> None:
        self.dispose()
        if self._owns_http_client and self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None
            self._owns_http_client = False

    async def __aenter__(self) -> "EditorStore":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.aclose()

    def load_default_source(self) -> dict:
        """Configured source document, or the packaged sample."""
        if self.config.get("source"):
            return load_source(self.config["source"])
        return default_source()

    def _wire(self, session: EngineSession) -> None:
        async def on_ready():
            await session.set_source(self.load_default_source())

        def on_load_start():
            self.is_loading = True

        def on_load_complete():
            self.is_loading = False

        def on_play():
            self.is_playing = True

        def on_pause():
            self.is_playing = False

        def on_time_change(seconds):
            self.navigator.receive_time(seconds, scrubbing=self.is_scrubbing)

        def on_state_change(tree):
            logger.debug("State snapshot received")
            self.navigator.receive_snapshot(tree)

        session.on(engine.READY, on_ready)
        session.on(engine.LOAD_START, on_load_start)
        session.on(engine.LOAD_COMPLETE, on_load_complete)
        session.on(engine.PLAY, on_play)
        session.on(engine.PAUSE, on_pause)
        session.on(engine.TIME_CHANGE, on_time_change)
        session.on(
            engine.ACTIVE_ELEMENTS_CHANGE,
            lambda element_ids: self.navigator.receive_selection_change(element_ids),
        )
        session.on(engine.ACTIVE_COMPOSITION_CHANGE, self.set_active_composition)
        session.on(engine.STATE_CHANGE, on_state_change)

    # ── Playback and selection ────────────────────────────────────

    async def set_time(self, time: float) -> None:
        """Seek to time on the focused composition's clock.

        The engine is told the matching instant on the root timeline.
        """
        nav = self.navigator.state
        preview_time = time
        if nav.active_composition_id is not None and self.session is not None:
            composition_id = nav.active_composition_id
            node = self.session.find_element(lambda element: element.id == composition_id)
            if node is not None:
                preview_time = node.global_time + time

        nav.time = time
        nav.preview_time = preview_time
        if self.session is not None:
            await self.session.set_time(preview_time)

    async def set_active_elements(self, *element_ids: str) -> None:
        self.navigator.receive_selection_change(list(element_ids))
        if self.session is not None:
            await self.session.set_active_elements(list(element_ids))

    def set_active_composition(self, element_id: str | None) -> None:
        """Focus a nested composition, or the root with None."""
        if self.session is not None:
            self.session.set_active_composition(element_id)
        self.navigator.focus_composition(element_id)

    def get_active_element(self) -> SceneNode | None:
        """Node of the first selected element."""
        if self.session is None or not self.active_element_ids:
            return None
        element_id = self.active_element_ids[0]
        return self.session.find_element(lambda element: element.id == element_id, self.state)

    # ── Structural edits ──────────────────────────────────────────

    async def create_element(self, element_source: dict) -> str | None:
        """Append a new top-level element on a fresh track and select it.

        Returns the new element's id, or None without a loaded session.
        """
        session = self.session
        if session is None or session.state is None:
            return None

        source = session.get_source()
        new_track = next_track(session.state.children or [])
        element_id = str(uuid.uuid4())

        source.setdefault("elements", []).append({
            **element_source,
            "id": element_id,
            "track": new_track,
        })
        logger.debug("Create element %s on track %d", element_id, new_track)

        await session.set_source(source, incremental=True)
        await self.set_active_elements(element_id)
        return element_id

    async def delete_element(self, element_id: str) -> None:
        """Remove every top-level element with element_id."""
        session = self.session
        if session is None or session.state is None:
            return

        state = copy.deepcopy(session.state)
        kept = [element for element in state.children or [] if element.id != element_id]
        if len(kept) == len(state.children or []):
            return
        state.children = kept
        logger.debug("Delete element %s", element_id)

        await session.set_source(session.get_source(state), incremental=True)

    async def rearrange_track(self, track: int, direction: str) -> None:
        """Swap a top-level track with its neighbour ("up" or "down").

        No-op when nothing sits on track or the neighbour would be below 1.
        There is no upper bound: moving the top track up swaps with an
        empty track.
        """
        session = self.session
        if session is None or session.state is None:
            return

        other = target_track(track, direction)
        if other < 1:
            return

        if not any(element.track == track for element in session.state.children or []):
            return

        state = copy.deepcopy(session.state)
        swap_tracks(state.children, track, other)
        logger.debug("Swap tracks %d and %d", track, other)

        await session.set_source(session.get_source(state), incremental=True)

    # ── Persistence ───────────────────────────────────────────────

    async def finish_video(self) -> dict | None:
        """Hand the full composition to the persistence endpoint.

        Returns the endpoint's acknowledgment, or None without a session.
        Endpoint and transport failures propagate.
        """
        session = self.session
        if session is None:
            return None

        persistence = self.config["persistence"]
        return await submit_video(session.get_source(), persistence["path"], self._client())

    def _client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            persistence = self.config["persistence"]
            self._http_client = httpx.AsyncClient(
                base_url=persistence["base_url"],
                timeout=persistence["timeout"],
            )
            self._owns_http_client = True
        return self._http_client
