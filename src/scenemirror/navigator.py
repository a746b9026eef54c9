"""Composition navigator — which composition is being edited, and its views.

Holds one NavigatorState and rebuilds its derived fields (breadcrumbs,
per-track view) from scratch whenever the focus or the snapshot changes.
Derived fields are never patched incrementally.

Focus is either the root (active_composition_id is None) or one nested
composition. Two kinds of absence are kept apart:
  - active_parent_path is None while the root is focused (no breadcrumbs);
  - active_parent_path is None when the focused id is missing from the
    snapshot, in which case tracks_view keeps its last value.

All handlers run on one thread of control and are not re-entrant, so no
locking is done here.
"""

import logging
from dataclasses import dataclass, field

from .paths import find_by_id, resolve_path
from .scene import SceneNode
from .tracks import partition_by_track

logger = logging.getLogger(__name__)


@dataclass
class NavigatorState:
    active_composition_id: str | None = None
    active_element_ids: list[str] = field(default_factory=list)
    active_parent_path: list[dict] | None = None
    tracks_view: dict[int, list[SceneNode]] = field(default_factory=dict)
    # Local clock of the focused composition, and the same instant on the
    # root timeline.
    time: float = 0.0
    preview_time: float = 0.0
    tree: SceneNode | None = None


class CompositionNavigator:
    """Event handlers over a single NavigatorState."""

    def __init__(self, state: NavigatorState | None = None):
        self.state = state if state is not None else NavigatorState()

    # ── Transitions ───────────────────────────────────────────────

    def focus_composition(self, composition_id: str | None) -> None:
        """Move the editing focus to a composition (None for the root).

        Clears the selection and resets the local clock to 0, since time
        is relative to the focused composition.
        """
        logger.debug("Focus composition %r", composition_id)
        self.state.active_composition_id = composition_id
        self.state.active_element_ids = []
        self.state.time = 0.0
        self._recompute()

    def receive_snapshot(self, tree: SceneNode | None) -> None:
        """Take a new engine snapshot and rebuild derived state against it."""
        self.state.tree = tree
        self._recompute()

    def receive_selection_change(self, element_ids: list[str]) -> None:
        self.state.active_element_ids = list(element_ids)

    def receive_time(self, preview_time: float, scrubbing: bool = False) -> bool:
        """Apply an engine time update unless a scrub gesture is active.

        The engine reports root-timeline time; ``time`` is kept on the
        focused composition's clock. Returns True when the update was applied.
        """
        if scrubbing:
            return False
        self.state.preview_time = preview_time
        self.state.time = self.global_to_local(preview_time)
        return True

    # ── Queries ───────────────────────────────────────────────────

    def active_node(self) -> SceneNode | None:
        """The focused composition in the current snapshot.

        The root when nothing is focused; None when there is no snapshot or
        the focused id is not in it.
        """
        if self.state.active_composition_id is None:
            return self.state.tree
        return find_by_id(self.state.tree, self.state.active_composition_id)

    def local_to_global(self, time: float) -> float:
        """Translate focused-composition time onto the root timeline."""
        if self.state.active_composition_id is None:
            return time
        node = self.active_node()
        if node is None:
            return time
        return node.global_time + time

    def global_to_local(self, preview_time: float) -> float:
        """Inverse of local_to_global."""
        if self.state.active_composition_id is None:
            return preview_time
        node = self.active_node()
        if node is None:
            return preview_time
        return preview_time - node.global_time

    # ── Recomputation ─────────────────────────────────────────────

    def _recompute(self) -> None:
        state = self.state
        composition_id = state.active_composition_id

        if composition_id is None:
            children = state.tree.children if state.tree is not None else None
            state.tracks_view = partition_by_track(children or [])
            state.active_parent_path = None
            return

        node = find_by_id(state.tree, composition_id)
        if node is None:
            # Engine-side deletion race: keep the last track view.
            if state.tree is not None:
                logger.warning(
                    "Focused composition %r not found in snapshot", composition_id,
                )
            state.active_parent_path = None
            return

        state.tracks_view = partition_by_track(node.children or [])
        state.active_parent_path = resolve_path(state.tree, composition_id)
        logger.debug(
            "Recomputed %d track(s) under %r", len(state.tracks_view), composition_id,
        )
