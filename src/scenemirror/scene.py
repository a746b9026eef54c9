"""Scene node model — one element of a composition tree.

The engine reports its state as nested element states. Each carries the
authoring ``source`` dict the element was created from, plus values the
engine resolved (track, local start, start on the root timeline). Only
container elements carry ``elements``; a leaf has no children list at all,
while an empty composition has an empty one.

Element state shape:
  source: {id, name, type, track, time, duration, ...}
  track: 2
  time: 0.5
  duration: 6.0
  global_time: 12.5
  elements: [...]           # containers only

A bare source document (no ``source`` mapping) is accepted too and treated
as its own state, which is how documents loaded from disk become trees.
Media elements keep their string ``source`` (URL or asset id) as a property.
"""

from dataclasses import dataclass, field

from .common import parse_seconds


ROOT_NAME = "Main Composition"


@dataclass
class SceneNode:
    """A node in the composition tree, as reported by one snapshot."""

    source: dict = field(default_factory=dict)
    track: int = 1
    time: float = 0.0
    duration: float | None = None
    global_time: float = 0.0
    children: list["SceneNode"] | None = None

    @property
    def id(self) -> str | None:
        return self.source.get("id")

    @property
    def type(self) -> str | None:
        return self.source.get("type")

    @property
    def name(self) -> str | None:
        return self.source.get("name")

    @property
    def display_name(self) -> str | None:
        """Explicit name, falling back to the element type."""
        return self.name or self.type

    @property
    def is_container(self) -> bool:
        return self.children is not None

    @classmethod
    def from_dict(cls, data: dict, parent_global_time: float = 0.0) -> "SceneNode":
        """Build a node tree from an element-state or bare source mapping.

        Args:
            data: Element state (``source`` holds the authoring dict) or a
                source dict. Media elements carry their URL or asset id in a
                string ``source``, which stays a plain property.
            parent_global_time: Root-timeline start of the parent, used
                when the mapping does not carry ``global_time`` itself.

        Raises:
            ValueError: Unparseable time/duration or non-integer track.
        """
        if isinstance(data.get("source"), dict):
            source = {k: v for k, v in data["source"].items() if k != "elements"}
            track = data.get("track", source.get("track", 1))
            time = parse_seconds(data.get("time", source.get("time")))
            duration = data.get("duration", source.get("duration"))
            global_time = data.get("global_time")
        else:
            source = {k: v for k, v in data.items() if k != "elements"}
            track = source.get("track", 1)
            time = parse_seconds(source.get("time"))
            duration = source.get("duration")
            global_time = None

        if not isinstance(track, int) or isinstance(track, bool):
            raise ValueError(
                f"Element {source.get('id')!r}: track must be an integer, got {track!r}"
            )
        if global_time is None:
            global_time = parent_global_time + time
        else:
            global_time = parse_seconds(global_time)

        node = cls(
            source=source,
            track=track,
            time=time,
            duration=parse_seconds(duration) if duration is not None else None,
            global_time=global_time,
        )
        if "elements" in data:
            node.children = [
                cls.from_dict(child, global_time) for child in data["elements"]
            ]
        return node

    def to_source(self) -> dict:
        """Convert this tree back into a source document for the engine.

        The receiver is treated as the document root, so its own track is
        not written. Every descendant gets its current ``track`` written
        into its source.
        """
        doc = dict(self.source)
        if self.children is not None:
            doc["elements"] = [child._element_source() for child in self.children]
        return doc

    def _element_source(self) -> dict:
        doc = self.to_source()
        doc["track"] = self.track
        return doc


def display_name_of(node: SceneNode | None = None) -> dict:
    """Return the {id, name} breadcrumb entry for a node.

    A missing node, or a node without an id, is the main composition.
    """
    if node is None or node.id is None:
        return {"id": None, "name": ROOT_NAME}
    return {"id": node.id, "name": node.display_name}
