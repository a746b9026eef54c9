"""Track arithmetic for timeline views and track-level edits.

Tracks are 1-based lanes among siblings. Numbers need not be contiguous;
nothing here invents or drops a track.
"""

from .scene import SceneNode


VALID_DIRECTIONS = {"up", "down"}


def partition_by_track(nodes: list[SceneNode]) -> dict[int, list[SceneNode]]:
    """Group sibling nodes by track number.

    Single left-to-right pass. Keys appear in first-encounter order and
    each group keeps the input order, which is the stacking order a
    timeline draws. Empty input gives an empty dict.
    """
    groups: dict[int, list[SceneNode]] = {}
    for node in nodes:
        groups.setdefault(node.track, []).append(node)
    return groups


def next_track(nodes: list[SceneNode]) -> int:
    """Track number for a new sibling: one above the highest in use.

    An empty list counts as highest track 0, so the first element lands
    on track 1.
    """
    return max((node.track for node in nodes), default=0) + 1


def target_track(track: int, direction: str) -> int:
    """Track a rearrange would swap with ("up" is +1, "down" is -1)."""
    if direction not in VALID_DIRECTIONS:
        raise ValueError(
            f"Invalid direction '{direction}'. Valid: {sorted(VALID_DIRECTIONS)}"
        )
    return track + 1 if direction == "up" else track - 1


def swap_tracks(nodes: list[SceneNode], track: int, other: int) -> None:
    """Swap two track numbers in place across all given nodes.

    Every node on ``track`` moves to ``other`` and every node on ``other``
    moves to ``track``. Nodes sharing a track move together.
    """
    for node in nodes:
        if node.track == track:
            node.track = other
        elif node.track == other:
            node.track = track
