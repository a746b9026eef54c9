"""Tree search over a composition snapshot.

Depth-first, pre-order, children visited in order. The first match wins;
with unique ids there is only one. A miss is a normal outcome (the engine
may not have caught up with a focus change yet) and returns None.
"""

from collections.abc import Callable, Iterator

from .scene import SceneNode, display_name_of


def resolve_path(root: SceneNode, target_id: str | None) -> list[dict] | None:
    """Breadcrumbs from root down to the node with target_id.

    Returns a list of {id, name} entries starting with the root's entry and
    ending with the target's, or None when target_id is not in the subtree.
    """
    if root.id == target_id:
        return [display_name_of(root)]

    if root.children is not None:
        for child in root.children:
            path = resolve_path(child, target_id)
            if path is not None:
                return [display_name_of(root), *path]
    return None


def walk(root: SceneNode) -> Iterator[SceneNode]:
    """Yield every node of the tree in depth-first pre-order."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        if node.children:
            stack.extend(reversed(node.children))


def find_node(
    root: SceneNode | None,
    predicate: Callable[[SceneNode], bool],
) -> SceneNode | None:
    """First node (pre-order) satisfying predicate, or None."""
    if root is None:
        return None
    for node in walk(root):
        if predicate(node):
            return node
    return None


def find_by_id(root: SceneNode | None, element_id: str) -> SceneNode | None:
    """Look up a node by id without building a path."""
    return find_node(root, lambda node: node.id == element_id)
