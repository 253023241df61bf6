"""In-memory mind-map tree for MindPad."""

import logging
import math
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

logger = logging.getLogger(__name__)

# Radius of a painted node, in world units. Shared by hit-testing,
# layout and the renderers.
NODE_RADIUS = 20.0


@dataclass
class Node:
    """A labeled vertex of the mind map.

    Only ``label``, ``note`` and ``children`` take part in equality; the
    position, depth, weight and parent link are derived and rebuilt by
    :func:`refresh_derived` or the layout engine.
    """
    label: str
    children: List["Node"] = field(default_factory=list)
    note: str = ""
    x: float = field(default=0.0, compare=False)
    y: float = field(default=0.0, compare=False)
    depth: int = field(default=0, compare=False)
    subtree_weight: int = field(default=1, compare=False)
    parent: Optional["Node"] = field(default=None, compare=False, repr=False)

    @property
    def is_root(self) -> bool:
        return self.parent is None

    def ancestors(self) -> Iterator["Node"]:
        """Yield the parent chain, nearest first."""
        node = self.parent
        while node is not None:
            yield node
            node = node.parent


def new_tree(label: str = "Root") -> Node:
    """Create a root-only tree."""
    return Node(label=label)


def add_child(parent: Node, label: str) -> Optional[Node]:
    """Append a new child to ``parent``.

    Blank labels are declined and return None. The new node starts at the
    parent's position until the next layout pass.
    """
    if not label or not label.strip():
        logger.debug("Declined child with blank label under %r", parent.label)
        return None

    child = Node(
        label=label,
        x=parent.x,
        y=parent.y,
        depth=parent.depth + 1,
        parent=parent,
    )
    parent.children.append(child)

    parent.subtree_weight += 1
    for ancestor in parent.ancestors():
        ancestor.subtree_weight += 1

    return child


def iter_nodes(root: Node) -> Iterator[Node]:
    """Walk the tree in pre-order (parent, then children in sibling order)."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def flatten(root: Node) -> List[Node]:
    """Return all nodes in pre-order."""
    return list(iter_nodes(root))


def refresh_derived(root: Node) -> Node:
    """Rebuild parent links, depth and subtree weight for the whole tree.

    Parents and depths are assigned top-down; weights are accumulated
    bottom-up so a node's weight is final only after all of its children.
    """
    root.parent = None
    root.depth = 0

    order = []
    stack = [root]
    while stack:
        node = stack.pop()
        order.append(node)
        for child in reversed(node.children):
            child.parent = node
            child.depth = node.depth + 1
            stack.append(child)

    # Reverse pre-order visits every child before its parent.
    for node in reversed(order):
        node.subtree_weight = 1 + sum(c.subtree_weight for c in node.children)

    return root


def find_node_at(root: Node, x: float, y: float,
                 radius: float = NODE_RADIUS) -> Optional[Node]:
    """Return the first node (pre-order) whose center is within ``radius``."""
    for node in iter_nodes(root):
        if math.hypot(node.x - x, node.y - y) < radius:
            return node
    return None


def bounds(root: Node) -> Tuple[float, float, float, float]:
    """Return ``(min_x, min_y, max_x, max_y)`` over all node centers."""
    nodes = flatten(root)
    return (
        min(n.x for n in nodes),
        min(n.y for n in nodes),
        max(n.x for n in nodes),
        max(n.y for n in nodes),
    )
