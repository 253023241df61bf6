"""Radial tree layout for MindPad maps.

Children are placed on concentric rings around their parent. Each node owns
an angular sector; its children split that sector evenly and sit at the
middle of their share. A single overlap-repair pass then pushes apart
close pairs.

The repair is best effort. Each pair is pushed once, in pre-order, and a
later push can move a node back into a neighbour it was already separated
from. Dense branches (many children under a deep node, where the child
sector is clamped to 45 degrees) usually end up further apart after
repair than before, but not always at the full minimum distance.

The repair pass compares every node with every other node, so it is
O(n^2) in the number of nodes. That is fine for mind maps in the low
hundreds of nodes; larger maps will lay out noticeably slower.
"""

import logging
import math
from typing import Dict, List, Tuple

from mindpad.tree import NODE_RADIUS, Node, flatten, refresh_derived

logger = logging.getLogger(__name__)


class RadialLayout:
    """Concentric-ring layout with a single overlap-repair pass."""

    NODE_RADIUS = NODE_RADIUS
    BASE_CONNECTION_LENGTH = NODE_RADIUS * 4
    # Arc length reserved per node on a ring, in node radii.
    NODE_ARC_FACTOR = 2.5
    RING_BASE = 1.5
    RING_INCREMENT = 1.2
    CHILD_SPAN_SHRINK = 0.95
    MAX_CHILD_SPAN = math.pi / 4
    MIN_DISTANCE = 40.0

    def __init__(self, min_distance: float = MIN_DISTANCE):
        self.min_distance = min_distance

    def apply(self, root: Node, width: float, height: float) -> None:
        """Position every node of ``root`` in place for a canvas of the given size."""
        refresh_derived(root)

        root.x = width / 2
        root.y = height / 2

        levels, max_depth = self.count_levels(root)
        self._place_children(root, levels)

        nodes = flatten(root)
        moved = self.repair_overlaps(nodes)
        logger.debug("Laid out %d nodes over %d levels (%d overlap pushes)",
                     len(nodes), max_depth + 1, moved)

    @staticmethod
    def count_levels(root: Node) -> Tuple[Dict[int, int], int]:
        """Return a depth -> node count mapping and the maximum depth."""
        levels: Dict[int, int] = {}
        max_depth = 0
        for node in flatten(root):
            levels[node.depth] = levels.get(node.depth, 0) + 1
            max_depth = max(max_depth, node.depth)
        return levels, max_depth

    def ring_radius(self, depth: int, nodes_on_ring: int) -> float:
        """Distance from a node at ``depth`` to each of its children."""
        node_diameter = self.NODE_RADIUS * self.NODE_ARC_FACTOR
        min_radius_for_no_overlap = max(
            self.BASE_CONNECTION_LENGTH,
            node_diameter * nodes_on_ring / (2 * math.pi),
        )
        return max(
            min_radius_for_no_overlap,
            self.BASE_CONNECTION_LENGTH * (self.RING_BASE + depth * self.RING_INCREMENT),
        )

    def _place_children(self, root: Node, levels: Dict[int, int]) -> None:
        stack = [(root, 0.0, 2 * math.pi)]
        while stack:
            node, angle_start, angle_end = stack.pop()
            children = node.children
            if not children:
                continue

            angle_step = (angle_end - angle_start) / len(children)
            radius = self.ring_radius(node.depth, levels.get(node.depth + 1, 1))
            child_span = min(angle_step * self.CHILD_SPAN_SHRINK, self.MAX_CHILD_SPAN)

            for i, child in enumerate(children):
                angle = angle_start + i * angle_step + angle_step / 2
                child.x = node.x + math.cos(angle) * radius
                child.y = node.y + math.sin(angle) * radius
                stack.append((child, angle - child_span / 2, angle + child_span / 2))

    def repair_overlaps(self, nodes: List[Node]) -> int:
        """Push apart every pair of nodes closer than ``min_distance``.

        Nodes are visited in the given order, each against all others, and
        both nodes of a close pair move by half the missing distance along
        the line between them. Coincident nodes separate along the x axis.
        Returns the number of pushes made.
        """
        pushes = 0
        for node in nodes:
            for other in nodes:
                if other is node:
                    continue
                dx = node.x - other.x
                dy = node.y - other.y
                distance = math.hypot(dx, dy)
                if distance >= self.min_distance:
                    continue

                angle = math.atan2(dy, dx)
                half = (self.min_distance - distance) / 2
                node.x += math.cos(angle) * half
                node.y += math.sin(angle) * half
                other.x -= math.cos(angle) * half
                other.y -= math.sin(angle) * half
                pushes += 1
        return pushes


def layout(root: Node, width: float, height: float) -> None:
    """Lay out ``root`` in place with the default radial layout."""
    RadialLayout().apply(root, width, height)
