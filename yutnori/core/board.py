from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

import numpy as np

BOARD_DIM = 600
SNAP_RADIUS = 40.0

START_NODE = "n0"
CENTER_NODE = "n24"


@dataclass(frozen=True)
class Node:
    id: str
    x: float
    y: float
    is_corner: bool = False
    is_center: bool = False
    label: Optional[str] = None

    @property
    def display_name(self) -> str:
        return self.label or self.id


@dataclass(frozen=True)
class Edge:
    source: str
    target: str


# 20 perimeter nodes (6 per side, corners shared) followed by the 9 inner nodes
# of the two crossing diagonals. Coordinates live in a 600x600 logical space.
NODES: Tuple[Node, ...] = (
    # Bottom edge, left to right
    Node("n0", 50, 550, is_corner=True, label="출발"),
    Node("n1", 150, 550),
    Node("n2", 250, 550),
    Node("n3", 350, 550),
    Node("n4", 450, 550),
    Node("n5", 550, 550, is_corner=True),
    # Right edge, bottom to top
    Node("n6", 550, 450),
    Node("n7", 550, 350),
    Node("n8", 550, 250),
    Node("n9", 550, 150),
    Node("n10", 550, 50, is_corner=True),
    # Top edge, right to left
    Node("n11", 450, 50),
    Node("n12", 350, 50),
    Node("n13", 250, 50),
    Node("n14", 150, 50),
    Node("n15", 50, 50, is_corner=True),
    # Left edge, top to bottom
    Node("n16", 50, 150),
    Node("n17", 50, 250),
    Node("n18", 50, 350),
    Node("n19", 50, 450),
    # Diagonal n0 -> n10
    Node("n20", 133, 467),
    Node("n21", 217, 383),
    Node("n24", 300, 300, is_center=True, label="방"),
    Node("n22", 383, 217),
    Node("n23", 467, 133),
    # Diagonal n5 -> n15
    Node("n25", 467, 467),
    Node("n26", 383, 383),
    Node("n27", 217, 217),
    Node("n28", 133, 133),
)

PERIMETER_SIZE = 20


def _chain(*ids: str) -> Tuple[Edge, ...]:
    return tuple(Edge(a, b) for a, b in zip(ids, ids[1:]))


EDGES: Tuple[Edge, ...] = (
    _chain(*(f"n{i}" for i in range(PERIMETER_SIZE)), START_NODE)
    + _chain("n0", "n20", "n21", "n24", "n22", "n23", "n10")
    + _chain("n5", "n25", "n26", "n24", "n27", "n28", "n15")
)

_NODE_INDEX: Dict[str, Node] = {node.id: node for node in NODES}
_COORDS = np.array([(node.x, node.y) for node in NODES], dtype=np.float64)


def get_node(node_id: str) -> Optional[Node]:
    return _NODE_INDEX.get(node_id)


def is_node(node_id: Optional[str]) -> bool:
    return node_id is not None and node_id in _NODE_INDEX


def nearest_node(x: float, y: float, *, radius: float = SNAP_RADIUS) -> Optional[Node]:
    """Return the node closest to ``(x, y)`` if it lies within ``radius``.

    ``None`` means the point is not near any node; callers treat that as
    "back to home" or "cancel".
    """
    distances = np.hypot(_COORDS[:, 0] - x, _COORDS[:, 1] - y)
    index = int(np.argmin(distances))
    if distances[index] > radius:
        return None
    return NODES[index]


def snap_to_node(x: float, y: float) -> Optional[str]:
    node = nearest_node(x, y)
    return node.id if node is not None else None
