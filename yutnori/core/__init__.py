"""Core game logic for the Yutnori board."""

from .board import (
    CENTER_NODE,
    EDGES,
    NODES,
    SNAP_RADIUS,
    START_NODE,
    Edge,
    Node,
    get_node,
    nearest_node,
    snap_to_node,
)
from .events import GameEventAdapter, GameEventListener, MoveEvent
from .lifecycle import elapsed_seconds, initialize, reset, restart, set_first_turn
from .paths import (
    GOAL,
    PathResult,
    Track,
    TrackPosition,
    advance,
    is_junction,
    iter_path,
    locate,
    resolve_path,
    retreat,
)
from .rules import (
    advance_turn,
    apply_move,
    consume_bonus_throw,
    finished_count,
    group_stacks,
    moving_stack,
    pieces_at,
)
from .state import GameRules, GameState, GameStatus, Piece, TeamConfig, TeamStats
from .throws import Throw

__all__ = [
    "CENTER_NODE",
    "EDGES",
    "NODES",
    "SNAP_RADIUS",
    "START_NODE",
    "Edge",
    "Node",
    "get_node",
    "nearest_node",
    "snap_to_node",
    "GameEventAdapter",
    "GameEventListener",
    "MoveEvent",
    "elapsed_seconds",
    "initialize",
    "reset",
    "restart",
    "set_first_turn",
    "GOAL",
    "PathResult",
    "Track",
    "TrackPosition",
    "advance",
    "is_junction",
    "iter_path",
    "locate",
    "resolve_path",
    "retreat",
    "advance_turn",
    "apply_move",
    "consume_bonus_throw",
    "finished_count",
    "group_stacks",
    "moving_stack",
    "pieces_at",
    "GameRules",
    "GameState",
    "GameStatus",
    "Piece",
    "TeamConfig",
    "TeamStats",
    "Throw",
]
