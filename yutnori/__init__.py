"""Yutnori board movement and turn-resolution engine."""

from . import config, core, env, features, validation
from .core import (
    GOAL,
    GameEventAdapter,
    GameEventListener,
    GameRules,
    GameState,
    GameStatus,
    PathResult,
    Piece,
    TeamConfig,
    TeamStats,
    Throw,
    Track,
    advance_turn,
    apply_move,
    consume_bonus_throw,
    initialize,
    nearest_node,
    reset,
    resolve_path,
    restart,
    set_first_turn,
    snap_to_node,
)
from .env import YutnoriEnv
from .features import build_aux_vector, build_board_tensor, state_to_numpy
from .validation import SnapshotError, load_snapshot, validate_snapshot

__all__ = [
    "config",
    "core",
    "env",
    "features",
    "validation",
    "GOAL",
    "GameEventAdapter",
    "GameEventListener",
    "GameRules",
    "GameState",
    "GameStatus",
    "PathResult",
    "Piece",
    "TeamConfig",
    "TeamStats",
    "Throw",
    "Track",
    "advance_turn",
    "apply_move",
    "consume_bonus_throw",
    "initialize",
    "nearest_node",
    "reset",
    "resolve_path",
    "restart",
    "set_first_turn",
    "snap_to_node",
    "YutnoriEnv",
    "build_aux_vector",
    "build_board_tensor",
    "state_to_numpy",
    "SnapshotError",
    "load_snapshot",
    "validate_snapshot",
]
