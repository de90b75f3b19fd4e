"""Feature extraction helpers for Yutnori game states."""

from .observation import (
    AUX_VECTOR_SIZE,
    BOARD_COLUMNS,
    FINISHED_COLUMN,
    HOME_COLUMN,
    NODE_COLUMNS,
    build_aux_vector,
    build_board_tensor,
    state_to_numpy,
)

__all__ = [
    "AUX_VECTOR_SIZE",
    "BOARD_COLUMNS",
    "FINISHED_COLUMN",
    "HOME_COLUMN",
    "NODE_COLUMNS",
    "build_board_tensor",
    "build_aux_vector",
    "state_to_numpy",
]
