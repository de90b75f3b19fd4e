from __future__ import annotations

from typing import Tuple

import numpy as np

from yutnori.core import NODES, GameState
from yutnori.core.state import MAX_TEAMS

NODE_COLUMNS = {node.id: index for index, node in enumerate(NODES)}
HOME_COLUMN = len(NODES)
FINISHED_COLUMN = len(NODES) + 1
BOARD_COLUMNS = len(NODES) + 2  # 29 nodes + home + finished
AUX_VECTOR_SIZE = MAX_TEAMS * 2 + 1  # current turn one-hot (4) + winner one-hot (4) + bonus flag


def build_board_tensor(state: GameState) -> np.ndarray:
    """Return piece counts with shape (4, 31): one row per team slot in roster order."""
    tensor = np.zeros((MAX_TEAMS, BOARD_COLUMNS), dtype=np.float32)
    slots = {team_id: slot for slot, team_id in enumerate(state.team_ids)}
    for piece in state.pieces:
        slot = slots.get(piece.team)
        if slot is None:
            continue
        if piece.is_finished:
            column = FINISHED_COLUMN
        elif piece.node_id is None:
            column = HOME_COLUMN
        else:
            column = NODE_COLUMNS[piece.node_id]
        tensor[slot, column] += 1.0
    return tensor


def build_aux_vector(state: GameState) -> np.ndarray:
    aux = np.zeros((AUX_VECTOR_SIZE,), dtype=np.float32)
    team_ids = state.team_ids
    if state.current_turn in team_ids:
        aux[team_ids.index(state.current_turn)] = 1.0
    if state.winner_id in team_ids:
        aux[MAX_TEAMS + team_ids.index(state.winner_id)] = 1.0
    aux[-1] = 1.0 if state.bonus_throw_pending else 0.0
    return aux


def state_to_numpy(state: GameState) -> Tuple[np.ndarray, np.ndarray]:
    return build_board_tensor(state), build_aux_vector(state)
