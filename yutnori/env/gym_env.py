from __future__ import annotations

from typing import Dict, Optional, Sequence, Tuple

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from yutnori.config import default_roster
from yutnori.core import (
    NODES,
    GameRules,
    GameState,
    Piece,
    TeamConfig,
    Throw,
    advance_turn,
    apply_move,
    consume_bonus_throw,
    initialize,
    resolve_path,
    set_first_turn,
)
from yutnori.core.state import MAX_PIECES, MAX_TEAMS
from yutnori.features import AUX_VECTOR_SIZE, BOARD_COLUMNS, build_aux_vector, build_board_tensor

THROWS: Tuple[Throw, ...] = (Throw.DO, Throw.GAE, Throw.GEOL, Throw.YUT, Throw.MO, Throw.BACK_DO)
ACTION_SPACE_SIZE = MAX_PIECES * len(THROWS)
TEAM_SYMBOLS = "ABCD"
GRID_SIZE = 13


def encode_action(piece_slot: int, throw: Throw) -> int:
    return piece_slot * len(THROWS) + THROWS.index(throw)


def decode_action(index: int) -> Tuple[int, Throw]:
    if not 0 <= index < ACTION_SPACE_SIZE:
        raise ValueError("Action index out of range.")
    return index // len(THROWS), THROWS[index % len(THROWS)]


class YutnoriEnv(gym.Env):
    """Drives the engine one throw at a time.

    An action picks one of the current team's pieces (by slot) and the throw
    result to move it with. A throw of 윷 or 모, a capture or a finish keeps
    the turn with the same team.
    """

    metadata = {"render_modes": ["ansi"], "render_fps": 4}

    def __init__(
        self,
        *,
        teams: Optional[Sequence[TeamConfig]] = None,
        rules: Optional[GameRules] = None,
        enforce_legal_actions: bool = True,
        render_mode: Optional[str] = None,
    ) -> None:
        super().__init__()
        self._teams = tuple(teams) if teams is not None else default_roster()
        self._rules = rules
        self._enforce_legal = enforce_legal_actions
        self.render_mode = render_mode

        self.observation_space = spaces.Dict(
            {
                "board": spaces.Box(
                    low=0.0, high=float(MAX_PIECES), shape=(MAX_TEAMS, BOARD_COLUMNS), dtype=np.float32
                ),
                "aux": spaces.Box(low=0.0, high=1.0, shape=(AUX_VECTOR_SIZE,), dtype=np.float32),
            }
        )
        self.action_space = spaces.Discrete(ACTION_SPACE_SIZE)

        self._state = self._new_game(self._teams[0].id)

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict] = None):
        super().reset(seed=seed)
        first_turn = options.get("first_turn", self._teams[0].id) if options else self._teams[0].id
        self._state = self._new_game(first_turn)
        return self._build_observation(), self._build_info()

    def step(self, action_index: int):
        if not self.action_space.contains(action_index):
            raise ValueError(f"Action index {action_index} out of bounds.")
        if self._state.is_terminal:
            raise ValueError("Game is over; call reset().")

        legal_mask = self.legal_action_mask()
        if self._enforce_legal and not legal_mask[action_index]:
            raise ValueError("Illegal action provided and enforce_legal_actions=True.")

        slot, throw = decode_action(int(action_index))
        mover = self._state.current_turn
        pieces = self._current_pieces()
        reward = 0.0
        if slot < len(pieces):
            piece = pieces[slot]
            result = resolve_path(piece.node_id, int(throw))
            if not result.is_empty:
                self._state = apply_move(self._state, piece.id, result.destination, result.reaches_goal)

        if self._state.is_terminal:
            reward = 1.0 if self._state.winner_id == mover else 0.0
        elif throw.grants_extra_throw or self._state.bonus_throw_pending:
            self._state = consume_bonus_throw(self._state)
        else:
            self._state = advance_turn(self._state)

        terminated = self._state.is_terminal
        return self._build_observation(), reward, terminated, False, self._build_info()

    def legal_action_mask(self) -> np.ndarray:
        mask = np.zeros(self.action_space.n, dtype=np.int8)
        if self._state.is_terminal:
            return mask
        for slot, piece in enumerate(self._current_pieces()):
            if piece.is_finished:
                continue
            for throw in THROWS:
                if not resolve_path(piece.node_id, int(throw)).is_empty:
                    mask[encode_action(slot, throw)] = 1
        return mask

    def render(self):
        if self.render_mode != "ansi":
            raise NotImplementedError("Only 'ansi' render mode is supported.")
        return render_ascii(self._state)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _new_game(self, first_turn: str) -> GameState:
        state = initialize(self._teams, rules=self._rules)
        return set_first_turn(state, first_turn)

    def _current_pieces(self) -> Sequence[Piece]:
        if self._state.current_turn is None:
            return []
        return self._state.team_pieces(self._state.current_turn)

    def _build_observation(self) -> Dict[str, np.ndarray]:
        return {"board": build_board_tensor(self._state), "aux": build_aux_vector(self._state)}

    def _build_info(self) -> Dict[str, object]:
        return {"legal_action_mask": self.legal_action_mask(), "current_turn": self._state.current_turn}


def render_ascii(state: GameState) -> str:
    """Text board: ``o`` empty node, team letter, ``*`` for a shared node."""
    grid = [[" "] * GRID_SIZE for _ in range(GRID_SIZE)]
    symbols = dict(zip(state.team_ids, TEAM_SYMBOLS))
    for node in NODES:
        col = round((node.x - 50) / 500 * (GRID_SIZE - 1))
        row = round((node.y - 50) / 500 * (GRID_SIZE - 1))
        teams_here = {piece.team for piece in state.pieces if piece.on_board and piece.node_id == node.id}
        if not teams_here:
            grid[row][col] = "o"
        elif len(teams_here) == 1:
            grid[row][col] = symbols[teams_here.pop()]
        else:
            grid[row][col] = "*"
    rows = ["".join(row).rstrip() for row in grid]
    for team in state.teams:
        pieces = state.team_pieces(team.id)
        home = sum(1 for piece in pieces if piece.at_home)
        done = sum(1 for piece in pieces if piece.is_finished)
        rows.append(f"{symbols[team.id]} {team.name}: home={home} finished={done}")
    return "\n".join(rows)
