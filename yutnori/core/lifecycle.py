from __future__ import annotations

import time
from typing import Optional, Sequence

from .state import (
    GameRules,
    GameState,
    GameStatus,
    TeamConfig,
    TeamStats,
    create_pieces,
    validate_roster,
)


def initialize(teams: Sequence[TeamConfig], *, rules: Optional[GameRules] = None) -> GameState:
    """Start a new game: every piece at home, zeroed stats, first turn undecided.

    Raises ``ValueError`` for a malformed roster.
    """
    validate_roster(teams)
    roster = tuple(teams)
    names = " vs ".join(team.name for team in roster)
    return GameState(
        teams=roster,
        pieces=create_pieces(roster),
        logs=[f"게임 시작! {names}"],
        current_turn=None,
        winner_id=None,
        stats={team.id: TeamStats() for team in roster},
        status=GameStatus.CHOOSING_FIRST_TURN,
        rules=rules or GameRules(),
    )


def set_first_turn(state: GameState, team_id: str, *, now: Optional[float] = None) -> GameState:
    if state.status is not GameStatus.CHOOSING_FIRST_TURN or state.team_by_id(team_id) is None:
        return state
    result = state.copy()
    result.status = GameStatus.PLAYING
    result.current_turn = team_id
    result.started_at = time.time() if now is None else now
    result.append_log(f"🎲 {result.team_name(team_id)} 선공!")
    return result


def restart(state: GameState) -> GameState:
    """New game with the same roster and rules."""
    return initialize(state.teams, rules=state.rules)


def reset() -> None:
    """Drop the game entirely; the caller goes back to setup."""
    return None


def elapsed_seconds(state: GameState, *, now: Optional[float] = None) -> float:
    if state.started_at is None:
        return 0.0
    current = time.time() if now is None else now
    return max(0.0, current - state.started_at)
