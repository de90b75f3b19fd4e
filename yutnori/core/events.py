from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol, Tuple, runtime_checkable


@dataclass(frozen=True)
class MoveEvent:
    team: str
    piece_ids: Tuple[str, ...]
    origin: Optional[str]
    target: Optional[str]
    is_goal: bool = False


@runtime_checkable
class GameEventListener(Protocol):
    """Receives notifications about resolved moves (narration, analytics...)."""

    def on_move(self, event: MoveEvent) -> None: ...
    def on_capture(self, capturing_team: str, captured_team: str, count: int) -> None: ...
    def on_finish(self, team: str, count: int) -> None: ...
    def on_game_complete(self, winner: str) -> None: ...


class GameEventAdapter:
    """No-op implementations; subclass and override only what you need."""

    def on_move(self, event: MoveEvent) -> None:
        _ = event

    def on_capture(self, capturing_team: str, captured_team: str, count: int) -> None:
        _ = (capturing_team, captured_team, count)

    def on_finish(self, team: str, count: int) -> None:
        _ = (team, count)

    def on_game_complete(self, winner: str) -> None:
        _ = winner
