from __future__ import annotations

from dataclasses import asdict, dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

MIN_TEAMS = 2
MAX_TEAMS = 4
MIN_PIECES = 1
MAX_PIECES = 5


class GameStatus(Enum):
    CHOOSING_FIRST_TURN = "choosing_first_turn"
    PLAYING = "playing"
    FINISHED = "finished"


@dataclass(frozen=True)
class TeamConfig:
    id: str
    name: str
    piece_count: int = 4
    color: str = "#3b82f6"
    color_light: str = "#dbeafe"
    emoji: str = "🔵"


@dataclass
class Piece:
    id: str
    team: str
    node_id: Optional[str] = None  # None = home (or finished)
    is_finished: bool = False

    @property
    def at_home(self) -> bool:
        return self.node_id is None and not self.is_finished

    @property
    def on_board(self) -> bool:
        return self.node_id is not None and not self.is_finished

    @property
    def number(self) -> int:
        """1-based piece number within its team, as shown to players."""
        return int(self.id.rsplit("-", 1)[-1]) + 1


@dataclass
class TeamStats:
    move_count: int = 0
    capture_count: int = 0
    stack_count: int = 0
    finished_count: int = 0


@dataclass(frozen=True)
class GameRules:
    # When set, advance_turn refuses to pass the turn while a bonus throw
    # earned by a capture or a finish is still pending.
    enforce_bonus_throw: bool = False


@dataclass
class GameState:
    teams: Tuple[TeamConfig, ...]
    pieces: List[Piece]
    logs: List[str] = field(default_factory=list)
    current_turn: Optional[str] = None
    winner_id: Optional[str] = None
    stats: Dict[str, TeamStats] = field(default_factory=dict)
    status: GameStatus = GameStatus.CHOOSING_FIRST_TURN
    started_at: Optional[float] = None
    bonus_throw_pending: bool = False
    rules: GameRules = field(default_factory=GameRules)

    def copy(self) -> "GameState":
        return GameState(
            teams=self.teams,
            pieces=[replace(piece) for piece in self.pieces],
            logs=list(self.logs),
            current_turn=self.current_turn,
            winner_id=self.winner_id,
            stats={team_id: replace(stats) for team_id, stats in self.stats.items()},
            status=self.status,
            started_at=self.started_at,
            bonus_throw_pending=self.bonus_throw_pending,
            rules=self.rules,
        )

    @property
    def is_terminal(self) -> bool:
        return self.winner_id is not None

    @property
    def team_ids(self) -> List[str]:
        return [team.id for team in self.teams]

    def team_by_id(self, team_id: Optional[str]) -> Optional[TeamConfig]:
        for team in self.teams:
            if team.id == team_id:
                return team
        return None

    def team_name(self, team_id: Optional[str]) -> str:
        team = self.team_by_id(team_id)
        return team.name if team is not None else str(team_id)

    def get_piece(self, piece_id: str) -> Optional[Piece]:
        for piece in self.pieces:
            if piece.id == piece_id:
                return piece
        return None

    def team_pieces(self, team_id: str) -> List[Piece]:
        return [piece for piece in self.pieces if piece.team == team_id]

    def append_log(self, line: str) -> None:
        self.logs.append(line)

    # ------------------------------------------------------------------
    # Snapshot
    # ------------------------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:
        """JSON-serializable snapshot for the storage collaborator."""
        return {
            "teams": [asdict(team) for team in self.teams],
            "pieces": [asdict(piece) for piece in self.pieces],
            "logs": list(self.logs),
            "current_turn": self.current_turn,
            "winner_id": self.winner_id,
            "stats": {team_id: asdict(stats) for team_id, stats in self.stats.items()},
            "status": self.status.value,
            "started_at": self.started_at,
            "bonus_throw_pending": self.bonus_throw_pending,
            "rules": asdict(self.rules),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameState":
        teams = tuple(TeamConfig(**team) for team in data["teams"])
        stats = {team_id: TeamStats(**values) for team_id, values in data.get("stats", {}).items()}
        for team in teams:
            stats.setdefault(team.id, TeamStats())
        return cls(
            teams=teams,
            pieces=[Piece(**piece) for piece in data["pieces"]],
            logs=list(data.get("logs", [])),
            current_turn=data.get("current_turn"),
            winner_id=data.get("winner_id"),
            stats=stats,
            status=GameStatus(data.get("status", GameStatus.CHOOSING_FIRST_TURN.value)),
            started_at=data.get("started_at"),
            bonus_throw_pending=bool(data.get("bonus_throw_pending", False)),
            rules=GameRules(**data.get("rules", {})),
        )

    def __repr__(self) -> str:
        lines = [
            f"GameState(status={self.status.value}, turn={self.current_turn}, winner={self.winner_id})"
        ]
        for team in self.teams:
            positions = " ".join(
                "F" if piece.is_finished else (piece.node_id or "-") for piece in self.team_pieces(team.id)
            )
            lines.append(f"{team.id}: {positions}")
        return "\n".join(lines)


def validate_roster(teams: Sequence[TeamConfig]) -> None:
    if not MIN_TEAMS <= len(teams) <= MAX_TEAMS:
        raise ValueError(f"A game needs {MIN_TEAMS}-{MAX_TEAMS} teams, got {len(teams)}.")
    seen = set()
    for team in teams:
        if not team.id:
            raise ValueError("Team id must not be empty.")
        if team.id in seen:
            raise ValueError(f"Duplicate team id: {team.id}")
        seen.add(team.id)
        if not MIN_PIECES <= team.piece_count <= MAX_PIECES:
            raise ValueError(
                f"Team {team.id} piece count must be {MIN_PIECES}-{MAX_PIECES}, got {team.piece_count}."
            )


def create_pieces(teams: Iterable[TeamConfig]) -> List[Piece]:
    pieces: List[Piece] = []
    for team in teams:
        for i in range(team.piece_count):
            pieces.append(Piece(id=f"{team.id}-{i}", team=team.id))
    return pieces
