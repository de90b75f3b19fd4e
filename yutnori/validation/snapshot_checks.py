from __future__ import annotations

import re
from typing import Any, Dict

from yutnori.core import GameState, GameStatus, get_node


class SnapshotError(ValueError):
    pass


def validate_snapshot(data: Dict[str, Any]) -> None:
    for key in ("teams", "pieces"):
        if key not in data:
            raise SnapshotError(f"snapshot is missing '{key}'")
    team_ids = set()
    for team in data["teams"]:
        if "id" not in team:
            raise SnapshotError("team entry without id")
        team_ids.add(team["id"])
    if len(team_ids) != len(data["teams"]):
        raise SnapshotError("duplicate team ids")

    seen_pieces = set()
    for piece in data["pieces"]:
        piece_id = piece.get("id")
        if piece_id in seen_pieces:
            raise SnapshotError(f"duplicate piece id {piece_id}")
        seen_pieces.add(piece_id)
        if piece.get("team") not in team_ids:
            raise SnapshotError(f"piece {piece_id} belongs to unknown team {piece.get('team')}")
        if not isinstance(piece_id, str) or not re.fullmatch(re.escape(str(piece["team"])) + r"-\d+", piece_id):
            raise SnapshotError(f"piece id {piece_id!r} is not of the form '<team>-<index>'")
        node_id = piece.get("node_id")
        if piece.get("is_finished") and node_id is not None:
            raise SnapshotError(f"finished piece {piece_id} is still on node {node_id}")
        if node_id is not None and get_node(node_id) is None:
            raise SnapshotError(f"piece {piece_id} is on unknown node {node_id}")

    for key in ("current_turn", "winner_id"):
        value = data.get(key)
        if value is not None and value not in team_ids:
            raise SnapshotError(f"{key} refers to unknown team {value}")

    status = data.get("status", GameStatus.CHOOSING_FIRST_TURN.value)
    if status not in {s.value for s in GameStatus}:
        raise SnapshotError(f"unknown status {status!r}")


def load_snapshot(data: Dict[str, Any]) -> GameState:
    validate_snapshot(data)
    try:
        return GameState.from_dict(data)
    except (TypeError, KeyError) as exc:
        raise SnapshotError(f"malformed snapshot: {exc}") from exc
