from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from .board import get_node, is_node
from .events import GameEventListener, MoveEvent
from .state import GameState, GameStatus, Piece, TeamStats

logger = logging.getLogger(__name__)

HOME_LABEL = "대기석"

StackKey = Tuple[str, str]  # (node_id, team_id)
Notification = Callable[[GameEventListener], None]


def group_stacks(pieces: Sequence[Piece]) -> Dict[StackKey, List[Piece]]:
    """Group the non-finished pieces on the board by (node, team)."""
    groups: Dict[StackKey, List[Piece]] = {}
    for piece in pieces:
        if piece.on_board:
            groups.setdefault((piece.node_id, piece.team), []).append(piece)
    return groups


def pieces_at(state: GameState, node_id: str, team_id: Optional[str] = None) -> List[Piece]:
    return [
        piece
        for piece in state.pieces
        if piece.on_board and piece.node_id == node_id and (team_id is None or piece.team == team_id)
    ]


def moving_stack(state: GameState, piece_id: str) -> List[Piece]:
    """Pieces that travel together when ``piece_id`` moves (업기).

    A piece at home always moves alone.
    """
    piece = state.get_piece(piece_id)
    if piece is None or piece.is_finished:
        return []
    if piece.node_id is None:
        return [piece]
    return pieces_at(state, piece.node_id, piece.team)


def finished_count(state: GameState, team_id: str) -> int:
    return sum(1 for piece in state.team_pieces(team_id) if piece.is_finished)


def _node_label(node_id: Optional[str]) -> str:
    if node_id is None:
        return HOME_LABEL
    node = get_node(node_id)
    return node.display_name if node is not None else node_id


def _describe_pieces(state: GameState, stack: Sequence[Piece]) -> str:
    lead = stack[0]
    text = f"{state.team_name(lead.team)} {lead.number}번 말"
    if len(stack) > 1:
        text += f" 외 {len(stack) - 1}개"
    return text


def _turn_advisory(state: GameState) -> str:
    if state.current_turn is None:
        return "⚠️ 아직 선공이 정해지지 않았습니다."
    return f"⚠️ 지금은 {state.team_name(state.current_turn)}의 차례입니다."


def apply_move(
    state: GameState,
    piece_id: str,
    target_node_id: Optional[str],
    is_goal: bool = False,
    *,
    in_place: bool = False,
    listener: Optional[GameEventListener] = None,
) -> GameState:
    """Move ``piece_id`` (and its stack) to ``target_node_id`` and resolve the landing.

    ``target_node_id`` of ``None`` sends the stack home; ``is_goal`` finishes it.
    Expected edge cases (finished game, unknown piece, wrong turn) never raise:
    the state comes back unchanged, with an advisory log line for a wrong turn.
    """
    if state.is_terminal:
        return state

    piece = state.get_piece(piece_id)
    if piece is None or piece.is_finished:
        logger.debug("Ignoring move of unknown or finished piece %s", piece_id)
        return state
    if piece.team != state.current_turn:
        logger.info("Rejected out-of-turn move of %s (turn: %s)", piece_id, state.current_turn)
        result = state if in_place else state.copy()
        result.append_log(_turn_advisory(result))
        return result
    if not is_goal and target_node_id is not None and not is_node(target_node_id):
        logger.warning("Ignoring move of %s to unknown node %s", piece_id, target_node_id)
        return state
    if not is_goal and target_node_id == piece.node_id:
        # Dropped back where it started: not a move.
        return state

    result = state if in_place else state.copy()

    team_id = piece.team
    stack = moving_stack(result, piece_id)
    origin = stack[0].node_id
    stats = result.stats.setdefault(team_id, TeamStats())
    description = _describe_pieces(result, stack)
    move_event = MoveEvent(
        team=team_id,
        piece_ids=tuple(member.id for member in stack),
        origin=origin,
        target=None if is_goal else target_node_id,
        is_goal=is_goal,
    )
    notifications: List[Notification] = [lambda sink: sink.on_move(move_event)]

    if is_goal:
        for member in stack:
            member.node_id = None
            member.is_finished = True
        stats.move_count += 1
        stats.finished_count += len(stack)
        result.bonus_throw_pending = True
        result.append_log(f"🏁 {description} 골인!")
        notifications.append(lambda sink: sink.on_finish(team_id, len(stack)))
    else:
        merged = pieces_at(result, target_node_id, team_id) if target_node_id is not None else []
        if merged:
            stats.stack_count += 1

        for member in stack:
            member.node_id = target_node_id
        stats.move_count += 1
        result.append_log(f"{description} → {_node_label(target_node_id)}")
        if merged:
            result.append_log(
                f"👐 {result.team_name(team_id)} 말 업기! ({_node_label(target_node_id)}, {len(merged) + len(stack)}개)"
            )

        if target_node_id is not None:
            notifications.extend(_resolve_captures(result, team_id, target_node_id, stats))

    if all(member.is_finished for member in result.team_pieces(team_id)):
        result.winner_id = team_id
        result.status = GameStatus.FINISHED
        result.append_log(f"🏆 {result.team_name(team_id)} 승리!")
        notifications.append(lambda sink: sink.on_game_complete(team_id))

    if listener is not None:
        for notify in notifications:
            notify(listener)
    return result


def _resolve_captures(
    state: GameState,
    team_id: str,
    node_id: str,
    stats: TeamStats,
) -> List[Notification]:
    victims = [piece for piece in pieces_at(state, node_id) if piece.team != team_id]
    if not victims:
        return []

    by_team: Dict[str, int] = {}
    for victim in victims:
        victim.node_id = None
        by_team[victim.team] = by_team.get(victim.team, 0) + 1

    stats.capture_count += 1
    state.bonus_throw_pending = True

    notifications: List[Notification] = []
    for captured_team in state.team_ids:
        count = by_team.get(captured_team)
        if not count:
            continue
        state.append_log(
            f"⚔️ {state.team_name(team_id)}: {state.team_name(captured_team)} 말 {count}개 잡기!"
        )
        notifications.append(
            lambda sink, captured=captured_team, n=count: sink.on_capture(team_id, captured, n)
        )
    return notifications


def advance_turn(state: GameState, *, in_place: bool = False) -> GameState:
    """Pass the turn to the next team in roster order."""
    if state.is_terminal or state.current_turn is None:
        return state

    result = state if in_place else state.copy()
    if result.bonus_throw_pending and result.rules.enforce_bonus_throw:
        result.append_log(f"⚠️ {result.team_name(result.current_turn)}의 보너스 던지기가 남아 있습니다.")
        return result

    team_ids = result.team_ids
    index = team_ids.index(result.current_turn)
    result.current_turn = team_ids[(index + 1) % len(team_ids)]
    result.bonus_throw_pending = False
    result.append_log(f"⏭️ {result.team_name(result.current_turn)}의 차례")
    return result


def consume_bonus_throw(state: GameState, *, in_place: bool = False) -> GameState:
    """Mark the pending bonus throw as used."""
    if not state.bonus_throw_pending:
        return state
    result = state if in_place else state.copy()
    result.bonus_throw_pending = False
    return result
