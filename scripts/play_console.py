#!/usr/bin/env python3
"""Play Yutnori on the console: players throw real sticks and type in the result."""

import argparse
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Dict, List, Optional

from yutnori import (
    GameState,
    Throw,
    advance_turn,
    apply_move,
    consume_bonus_throw,
    initialize,
    resolve_path,
    set_first_turn,
)
from yutnori.config import default_roster, load_team_roster
from yutnori.core import GameRules, TeamConfig, moving_stack
from yutnori.core.lifecycle import elapsed_seconds
from yutnori.env import render_ascii
from yutnori.logging import configure_logging
from yutnori.validation import load_snapshot

logger = logging.getLogger("yutnori.console")

QUIT_WORDS = {"q", "quit", "exit"}
NEXT_TURN_WORDS = {"n", "next"}


def emit_new_logs(state: GameState, seen: int) -> int:
    for line in state.logs[seen:]:
        logger.info(line)
    return len(state.logs)


def save_json(data: Dict, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")


def apply_record(state: GameState, entry: Dict) -> GameState:
    action = entry.get("action")
    if action == "move":
        return apply_move(state, entry["piece_id"], entry.get("target"), bool(entry.get("is_goal")))
    if action == "next_turn":
        return advance_turn(state)
    if action == "bonus_used":
        return consume_bonus_throw(state)
    raise ValueError(f"Unknown record action: {action!r}")


def replay_logged_game(log_path: Path, *, verbose: bool = True) -> Dict[str, object]:
    data = json.loads(log_path.read_text(encoding="utf-8"))
    metadata = data.get("metadata", {})
    if metadata.get("initial_state") is not None:
        # Resumed games record the board they started from.
        state = load_snapshot(metadata["initial_state"])
    else:
        teams = tuple(TeamConfig(**team) for team in metadata["teams"])
        rules = GameRules(**metadata.get("rules", {}))
        state = set_first_turn(initialize(teams, rules=rules), metadata["first_turn"])
    records = data.get("records", [])
    if verbose:
        print("리플레이를 시작합니다.")
    for entry in records:
        state = apply_record(state, entry)
        if verbose and entry.get("action") == "move":
            print(render_ascii(state))
    summary = {
        "winner": state.winner_id,
        "records": len(records),
        "logs": list(state.logs),
        "pieces": [{"id": p.id, "node_id": p.node_id, "is_finished": p.is_finished} for p in state.pieces],
    }
    if verbose:
        print("리플레이 종료.")
        print(f"승리 팀: {state.team_name(state.winner_id) if state.winner_id else '-'}")
    return summary


def prompt(text: str) -> str:
    raw = input(text).strip()
    if raw.lower() in QUIT_WORDS:
        print("게임을 종료합니다.")
        sys.exit(0)
    return raw


def prompt_first_turn(state: GameState) -> str:
    for i, team in enumerate(state.teams):
        print(f"  {i}: {team.emoji} {team.name}")
    while True:
        raw = prompt("선공 팀 번호: ")
        if raw.isdigit() and int(raw) < len(state.teams):
            return state.teams[int(raw)].id
        print("올바른 번호를 입력하세요.")


def choose_first_turn(state: GameState, requested: Optional[str]) -> str:
    if requested is not None:
        if state.team_by_id(requested) is not None:
            return requested
        print(f"알 수 없는 팀입니다: {requested}")
    return prompt_first_turn(state)


def prompt_throw() -> Optional[Throw]:
    while True:
        raw = prompt("윷 결과 (도/개/걸/윷/모/빽도, n=턴 넘기기, q=종료): ")
        if raw.lower() in NEXT_TURN_WORDS:
            return None
        try:
            return Throw.parse(raw)
        except ValueError:
            print("알 수 없는 결과입니다.")


def prompt_piece(state: GameState, throw: Throw) -> Optional[str]:
    options = []
    seen_stacks = set()
    for piece in state.team_pieces(state.current_turn):
        if piece.is_finished:
            continue
        if piece.node_id is not None:
            if piece.node_id in seen_stacks:
                continue
            seen_stacks.add(piece.node_id)
        result = resolve_path(piece.node_id, int(throw))
        if result.is_empty:
            continue
        options.append((piece, result))

    if not options:
        print("움직일 수 있는 말이 없습니다.")
        return None

    for i, (piece, result) in enumerate(options):
        size = len(moving_stack(state, piece.id))
        where = piece.node_id or "대기석"
        goal = " (골인)" if result.reaches_goal else ""
        print(f"  {i}: {piece.number}번 말 x{size} @ {where} -> {' '.join(result.path)}{goal}")
    while True:
        raw = prompt("움직일 말 번호: ")
        if raw.isdigit() and int(raw) < len(options):
            return options[int(raw)][0].id
        print("올바른 번호를 입력하세요.")


def play_interactive(args: argparse.Namespace) -> None:
    if args.roster:
        teams, rules = load_team_roster(args.roster)
    else:
        teams, rules = default_roster(args.teams, args.pieces), GameRules()
    configure_logging(team_names=[team.name for team in teams])

    state_file = Path(args.state_file) if args.state_file else None
    if state_file is not None and args.resume and state_file.exists():
        state = load_snapshot(json.loads(state_file.read_text(encoding="utf-8")))
        teams, rules = state.teams, state.rules
    else:
        state = initialize(teams, rules=rules)
    seen = emit_new_logs(state, 0)

    if state.current_turn is None:
        state = set_first_turn(state, choose_first_turn(state, args.first_turn))
    first_turn = state.current_turn
    initial_state = state.to_dict()
    seen = emit_new_logs(state, seen)
    records: List[Dict] = []

    while not state.is_terminal:
        print()
        print(render_ascii(state))
        team = state.team_by_id(state.current_turn)
        print(f"차례: {team.emoji} {team.name}  (경과 {int(elapsed_seconds(state))}초)")

        throw = prompt_throw()
        if throw is None:
            state = advance_turn(state)
            records.append({"action": "next_turn"})
        else:
            piece_id = prompt_piece(state, throw)
            if piece_id is None:
                continue
            piece = state.get_piece(piece_id)
            result = resolve_path(piece.node_id, int(throw))
            state = apply_move(state, piece_id, result.destination, result.reaches_goal)
            records.append(
                {
                    "action": "move",
                    "team": piece.team,
                    "piece_id": piece_id,
                    "throw": throw.label,
                    "target": result.destination,
                    "is_goal": result.reaches_goal,
                }
            )
            if not state.is_terminal and (throw.grants_extra_throw or state.bonus_throw_pending):
                print("한 번 더 던지세요!")
                state = consume_bonus_throw(state)
                records.append({"action": "bonus_used"})

        seen = emit_new_logs(state, seen)
        if state_file is not None:
            save_json(state.to_dict(), state_file)

    print()
    print(render_ascii(state))

    if args.log_file:
        metadata = {
            "teams": [asdict(team) for team in teams],
            "rules": asdict(rules),
            "first_turn": first_turn,
            "winner": state.winner_id,
            "initial_state": initial_state,
        }
        save_json({"metadata": metadata, "records": records}, Path(args.log_file))
        print(f"기록을 {args.log_file} 에 저장했습니다.")


def main() -> None:
    parser = argparse.ArgumentParser(description="Console Yutnori board.")
    parser.add_argument("--roster", help="YAML roster file", default=None)
    parser.add_argument("--teams", type=int, default=2)
    parser.add_argument("--pieces", type=int, default=4)
    parser.add_argument("--first-turn", help="Team id that starts", default=None)
    parser.add_argument("--state-file", help="Write the game snapshot here after every action")
    parser.add_argument("--resume", action="store_true", help="Continue from --state-file if present")
    parser.add_argument("--log-file", type=str)
    parser.add_argument("--replay-log", type=str, help="Replay a recorded game and exit")
    parser.add_argument("--replay-quiet", action="store_true")
    args = parser.parse_args()

    if args.replay_log:
        replay_logged_game(Path(args.replay_log), verbose=not args.replay_quiet)
        return

    play_interactive(args)


if __name__ == "__main__":
    main()
