from yutnori.core import (
    GameEventAdapter,
    GameRules,
    GameStatus,
    TeamConfig,
    advance_turn,
    apply_move,
    consume_bonus_throw,
    group_stacks,
    initialize,
    moving_stack,
    pieces_at,
    resolve_path,
    set_first_turn,
)


def make_teams(count=2, pieces=4):
    return tuple(
        TeamConfig(id=f"team{i}", name=f"Team {chr(ord('A') + i)}", piece_count=pieces) for i in range(count)
    )


def playing_state(count=2, pieces=4, first="team0", rules=None):
    return set_first_turn(initialize(make_teams(count, pieces), rules=rules), first, now=0.0)


def place(state, piece_id, node_id):
    state.get_piece(piece_id).node_id = node_id


def finish(state, piece_id):
    piece = state.get_piece(piece_id)
    piece.node_id = None
    piece.is_finished = True


class RecordingListener(GameEventAdapter):
    def __init__(self):
        self.calls = []

    def on_move(self, event):
        self.calls.append(("move", event))

    def on_capture(self, capturing_team, captured_team, count):
        self.calls.append(("capture", capturing_team, captured_team, count))

    def on_finish(self, team, count):
        self.calls.append(("finish", team, count))

    def on_game_complete(self, winner):
        self.calls.append(("complete", winner))


def test_move_from_home_leaves_original_untouched() -> None:
    state = playing_state()
    target = resolve_path(None, 1).destination
    new_state = apply_move(state, "team0-0", target)

    assert new_state is not state
    assert new_state.get_piece("team0-0").node_id == "n1"
    assert new_state.stats["team0"].move_count == 1
    assert new_state.logs[-1] == "Team A 1번 말 → n1"
    assert state.get_piece("team0-0").node_id is None
    assert state.stats["team0"].move_count == 0


def test_home_piece_moves_alone() -> None:
    state = apply_move(playing_state(), "team0-0", "n2")
    assert [piece.id for piece in moving_stack(state, "team0-1")] == ["team0-1"]
    assert state.get_piece("team0-1").at_home


def test_capture_sends_opponent_stack_home() -> None:
    state = playing_state()
    place(state, "team1-0", "n3")
    place(state, "team1-1", "n3")
    place(state, "team0-0", "n1")

    new_state = apply_move(state, "team0-0", "n3")

    assert new_state.get_piece("team0-0").node_id == "n3"
    for piece_id in ("team1-0", "team1-1"):
        piece = new_state.get_piece(piece_id)
        assert piece.node_id is None
        assert not piece.is_finished
    assert new_state.stats["team0"].capture_count == 1
    assert new_state.bonus_throw_pending
    capture_lines = [line for line in new_state.logs if line.startswith("⚔️")]
    assert capture_lines == ["⚔️ Team A: Team B 말 2개 잡기!"]


def test_capture_leaves_own_pieces_on_target() -> None:
    state = playing_state()
    place(state, "team0-1", "n3")
    place(state, "team1-0", "n3")
    place(state, "team0-0", "n1")

    new_state = apply_move(state, "team0-0", "n3")

    assert {p.id for p in pieces_at(new_state, "n3")} == {"team0-0", "team0-1"}
    assert new_state.get_piece("team1-0").at_home
    assert new_state.stats["team0"].stack_count == 1


def test_capture_of_several_teams_logs_each_team() -> None:
    state = playing_state(count=3)
    place(state, "team1-0", "n5")
    place(state, "team2-0", "n5")
    place(state, "team2-1", "n5")
    place(state, "team0-0", "n4")
    listener = RecordingListener()

    new_state = apply_move(state, "team0-0", "n5", listener=listener)

    assert new_state.stats["team0"].capture_count == 1
    capture_lines = [line for line in new_state.logs if line.startswith("⚔️")]
    assert capture_lines == ["⚔️ Team A: Team B 말 1개 잡기!", "⚔️ Team A: Team C 말 2개 잡기!"]
    captures = [call for call in listener.calls if call[0] == "capture"]
    assert captures == [("capture", "team0", "team1", 1), ("capture", "team0", "team2", 2)]


def test_landing_on_teammates_merges_and_stack_moves_together() -> None:
    state = playing_state()
    place(state, "team0-0", "n7")
    place(state, "team0-1", "n7")
    place(state, "team0-2", "n4")

    merged = apply_move(state, "team0-2", "n7")

    assert merged.stats["team0"].stack_count == 1
    assert len(pieces_at(merged, "n7", "team0")) == 3
    assert merged.logs[-1] == "👐 Team A 말 업기! (n7, 3개)"
    assert len(moving_stack(merged, "team0-0")) == 3

    moved = apply_move(merged, "team0-0", "n9")
    assert {p.node_id for p in moved.team_pieces("team0") if p.on_board} == {"n9"}
    assert moved.stats["team0"].move_count == 2
    assert moved.logs[-1] == "Team A 1번 말 외 2개 → n9"


def test_opposing_stacks_on_other_nodes_are_untouched() -> None:
    state = playing_state()
    place(state, "team1-0", "n3")
    new_state = apply_move(state, "team0-0", "n2")
    assert new_state.get_piece("team1-0").node_id == "n3"
    assert new_state.stats["team0"].capture_count == 0
    assert not new_state.bonus_throw_pending


def test_goal_finishes_stack_without_winning() -> None:
    state = playing_state()
    place(state, "team0-0", "n19")
    place(state, "team0-1", "n19")
    listener = RecordingListener()

    new_state = apply_move(state, "team0-0", None, True, listener=listener)

    assert all(new_state.get_piece(pid).is_finished for pid in ("team0-0", "team0-1"))
    assert new_state.stats["team0"].finished_count == 2
    assert new_state.winner_id is None
    assert new_state.bonus_throw_pending
    assert new_state.logs[-1] == "🏁 Team A 1번 말 외 1개 골인!"
    assert listener.calls[0][0] == "move"
    assert listener.calls[0][1].is_goal
    assert ("finish", "team0", 2) in listener.calls


def test_last_piece_home_wins_and_freezes_game() -> None:
    state = playing_state()
    for piece_id in ("team0-0", "team0-1", "team0-2"):
        finish(state, piece_id)
    state.stats["team0"].finished_count = 3
    place(state, "team0-3", "n19")
    listener = RecordingListener()

    won = apply_move(state, "team0-3", None, True, listener=listener)

    assert won.stats["team0"].finished_count == 4
    assert won.winner_id == "team0"
    assert won.status is GameStatus.FINISHED
    assert won.logs[-1] == "🏆 Team A 승리!"
    assert listener.calls[-1] == ("complete", "team0")

    assert apply_move(won, "team1-0", "n1") is won
    assert advance_turn(won) is won


def test_out_of_turn_move_only_logs_advisory() -> None:
    state = playing_state()
    new_state = apply_move(state, "team1-0", "n1")

    assert new_state.get_piece("team1-0").at_home
    assert new_state.stats == state.stats
    assert len(new_state.logs) == len(state.logs) + 1
    assert "Team A" in new_state.logs[-1]


def test_out_of_turn_drop_in_place_or_off_board_still_logs_advisory() -> None:
    state = playing_state()
    place(state, "team1-0", "n3")

    same_node = apply_move(state, "team1-0", "n3")
    unknown_node = apply_move(state, "team1-0", "n99")

    for new_state in (same_node, unknown_node):
        assert new_state.get_piece("team1-0").node_id == "n3"
        assert len(new_state.logs) == len(state.logs) + 1
        assert new_state.logs[-1] == "⚠️ 지금은 Team A의 차례입니다."


def test_move_before_first_turn_is_rejected() -> None:
    state = initialize(make_teams())
    new_state = apply_move(state, "team0-0", "n1")
    assert new_state.get_piece("team0-0").at_home
    assert "선공" in new_state.logs[-1]


def test_drop_on_current_node_is_noop() -> None:
    state = playing_state()
    place(state, "team0-0", "n1")
    assert apply_move(state, "team0-0", "n1") is state


def test_unknown_piece_or_node_is_noop() -> None:
    state = playing_state()
    assert apply_move(state, "team9-0", "n1") is state
    assert apply_move(state, "team0-0", "n99") is state


def test_send_stack_home() -> None:
    state = playing_state()
    place(state, "team0-0", "n4")
    place(state, "team0-1", "n4")

    new_state = apply_move(state, "team0-0", None)

    assert new_state.get_piece("team0-0").at_home
    assert new_state.get_piece("team0-1").at_home
    assert new_state.stats["team0"].move_count == 1
    assert new_state.logs[-1] == "Team A 1번 말 외 1개 → 대기석"


def test_in_place_mutates_given_state() -> None:
    state = playing_state()
    result = apply_move(state, "team0-0", "n1", in_place=True)
    assert result is state
    assert state.get_piece("team0-0").node_id == "n1"


def test_group_stacks_keys_by_node_and_team() -> None:
    state = playing_state()
    place(state, "team0-0", "n3")
    place(state, "team0-1", "n3")
    place(state, "team1-0", "n3")
    groups = group_stacks(state.pieces)
    assert len(groups[("n3", "team0")]) == 2
    assert len(groups[("n3", "team1")]) == 1


def test_advance_turn_cycles_in_roster_order() -> None:
    state = playing_state(count=3)
    order = []
    for _ in range(4):
        state = advance_turn(state)
        order.append(state.current_turn)
    assert order == ["team1", "team2", "team0", "team1"]
    assert state.logs[-1] == "⏭️ Team B의 차례"


def test_advance_turn_before_first_turn_is_noop() -> None:
    state = initialize(make_teams())
    assert advance_turn(state) is state


def test_advance_turn_clears_pending_bonus_by_default() -> None:
    state = playing_state()
    state.bonus_throw_pending = True
    new_state = advance_turn(state)
    assert new_state.current_turn == "team1"
    assert not new_state.bonus_throw_pending


def test_enforced_bonus_throw_blocks_turn_until_consumed() -> None:
    state = playing_state(rules=GameRules(enforce_bonus_throw=True))
    place(state, "team1-0", "n2")
    state = apply_move(state, "team0-0", "n2")
    assert state.bonus_throw_pending

    blocked = advance_turn(state)
    assert blocked.current_turn == "team0"
    assert "보너스" in blocked.logs[-1]

    used = consume_bonus_throw(blocked)
    assert not used.bonus_throw_pending
    assert advance_turn(used).current_turn == "team1"


def test_consume_bonus_throw_without_pending_is_noop() -> None:
    state = playing_state()
    assert consume_bonus_throw(state) is state
