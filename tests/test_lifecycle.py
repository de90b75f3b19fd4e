import pytest

from yutnori.core import GameRules, GameStatus, TeamConfig, apply_move, elapsed_seconds, initialize, reset, restart, set_first_turn


def teams(*piece_counts):
    return tuple(TeamConfig(id=f"t{i}", name=f"T{i}", piece_count=n) for i, n in enumerate(piece_counts))


def test_initialize_puts_every_piece_home() -> None:
    state = initialize(teams(4, 3))

    assert len(state.pieces) == 7
    assert all(piece.at_home for piece in state.pieces)
    assert [piece.id for piece in state.team_pieces("t1")] == ["t1-0", "t1-1", "t1-2"]
    assert state.status is GameStatus.CHOOSING_FIRST_TURN
    assert state.current_turn is None
    assert state.winner_id is None
    assert state.logs == ["게임 시작! T0 vs T1"]
    assert all(stats.move_count == 0 for stats in state.stats.values())


@pytest.mark.parametrize(
    "roster",
    [
        teams(4),
        teams(4, 4, 4, 4, 4),
        teams(4, 0),
        teams(4, 6),
        (TeamConfig(id="a", name="A"), TeamConfig(id="a", name="B")),
        (TeamConfig(id="", name="A"), TeamConfig(id="b", name="B")),
    ],
)
def test_initialize_rejects_bad_roster(roster) -> None:
    with pytest.raises(ValueError):
        initialize(roster)


def test_set_first_turn_starts_play() -> None:
    state = initialize(teams(4, 4))
    started = set_first_turn(state, "t1", now=100.0)

    assert started.status is GameStatus.PLAYING
    assert started.current_turn == "t1"
    assert started.started_at == 100.0
    assert started.logs[-1] == "🎲 T1 선공!"
    assert state.status is GameStatus.CHOOSING_FIRST_TURN


def test_set_first_turn_ignores_unknown_team_and_second_call() -> None:
    state = initialize(teams(4, 4))
    assert set_first_turn(state, "nope") is state
    started = set_first_turn(state, "t0", now=1.0)
    assert set_first_turn(started, "t1") is started


def test_restart_keeps_roster_and_rules() -> None:
    rules = GameRules(enforce_bonus_throw=True)
    state = set_first_turn(initialize(teams(2, 2), rules=rules), "t0", now=0.0)
    state = apply_move(state, "t0-0", "n3")

    fresh = restart(state)

    assert fresh.teams == state.teams
    assert fresh.rules == rules
    assert all(piece.at_home for piece in fresh.pieces)
    assert fresh.current_turn is None


def test_reset_returns_nothing() -> None:
    assert reset() is None


def test_elapsed_seconds() -> None:
    state = initialize(teams(4, 4))
    assert elapsed_seconds(state, now=50.0) == 0.0
    started = set_first_turn(state, "t0", now=100.0)
    assert elapsed_seconds(started, now=130.0) == 30.0
