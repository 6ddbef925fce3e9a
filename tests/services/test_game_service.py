"""Tests for adjudication, persistence and per-user queries."""

import random
from datetime import UTC, datetime, timedelta

import pytest

from rps_arena.core.errors import InternalError, ValidationError
from rps_arena.models import GameRound
from rps_arena.services.game import BEATS, CHOICES, GameService, judge
from tests.conftest import ScriptedRandom


def test_beats_relation_is_cyclic():
    assert set(BEATS) == set(CHOICES)
    assert set(BEATS.values()) == set(CHOICES)
    for choice in CHOICES:
        assert BEATS[choice] != choice
        assert BEATS[BEATS[BEATS[choice]]] == choice


@pytest.mark.parametrize(
    ("user_choice", "computer_choice", "expected"),
    [
        ("stone", "stone", "draw"),
        ("stone", "scissor", "win"),
        ("stone", "paper", "lose"),
        ("paper", "paper", "draw"),
        ("paper", "stone", "win"),
        ("paper", "scissor", "lose"),
        ("scissor", "scissor", "draw"),
        ("scissor", "paper", "win"),
        ("scissor", "stone", "lose"),
    ],
)
def test_judge(user_choice, computer_choice, expected):
    assert judge(user_choice, computer_choice) == expected


def test_each_choice_has_one_win_and_one_loss():
    for choice in CHOICES:
        outcomes = sorted(judge(choice, other) for other in CHOICES if other != choice)
        assert outcomes == ["lose", "win"]


@pytest.mark.parametrize("bad", ["rock", "Stone", "", None, 1])
def test_judge_rejects_unknown_choice(bad):
    with pytest.raises(ValidationError, match="Invalid choice"):
        judge(bad, "stone")


def test_play_persists_round(db_session, test_user):
    rng = ScriptedRandom()
    rng.queue.append("scissor")
    service = GameService(db_session, rng=rng)

    game = service.play(test_user.id, "stone")

    assert game.id is not None
    assert (game.user_choice, game.computer_choice, game.result) == ("stone", "scissor", "win")
    stored = db_session.query(GameRound).filter(GameRound.user_id == test_user.id).all()
    assert len(stored) == 1
    assert stored[0].result == "win"


@pytest.mark.parametrize("bad", ["rock", None, "", 3])
def test_play_rejects_invalid_choice_without_writing(db_session, test_user, bad):
    service = GameService(db_session)
    with pytest.raises(ValidationError):
        service.play(test_user.id, bad)
    assert db_session.query(GameRound).count() == 0


def test_play_result_is_consistent_with_random_moves(db_session, test_user):
    service = GameService(db_session, rng=random.Random(1234))
    for _ in range(30):
        game = service.play(test_user.id, "paper")
        assert game.computer_choice in CHOICES
        assert game.result == judge("paper", game.computer_choice)


def _add_rounds(db_session, user_id, results, start=None):
    start = start or datetime(2030, 1, 1, tzinfo=UTC)
    choice_for = {"win": "stone", "lose": "scissor", "draw": "paper"}
    for offset, result in enumerate(results):
        db_session.add(
            GameRound(
                user_id=user_id,
                user_choice="paper",
                computer_choice=choice_for[result],
                result=result,
                created_at=start + timedelta(seconds=offset),
            )
        )
    db_session.flush()


def test_history_is_capped_and_newest_first(db_session, test_user):
    _add_rounds(db_session, test_user.id, ["win", "lose", "draw"] * 5)
    history = GameService(db_session).history(test_user.id)

    assert len(history) == 10
    stamps = [game.created_at for game in history]
    assert stamps == sorted(stamps, reverse=True)
    assert len(set(stamps)) == len(stamps)


def test_history_limit_cannot_exceed_cap(db_session, test_user):
    _add_rounds(db_session, test_user.id, ["win"] * 12)
    service = GameService(db_session)
    assert len(service.history(test_user.id, limit=50)) == 10
    assert len(service.history(test_user.id, limit=3)) == 3


def test_history_breaks_timestamp_ties_by_id(db_session, test_user):
    same = datetime(2030, 1, 1, tzinfo=UTC)
    for result in ("win", "lose"):
        db_session.add(
            GameRound(
                user_id=test_user.id,
                user_choice="paper",
                computer_choice="scissor" if result == "lose" else "stone",
                result=result,
                created_at=same,
            )
        )
    db_session.flush()
    history = GameService(db_session).history(test_user.id)
    assert [game.result for game in history] == ["lose", "win"]


def test_history_only_returns_own_rounds(db_session, test_user, other_user):
    _add_rounds(db_session, test_user.id, ["win"] * 2)
    _add_rounds(db_session, other_user.id, ["lose"] * 3)
    history = GameService(db_session).history(test_user.id)
    assert {game.user_id for game in history} == {test_user.id}
    assert len(history) == 2


def test_scoreboard_counts_every_round(db_session, test_user, other_user):
    results = ["win"] * 7 + ["lose"] * 5 + ["draw"] * 4
    _add_rounds(db_session, test_user.id, results)
    _add_rounds(db_session, other_user.id, ["win"] * 9)

    stats = GameService(db_session).scoreboard(test_user.id)
    assert stats == {"win": 7, "lose": 5, "draw": 4}
    assert sum(stats.values()) == len(results)


def test_scoreboard_for_new_user_is_zero(db_session, test_user):
    assert GameService(db_session).scoreboard(test_user.id) == {"win": 0, "lose": 0, "draw": 0}


def test_play_store_failure_rolls_back(db_session, test_user, failing_commit):
    service = GameService(db_session, rng=random.Random(7))
    with pytest.raises(InternalError):
        service.play(test_user.id, "stone")
    assert failing_commit == ["rollback"]
    assert db_session.query(GameRound).count() == 0


def test_history_with_zero_limit_is_empty(db_session, test_user):
    _add_rounds(db_session, test_user.id, ["win"] * 3)
    assert GameService(db_session).history(test_user.id, limit=0) == []
