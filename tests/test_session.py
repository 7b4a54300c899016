import random
import threading

import pytest

from strategy_rps.ai_policy import LastUsedStrategy, Strategy
from strategy_rps.game_logic import MOVES, Move, Result
from strategy_rps.session import GameSession, SessionTally


class FixedStrategy(Strategy):
    name = "FixedStrategy"

    def __init__(self, move):
        super().__init__()
        self.move = move

    def determine_move(self, history, last_move):
        return self.move


def _tally(t: SessionTally):
    return (t.player_wins, t.computer_wins, t.ties)


@pytest.mark.parametrize(
    "ai_move, expected, tally",
    [
        (Move.SCISSORS, Result.PLAYER_WIN, (1, 0, 0)),
        (Move.ROCK, Result.TIE, (0, 0, 1)),
        (Move.PAPER, Result.COMPUTER_WIN, (0, 1, 0)),
    ],
)
def test_single_turn_end_to_end(ai_move, expected, tally):
    session = GameSession(strategies=[FixedStrategy(ai_move)])
    outcome = session.play_turn(Move.ROCK)
    assert outcome.player_move == Move.ROCK
    assert outcome.computer_move == ai_move
    assert outcome.result == expected
    assert outcome.strategy_name == "FixedStrategy"
    assert _tally(session.current_tally()) == tally


def test_tally_sums_to_rounds_played():
    session = GameSession(seed=42)
    rng = random.Random(5)
    for i in range(500):
        m = rng.choice(MOVES)
        outcome = session.play_turn(m)
        assert outcome.player_move == m
    t = session.current_tally()
    assert t.player_wins + t.computer_wins + t.ties == 500
    assert t.rounds == 500
    assert session.history.total() == 500
    assert len(session.log()) == 500


def test_every_strategy_gets_used():
    session = GameSession(seed=1)
    used = {session.play_turn(Move.PAPER).strategy_name for _ in range(200)}
    assert used == {
        "RandomStrategy",
        "LeastUsedStrategy",
        "MostUsedStrategy",
        "LastUsedStrategy",
        "CheatStrategy",
    }


def test_last_used_sees_the_move_just_played():
    session = GameSession(strategies=[LastUsedStrategy()])
    outcomes = [session.play_turn(m) for m in (Move.PAPER, Move.ROCK, Move.SCISSORS)]
    assert session.last_move == Move.SCISSORS
    assert outcomes[-1].computer_move == Move.SCISSORS
    assert all(o.result == Result.TIE for o in outcomes)


def test_same_seed_same_game():
    moves = [Move.ROCK, Move.PAPER, Move.PAPER, Move.SCISSORS] * 10
    a = GameSession(seed=2024)
    b = GameSession(seed=2024)
    assert [a.play_turn(m) for m in moves] == [b.play_turn(m) for m in moves]


def test_tally_snapshot_is_detached():
    session = GameSession(strategies=[FixedStrategy(Move.SCISSORS)])
    snap = session.current_tally()
    session.play_turn(Move.ROCK)
    assert _tally(snap) == (0, 0, 0)
    assert _tally(session.current_tally()) == (1, 0, 0)


def test_log_is_ordered_and_capped():
    session = GameSession(strategies=[FixedStrategy(Move.ROCK)], max_log=3)
    for m in (Move.ROCK, Move.PAPER, Move.SCISSORS, Move.PAPER):
        session.play_turn(m)
    assert [o.player_move for o in session.log()] == [Move.PAPER, Move.SCISSORS, Move.PAPER]
    # the tally is never capped
    assert session.current_tally().rounds == 4


def test_on_round_callback_and_quit():
    seen = []
    session = GameSession(strategies=[FixedStrategy(Move.PAPER)], on_round=seen.append)
    session.play_turn(Move.SCISSORS)
    assert [o.result for o in seen] == [Result.PLAYER_WIN]
    session.quit()
    assert session.current_tally().rounds == 1


def test_from_config():
    cfg = {"ai": {"seed": 7}, "session": {"max_log": 2}}
    a = GameSession.from_config(cfg)
    b = GameSession(seed=7)
    moves = [Move.ROCK, Move.SCISSORS, Move.ROCK]
    assert [a.play_turn(m) for m in moves] == [b.play_turn(m) for m in moves]
    assert len(a.log()) == 2


def test_concurrent_turns_keep_tally_consistent():
    session = GameSession(seed=3)

    def worker():
        for _ in range(200):
            session.play_turn(Move.ROCK)

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert session.current_tally().rounds == 800
    assert session.history.count(Move.ROCK) == 800
    assert len(session.log()) == 800
