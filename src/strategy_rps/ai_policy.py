import random
from typing import List, Optional, Sequence

from strategy_rps.game_logic import LOSES_TO, MOVES, Move
from strategy_rps.history import MoveHistory

CHEAT_ODDS = 10  # one draw in ten cheats


class Strategy:
    name = "Strategy"

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def determine_move(self, history: MoveHistory, last_move: Optional[Move]) -> Move:
        raise NotImplementedError

    def __repr__(self):
        return f"<{self.name}>"


class RandomStrategy(Strategy):
    name = "RandomStrategy"

    def determine_move(self, history, last_move):
        return self.rng.choice(MOVES)


class LeastUsedStrategy(Strategy):
    """Plays whatever the player has picked least often."""
    name = "LeastUsedStrategy"

    def determine_move(self, history, last_move):
        return history.least_used()


class MostUsedStrategy(Strategy):
    """Plays whatever the player has picked most often."""
    name = "MostUsedStrategy"

    def determine_move(self, history, last_move):
        return history.most_used()


class LastUsedStrategy(Strategy):
    name = "LastUsedStrategy"

    def determine_move(self, history, last_move):
        return last_move if last_move is not None else Move.ROCK


class CheatStrategy(Strategy):
    """
    One time in ten, peeks at the aggregate history: checks Rock, Paper,
    Scissors in that order and plays the counter to the first one the player
    has ever used. Every other time (or with nothing to peek at) it plays
    like RandomStrategy.
    """
    name = "CheatStrategy"

    def __init__(self, rng: Optional[random.Random] = None, fallback: Optional[Strategy] = None):
        super().__init__(rng)
        self.fallback = fallback or RandomStrategy(self.rng)

    def determine_move(self, history, last_move):
        if self.rng.randrange(CHEAT_ODDS) < 1:
            for move in MOVES:
                if history.seen(move):
                    return LOSES_TO[move]
        return self.fallback.determine_move(history, last_move)


STRATEGY_TYPES = [
    RandomStrategy,
    LeastUsedStrategy,
    MostUsedStrategy,
    LastUsedStrategy,
    CheatStrategy,
]


def make_strategies(rng: random.Random) -> List[Strategy]:
    """The five stock strategies, all drawing from one generator."""
    return [cls(rng) for cls in STRATEGY_TYPES]


class StrategySelector:
    """Picks one strategy per turn, uniformly and independently of past picks."""

    def __init__(self, strategies: Sequence[Strategy], rng: Optional[random.Random] = None):
        if not strategies:
            raise ValueError("StrategySelector needs at least one strategy")
        self.strategies = list(strategies)
        self.rng = rng or random.Random()

    def pick(self) -> Strategy:
        return self.rng.choice(self.strategies)

    def names(self) -> List[str]:
        return [s.name for s in self.strategies]
