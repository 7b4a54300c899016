import random
import threading
from collections import deque
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from loguru import logger

from strategy_rps.ai_policy import Strategy, StrategySelector, make_strategies
from strategy_rps.game_logic import Move, Result, RoundOutcome, resolve
from strategy_rps.history import MoveHistory


@dataclass
class SessionTally:
    player_wins: int = 0
    computer_wins: int = 0
    ties: int = 0

    @property
    def rounds(self) -> int:
        return self.player_wins + self.computer_wins + self.ties

    def apply(self, result: Result) -> None:
        if result is Result.PLAYER_WIN:
            self.player_wins += 1
        elif result is Result.COMPUTER_WIN:
            self.computer_wins += 1
        else:
            self.ties += 1

    def snapshot(self) -> "SessionTally":
        return SessionTally(self.player_wins, self.computer_wins, self.ties)

    def as_dict(self) -> dict:
        return {
            "player_wins": self.player_wins,
            "computer_wins": self.computer_wins,
            "ties": self.ties,
            "rounds": self.rounds,
        }

    def format_line(self) -> str:
        return f"Player Wins: {self.player_wins}  Computer Wins: {self.computer_wins}  Ties: {self.ties}"


class GameSession:
    """
    All mutable game state for one player: move history, tally and round log.

    play_turn() runs record -> pick strategy -> determine move -> resolve ->
    apply as one step under a lock. Pass `seed` or `rng` for a reproducible
    opponent, or `strategies` to replace the stock five (the selector still
    picks uniformly among whatever is given).
    """

    def __init__(
        self,
        strategies: Optional[Sequence[Strategy]] = None,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
        max_log: int = 0,
        on_round: Optional[Callable[[RoundOutcome], None]] = None,
    ):
        self.rng = rng or random.Random(seed)
        self.history = MoveHistory()
        self.last_move: Optional[Move] = None
        self.tally = SessionTally()
        self.selector = StrategySelector(strategies or make_strategies(self.rng), self.rng)
        # max_log <= 0 keeps every round
        self._log: deque = deque(maxlen=max_log if max_log and max_log > 0 else None)
        self._on_round = on_round
        self._lock = threading.Lock()
        logger.info(f"New session: strategies={self.selector.names()} max_log={max_log or 'unbounded'}")

    @classmethod
    def from_config(cls, cfg: dict, **kwargs) -> "GameSession":
        kwargs.setdefault("seed", cfg.get("ai", {}).get("seed"))
        kwargs.setdefault("max_log", int(cfg.get("session", {}).get("max_log") or 0))
        return cls(**kwargs)

    def play_turn(self, player_move: Move) -> RoundOutcome:
        with self._lock:
            self.history.record(player_move)
            self.last_move = player_move

            strategy = self.selector.pick()
            computer_move = strategy.determine_move(self.history, self.last_move)

            outcome = resolve(player_move, computer_move, strategy.name)
            self.tally.apply(outcome.result)
            self._log.append(outcome)
            logger.debug(
                f"Round {self.tally.rounds}: player={player_move.value} ai={computer_move.value} "
                f"strategy={strategy.name} result={outcome.result.value}"
            )

        if self._on_round is not None:
            self._on_round(outcome)
        return outcome

    def current_tally(self) -> SessionTally:
        with self._lock:
            return self.tally.snapshot()

    def log(self) -> List[RoundOutcome]:
        with self._lock:
            return list(self._log)

    def quit(self) -> None:
        # Game state is untouched; ending the process is the caller's business.
        logger.info(f"Session over after {self.tally.rounds} rounds. {self.tally.format_line()}")
