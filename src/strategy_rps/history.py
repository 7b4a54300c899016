from collections import Counter
from types import MappingProxyType
from typing import Mapping, Optional

from strategy_rps.game_logic import MOVES, Move


class MoveHistory:
    """How many times the player has chosen each move. Only ever grows."""

    def __init__(self, counts: Optional[Mapping[Move, int]] = None):
        self._counts: Counter = Counter()
        for move, n in (counts or {}).items():
            if n > 0:
                self._counts[move] = int(n)

    def record(self, move: Move) -> None:
        self._counts[move] += 1

    def count(self, move: Move) -> int:
        return self._counts.get(move, 0)

    def counts(self) -> Mapping[Move, int]:
        return MappingProxyType(dict(self._counts))

    def total(self) -> int:
        return sum(self._counts.values())

    def seen(self, move: Move) -> bool:
        return self._counts.get(move, 0) > 0

    # min()/max() keep the first element on ties, so MOVES order decides.
    def least_used(self) -> Move:
        return min(MOVES, key=self.count)

    def most_used(self) -> Move:
        return max(MOVES, key=self.count)

    def __bool__(self):
        return bool(self._counts)

    def __repr__(self):
        inner = ", ".join(f"{m.label}:{self.count(m)}" for m in MOVES)
        return f"MoveHistory({inner})"
