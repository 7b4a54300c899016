from dataclasses import dataclass
from enum import Enum


class Move(str, Enum):
    ROCK = "rock"
    PAPER = "paper"
    SCISSORS = "scissors"

    @property
    def label(self) -> str:
        return self.value.capitalize()


# Vocabulary order; tie-breaks in the history queries follow it.
MOVES = [Move.ROCK, Move.PAPER, Move.SCISSORS]
BEATS = {Move.ROCK: Move.SCISSORS, Move.PAPER: Move.ROCK, Move.SCISSORS: Move.PAPER}
LOSES_TO = {v: k for k, v in BEATS.items()}  # inverse

_SHORTHAND = {"r": Move.ROCK, "p": Move.PAPER, "s": Move.SCISSORS}


class Result(str, Enum):
    TIE = "tie"
    PLAYER_WIN = "player_win"
    COMPUTER_WIN = "computer_win"


@dataclass(frozen=True)
class RoundOutcome:
    player_move: Move
    computer_move: Move
    result: Result
    strategy_name: str

    def describe(self) -> str:
        """Human readable line, e.g. 'Rock beats Scissors. Player Wins! (RandomStrategy)'."""
        p, c = self.player_move.label, self.computer_move.label
        if self.result is Result.TIE:
            text = f"{p} vs {c}. It's a Tie!"
        elif self.result is Result.PLAYER_WIN:
            text = f"{p} beats {c}. Player Wins!"
        else:
            text = f"{c} beats {p}. Computer Wins!"
        return f"{text} ({self.strategy_name})"


def parse_move(text: str) -> Move:
    """
    Turn user input ('rock', 'Rock', 'r') into a Move.
    Raises ValueError for anything outside the vocabulary.
    """
    key = (text or "").strip().lower()
    if key in _SHORTHAND:
        return _SHORTHAND[key]
    try:
        return Move(key)
    except ValueError:
        raise ValueError(f"Unknown move: {text!r}") from None


def beats(a: Move, b: Move) -> bool:
    return BEATS[a] == b


def adjudicate(player: Move, computer: Move) -> Result:
    if player == computer:
        return Result.TIE
    return Result.PLAYER_WIN if beats(player, computer) else Result.COMPUTER_WIN


def resolve(player: Move, computer: Move, strategy_name: str = "") -> RoundOutcome:
    return RoundOutcome(player, computer, adjudicate(player, computer), strategy_name)
