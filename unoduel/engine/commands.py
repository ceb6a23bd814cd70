"""Commands accepted by the engine, and their results."""

from dataclasses import dataclass
from typing import Optional, Union

from unoduel.engine.card import Color
from unoduel.engine.errors import EngineError, ErrorKind
from unoduel.engine.game_state import Seat


@dataclass(frozen=True)
class Start:
    pass


@dataclass(frozen=True)
class PlayCard:
    """Play the card at ``index`` of the player's hand."""

    player: Seat
    index: int


@dataclass(frozen=True)
class DrawCard:
    """Draw one card (only when no legal play exists)."""

    player: Seat


@dataclass(frozen=True)
class PassTurn:
    """Give up the turn when nothing is playable and the deck is exhausted."""

    player: Seat


@dataclass(frozen=True)
class ChooseColor:
    color: Color


@dataclass(frozen=True)
class DeclareUno:
    player: Seat


@dataclass(frozen=True)
class CatchUno:
    catcher: Seat


@dataclass(frozen=True)
class AdvanceComputer:
    """The computer's thinking delay has elapsed; let it act."""

    pass


Command = Union[
    Start,
    PlayCard,
    DrawCard,
    PassTurn,
    ChooseColor,
    DeclareUno,
    CatchUno,
    AdvanceComputer,
]


@dataclass(frozen=True)
class CommandResult:
    error: Optional[ErrorKind] = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls) -> "CommandResult":
        return cls()

    @classmethod
    def failure(cls, exc: EngineError) -> "CommandResult":
        return cls(error=exc.kind, message=str(exc))


def describe(command: Command) -> str:
    """Short human-readable label, used by prompts."""
    if isinstance(command, PlayCard):
        return f"PLAY card {command.index}"
    if isinstance(command, DrawCard):
        return "DRAW"
    if isinstance(command, PassTurn):
        return "PASS"
    if isinstance(command, ChooseColor):
        return f"CHOOSE {command.color.value.upper()}"
    if isinstance(command, DeclareUno):
        return "CALL UNO"
    if isinstance(command, CatchUno):
        return "CATCH opponent without UNO"
    if isinstance(command, AdvanceComputer):
        return "LET COMPUTER PLAY"
    return "START"
