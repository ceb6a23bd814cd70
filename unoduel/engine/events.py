"""Events emitted by the engine, in emission order, to the presentation layer."""

from dataclasses import dataclass
from typing import Optional, Union

from unoduel.engine.card import Card, Color
from unoduel.engine.game_state import Phase, Seat


@dataclass(frozen=True)
class CardPlayed:
    player: Seat
    card: Card

    def describe(self) -> str:
        return f"{self.player.value} played {self.card}"


@dataclass(frozen=True)
class CardsDrawn:
    player: Seat
    count: int

    def describe(self) -> str:
        noun = "card" if self.count == 1 else "cards"
        return f"{self.player.value} drew {self.count} {noun}"


@dataclass(frozen=True)
class PhaseChanged:
    phase: Phase

    def describe(self) -> str:
        return f"phase is now {self.phase}"


@dataclass(frozen=True)
class ColorChanged:
    color: Color

    def describe(self) -> str:
        return f"active color is {self.color.value}"


@dataclass(frozen=True)
class UnoWindowOpened:
    subject: Seat
    deadline_ms: int  # window length

    def describe(self) -> str:
        return f"{self.subject.value} has one card ({self.deadline_ms} ms to call UNO)"


@dataclass(frozen=True)
class UnoDeclared:
    player: Seat

    def describe(self) -> str:
        return f"{self.player.value} called UNO"


@dataclass(frozen=True)
class UnoCaught:
    catcher: Seat
    subject: Seat

    def describe(self) -> str:
        return f"{self.catcher.value} caught {self.subject.value} without UNO"


@dataclass(frozen=True)
class UnoPenaltyApplied:
    subject: Seat

    def describe(self) -> str:
        return f"{self.subject.value} forgot to call UNO and drew a penalty card"


@dataclass(frozen=True)
class GameOver:
    winner: Optional[Seat]

    def describe(self) -> str:
        if self.winner is None:
            return "game over with no winner"
        return f"{self.winner.value} WON!"


Event = Union[
    CardPlayed,
    CardsDrawn,
    PhaseChanged,
    ColorChanged,
    UnoWindowOpened,
    UnoDeclared,
    UnoCaught,
    UnoPenaltyApplied,
    GameOver,
]
