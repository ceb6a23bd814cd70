"""Card, Color and CardType for two-player UNO."""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional


class Color(str, Enum):
    """Card colors. WILD is the printed color of wild cards only."""

    RED = "red"
    BLUE = "blue"
    GREEN = "green"
    YELLOW = "yellow"
    WILD = "wild"


# Order used for color tie-breaks and prompts
PLAYABLE_COLORS = (Color.RED, Color.BLUE, Color.GREEN, Color.YELLOW)


class CardType(str, Enum):
    """Card types."""

    NUMBER = "number"
    SKIP = "skip"
    DRAW_TWO = "draw_two"
    WILD = "wild"
    WILD_DRAW_FOUR = "wild_draw_four"

    @property
    def is_wild(self) -> bool:
        return self in (CardType.WILD, CardType.WILD_DRAW_FOUR)


@dataclass(frozen=True)
class Card:
    """A UNO card.

    For number cards: color is one of the playable colors and number is 0-9.
    For Skip/DrawTwo: color is playable and number is None.
    For wild cards: color is WILD, number is None and active_color stays WILD
    until a color is chosen while the card is on top of the discard pile.
    """

    color: Color
    type: CardType
    number: Optional[int] = None
    active_color: Optional[Color] = None

    def __post_init__(self) -> None:
        if self.type is CardType.NUMBER:
            if self.number is None or not 0 <= self.number <= 9:
                raise ValueError(f"Number cards need a number in 0..9, got {self.number}")
        elif self.number is not None:
            raise ValueError(f"{self.type.value} cards carry no number")
        if self.type.is_wild and self.color is not Color.WILD:
            raise ValueError("Wild cards must have color=WILD")
        if not self.type.is_wild and self.color is Color.WILD:
            raise ValueError("Non-wild cards must have a playable color")
        if self.active_color is None:
            object.__setattr__(self, "active_color", self.color)
        elif not self.type.is_wild and self.active_color is not self.color:
            raise ValueError("Only wild cards can take a chosen color")

    @classmethod
    def number_card(cls, color: Color, number: int) -> "Card":
        return cls(color=color, type=CardType.NUMBER, number=number)

    @classmethod
    def action(cls, color: Color, card_type: CardType) -> "Card":
        return cls(color=color, type=card_type)

    @classmethod
    def wild(cls, draw_four: bool = False) -> "Card":
        card_type = CardType.WILD_DRAW_FOUR if draw_four else CardType.WILD
        return cls(color=Color.WILD, type=card_type)

    @property
    def is_wild(self) -> bool:
        return self.type.is_wild

    @property
    def face(self) -> tuple:
        """Identity of the printed card, ignoring any chosen color."""
        return (self.color, self.type, self.number)

    def with_active_color(self, color: Color) -> "Card":
        """Return a copy of a wild card carrying the chosen color."""
        if not self.is_wild:
            raise ValueError(f"Cannot recolor non-wild card {self}")
        return replace(self, active_color=color)

    def reset(self) -> "Card":
        """Return the card as printed (wilds lose their chosen color)."""
        if self.active_color is self.color:
            return self
        return replace(self, active_color=self.color)

    def __str__(self) -> str:
        if self.type is CardType.NUMBER:
            return f"{self.color.value}_{self.number}"
        if self.is_wild:
            if self.active_color is not Color.WILD:
                return f"{self.type.value}({self.active_color.value})"
            return self.type.value
        return f"{self.color.value}_{self.type.value}"
