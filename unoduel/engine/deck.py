"""Deck creation, shuffling and the draw/discard stacks."""

import logging
import random
from typing import Iterable, List, Optional

from unoduel.engine.card import Card, CardType, Color
from unoduel.engine.errors import DeckExhausted

logger = logging.getLogger(__name__)

DECK_COLORS = (Color.RED, Color.GREEN, Color.BLUE, Color.YELLOW)
DECK_SIZE = 56


def create_deck() -> List[Card]:
    """Create the 56-card two-player deck, unshuffled.

    - 4 colors x (0-9, Skip, Draw Two): 48 cards
    - 4 Wild, 4 Wild Draw Four: 8 cards
    """
    cards: List[Card] = []

    for color in DECK_COLORS:
        for number in range(10):
            cards.append(Card.number_card(color, number))
        cards.append(Card.action(color, CardType.DRAW_TWO))
        cards.append(Card.action(color, CardType.SKIP))

    for _ in range(4):
        cards.append(Card.wild())
    for _ in range(4):
        cards.append(Card.wild(draw_four=True))

    return cards


class Deck:
    """Draw and discard stacks. The top of each stack is the last element."""

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        cards: Optional[Iterable[Card]] = None,
        shuffle: bool = True,
    ):
        self.rng = rng or random.Random()
        self.draw_pile: List[Card] = list(create_deck() if cards is None else cards)
        self.discard_pile: List[Card] = []
        if shuffle:
            self.shuffle()

    @classmethod
    def stacked(cls, cards: Iterable[Card], rng: Optional[random.Random] = None) -> "Deck":
        """Build an unshuffled deck whose draws return ``cards`` in order."""
        return cls(rng=rng, cards=list(reversed(list(cards))), shuffle=False)

    def __len__(self) -> int:
        return len(self.draw_pile)

    def shuffle(self) -> None:
        self.rng.shuffle(self.draw_pile)

    def available(self) -> int:
        """Cards obtainable by drawing, counting what recycling would add."""
        return len(self.draw_pile) + max(0, len(self.discard_pile) - 1)

    def _recycle(self) -> None:
        if len(self.discard_pile) <= 1:
            return
        top = self.discard_pile.pop()
        rest = [card.reset() for card in self.discard_pile]
        self.discard_pile.clear()
        self.rng.shuffle(rest)
        self.draw_pile.extend(rest)
        self.discard_pile.append(top)
        logger.debug("Recycled %d cards from the discard pile", len(rest))

    def draw(self) -> Card:
        if not self.draw_pile:
            self._recycle()
        if not self.draw_pile:
            raise DeckExhausted("No cards left to draw and nothing to recycle")
        return self.draw_pile.pop()

    def deal(self, n: int) -> List[Card]:
        """Draw ``n`` cards, or nothing at all if the deck cannot supply them."""
        if self.available() < n:
            raise DeckExhausted(f"Cannot deal {n} cards, only {self.available()} available")
        return [self.draw() for _ in range(n)]

    def discard(self, card: Card) -> None:
        self.discard_pile.append(card)

    def peek_top(self) -> Card:
        if not self.discard_pile:
            raise DeckExhausted("Discard pile is empty")
        return self.discard_pile[-1]

    def replace_top(self, card: Card) -> None:
        """Swap the top discard for ``card`` (used to record a chosen color)."""
        if not self.discard_pile:
            raise DeckExhausted("Discard pile is empty")
        if self.discard_pile[-1].face != card.face:
            raise ValueError(f"{card} is not the top card {self.discard_pile[-1]}")
        self.discard_pile[-1] = card

    def reinsert(self, card: Card) -> None:
        """Bury ``card`` at a uniformly random position of the draw stack."""
        position = self.rng.randint(0, len(self.draw_pile))
        self.draw_pile.insert(position, card.reset())
