"""Built-in strategy for the computer seat."""

import random
from collections import Counter
from typing import Iterable, Optional

from unoduel.engine.card import PLAYABLE_COLORS, Card, CardType, Color
from unoduel.engine.rules import legal

TYPE_PRIORITY = (
    CardType.WILD_DRAW_FOUR,
    CardType.DRAW_TWO,
    CardType.SKIP,
    CardType.WILD,
    CardType.NUMBER,
)


class ComputerStrategy:
    """Greedy play: hurt the opponent first, keep numbers for last.

    The random source is borrowed from the deck so a seeded game stays
    reproducible end to end.
    """

    def __init__(self, rng: Optional[random.Random] = None, uno_call_probability: float = 1.0):
        self.rng = rng or random.Random()
        self.uno_call_probability = uno_call_probability

    def choose_card(self, hand: Iterable[Card], top: Card) -> Optional[int]:
        """Index of the card to play, or None when the computer must draw."""
        cards = list(hand)
        for card_type in TYPE_PRIORITY:
            for i, card in enumerate(cards):
                if card.type is card_type and legal(card, top):
                    return i
        return None

    def choose_color(self, hand: Iterable[Card]) -> Color:
        """Most common color among non-wild cards; ties go to the earlier color."""
        counts = Counter(card.color for card in hand if not card.is_wild)
        if not counts:
            return self.rng.choice(PLAYABLE_COLORS)
        return max(PLAYABLE_COLORS, key=lambda color: counts[color])

    def should_call_uno(self) -> bool:
        if self.uno_call_probability >= 1.0:
            return True
        return self.rng.random() < self.uno_call_probability
