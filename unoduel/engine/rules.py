"""UNO rules: play legality and card effects."""

from dataclasses import dataclass
from typing import Dict

from unoduel.engine.card import Card, CardType


def legal(play: Card, top: Card) -> bool:
    """Check if ``play`` can be played on ``top``.

    Only the top card's active color is consulted, never the printed color of
    a wild. Hand contents are not considered, so a Wild Draw Four is always
    legal.
    """
    # Wild can always be played
    if play.is_wild:
        return True
    # Match by color
    if play.color == top.active_color:
        return True
    # Match by number
    if play.type is CardType.NUMBER and top.type is CardType.NUMBER:
        return play.number == top.number
    # Match by action
    return play.type is top.type


@dataclass(frozen=True)
class CardEffect:
    """What a card does once played.

    ``actor_keeps_turn`` covers Skip and Draw Two: with two players, making the
    opponent lose their turn is the same as the actor playing again.
    """

    opponent_draws: int = 0
    actor_keeps_turn: bool = False
    needs_color: bool = False


EFFECTS: Dict[CardType, CardEffect] = {
    CardType.NUMBER: CardEffect(),
    CardType.SKIP: CardEffect(actor_keeps_turn=True),
    CardType.DRAW_TWO: CardEffect(opponent_draws=2, actor_keeps_turn=True),
    CardType.WILD: CardEffect(needs_color=True),
    CardType.WILD_DRAW_FOUR: CardEffect(opponent_draws=4, needs_color=True),
}


def effect_of(card: Card) -> CardEffect:
    return EFFECTS[card.type]
