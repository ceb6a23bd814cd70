"""Test helpers: engines with a prearranged deck on a virtual clock."""

import random
from collections import Counter

from unoduel.engine import (
    Card,
    CardType,
    Color,
    Deck,
    Engine,
    EngineConfig,
    ManualScheduler,
    create_deck,
)

R, B, G, Y = Color.RED, Color.BLUE, Color.GREEN, Color.YELLOW


def num(color: Color, n: int) -> Card:
    return Card.number_card(color, n)


def skip(color: Color) -> Card:
    return Card.action(color, CardType.SKIP)


def draw_two(color: Color) -> Card:
    return Card.action(color, CardType.DRAW_TWO)


def wild() -> Card:
    return Card.wild()


def wild_draw_four() -> Card:
    return Card.wild(draw_four=True)


def composition() -> Counter:
    return Counter(card.face for card in create_deck())


def stacked_deck(human, computer, top, draws=(), seed=0) -> Deck:
    """A full 56-card deck dealing ``human``, ``computer`` and ``top`` in order.

    ``draws`` come next, then the rest of the deck in a seeded order.
    """
    rest = create_deck()
    for card in [*human, *computer, top, *draws]:
        rest.remove(card)
    rng = random.Random(seed)
    rng.shuffle(rest)
    return Deck.stacked([*human, *computer, top, *draws, *rest], rng=rng)


def make_engine(human, computer=None, top=None, draws=(), **config):
    """Start an engine with the given hands; the computer hand is padded to size."""
    top = top or num(R, 5)
    computer = list(computer or [])
    filler = [num(Y, 0), num(Y, 1), num(Y, 2), num(Y, 3), num(Y, 4), num(Y, 6)]
    for card in filler:
        if len(computer) >= len(human):
            break
        if card not in computer and card not in human and card != top and card not in draws:
            computer.append(card)
    assert len(computer) == len(human), "hands must have the same size"

    scheduler = ManualScheduler()
    engine = Engine(
        config=EngineConfig(hand_size=len(human), **config),
        scheduler=scheduler,
    )
    engine.start(deck=stacked_deck(human, computer, top, draws))
    engine.drain_events()
    return engine, scheduler
