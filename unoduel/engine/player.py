"""Hands and players."""

from typing import Iterable, Iterator, List, Optional

from unoduel.engine.card import Card
from unoduel.engine.errors import IllegalPlay, OutOfRange
from unoduel.engine.rules import legal
from unoduel.engine.strategy import ComputerStrategy


class Hand:
    """Ordered cards. Indices stay stable until a card is removed."""

    def __init__(self, cards: Optional[Iterable[Card]] = None):
        self._cards: List[Card] = list(cards or [])

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards)

    def __getitem__(self, index: int) -> Card:
        return self._cards[index]

    def append(self, card: Card) -> None:
        self._cards.append(card.reset())

    def pop(self, index: int) -> Card:
        return self._cards.pop(index)

    def playable_indices(self, top: Card) -> List[int]:
        return [i for i, card in enumerate(self._cards) if legal(card, top)]

    def cards(self) -> tuple:
        return tuple(self._cards)


class Player:
    """A seat at the table: a name, a hand and the UNO declaration flag."""

    is_computer = False

    def __init__(self, name: str, cards: Optional[Iterable[Card]] = None):
        self.name = name
        self.hand = Hand(cards)
        self.called_uno = False

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, cards={len(self.hand)})"

    @property
    def hand_size(self) -> int:
        return len(self.hand)

    def _sync_uno_flag(self) -> None:
        if len(self.hand) != 1:
            self.called_uno = False

    def add(self, card: Card) -> None:
        self.hand.append(card)
        self._sync_uno_flag()

    def add_many(self, cards: Iterable[Card]) -> None:
        for card in cards:
            self.hand.append(card)
        self._sync_uno_flag()

    def check_play(self, index: int, top: Card) -> Card:
        """Return the card at ``index`` if it may be played on ``top``."""
        if not 0 <= index < len(self.hand):
            raise OutOfRange(f"Card index {index} not in [0, {len(self.hand)})")
        card = self.hand[index]
        if not legal(card, top):
            raise IllegalPlay(f"{card} cannot be played on {top}")
        return card

    def play(self, index: int, top: Card) -> Card:
        card = self.check_play(index, top)
        self.hand.pop(index)
        self._sync_uno_flag()
        return card

    def has_playable(self, top: Card) -> bool:
        return self.find_playable(top) >= 0

    def find_playable(self, top: Card) -> int:
        """Index of the first legal card, or -1."""
        for i, card in enumerate(self.hand):
            if legal(card, top):
                return i
        return -1

    def declare_uno(self) -> bool:
        """Mark the declaration. Only valid while holding exactly one card."""
        if len(self.hand) != 1:
            return False
        self.called_uno = True
        return True

    @property
    def has_won(self) -> bool:
        return len(self.hand) == 0


class HumanPlayer(Player):
    """Player driven by commands from the presentation layer."""


class ComputerPlayer(Player):
    """Player that decides through an embedded strategy."""

    is_computer = True

    def __init__(self, strategy: ComputerStrategy, name: str = "Computer", cards=None):
        super().__init__(name, cards)
        self.strategy = strategy

    def choose_card(self, top: Card) -> Optional[int]:
        return self.strategy.choose_card(self.hand, top)

    def choose_color(self):
        return self.strategy.choose_color(self.hand)
