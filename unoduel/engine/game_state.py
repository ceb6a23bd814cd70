"""Game state, phases and the read-only snapshot for two-player UNO."""

from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Deque, List, Optional

from unoduel.engine.card import Card, Color
from unoduel.engine.deck import Deck
from unoduel.engine.player import ComputerPlayer, HumanPlayer, Player


class Seat(str, Enum):
    HUMAN = "human"
    COMPUTER = "computer"

    @property
    def opponent(self) -> "Seat":
        return Seat.COMPUTER if self is Seat.HUMAN else Seat.HUMAN


class PhaseKind(str, Enum):
    NOT_STARTED = "not_started"
    PLAYER_TURN = "player_turn"
    COMPUTER_TURN = "computer_turn"
    AWAITING_COLOR_CHOICE = "awaiting_color_choice"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class Phase:
    """Base phase of the state machine.

    ``next_phase`` is set only while awaiting a color choice; ``winner`` only
    once the game is over (None there means nobody won).
    """

    kind: PhaseKind
    next_phase: Optional[PhaseKind] = None
    winner: Optional[Seat] = None

    @classmethod
    def turn_of(cls, seat: Seat) -> "Phase":
        if seat is Seat.HUMAN:
            return cls(PhaseKind.PLAYER_TURN)
        return cls(PhaseKind.COMPUTER_TURN)

    @classmethod
    def color_choice(cls, then: Seat) -> "Phase":
        return cls(PhaseKind.AWAITING_COLOR_CHOICE, next_phase=cls.turn_of(then).kind)

    @classmethod
    def game_over(cls, winner: Optional[Seat]) -> "Phase":
        return cls(PhaseKind.GAME_OVER, winner=winner)

    def __str__(self) -> str:
        if self.kind is PhaseKind.AWAITING_COLOR_CHOICE:
            return f"{self.kind.value}(then {self.next_phase.value})"
        if self.kind is PhaseKind.GAME_OVER:
            return f"{self.kind.value}(winner {self.winner.value if self.winner else 'none'})"
        return self.kind.value


@dataclass(frozen=True)
class UnoWindow:
    """An open UNO-call window, running alongside the base phase."""

    window_id: int
    subject: Seat
    catcher: Seat
    deadline: float  # scheduler clock, seconds
    duration_ms: int


@dataclass
class GameState:
    """Mutable UNO game state, owned by the engine and guarded by its lock."""

    deck: Deck
    human: HumanPlayer
    computer: ComputerPlayer
    phase: Phase = field(default_factory=lambda: Phase(PhaseKind.NOT_STARTED))
    window: Optional[UnoWindow] = None
    history: Deque[str] = field(default_factory=lambda: deque(maxlen=10))

    def player(self, seat: Seat) -> Player:
        return self.human if seat is Seat.HUMAN else self.computer

    def top_discard(self) -> Optional[Card]:
        """Return the top card on the discard pile."""
        return self.deck.discard_pile[-1] if self.deck.discard_pile else None

    @property
    def active_color(self) -> Optional[Color]:
        top = self.top_discard()
        return top.active_color if top else None

    def all_cards(self) -> List[Card]:
        """Every card in the game, wherever it sits."""
        return (
            list(self.deck.draw_pile)
            + list(self.deck.discard_pile)
            + list(self.human.hand)
            + list(self.computer.hand)
        )


@dataclass(frozen=True)
class WindowView:
    subject: Seat
    catcher: Seat
    remaining_ms: int


@dataclass(frozen=True)
class Snapshot:
    """Immutable view of the game for the presentation layer.

    Contains the human's hand only; the computer's hand is a count.
    """

    phase: Phase
    active_color: Optional[Color]
    top_card: Optional[Card]
    human_hand: tuple
    computer_hand_count: int
    deck_count: int
    discard_count: int
    open_window: Optional[WindowView]
    human_called_uno: bool
    history: tuple

    @property
    def winner(self) -> Optional[Seat]:
        return self.phase.winner

    @classmethod
    def from_state(cls, state: GameState, now: float) -> "Snapshot":
        window = None
        if state.window is not None:
            remaining = max(0, round((state.window.deadline - now) * 1000))
            window = WindowView(
                subject=state.window.subject,
                catcher=state.window.catcher,
                remaining_ms=remaining,
            )
        return cls(
            phase=state.phase,
            active_color=state.active_color,
            top_card=state.top_discard(),
            human_hand=state.human.hand.cards(),
            computer_hand_count=len(state.computer.hand),
            deck_count=len(state.deck.draw_pile),
            discard_count=len(state.deck.discard_pile),
            open_window=window,
            human_called_uno=state.human.called_uno,
            history=tuple(state.history),
        )
