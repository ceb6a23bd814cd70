"""Engine façade: validates commands, applies them and queues events."""

import logging
import queue
import random
import threading
from collections import deque
from typing import List, Optional

from unoduel.engine.card import PLAYABLE_COLORS, Card, Color
from unoduel.engine.commands import (
    AdvanceComputer,
    CatchUno,
    ChooseColor,
    Command,
    CommandResult,
    DeclareUno,
    DrawCard,
    PassTurn,
    PlayCard,
    Start,
)
from unoduel.engine.config import EngineConfig
from unoduel.engine.deck import Deck
from unoduel.engine.errors import (
    DeckExhausted,
    EngineError,
    IllegalPlay,
    MustDrawDenied,
    WrongPhase,
)
from unoduel.engine.events import CardPlayed, CardsDrawn, ColorChanged, Event, GameOver, PhaseChanged
from unoduel.engine.game_state import GameState, Phase, PhaseKind, Seat, Snapshot
from unoduel.engine.player import ComputerPlayer, HumanPlayer, Player
from unoduel.engine.rules import effect_of, legal
from unoduel.engine.scheduler import Scheduler, ThreadingScheduler
from unoduel.engine.strategy import ComputerStrategy
from unoduel.engine.uno_window import UnoWindowTracker

logger = logging.getLogger(__name__)


class Engine:
    """Two-player UNO: one human seat, one computer seat.

    All state lives behind a single re-entrant lock. Commands either complete
    or raise an ``EngineError`` without changing anything; ``handle`` wraps
    them into a ``CommandResult``. Events are queued in emission order and
    read with ``drain_events``.

    The engine never sleeps on its own. The computer acts when the caller
    sends ``AdvanceComputer``; the only timer is the UNO window deadline,
    which runs through the scheduler.
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        scheduler: Optional[Scheduler] = None,
        rng: Optional[random.Random] = None,
        human_name: str = "Player",
    ):
        self.config = config or EngineConfig()
        self.scheduler = scheduler or ThreadingScheduler()
        self._lock = threading.RLock()
        self._events: "queue.SimpleQueue[Event]" = queue.SimpleQueue()

        deck = Deck(rng=rng or random.Random(self.config.seed))
        strategy = ComputerStrategy(
            rng=deck.rng,
            uno_call_probability=self.config.computer_uno_call_probability,
        )
        self.state = GameState(
            deck=deck,
            human=HumanPlayer(human_name),
            computer=ComputerPlayer(strategy),
            history=deque(maxlen=self.config.history_size),
        )
        self._windows = UnoWindowTracker(
            self.state,
            self.scheduler,
            self.config,
            self._lock,
            self._emit,
            auto_declare=self._computer_calls_uno,
        )
        self._deferred_window: Optional[Seat] = None

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    @property
    def phase(self) -> Phase:
        return self.state.phase

    @property
    def penalties(self) -> int:
        """UNO penalty cards drawn so far (caught or missed)."""
        return self._windows.penalties

    def snapshot(self) -> Snapshot:
        with self._lock:
            return Snapshot.from_state(self.state, self.scheduler.now())

    def drain_events(self) -> List[Event]:
        events = []
        while True:
            try:
                events.append(self._events.get_nowait())
            except queue.Empty:
                return events

    def wait_event(self, timeout: Optional[float] = None) -> Event:
        """Block until the next event arrives (raises ``queue.Empty`` on timeout)."""
        return self._events.get(timeout=timeout)

    def legal_commands(self, seat: Seat) -> List[Command]:
        """Commands ``seat`` may issue right now."""
        with self._lock:
            state = self.state
            kind = state.phase.kind
            if kind is PhaseKind.NOT_STARTED:
                return [Start()]
            if kind is PhaseKind.GAME_OVER:
                return []

            commands: List[Command] = []
            window = state.window
            if (window is not None and window.subject is seat) or self._windows.queued is seat:
                commands.append(DeclareUno(seat))
            if window is not None:
                subject = state.player(window.subject)
                liable = subject.hand_size == 1 and not subject.called_uno
                if window.catcher is seat and liable and state.deck.available() > 0:
                    commands.append(CatchUno(seat))

            if seat is Seat.COMPUTER:
                if kind is PhaseKind.COMPUTER_TURN:
                    commands.append(AdvanceComputer())
                return commands

            if kind is PhaseKind.AWAITING_COLOR_CHOICE:
                commands.extend(ChooseColor(color) for color in PLAYABLE_COLORS)
            elif kind is PhaseKind.PLAYER_TURN:
                playable = self._playable(state.human)
                commands.extend(PlayCard(seat, i) for i in playable)
                if not playable:
                    if state.deck.available() > 0:
                        commands.append(DrawCard(seat))
                    else:
                        commands.append(PassTurn(seat))
            return commands

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def handle(self, command: Command) -> CommandResult:
        """Apply ``command`` and report the outcome instead of raising."""
        try:
            if isinstance(command, Start):
                self.start()
            elif isinstance(command, PlayCard):
                self.play_card(command.player, command.index)
            elif isinstance(command, DrawCard):
                self.draw_card(command.player)
            elif isinstance(command, PassTurn):
                self.pass_turn(command.player)
            elif isinstance(command, ChooseColor):
                self.choose_color(command.color)
            elif isinstance(command, DeclareUno):
                self.declare_uno(command.player)
            elif isinstance(command, CatchUno):
                self.catch_uno(command.catcher)
            elif isinstance(command, AdvanceComputer):
                self.advance_computer()
            else:
                raise TypeError(f"Unknown command: {command!r}")
        except EngineError as exc:
            logger.debug("Rejected %r: %s", command, exc)
            return CommandResult.failure(exc)
        return CommandResult.success()

    def start(self, deck: Optional[Deck] = None) -> None:
        """Deal both hands and turn up the first card.

        A prepared ``deck`` is used as-is, without shuffling.
        """
        with self._lock:
            if self.state.phase.kind is not PhaseKind.NOT_STARTED:
                raise WrongPhase("Game already started")
            if deck is not None:
                self.state.deck = deck
                self.state.computer.strategy.rng = deck.rng
            else:
                self.state.deck.shuffle()

            n = self.config.hand_size
            try:
                self.state.human.add_many(self.state.deck.deal(n))
                self.state.computer.add_many(self.state.deck.deal(n))
                first = self._turn_up_first_card()
            except DeckExhausted:
                logger.error("Deck exhausted while dealing, game cannot start")
                self._set_phase(Phase.game_over(None))
                self._emit(GameOver(winner=None))
                raise

            self._emit(CardsDrawn(player=Seat.HUMAN, count=n))
            self._emit(CardsDrawn(player=Seat.COMPUTER, count=n))
            self._emit(ColorChanged(color=first.active_color))
            self._set_phase(Phase.turn_of(Seat.HUMAN))
            logger.info("Game started, first card %s", first)

    def play_card(self, seat: Seat, index: int) -> Card:
        with self._lock:
            self._require_turn(seat)
            card = self.state.human.check_play(index, self._top())
            if self.state.human.hand_size > 1:
                self._require_supply(effect_of(card).opponent_draws)
            self._play(Seat.HUMAN, index)
            return card

    def draw_card(self, seat: Seat) -> Card:
        """Draw when nothing is playable. A legal drawn card may be played next."""
        with self._lock:
            self._require_turn(seat)
            if self._playable(self.state.human):
                raise MustDrawDenied("A legal play exists, drawing is not allowed")
            card = self.state.deck.draw()
            self._take(Seat.HUMAN, [card])
            if not self._playable(self.state.human):
                self._set_phase(Phase.turn_of(Seat.COMPUTER))
            return card

    def pass_turn(self, seat: Seat) -> None:
        with self._lock:
            self._require_turn(seat)
            if self._playable(self.state.human):
                raise MustDrawDenied("A legal play exists, passing is not allowed")
            if self.state.deck.available() > 0:
                raise WrongPhase("Cards are left to draw, passing is not allowed")
            logger.warning("Deck exhausted, %s passes", seat.value)
            self._set_phase(Phase.turn_of(Seat.COMPUTER))

    def choose_color(self, color: Color) -> None:
        with self._lock:
            phase = self.state.phase
            if phase.kind is not PhaseKind.AWAITING_COLOR_CHOICE:
                raise WrongPhase("No color choice pending")
            if color not in PLAYABLE_COLORS:
                raise IllegalPlay(f"Cannot choose {color.value}")
            self._apply_color(color)
            self._set_phase(Phase(phase.next_phase))
            self._windows.resume()
            if self._deferred_window is not None:
                subject, self._deferred_window = self._deferred_window, None
                self._windows.open(subject)

    def declare_uno(self, seat: Seat) -> None:
        with self._lock:
            self._windows.declare(seat)

    def catch_uno(self, catcher: Seat) -> None:
        with self._lock:
            self._windows.catch(catcher)

    def advance_computer(self) -> None:
        """Let the computer take its turn: play, or draw once and maybe play."""
        with self._lock:
            if self.state.phase.kind is not PhaseKind.COMPUTER_TURN:
                raise WrongPhase("Not the computer's turn")
            computer = self.state.computer
            top = self._top()

            index = computer.choose_card(top)
            playable = self._playable(computer)
            if index not in playable:
                index = playable[0] if playable else None
            if index is not None:
                self._play(Seat.COMPUTER, index)
                return

            if self.state.deck.available() < 1:
                logger.warning("Deck exhausted, computer passes")
                self._set_phase(Phase.turn_of(Seat.HUMAN))
                return
            card = self.state.deck.draw()
            self._take(Seat.COMPUTER, [card])
            if legal(card, top) and self._can_supply(effect_of(card).opponent_draws):
                self._play(Seat.COMPUTER, computer.hand_size - 1)
            else:
                self._set_phase(Phase.turn_of(Seat.HUMAN))

    # ------------------------------------------------------------------
    # Internals (lock held)
    # ------------------------------------------------------------------

    def _emit(self, event: Event) -> None:
        self.state.history.append(event.describe())
        self._events.put(event)
        logger.debug("Event: %s", event.describe())

    def _set_phase(self, phase: Phase) -> None:
        if phase != self.state.phase:
            self.state.phase = phase
            self._emit(PhaseChanged(phase=phase))

    def _top(self) -> Card:
        return self.state.deck.peek_top()

    def _turn_up_first_card(self) -> Card:
        """Draw until a non-wild shows up, burying wilds back in the deck."""
        deck = self.state.deck
        while True:
            if not any(not card.is_wild for card in deck.draw_pile):
                raise DeckExhausted("No non-wild card left to start the game")
            card = deck.draw()
            if not card.is_wild:
                deck.discard(card)
                return card
            logger.debug("Reinserting %s drawn as first card", card)
            deck.reinsert(card)

    def _require_turn(self, seat: Seat) -> None:
        if seat is not Seat.HUMAN or self.state.phase.kind is not PhaseKind.PLAYER_TURN:
            raise WrongPhase(f"{seat.value} cannot act in phase {self.state.phase}")

    def _can_supply(self, n: int) -> bool:
        # The current top becomes recyclable once the played card covers it
        deck = self.state.deck
        return len(deck.draw_pile) + len(deck.discard_pile) >= n

    def _require_supply(self, n: int) -> None:
        if not self._can_supply(n):
            raise DeckExhausted(f"Deck cannot supply {n} cards")

    def _playable(self, player: Player) -> List[int]:
        """Legal plays whose draws the deck can deal. A last card always goes, it wins first."""
        top = self._top()
        return [
            i
            for i in player.hand.playable_indices(top)
            if player.hand_size == 1 or self._can_supply(effect_of(player.hand[i]).opponent_draws)
        ]

    def _take(self, seat: Seat, cards: List[Card]) -> None:
        self.state.player(seat).add_many(cards)
        self._emit(CardsDrawn(player=seat, count=len(cards)))
        self._windows.reconcile()

    def _apply_color(self, color: Color) -> None:
        top = self._top()
        self.state.deck.replace_top(top.with_active_color(color))
        self._emit(ColorChanged(color=color))

    def _computer_calls_uno(self, seat: Seat) -> bool:
        return seat is Seat.COMPUTER and self.state.computer.strategy.should_call_uno()

    def _play(self, seat: Seat, index: int) -> None:
        """Apply a validated play by either seat."""
        state = self.state
        actor = state.player(seat)
        previous = self._top()

        card = actor.play(index, previous)
        state.deck.discard(card)
        self._emit(CardPlayed(player=seat, card=card))
        if not card.is_wild and card.color is not previous.active_color:
            self._emit(ColorChanged(color=card.color))
        self._windows.reconcile()

        if actor.has_won:
            self._windows.clear()
            self._deferred_window = None
            self._set_phase(Phase.game_over(seat))
            self._emit(GameOver(winner=seat))
            logger.info("%s won", seat.value)
            return

        effect = effect_of(card)
        if effect.opponent_draws:
            self._take(seat.opponent, state.deck.deal(effect.opponent_draws))

        if effect.needs_color and seat is Seat.COMPUTER:
            self._apply_color(state.computer.choose_color())
            next_phase = Phase.turn_of(seat.opponent)
        elif effect.needs_color:
            # No window is observable while a color is being chosen
            self._windows.suspend()
            next_phase = Phase.color_choice(then=seat.opponent)
        elif effect.actor_keeps_turn:
            next_phase = Phase.turn_of(seat)
        else:
            next_phase = Phase.turn_of(seat.opponent)
        self._set_phase(next_phase)

        if actor.hand_size == 1:
            if next_phase.kind is PhaseKind.AWAITING_COLOR_CHOICE:
                self._deferred_window = seat
            else:
                self._windows.open(seat)
