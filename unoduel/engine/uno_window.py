"""The UNO-call window: a deadline to declare UNO, raced by the opponent's catch."""

import logging
import threading
from typing import Callable, Optional, Tuple

from unoduel.engine.config import EngineConfig
from unoduel.engine.errors import DeckExhausted, NoWindowOpen, NothingToCatch
from unoduel.engine.events import CardsDrawn, Event, UnoCaught, UnoDeclared, UnoPenaltyApplied, UnoWindowOpened
from unoduel.engine.game_state import GameState, Seat, UnoWindow
from unoduel.engine.scheduler import Scheduler

logger = logging.getLogger(__name__)


class UnoWindowTracker:
    """Opens, resolves and closes UNO windows for one game.

    At most one window is open. A seat reaching one card while the other
    seat's window runs is queued, and its window opens once the running one
    settles (declared, caught, expired or made moot). A queued seat may
    still declare early.

    Every method except the timer callback expects the engine lock to be
    held by the caller. The timer callback takes the lock itself and checks
    the window id, so an expiry that arrives after the window was closed (or
    replaced) does nothing.
    """

    def __init__(
        self,
        state: GameState,
        scheduler: Scheduler,
        config: EngineConfig,
        lock: threading.RLock,
        emit: Callable[[Event], None],
        auto_declare: Callable[[Seat], bool] = lambda seat: False,
    ):
        self._state = state
        self._scheduler = scheduler
        self._config = config
        self._lock = lock
        self._emit = emit
        self._auto_declare = auto_declare
        self._next_id = 1
        self._queued: Optional[Seat] = None
        self._suspended: Optional[Tuple[Seat, int]] = None
        self.penalties = 0

    @property
    def queued(self) -> Optional[Seat]:
        """Seat waiting for its window to open, if any."""
        return self._queued

    def open(self, subject: Seat) -> Optional[UnoWindow]:
        if self._state.window is not None:
            logger.debug("UNO window for %s queued behind window %d", subject.value, self._state.window.window_id)
            self._queued = subject
            return None
        duration_ms = self._state.deck.rng.randrange(self._config.window_min_ms, self._config.window_max_ms)
        window = self._start(subject, duration_ms)
        if self._auto_declare(subject):
            self.declare(subject)
        return window

    def suspend(self) -> None:
        """Stop the running window's clock while a color is being chosen."""
        window = self._state.window
        if window is None:
            return
        remaining_ms = max(1, round((window.deadline - self._scheduler.now()) * 1000))
        self._suspended = (window.subject, remaining_ms)
        self._state.window = None
        logger.debug("Suspended UNO window %d with %d ms left", window.window_id, remaining_ms)

    def resume(self) -> None:
        """Restart a suspended window with the time it had left."""
        if self._suspended is None:
            return
        (subject, remaining_ms), self._suspended = self._suspended, None
        if self._liable_seat(subject):
            self._start(subject, remaining_ms)

    def _start(self, subject: Seat, duration_ms: int) -> UnoWindow:
        window = UnoWindow(
            window_id=self._next_id,
            subject=subject,
            catcher=subject.opponent,
            deadline=self._scheduler.now() + duration_ms / 1000.0,
            duration_ms=duration_ms,
        )
        self._next_id += 1
        self._state.window = window
        self._emit(UnoWindowOpened(subject=subject, deadline_ms=duration_ms))
        self._scheduler.call_later(duration_ms / 1000.0, lambda: self._on_deadline(window.window_id))
        logger.debug("Opened UNO window %d for %s (%d ms)", window.window_id, subject.value, duration_ms)
        return window

    def close(self) -> None:
        """Close the running window, then open the queued one if it still applies."""
        if self._state.window is not None:
            logger.debug("Closed UNO window %d", self._state.window.window_id)
            self._state.window = None
        if self._queued is not None:
            subject, self._queued = self._queued, None
            if self._liable_seat(subject):
                self.open(subject)

    def clear(self) -> None:
        """Drop the running, queued and suspended windows (game over)."""
        self._queued = None
        self._suspended = None
        self.close()

    def reconcile(self) -> None:
        """Close the window without penalty once its subject no longer holds one card."""
        if self._queued is not None and not self._liable_seat(self._queued):
            self._queued = None
        window = self._state.window
        if window is not None and self._state.player(window.subject).hand_size != 1:
            self.close()

    def declare(self, seat: Seat) -> None:
        window = self._state.window
        queued = self._queued is seat
        if not queued and (window is None or window.subject is not seat):
            raise NoWindowOpen(f"No UNO window open for {seat.value}")
        self._state.player(seat).declare_uno()
        self._emit(UnoDeclared(player=seat))
        if queued:
            self._queued = None
        else:
            self.close()

    def catch(self, catcher: Seat) -> None:
        window = self._state.window
        if window is None or window.catcher is not catcher:
            raise NothingToCatch(f"No UNO window {catcher.value} can catch")
        if not self._liable(window):
            raise NothingToCatch(f"{window.subject.value} is not liable to be caught")
        if self._state.deck.available() < 1:
            raise DeckExhausted("No card left for the UNO penalty")
        self._resolve(window, caught_by=catcher)

    def _liable_seat(self, seat: Seat) -> bool:
        player = self._state.player(seat)
        return player.hand_size == 1 and not player.called_uno

    def _liable(self, window: UnoWindow) -> bool:
        return self._liable_seat(window.subject)

    def _resolve(self, window: UnoWindow, caught_by: Optional[Seat]) -> None:
        if self._liable(window):
            if self._state.deck.available() < 1:
                logger.warning("Skipping UNO penalty for %s: deck exhausted", window.subject.value)
            else:
                subject = self._state.player(window.subject)
                subject.add(self._state.deck.draw())
                self.penalties += 1
                if caught_by is None:
                    self._emit(UnoPenaltyApplied(subject=window.subject))
                else:
                    self._emit(UnoCaught(catcher=caught_by, subject=window.subject))
                self._emit(CardsDrawn(player=window.subject, count=1))
        self.close()

    def _on_deadline(self, window_id: int) -> None:
        with self._lock:
            window = self._state.window
            if window is None or window.window_id != window_id:
                return
            logger.debug("UNO window %d expired", window_id)
            self._resolve(window, caught_by=None)
