"""Single game runner."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from unoduel.engine import (
    AdvanceComputer,
    CatchUno,
    DeclareUno,
    Engine,
    EngineConfig,
    ManualScheduler,
    PhaseKind,
    Scheduler,
    Seat,
)

if TYPE_CHECKING:
    from unoduel.agent.protocol import SeatDriver

logger = logging.getLogger(__name__)

OPTIONAL_COMMANDS = (DeclareUno, CatchUno)
MAX_ATTEMPTS = 3


@dataclass
class GameResult:
    """Result of a completed game."""

    winner: Optional[Seat]
    num_turns: int
    penalties: int
    driver_name: str


class GameRunner:
    """Runs a single game between a seat driver and the built-in computer.

    Time passes through the scheduler: with a ``ManualScheduler`` the game is
    simulated instantly on a virtual clock, with a ``ThreadingScheduler`` the
    computer really thinks and UNO windows expire in wall-clock time.
    """

    def __init__(
        self,
        driver: "SeatDriver",
        config: Optional[EngineConfig] = None,
        scheduler: Optional[Scheduler] = None,
        seed: Optional[int] = None,
        think_range: tuple[float, float] = (2.0, 4.0),
        human_think: float = 0.5,
        max_turns: int = 1000,
    ):
        self._driver = driver
        self._config = config or EngineConfig(seed=seed)
        self._scheduler = scheduler or ManualScheduler()
        self._rng = random.Random(seed)
        self._think_range = think_range
        self._human_think = human_think
        self._max_turns = max_turns
        self.engine: Optional[Engine] = None

    def _human_step(self, engine: Engine) -> bool:
        """Give the driver its move. Returns True if a command was accepted.

        A rejected command (typically one that lost a race with the UNO
        timer) is not replaced: the driver is asked again with the commands
        that are legal now.
        """
        for _ in range(MAX_ATTEMPTS):
            legal = engine.legal_commands(Seat.HUMAN)
            if not legal:
                return False
            required = [c for c in legal if not isinstance(c, OPTIONAL_COMMANDS)]

            command = self._driver.choose_command(engine.snapshot(), legal)
            if command is None and required:
                logger.warning("%s declined a required move, using %r", self._driver.name, required[0])
                command = required[0]
            if command is None:
                return False

            result = engine.handle(command)
            if result.ok:
                if self._human_think:
                    self._scheduler.sleep(self._human_think)
                return True
            logger.warning("%s issued %r: %s", self._driver.name, command, result.message)

        raise RuntimeError(f"{self._driver.name} issued no accepted command in {MAX_ATTEMPTS} attempts")

    def run(self) -> GameResult:
        """Run the game and return the result."""
        engine = Engine(config=self._config, scheduler=self._scheduler, rng=random.Random(self._config.seed))
        self.engine = engine
        engine.start()
        num_turns = 0

        while engine.phase.kind is not PhaseKind.GAME_OVER and num_turns < self._max_turns:
            if self._human_step(engine):
                num_turns += 1
                continue

            if engine.phase.kind is PhaseKind.COMPUTER_TURN:
                self._scheduler.sleep(self._rng.uniform(*self._think_range))
                # An expired window may not change the phase, but re-check anyway
                if engine.phase.kind is PhaseKind.COMPUTER_TURN:
                    engine.handle(AdvanceComputer())
                    num_turns += 1

        if engine.phase.kind is not PhaseKind.GAME_OVER:
            logger.warning("Stopped after %d turns without a winner", num_turns)

        return GameResult(
            winner=engine.phase.winner,
            num_turns=num_turns,
            penalties=engine.penalties,
            driver_name=self._driver.name,
        )
