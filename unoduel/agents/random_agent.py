"""Random agent for simulations."""

import random
from typing import Optional

from unoduel.engine import CatchUno, Command, DeclareUno, PlayCard, Snapshot


class RandomAgent:
    """Plays a random legal card when it can.

    Calls UNO with probability ``uno_call_probability`` and catches the
    computer with probability ``catch_probability``; skipped chances are
    not offered again by the runner until the next step.
    """

    def __init__(
        self,
        name: str = "random",
        seed: Optional[int] = None,
        uno_call_probability: float = 1.0,
        catch_probability: float = 1.0,
    ):
        self._name = name
        self._rng = random.Random(seed)
        self.uno_call_probability = uno_call_probability
        self.catch_probability = catch_probability

    @property
    def name(self) -> str:
        return self._name

    def choose_command(self, snapshot: Snapshot, legal_commands: list[Command]) -> Command | None:
        if not legal_commands:
            return None

        for command in legal_commands:
            if isinstance(command, DeclareUno) and self._rng.random() < self.uno_call_probability:
                return command
            if isinstance(command, CatchUno) and self._rng.random() < self.catch_probability:
                return command

        turn_commands = [c for c in legal_commands if not isinstance(c, (DeclareUno, CatchUno))]
        if not turn_commands:
            return None
        # Prefer playing over drawing to make game progress
        plays = [c for c in turn_commands if isinstance(c, PlayCard)]
        return self._rng.choice(plays or turn_commands)
