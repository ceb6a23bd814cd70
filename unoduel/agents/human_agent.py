"""Human agent - reads commands from the terminal."""

from unoduel.agents.formatting import format_commands, format_snapshot
from unoduel.engine import Command, Snapshot
from unoduel.engine.commands import CatchUno, DeclareUno


class HumanAgent:
    """Agent that prompts the human for input via terminal.

    An empty line skips optional commands (calling or catching UNO).
    """

    def __init__(self, name: str = "human"):
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def choose_command(
        self,
        snapshot: Snapshot,
        legal_commands: list[Command],
    ) -> Command | None:
        if not legal_commands:
            return None

        optional = all(isinstance(c, (DeclareUno, CatchUno)) for c in legal_commands)

        print("\n--- Your move ---")
        print(format_snapshot(snapshot))
        print("\nLegal commands:")
        print(format_commands(legal_commands, snapshot))

        while True:
            try:
                raw = input("Enter number" + (" (blank to skip): " if optional else ": ")).strip()
                if not raw and optional:
                    return None
                idx = int(raw)
                if 0 <= idx < len(legal_commands):
                    return legal_commands[idx]
            except ValueError:
                pass
            except EOFError:
                return None
            print("Invalid. Try again.")
