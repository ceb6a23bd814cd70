"""Seat driver protocol - interface that human, random and LLM agents implement."""

from typing import Protocol

from unoduel.engine import Command, Snapshot


class SeatDriver(Protocol):
    """Decides the commands for the human seat."""

    @property
    def name(self) -> str:
        """Display name for the agent."""
        ...

    def choose_command(
        self,
        snapshot: Snapshot,
        legal_commands: list[Command],
    ) -> Command | None:
        """Choose a command given the snapshot and the legal commands.

        Args:
            snapshot: Read-only view with the human hand and public info.
            legal_commands: Commands the seat may issue right now.

        Returns:
            One of the legal commands, or None to do nothing for now (e.g.
            ignore an optional UNO call or catch).
        """
        ...
