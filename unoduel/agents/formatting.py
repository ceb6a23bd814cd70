"""Text rendering of snapshots and commands for prompts."""

from unoduel.engine import ChooseColor, Command, PlayCard, Seat, Snapshot
from unoduel.engine.commands import describe


def format_snapshot(snapshot: Snapshot) -> str:
    """Format the snapshot as text for a terminal or an LLM."""
    lines = [
        "=== Your hand ===",
        " ".join(f"[{i}] {c}" for i, c in enumerate(snapshot.human_hand)) or "(empty)",
        "",
        "=== Top card on discard ===",
        str(snapshot.top_card) if snapshot.top_card else "None",
        "",
        "=== Current color to match ===",
        snapshot.active_color.value.upper() if snapshot.active_color else "any",
        "",
        "=== Opponent ===",
        f"  computer: {snapshot.computer_hand_count} cards",
        "",
        "=== Phase ===",
        str(snapshot.phase),
    ]
    window = snapshot.open_window
    if window is not None:
        who = "You have" if window.subject is Seat.HUMAN else "The computer has"
        lines.extend([
            "",
            "=== UNO window ===",
            f"{who} one card, {window.remaining_ms} ms left to call UNO",
        ])
    lines.extend(["", "=== Game History (recent events) ==="])
    if snapshot.history:
        lines.extend(f"- {h}" for h in snapshot.history)
    else:
        lines.append("No history yet.")
    return "\n".join(lines)


def format_command(command: Command, snapshot: Snapshot) -> str:
    if isinstance(command, PlayCard):
        return f"PLAY {snapshot.human_hand[command.index]}"
    if isinstance(command, ChooseColor):
        return f"CHOOSE {command.color.value.upper()}"
    return describe(command)


def format_commands(commands: list[Command], snapshot: Snapshot) -> str:
    """Format legal commands as a numbered list."""
    return "\n".join(f"{i}: {format_command(c, snapshot)}" for i, c in enumerate(commands))
