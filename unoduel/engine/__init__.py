"""Rules engine for two-player UNO."""

from unoduel.engine.card import PLAYABLE_COLORS, Card, CardType, Color
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
from unoduel.engine.deck import Deck, create_deck
from unoduel.engine.engine import Engine
from unoduel.engine.errors import EngineError, ErrorKind
from unoduel.engine.game_state import GameState, Phase, PhaseKind, Seat, Snapshot
from unoduel.engine.rules import effect_of, legal
from unoduel.engine.scheduler import ManualScheduler, Scheduler, ThreadingScheduler

__all__ = [
    "Card",
    "CardType",
    "Color",
    "PLAYABLE_COLORS",
    "create_deck",
    "Deck",
    "legal",
    "effect_of",
    "GameState",
    "Phase",
    "PhaseKind",
    "Seat",
    "Snapshot",
    "Engine",
    "EngineConfig",
    "EngineError",
    "ErrorKind",
    "Scheduler",
    "ManualScheduler",
    "ThreadingScheduler",
    "Command",
    "CommandResult",
    "Start",
    "PlayCard",
    "DrawCard",
    "PassTurn",
    "ChooseColor",
    "DeclareUno",
    "CatchUno",
    "AdvanceComputer",
]
