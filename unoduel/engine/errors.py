"""Typed errors returned by engine commands."""

from enum import Enum


class ErrorKind(str, Enum):
    WRONG_PHASE = "wrong_phase"
    OUT_OF_RANGE = "out_of_range"
    ILLEGAL_PLAY = "illegal_play"
    MUST_DRAW_DENIED = "must_draw_denied"
    DECK_EXHAUSTED = "deck_exhausted"
    NOTHING_TO_CATCH = "nothing_to_catch"
    NO_WINDOW_OPEN = "no_window_open"


class EngineError(Exception):
    """Base class for recoverable command errors.

    The engine state is unchanged whenever one of these is raised.
    """

    kind: ErrorKind

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.kind.value)


class WrongPhase(EngineError):
    kind = ErrorKind.WRONG_PHASE


class OutOfRange(EngineError):
    kind = ErrorKind.OUT_OF_RANGE


class IllegalPlay(EngineError):
    kind = ErrorKind.ILLEGAL_PLAY


class MustDrawDenied(EngineError):
    kind = ErrorKind.MUST_DRAW_DENIED


class DeckExhausted(EngineError):
    kind = ErrorKind.DECK_EXHAUSTED


class NothingToCatch(EngineError):
    kind = ErrorKind.NOTHING_TO_CATCH


class NoWindowOpen(EngineError):
    kind = ErrorKind.NO_WINDOW_OPEN
