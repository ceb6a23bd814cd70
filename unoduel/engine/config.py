"""Engine settings."""

import os
from dataclasses import dataclass
from typing import Mapping, Optional


@dataclass(frozen=True)
class EngineConfig:
    """Settings for a single game.

    The library never reads the environment by itself; front ends call
    ``from_env`` (after loading a ``.env`` file) when they want overrides.
    """

    hand_size: int = 5
    window_min_ms: int = 2000
    window_max_ms: int = 4000  # exclusive
    computer_uno_call_probability: float = 1.0
    history_size: int = 10
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.hand_size < 1:
            raise ValueError("hand_size must be at least 1")
        if not 0 < self.window_min_ms < self.window_max_ms:
            raise ValueError("UNO window bounds must satisfy 0 < min < max")
        if not 0.0 <= self.computer_uno_call_probability <= 1.0:
            raise ValueError("computer_uno_call_probability must be within [0, 1]")
        if self.history_size < 1:
            raise ValueError("history_size must be at least 1")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EngineConfig":
        env = os.environ if environ is None else environ
        defaults = cls()
        seed = env.get("UNO_SEED")
        return cls(
            hand_size=int(env.get("UNO_HAND_SIZE", defaults.hand_size)),
            window_min_ms=int(env.get("UNO_WINDOW_MIN_MS", defaults.window_min_ms)),
            window_max_ms=int(env.get("UNO_WINDOW_MAX_MS", defaults.window_max_ms)),
            computer_uno_call_probability=float(
                env.get("UNO_COMPUTER_CALL_PROBABILITY", defaults.computer_uno_call_probability)
            ),
            history_size=int(env.get("UNO_HISTORY_SIZE", defaults.history_size)),
            seed=int(seed) if seed else None,
        )
