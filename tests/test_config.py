"""Tests for engine settings."""

import pytest

from unoduel.engine import EngineConfig


def test_defaults() -> None:
    config = EngineConfig()
    assert config.hand_size == 5
    assert (config.window_min_ms, config.window_max_ms) == (2000, 4000)
    assert config.computer_uno_call_probability == 1.0
    assert config.seed is None


def test_from_env_overrides() -> None:
    config = EngineConfig.from_env(
        {
            "UNO_HAND_SIZE": "7",
            "UNO_WINDOW_MIN_MS": "100",
            "UNO_WINDOW_MAX_MS": "200",
            "UNO_COMPUTER_CALL_PROBABILITY": "0.7",
            "UNO_HISTORY_SIZE": "20",
            "UNO_SEED": "42",
        }
    )
    assert config == EngineConfig(
        hand_size=7,
        window_min_ms=100,
        window_max_ms=200,
        computer_uno_call_probability=0.7,
        history_size=20,
        seed=42,
    )


def test_from_env_empty_uses_defaults() -> None:
    assert EngineConfig.from_env({}) == EngineConfig()
    assert EngineConfig.from_env({"UNO_SEED": ""}).seed is None


@pytest.mark.parametrize(
    "kwargs",
    [
        {"hand_size": 0},
        {"window_min_ms": 0},
        {"window_min_ms": 4000, "window_max_ms": 4000},
        {"computer_uno_call_probability": 1.5},
        {"history_size": 0},
    ],
)
def test_invalid_settings(kwargs) -> None:
    with pytest.raises(ValueError):
        EngineConfig(**kwargs)
