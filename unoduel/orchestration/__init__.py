"""Game orchestration."""

from unoduel.orchestration.game_runner import GameResult, GameRunner
from unoduel.orchestration.tournament import run_tournament

__all__ = ["GameResult", "GameRunner", "run_tournament"]
