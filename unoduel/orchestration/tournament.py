"""Tournament - run many games and aggregate results."""

import random
from collections import defaultdict
from dataclasses import replace
from typing import Callable, Optional

from unoduel.engine import EngineConfig
from unoduel.orchestration.game_runner import GameRunner


def run_tournament(
    make_driver: Callable[[], object],
    num_games: int = 100,
    seed: Optional[int] = None,
    config: Optional[EngineConfig] = None,
) -> dict[str, int]:
    """Play ``num_games`` simulated games of a driver against the computer.

    Each game gets its own seed drawn from ``seed`` so a tournament is
    reproducible. ``make_driver`` builds a fresh driver per game.

    Returns:
        Dict mapping "human", "computer" and "none" (unfinished games) to wins,
        plus "penalties" with the total UNO penalty cards drawn.
    """
    wins: dict[str, int] = defaultdict(int)
    base = config or EngineConfig()

    rng = random.Random(seed)
    for _ in range(num_games):
        game_seed = rng.randint(0, 2**31 - 1)
        runner = GameRunner(make_driver(), config=replace(base, seed=game_seed), seed=game_seed)
        result = runner.run()
        wins[result.winner.value if result.winner else "none"] += 1
        wins["penalties"] += result.penalties

    return dict(wins)
