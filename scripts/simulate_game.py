"""Simulate a game with a random driver and print the event log."""

import logging

from unoduel.agents.random_agent import RandomAgent
from unoduel.orchestration.game_runner import GameRunner


def main():
    logging.basicConfig(level=logging.INFO)
    driver = RandomAgent("Bot", seed=42, uno_call_probability=0.7)
    runner = GameRunner(driver, seed=42)
    result = runner.run()

    for line in runner.engine.snapshot().history:
        print(f"> {line}")

    print(f"Game finished! Winner: {result.winner.value if result.winner else 'None'}")
    print(f"Turns: {result.num_turns}")
    print(f"UNO penalties: {result.penalties}")


if __name__ == "__main__":
    main()
