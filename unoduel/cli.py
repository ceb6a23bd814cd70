"""CLI entry point."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional

import typer
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

app = typer.Typer(help="Two-player UNO against the computer")


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _make_driver(agent: str, llm_provider: str, llm_model: str, seed: Optional[int]):
    from unoduel.agents.human_agent import HumanAgent
    from unoduel.agents.llm_agent import LLMAgent
    from unoduel.agents.random_agent import RandomAgent

    agent = agent.strip()
    if ":" in agent:
        kind, model = agent.split(":", 1)
    else:
        kind, model = agent, llm_model
    kind = kind.lower()

    if kind == "llm":
        return LLMAgent(provider=llm_provider, model=model)
    if kind == "human":
        return HumanAgent()
    if kind == "random":
        return RandomAgent(seed=seed)
    raise typer.BadParameter(f"Unknown agent type: {kind}. Use 'human', 'random' or 'llm'.")


def _config(seed: Optional[int]):
    from unoduel.engine import EngineConfig

    config = EngineConfig.from_env()
    if seed is not None:
        config = replace(config, seed=seed)
    return config


AGENT_HELP = "Seat driver: human, random, or llm / llm:model_name (e.g. llm:gpt-4o)"


@app.command()
def play(
    agent: str = typer.Option("human", "--agent", "-a", help=AGENT_HELP),
    llm_provider: str = typer.Option(
        "openrouter",
        "--llm-provider",
        "-p",
        help="LLM provider: openrouter, groq, ollama or huggingface",
    ),
    llm_model: str = typer.Option("openai/gpt-4o-mini", "--llm-model", "-m", help="Model name"),
    seed: Optional[int] = typer.Option(None, "--seed", "-s", help="Random seed"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Play one game in real time: the computer thinks and UNO windows expire."""
    from unoduel.engine import ThreadingScheduler
    from unoduel.orchestration.game_runner import GameRunner

    _configure_logging(verbose)
    scheduler = ThreadingScheduler()
    driver = _make_driver(agent, llm_provider, llm_model, seed)
    runner = GameRunner(driver, config=_config(seed), scheduler=scheduler, seed=seed, human_think=0.0)
    try:
        result = runner.run()
    finally:
        scheduler.shutdown()
    for line in runner.engine.snapshot().history:
        typer.echo(f"- {line}")
    typer.echo(f"Winner: {result.winner.value if result.winner else 'None'}")
    typer.echo(f"Turns: {result.num_turns}")


@app.command()
def simulate(
    agent: str = typer.Option("random", "--agent", "-a", help=AGENT_HELP),
    llm_provider: str = typer.Option("openrouter", "--llm-provider", "-p", help="LLM provider"),
    llm_model: str = typer.Option("openai/gpt-4o-mini", "--llm-model", "-m", help="Model name"),
    seed: Optional[int] = typer.Option(None, "--seed", "-s", help="Random seed"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Simulate one game on a virtual clock."""
    from unoduel.orchestration.game_runner import GameRunner

    _configure_logging(verbose)
    driver = _make_driver(agent, llm_provider, llm_model, seed)
    runner = GameRunner(driver, config=_config(seed), seed=seed)
    result = runner.run()
    typer.echo(f"Winner: {result.winner.value if result.winner else 'None'}")
    typer.echo(f"Turns: {result.num_turns}")
    typer.echo(f"UNO penalties: {result.penalties}")


@app.command()
def tournament(
    agent: str = typer.Option("random", "--agent", "-a", help=AGENT_HELP),
    games: int = typer.Option(100, "--games", "-g", help="Number of games"),
    llm_provider: str = typer.Option("openrouter", "--llm-provider", "-p", help="LLM provider"),
    llm_model: str = typer.Option("openai/gpt-4o-mini", "--llm-model", "-m", help="Model name"),
    seed: Optional[int] = typer.Option(None, "--seed", "-s", help="Random seed"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Run a tournament of simulated games against the computer."""
    from unoduel.orchestration.tournament import run_tournament

    _configure_logging(verbose)
    results = run_tournament(
        lambda: _make_driver(agent, llm_provider, llm_model, seed),
        num_games=games,
        seed=seed,
        config=_config(seed),
    )
    typer.echo("Tournament results:")
    for name, count in sorted(results.items(), key=lambda x: -x[1]):
        typer.echo(f"  {name}: {count}")


if __name__ == "__main__":
    app()
