"""Built-in seat drivers."""

from unoduel.agents.human_agent import HumanAgent
from unoduel.agents.llm_agent import LLMAgent
from unoduel.agents.random_agent import RandomAgent

__all__ = ["HumanAgent", "LLMAgent", "RandomAgent"]
