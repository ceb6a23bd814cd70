"""LLM agent using the OpenAI library with OpenRouter, Groq, Ollama or HuggingFace."""

import json
import logging
import os
import re
import time
from collections import deque
from typing import Optional

from openai import OpenAI

from unoduel.agents.formatting import format_commands, format_snapshot
from unoduel.engine import CatchUno, Command, DeclareUno, DrawCard, Snapshot

logger = logging.getLogger(__name__)

# provider -> (base URL, API key variable); Ollama needs no key
PROVIDERS = {
    "openrouter": ("https://openrouter.ai/api/v1", "OPENROUTER_API_KEY"),
    "groq": ("https://api.groq.com/openai/v1", "GROQ_API_KEY"),
    "ollama": ("http://localhost:11434/v1", None),
    "huggingface": ("https://router.huggingface.co/v1", "HUGGINGFACE_API_KEY"),
}

PROMPT = """You are playing two-player UNO against a computer opponent.
Objective: empty your hand first. Match the active color, the number of a number card,
or the type of an action card (Skip on Skip, Draw Two on Draw Two). Wild cards can be played on anything.
Skip and Draw Two give you another turn. When you are down to one card, call UNO quickly
or you draw a penalty card. If the computer has one card and has not called UNO, you can catch it.

{view}

=== Legal commands ===
{commands}

INSTRUCTIONS:
Select the best command to win the game.
Respond with a JSON object containing the index of your chosen command.
Example: {{"action_index": 2}}
"""


def _index_in_range(idx: int, commands: list[Command]) -> Command | None:
    if 0 <= idx < len(commands):
        return commands[idx]
    logger.warning("Index %d out of range (0-%d)", idx, len(commands) - 1)
    return None


def _parse_command_response(response: str, commands: list[Command]) -> Command | None:
    """Parse an LLM response into one of ``commands``."""
    # 1. A JSON object, strict first and then with single quotes swapped
    json_match = re.search(r"(\{.*?\})", response, re.DOTALL)
    if json_match:
        json_str = json_match.group(1)
        for candidate in (json_str, json_str.replace("'", '"')):
            try:
                data = json.loads(candidate)
            except (json.JSONDecodeError, ValueError):
                continue
            if isinstance(data, dict) and isinstance(data.get("action_index"), int):
                return _index_in_range(data["action_index"], commands)

    # 2. "action_index": N with any quoting
    match = re.search(r'["\']?action_index["\']?\s*:\s*(\d+)', response, re.IGNORECASE)
    if match:
        return _index_in_range(int(match.group(1)), commands)

    # 3. Look for "DRAW" literally
    if "DRAW" in response.upper():
        for c in commands:
            if isinstance(c, DrawCard):
                return c

    # 4. Last resort: a standalone number
    cleaned_response = re.sub(r"[{}\[\]\"'.,:]", " ", response)
    for word in cleaned_response.split():
        if word.isdigit():
            idx = int(word)
            if 0 <= idx < len(commands):
                return commands[idx]

    return None


class LLMAgent:
    """Agent that asks an LLM to pick the human seat's command."""

    def __init__(
        self,
        provider: str = "openrouter",
        model: str = "openai/gpt-4o-mini",
        api_key: Optional[str] = None,
        timeout: float = 30.0,
        rate_limit: Optional[float] = None,
        client: Optional[OpenAI] = None,
    ):
        if provider not in PROVIDERS:
            raise ValueError(f"Unknown provider: {provider}")
        base_url, key_var = PROVIDERS[provider]
        if key_var is None:
            base_url = os.environ.get("OLLAMA_BASE_URL", base_url)
            api_key = "ollama"
        else:
            api_key = api_key or os.environ.get(key_var)
        if client is None and not api_key:
            raise ValueError(f"API key required for {provider}: set {key_var} or pass api_key")

        self._client = client or OpenAI(api_key=api_key, base_url=base_url)
        self._model = model
        self._provider = provider
        self._timeout = timeout
        self._rate_limit = rate_limit  # requests per minute
        self._sent: deque = deque()

        logger.info("[%s] %s at %s, timeout %ss, rate limit %s rpm", self.name, provider, base_url, timeout, rate_limit)

    @property
    def name(self) -> str:
        return f"llm-{self._model}"

    def _throttle(self) -> None:
        if not self._rate_limit:
            return
        while self._sent and time.monotonic() - self._sent[0] >= 60.0:
            self._sent.popleft()
        if len(self._sent) >= self._rate_limit:
            pause = 60.0 - (time.monotonic() - self._sent[0])
            if pause > 0:
                logger.info("[%s] Rate limited, sleeping %.2fs", self.name, pause)
                time.sleep(pause)
        self._sent.append(time.monotonic())

    def _ask(self, prompt: str) -> str:
        self._throttle()
        request = dict(
            model=self._model,
            messages=[{"role": "user", "content": prompt}],
            timeout=self._timeout,
        )
        # JSON mode only where the provider is known to support it
        if self._provider == "groq" or any(tag in self._model for tag in ("gpt-4", "gpt-3.5")):
            request["response_format"] = {"type": "json_object"}
        reply = self._client.chat.completions.create(**request)
        return reply.choices[0].message.content or ""

    def choose_command(
        self,
        snapshot: Snapshot,
        legal_commands: list[Command],
    ) -> Command | None:
        if not legal_commands:
            return None

        # UNO calls and catches are time-critical; never wait on the model for them
        for command in legal_commands:
            if isinstance(command, (DeclareUno, CatchUno)):
                return command

        prompt = PROMPT.format(
            view=format_snapshot(snapshot),
            commands=format_commands(legal_commands, snapshot),
        )
        for attempt in range(1, 4):
            started = time.monotonic()
            try:
                content = self._ask(prompt)
            except Exception as exc:
                logger.warning(
                    "[%s] Attempt %d failed after %.2fs: %s: %s",
                    self.name, attempt, time.monotonic() - started, type(exc).__name__, exc,
                )
                continue
            logger.debug("[%s] Attempt %d answered in %.2fs", self.name, attempt, time.monotonic() - started)
            command = _parse_command_response(content, legal_commands)
            if command is not None:
                return command
            logger.warning("[%s] Could not parse a command from %r", self.name, content)

        logger.warning("[%s] No usable answer, taking the first legal command", self.name)
        return legal_commands[0]
