"""
Procurement Intelligence - Base Agent Configuration

Completion-service abstraction shared by all agents, plus the helpers that
turn untrusted model output into well-typed values.
"""

import json
import logging
import math
from dataclasses import dataclass
from typing import Any, Optional, Protocol

import openai
from openai import AsyncOpenAI

logger = logging.getLogger("procurement.agents")


DEFAULT_MODEL = "gpt-4o-mini"


class MalformedModelOutput(ValueError):
    """Completion text could not be interpreted as the expected shape."""


class UpstreamServiceFailure(RuntimeError):
    """The completion service was unreachable, timed out, or rejected the call."""


@dataclass(frozen=True)
class LLMConfig:
    """Explicit configuration for the completion service."""
    api_key: Optional[str] = None
    model: str = DEFAULT_MODEL
    base_url: Optional[str] = None
    timeout: Optional[float] = None


class CompletionService(Protocol):
    """Anything that turns a role-tagged message sequence into one completion."""

    async def complete(self, messages: list[dict], json_object: bool = False) -> str:
        ...


class OpenAICompletionService:
    """
    Completion service backed by the OpenAI chat completions API.

    The client carries no conversation state, so one instance can serve
    concurrent requests.
    """

    def __init__(self, config: LLMConfig, client: Optional[AsyncOpenAI] = None):
        self.config = config
        if client is None:
            kwargs: dict[str, Any] = {"api_key": config.api_key or "", "base_url": config.base_url}
            if config.timeout is not None:
                kwargs["timeout"] = config.timeout
            client = AsyncOpenAI(**kwargs)
        self.client = client

    async def complete(self, messages: list[dict], json_object: bool = False) -> str:
        kwargs: dict[str, Any] = {"model": self.config.model, "messages": messages}
        if json_object:
            kwargs["response_format"] = {"type": "json_object"}

        try:
            resp = await self.client.chat.completions.create(**kwargs)
        except openai.OpenAIError as e:
            logger.error(f"Completion call failed ({type(e).__name__}): {e}")
            raise UpstreamServiceFailure(f"Completion service call failed: {e}") from e

        return resp.choices[0].message.content or ""


# Output validation helpers

def load_json_object(output: str) -> dict:
    """
    Parse completion text that should hold a single JSON object.

    Raises:
        MalformedModelOutput: If the text is not JSON or not an object
    """
    try:
        data = json.loads(output or "{}")
    except (json.JSONDecodeError, TypeError) as e:
        raise MalformedModelOutput(f"Invalid JSON output: {e}") from e

    if not isinstance(data, dict):
        raise MalformedModelOutput(f"Expected a JSON object, got {type(data).__name__}")

    return data


def load_json_object_or_empty(output: str, source: str) -> dict:
    """Like load_json_object, but substitute an empty object on failure."""
    try:
        return load_json_object(output)
    except MalformedModelOutput as e:
        logger.warning(f"{source}: discarding malformed model output ({e})")
        return {}


def number_or_none(value: Any) -> Optional[float]:
    """Accept a finite int/float (bools excluded), else None."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        finite = math.isfinite(value)
    except OverflowError:
        # ints too large for a float
        return None
    return value if finite else None


def string_or_none(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None
