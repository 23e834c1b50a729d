"""Agno agent service for the streaming chat relay and follow-up suggestions.

Two agents share one model configuration:

1. **Chat agent** - carries the brand persona and answers a single user
   turn. Its output is streamed fragment by fragment; the service yields
   only content events so the HTTP layer can write them straight through.

2. **Suggestion agent** - a bare one-shot agent asked for a JSON array of
   follow-up questions. Its reply is parsed defensively: anything other
   than an array of strings becomes an empty list.

Neither agent has storage. The browser keeps the conversation, so every
request is a single, independent turn.

Upstream calls are bounded by ``AgentConfig.timeout``. Once streaming has
started, failures are reported in-band with ``ERROR_NOTICE`` and the stream
ends normally.
"""

import asyncio
import json
import logging
from collections.abc import AsyncGenerator, AsyncIterable
from typing import Any

from agno.agent import Agent
from agno.models.base import Model
from agno.models.google import Gemini
from agno.models.openai import OpenAIChat
from agno.run.agent import RunEvent

from brandchat.agent.config import AgentConfig, get_agent_config
from brandchat.agent.persona import (
    BRAND_DESCRIPTION,
    BRAND_INSTRUCTIONS,
    build_suggestion_prompt,
)
from brandchat.formatting import sanitize_assistant

logger = logging.getLogger(__name__)

ERROR_NOTICE = "\n[Error] Unable to complete the response. Please try again.\n"
MAX_SUGGESTIONS = 5


def parse_suggestions(raw: Any) -> list[str]:
    """Parse a model reply into at most ``MAX_SUGGESTIONS`` questions.

    Args:
        raw: Reply content, normally a JSON array encoded as text.

    Returns:
        Non-empty, stripped string items in their original order. Malformed
        or non-array replies yield an empty list.
    """
    if raw is None:
        return []

    if isinstance(raw, list):
        data = raw
    else:
        try:
            data = json.loads(sanitize_assistant(str(raw)).strip())
        except ValueError:
            return []

    if not isinstance(data, list):
        return []

    items = [item.strip() for item in data if isinstance(item, str) and item.strip()]
    return items[:MAX_SUGGESTIONS]


def _content_of(event: Any) -> str:
    """Return the text carried by a streamed run event, if any."""
    if getattr(event, "event", RunEvent.run_content) != RunEvent.run_content:
        return ""
    content = getattr(event, "content", None)
    return content if isinstance(content, str) else ""


async def _with_deadline(
    events: AsyncIterable[Any],
    timeout: float,
) -> AsyncGenerator[Any]:
    """Re-yield ``events`` until exhausted or ``timeout`` seconds have passed.

    Raises:
        TimeoutError: If the stream is not finished by the deadline.
    """
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    iterator = aiter(events)
    while True:
        remaining = deadline - loop.time()
        if remaining <= 0:
            raise TimeoutError(f"Upstream stream exceeded {timeout:.0f}s")
        try:
            event = await asyncio.wait_for(anext(iterator), timeout=remaining)
        except StopAsyncIteration:
            return
        yield event


class AgentService:
    """Service wrapping the Agno agents used by the relay.

    Wraps Agno's Agent with:
    - Provider selection (Gemini or OpenAI-compatible)
    - A brand-persona chat agent with a clean streaming interface
    - A one-shot suggestion agent with tolerant parsing
    - Upstream timeouts and centralized error handling
    """

    def __init__(self, config: AgentConfig | None = None) -> None:
        """Initialize the agent service.

        Args:
            config: Optional agent configuration.
                    Loads from environment if not provided.
        """
        self._config = config or get_agent_config()
        self._chat_agent = self._create_chat_agent()
        self._suggest_agent = self._create_suggest_agent()

    @property
    def config(self) -> AgentConfig:
        """The configuration this service was built with."""
        return self._config

    def _create_model(self, json_output: bool = False) -> Model:
        """Create the model client for the configured provider.

        Args:
            json_output: Ask Gemini for an ``application/json`` reply.
                OpenAI-compatible models rely on the prompt alone, since
                their JSON mode only admits objects.

        Returns:
            An Agno model; the SDK client inside is created lazily.
        """
        if self._config.provider == "openai":
            return OpenAIChat(
                id=self._config.model_name,
                api_key=self._config.api_key,
                base_url=self._config.base_url,
                temperature=self._config.temperature,
                max_tokens=self._config.max_tokens,
            )

        if json_output:
            return Gemini(
                id=self._config.model_name,
                api_key=self._config.api_key,
                temperature=self._config.temperature,
                max_output_tokens=self._config.max_tokens,
                generation_config={"response_mime_type": "application/json"},
            )

        return Gemini(
            id=self._config.model_name,
            api_key=self._config.api_key,
            temperature=self._config.temperature,
            max_output_tokens=self._config.max_tokens,
        )

    def _create_chat_agent(self) -> Agent:
        """Create the persona agent that answers chat messages."""
        return Agent(
            model=self._create_model(),
            description=BRAND_DESCRIPTION,
            instructions=BRAND_INSTRUCTIONS,
            # Answers are HTML, not markdown
            markdown=False,
        )

    def _create_suggest_agent(self) -> Agent:
        """Create the agent that proposes follow-up questions."""
        return Agent(model=self._create_model(json_output=True), markdown=False)

    async def stream_response(self, message: str) -> AsyncGenerator[str]:
        """Stream response fragments for a single user message.

        Yields each non-empty fragment as soon as the model produces it.
        Any upstream failure or timeout ends the stream with ERROR_NOTICE.

        Args:
            message: The user's (already trimmed) message.

        Yields:
            Response text fragments in arrival order.
        """
        try:
            response_stream = self._chat_agent.arun(message, stream=True)

            async for event in _with_deadline(response_stream, self._config.timeout):
                # Agno reports model failures as an event instead of raising
                if getattr(event, "event", None) == RunEvent.run_error:
                    logger.error(f"Model run error: {getattr(event, 'content', None)}")
                    yield ERROR_NOTICE
                    return

                text = _content_of(event)
                if text:
                    yield text

        except Exception as e:
            logger.error(f"Model stream error: {e}", exc_info=True)
            yield ERROR_NOTICE

    async def suggest(self, message: str, assistant: str) -> list[str]:
        """Ask the model for follow-up questions to the last exchange.

        Failures are logged and downgraded to an empty list.

        Args:
            message: The user's last message.
            assistant: The assistant's full reply to it.

        Returns:
            Up to MAX_SUGGESTIONS question strings.
        """
        prompt = build_suggestion_prompt(message, assistant)
        try:
            response = await asyncio.wait_for(
                self._suggest_agent.arun(prompt),
                timeout=self._config.timeout,
            )
        except Exception as e:
            logger.warning(f"Suggestion request failed: {e}")
            return []

        return parse_suggestions(getattr(response, "content", None))


# Module-level singleton instance
_agent_service: AgentService | None = None


def get_agent_service() -> AgentService:
    """Get or create the global agent service.

    Uses singleton pattern for resource efficiency.

    Returns:
        The AgentService instance.
    """
    global _agent_service
    if _agent_service is None:
        _agent_service = AgentService()
    return _agent_service
