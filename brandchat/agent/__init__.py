"""Agno agent logic for the chat relay.

Responsibilities:
    - Model selection (Gemini by default, OpenAI-compatible on request)
    - Brand persona and output-format instructions
    - Streaming fragment generation with upstream timeouts
    - One-shot follow-up suggestions with tolerant JSON parsing

Maintains clean separation from the HTTP layer.
"""

from brandchat.agent.chat_agent import (
    ERROR_NOTICE,
    AgentService,
    get_agent_service,
    parse_suggestions,
)
from brandchat.agent.config import AgentConfig, get_agent_config

__all__ = [
    "ERROR_NOTICE",
    "AgentConfig",
    "AgentService",
    "get_agent_config",
    "get_agent_service",
    "parse_suggestions",
]
