"""Pydantic models for API requests and responses.

Provides type safety, validation, and automatic OpenAPI documentation.

Models:
    - ChatRequest: Incoming chat message
    - SuggestRequest / SuggestResponse: Follow-up question exchange
    - ErrorResponse: JSON error body
    - HealthResponse / EnvDebugResponse: Operational endpoints
    - ConversationTurn: A message held by the chat page
"""

from brandchat.models.schemas import (
    ChatRequest,
    ConversationTurn,
    EnvDebugResponse,
    ErrorResponse,
    HealthResponse,
    Role,
    SuggestRequest,
    SuggestResponse,
)

__all__ = [
    "ChatRequest",
    "ConversationTurn",
    "EnvDebugResponse",
    "ErrorResponse",
    "HealthResponse",
    "Role",
    "SuggestRequest",
    "SuggestResponse",
]
