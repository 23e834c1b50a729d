"""Chat relay endpoints.

``POST /api/chat`` forwards one user message to the model and relays the
reply as chunked plain text, fragment by fragment. ``POST /api/suggest``
asks for follow-up questions and never fails on model errors.
"""

import logging
import os
from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.responses import StreamingResponse

from brandchat.agent.chat_agent import AgentService, get_agent_service
from brandchat.api.errors import (
    MISSING_CREDENTIALS,
    MISSING_CREDENTIALS_SUGGEST,
    MISSING_MESSAGE,
    RelayError,
)
from brandchat.env import resolve_env_path
from brandchat.models.schemas import (
    ChatRequest,
    EnvDebugResponse,
    ErrorResponse,
    HealthResponse,
    SuggestRequest,
    SuggestResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["chat"])

STREAM_MEDIA_TYPE = "text/plain; charset=utf-8"
STREAM_HEADERS = {
    "Transfer-Encoding": "chunked",
    "Cache-Control": "no-cache",
    # Disable proxy buffering (nginx) so fragments are not held back
    "X-Accel-Buffering": "no",
}

# Variables reported by /api/debug-env
_DEBUG_KEYS = ("GEMINI_API_KEY", "GOOGLE_API_KEY")

ServiceDep = Annotated[AgentService, Depends(get_agent_service)]


def _require_credentials(service: AgentService, message: str) -> None:
    if not service.config.has_credentials:
        raise RelayError(status.HTTP_500_INTERNAL_SERVER_ERROR, message)


@router.post(
    "/chat",
    response_class=StreamingResponse,
    responses={
        200: {"content": {"text/plain": {}}, "description": "Streamed model output"},
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def chat(request: ChatRequest, service: ServiceDep) -> StreamingResponse:
    """Relay a user message to the model and stream the reply.

    Headers are committed before the first fragment, so upstream failures
    arrive as a trailing notice in the body rather than as a status code.

    Raises:
        400: Empty or whitespace-only message.
        500: No API credential configured.
    """
    if not request.message:
        raise RelayError(status.HTTP_400_BAD_REQUEST, MISSING_MESSAGE)

    _require_credentials(service, MISSING_CREDENTIALS)

    logger.info(f"Relaying chat message ({len(request.message)} chars)")
    return StreamingResponse(
        service.stream_response(request.message),
        media_type=STREAM_MEDIA_TYPE,
        headers=STREAM_HEADERS,
    )


@router.post(
    "/suggest",
    response_model=SuggestResponse,
    responses={500: {"model": ErrorResponse}},
)
async def suggest(request: SuggestRequest, service: ServiceDep) -> SuggestResponse:
    """Propose follow-up questions for the last exchange.

    Model failures and malformed replies produce an empty list.

    Raises:
        500: No API credential configured.
    """
    _require_credentials(service, MISSING_CREDENTIALS_SUGGEST)

    suggestions = await service.suggest(request.message, request.assistant)
    logger.debug(f"Suggested {len(suggestions)} follow-up questions")
    return SuggestResponse(suggestions=suggestions)


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Check service health status."""
    return HealthResponse(ok=True)


@router.get("/debug-env", response_model=EnvDebugResponse)
async def debug_env() -> EnvDebugResponse:
    """Report which configuration variables are visible, without values.

    A key counts as set only if it is at least 10 characters long.
    """
    keys = {name: len(os.getenv(name, "")) >= 10 for name in _DEBUG_KEYS}
    keys["PORT"] = bool(os.getenv("PORT"))
    return EnvDebugResponse(
        cwd=os.getcwd(),
        env_path=str(resolve_env_path()),
        keys=keys,
    )
