"""Client side of the chat relay: read, decode, accumulate, render.

The chat page consumes ``POST /api/chat`` the way a browser reader would:
raw body bytes go through an incremental decoder, each decoded fragment is
appended to the assistant turn, and the whole turn is re-sanitized and
handed to the view after every fragment.

Each stage is an async iterator feeding the next, so there is exactly one
suspension point per chunk and renders never overlap.
"""

import codecs
import json
import logging
from collections.abc import AsyncGenerator, AsyncIterable, Callable

import httpx

from brandchat.formatting import sanitize_assistant
from brandchat.models.schemas import ConversationTurn

logger = logging.getLogger(__name__)

FALLBACK_ERROR = "Sorry, something went wrong. Please try again."
NETWORK_ERROR = "Network error. Please check your connection."

# Viewport breakpoint for the compact chip layout
NARROW_QUERY = "(max-width: 640px)"
NARROW_MAX_CHIPS = 2
WIDE_MAX_CHIPS = 5


class ChatStreamError(Exception):
    """Raised when the relay answers with an error status."""

    pass


def max_chips(narrow: bool) -> int:
    """Number of suggestion chips shown for the viewport size."""
    return NARROW_MAX_CHIPS if narrow else WIDE_MAX_CHIPS


def _error_text(body: str) -> str:
    """Pull the message out of a ``{"error": ...}`` body, else use it as is."""
    try:
        data = json.loads(body)
    except ValueError:
        return body.strip() or FALLBACK_ERROR

    if isinstance(data, dict) and isinstance(data.get("error"), str):
        return data["error"]
    return body.strip() or FALLBACK_ERROR


async def decode_chunks(
    chunks: AsyncIterable[bytes],
    encoding: str = "utf-8",
) -> AsyncGenerator[str]:
    """Decode a byte stream to text, chunk by chunk.

    Multi-byte characters split across chunk boundaries are held back
    until complete; anything still pending at the end is flushed.

    Args:
        chunks: Raw body chunks in arrival order.
        encoding: Body encoding.

    Yields:
        Non-empty decoded text fragments.
    """
    decoder = codecs.getincrementaldecoder(encoding)(errors="replace")
    async for chunk in chunks:
        text = decoder.decode(chunk)
        if text:
            yield text

    tail = decoder.decode(b"", final=True)
    if tail:
        yield tail


async def stream_chat(client: httpx.AsyncClient, message: str) -> AsyncGenerator[str]:
    """Send a message to the relay and yield the decoded reply fragments.

    Args:
        client: HTTP client whose base URL points at the relay.
        message: The user's message.

    Yields:
        Reply text fragments as they arrive.

    Raises:
        ChatStreamError: If the relay rejects the request.
        httpx.RequestError: On transport failure.
    """
    async with client.stream("POST", "/api/chat", json={"message": message}) as response:
        if response.is_error:
            body = await response.aread()
            raise ChatStreamError(_error_text(body.decode("utf-8", errors="replace")))

        async for fragment in decode_chunks(response.aiter_bytes()):
            yield fragment


async def render_stream(
    fragments: AsyncIterable[str],
    turn: ConversationTurn,
    on_render: Callable[[str], None],
) -> ConversationTurn:
    """Accumulate fragments into ``turn`` and re-render after each one.

    The full accumulated text is sanitized every time, so a code fence
    split across fragments never leaks into the view.

    Args:
        fragments: Decoded text fragments in order.
        turn: The assistant turn being filled.
        on_render: Receives the sanitized markup after every fragment.

    Returns:
        The completed turn.
    """
    try:
        async for fragment in fragments:
            turn.append(fragment)
            on_render(sanitize_assistant(turn.text))
    finally:
        turn.finish()
    return turn


async def fetch_suggestions(
    client: httpx.AsyncClient,
    message: str,
    assistant: str,
) -> list[str]:
    """Ask the relay for follow-up questions; any failure yields ``[]``."""
    try:
        response = await client.post(
            "/api/suggest",
            json={"message": message, "assistant": assistant},
        )
        data = response.json()
    except (httpx.HTTPError, ValueError) as e:
        logger.debug(f"Suggestions unavailable: {e}")
        return []

    suggestions = data.get("suggestions") if isinstance(data, dict) else None
    if not isinstance(suggestions, list):
        return []
    return [s for s in suggestions if isinstance(s, str)]
