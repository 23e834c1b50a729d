from enum import Enum

from pydantic import BaseModel, Field, field_validator


def _coerce_text(v: object) -> str:
    """Coerce a JSON value to trimmed text; null becomes an empty string."""
    if v is None:
        return ""
    return str(v).strip()


class Role(str, Enum):
    """Speaker of a conversation turn."""

    USER = "user"
    ASSISTANT = "assistant"


class ChatRequest(BaseModel):
    """Request payload for the streaming chat endpoint.

    An empty message is accepted here and rejected by the route, so the
    caller gets the relay's own error body instead of a validation dump.

    Attributes:
        message: User's question or prompt, trimmed.
    """

    message: str = ""

    @field_validator("message", mode="before")
    @classmethod
    def strip_message(cls, v: object) -> str:
        """Coerce to string and strip whitespace before validation."""
        return _coerce_text(v)


class SuggestRequest(BaseModel):
    """Request payload for the follow-up suggestion endpoint.

    Attributes:
        message: The user's last message.
        assistant: The assistant's reply to it.
    """

    message: str = ""
    assistant: str = ""

    @field_validator("message", "assistant", mode="before")
    @classmethod
    def strip_text(cls, v: object) -> str:
        """Coerce to string and strip whitespace before validation."""
        return _coerce_text(v)


class SuggestResponse(BaseModel):
    """Follow-up questions for the last exchange (possibly none)."""

    suggestions: list[str] = Field(default_factory=list, max_length=5)


class ErrorResponse(BaseModel):
    """JSON body of every relay error response."""

    error: str


class HealthResponse(BaseModel):
    """Health check body."""

    ok: bool = True


class EnvDebugResponse(BaseModel):
    """Non-secret view of the server's configuration.

    Attributes:
        cwd: Working directory of the server process.
        env_path: The .env file the server reads at startup.
        keys: Whether each known variable is set (never its value).
    """

    cwd: str
    env_path: str
    keys: dict[str, bool]


class ConversationTurn(BaseModel):
    """One message of the conversation held by the chat page.

    The assistant turn grows fragment by fragment while its reply streams
    and is frozen once the stream ends.

    Attributes:
        role: Who is speaking.
        text: Accumulated message text.
        complete: Whether the text can still change.
    """

    role: Role
    text: str = ""
    complete: bool = False

    def append(self, fragment: str) -> None:
        """Append a streamed fragment to the text.

        Raises:
            ValueError: If the turn has already completed.
        """
        if self.complete:
            raise ValueError("Cannot append to a completed turn")
        self.text += fragment

    def finish(self) -> None:
        """Mark the turn as complete."""
        self.complete = True
