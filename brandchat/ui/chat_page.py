"""NiceGUI chat widget that renders the relay's stream incrementally."""

import html
import logging
import os

import httpx
from nicegui import Client, ui

from brandchat.formatting import sanitize_assistant
from brandchat.models.schemas import ConversationTurn, Role
from brandchat.ui.stream import (
    NARROW_QUERY,
    NETWORK_ERROR,
    ChatStreamError,
    fetch_suggestions,
    max_chips,
    render_stream,
    stream_chat,
)

logger = logging.getLogger(__name__)

API_BASE_URL = os.getenv("API_BASE_URL", f"http://localhost:{os.getenv('PORT', '3000')}")

INTRO_HTML = (
    "<p><strong>Anjali</strong><br />Online – Ready to help</p>"
    "<p>Welcome to QB Tech Solutions!<br />I’m Anjali, your AI assistant from "
    "QB Tech Solutions, here to guide you through our services in branding, web "
    "development, digital marketing, and AI innovation.</p>"
)

DEFAULT_QUESTIONS = [
    "Tell me about QB Tech Solutions",
    "What services do you offer?",
    "How can I get started with a project?",
    "Show me your portfolio or past work",
    "How do I contact your team?",
]

CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600&display=swap"
      rel="stylesheet">
<style>
    * { font-family: 'Inter', sans-serif; }

    body { background: #f5f5f5; min-height: 100vh; }

    .app-container {
        background: white;
        border-radius: 12px;
        box-shadow: 0 2px 8px rgba(0, 0, 0, 0.1);
        overflow: hidden;
    }

    .header { background: linear-gradient(135deg, #0a84ff 0%, #1ba6ff 100%); }

    .message-user {
        background: linear-gradient(135deg, #0a84ff 0%, #1ba6ff 100%);
        color: white;
        border-radius: 18px 18px 4px 18px;
    }

    .message-assistant {
        background: #f3f4f6;
        color: #1f2937;
        border-radius: 18px 18px 18px 4px;
    }
    .message-assistant p { margin: 0.25rem 0; }
    .message-assistant strong { font-weight: 600; }

    .avatar-user { background: linear-gradient(135deg, #0a84ff 0%, #1ba6ff 100%); }
    .avatar-assistant { background: #1f2937; }

    .faq-title { font-weight: 600; margin-bottom: 0.5rem; }
    .faq-list { flex-wrap: wrap; gap: 0.5rem; }

    .input-box {
        background: #f9fafb;
        border: 1px solid #e5e7eb;
        border-radius: 12px;
        transition: border-color 0.2s;
    }
    .input-box:focus-within { border-color: #0a84ff; }
</style>
"""


class ChatSession:
    """Chat state for one open page.

    The page is the only store of the conversation; nothing is persisted.
    """

    def __init__(self) -> None:
        self.turns: list[ConversationTurn] = []
        self.is_streaming: bool = False
        self.narrow: bool = False

    def add_turn(self, role: Role, text: str = "", complete: bool = False) -> ConversationTurn:
        turn = ConversationTurn(role=role, text=text, complete=complete)
        self.turns.append(turn)
        return turn


async def _is_narrow_viewport() -> bool:
    try:
        return bool(await ui.run_javascript(f"window.matchMedia('{NARROW_QUERY}').matches"))
    except TimeoutError:
        return False


@ui.page("/")
async def chat_page(client: Client) -> None:
    """Main chat page."""
    ui.add_head_html(CUSTOM_CSS)
    session = ChatSession()

    messages_container: ui.column
    scroll_area: ui.scroll_area
    input_field: ui.textarea
    send_btn: ui.button

    def scroll_to_bottom() -> None:
        scroll_area.scroll_to(percent=1.0)

    def render_avatar(is_user: bool) -> None:
        css = "avatar-user" if is_user else "avatar-assistant"
        icon = "person" if is_user else "support_agent"
        avatar_classes = f"w-9 h-9 rounded-full flex items-center justify-center {css}"
        with ui.element("div").classes(avatar_classes):
            ui.icon(icon).classes("text-white text-lg")

    def render_turn(turn: ConversationTurn) -> ui.html | None:
        """Append a bubble for ``turn``; return the assistant's html element."""
        is_user = turn.role == Role.USER
        align = "justify-end" if is_user else "justify-start"
        bubble_css = "message-user" if is_user else "message-assistant"
        content: ui.html | None = None

        with messages_container, ui.row().classes(f"w-full {align} gap-3 items-end"):
            if not is_user:
                render_avatar(False)
            with ui.element("div").classes(f"max-w-[75%] px-4 py-3 {bubble_css}"):
                # User text is shown verbatim, assistant text as markup
                if is_user:
                    ui.label(turn.text).classes("text-sm whitespace-pre-wrap")
                else:
                    content = ui.html(
                        sanitize_assistant(turn.text), sanitize=False
                    ).classes("text-sm leading-relaxed")
            if is_user:
                render_avatar(True)

        scroll_to_bottom()
        return content

    def render_chips(items: list[str], title: str) -> None:
        with messages_container, ui.row().classes("w-full justify-start gap-3 items-end"):
            render_avatar(False)
            with ui.element("div").classes("max-w-[75%] px-4 py-3 message-assistant"):
                ui.label(title).classes("faq-title text-sm")
                with ui.row().classes("faq-list"):
                    for question in items[: max_chips(session.narrow)]:
                        ui.button(
                            question,
                            on_click=lambda q=question: send_message(q),
                        ).props("outline rounded no-caps size=sm")
        scroll_to_bottom()

    async def run_turn(text: str) -> None:
        render_turn(session.add_turn(Role.USER, text, complete=True))
        reply = session.add_turn(Role.ASSISTANT)
        bubble = render_turn(reply)

        def on_render(markup: str) -> None:
            bubble.set_content(markup)
            scroll_to_bottom()

        async with httpx.AsyncClient(base_url=API_BASE_URL, timeout=120.0) as http:
            try:
                await render_stream(stream_chat(http, text), reply, on_render)
            except ChatStreamError as e:
                bubble.set_content(html.escape(str(e)))
                return
            except httpx.RequestError as e:
                logger.warning(f"Chat request failed: {e}")
                bubble.set_content(NETWORK_ERROR)
                return

            suggestions = await fetch_suggestions(http, text, reply.text)

        if suggestions:
            render_chips(suggestions, "You can also ask:")

    async def send_message(text: str) -> None:
        text = text.strip()
        if not text or session.is_streaming:
            return

        session.is_streaming = True
        send_btn.disable()
        try:
            await run_turn(text)
        finally:
            session.is_streaming = False
            send_btn.enable()

    async def submit() -> None:
        text = input_field.value or ""
        if not text.strip():
            return
        input_field.value = ""
        await send_message(text)
        input_field.run_method("focus")

    # === UI Layout ===
    with (
        ui.element("div").classes("w-full min-h-screen p-4 md:p-8"),
        ui.column().classes("w-full max-w-3xl mx-auto app-container gap-0").style(
            "height: calc(100vh - 4rem)"
        ),
    ):
        # Header
        with ui.row().classes("w-full header px-5 py-4 items-center gap-3"):
            ui.icon("support_agent").classes("text-white text-3xl")
            with ui.column().classes("gap-0"):
                ui.label("Anjali").classes("text-lg font-semibold text-white")
                ui.label("QB Tech Solutions").classes("text-xs text-white/80")

        # Messages
        with ui.scroll_area().classes("flex-grow w-full bg-gray-50") as scroll_area:
            messages_container = ui.column().classes("w-full gap-4 p-5")

        # Input
        with ui.row().classes("w-full p-4 gap-3 items-end bg-white border-t"):
            with ui.element("div").classes("flex-grow input-box px-3 py-2"):
                input_field = (
                    ui.textarea(placeholder="Type a message...")
                    .props("autogrow borderless dense rows=1")
                    .classes("w-full")
                    .on("keydown.enter.prevent", submit)
                )
            send_btn = ui.button(icon="send", on_click=submit).props("round unelevated")

    render_turn(session.add_turn(Role.ASSISTANT, INTRO_HTML, complete=True))

    await client.connected()
    session.narrow = await _is_narrow_viewport()
    render_chips(DEFAULT_QUESTIONS, "How can I assist you today?")
