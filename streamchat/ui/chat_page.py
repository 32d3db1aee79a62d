"""NiceGUI chat interface with chunked streaming support."""

from nicegui import ui

from streamchat.models.schemas import ChatMessage, Role
from streamchat.settings import get_server_settings
from streamchat.ui.client import ConversationClient
from streamchat.ui.rendering import markdown_to_html
from streamchat.ui.session import ConversationState, visible_messages

USER_AVATAR = "https://api.dicebear.com/9.x/bottts/svg?seed=speak"
ASSISTANT_AVATAR = "https://api.dicebear.com/9.x/dylan/svg"

CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600&display=swap"
      rel="stylesheet">
<style>
    * { font-family: 'Inter', sans-serif; }

    body { background: #09090b; color: #f4f4f5; min-height: 100vh; }

    .message-user { background: #09090b; }
    .message-assistant { background: #18181b; }

    .input-box {
        background: #18181b;
        border: 1px solid #3f3f46;
        border-radius: 12px;
        transition: border-color 0.2s;
    }
    .input-box:focus-within { border-color: #a1a1aa; }

    /* Markdown styling */
    .prose strong { font-weight: 600; }
    .prose em { font-style: italic; }
    .prose pre { margin: 0; white-space: pre-wrap; }
    .prose code { font-family: 'Menlo', 'Monaco', monospace; }
    .prose ul, .prose ol { margin: 0.5rem 0; }
    .prose a { color: #60a5fa; }
</style>
"""


@ui.page("/")
def chat_page() -> None:
    """Main chat page."""
    ui.add_head_html(CUSTOM_CSS)

    messages_container: ui.column
    input_field: ui.textarea
    send_btn: ui.button

    def render_message(msg: ChatMessage) -> None:
        is_user = msg.role == Role.USER
        row_css = "message-user" if is_user else "message-assistant"
        avatar = USER_AVATAR if is_user else ASSISTANT_AVATAR

        with ui.row().classes(f"w-full gap-5 items-start p-8 {row_css}"):
            with ui.column().classes("items-center gap-1"):
                ui.image(avatar).classes("w-16 h-16")
                ui.label(msg.role).classes("text-xs text-zinc-400")
            ui.html(markdown_to_html(msg.content), sanitize=False).classes(
                "prose flex-1 text-sm leading-relaxed"
            )

    def refresh_messages(state: ConversationState) -> None:
        messages_container.clear()
        with messages_container:
            messages = visible_messages(state)
            if not messages:
                with ui.column().classes("w-full h-64 items-center justify-center gap-3"):
                    ui.icon("forum").classes("text-5xl text-zinc-600")
                    ui.label("Start a conversation").classes("text-lg text-zinc-500")
            else:
                for msg in messages:
                    render_message(msg)

    def on_change(state: ConversationState) -> None:
        refresh_messages(state)
        if state.is_busy:
            input_field.disable()
            send_btn.disable()
        else:
            input_field.enable()
            send_btn.enable()

    session = ConversationClient(on_change=on_change)

    async def send_message() -> None:
        text = input_field.value or ""
        if session.state.is_busy or not text.strip():
            return
        input_field.value = ""
        await session.submit(text)

    def new_chat() -> None:
        session.reset()

    # === UI Layout ===
    with ui.column().classes("w-full min-h-screen gap-0"):
        # Header
        with ui.row().classes("w-full px-5 py-4 items-center justify-between bg-zinc-950"):
            with ui.row().classes("items-center gap-3"):
                ui.icon("smart_toy").classes("text-white text-3xl")
                ui.label("streamchat").classes("text-lg font-semibold text-white")
            ui.button(icon="add", on_click=new_chat).props("flat round color=white")

        # Messages
        with ui.scroll_area().classes("flex-grow w-full").style(
            "height: calc(100vh - 10rem)"
        ):
            messages_container = ui.column().classes("w-full gap-0")
            refresh_messages(session.state)

        # Input
        with ui.row().classes("w-full p-4 gap-3 items-end bg-zinc-900 border-t"):
            with ui.element("div").classes("flex-grow input-box px-3 py-2"):
                input_field = (
                    ui.textarea(placeholder="Type a message...")
                    .props("autogrow borderless dense dark rows=1")
                    .classes("w-full")
                    .on("keydown.enter.prevent", send_message)
                )
            send_btn = ui.button(icon="send", on_click=send_message).props("round unelevated")


def main() -> None:
    """Serve the page on its own; the relay is reached at API_BASE_URL."""
    settings = get_server_settings()
    ui.run(title="streamchat", host=settings.host, port=settings.ui_port, reload=False)


if __name__ == "__main__":
    main()
