"""NiceGUI chat interface bound to a ConversationEngine."""

from functools import partial

from nicegui import ui

from webhook_chat.config import get_client_config
from webhook_chat.engine.conversation import ConversationEngine
from webhook_chat.models.schemas import Message, Role
from webhook_chat.rendering.pipeline import get_render_pipeline
from webhook_chat.transport.client import TransportClient
from webhook_chat.ui.prompts import SUGGESTED_PROMPTS

HELPER_TEXT = "Enter to send • Shift+Enter for newline"

# Bare Enter submits. Shift+Enter keeps the native textarea newline; the other
# modifiers get one inserted at the caret, since browsers add nothing for them.
ENTER_TO_SEND_JS = """
(e) => {
    if (e.key !== 'Enter' || e.shiftKey) return;
    e.preventDefault();
    if (e.ctrlKey || e.altKey || e.metaKey) {
        const el = e.target;
        el.setRangeText('\\n', el.selectionStart, el.selectionEnd, 'end');
        el.dispatchEvent(new Event('input', { bubbles: true }));
        return;
    }
    emit();
}
"""

CUSTOM_CSS = """
<style>
    body { background: #0e0f13; color: #e5e7eb; }

    .message-user {
        background: #2a2b31;
        border: 1px solid #3a3b41;
        color: #f5f6f7;
        border-radius: 20px;
    }

    .message-assistant {
        background: #1f2024;
        border: 1px solid #2a2b31;
        border-radius: 16px;
    }

    .suggest-group {
        background: #1a1b20;
        border: 1px solid #2a2b31;
        border-radius: 12px;
    }

    .input-pill {
        background: #1a1b20;
        border: 1px solid #2a2b31;
        border-radius: 999px;
    }

    /* Markdown styling */
    .message-body pre { white-space: pre-wrap; margin: 0.5rem 0; }
    .message-body code { font-family: 'Menlo', 'Monaco', monospace; }
    .message-body ul, .message-body ol { margin: 0.5rem 0; padding-left: 1.25rem; }
    .message-body a { color: #5eead4; }
</style>
"""


def input_placeholder(app_title: str, *, pending: bool = False) -> str:
    return "Waiting for reply..." if pending else f"Message {app_title}"


def next_loader_frame(dots: str) -> str:
    """Advance the pending indicator: '' -> '.' -> '..' -> '...' -> ''."""
    return "" if len(dots) >= 3 else f"{dots}."


@ui.page("/")
def chat_page() -> None:
    """Main chat page. Each page load is a new session."""
    config = get_client_config()
    pipeline = get_render_pipeline()
    engine = ConversationEngine(TransportClient(config.api_url))

    ui.add_head_html(CUSTOM_CSS)
    ui.page_title(config.app_title)

    messages_container: ui.column
    scroll_area: ui.scroll_area
    input_field: ui.textarea
    send_btn: ui.button
    error_label: ui.label
    thinking_label: ui.label | None = None
    loader_dots = ""
    shown = (0, False, None)

    def render_message(msg: Message) -> None:
        is_user = msg.role is Role.USER
        align = "justify-end" if is_user else "justify-start"
        bubble = "message-user max-w-[80%]" if is_user else "message-assistant w-full"
        with ui.row().classes(f"w-full {align}"):
            with ui.element("div").classes(f"px-4 py-3 {bubble}"):
                # Pipeline output is the only HTML injected into the page
                ui.html(pipeline.render(msg.content), sanitize=False).classes(
                    "message-body text-sm leading-relaxed"
                )

    def render_suggestions() -> None:
        with ui.column().classes("w-full items-center gap-4 py-12"):
            ui.label("What should we talk about?").classes("text-3xl font-semibold")
            with ui.row().classes("w-full gap-3 justify-center"):
                for group in SUGGESTED_PROMPTS:
                    with ui.column().classes("suggest-group p-3 gap-1 w-72"):
                        ui.label(group.category).classes(
                            "text-xs uppercase tracking-wide text-gray-400"
                        )
                        for item in group.items:
                            ui.button(item, on_click=partial(engine.submit, item)).props(
                                "flat dense no-caps rounded"
                            ).classes("text-left text-sm")

    def refresh_messages() -> None:
        nonlocal thinking_label
        state = engine.state
        messages_container.clear()
        thinking_label = None
        with messages_container:
            if not state.log:
                render_suggestions()
            for msg in state.log:
                render_message(msg)
            if state.pending:
                with ui.row().classes("w-full justify-start"):
                    with ui.element("div").classes("message-assistant px-4 py-3"):
                        thinking_label = ui.label(f"Thinking{loader_dots}").classes(
                            "text-sm text-gray-400 italic"
                        )
        scroll_area.scroll_to(percent=1.0)

    def sync_view() -> None:
        """Apply the engine state to the widgets."""
        nonlocal shown
        state = engine.state
        current = (len(state.log), state.pending, state.last_error)
        if current != shown:
            if state.last_error and state.last_error != shown[2]:
                ui.notify(state.last_error, type="negative")
            shown = current
            refresh_messages()

        if input_field.value != state.draft_input:
            input_field.value = state.draft_input
        placeholder = input_placeholder(config.app_title, pending=state.pending)
        if input_field.props.get("placeholder") != placeholder:
            input_field.props["placeholder"] = placeholder
            input_field.update()
        send_btn.set_enabled(state.can_send)
        error_label.set_text(state.last_error or "")
        error_label.set_visibility(bool(state.last_error))

    def tick_loader() -> None:
        nonlocal loader_dots
        if not engine.pending:
            loader_dots = ""
            return
        loader_dots = next_loader_frame(loader_dots)
        if thinking_label is not None:
            thinking_label.set_text(f"Thinking{loader_dots}")

    async def send_draft() -> None:
        await engine.submit()

    # === UI Layout ===
    with ui.column().classes("w-full max-w-4xl mx-auto gap-0").style("height: calc(100vh - 2rem)"):
        # Header
        with ui.row().classes("w-full px-4 py-3 items-center gap-3"):
            ui.icon("smart_toy").classes("text-2xl")
            ui.label(config.app_title).classes("text-xl font-semibold")

        # Messages
        with ui.scroll_area().classes("flex-grow w-full") as scroll_area:
            messages_container = ui.column().classes("w-full gap-3 p-4")

        # Input
        with ui.row().classes("w-full input-pill px-4 py-2 gap-3 items-end no-wrap"):
            input_field = (
                ui.textarea(placeholder=input_placeholder(config.app_title))
                .props("autogrow borderless dense rows=1")
                .classes("flex-grow")
                .on_value_change(lambda e: engine.update_draft(e.value or ""))
                .on("keydown", send_draft, js_handler=ENTER_TO_SEND_JS)
            )
            send_btn = ui.button(icon="arrow_forward", on_click=send_draft).props(
                "round unelevated"
            )
        error_label = ui.label().classes("w-full px-4 text-sm text-red-400")
        ui.label(HELPER_TEXT).classes("w-full text-center text-xs text-gray-500 py-1")

    unsubscribe = engine.subscribe(sync_view)
    ui.context.client.on_disconnect(unsubscribe)
    ui.timer(0.4, tick_loader)
    refresh_messages()
    sync_view()
