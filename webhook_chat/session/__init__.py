"""Session identity for a single client lifetime."""

from webhook_chat.session.identity import SESSION_ID_PATTERN, generate_session_id

__all__ = ["SESSION_ID_PATTERN", "generate_session_id"]
