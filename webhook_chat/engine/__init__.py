"""Conversation engine - message log and request state machine.

Responsibilities:
    - Own the ordered conversation log and draft input
    - Gate sends on non-empty input and a single in-flight request
    - Turn webhook results and failures into assistant messages
    - Notify subscribers after every state change

Contains no UI code. The NiceGUI page only reads snapshots and calls
submit/update_draft.
"""

from webhook_chat.engine.conversation import APOLOGY_PREFIX, ConversationEngine

__all__ = ["APOLOGY_PREFIX", "ConversationEngine"]
