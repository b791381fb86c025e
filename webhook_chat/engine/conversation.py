"""Conversation engine driving one chat session.

State machine per submit: Idle -> Pending -> (Fulfilled | Failed) -> Idle.
The pending check happens before the first await, so on a single event loop
at most one webhook call is ever in flight per engine.
"""

import logging
from collections.abc import Callable

from webhook_chat.models.schemas import EngineState, Message, RequestEnvelope, Role
from webhook_chat.parsing.reply_extractor import reply_or_dump
from webhook_chat.session.identity import generate_session_id
from webhook_chat.transport.client import TransportClient, TransportError

logger = logging.getLogger(__name__)

APOLOGY_PREFIX = "Sorry, I could not reach the API."

Listener = Callable[[], None]


class ConversationEngine:
    """Owns the message log and pending/error state for one session.

    Mutated only through submit() and update_draft(). Consumers read
    snapshots via the state property and subscribe for change notifications.
    """

    def __init__(self, transport: TransportClient, session_id: str | None = None) -> None:
        """Initialize the engine.

        Args:
            transport: Client used for the webhook call.
            session_id: Fixed session identifier. Generated when omitted.
        """
        self._transport = transport
        self._session_id = session_id or generate_session_id()
        self._state = EngineState()
        self._listeners: list[Listener] = []
        logger.info(f"Conversation session started: {self._session_id}")

    @property
    def session_id(self) -> str:
        return self._session_id

    @property
    def state(self) -> EngineState:
        """Snapshot of the current state."""
        return self._state.model_copy(deep=True)

    @property
    def log(self) -> tuple[Message, ...]:
        return tuple(self._state.log)

    @property
    def pending(self) -> bool:
        return self._state.pending

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener.

        Returns:
            Function that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener()
            except Exception:
                logger.exception("State listener failed")

    def update_draft(self, text: str) -> None:
        """Replace the draft input."""
        self._state.draft_input = text
        self._notify()

    def _append(self, role: Role, content: str) -> None:
        self._state.log.append(Message(role=role, content=content))

    async def submit(self, text: str | None = None) -> None:
        """Send a user message and record the reply.

        Blank text, or a call already in flight, makes this a no-op.

        Args:
            text: Message to send. Uses the draft input when None.
        """
        source = self._state.draft_input if text is None else text
        message = source.strip()
        if not message or self._state.pending:
            return

        self._state.last_error = None
        self._state.pending = True
        self._append(Role.USER, message)
        self._state.draft_input = ""
        self._notify()

        logger.info(f"Dispatching message ({len(message)} chars) for session {self._session_id}")
        try:
            result = await self._transport.send(
                RequestEnvelope(session=self._session_id, message=message)
            )
        except Exception as e:
            if not isinstance(e, TransportError):
                logger.exception("Unexpected error while calling the webhook")
            friendly = f"{APOLOGY_PREFIX} {e}"
            self._append(Role.ASSISTANT, friendly)
            self._state.last_error = friendly
        else:
            self._append(Role.ASSISTANT, reply_or_dump(result.payload, result.raw_text))
        finally:
            self._state.pending = False
            self._notify()
