from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Role(str, Enum):
    """Author of a message in the conversation log."""

    USER = "user"
    ASSISTANT = "assistant"


class Message(BaseModel):
    """A single entry in the conversation log.

    Messages are never edited after being appended, so the model is frozen.

    Attributes:
        role: Who authored the message.
        content: The message text (markdown for assistant replies).
    """

    model_config = ConfigDict(frozen=True)

    role: Role
    content: str


class RequestEnvelope(BaseModel):
    """Payload posted to the webhook on every submit.

    Attributes:
        session: Session identifier, constant for the client lifetime.
        message: The trimmed user text.
    """

    session: str
    message: str = Field(..., min_length=1)


class RawResult(BaseModel):
    """A successful webhook response, parsed as far as possible.

    Attributes:
        payload: Parsed JSON value, or the raw body text when it is not JSON.
        raw_text: Body text when the response was not declared as JSON.
        content_type: Content-Type header as received.
    """

    payload: Any = None
    raw_text: str | None = None
    content_type: str = ""


class EngineState(BaseModel):
    """Snapshot of the conversation engine.

    Attributes:
        log: Messages in append order.
        draft_input: Current contents of the input box.
        pending: True while a webhook call is in flight.
        last_error: Most recent user-visible failure, if any.
    """

    log: list[Message] = Field(default_factory=list)
    draft_input: str = ""
    pending: bool = False
    last_error: str | None = None

    @property
    def can_send(self) -> bool:
        """Whether the send action should be enabled."""
        return not self.pending and bool(self.draft_input.strip())
