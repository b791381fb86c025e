"""Pydantic models for the conversation and the webhook wire format.

Models:
    - Message: Individual message in the conversation log
    - RequestEnvelope: Outbound payload sent on every submit
    - RawResult: Successfully received webhook response
    - EngineState: Snapshot of the conversation engine state
"""

from webhook_chat.models.schemas import EngineState, Message, RawResult, RequestEnvelope, Role

__all__ = ["EngineState", "Message", "RawResult", "RequestEnvelope", "Role"]
