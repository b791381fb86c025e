"""Heuristic reply extraction from arbitrary JSON values."""

import json
from collections.abc import Mapping, Sequence
from typing import Any

# Checked in order; the first key holding a string wins.
REPLY_KEYS = ("output", "reply", "message", "content", "text", "result")


def extract_reply(payload: Any) -> str | None:
    """Find the reply text inside a webhook payload.

    Rules, in precedence order:
        1. A string is the reply.
        2. A non-empty list is resolved through its first element only.
        3. An object yields the first string value among REPLY_KEYS.
           Nested objects under those keys are not searched.
        4. Anything else has no reply.

    Args:
        payload: Parsed JSON value.

    Returns:
        The reply text, or None when it cannot be located.
    """
    match payload:
        case str():
            return payload
        case Sequence() if not isinstance(payload, (bytes, bytearray)) and len(payload) > 0:
            return extract_reply(payload[0])
        case Mapping():
            for key in REPLY_KEYS:
                value = payload.get(key)
                if isinstance(value, str):
                    return value
            return None
        case _:
            return None


def reply_or_dump(payload: Any, raw_text: str | None = None) -> str:
    """Return the extracted reply, falling back to a dump of the payload.

    Args:
        payload: Parsed JSON value.
        raw_text: Original body text, preferred over re-serialization when set.

    Returns:
        Text suitable for an assistant message.
    """
    reply = extract_reply(payload)
    if reply is not None:
        return reply
    if raw_text is not None:
        return raw_text
    try:
        return json.dumps(payload, ensure_ascii=False, separators=(",", ":"))
    except (TypeError, ValueError):
        return str(payload)
