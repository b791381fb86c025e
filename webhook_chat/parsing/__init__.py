"""Reply extraction for webhook payloads.

Backends behind the webhook answer in many shapes: bare strings, lists of
items, or objects with the text under one of several conventional keys.

Responsibilities:
    - Locate the human-readable reply in a parsed payload
    - Produce a stable textual fallback when no reply field exists

Never raises on unexpected shapes.
"""

from webhook_chat.parsing.reply_extractor import REPLY_KEYS, extract_reply, reply_or_dump

__all__ = ["REPLY_KEYS", "extract_reply", "reply_or_dump"]
