"""Session identifier generation.

Each client instance gets one RFC 4122 version 4 UUID, reused for every
request it sends to the webhook.
"""

import logging
import os
import random
import re
import uuid

logger = logging.getLogger(__name__)

SESSION_ID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$"
)


def _random_bytes(count: int) -> bytes:
    """Return random bytes from the OS source, or the PRNG if it is missing."""
    try:
        return os.urandom(count)
    except NotImplementedError:
        logger.warning("No OS randomness source available, using pseudo-random bytes")
        return random.randbytes(count)


def generate_session_id() -> str:
    """Generate a version 4 UUID string for a new session.

    The version and variant bits are always set, so the result is well formed
    whichever random source produced the bytes.

    Returns:
        Canonical lowercase UUID string.
    """
    return str(uuid.UUID(bytes=_random_bytes(16), version=4))
