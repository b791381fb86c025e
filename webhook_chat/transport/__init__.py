"""HTTP transport for the chat webhook.

Single-attempt JSON POST with tolerant response decoding.

Responsibilities:
    - Send the request envelope to the configured endpoint
    - Map non-2xx statuses and network errors to TransportError
    - Decode JSON bodies, including JSON mislabelled as plain text
"""

from webhook_chat.transport.client import REQUEST_TIMEOUT, TransportClient, TransportError

__all__ = ["REQUEST_TIMEOUT", "TransportClient", "TransportError"]
