"""Webhook client built on httpx.

One POST per submit, no retries. Responses are decoded by declared content
type, with a best-effort JSON parse for servers that label JSON as text.
"""

import json
import logging

import httpx

from webhook_chat.models.schemas import RawResult, RequestEnvelope

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 120.0
JSON_CONTENT_TYPE = "application/json"


class TransportError(Exception):
    """Raised when the webhook call does not produce a usable response.

    Attributes:
        status_code: HTTP status for non-2xx responses, None otherwise.
        reason: HTTP reason phrase, empty for network-level failures.
    """

    def __init__(self, message: str, *, status_code: int | None = None, reason: str = "") -> None:
        self.status_code = status_code
        self.reason = reason
        super().__init__(message)


def _decode_response(response: httpx.Response) -> RawResult:
    """Turn a successful response into a RawResult.

    Raises:
        TransportError: If a body declared as JSON cannot be parsed.
    """
    content_type = response.headers.get("content-type", "")

    if JSON_CONTENT_TYPE in content_type:
        try:
            payload = response.json()
        except ValueError as e:
            raise TransportError(f"Invalid JSON response: {e}") from e
        return RawResult(payload=payload, content_type=content_type)

    raw = response.text
    try:
        payload = json.loads(raw)
    except ValueError:
        payload = raw
    return RawResult(payload=payload, raw_text=raw, content_type=content_type)


class TransportClient:
    """Posts request envelopes to the chat webhook."""

    def __init__(
        self,
        endpoint: str,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            endpoint: Full webhook URL.
            transport: Optional httpx transport, mainly for tests.
        """
        self._endpoint = endpoint
        self._transport = transport

    @property
    def endpoint(self) -> str:
        return self._endpoint

    async def send(self, envelope: RequestEnvelope) -> RawResult:
        """Send one envelope and decode the reply.

        Args:
            envelope: Session and message to post.

        Returns:
            Decoded response payload.

        Raises:
            TransportError: On network failure, non-2xx status, or invalid JSON.
        """
        async with httpx.AsyncClient(timeout=REQUEST_TIMEOUT, transport=self._transport) as client:
            try:
                response = await client.post(
                    self._endpoint,
                    json=envelope.model_dump(),
                    headers={"Content-Type": JSON_CONTENT_TYPE},
                )
            except httpx.RequestError as e:
                detail = str(e) or type(e).__name__
                logger.warning(f"Webhook request to {self._endpoint} failed: {detail}")
                raise TransportError(detail) from e

        logger.info(
            f"POST {self._endpoint} -> {response.status_code} "
            f"({response.headers.get('content-type', 'no content type')})"
        )

        if not response.is_success:
            hint = f"{response.status_code} {response.reason_phrase}"
            raise TransportError(
                f"Request failed ({hint})",
                status_code=response.status_code,
                reason=response.reason_phrase,
            )

        return _decode_response(response)
