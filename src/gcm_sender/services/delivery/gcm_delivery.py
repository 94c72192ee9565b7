"""GCM request building and single-attempt delivery over HTTP."""

import json
from collections.abc import Sequence
from typing import Any

import httpx
from pydantic import ValidationError

from gcm_sender.core.constants import (
    JSON_REGISTRATION_IDS,
    PARAM_COLLAPSE_KEY,
    PARAM_DELAY_WHILE_IDLE,
    PARAM_PAYLOAD_KEY,
    PARAM_TIME_TO_LIVE,
)
from gcm_sender.core.logging_config import ErrorLogger
from gcm_sender.models.message import Message
from gcm_sender.models.response import GcmResponse
from gcm_sender.models.send_result import SendErrorKind, SendResult


def build_request_body(message: Message, registration_ids: Sequence[str]) -> dict[str, Any]:
    """Build the JSON body for a send request.

    Unset message options are left out entirely; the payload is included
    only when the message declares it has data.
    """
    body: dict[str, Any] = {JSON_REGISTRATION_IDS: list(registration_ids)}

    if message.delay_while_idle is not None:
        body[PARAM_DELAY_WHILE_IDLE] = message.delay_while_idle
    if message.collapse_key is not None:
        body[PARAM_COLLAPSE_KEY] = message.collapse_key
    if message.time_to_live is not None:
        body[PARAM_TIME_TO_LIVE] = message.time_to_live
    if message.has_data:
        body[PARAM_PAYLOAD_KEY] = message.data

    return body


def build_headers(api_key: str, content: bytes) -> dict[str, str]:
    """Request headers for an encoded body."""
    return {
        "Content-Type": "application/json",
        "Content-Length": str(len(content)),
        "Authorization": f"key={api_key}",
    }


class GcmDeliveryService:
    """Sends one request to the GCM send endpoint and classifies the outcome."""

    def __init__(
        self,
        api_key: str,
        *,
        logger: ErrorLogger,
        send_uri: str,
        timeout: float,
        proxy: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize delivery service.

        Args:
            api_key: GCM server key, sent as ``Authorization: key=...``
            logger: Sink for the error line written on HTTP and parse failures
            send_uri: Send endpoint URL
            timeout: Timeout in seconds for one HTTP round trip
            proxy: Optional proxy URL
            transport: Optional httpx transport, used in place of the network
        """
        self.api_key = api_key
        self.logger = logger
        self.send_uri = send_uri
        self.timeout = timeout
        self.proxy = proxy
        self._transport = transport

    async def send_no_retry(
        self,
        message: Message,
        registration_ids: Sequence[str],
    ) -> SendResult:
        """Perform exactly one send attempt.

        Args:
            message: Message to deliver
            registration_ids: Non-empty list of target registration ids

        Returns:
            ``SendResult.ok`` with the parsed response, or ``SendResult.failed``
            tagged with the reason no usable response was obtained
        """
        content = json.dumps(build_request_body(message, registration_ids)).encode("utf-8")

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                proxy=self.proxy,
                transport=self._transport,
            ) as client:
                response = await client.post(
                    self.send_uri,
                    content=content,
                    headers=build_headers(self.api_key, content),
                )
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
            # Malformed send URI or proxy URL included
            return SendResult.failed(SendErrorKind.TRANSPORT_ERROR, detail=str(e))

        # Unreachable through httpx itself; only a replaced client can hand back None
        if response is None:
            return SendResult.failed(SendErrorKind.NO_RESPONSE, detail="response is null")

        status = response.status_code
        if status == 503:
            self.logger.error("Service is unavailable")
            return SendResult.failed(SendErrorKind.SERVICE_UNAVAILABLE, status_code=status)
        if status == 401:
            self.logger.error("Unauthorized")
            return SendResult.failed(SendErrorKind.UNAUTHORIZED, status_code=status)
        if status != 200:
            self.logger.error(f"Invalid request: {status}")
            return SendResult.failed(SendErrorKind.HTTP_ERROR, status_code=status)

        try:
            parsed = GcmResponse.model_validate_json(response.content)
        except ValidationError as e:
            self.logger.error(f"Error handling response {e}")
            return SendResult.failed(SendErrorKind.PARSE_ERROR, status_code=status, detail=str(e))

        # Results are matched to registration ids by position
        if parsed.results and len(parsed.results) != len(registration_ids):
            detail = f"expected {len(registration_ids)} results, got {len(parsed.results)}"
            self.logger.error(f"Error handling response: {detail}")
            return SendResult.failed(SendErrorKind.PARSE_ERROR, status_code=status, detail=detail)

        return SendResult.ok(parsed)
