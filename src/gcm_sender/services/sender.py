"""GCM sender: the public entry point for push delivery."""

import copy
import functools
from collections.abc import Callable, Sequence
from typing import Any

import httpx
import structlog

from gcm_sender.core.config import Settings, settings
from gcm_sender.core.constants import (
    BACKOFF_INITIAL_DELAY,
    GCM_SEND_URI,
    MAX_BACKOFF_DELAY,
    SOCKET_TIMEOUT,
)
from gcm_sender.core.logging_config import ErrorLogger, stderr_logger
from gcm_sender.models.message import Message
from gcm_sender.models.response import GcmResponse
from gcm_sender.models.send_result import SendErrorKind, SendResult
from gcm_sender.services.delivery.gcm_delivery import GcmDeliveryService
from gcm_sender.services.delivery.retry_manager import GcmRetryManager

logger = structlog.get_logger()

SendCallback = Callable[[Any, GcmResponse | None], Any]


class GcmSenderError(Exception):
    """Base exception for sender errors."""

    pass


class NoRegistrationIdsError(GcmSenderError):
    """Raised when a send is requested without any registration id."""

    def __init__(self) -> None:
        super().__init__("No RegistrationIds given!")


class Sender:
    """Sends messages to GCM, retrying transient failures.

    A sender holds only its API key and configuration; concurrent sends
    through one instance share no mutable state.
    """

    def __init__(
        self,
        key: str,
        *,
        logger: ErrorLogger | None = None,
        proxy: str | None = None,
        timeout: float | None = None,
        send_uri: str | None = None,
        initial_delay: float = BACKOFF_INITIAL_DELAY,
        max_delay: float = MAX_BACKOFF_DELAY,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize sender.

        Args:
            key: GCM server API key
            logger: Object with an ``error(str)`` method; defaults to stderr
            proxy: Proxy URL for the send endpoint
            timeout: Per-request timeout in seconds
            send_uri: Override for the GCM send endpoint
            initial_delay: Base backoff delay in seconds
            max_delay: Upper bound for any single backoff delay
            transport: Optional httpx transport, mainly for tests
        """
        self.key = key
        self.logger = logger or stderr_logger()
        self.delivery = GcmDeliveryService(
            key,
            logger=self.logger,
            send_uri=send_uri or GCM_SEND_URI,
            timeout=timeout or SOCKET_TIMEOUT,
            proxy=proxy or None,
            transport=transport,
        )
        self.retry_manager = GcmRetryManager(
            self.logger,
            initial_delay=initial_delay,
            max_delay=max_delay,
        )

    @classmethod
    def from_settings(cls, config: Settings | None = None, **overrides: Any) -> "Sender":
        """Build a sender from ``GCM_*`` settings.

        Raises:
            GcmSenderError: If no API key is configured
        """
        config = config or settings
        if not config.api_key:
            raise GcmSenderError("GCM API key not configured")

        options: dict[str, Any] = {
            "proxy": config.proxy or None,
            "timeout": config.timeout,
            "send_uri": config.send_uri,
            "initial_delay": config.backoff_initial_delay,
            "max_delay": config.max_backoff_delay,
        }
        options.update(overrides)
        logger.debug("Building GCM sender from settings", send_uri=options["send_uri"])
        return cls(config.api_key, **options)

    async def send_no_retry(
        self,
        message: Message,
        registration_ids: Sequence[str],
        callback: SendCallback | None = None,
    ) -> SendResult:
        """Send a message in a single attempt.

        Args:
            message: Message to deliver
            registration_ids: Target registration ids
            callback: Optional ``callback(error, response)``, called once

        Returns:
            Tagged result of the attempt
        """
        registration_ids = list(registration_ids)
        if not registration_ids:
            self.logger.error("No RegistrationIds given!")
            result = SendResult.failed(SendErrorKind.NO_RECIPIENTS, detail="No RegistrationIds given!")
        else:
            result = await self.delivery.send_no_retry(copy.deepcopy(message), registration_ids)

        if callback is not None:
            callback(result.error, result.response)
        return result

    async def send(
        self,
        message: Message,
        registration_ids: Sequence[str],
        retries: int,
        callback: SendCallback | None = None,
    ) -> GcmResponse | None:
        """Send a message, retrying with backoff up to ``retries`` attempts.

        A single registration id is retried as a whole until a response is
        parsed. Several ids are retried only for those reported
        ``Unavailable``. Running out of attempts is not an error: the last
        response, or None, is returned.

        Args:
            message: Message to deliver
            registration_ids: Target registration ids
            retries: Maximum number of attempts
            callback: Optional ``callback(error, response)``, called exactly once

        Returns:
            The last parsed response, or None if none was obtained

        Raises:
            NoRegistrationIdsError: If ``registration_ids`` is empty and no
                callback was given
        """
        registration_ids = list(registration_ids)
        if not registration_ids:
            self.logger.error("No RegistrationIds given!")
            error = NoRegistrationIdsError()
            if callback is None:
                raise error
            callback(error, None)
            return None

        attempt = functools.partial(self.delivery.send_no_retry, copy.deepcopy(message))
        if len(registration_ids) == 1:
            response = await self.retry_manager.send_single(attempt, registration_ids, retries)
        else:
            response = await self.retry_manager.send_multicast(attempt, registration_ids, retries)

        if callback is not None:
            callback(None, response)
        return response
