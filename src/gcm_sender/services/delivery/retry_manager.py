"""GCM retry orchestration with capped backoff."""

import asyncio
from collections.abc import Awaitable, Callable, Generator, Sequence
from dataclasses import dataclass
from typing import Any

import backoff
import structlog

from gcm_sender.core.constants import BACKOFF_INITIAL_DELAY, MAX_BACKOFF_DELAY
from gcm_sender.core.logging_config import ErrorLogger
from gcm_sender.models.response import GcmResponse
from gcm_sender.models.send_result import SendResult

logger = structlog.get_logger()

AttemptFunc = Callable[[list[str]], Awaitable[SendResult]]


def backoff_delay(
    attempt: int,
    initial: float = BACKOFF_INITIAL_DELAY,
    maximum: float = MAX_BACKOFF_DELAY,
) -> float:
    """Delay in seconds after the given 1-based attempt."""
    return min(initial * 2 * attempt, maximum)


def doubling(
    initial: float = BACKOFF_INITIAL_DELAY,
    maximum: float = MAX_BACKOFF_DELAY,
) -> Generator[float | None, Any, None]:
    """Wait generator for ``backoff`` yielding ``backoff_delay(1)``, ``backoff_delay(2)``, ..."""
    # Advance past backoff's initial .send(None)
    yield None
    attempt = 1
    while True:
        yield backoff_delay(attempt, initial, maximum)
        attempt += 1


def retryable_registration_ids(
    registration_ids: Sequence[str],
    response: GcmResponse | None,
) -> list[str]:
    """Registration ids whose positional result is a retryable failure."""
    if response is None:
        return []
    return [
        registration_id
        for registration_id, result in zip(registration_ids, response.results)
        if result.retryable
    ]


@dataclass
class RetryState:
    """State of one in-flight multicast send."""

    registration_ids: list[str]
    attempt: int = 1
    last_result: SendResult | None = None

    @property
    def response(self) -> GcmResponse | None:
        if self.last_result is None:
            return None
        return self.last_result.response


class GcmRetryManager:
    """Drives repeated send attempts until success, exhaustion or nothing left to retry.

    Every failed attempt counts as "no usable result", whatever its
    ``SendErrorKind``. Exhaustion is not an error: the last response (or
    ``None``) is returned.
    """

    def __init__(
        self,
        logger: ErrorLogger,
        *,
        initial_delay: float = BACKOFF_INITIAL_DELAY,
        max_delay: float = MAX_BACKOFF_DELAY,
    ):
        self.logger = logger
        self.initial_delay = initial_delay
        self.max_delay = max_delay

    async def send_single(
        self,
        attempt_func: AttemptFunc,
        registration_ids: Sequence[str],
        retries: int,
    ) -> GcmResponse | None:
        """Retry the whole recipient set until an attempt yields a response.

        Args:
            attempt_func: Performs one attempt for the given registration ids
            registration_ids: The single-recipient set, resent unchanged
            retries: Maximum number of attempts

        Returns:
            The first parsed response, or None once attempts are exhausted
        """
        registration_ids = list(registration_ids)

        def give_up(details: dict) -> None:
            self.logger.error(f"Could not send message after {retries} attempts")

        @backoff.on_predicate(
            doubling,
            lambda result: not result.is_ok,
            max_tries=max(retries, 1),
            jitter=None,
            on_backoff=_log_backoff,
            on_giveup=give_up,
            logger=None,
            initial=self.initial_delay,
            maximum=self.max_delay,
        )
        async def attempt() -> SendResult:
            return await attempt_func(registration_ids)

        result = await attempt()
        return result.response

    async def send_multicast(
        self,
        attempt_func: AttemptFunc,
        registration_ids: Sequence[str],
        retries: int,
    ) -> GcmResponse | None:
        """Resend only to recipients reported ``Unavailable``, narrowing each round.

        Stops as soon as no retryable recipient is left. An attempt with no
        response at all leaves nothing to narrow to, so it stops the loop too.

        Args:
            attempt_func: Performs one attempt for the given registration ids
            registration_ids: Initial recipient set (more than one id)
            retries: Maximum number of attempts

        Returns:
            The most recent response, covering only the last attempt's recipients
        """
        state = RetryState(registration_ids=list(registration_ids))
        state.last_result = await attempt_func(state.registration_ids)

        while state.attempt < retries:
            delay = backoff_delay(state.attempt, self.initial_delay, self.max_delay)
            unsent = retryable_registration_ids(state.registration_ids, state.response)
            if not unsent:
                return state.response

            state.registration_ids = unsent
            logger.debug(
                "Retrying unavailable registration ids",
                attempt=state.attempt,
                remaining=len(unsent),
                wait=delay,
            )
            await asyncio.sleep(delay)
            state.attempt += 1
            state.last_result = await attempt_func(state.registration_ids)

        self.logger.error(f"Could not send message to all devices after {retries} attempts")
        return state.response


def _log_backoff(details: dict) -> None:
    logger.debug("Retrying GCM send", tries=details["tries"], wait=details["wait"])
