"""Pytest configuration and fixtures for gcm-sender tests."""

import json
from collections.abc import Callable
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from gcm_sender.models.message import Message
from gcm_sender.models.response import GcmResponse
from gcm_sender.models.send_result import SendErrorKind, SendResult

TEST_SEND_URI = "https://gcm.test/gcm/send"


def gcm_body(*results: dict) -> dict:
    """Build a GCM response body from per-recipient result entries."""
    failures = sum(1 for r in results if "error" in r)
    return {
        "multicast_id": 6782339717028231855,
        "success": len(results) - failures,
        "failure": failures,
        "canonical_ids": 0,
        "results": list(results),
    }


def ok_result(*results: dict) -> SendResult:
    """A successful SendResult wrapping the given per-recipient entries."""
    return SendResult.ok(GcmResponse.model_validate(gcm_body(*results)))


def failed_result(kind: SendErrorKind = SendErrorKind.TRANSPORT_ERROR) -> SendResult:
    return SendResult.failed(kind, detail="connection refused")


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it handled."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.requests: list[httpx.Request] = []

        def recording_handler(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(recording_handler)

    def sent_bodies(self) -> list[dict]:
        return [json.loads(request.content) for request in self.requests]


@pytest.fixture
def error_logger() -> MagicMock:
    """Logger collaborator recording ``error`` calls."""
    return MagicMock()


@pytest.fixture
def message() -> Message:
    return Message(collapse_key="score_update", time_to_live=108, data={"score": "4x8"})


@pytest.fixture
def mock_sleep():
    """Patch out backoff sleeps and record requested delays."""
    with patch("asyncio.sleep", new_callable=AsyncMock) as mock:
        yield mock


def sleep_delays(mock_sleep: AsyncMock) -> list[float]:
    return [call.args[0] for call in mock_sleep.await_args_list]
