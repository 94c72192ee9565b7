"""GCM delivery: single attempts and retry orchestration."""

from gcm_sender.services.delivery.gcm_delivery import (
    GcmDeliveryService,
    build_headers,
    build_request_body,
)
from gcm_sender.services.delivery.retry_manager import GcmRetryManager, RetryState

__all__ = [
    "GcmDeliveryService",
    "GcmRetryManager",
    "RetryState",
    "build_headers",
    "build_request_body",
]
