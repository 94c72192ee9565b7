"""Push notification client for the Google Cloud Messaging HTTP endpoint."""

from gcm_sender.core.constants import GcmError
from gcm_sender.models import (
    GcmResponse,
    GcmResult,
    Message,
    SendError,
    SendErrorKind,
    SendResult,
)
from gcm_sender.services import GcmSenderError, NoRegistrationIdsError, Sender

__version__ = "0.1.0"

__all__ = [
    "GcmError",
    "GcmResponse",
    "GcmResult",
    "GcmSenderError",
    "Message",
    "NoRegistrationIdsError",
    "SendError",
    "SendErrorKind",
    "SendResult",
    "Sender",
]
