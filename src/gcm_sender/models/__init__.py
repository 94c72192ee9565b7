"""GCM sender data models."""

from gcm_sender.models.message import Message
from gcm_sender.models.response import GcmResponse, GcmResult
from gcm_sender.models.send_result import SendError, SendErrorKind, SendResult

__all__ = [
    "Message",
    "GcmResponse",
    "GcmResult",
    "SendError",
    "SendErrorKind",
    "SendResult",
]
