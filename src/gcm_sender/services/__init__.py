"""GCM sender services."""

from gcm_sender.services.sender import GcmSenderError, NoRegistrationIdsError, Sender

__all__ = ["GcmSenderError", "NoRegistrationIdsError", "Sender"]
