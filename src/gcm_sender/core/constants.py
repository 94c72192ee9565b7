"""GCM wire constants and defaults."""

from enum import Enum

GCM_SEND_URI = "https://android.googleapis.com/gcm/send"

# Request body keys
JSON_REGISTRATION_IDS = "registration_ids"
PARAM_COLLAPSE_KEY = "collapse_key"
PARAM_DELAY_WHILE_IDLE = "delay_while_idle"
PARAM_TIME_TO_LIVE = "time_to_live"
PARAM_PAYLOAD_KEY = "data"

# All durations in seconds
BACKOFF_INITIAL_DELAY = 1.0
MAX_BACKOFF_DELAY = 1024.0
SOCKET_TIMEOUT = 180.0


class GcmError(str, Enum):
    """Per-recipient error classifications reported by GCM."""

    QUOTA_EXCEEDED = "QuotaExceeded"
    DEVICE_QUOTA_EXCEEDED = "DeviceQuotaExceeded"
    MISSING_REGISTRATION = "MissingRegistration"
    INVALID_REGISTRATION = "InvalidRegistration"
    MISMATCH_SENDER_ID = "MismatchSenderId"
    NOT_REGISTERED = "NotRegistered"
    MESSAGE_TOO_BIG = "MessageTooBig"
    MISSING_COLLAPSE_KEY = "MissingCollapseKey"
    UNAVAILABLE = "Unavailable"
    INTERNAL_SERVER_ERROR = "InternalServerError"
    INVALID_TTL = "InvalidTtl"


RETRYABLE_ERRORS = frozenset({GcmError.UNAVAILABLE})
