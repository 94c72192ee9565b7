"""Tagged outcome of a single delivery attempt."""

from dataclasses import dataclass
from enum import Enum

from gcm_sender.models.response import GcmResponse


class SendErrorKind(str, Enum):
    """Why an attempt produced no usable response."""

    TRANSPORT_ERROR = "transport_error"
    NO_RESPONSE = "no_response"
    SERVICE_UNAVAILABLE = "service_unavailable"
    UNAUTHORIZED = "unauthorized"
    HTTP_ERROR = "http_error"
    PARSE_ERROR = "parse_error"
    NO_RECIPIENTS = "no_recipients"


@dataclass(frozen=True)
class SendError:
    """Error half of a :class:`SendResult`."""

    kind: SendErrorKind
    status_code: int | None = None
    detail: str | None = None


@dataclass(frozen=True)
class SendResult:
    """Either a parsed response or an error, never both."""

    response: GcmResponse | None = None
    error: SendError | None = None

    @classmethod
    def ok(cls, response: GcmResponse) -> "SendResult":
        return cls(response=response)

    @classmethod
    def failed(
        cls,
        kind: SendErrorKind,
        status_code: int | None = None,
        detail: str | None = None,
    ) -> "SendResult":
        return cls(error=SendError(kind=kind, status_code=status_code, detail=detail))

    @property
    def is_ok(self) -> bool:
        return self.error is None
