"""GCM send endpoint response schema."""

from pydantic import BaseModel, ConfigDict, Field

from gcm_sender.core.constants import RETRYABLE_ERRORS, GcmError


class GcmResult(BaseModel):
    """Outcome for one registration id, aligned by position with the request."""

    model_config = ConfigDict(extra="allow")

    message_id: str | None = None
    registration_id: str | None = None  # Canonical id, when GCM reports one
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.message_id is not None and self.error is None

    @property
    def error_kind(self) -> GcmError | None:
        """Known classification of ``error``; None on success or for unrecognised codes."""
        try:
            return GcmError(self.error)
        except ValueError:
            return None

    @property
    def retryable(self) -> bool:
        return self.error_kind in RETRYABLE_ERRORS


class GcmResponse(BaseModel):
    """Parsed body of a 200 response from the send endpoint."""

    model_config = ConfigDict(extra="allow")

    multicast_id: int | None = None
    success: int = 0
    failure: int = 0
    canonical_ids: int = 0
    results: list[GcmResult] = Field(default_factory=list)
