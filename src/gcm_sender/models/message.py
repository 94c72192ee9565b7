"""Push message model."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass
class Message:
    """Notification payload and delivery options.

    ``has_data`` decides whether ``data`` is sent at all. Left unset, it is
    inferred from whether ``data`` holds anything.
    """

    collapse_key: str | None = None
    delay_while_idle: bool | None = None
    time_to_live: int | None = None
    data: dict[str, Any] = field(default_factory=dict)
    has_data: bool | None = None

    def __post_init__(self) -> None:
        if self.has_data is None:
            self.has_data = bool(self.data)

    def add_data(self, key: str | Mapping[str, Any], value: Any = None) -> "Message":
        """Add one payload entry, or merge a mapping of entries.

        Args:
            key: Payload key, or a mapping merged into the payload
            value: Value for ``key`` when a single key is given

        Returns:
            The message itself, for chaining
        """
        if isinstance(key, Mapping):
            self.data.update(key)
        else:
            self.data[key] = value
        self.has_data = True
        return self
