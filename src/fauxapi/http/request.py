"""Per-request context handed to route generators."""

from dataclasses import dataclass, field
from typing import Any

from fauxapi._internal.types import State


@dataclass(frozen=True, slots=True)
class RequestContext:
    """What a generator sees for one request.

    ``path`` has the namespace stripped. ``state`` is the engine-owned store
    shared by every request: writes made here are visible to later requests.
    """

    method: str
    path: str
    params: dict[str, str] = field(default_factory=dict)
    query: dict[str, str] = field(default_factory=dict)
    headers: dict[str, str] = field(default_factory=dict)
    body: Any = None
    state: State = field(default_factory=dict)

    def header(self, name: str, default: str | None = None) -> str | None:
        """Case-insensitive request header lookup."""
        lowered = name.lower()
        for key, value in self.headers.items():
            if key.lower() == lowered:
                return value
        return default
