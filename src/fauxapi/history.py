"""Request history — a record of every matched request.

Requests that end in a 404 are not recorded.
"""

from dataclasses import dataclass, field
from typing import Any

from fauxapi.http.response import MockResponse


@dataclass(frozen=True, slots=True)
class RequestRecord:
    """One handled request and the response it produced.

    ``path`` is the path as received (namespace included). ``timestamp`` is
    milliseconds since the epoch.
    """

    method: str
    path: str
    params: dict[str, str] = field(default_factory=dict)
    query: dict[str, str] = field(default_factory=dict)
    headers: dict[str, str] = field(default_factory=dict)
    body: Any = None
    timestamp: float = 0.0
    response: MockResponse = field(default_factory=MockResponse)


class RequestHistory:
    """Insertion-ordered list of ``RequestRecord`` with method/path filters."""

    __slots__ = ("_records",)

    def __init__(self) -> None:
        self._records: list[RequestRecord] = []

    def __len__(self) -> int:
        return len(self._records)

    def record(self, entry: RequestRecord) -> None:
        self._records.append(entry)

    def clear(self) -> None:
        self._records.clear()

    def filter(self, method: str | None = None, path: str | None = None) -> list[RequestRecord]:
        """Return records matching *method* and/or *path*, oldest first."""
        wanted = method.upper() if method else None
        return [
            r
            for r in self._records
            if (wanted is None or r.method == wanted) and (path is None or r.path == path)
        ]

    def last(self, method: str | None = None, path: str | None = None) -> RequestRecord | None:
        matching = self.filter(method, path)
        return matching[-1] if matching else None
