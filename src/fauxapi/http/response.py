"""Canonical mock response and the normalizer that produces it.

Generators and plugins may return almost anything: raw data, a status
tuple, or a finished ``MockResponse``. ``normalize_response`` maps all of
those onto one ``MockResponse`` shape. isinstance-based dispatch, no magic,
fully predictable.
"""

from __future__ import annotations

import json as json_module
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any

from fauxapi.routing.route import RouteConfig


@dataclass(frozen=True, slots=True)
class MockResponse:
    """The engine's output: ``status``, ``body`` and ``headers``.

    ``body`` is ``None`` for empty responses. Chain ``.with_*()`` calls to
    derive a modified copy::

        MockResponse(body={"ok": True}).with_status(201).with_header("X-Id", "7")
    """

    status: int = 200
    body: Any = None
    headers: dict[str, str] = field(default_factory=dict)

    # -- Chainable transformations --

    def with_status(self, status: int) -> MockResponse:
        """Return a new response with a different status code."""
        return replace(self, status=status)

    def with_body(self, body: Any) -> MockResponse:
        """Return a new response with a different body."""
        return replace(self, body=body)

    def with_header(self, name: str, value: str) -> MockResponse:
        """Return a new response with an additional (or replaced) header."""
        return replace(self, headers={**self.headers, name: value})

    def with_headers(self, headers: Mapping[str, str]) -> MockResponse:
        """Return a new response with additional headers."""
        return replace(self, headers={**self.headers, **headers})

    # -- Accessors --

    def header(self, name: str, default: str | None = None) -> str | None:
        """Case-insensitive header lookup."""
        lowered = name.lower()
        for key, value in self.headers.items():
            if key.lower() == lowered:
                return value
        return default

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def to_dict(self) -> dict[str, Any]:
        return {"status": self.status, "body": self.body, "headers": dict(self.headers)}


def is_status_tuple(value: Any) -> bool:
    """Whether *value* is ``[status]``, ``[status, body]`` or ``[status, body, headers]``.

    Only the first element decides: ``[1, 2, 3]`` is a tuple, ``["a", 1]``
    is a body. Floats count and are truncated to an ``int`` status;
    ``bool`` does not count as a number here.
    """
    return (
        isinstance(value, list | tuple)
        and len(value) > 0
        and isinstance(value[0], int | float)
        and not isinstance(value[0], bool)
    )


def is_response_like(value: Any) -> bool:
    """Whether *value* is already a finished response.

    True for ``MockResponse`` instances and for mappings carrying an integer
    ``status`` plus a ``body`` key (what a recovering plugin hands back).
    """
    if isinstance(value, MockResponse):
        return True
    return (
        isinstance(value, Mapping)
        and "body" in value
        and isinstance(value.get("status"), int)
        and not isinstance(value.get("status"), bool)
    )


def coerce_response(value: Any) -> MockResponse:
    """Turn a response-like value into a ``MockResponse`` verbatim."""
    if isinstance(value, MockResponse):
        return value
    return MockResponse(
        status=value["status"],
        body=value.get("body"),
        headers=dict(value.get("headers") or {}),
    )


def stringify_body(body: Any) -> Any:
    """Render a body as text for ``text/*`` routes.

    ``str`` and ``bytes`` pass through. Containers, numbers and booleans
    are JSON-encoded (``True`` -> ``"true"``). Anything else uses ``str()``.
    """
    if body is None or isinstance(body, str | bytes | bytearray):
        return body
    if isinstance(body, dict | list | tuple | bool | int | float):
        return json_module.dumps(body)
    return str(body)


def normalize_response(value: Any, route_config: RouteConfig | None = None) -> MockResponse:
    """Map a generator/pipeline result onto a ``MockResponse``.

    Dispatch order:

    1. ``MockResponse`` / ``{"status", "body"}``  -> pass through verbatim
    2. ``[number, body?, headers?]``              -> explicit status tuple
    3. anything else                               -> body, status 200
    4. ``None`` body without an explicit status    -> 204, body ``None``
    5. no ``content-type`` + route content type    -> stamp it (not for 1 or 2);
       ``text/*`` types stringify the body
    """
    if is_response_like(value):
        return coerce_response(value)

    if is_status_tuple(value):
        status = int(value[0])
        body = value[1] if len(value) > 1 else None
        headers = dict(value[2]) if len(value) > 2 and isinstance(value[2], Mapping) else {}
        return MockResponse(status=status, body=body, headers=headers)

    if value is None:
        response = MockResponse(status=204, body=None)
    else:
        response = MockResponse(status=200, body=value)

    if route_config is None or route_config.content_type is None:
        return response
    if response.header("content-type") is not None:
        return response

    response = response.with_header("content-type", route_config.content_type)
    if route_config.is_text:
        response = response.with_body(stringify_body(response.body))
    return response
