"""ASGI adapter — serves a ``Mock`` to any ASGI server or client.

The only component that touches raw ASGI. Converts the scope and body
into a ``Mock.handle`` call and sends the ``MockResponse`` back through
ASGI ``send()``.

Usage::

    app = MockASGIApp(mock)
    # uvicorn / pounce / httpx.ASGITransport(app=app)
"""

import json as json_module
import logging
from typing import Any
from urllib.parse import parse_qsl

from fauxapi._internal.asgi import HTTPScope, Receive, Scope, Send
from fauxapi.http.response import MockResponse
from fauxapi.mock import Mock

logger = logging.getLogger("fauxapi.adapters")


def _body_allowed(status: int) -> bool:
    """Whether an HTTP status code permits a response body."""
    # RFC: 1xx, 204, and 304 responses do not include a message body.
    return not (100 <= status < 200 or status in {204, 304})


class MockASGIApp:
    """ASGI application wrapping a ``Mock``."""

    __slots__ = ("mock",)

    def __init__(self, mock: Mock) -> None:
        self.mock = mock

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "lifespan":
            await _handle_lifespan(receive, send)
            return
        if scope["type"] != "http":
            return

        http = HTTPScope.from_scope(scope)
        headers = decode_headers(http.headers)
        raw_body = await read_body(receive)

        response = await self.mock.handle(
            http.method,
            http.path,
            headers=headers,
            query=dict(parse_qsl(http.query_string.decode("latin-1"), keep_blank_values=True)),
            body=parse_body(raw_body, headers.get("content-type", "")),
        )
        await send_response(response, send)


async def _handle_lifespan(receive: Receive, send: Send) -> None:
    while True:
        message = await receive()
        if message["type"] == "lifespan.startup":
            await send({"type": "lifespan.startup.complete"})
        elif message["type"] == "lifespan.shutdown":
            await send({"type": "lifespan.shutdown.complete"})
            return


def decode_headers(raw: tuple[tuple[bytes, bytes], ...]) -> dict[str, str]:
    """Flatten raw ASGI headers to a lower-cased dict. Later duplicates win."""
    return {name.decode("latin-1").lower(): value.decode("latin-1") for name, value in raw}


async def read_body(receive: Receive) -> bytes:
    chunks: list[bytes] = []
    while True:
        message = await receive()
        if message["type"] == "http.disconnect":
            break
        chunks.append(message.get("body", b""))
        if not message.get("more_body", False):
            break
    return b"".join(chunks)


def parse_body(raw: bytes, content_type: str) -> Any:
    """Decode a request body.

    Empty bodies are ``None``. JSON content types are parsed, falling back
    to the raw text when the payload is malformed. Everything else is text.
    """
    if not raw:
        return None
    text = raw.decode("utf-8", errors="replace")
    if "json" in content_type:
        try:
            return json_module.loads(text)
        except ValueError:
            logger.debug("Malformed JSON body, passing it through as text")
            return text
    return text


def encode_body(response: MockResponse) -> tuple[bytes, str | None]:
    """Serialize a response body and pick a default content type."""
    body = response.body
    if body is None:
        return b"", None
    if isinstance(body, bytes | bytearray):
        return bytes(body), "application/octet-stream"
    if isinstance(body, str):
        return body.encode("utf-8"), "text/plain; charset=utf-8"
    return json_module.dumps(body).encode("utf-8"), "application/json"


async def send_response(response: MockResponse, send: Send) -> None:
    """Translate a ``MockResponse`` into ASGI send() calls."""
    body, default_type = encode_body(response)
    if not _body_allowed(response.status):
        body = b""

    raw_headers: list[tuple[bytes, bytes]] = [
        (name.lower().encode("latin-1"), str(value).encode("latin-1"))
        for name, value in response.headers.items()
        if name.lower() != "content-length"
    ]
    if default_type is not None and response.header("content-type") is None:
        raw_headers.append((b"content-type", default_type.encode("latin-1")))
    raw_headers.append((b"content-length", str(len(body)).encode("latin-1")))

    await send(
        {
            "type": "http.response.start",
            "status": response.status,
            "headers": raw_headers,
        }
    )
    await send(
        {
            "type": "http.response.body",
            "body": body,
        }
    )
