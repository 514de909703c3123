"""Route-key compiler.

Turns ``"GET /users/:id"`` into a method, an anchored regex and the
ordered parameter names. The grammar is strict so that author typos
surface at registration instead of as a silent 404 later.
"""

import re
from typing import get_args

from fauxapi._internal.types import HttpMethod
from fauxapi.errors import RouteParseError
from fauxapi.routing.route import ParsedRouteKey

HTTP_METHODS: tuple[str, ...] = get_args(HttpMethod)

# Any non-slash run
_PARAM_CAPTURE = "([^/]+)"

_FORMAT_HINT = 'Expected format: "METHOD /path" (e.g., "GET /users")'


def is_http_method(method: str) -> bool:
    return method in HTTP_METHODS


def to_http_method(method: str) -> str:
    """Upper-case *method* and check it against the supported verbs.

    Raises ``ValueError`` for anything else.
    """
    upper = method.upper()
    if not is_http_method(upper):
        msg = f'Invalid HTTP method: "{method}"'
        raise ValueError(msg)
    return upper


def compile_path(path: str) -> tuple[re.Pattern[str], tuple[str, ...]]:
    """Compile a route path into an anchored pattern plus parameter names.

    Segments starting with ``:`` become captures. Everything else is
    matched literally::

        compile_path("/users/:id/posts/:post_id")
        # -> (re.compile(r"^/users/([^/]+)/posts/([^/]+)$"), ("id", "post_id"))
    """
    params: list[str] = []
    parts: list[str] = []
    for segment in path.split("/"):
        if segment.startswith(":"):
            name = segment[1:]
            if not name:
                msg = f"Empty parameter name in path {path!r}"
                raise ValueError(msg)
            if name in params:
                msg = f"Duplicate parameter name {name!r} in path {path!r}"
                raise ValueError(msg)
            params.append(name)
            parts.append(_PARAM_CAPTURE)
        else:
            parts.append(re.escape(segment))
    return re.compile("^" + "/".join(parts) + "$"), tuple(params)


def compile_route_key(route_key: str) -> ParsedRouteKey:
    """Parse and compile a ``"METHOD /path"`` route key.

    Examples::

        compile_route_key("GET /users")
        # -> ParsedRouteKey(method="GET", path="/users", params=())

        compile_route_key("DELETE /users/:id")
        # -> ParsedRouteKey(method="DELETE", path="/users/:id", params=("id",))

    Raises ``RouteParseError`` for an empty key, a missing or unknown
    method, a missing space separator, or a path without a leading slash.
    """
    if not route_key or not route_key.strip():
        raise RouteParseError(route_key, f"Route key is empty. {_FORMAT_HINT}")

    method, sep, path = route_key.partition(" ")
    if not sep:
        if route_key.startswith("/"):
            reason = f"Missing HTTP method. {_FORMAT_HINT}"
        else:
            reason = f"Missing space between method and path. {_FORMAT_HINT}"
        raise RouteParseError(route_key, reason)
    if not method:
        raise RouteParseError(route_key, f"Missing HTTP method. {_FORMAT_HINT}")
    if not is_http_method(method):
        reason = f'Unknown HTTP method "{method}". Supported: {", ".join(HTTP_METHODS)}'
        raise RouteParseError(route_key, reason)
    if not path.startswith("/"):
        raise RouteParseError(route_key, f"Path must start with '/'. {_FORMAT_HINT}")

    try:
        pattern, params = compile_path(path)
    except ValueError as exc:
        raise RouteParseError(route_key, str(exc)) from exc

    return ParsedRouteKey(method=method, path=path, pattern=pattern, params=params)
