"""fauxapi exception hierarchy.

Shared across the route compiler, route table, plugin pipeline and the
engine so every module raises and catches the same types. Every error
carries a stable machine-readable ``code`` that survives into the 500
response body.
"""

from typing import Any

INTERNAL_ERROR_CODE = "INTERNAL_ERROR"


class MockError(Exception):
    """Base for all fauxapi errors.

    ``code`` is part of the public contract: consumers branch on it.
    ``context`` holds structured detail for debugging.
    """

    code: str = INTERNAL_ERROR_CODE

    def __init__(self, message: str, *, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        return self.message


class ConfigurationError(MockError):
    """Raised when ``MockConfig`` values are invalid.

    Raised eagerly at construction, never during a request.
    """

    code = "CONFIGURATION_ERROR"


class RouteNotFound(MockError):  # noqa: N818
    """No compiled route matches the method and path.

    Never raised by ``Mock.handle``; only used to build the 404 body.
    """

    code = "ROUTE_NOT_FOUND"

    def __init__(self, method: str, path: str) -> None:
        super().__init__(
            f"Route not found: {method} {path}",
            context={"method": method, "path": path},
        )


class RouteParseError(MockError):
    """A route key does not follow the ``"METHOD /path"`` grammar."""

    code = "ROUTE_PARSE_ERROR"

    def __init__(self, route_key: str, reason: str) -> None:
        super().__init__(
            f'Invalid route key format: "{route_key}". {reason}',
            context={"route_key": route_key, "reason": reason},
        )


class RouteDefinitionError(MockError):
    """A static generator payload is incompatible with its content type."""

    code = "ROUTE_DEFINITION_ERROR"

    def __init__(self, route_key: str, reason: str) -> None:
        super().__init__(
            f'Invalid route definition for "{route_key}": {reason}',
            context={"route_key": route_key, "reason": reason},
        )


class ResponseGenerationError(MockError):
    """A route generator raised while producing its response."""

    code = "RESPONSE_GENERATION_ERROR"

    def __init__(self, route: str, error: BaseException) -> None:
        super().__init__(
            f"Failed to generate response for route {route}: {error}",
            context={"route": route, "original_error": error},
        )


class PluginError(MockError):
    """A plugin failed and its own ``on_error`` hook did not recover."""

    code = "PLUGIN_ERROR"

    def __init__(self, plugin_name: str, error: BaseException) -> None:
        super().__init__(
            f'Plugin "{plugin_name}" failed: {error}',
            context={"plugin_name": plugin_name, "original_error": error},
        )
        self.plugin_name = plugin_name


def error_code(exc: BaseException) -> str:
    """Return the stable code for *exc*, or ``INTERNAL_ERROR`` for foreign errors."""
    if isinstance(exc, MockError):
        return exc.code
    return INTERNAL_ERROR_CODE
