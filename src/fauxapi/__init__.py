"""fauxapi — a mock HTTP API engine for frontend development and tests.

Define routes as ``"METHOD /path"`` keys bound to generators, then answer
synthetic requests without a backend.

Basic usage::

    from fauxapi import Mock

    mock = Mock()
    mock("GET /users", [{"id": 1, "name": "Ada"}])
    mock("GET /users/:id", lambda ctx: {"id": ctx.params["id"]})

    response = await mock.handle("GET", "/users/1")
    response.status  # 200

Serving over HTTP (``pip install fauxapi[server]``)::

    from fauxapi.adapters.server import serve
    serve(mock, port=3000)
"""

__version__ = "0.1.0"
__all__ = [
    "AsyncMutex",
    "ConfigurationError",
    "HTTP_METHODS",
    "Mock",
    "MockASGIApp",
    "MockConfig",
    "MockError",
    "MockResponse",
    "Plugin",
    "PluginContext",
    "PluginError",
    "PluginResult",
    "RequestContext",
    "RequestRecord",
    "ResponseGenerationError",
    "RouteConfig",
    "RouteDefinitionError",
    "RouteNotFound",
    "RouteParseError",
    "create_mutex",
    "create_plugin",
    "generator_plugin",
    "transformer_plugin",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import fauxapi`` fast while providing a clean top-level API.
    """
    if name == "Mock":
        from fauxapi.mock import Mock

        return Mock

    if name == "MockConfig":
        from fauxapi.config import MockConfig

        return MockConfig

    if name == "MockResponse":
        from fauxapi.http.response import MockResponse

        return MockResponse

    if name == "RequestContext":
        from fauxapi.http.request import RequestContext

        return RequestContext

    if name == "RequestRecord":
        from fauxapi.history import RequestRecord

        return RequestRecord

    if name == "RouteConfig":
        from fauxapi.routing.route import RouteConfig

        return RouteConfig

    if name == "HTTP_METHODS":
        from fauxapi.routing.compiler import HTTP_METHODS

        return HTTP_METHODS

    if name in ("PluginContext", "PluginResult"):
        from fauxapi.plugins import context as _ctx

        return getattr(_ctx, name)

    if name == "Plugin":
        from fauxapi.plugins.protocol import Plugin

        return Plugin

    if name in ("create_plugin", "generator_plugin", "transformer_plugin"):
        from fauxapi.plugins import factory as _factory

        return getattr(_factory, name)

    if name in ("AsyncMutex", "create_mutex"):
        from fauxapi import mutex as _mutex

        return getattr(_mutex, name)

    if name == "MockASGIApp":
        from fauxapi.adapters.asgi import MockASGIApp

        return MockASGIApp

    if name in (
        "ConfigurationError",
        "MockError",
        "PluginError",
        "ResponseGenerationError",
        "RouteDefinitionError",
        "RouteNotFound",
        "RouteParseError",
    ):
        from fauxapi import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
