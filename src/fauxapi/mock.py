"""The fauxapi request engine.

Mutable during setup (route registration, plugins, listeners). Each
``handle()`` call then runs one request through a fixed sequence:

    namespace -> route match -> params -> generator -> plugins
              -> normalize -> delay -> MockResponse

``handle()`` never raises. Not-found outcomes come back as 404 values and
every failure is converted to a 500 value carrying the error's code.
"""

from __future__ import annotations

import copy
import json as json_module
import logging
import time
import uuid
from collections.abc import Callable, Mapping
from dataclasses import replace
from typing import Any
from urllib.parse import parse_qsl

from fauxapi._internal.invoke import invoke
from fauxapi._internal.types import Generator, Listener, State
from fauxapi.config import Delay, MockConfig
from fauxapi.debug import DebugLogger
from fauxapi.delay import apply_delay
from fauxapi.errors import (
    MockError,
    ResponseGenerationError,
    RouteDefinitionError,
    RouteNotFound,
    error_code,
)
from fauxapi.events import EventBus
from fauxapi.history import RequestHistory, RequestRecord
from fauxapi.http.request import RequestContext
from fauxapi.http.response import MockResponse, normalize_response
from fauxapi.plugins.context import PluginContext
from fauxapi.plugins.pipeline import PluginPipeline
from fauxapi.plugins.protocol import error_hook, plugin_name
from fauxapi.routing.compiler import compile_route_key
from fauxapi.routing.namespace import strip_namespace
from fauxapi.routing.route import Route, RouteConfig, RouteMatch
from fauxapi.routing.table import RouteTable

logger = logging.getLogger("fauxapi.engine")


class Mock:
    """A mock HTTP API.

    Register routes, optionally pipe plugins, then ``await handle()``::

        mock = Mock(namespace="/api")
        mock("GET /users", [{"id": 1}])
        mock("POST /users", lambda ctx: [201, ctx.body])

        @mock.route("GET /users/:id")
        def get_user(ctx):
            return {"id": int(ctx.params["id"])}

        response = await mock.handle("GET", "/api/users/1")

    Concurrency:
        Concurrent ``handle()`` calls are independent except for ``state``,
        which is shared and unsynchronized. Use ``AsyncMutex`` inside a
        generator or plugin when a read-modify-write must be atomic.
    """

    __slots__ = (
        "_debug",
        "_events",
        "_history",
        "_initial_state",
        "_pipeline",
        "_routes",
        "_state",
        "config",
    )

    def __init__(
        self,
        config: MockConfig | None = None,
        *,
        state: State | None = None,
        namespace: str | None = None,
        delay: Delay | None = None,
        debug: bool | None = None,
    ) -> None:
        config = config or MockConfig()
        overrides = {
            key: value
            for key, value in (("namespace", namespace), ("delay", delay), ("debug", debug))
            if value is not None
        }
        if overrides:
            config = replace(config, **overrides)
        self.config: MockConfig = config

        self._state: State = state if state is not None else {}
        self._initial_state: dict[str, Any] = copy.deepcopy(dict(self._state))
        self._debug = DebugLogger(enabled=config.debug)
        self._routes = RouteTable()
        self._pipeline = PluginPipeline(debug=self._debug)
        self._history = RequestHistory()
        self._events = EventBus()

        self._debug.log(
            "config",
            "Mock instance created",
            namespace=config.namespace,
            delay=config.delay,
        )

    # -- Route registration --

    def __call__(
        self,
        route_key: str,
        generator: Generator = None,
        config: RouteConfig | Mapping[str, Any] | None = None,
        **options: Any,
    ) -> Mock:
        """Shorthand for ``define_route``: ``mock("GET /users", [...])``."""
        return self.define_route(route_key, generator, config, **options)

    def define_route(
        self,
        route_key: str,
        generator: Generator = None,
        config: RouteConfig | Mapping[str, Any] | None = None,
        **options: Any,
    ) -> Mock:
        """Register a route. Returns ``self`` for chaining.

        Args:
            route_key: ``"METHOD /path"``; ``:name`` segments are parameters.
            generator: A (sync or async) callable receiving a
                ``RequestContext``, or static data returned as-is.
            config: A ``RouteConfig`` or mapping. ``content_type`` is
                inferred from the generator when not given.
            **options: Extra route options, merged into ``config``.

        Raises ``RouteParseError`` for a malformed key and
        ``RouteDefinitionError`` when static data cannot be served with
        the declared content type.
        """
        parsed = compile_route_key(route_key)
        route_config = _route_config(generator, config, options)
        _check_static_payload(route_key, generator, route_config)

        route = Route(
            method=parsed.method,
            path=parsed.path,
            pattern=parsed.pattern,
            params=parsed.params,
            generator=generator,
            config=route_config,
        )
        self._routes.add(route)
        self._debug.log(
            "route",
            f"Route defined: {route.key}",
            content_type=route_config.content_type,
            generator_type="function" if callable(generator) else type(generator).__name__,
            has_params=route.has_params,
        )
        return self

    def route(
        self, route_key: str, **options: Any
    ) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """Register a function generator via decorator."""

        def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
            self.define_route(route_key, func, **options)
            return func

        return decorator

    @property
    def routes(self) -> tuple[Route, ...]:
        return self._routes.routes

    # -- Plugins --

    def pipe(self, plugin: Any) -> Mock:
        """Append a plugin to the pipeline. Returns ``self`` for chaining."""
        self._pipeline.add(plugin)
        self._debug.log(
            "plugin",
            f"Registered plugin: {plugin_name(plugin)}@{getattr(plugin, 'version', None) or 'unknown'}",
            has_on_error=error_hook(plugin) is not None,
        )
        return self

    @property
    def plugins(self) -> tuple[Any, ...]:
        return self._pipeline.plugins

    # -- State --

    @property
    def state(self) -> State:
        """The shared store every generator and plugin sees."""
        return self._state

    # -- Request handling --

    async def handle(
        self,
        method: str,
        path: str,
        *,
        headers: Mapping[str, str] | None = None,
        query: Mapping[str, str] | None = None,
        body: Any = None,
    ) -> MockResponse:
        """Run one request through the engine. Never raises."""
        method = method.upper()
        path, query = _split_query(path, query)
        headers = dict(headers or {})
        request_id = uuid.uuid4().hex[:8]
        started = time.perf_counter()

        self._debug.log(
            "request",
            f"[{request_id}] {method} {path}",
            headers=headers,
            query=query,
            body_type=type(body).__name__ if body is not None else "none",
        )
        self._debug.time(f"request-{request_id}")
        await self._events.emit("request:start", {"method": method, "path": path})

        match: RouteMatch | None = None
        try:
            resolved = self._resolve(method, path, request_id)
            if resolved is not None:
                match = self._routes.match(method, resolved)
            if match is None:
                self._debug.log("route", f"[{request_id}] No route found for {method} {path}")
                await self._events.emit("request:notfound", {"method": method, "path": path})
                response = _not_found(method, path)
            else:
                await self._events.emit(
                    "request:match",
                    {
                        "method": method,
                        "path": path,
                        "route_path": match.route.path,
                        "params": match.params,
                    },
                )
                self._debug.log("route", f"[{request_id}] Matched route: {match.route.key}")
                response = await self._respond(match, method, resolved, headers, query, body)
        except Exception as exc:
            logger.exception("500 %s %s", method, path)
            self._debug.log("error", f"[{request_id}] Error processing request: {exc}")
            response = MockResponse(
                status=500,
                body={"error": str(exc), "code": error_code(exc)},
                headers={},
            )

        await apply_delay(self.config.delay)

        if match is not None:
            self._history.record(
                RequestRecord(
                    method=method,
                    path=path,
                    params=dict(match.params),
                    query=dict(query),
                    headers=dict(headers),
                    body=body,
                    timestamp=time.time() * 1000,
                    response=response,
                )
            )

        duration_ms = (time.perf_counter() - started) * 1000
        self._debug.log(
            "response",
            f"[{request_id}] Sending response {response.status}",
            status=response.status,
            headers=response.headers,
        )
        self._debug.time_end(f"request-{request_id}")
        await self._events.emit(
            "request:end",
            {"method": method, "path": path, "status": response.status, "duration_ms": duration_ms},
        )
        return response

    def _resolve(self, method: str, path: str, request_id: str) -> str | None:
        """Strip the namespace, or return ``None`` when the path is outside it."""
        resolved = strip_namespace(self.config.namespace, path)
        if resolved is None:
            self._debug.log(
                "route",
                f"[{request_id}] {method} {path} doesn't match namespace {self.config.namespace}",
            )
        return resolved

    async def _respond(
        self,
        match: RouteMatch,
        method: str,
        resolved: str,
        headers: dict[str, str],
        query: dict[str, str],
        body: Any,
    ) -> MockResponse:
        route = match.route
        context = RequestContext(
            method=method,
            path=resolved,
            params=dict(match.params),
            query=dict(query),
            headers=dict(headers),
            body=body,
            state=self._state,
        )
        generated = await _generate(route, context)

        plugin_context = PluginContext(
            path=resolved,
            method=method,
            route=route.config,
            params=dict(match.params),
            query=dict(query),
            headers=dict(headers),
            body=body,
            state={},
            route_state=self._state,
        )
        result = await self._pipeline.run(plugin_context, generated)
        return normalize_response(result.response, route.config)

    # -- History --

    def history(self, method: str | None = None, path: str | None = None) -> list[RequestRecord]:
        """Recorded requests, oldest first, optionally filtered."""
        return self._history.filter(method, path)

    def called(self, method: str | None = None, path: str | None = None) -> bool:
        return bool(self._history.filter(method, path))

    def call_count(self, method: str | None = None, path: str | None = None) -> int:
        return len(self._history.filter(method, path))

    def last_request(self, method: str | None = None, path: str | None = None) -> RequestRecord | None:
        return self._history.last(method, path)

    # -- Events --

    def on(self, event: str, listener: Listener) -> Mock:
        """Subscribe *listener* to a lifecycle event. See ``fauxapi.events``."""
        self._events.on(event, listener)
        return self

    def off(self, event: str, listener: Listener) -> Mock:
        self._events.off(event, listener)
        return self

    # -- Reset --

    def reset(self) -> None:
        """Drop routes, plugins, history and listeners, and restore state."""
        self._routes.clear()
        self._pipeline.clear()
        self._history.clear()
        self._events.clear()
        self.reset_state()
        self._debug.log("config", "Mock reset")

    def reset_history(self) -> None:
        self._history.clear()

    def reset_state(self) -> None:
        """Restore ``state`` to its initial contents, keeping the same object."""
        self._state.clear()
        self._state.update(copy.deepcopy(self._initial_state))


# -- Helpers --


async def _generate(route: Route, context: RequestContext) -> Any:
    """Invoke the route generator, or copy its static payload."""
    generator = route.generator
    if not callable(generator):
        return copy.deepcopy(generator)
    try:
        return await invoke(generator, context)
    except MockError:
        raise
    except Exception as exc:
        raise ResponseGenerationError(route.key, exc) from exc


def _not_found(method: str, path: str) -> MockResponse:
    error = RouteNotFound(method, path)
    return MockResponse(status=404, body={"error": str(error), "code": error.code}, headers={})


def _split_query(
    path: str, query: Mapping[str, str] | None
) -> tuple[str, dict[str, str]]:
    """Split a ``?query`` suffix off *path*. Explicit *query* keys win."""
    merged: dict[str, str] = {}
    if "?" in path:
        path, _, raw = path.partition("?")
        merged.update(parse_qsl(raw, keep_blank_values=True))
    if query:
        merged.update(query)
    return path, merged


def infer_content_type(generator: Generator) -> str:
    """Default content type for a route with no explicit one.

    Function generators and structured data are JSON, scalars are plain
    text and raw bytes are an octet stream.
    """
    if callable(generator):
        return "application/json"
    if isinstance(generator, bytes | bytearray):
        return "application/octet-stream"
    if isinstance(generator, str | int | float | bool):
        return "text/plain"
    return "application/json"


def _route_config(
    generator: Generator,
    config: RouteConfig | Mapping[str, Any] | None,
    options: Mapping[str, Any],
) -> RouteConfig:
    if isinstance(config, RouteConfig):
        content_type = config.content_type
        merged = {**config.options, **options}
    else:
        merged = {**(config or {}), **options}
        content_type = merged.pop("content_type", None)
    if "content_type" in merged:
        content_type = merged.pop("content_type")
    return RouteConfig(
        content_type=content_type or infer_content_type(generator),
        options=merged,
    )


def _check_static_payload(route_key: str, generator: Generator, config: RouteConfig) -> None:
    """Static payloads must be copyable, and JSON-encodable on JSON routes."""
    if callable(generator):
        return
    try:
        copy.deepcopy(generator)
    except (TypeError, copy.Error) as exc:
        raise RouteDefinitionError(
            route_key,
            f"Generator data cannot be copied per request ({exc})",
        ) from exc
    if config.content_type != "application/json":
        return
    try:
        json_module.dumps(generator)
    except (TypeError, ValueError) as exc:
        raise RouteDefinitionError(
            route_key,
            f"Generator data is not valid JSON but content type is application/json ({exc})",
        ) from exc
