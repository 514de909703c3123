"""Tests for fauxapi.plugins.factory and the Plugin protocol."""

from typing import Any

from fauxapi.plugins.context import PluginContext, PluginResult, coerce_result
from fauxapi.plugins.factory import (
    FunctionPlugin,
    create_plugin,
    generator_plugin,
    transformer_plugin,
)
from fauxapi.plugins.protocol import Plugin, error_hook, plugin_name


def _context() -> PluginContext:
    return PluginContext(path="/items", method="GET")


class TestCreatePlugin:
    async def test_process_is_invoked(self) -> None:
        plugin = create_plugin("echo", lambda ctx, response: PluginResult(ctx, response))
        context = _context()
        result = await plugin.process(context, "x")
        assert result == PluginResult(context, "x")

    async def test_async_process(self) -> None:
        async def process(ctx: PluginContext, response: Any) -> PluginResult:
            return PluginResult(ctx, "async")

        result = await create_plugin("a", process).process(_context(), None)
        assert result.response == "async"

    def test_metadata(self) -> None:
        hook = lambda exc, ctx: None  # noqa: E731
        plugin = create_plugin("p", lambda ctx, r: None, on_error=hook, version="1.2.0")
        assert plugin.name == "p"
        assert plugin.version == "1.2.0"
        assert plugin.on_error is hook

    def test_satisfies_protocol(self) -> None:
        plugin = create_plugin("p", lambda ctx, r: None)
        assert isinstance(plugin, Plugin)
        assert isinstance(plugin, FunctionPlugin)

    def test_without_hook(self) -> None:
        assert error_hook(create_plugin("p", lambda ctx, r: None)) is None


class TestTransformerPlugin:
    async def test_transforms_response(self) -> None:
        plugin = transformer_plugin("envelope", lambda ctx, body: {"data": body})
        result = await plugin.process(_context(), [1])
        assert result.response == {"data": [1]}

    async def test_skips_without_response(self) -> None:
        calls: list[Any] = []
        plugin = transformer_plugin("t", lambda ctx, body: calls.append(body))
        result = await plugin.process(_context(), None)
        assert result.response is None
        assert calls == []


class TestGeneratorPlugin:
    async def test_generates_when_missing(self) -> None:
        plugin = generator_plugin("fallback", lambda ctx: {"path": ctx.path})
        result = await plugin.process(_context(), None)
        assert result.response == {"path": "/items"}

    async def test_skips_existing_response(self) -> None:
        plugin = generator_plugin("fallback", lambda ctx: "generated")
        result = await plugin.process(_context(), "existing")
        assert result.response == "existing"


class TestProtocolHelpers:
    def test_plugin_name_prefers_attribute(self) -> None:
        class Named:
            name = "named"

        assert plugin_name(Named()) == "named"

    def test_plugin_name_falls_back_to_class(self) -> None:
        class Unnamed:
            pass

        assert plugin_name(Unnamed()) == "Unnamed"

    def test_error_hook_ignores_non_callables(self) -> None:
        class Odd:
            on_error = "not callable"

        assert error_hook(Odd()) is None


class TestCoerceResult:
    def test_plugin_result(self) -> None:
        result = PluginResult(_context(), 1)
        assert coerce_result(result) is result

    def test_mapping(self) -> None:
        context = _context()
        assert coerce_result({"context": context}) == PluginResult(context, None)

    def test_invalid(self) -> None:
        assert coerce_result(None) is None
        assert coerce_result({"response": 1}) is None
        assert coerce_result("x") is None
