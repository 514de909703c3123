"""Helpers to build plugins from plain functions.

Usage::

    from fauxapi.plugins.factory import create_plugin, transformer_plugin

    envelope = transformer_plugin("envelope", lambda ctx, body: {"data": body})

    def stamp(ctx, response):
        ctx.state["seen"] = True
        return PluginResult(ctx, response)

    mock.pipe(create_plugin("stamp", stamp))
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from fauxapi._internal.invoke import invoke
from fauxapi.plugins.context import PluginContext, PluginResult


@dataclass(frozen=True, slots=True)
class FunctionPlugin:
    """A plugin whose hooks are plain (sync or async) callables."""

    name: str
    process_fn: Callable[..., Any]
    on_error_fn: Callable[..., Any] | None = None
    version: str | None = None

    async def process(self, context: PluginContext, response: Any) -> Any:
        return await invoke(self.process_fn, context, response)

    @property
    def on_error(self) -> Callable[..., Any] | None:
        return self.on_error_fn


def create_plugin(
    name: str,
    process: Callable[..., Any],
    *,
    on_error: Callable[..., Any] | None = None,
    version: str | None = None,
) -> FunctionPlugin:
    """Build a plugin from a ``process`` callable and an optional ``on_error``."""
    return FunctionPlugin(name=name, process_fn=process, on_error_fn=on_error, version=version)


def transformer_plugin(
    name: str,
    transform: Callable[[PluginContext, Any], Any],
    *,
    version: str | None = None,
) -> FunctionPlugin:
    """Build a plugin that only transforms an existing response.

    Skipped while no response exists yet.
    """

    async def process(context: PluginContext, response: Any) -> PluginResult:
        if response is None:
            return PluginResult(context, response)
        return PluginResult(context, await invoke(transform, context, response))

    return FunctionPlugin(name=name, process_fn=process, version=version)


def generator_plugin(
    name: str,
    generate: Callable[[PluginContext], Any],
    *,
    version: str | None = None,
) -> FunctionPlugin:
    """Build a plugin that only generates a response when none exists.

    Skipped once an earlier stage has produced a response.
    """

    async def process(context: PluginContext, response: Any) -> PluginResult:
        if response is not None:
            return PluginResult(context, response)
        return PluginResult(context, await invoke(generate, context))

    return FunctionPlugin(name=name, process_fn=process, version=version)
