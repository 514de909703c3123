"""Ordered plugin pipeline.

Plugins run strictly in registration order against a shared per-request
``PluginContext`` and an evolving response value. A plugin may generate a
response (when none exists yet) or transform the current one. A failing
plugin gets one chance to recover through its own ``on_error`` hook;
otherwise the failure is wrapped in ``PluginError`` and propagated.
"""

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from fauxapi._internal.invoke import invoke
from fauxapi.debug import DebugLogger
from fauxapi.errors import PluginError
from fauxapi.http.response import MockResponse, coerce_response
from fauxapi.plugins.context import PluginContext, PluginResult, coerce_result
from fauxapi.plugins.protocol import error_hook, plugin_name

logger = logging.getLogger("fauxapi.pipeline")


class PluginPipeline:
    """Runs plugins sequentially. No reordering, no retries.

    Usage::

        pipeline = PluginPipeline([auth, envelope])
        result = await pipeline.run(context, generated)
        result.response  # final (un-normalized) response value
    """

    __slots__ = ("_debug", "_plugins")

    def __init__(self, plugins: Sequence[Any] = (), *, debug: DebugLogger | None = None) -> None:
        self._plugins: list[Any] = list(plugins)
        self._debug = debug or DebugLogger(enabled=False)

    def __len__(self) -> int:
        return len(self._plugins)

    @property
    def plugins(self) -> tuple[Any, ...]:
        return tuple(self._plugins)

    def add(self, plugin: Any) -> None:
        self._plugins.append(plugin)

    def clear(self) -> None:
        self._plugins.clear()

    async def run(self, context: PluginContext, response: Any = None) -> PluginResult:
        """Run every plugin and return the final context and response.

        Raises ``PluginError`` for the first unrecovered plugin failure.
        """
        self._debug.log("pipeline", f"Running plugin pipeline for {len(self._plugins)} plugins")

        for plugin in self._plugins:
            name = plugin_name(plugin)
            self._debug.log("pipeline", f"Processing plugin: {name}")
            try:
                result = coerce_result(await invoke(plugin.process, context, response))
                if result is None:
                    msg = f"Plugin {name} didn't return valid result"
                    raise TypeError(msg)
            except Exception as exc:
                self._debug.log("pipeline", f"Plugin {name} failed: {exc}")
                recovered = await self._recover(plugin, name, exc, context)
                if recovered is not None:
                    self._debug.log("pipeline", f"Plugin {name} recovered, skipping remaining plugins")
                    return PluginResult(context=context, response=recovered)
                raise PluginError(name, exc) from exc

            context = result.context
            if result.response is not None:
                if response is None:
                    self._debug.log("pipeline", f"Plugin {name} generated response")
                else:
                    self._debug.log("pipeline", f"Plugin {name} transformed response")
                response = result.response

        return PluginResult(context=context, response=response)

    async def _recover(
        self,
        plugin: Any,
        name: str,
        exc: Exception,
        context: PluginContext,
    ) -> MockResponse | None:
        """Ask the plugin's ``on_error`` hook for a finished response.

        Returns the response when the hook recovers, ``None`` otherwise.
        """
        hook = error_hook(plugin)
        if hook is None:
            return None
        try:
            outcome = await invoke(hook, exc, context)
        except Exception as hook_exc:
            logger.warning("Error handler of plugin %r failed: %s", name, hook_exc)
            self._debug.log("pipeline", f"Plugin {name} error handler failed: {hook_exc}")
            return None
        if is_recovery(outcome):
            return coerce_response(outcome)
        return None


def is_recovery(outcome: Any) -> bool:
    """Whether an ``on_error`` return value is a finished response.

    A ``MockResponse`` or any mapping with an integer ``status`` counts.
    Errors, ``None`` and other values do not.
    """
    if isinstance(outcome, MockResponse):
        return True
    if not isinstance(outcome, Mapping):
        return False
    status = outcome.get("status")
    return isinstance(status, int) and not isinstance(status, bool)
