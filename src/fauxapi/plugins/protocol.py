"""Plugin protocol.

A plugin is any object matching::

    class Uppercase:
        name = "uppercase"

        def process(self, context: PluginContext, response: Any) -> PluginResult:
            return PluginResult(context, response.upper() if response else None)

No base class required. The engine checks the shape, not the lineage.
Both hooks may be sync or async.

``on_error`` is optional. When ``process`` raises, the engine calls it with
the error and the current context. Returning a finished response
(``MockResponse`` or a mapping with ``status``) recovers and ends the
pipeline; anything else lets the failure propagate.
"""

from collections.abc import Awaitable
from typing import Any, Protocol, runtime_checkable

from fauxapi.plugins.context import PluginContext, PluginResult


@runtime_checkable
class Plugin(Protocol):
    """Protocol for fauxapi plugins."""

    name: str

    def process(
        self, context: PluginContext, response: Any
    ) -> PluginResult | Awaitable[PluginResult]: ...


def plugin_name(plugin: Any) -> str:
    """Best-effort display name for logs and error messages."""
    return getattr(plugin, "name", None) or type(plugin).__name__


def error_hook(plugin: Any) -> Any | None:
    """Return the plugin's ``on_error`` hook, or ``None`` if it has none."""
    hook = getattr(plugin, "on_error", None)
    return hook if callable(hook) else None
