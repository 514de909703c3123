"""Plugin context and result types."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from fauxapi._internal.types import State
from fauxapi.routing.route import RouteConfig


@dataclass(frozen=True, slots=True)
class PluginContext:
    """What a plugin sees for one request.

    ``state`` is a scratch dict created fresh for every request, so plugins
    can pass data to later plugins without leaking into the next request.
    ``route_state`` is the engine's shared store, the same object a
    generator sees as ``RequestContext.state``.
    """

    path: str
    method: str
    route: RouteConfig = field(default_factory=RouteConfig)
    params: dict[str, str] = field(default_factory=dict)
    query: dict[str, str] = field(default_factory=dict)
    headers: dict[str, str] = field(default_factory=dict)
    body: Any = None
    state: dict[str, Any] = field(default_factory=dict)
    route_state: State = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class PluginResult:
    """Return value of ``Plugin.process``.

    ``response`` of ``None`` means "leave the current response alone".
    """

    context: PluginContext
    response: Any = None


def coerce_result(value: Any) -> PluginResult | None:
    """Accept a ``PluginResult`` or a mapping with a ``"context"`` key.

    Returns ``None`` when *value* does not honour the contract.
    """
    if isinstance(value, PluginResult):
        return value
    if isinstance(value, Mapping) and value.get("context") is not None:
        return PluginResult(context=value["context"], response=value.get("response"))
    return None
