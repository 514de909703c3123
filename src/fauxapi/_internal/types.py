"""Shared type aliases used across fauxapi modules."""

from collections.abc import Callable, MutableMapping
from typing import Any, Literal, TypeAlias

HttpMethod: TypeAlias = Literal["GET", "POST", "PUT", "DELETE", "PATCH", "HEAD", "OPTIONS"]

# Route generator: a callable receiving a RequestContext, or static data
Generator: TypeAlias = Callable[..., Any] | Any

# Engine-owned mutable store shared by every request
State: TypeAlias = MutableMapping[str, Any]

# Lifecycle event listener, receives the event payload dict
Listener: TypeAlias = Callable[[dict[str, Any]], Any]
