"""Route, RouteConfig and RouteMatch frozen dataclasses."""

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from fauxapi._internal.types import Generator


@dataclass(frozen=True, slots=True)
class RouteConfig:
    """Per-route options.

    ``content_type`` drives header stamping during normalization. Any other
    keyword is kept in ``options`` for plugins to read::

        RouteConfig(content_type="text/plain", options={"schema": {...}})
    """

    content_type: str | None = None
    options: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "options", MappingProxyType(dict(self.options)))

    def get(self, key: str, default: Any = None) -> Any:
        """Return a route option, or *default* if missing."""
        if key == "content_type":
            return self.content_type if self.content_type is not None else default
        return self.options.get(key, default)

    @property
    def is_text(self) -> bool:
        """Whether the configured content type is a plain-text type."""
        return self.content_type is not None and self.content_type.startswith("text/")


@dataclass(frozen=True, slots=True)
class ParsedRouteKey:
    """The compiled form of a ``"METHOD /path"`` key."""

    method: str
    path: str
    pattern: re.Pattern[str]
    params: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class Route:
    """A registered route.

    Created by ``Mock.define_route``, held until ``Mock.reset()``.
    """

    method: str
    path: str
    pattern: re.Pattern[str]
    params: tuple[str, ...]
    generator: Generator
    config: RouteConfig

    @property
    def key(self) -> str:
        return f"{self.method} {self.path}"

    @property
    def has_params(self) -> bool:
        return bool(self.params)


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    route: Route
    params: dict[str, str]
