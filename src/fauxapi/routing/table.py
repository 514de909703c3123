"""Ordered route table with two-tier matching.

Routes are appended in registration order and never removed except by
``clear()``. Lookup scans parameter-free routes first, then parameterized
ones, newest first within each tier: a later registration shadows an
earlier equivalent one, and a static route beats a parameterized one
regardless of order.
"""

from fauxapi.routing.route import Route, RouteMatch


class RouteTable:
    """Append-only route list.

    Usage::

        table = RouteTable()
        table.add(route)
        match = table.match("GET", "/users/42")
        if match is None:
            ...  # not found
    """

    __slots__ = ("_routes",)

    def __init__(self) -> None:
        self._routes: list[Route] = []

    def __len__(self) -> int:
        return len(self._routes)

    @property
    def routes(self) -> tuple[Route, ...]:
        """All routes in registration order."""
        return tuple(self._routes)

    def add(self, route: Route) -> None:
        self._routes.append(route)

    def clear(self) -> None:
        self._routes.clear()

    def find(self, method: str, path: str) -> Route | None:
        """Return the route that wins for *method* and *path*, or ``None``."""
        for has_params in (False, True):
            for route in reversed(self._routes):
                if route.has_params is not has_params or route.method != method:
                    continue
                if route.pattern.fullmatch(path):
                    return route
        return None

    def match(self, method: str, path: str) -> RouteMatch | None:
        """Match and extract path parameters.

        Returns ``None`` when nothing matches. Not-found is an expected
        outcome, so it is a value here, not an exception.
        """
        route = self.find(method, path)
        if route is None:
            return None
        return RouteMatch(route=route, params=extract_params(route, path))


def extract_params(route: Route, path: str) -> dict[str, str]:
    """Zip the route's capture groups with its parameter names."""
    found = route.pattern.fullmatch(path)
    if found is None:
        return {}
    return dict(zip(route.params, found.groups(), strict=True))
