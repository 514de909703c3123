"""Tests for fauxapi.routing — route table ordering and namespace resolution."""

import pytest

from fauxapi.routing.compiler import compile_route_key
from fauxapi.routing.namespace import anchor, strip_namespace
from fauxapi.routing.route import Route, RouteConfig
from fauxapi.routing.table import RouteTable, extract_params


def _route(key: str, generator: object = "ok") -> Route:
    parsed = compile_route_key(key)
    return Route(
        method=parsed.method,
        path=parsed.path,
        pattern=parsed.pattern,
        params=parsed.params,
        generator=generator,
        config=RouteConfig(),
    )


class TestRouteTableMatching:
    def test_empty_table(self) -> None:
        assert RouteTable().match("GET", "/users") is None

    def test_static_match(self) -> None:
        table = RouteTable()
        table.add(_route("GET /users"))
        match = table.match("GET", "/users")
        assert match is not None
        assert match.route.path == "/users"
        assert match.params == {}

    def test_method_must_match(self) -> None:
        table = RouteTable()
        table.add(_route("GET /users"))
        assert table.match("POST", "/users") is None

    def test_param_extraction(self) -> None:
        table = RouteTable()
        table.add(_route("GET /users/:id"))
        match = table.match("GET", "/users/42")
        assert match is not None
        assert match.params == {"id": "42"}

    def test_multiple_params(self) -> None:
        table = RouteTable()
        table.add(_route("GET /users/:user_id/posts/:post_id"))
        match = table.match("GET", "/users/7/posts/99")
        assert match is not None
        assert match.params == {"user_id": "7", "post_id": "99"}

    def test_no_partial_match(self) -> None:
        table = RouteTable()
        table.add(_route("GET /users"))
        assert table.match("GET", "/users/1") is None
        assert table.match("GET", "/user") is None

    def test_len_and_routes_in_registration_order(self) -> None:
        table = RouteTable()
        first, second = _route("GET /a"), _route("GET /b")
        table.add(first)
        table.add(second)
        assert len(table) == 2
        assert table.routes == (first, second)

    def test_clear(self) -> None:
        table = RouteTable()
        table.add(_route("GET /a"))
        table.clear()
        assert len(table) == 0
        assert table.match("GET", "/a") is None


class TestRouteTableOrdering:
    def test_later_static_shadows_earlier_static(self) -> None:
        table = RouteTable()
        table.add(_route("GET /users", "first"))
        table.add(_route("GET /users", "second"))
        match = table.match("GET", "/users")
        assert match is not None
        assert match.route.generator == "second"

    def test_later_param_shadows_earlier_param(self) -> None:
        table = RouteTable()
        table.add(_route("GET /users/:id", "first"))
        table.add(_route("GET /users/:user_id", "second"))
        match = table.match("GET", "/users/5")
        assert match is not None
        assert match.route.generator == "second"
        assert match.params == {"user_id": "5"}

    def test_static_beats_earlier_param(self) -> None:
        table = RouteTable()
        table.add(_route("GET /users/:id", "param"))
        table.add(_route("GET /users/me", "static"))
        match = table.match("GET", "/users/me")
        assert match is not None
        assert match.route.generator == "static"

    def test_static_beats_later_param(self) -> None:
        table = RouteTable()
        table.add(_route("GET /users/me", "static"))
        table.add(_route("GET /users/:id", "param"))
        match = table.match("GET", "/users/me")
        assert match is not None
        assert match.route.generator == "static"

    def test_param_still_serves_other_values(self) -> None:
        table = RouteTable()
        table.add(_route("GET /users/:id", "param"))
        table.add(_route("GET /users/me", "static"))
        match = table.match("GET", "/users/12")
        assert match is not None
        assert match.route.generator == "param"

    def test_find_returns_route(self) -> None:
        table = RouteTable()
        route = _route("DELETE /users/:id")
        table.add(route)
        assert table.find("DELETE", "/users/3") is route
        assert table.find("GET", "/users/3") is None


class TestExtractParams:
    def test_zips_names_with_groups(self) -> None:
        route = _route("GET /a/:x/b/:y")
        assert extract_params(route, "/a/1/b/2") == {"x": "1", "y": "2"}

    def test_no_match_is_empty(self) -> None:
        route = _route("GET /a/:x")
        assert extract_params(route, "/b/1") == {}


class TestRouteProperties:
    def test_key(self) -> None:
        assert _route("PATCH /items/:id").key == "PATCH /items/:id"

    def test_has_params(self) -> None:
        assert _route("GET /items").has_params is False
        assert _route("GET /items/:id").has_params is True

    def test_frozen(self) -> None:
        route = _route("GET /items")
        with pytest.raises(AttributeError):
            route.path = "/other"  # type: ignore[misc]


class TestNamespace:
    def test_anchor(self) -> None:
        assert anchor("users") == "/users"
        assert anchor("/users") == "/users"
        assert anchor("//users") == "/users"
        assert anchor("") == "/"

    def test_no_namespace_passes_through(self) -> None:
        assert strip_namespace("", "/users") == "/users"
        assert strip_namespace("", "users") == "/users"

    def test_strips_prefix(self) -> None:
        assert strip_namespace("/api/v1", "/api/v1/users") == "/users"

    def test_exact_namespace_is_root(self) -> None:
        assert strip_namespace("/api", "/api") == "/"
        assert strip_namespace("/api", "/api/") == "/"

    def test_outside_namespace(self) -> None:
        assert strip_namespace("/api/v1", "/users") is None
        assert strip_namespace("/api", "/other/api") is None

    def test_segment_boundary(self) -> None:
        assert strip_namespace("/api", "/apiusers") is None
