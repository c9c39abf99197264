"""Tests for sana.routing.route — Route, Generator, RouteMatch."""

import pytest

from sana.routing.handlers import Function
from sana.routing.pattern import compile_pattern
from sana.routing.route import Generator, Route, RouteMatch


def _handler(params: dict[str, str]) -> str:
    return "ok"


def _route(pattern: str = "/users/[$id]") -> Route:
    return Route(
        method="GET",
        pattern=pattern,
        handler=Function(_handler),
        compiled=compile_pattern(pattern),
    )


class TestRoute:
    def test_creation(self) -> None:
        route = _route()
        assert route.method == "GET"
        assert route.pattern == "/users/[$id]"
        assert route.handler == Function(_handler)
        assert route.compiled.names == ("id",)

    def test_frozen(self) -> None:
        route = _route()
        with pytest.raises(AttributeError):
            route.pattern = "/other"  # type: ignore[misc]


class TestGenerator:
    def test_creation(self) -> None:
        generator = Generator(name="user", handler=Function(_handler))
        assert generator.name == "user"
        assert generator.handler.invoke({}) == "ok"

    def test_frozen(self) -> None:
        generator = Generator(name="user", handler=Function(_handler))
        with pytest.raises(AttributeError):
            generator.name = "other"  # type: ignore[misc]


class TestRouteMatch:
    def test_creation(self) -> None:
        route = _route()
        match = RouteMatch(route=route, path_params={"id": "42"})
        assert match.route is route
        assert match.path_params == {"id": "42"}

    def test_frozen(self) -> None:
        match = RouteMatch(route=_route(), path_params={})
        with pytest.raises(AttributeError):
            match.route = _route("/x")  # type: ignore[misc]
