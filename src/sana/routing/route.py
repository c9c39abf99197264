"""Route, Generator and RouteMatch frozen dataclasses."""

from dataclasses import dataclass

from sana._internal.types import Params
from sana.routing.handlers import Handler
from sana.routing.pattern import CompiledPattern


@dataclass(frozen=True, slots=True)
class Route:
    """A registered route.

    Created by ``Router.register_route``; the pattern is kept verbatim and
    its compiled form is cached alongside it.
    """

    method: str
    pattern: str
    handler: Handler
    compiled: CompiledPattern


@dataclass(frozen=True, slots=True)
class Generator:
    """A named reverse-routing callback."""

    name: str
    handler: Handler


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    route: Route
    path_params: Params
