"""Ordered router with reverse URL generation.

Routes are kept per HTTP method in registration order and tried one by
one; the first pattern that matches wins. There is no specificity
ranking, so register narrow patterns before broad ones.
"""

import logging
import threading
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from sana._internal.types import GeneratorParams
from sana.config import RouterConfig
from sana.errors import (
    EmptyPattern,
    IncompleteGenerator,
    MethodNotImplemented,
    NotFound,
    UnsupportedMethod,
)
from sana.routing.handlers import as_handler
from sana.routing.params import ParameterTypes
from sana.routing.pattern import CompiledPattern, compile_pattern
from sana.routing.route import Generator, Route, RouteMatch

logger = logging.getLogger("sana.routing")


def _verb(method: str) -> Callable[..., None]:
    """Build the ``router.get(...)``-style shortcut for one method."""

    def register(
        self: "Router",
        pattern: str,
        handler: Any,
        generator_name: str | None = None,
        generator_handler: Any = None,
    ) -> None:
        self.register_route(method, pattern, handler, generator_name, generator_handler)

    register.__name__ = method.lower()
    register.__qualname__ = f"Router.{method.lower()}"
    register.__doc__ = f"Register a ``{method}`` route. See ``Router.register_route``."
    return register


class Router:
    """Route table, generator table and parameter types for one application.

    Usage::

        router = Router()
        router.get("/users/[$id:decimal]", show_user, "user", user_url)
        router.dispatch("GET", "/users/42")   # show_user({"id": "42"})
        router.generate("user", {"id": 42})   # user_url({"id": 42})

    Thread safety:
        Registration is serialized by a lock. Dispatch never takes the lock:
        it reads an immutable per-method snapshot that registration swaps in
        after every change, so requests see either the old or the new table.
    """

    __slots__ = (
        "_compiled",
        "_generators",
        "_lock",
        "_ordered",
        "_tables",
        "config",
        "parameter_types",
    )

    def __init__(self, config: RouterConfig | None = None) -> None:
        self.config: RouterConfig = config or RouterConfig()
        self.parameter_types: ParameterTypes = ParameterTypes()
        self._tables: dict[str, dict[str, Route]] = {}
        self._ordered: dict[str, tuple[Route, ...]] = {}
        self._generators: dict[str, Generator] = {}
        self._compiled: dict[str, CompiledPattern] = {}
        self._lock = threading.RLock()
        for method in self.config.methods:
            self.register_method(method)

    # -- Registration --

    def register_method(self, method: str) -> None:
        """Make *method* routable. Calling it again is a no-op.

        Useful for WebDAV or other extension methods (``PROPFIND``,
        ``MKCOL``, ...) that the built-in set does not cover.
        """
        method = method.upper()
        with self._lock:
            if method not in self._tables:
                self._tables[method] = {}
                self._ordered[method] = ()

    def register_parameter_type(self, key: str, fragment: str) -> None:
        """Add a placeholder type; see ``ParameterTypes.register``.

        Register types before the routes whose patterns use them.
        """
        with self._lock:
            self.parameter_types.register(key, fragment)

    def register_route(
        self,
        method: str,
        pattern: str,
        handler: Any,
        generator_name: str | None = None,
        generator_handler: Any = None,
    ) -> None:
        """Register *handler* for *pattern* under *method*.

        Args:
            method: HTTP method, case-insensitive.
            pattern: Route pattern, e.g. ``"/users/[$id:decimal]"``.
            handler: Anything ``as_handler`` accepts.
            generator_name: Name for reverse generation, case-insensitive.
            generator_handler: Callback that builds the URL for this route.

        Re-registering the same pattern under the same method replaces
        the handler but keeps the pattern's position.

        Raises:
            UnsupportedMethod: *method* was never registered.
            IncompleteGenerator: only one generator argument was given.
            EmptyPattern: *pattern* is ``""``.
            InvalidPattern: malformed placeholder syntax.
            UnsupportedParameterType: unknown ``:type`` in *pattern*.
            Uninvocable: *handler* or *generator_handler* cannot be called.
        """
        method = method.upper()
        with self._lock:
            if method not in self._tables:
                raise UnsupportedMethod(method)

            if (generator_name is None) != (generator_handler is None):
                raise IncompleteGenerator()

            if not pattern:
                raise EmptyPattern()

            resolver = self.config.resolver
            resolve = self.config.resolve_on_register
            route = Route(
                method=method,
                pattern=pattern,
                handler=as_handler(handler, resolver, resolve=resolve),
                compiled=self._compile(pattern),
            )

            generator: Generator | None = None
            if generator_name is not None:
                generator = Generator(
                    name=generator_name.lower(),
                    handler=as_handler(generator_handler, resolver, resolve=resolve),
                )

            table = self._tables[method]
            table[pattern] = route
            self._ordered[method] = tuple(table.values())
            if generator is not None:
                self._generators[generator.name] = generator

        logger.debug("registered %s %s -> %s", method, pattern, route.handler.describe())

    def _compile(self, pattern: str) -> CompiledPattern:
        compiled = self._compiled.get(pattern)
        if compiled is None:
            compiled = compile_pattern(
                pattern,
                self.parameter_types,
                self.config.default_parameter_type,
            )
            self._compiled[pattern] = compiled
        return compiled

    def route(
        self,
        pattern: str,
        *,
        methods: Iterable[str] | None = None,
        generator: tuple[str, Any] | None = None,
    ) -> Callable[[Any], Any]:
        """Register a route handler via decorator.

        Args:
            pattern: Route pattern.
            methods: HTTP methods. Defaults to ``["GET"]`` when omitted; an
                empty iterable registers nothing.
            generator: Optional ``(name, handler)`` pair for reverse generation.
        """
        generator_name, generator_handler = generator if generator is not None else (None, None)

        def decorator(func: Any) -> Any:
            for method in methods if methods is not None else ["GET"]:
                self.register_route(method, pattern, func, generator_name, generator_handler)
            return func

        return decorator

    get = _verb("GET")
    post = _verb("POST")
    head = _verb("HEAD")
    options = _verb("OPTIONS")
    put = _verb("PUT")
    delete = _verb("DELETE")
    trace = _verb("TRACE")
    connect = _verb("CONNECT")
    patch = _verb("PATCH")
    track = _verb("TRACK")
    debug = _verb("DEBUG")

    # -- Introspection --

    @property
    def methods(self) -> frozenset[str]:
        """Every method the router accepts."""
        return frozenset(self._ordered)

    @property
    def routes(self) -> list[Route]:
        """All registered routes, grouped by method, in match order."""
        return [route for ordered in self._ordered.values() for route in ordered]

    @property
    def generators(self) -> Mapping[str, Generator]:
        """Registered generators keyed by lowercased name (a copy)."""
        return dict(self._generators)

    # -- Dispatch --

    def match(self, method: str, path: str) -> RouteMatch:
        """Find the first route under *method* whose pattern matches *path*.

        *path* must already be normalized by the caller (leading ``/``,
        mount prefix removed).

        Raises ``MethodNotImplemented`` if *method* is unknown.
        Raises ``NotFound`` if no pattern matches.
        """
        method = method.upper()
        ordered = self._ordered.get(method)
        if ordered is None:
            raise MethodNotImplemented(method)

        limit = self.config.max_path_length
        if limit is not None and len(path) > limit:
            logger.debug("refusing %s path of %d characters (limit %d)", method, len(path), limit)
            raise NotFound(f"No route matches {method} (path longer than {limit})")

        for route in ordered:
            params = route.compiled.match(path)
            if params is not None:
                return RouteMatch(route=route, path_params=params)

        logger.debug("no route matches %s %r", method, path)
        if self.config.debug:
            logger.debug(
                "tried %d pattern(s) for %s: %s",
                len(ordered),
                method,
                ", ".join(route.pattern for route in ordered) or "<none>",
            )
        raise NotFound(f"No route matches {method} {path!r}")

    def dispatch(self, method: str, path: str) -> Any:
        """Match *path* and return whatever the route's handler returns.

        The handler is called with the captured parameters as its only
        argument. Class-based handlers are constructed per call with the
        same parameters.

        Raises ``MethodNotImplemented``, ``NotFound`` or ``Uninvocable``.
        """
        found = self.match(method, path)
        return found.route.handler.invoke(found.path_params)

    def execute(self, environ: Mapping[str, Any]) -> Any:
        """Dispatch the request described by a WSGI/CGI *environ*.

        See ``sana.environ.request_from_environ`` for how the method and
        path are derived.
        """
        from sana.environ import request_from_environ

        method, path = request_from_environ(environ)
        return self.dispatch(method, path)

    # -- Reverse generation --

    def generate(self, name: str, parameters: GeneratorParams | None = None) -> str:
        """Build a URL with the generator registered as *name*.

        Names are case-insensitive. An unknown name yields ``""`` so
        templates can probe for optional links without branching.

        Raises ``Uninvocable`` if the generator cannot be called.
        """
        generator = self._generators.get(name.lower())
        if generator is None:
            logger.debug("no generator named %r", name)
            return ""
        return str(generator.handler.invoke(parameters if parameters is not None else {}))

    def url(self, name: str, parameters: GeneratorParams | None = None) -> str:
        """Template-friendly alias for ``generate``."""
        return self.generate(name, parameters)
