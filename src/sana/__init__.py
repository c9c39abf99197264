"""Sana — an ordered request router with reverse URL generation.

Matches an HTTP method and path against bracket-placeholder patterns,
calls the first handler that fits, and builds URLs back from named
generators.

Basic usage::

    from sana import Router

    router = Router()

    def show_user(params):
        return f"user {params['id']}"

    def user_url(params):
        return f"/users/{params['id']}"

    router.get("/users/[$id:decimal]", show_user, "user", user_url)

    router.dispatch("GET", "/users/42")  # "user 42"
    router.url("user", {"id": 42})       # "/users/42"
"""

__version__ = "0.1.0.dev0"
__all__ = [
    "ConfigurationError",
    "DuplicateParameterType",
    "EmptyPattern",
    "HTTPError",
    "IncompleteGenerator",
    "InvalidParameterType",
    "InvalidPattern",
    "MethodNotImplemented",
    "NotFound",
    "PatternError",
    "Router",
    "RouterConfig",
    "SanaError",
    "Uninvocable",
    "UnsupportedMethod",
    "UnsupportedParameterType",
    "compile_pattern",
]

_ERRORS = frozenset(
    {
        "ConfigurationError",
        "DuplicateParameterType",
        "EmptyPattern",
        "HTTPError",
        "IncompleteGenerator",
        "InvalidParameterType",
        "InvalidPattern",
        "MethodNotImplemented",
        "NotFound",
        "PatternError",
        "SanaError",
        "Uninvocable",
        "UnsupportedMethod",
        "UnsupportedParameterType",
    }
)


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import sana`` fast while providing a clean top-level API.
    """
    if name == "Router":
        from sana.routing.router import Router

        return Router

    if name == "RouterConfig":
        from sana.config import RouterConfig

        return RouterConfig

    if name == "compile_pattern":
        from sana.routing.pattern import compile_pattern

        return compile_pattern

    if name in _ERRORS:
        from sana import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
