"""Sana exception hierarchy.

Shared across the pattern compiler, the router, and the environ helpers
so every module raises and catches the same types.
"""

from dataclasses import dataclass


class SanaError(Exception):
    """Base for all sana-specific errors."""


class ConfigurationError(SanaError):
    """Raised when routes or parameter types are registered incorrectly.

    Always raised during the registration phase, never while dispatching.
    """


class UnsupportedMethod(ConfigurationError):
    """A route was registered against an HTTP method the router does not know."""

    def __init__(self, method: str) -> None:
        self.method = method
        super().__init__(f"Requested method is not supported: {method}")


class EmptyPattern(ConfigurationError):
    """A route was registered with a zero-length pattern."""

    def __init__(self) -> None:
        super().__init__("Pattern can not be empty")


class IncompleteGenerator(ConfigurationError):
    """Only one of the generator name and the generator handler was given."""

    def __init__(self) -> None:
        super().__init__(
            "A generator needs both a name and a handler; got only one of them"
        )


class DuplicateParameterType(ConfigurationError):
    """A parameter type key is already registered."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Duplicate parameter type: {key}")


class InvalidParameterType(ConfigurationError):
    """A parameter type key or its character-class fragment is unusable."""


class PatternError(ConfigurationError):
    """Base for errors found while compiling a route pattern."""

    def __init__(self, pattern: str, reason: str) -> None:
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"{reason} in pattern {pattern!r}")


class InvalidPattern(PatternError):
    """Malformed placeholder syntax."""


class UnsupportedParameterType(PatternError):
    """A placeholder names a ``:type`` that is not registered."""

    def __init__(self, pattern: str, type_key: str) -> None:
        self.type_key = type_key
        super().__init__(pattern, f"Parameter type is not supported: {type_key}")


class Uninvocable(SanaError):  # noqa: N818
    """A handler or generator reference cannot be called."""


@dataclass(frozen=True, slots=True)
class HTTPError(SanaError):
    """An error that maps directly to an HTTP status code.

    Raised by ``Router.dispatch``. The transport layer is expected to
    catch these and render whatever response it sees fit.
    """

    status: int
    detail: str = ""

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """404 — no registered pattern matched the request path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class MethodNotImplemented(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """501 — the request method is unknown to the route table."""

    def __init__(self, method: str, detail: str = "") -> None:
        super().__init__(status=501, detail=detail or f"Not Implemented: {method}")
