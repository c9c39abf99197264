"""Router configuration.

RouterConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass

from sana._internal.resolve import import_string
from sana._internal.types import Resolver

BUILTIN_METHODS: tuple[str, ...] = (
    "GET",
    "POST",
    "HEAD",
    "OPTIONS",
    "PUT",
    "DELETE",
    "TRACE",
    "CONNECT",
    "PATCH",
    "TRACK",
    "DEBUG",
)


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Router configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = RouterConfig(debug=True, methods=("GET", "POST", "PROPFIND"))
    """

    # Methods known to a fresh router (more can be added with register_method)
    methods: tuple[str, ...] = BUILTIN_METHODS

    # Placeholder type used when a pattern omits ``:type``
    default_parameter_type: str = "any"

    # Turns stored names like "app.views:Users" into objects
    resolver: Resolver = import_string

    # Resolve string handlers while registering instead of on first dispatch
    resolve_on_register: bool = True

    # Longer paths are refused before any pattern runs (None disables)
    max_path_length: int | None = 8192

    # Log the patterns that were tried when a request finds no route
    debug: bool = False
