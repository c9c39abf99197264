"""Parameter types — named character classes for placeholders.

A placeholder such as ``[$id:decimal]`` draws its allowed characters from
the ``decimal`` entry. The fragment is repeated by the compiler, so each
entry describes a single character.
"""

import re
from collections.abc import Iterator, Mapping

from sana._internal.regex import RegexError, compile_regex
from sana.errors import DuplicateParameterType, InvalidParameterType

# key -> single-character regex fragment
BUILTIN_TYPES: dict[str, str] = {
    "alphanumeric": r"[a-zA-Z0-9]",
    "alphabet": r"[a-zA-Z]",
    "decimal": r"[0-9]",
    "lowercase": r"[a-z]",
    "uppercase": r"[A-Z]",
    "word": r"[a-zA-Z0-9_-]",
    "hex": r"[0-9a-fA-F]",
    "binary": r"[01]",
    "any": r"[^/]",
}

_KEY_RE = re.compile(r"[A-Za-z0-9_]+")


class ParameterTypes(Mapping[str, str]):
    """Extensible registry of parameter types.

    Starts from ``BUILTIN_TYPES``. Entries can be added but never
    replaced or removed::

        types = ParameterTypes()
        types.register("slug", r"[a-z0-9-]")
        types["slug"]  # "[a-z0-9-]"
    """

    __slots__ = ("_types",)

    def __init__(self, initial: Mapping[str, str] | None = None) -> None:
        self._types: dict[str, str] = dict(BUILTIN_TYPES if initial is None else initial)

    def register(self, key: str, fragment: str) -> None:
        """Add a parameter type.

        Raises ``DuplicateParameterType`` if *key* already exists.
        Raises ``InvalidParameterType`` if *key* is not made of ASCII
        letters, digits and underscores, or *fragment* is not a valid RE2
        expression (no backreferences or lookaround).
        """
        if key in self._types:
            raise DuplicateParameterType(key)
        if not _KEY_RE.fullmatch(key):
            msg = f"Parameter type key must be letters, digits or underscores: {key!r}"
            raise InvalidParameterType(msg)
        if not fragment:
            msg = f"Parameter type {key!r} needs a non-empty fragment"
            raise InvalidParameterType(msg)
        try:
            compile_regex(f"(?:{fragment})")
        except RegexError as exc:
            msg = f"Parameter type {key!r} has an invalid fragment {fragment!r}: {exc}"
            raise InvalidParameterType(msg) from exc
        self._types[key] = fragment

    def __getitem__(self, key: str) -> str:
        return self._types[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._types)

    def __len__(self) -> int:
        return len(self._types)

    def __repr__(self) -> str:
        return f"ParameterTypes({sorted(self._types)!r})"
