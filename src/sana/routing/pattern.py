"""Route pattern compiler.

Patterns are literal paths with bracketed placeholders::

    /users/[$id:decimal]          required, typed
    /page[/$num ?]                optional, prefix fused into the group
    /files/[$name][.$ext:word ?]  two placeholders, the second optional
    /search?                      trailing "?" accepts any query string

Compilation runs in two phases. ``tokenize`` scans the pattern into
``Literal`` and ``Placeholder`` tokens without touching regex syntax, then
``lower`` turns the tokens into a regular expression where every literal
is escaped exactly once. The expression is compiled with RE2, so matching
time grows linearly with the path however placeholders are arranged.
"""

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from sana._internal.regex import RegexError, compile_regex, escape
from sana._internal.types import Params
from sana.errors import InvalidPattern, UnsupportedParameterType
from sana.routing.params import BUILTIN_TYPES

logger = logging.getLogger("sana.routing")

_NAME_RE = re.compile(r"[A-Za-z0-9]+")
_TYPE_RE = re.compile(r"[A-Za-z0-9_]+")

# Appended when the pattern ends with a bare "?"
_QUERY_TAIL = r"(?:\?.*)?"


@dataclass(frozen=True, slots=True)
class Literal:
    """Text that must appear verbatim in the path."""

    text: str


@dataclass(frozen=True, slots=True)
class Placeholder:
    """A bracketed capture.

    ``[/$num:decimal ?]`` -> ``Placeholder("num", "decimal", optional=True, prefix="/")``
    """

    name: str
    param_type: str | None = None
    optional: bool = False
    prefix: str = ""
    suffix: str = ""


Token = Literal | Placeholder


@dataclass(frozen=True, slots=True)
class ParsedPattern:
    """Tokens of a pattern plus its query-tail flag."""

    pattern: str
    tokens: tuple[Token, ...]
    query_tail: bool = False

    @property
    def placeholders(self) -> tuple[Placeholder, ...]:
        return tuple(t for t in self.tokens if isinstance(t, Placeholder))


def tokenize(pattern: str) -> ParsedPattern:
    """Split a pattern into literal runs and placeholders.

    Examples::

        "/users"          -> (Literal("/users"),)
        "/users/[$id]"    -> (Literal("/users/"), Placeholder("id"))
        "/page[/$num ?]"  -> (Literal("/page"), Placeholder("num", optional=True, prefix="/"))

    Raises ``InvalidPattern`` for malformed bracket syntax.
    """
    source = pattern
    query_tail = source.endswith("?")
    if query_tail:
        source = source[:-1]

    tokens: list[Token] = []
    literal: list[str] = []
    seen: set[str] = set()
    index = 0

    while index < len(source):
        char = source[index]

        if char == "]":
            raise InvalidPattern(pattern, f"Unmatched ']' at offset {index}")

        if char != "[":
            literal.append(char)
            index += 1
            continue

        end = source.find("]", index + 1)
        if end == -1:
            raise InvalidPattern(pattern, f"Unterminated '[' at offset {index}")
        if source.find("[", index + 1, end) != -1:
            raise InvalidPattern(pattern, f"Nested '[' inside placeholder at offset {index}")

        if literal:
            tokens.append(Literal("".join(literal)))
            literal = []

        placeholder = _parse_placeholder(pattern, source[index + 1 : end])
        if placeholder.name in seen:
            raise InvalidPattern(pattern, f"Duplicate placeholder name ${placeholder.name}")
        seen.add(placeholder.name)
        tokens.append(placeholder)
        index = end + 1

    if literal:
        tokens.append(Literal("".join(literal)))

    return ParsedPattern(pattern=pattern, tokens=tuple(tokens), query_tail=query_tail)


def _parse_placeholder(pattern: str, body: str) -> Placeholder:
    """Parse the text between ``[`` and ``]``: ``prefix $name :type ? suffix``."""
    dollar = body.find("$")
    if dollar == -1:
        raise InvalidPattern(pattern, f"Placeholder [{body}] has no $name")

    prefix = body[:dollar].strip()
    rest = body[dollar + 1 :]

    name_match = _NAME_RE.match(rest)
    if name_match is None:
        raise InvalidPattern(pattern, f"Placeholder [{body}] has an empty name")
    name = name_match.group()
    pos = name_match.end()
    if pos < len(rest) and (rest[pos] == "_" or rest[pos].isalnum()):
        raise InvalidPattern(
            pattern, f"Placeholder names may only use ASCII letters and digits: [{body}]"
        )

    pos = _skip_spaces(rest, pos)
    param_type: str | None = None
    if rest.startswith(":", pos):
        type_match = _TYPE_RE.match(rest, _skip_spaces(rest, pos + 1))
        if type_match is None:
            raise InvalidPattern(pattern, f"Placeholder [{body}] has an empty :type")
        param_type = type_match.group()
        pos = _skip_spaces(rest, type_match.end())

    optional = rest.startswith("?", pos)
    if optional:
        pos += 1

    suffix = rest[pos:].strip()
    if "$" in suffix:
        raise InvalidPattern(pattern, f"Placeholder [{body}] declares more than one $name")

    return Placeholder(
        name=name,
        param_type=param_type,
        optional=optional,
        prefix=prefix,
        suffix=suffix,
    )


def _skip_spaces(text: str, pos: int) -> int:
    while pos < len(text) and text[pos].isspace():
        pos += 1
    return pos


def lower(
    parsed: ParsedPattern,
    types: Mapping[str, str],
    default_type: str = "any",
) -> str:
    """Lower parsed tokens into regex source.

    Placeholders become numbered groups ``_0``, ``_1``, ... so names that
    are not Python identifiers (``$2fa``) still work. An optional
    placeholder wraps prefix, capture and suffix in one optional group and
    repeats its class zero-or-more times; a required one repeats
    one-or-more times.

    Raises ``UnsupportedParameterType`` if a ``:type`` is not in *types*.
    """
    parts: list[str] = []
    group = 0

    for token in parsed.tokens:
        if isinstance(token, Literal):
            parts.append(escape(token.text))
            continue

        key = token.param_type or default_type
        try:
            fragment = types[key]
        except KeyError:
            raise UnsupportedParameterType(parsed.pattern, key) from None

        repeat = "*" if token.optional else "+"
        parts.append(
            f"(?:{escape(token.prefix)}"
            f"(?P<_{group}>(?:{fragment}){repeat})"
            f"{escape(token.suffix)})"
            f"{'?' if token.optional else ''}"
        )
        group += 1

    if parsed.query_tail:
        parts.append(_QUERY_TAIL)

    return "".join(parts)


@dataclass(frozen=True, slots=True)
class CompiledPattern:
    """A pattern ready to test paths against.

    Matching is anchored at both ends. When placeholders sit next to each
    other without a literal between them, the leftmost one takes the
    longest substring that still lets the rest of the pattern match. RE2
    picks the same submatches a backtracking engine would, without the
    backtracking.
    """

    pattern: str
    regex: Any
    names: tuple[str, ...]
    query_tail: bool = False

    def match(self, path: str) -> Params | None:
        """Return captured parameters, or ``None`` if *path* does not match.

        Optional placeholders that did not participate are left out.
        """
        found = self.regex.fullmatch(path)
        if found is None:
            return None
        # Fragments may carry their own groups; read ours by group name only
        params: Params = {}
        for index, name in enumerate(self.names):
            value = found.group(f"_{index}")
            if value is not None:
                params[name] = value
        return params


def compile_pattern(
    pattern: str,
    types: Mapping[str, str] | None = None,
    default_type: str = "any",
) -> CompiledPattern:
    """Compile a route pattern.

    Usage::

        compiled = compile_pattern("/user/[$id:decimal]")
        compiled.match("/user/42")   # {"id": "42"}
        compiled.match("/user/abc")  # None

    Raises ``InvalidPattern`` or ``UnsupportedParameterType``.
    """
    parsed = tokenize(pattern)
    source = lower(parsed, BUILTIN_TYPES if types is None else types, default_type)
    try:
        regex = compile_regex(source)
    except RegexError as exc:
        raise InvalidPattern(pattern, f"Pattern does not compile ({exc})") from exc

    logger.debug("compiled %r -> %s", pattern, source)
    return CompiledPattern(
        pattern=pattern,
        regex=regex,
        names=tuple(p.name for p in parsed.placeholders),
        query_tail=parsed.query_tail,
    )
