"""Shared type aliases used across sana modules."""

from collections.abc import Callable, Mapping
from typing import Any, TypeAlias

# Captured path parameters: placeholder name to raw matched substring
Params: TypeAlias = dict[str, str]

# Generators accept any mapping, not only captured params
GeneratorParams: TypeAlias = Mapping[str, Any]

# Name-resolution hook: stored identifier to importable object
Resolver: TypeAlias = Callable[[str], Any]
