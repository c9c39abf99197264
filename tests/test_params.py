"""Tests for sana.routing.params — the parameter type registry."""

import re

import pytest

from sana.errors import DuplicateParameterType, InvalidParameterType
from sana.routing.params import BUILTIN_TYPES, ParameterTypes


class TestBuiltinTypes:
    def test_all_types_registered(self) -> None:
        assert set(BUILTIN_TYPES) == {
            "alphanumeric",
            "alphabet",
            "decimal",
            "lowercase",
            "uppercase",
            "word",
            "hex",
            "binary",
            "any",
        }

    def test_any_excludes_slash(self) -> None:
        assert re.fullmatch(BUILTIN_TYPES["any"], "/") is None
        assert re.fullmatch(BUILTIN_TYPES["any"], "-") is not None

    @pytest.mark.parametrize(
        ("key", "accepted", "rejected"),
        [
            ("alphanumeric", "aZ9", "_"),
            ("alphabet", "aZ", "9"),
            ("decimal", "0", "a"),
            ("lowercase", "a", "A"),
            ("uppercase", "A", "a"),
            ("word", "a_-", "."),
            ("hex", "fF0", "g"),
            ("binary", "01", "2"),
        ],
    )
    def test_fragments_are_single_characters(self, key: str, accepted: str, rejected: str) -> None:
        fragment = BUILTIN_TYPES[key]
        for char in accepted:
            assert re.fullmatch(fragment, char) is not None
        assert re.fullmatch(fragment, rejected) is None


class TestParameterTypes:
    def test_starts_with_builtins(self) -> None:
        types = ParameterTypes()
        assert dict(types) == BUILTIN_TYPES

    def test_instances_are_independent(self) -> None:
        first = ParameterTypes()
        first.register("slug", r"[a-z0-9-]")
        assert "slug" not in ParameterTypes()
        assert "slug" not in BUILTIN_TYPES

    def test_register(self) -> None:
        types = ParameterTypes()
        types.register("slug", r"[a-z0-9-]")
        assert types["slug"] == r"[a-z0-9-]"
        assert len(types) == len(BUILTIN_TYPES) + 1

    def test_duplicate_rejected_not_overwritten(self) -> None:
        types = ParameterTypes()
        with pytest.raises(DuplicateParameterType):
            types.register("hex", r"[0-9]")
        assert types["hex"] == BUILTIN_TYPES["hex"]

    def test_key_must_be_identifier_like(self) -> None:
        types = ParameterTypes()
        with pytest.raises(InvalidParameterType):
            types.register("my-type", r"[a-z]")

    def test_fragment_must_compile(self) -> None:
        types = ParameterTypes()
        with pytest.raises(InvalidParameterType, match="invalid fragment"):
            types.register("broken", r"[a-z")

    def test_fragment_must_be_linear_time(self) -> None:
        types = ParameterTypes()
        with pytest.raises(InvalidParameterType, match="invalid fragment"):
            types.register("lookahead", r"(?=a)a")
        assert "lookahead" not in types

    def test_fragment_must_not_be_empty(self) -> None:
        types = ParameterTypes()
        with pytest.raises(InvalidParameterType):
            types.register("nothing", "")

    def test_unknown_key_raises(self) -> None:
        with pytest.raises(KeyError):
            ParameterTypes()["uuid"]

    def test_custom_initial_set(self) -> None:
        types = ParameterTypes({"digit": r"\d"})
        assert list(types) == ["digit"]
