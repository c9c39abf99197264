"""Tests for sana.config — RouterConfig frozen dataclass."""

import pytest

from sana._internal.resolve import import_string
from sana.config import BUILTIN_METHODS, RouterConfig


class TestRouterConfig:
    def test_defaults(self) -> None:
        cfg = RouterConfig()

        assert cfg.methods == BUILTIN_METHODS
        assert cfg.default_parameter_type == "any"
        assert cfg.resolver is import_string
        assert cfg.resolve_on_register is True
        assert cfg.max_path_length == 8192
        assert cfg.debug is False

    def test_builtin_methods(self) -> None:
        assert set(BUILTIN_METHODS) == {
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
        }

    def test_override(self) -> None:
        cfg = RouterConfig(methods=("GET", "PROPFIND"), debug=True, max_path_length=None)

        assert cfg.methods == ("GET", "PROPFIND")
        assert cfg.debug is True
        assert cfg.max_path_length is None

    def test_frozen(self) -> None:
        cfg = RouterConfig()

        with pytest.raises(AttributeError):
            cfg.debug = True  # type: ignore[misc]

    def test_custom_resolver(self) -> None:
        registry = {"Post": object}
        cfg = RouterConfig(resolver=registry.__getitem__)

        assert cfg.resolver("Post") is object
