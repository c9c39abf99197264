"""Tests for sana._internal.resolve — import-string name resolution."""

import json
import os.path
from collections.abc import Mapping

import pytest

from sana._internal.resolve import import_string, normalize_name


class TestNormalizeName:
    def test_dotted_unchanged(self) -> None:
        assert normalize_name("blog.views:Post") == "blog.views:Post"

    def test_backslash_namespaces(self) -> None:
        assert normalize_name("blog\\views\\Post") == "blog.views.Post"

    def test_slash_namespaces(self) -> None:
        assert normalize_name("blog/views:Post") == "blog.views:Post"

    def test_leading_separator_dropped(self) -> None:
        assert normalize_name("\\blog\\Post") == "blog.Post"


class TestImportString:
    def test_colon_form(self) -> None:
        assert import_string("json:dumps") is json.dumps

    def test_dotted_form(self) -> None:
        assert import_string("os.path.join") is os.path.join

    def test_dotted_attribute_after_colon(self) -> None:
        assert import_string("json:JSONDecoder.decode") is json.JSONDecoder.decode

    def test_namespace_separators(self) -> None:
        assert import_string("collections\\abc\\Mapping") is Mapping

    def test_missing_module(self) -> None:
        with pytest.raises(ImportError):
            import_string("no_such_module_here:thing")

    def test_missing_attribute(self) -> None:
        with pytest.raises(ImportError, match="Cannot resolve"):
            import_string("json:no_such_function")

    def test_bare_name(self) -> None:
        with pytest.raises(ImportError, match="no importable module prefix"):
            import_string("nothing")

    def test_empty(self) -> None:
        with pytest.raises(ImportError):
            import_string("")
