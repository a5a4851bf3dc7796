"""Unit tests for import specifier helpers."""

import os
from pathlib import Path

from barrel_utils.core.imports import (
    convert_absolute_path_to_relative_import_path,
    convert_to_esm_import_path,
    is_internal_module,
    normalize_to_posix_path,
)


class TestIsInternalModule:
    def test_relative_specifiers_are_internal(self):
        assert is_internal_module("./add")
        assert is_internal_module("../math")
        assert is_internal_module(".")

    def test_bare_specifiers_are_external(self):
        assert not is_internal_module("react")
        assert not is_internal_module("react-dom/client")
        assert not is_internal_module("@scope/pkg")


class TestPathConversion:
    def test_normalize_replaces_platform_separator(self):
        assert normalize_to_posix_path(os.sep.join(["foo", "bar"])) == "foo/bar"

    def test_esm_path_gets_dot_prefix(self):
        assert convert_to_esm_import_path("foo/bar") == "./foo/bar"

    def test_esm_path_keeps_parent_prefix(self):
        assert convert_to_esm_import_path("../foo") == "../foo"

    def test_absolute_to_relative_same_directory(self):
        result = convert_absolute_path_to_relative_import_path(Path("/foo/bar/baz.ts"), Path("/foo/bar"))
        assert result == "./baz.ts"

    def test_absolute_to_relative_parent_directory(self):
        result = convert_absolute_path_to_relative_import_path(Path("/foo/baz.ts"), Path("/foo/bar"))
        assert result == "../baz.ts"

    def test_absolute_to_relative_subdirectory(self):
        result = convert_absolute_path_to_relative_import_path(
            Path("/foo/bar/qux/index.ts"), Path("/foo/bar"),
        )
        assert result == "./qux/index.ts"
