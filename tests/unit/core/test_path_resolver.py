"""Unit tests for the module path resolver."""

import pytest

from barrel_utils.config import UnbarrelConfig
from barrel_utils.core.errors import UnresolvedModuleError
from barrel_utils.core.path_resolver import PathResolver


@pytest.fixture
def resolver():
    return PathResolver()


class TestResolve:
    def test_literal_file(self, make_tree, resolver):
        root = make_tree({"add.ts": ""})
        assert resolver.resolve("./add.ts", root) == (root / "add.ts").resolve()

    def test_extension_probe_order(self, make_tree, resolver):
        root = make_tree({"add.ts": "", "add.js": ""})
        assert resolver.resolve("./add", root) == (root / "add.ts").resolve()

    def test_tsx_before_js(self, make_tree, resolver):
        root = make_tree({"button.tsx": "", "button.js": ""})
        assert resolver.resolve("./button", root).name == "button.tsx"

    def test_directory_index(self, make_tree, resolver):
        root = make_tree({"math": {"index.ts": ""}})
        assert resolver.resolve("./math", root) == (root / "math" / "index.ts").resolve()

    def test_file_wins_over_directory(self, make_tree, resolver):
        root = make_tree({"math.ts": "", "math": {"index.ts": ""}})
        assert resolver.resolve("./math", root).name == "math.ts"

    def test_parent_segments_are_canonicalized(self, make_tree, resolver):
        root = make_tree({"math": {"add.ts": ""}, "other": {}})
        resolved = resolver.resolve("../math/add", root / "other")
        assert resolved == (root / "math" / "add.ts").resolve()
        assert ".." not in resolved.parts

    def test_dot_resolves_to_index(self, make_tree, resolver):
        root = make_tree({"math": {"index.ts": "", "add.ts": ""}})
        assert resolver.resolve(".", root / "math").name == "index.ts"

    def test_unresolved_raises(self, make_tree, resolver):
        root = make_tree({"add.ts": ""})
        with pytest.raises(UnresolvedModuleError) as exc_info:
            resolver.resolve("./missing", root)
        assert exc_info.value.specifier == "./missing"

    def test_probe_returns_err(self, make_tree, resolver):
        root = make_tree({})
        result = resolver.probe("./missing", root)
        assert result.is_err()
        assert isinstance(result.unwrap_err(), UnresolvedModuleError)

    def test_custom_extensions(self, make_tree):
        root = make_tree({"add.js": "", "add.ts": ""})
        resolver = PathResolver(UnbarrelConfig(extensions=[".js"]))
        assert resolver.resolve("./add", root).name == "add.js"


class TestRelativeSpecifier:
    def test_drops_extension(self, make_tree, resolver):
        root = make_tree({"math": {"add.ts": ""}})
        target = (root / "math" / "add.ts").resolve()
        assert resolver.relative_specifier(target, root.resolve()) == "./math/add"

    def test_drops_index(self, make_tree, resolver):
        root = make_tree({"math": {"index.ts": ""}})
        target = (root / "math" / "index.ts").resolve()
        assert resolver.relative_specifier(target, root.resolve()) == "./math"

    def test_keeps_index_when_sibling_file_shadows_directory(self, make_tree, resolver):
        root = make_tree({"math.ts": "", "math": {"index.ts": ""}})
        target = (root / "math" / "index.ts").resolve()
        assert resolver.relative_specifier(target, root.resolve()) == "./math/index"

    def test_keeps_extension_when_another_extension_wins(self, make_tree, resolver):
        root = make_tree({"add.ts": "", "add.js": ""})
        target = (root / "add.js").resolve()
        assert resolver.relative_specifier(target, root.resolve()) == "./add.js"

    def test_parent_directory(self, make_tree, resolver):
        root = make_tree({"lib": {"add.ts": ""}, "src": {}})
        target = (root / "lib" / "add.ts").resolve()
        assert resolver.relative_specifier(target, (root / "src").resolve()) == "../lib/add"
