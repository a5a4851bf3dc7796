"""
Unit tests for export graph resolution.
"""

from pathlib import Path

import pytest

from barrel_utils.config import UnbarrelConfig
from barrel_utils.core.errors import (
    AmbiguousReExportError,
    UnresolvedExportError,
    UnresolvedModuleError,
)
from barrel_utils.core.types import ExportKind, ResolvedExport
from barrel_utils.graph.resolver import ExportGraphResolver, group_exports, merge_exports


@pytest.fixture
def resolver():
    return ExportGraphResolver()


def summarize(groups, base: Path):
    """[(origin relative to base or external specifier, [(origin_name, exported_name, type_only)])]"""
    summary = []
    for group in groups:
        origin = group.origin_module
        if not group.external:
            origin = Path(origin).relative_to(base.resolve()).as_posix()
        summary.append((origin, [(e.origin_name, e.exported_name, e.type_only) for e in group.exports]))
    return summary


def export(name, origin, type_only=False, **kwargs):
    return ResolvedExport(exported_name=name, origin_module=origin, origin_name=name, type_only=type_only, **kwargs)


class TestMergeExports:
    def test_type_and_value_merge_into_value(self):
        merged = merge_exports([
            (export("Add", "/a.ts", type_only=True), True),
            (export("Add", "/a.ts"), True),
        ])
        assert merged == [export("Add", "/a.ts")]

    def test_explicit_export_shadows_wildcard(self):
        merged = merge_exports([
            (export("add", "/math.ts"), True),
            (export("add", "/add.ts"), False),
        ])
        assert merged == [export("add", "/add.ts")]

    def test_wildcard_value_promotes_explicit_type_export(self):
        merged = merge_exports([
            (export("X", "/x.ts", type_only=True), False),
            (export("X", "/x.ts"), True),
        ])
        assert merged == [export("X", "/x.ts")]

    def test_wildcard_value_before_explicit_type_export(self):
        merged = merge_exports([
            (export("X", "/x.ts"), True),
            (export("X", "/x.ts", type_only=True), False),
        ])
        assert merged == [export("X", "/x.ts")]

    def test_wildcard_value_from_other_module_does_not_promote(self):
        merged = merge_exports([
            (export("X", "/x.ts", type_only=True), False),
            (export("X", "/y.ts"), True),
        ])
        assert merged == [export("X", "/x.ts", type_only=True)]

    def test_later_duplicate_dropped(self):
        merged = merge_exports([
            (export("add", "/a.ts"), True),
            (export("add", "/b.ts"), True),
        ])
        assert merged == [export("add", "/a.ts")]

    def test_external_wildcards_deduplicated_per_module(self):
        wildcard = ResolvedExport(
            exported_name="*", origin_module="react", origin_name="*",
            kind=ExportKind.WILDCARD, external=True,
        )
        assert merge_exports([(wildcard, False), (wildcard, True)]) == [wildcard]


class TestGroupExports:
    def test_groups_in_first_reference_order(self):
        groups = group_exports([export("a", "/a.ts"), export("b", "/b.ts"), export("c", "/a.ts")])
        assert [(g.origin_module, [e.exported_name for e in g.exports]) for g in groups] == [
            ("/a.ts", ["a", "c"]),
            ("/b.ts", ["b"]),
        ]

    def test_namespaces_get_their_own_group(self):
        ns = ResolvedExport(
            exported_name="math", origin_module="/math.ts", origin_name="*", kind=ExportKind.NAMESPACE,
        )
        groups = group_exports([export("add", "/math.ts"), ns])
        assert [g.kind for g in groups] == [ExportKind.NAMED, ExportKind.NAMESPACE]


class TestResolveRoot:
    def test_wildcard_of_definitions(self, make_tree, resolver):
        base = make_tree({
            "index.ts": "export * from './add';",
            "add.ts": "export function add() {}\nexport function addThree() {}",
        })
        groups = resolver.resolve_root(base / "index.ts")
        assert summarize(groups, base) == [
            ("add.ts", [("add", "add", False), ("addThree", "addThree", False)]),
        ]

    def test_rename_through_barrel(self, make_tree, resolver):
        base = make_tree({
            "index.ts": "export * from './math';",
            "math": {
                "index.ts": "export { add as renamedAdd } from './add';",
                "add.ts": "export function add() {}",
            },
        })
        groups = resolver.resolve_root(base / "index.ts")
        assert summarize(groups, base) == [("math/add.ts", [("add", "renamedAdd", False)])]

    def test_explicit_path_wins(self, make_tree, resolver):
        base = make_tree({
            "index.ts": "export { add } from './add';\nexport * from './math';",
            "add.ts": "export function add() {}",
            "math.ts": "export { add } from './add';\nexport function subtract() {}",
        })
        groups = resolver.resolve_root(base / "index.ts")
        assert summarize(groups, base) == [
            ("add.ts", [("add", "add", False)]),
            ("math.ts", [("subtract", "subtract", False)]),
        ]

    def test_long_rename_chain(self, make_tree, resolver):
        base = make_tree({
            "index.ts": "export { d } from './c';",
            "c.ts": "export { c as d } from './b';",
            "b.ts": "export { b as c } from './a';",
            "a.ts": "const value = 1;\nexport { value as b };",
        })
        groups = resolver.resolve_root(base / "index.ts")
        assert summarize(groups, base) == [("a.ts", [("b", "d", False)])]

    def test_wildcard_does_not_forward_default(self, make_tree, resolver):
        base = make_tree({
            "index.ts": "export * from './add';",
            "add.ts": "export default function add() {}\nexport const one = 1;",
        })
        groups = resolver.resolve_root(base / "index.ts")
        assert summarize(groups, base) == [("add.ts", [("one", "one", False)])]

    def test_default_through_chain(self, make_tree, resolver):
        base = make_tree({
            "index.ts": "export { phony as real } from './mid';",
            "mid.ts": "export { default as phony } from './impl';",
            "impl.ts": "export default class {}",
        })
        groups = resolver.resolve_root(base / "index.ts")
        assert summarize(groups, base) == [("impl.ts", [("default", "real", False)])]

    def test_external_named_re_export_is_terminal(self, make_tree, resolver):
        base = make_tree({
            "index.ts": "export { useEffect } from './ux';",
            "ux": {"index.ts": "export { useState, useEffect } from 'react';"},
        })
        groups = resolver.resolve_root(base / "index.ts")
        assert summarize(groups, base) == [("react", [("useEffect", "useEffect", False)])]
        assert groups[0].external

    def test_external_wildcard_passthrough(self, make_tree, resolver):
        base = make_tree({
            "index.ts": "export * from 'react';\nexport * from './ux';",
            "ux": {
                "index.ts": "export * from './client';",
                "client.ts": "export { createRoot } from 'react-dom/client';",
            },
        })
        groups = resolver.resolve_root(base / "index.ts")
        assert [(g.kind, g.origin_module) for g in groups] == [
            (ExportKind.WILDCARD, "react"),
            (ExportKind.NAMED, "react-dom/client"),
        ]

    def test_name_found_only_behind_external_wildcard(self, make_tree, resolver):
        base = make_tree({
            "index.ts": "export { useState } from './hooks';",
            "hooks.ts": "export * from 'react';",
        })
        groups = resolver.resolve_root(base / "index.ts")
        assert summarize(groups, base) == [("react", [("useState", "useState", False)])]

    def test_type_only_flags_follow_re_export_chain(self, make_tree, resolver):
        base = make_tree({
            "index.ts": "export * from './math';\nexport { addType } from './types';",
            "math": {
                "index.ts": "export { add, type AddFn } from './add';",
                "add.ts": "export function add() {}\nexport type AddFn = () => number;",
            },
            "types": {
                "index.ts": "export { Before as addType } from './defs';",
                "defs.ts": "export type Before = string;",
            },
        })
        groups = resolver.resolve_root(base / "index.ts")
        assert summarize(groups, base) == [
            ("math/add.ts", [("add", "add", False), ("AddFn", "AddFn", True)]),
            ("types/defs.ts", [("Before", "addType", False)]),
        ]

    def test_wildcard_keeps_definition_type_flags(self, make_tree, resolver):
        base = make_tree({
            "index.ts": "export * from './add';",
            "add.ts": "export interface AddInterface {}\nexport type AddType = number;\nexport enum AddEnum { One }",
        })
        groups = resolver.resolve_root(base / "index.ts")
        assert summarize(groups, base) == [
            ("add.ts", [
                ("AddInterface", "AddInterface", True),
                ("AddType", "AddType", True),
                ("AddEnum", "AddEnum", False),
            ]),
        ]

    def test_namespace_re_export(self, make_tree, resolver):
        base = make_tree({
            "index.ts": "export * from './barrel';",
            "barrel.ts": "export * as math from './math';",
            "math.ts": "export const one = 1;",
        })
        groups = resolver.resolve_root(base / "index.ts")
        assert [(g.kind, [e.exported_name for e in g.exports]) for g in groups] == [
            (ExportKind.NAMESPACE, ["math"]),
        ]

    def test_parent_directory_specifiers(self, make_tree, resolver):
        base = make_tree({
            "index.ts": "export { add } from './math';",
            "math": {
                "index.ts": "export { add } from './add';",
                "add.ts": "import { getConst, add } from '../addFolder';\nexport { add };",
            },
            "addFolder": {
                "index.ts": "export * from './addSubfolder';",
                "addSubfolder": {
                    "index.ts": "export { add } from './addDefinition';",
                    "addDefinition.ts": "export function add() {}\nexport function getConst() {}",
                },
            },
        })
        groups = resolver.resolve_root(base / "index.ts")
        assert summarize(groups, base) == [
            ("addFolder/addSubfolder/addDefinition.ts", [("add", "add", False)]),
        ]

    def test_modules_are_analyzed_once(self, make_tree, resolver):
        base = make_tree({
            "index.ts": "export * from './a';\nexport * from './b';",
            "a.ts": "export * from './shared';",
            "b.ts": "export * from './shared';",
            "shared.ts": "export const shared = 1;",
        })
        calls = []
        analyze = resolver.analyzer.analyze

        def counting_analyze(path):
            calls.append(path)
            return analyze(path)

        resolver.analyzer.analyze = counting_analyze
        resolver.resolve_root(base / "index.ts")

        assert len(calls) == len(set(calls)) == 4
        assert resolver.modules_analyzed == 4


class TestResolutionErrors:
    def test_cyclic_rename_chain(self, make_tree, resolver):
        base = make_tree({
            "index.ts": "export { a } from './one';",
            "one.ts": "export { b as a } from './two';",
            "two.ts": "export { a as b } from './one';",
        })
        with pytest.raises(AmbiguousReExportError):
            resolver.resolve_root(base / "index.ts")

    def test_wildcard_cycle_is_skipped(self, make_tree, resolver):
        base = make_tree({
            "index.ts": "export * from './a';",
            "a.ts": "export * from './b';\nexport const a = 1;",
            "b.ts": "export * from './a';\nexport const b = 2;",
        })
        groups = resolver.resolve_root(base / "index.ts")
        assert summarize(groups, base) == [
            ("b.ts", [("b", "b", False)]),
            ("a.ts", [("a", "a", False)]),
        ]

    def test_depth_limit(self, make_tree):
        base = make_tree({
            "index.ts": "export { x } from './a';",
            "a.ts": "export { x } from './b';",
            "b.ts": "export { x } from './c';",
            "c.ts": "export const x = 1;",
        })
        resolver = ExportGraphResolver(config=UnbarrelConfig(max_depth=2))
        with pytest.raises(AmbiguousReExportError):
            resolver.resolve_root(base / "index.ts")

    def test_missing_module(self, make_tree, resolver):
        base = make_tree({"index.ts": "export * from './missing';"})
        with pytest.raises(UnresolvedModuleError):
            resolver.resolve_root(base / "index.ts")

    def test_missing_export(self, make_tree, resolver):
        base = make_tree({
            "index.ts": "export { nope } from './add';",
            "add.ts": "export const add = 1;",
        })
        with pytest.raises(UnresolvedExportError) as exc_info:
            resolver.resolve_root(base / "index.ts")
        assert exc_info.value.names == ["nope"]

    def test_several_external_wildcards_are_ambiguous(self, make_tree, resolver):
        base = make_tree({
            "index.ts": "export { thing } from './hooks';",
            "hooks.ts": "export * from 'one';\nexport * from 'two';",
        })
        with pytest.raises(AmbiguousReExportError):
            resolver.resolve_root(base / "index.ts")
