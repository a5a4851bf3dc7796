"""
Module Export Analyzer.

Extracts the export surface of a single JavaScript/TypeScript module from
its tree-sitter syntax tree:

- Inline exported declarations (`export function add() {}`) -> definitions
- `export * from './x'` -> wildcard re-export edges
- `export * as ns from './x'` -> namespace re-export edges
- `export default ...` -> default definitions
- `export { a, b as c } from './x'` -> named / default re-export edges
- `export { a, b as c }` -> resolved against the module's own imports and
  declarations in a second phase

Only top-level statements are visited; exports cannot appear anywhere else.
"""

import logging
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import Any, Dict, List, Tuple

from ...core.errors import UnresolvedExportError, UnsupportedConstructError
from ...core.types import (
    DEFAULT_EXPORT_NAME,
    ExportDefinition,
    ExportKind,
    ModuleExports,
    ReExportEdge,
)
from ..base import ModuleParser, SyntaxTree
from .parser import TypeScriptParser

logger = logging.getLogger(__name__)

# Declarations whose name lives in the `name` field
NAMED_DECLARATIONS = {
    "function_declaration",
    "generator_function_declaration",
    "function_signature",
    "class_declaration",
    "abstract_class_declaration",
    "enum_declaration",
}

TYPE_DECLARATIONS = {"type_alias_declaration", "interface_declaration"}

VARIABLE_DECLARATIONS = {"lexical_declaration", "variable_declaration"}

MODULE_DECLARATIONS = {"internal_module", "module"}

# Named function/class expressions, as in `export default function add() {}`
NAMED_EXPRESSIONS = {"function_expression", "function", "generator_function", "class"}

LOCAL_DECLARATIONS = (
    NAMED_DECLARATIONS | TYPE_DECLARATIONS | VARIABLE_DECLARATIONS
    | MODULE_DECLARATIONS | {"ambient_declaration"}
)


class BindingKind(StrEnum):
    """How a local name was introduced into the module."""
    IMPORT_DEFAULT = "import_default"
    IMPORT_NAMED = "import_named"
    IMPORT_NAMESPACE = "import_namespace"
    DECLARATION = "declaration"


@dataclass
class PendingExport:
    """A source-less export specifier waiting for its local binding."""
    local_name: str
    exported_name: str
    type_only: bool
    position: int


@dataclass
class LocalBinding:
    kind: BindingKind
    type_only: bool = False
    specifier: str | None = None
    imported_name: str | None = None


@dataclass
class StatementSpan:
    """Byte span of a top-level export statement."""
    start_byte: int
    end_byte: int
    is_re_export: bool


@dataclass
class ModuleScan:
    """Everything the analyzer learned about a module."""
    file_path: Path
    exports: ModuleExports
    source: bytes = b""
    statements: List[StatementSpan] = field(default_factory=list)

    @property
    def re_export_statements(self) -> List[StatementSpan]:
        return [s for s in self.statements if s.is_re_export]


def module_name(tree: SyntaxTree, node: Any) -> str:
    """Text of an identifier or string module export name, without quotes."""
    text = tree.text(node)
    if node.type == "string":
        return text[1:-1]
    return text


def has_type_modifier(node: Any) -> bool:
    """True if the node carries a `type` keyword as a direct child token."""
    return any(not child.is_named and child.type == "type" for child in node.children)


def source_node(node: Any) -> Any | None:
    """The `from '...'` string of an import/export statement."""
    source = node.child_by_field_name("source")
    if source is not None:
        return source
    return next((c for c in node.children if c.type == "string"), None)


class ModuleAnalyzer:
    """
    Builds ModuleExports records from source files.

    Example:
        ```python
        analyzer = ModuleAnalyzer()
        exports = analyzer.analyze(Path("src/math/index.ts"))
        for edge in exports.re_exports:
            print(edge.kind, edge.specifier)
        ```
    """

    def __init__(self, parser: ModuleParser | None = None):
        self.parser = parser or TypeScriptParser()

    def analyze(self, module_path: Path) -> ModuleExports:
        """Parse and analyze a module. Raises ParseError on invalid syntax."""
        return self.scan(module_path).exports

    def scan(self, module_path: Path) -> ModuleScan:
        tree = self.parser.parse_file(module_path)
        return self.scan_tree(tree)

    def scan_tree(self, tree: SyntaxTree) -> ModuleScan:
        definitions: List[ExportDefinition] = []
        re_exports: List[ReExportEdge] = []
        pending: List[PendingExport] = []
        statements: List[StatementSpan] = []
        imports: List[Any] = []
        declarations: List[Any] = []

        # Phase 1: one pass over the top-level statements
        for node in tree.root.named_children:
            match node.type:
                case "export_statement":
                    produced = self._visit_export(tree, node, definitions, re_exports, pending)
                    statements.append(StatementSpan(node.start_byte, node.end_byte, produced))
                    declaration = node.child_by_field_name("declaration")
                    if declaration is None:
                        # `export default function add() {}` may parse as an expression
                        declaration = node.child_by_field_name("value")
                    if declaration is not None:
                        declarations.append(declaration)
                case "import_statement":
                    imports.append(node)
                case "expression_statement":
                    # `namespace Foo {}` at the top level parses as an expression
                    declarations.extend(
                        c for c in node.named_children if c.type in MODULE_DECLARATIONS
                    )
                case node_type if node_type in LOCAL_DECLARATIONS:
                    declarations.append(node)
                case _:
                    pass

        # Phase 2: bind source-less exports to imports and local declarations
        if pending:
            bindings = self._collect_bindings(tree, imports, declarations)
            remaining = self._bind_pending(pending, bindings, definitions, re_exports)
            if remaining:
                raise UnresolvedExportError(tree.file_path, [p.local_name for p in remaining])

        exports = ModuleExports(definitions=definitions, re_exports=re_exports)
        logger.debug(
            f"Analyzed {tree.file_path}: {len(definitions)} definitions, "
            f"{len(re_exports)} re-exports"
        )
        return ModuleScan(
            file_path=tree.file_path, exports=exports, source=tree.source, statements=statements,
        )

    # ------------------------------------------------------------------
    # Phase 1
    # ------------------------------------------------------------------

    def _visit_export(
        self,
        tree: SyntaxTree,
        node: Any,
        definitions: List[ExportDefinition],
        re_exports: List[ReExportEdge],
        pending: List[PendingExport],
    ) -> bool:
        """Record the items of one export statement. Returns True for re-export statements."""
        tokens = {c.type for c in node.children if not c.is_named}
        declaration = node.child_by_field_name("declaration")

        if "default" in tokens:
            target = declaration if declaration is not None else node.child_by_field_name("value")
            definitions.append(ExportDefinition(
                kind=ExportKind.DEFAULT,
                type_only=target is not None and target.type == "interface_declaration",
                position=node.start_byte,
            ))
            return False

        if declaration is not None:
            if declaration.type == "import_alias":
                raise UnsupportedConstructError(tree.file_path, f"export import alias: {tree.text(node)}")
            for name, type_only, position in self.declared_names(tree, declaration, strict=True):
                definitions.append(ExportDefinition(
                    kind=ExportKind.NAMED, name=name, type_only=type_only, position=position,
                ))
            return False

        if "=" in tokens:
            raise UnsupportedConstructError(tree.file_path, f"export assignment: {tree.text(node)}")
        if "namespace" in tokens:
            raise UnsupportedConstructError(tree.file_path, f"UMD namespace export: {tree.text(node)}")

        source = source_node(node)
        specifier = module_name(tree, source) if source is not None else None
        statement_type_only = "type" in tokens
        clause = next((c for c in node.named_children if c.type == "export_clause"), None)
        namespace = next((c for c in node.named_children if c.type == "namespace_export"), None)

        if namespace is not None and specifier is not None:
            name_node = namespace.named_children[-1]
            re_exports.append(ReExportEdge(
                kind=ExportKind.NAMESPACE,
                specifier=specifier,
                exported_name=module_name(tree, name_node),
                type_only=statement_type_only,
                position=node.start_byte,
            ))
            return True

        if clause is not None:
            specifiers = [c for c in clause.named_children if c.type == "export_specifier"]
            for spec in specifiers:
                local, exported = self._specifier_names(tree, spec)
                type_only = statement_type_only or has_type_modifier(spec)
                if specifier is not None:
                    re_exports.append(ReExportEdge(
                        kind=ExportKind.DEFAULT if local == DEFAULT_EXPORT_NAME else ExportKind.NAMED,
                        specifier=specifier,
                        imported_name=local,
                        exported_name=exported,
                        type_only=type_only,
                        position=spec.start_byte,
                    ))
                else:
                    pending.append(PendingExport(local, exported, type_only, spec.start_byte))
            return bool(specifiers)

        if "*" in tokens and specifier is not None:
            re_exports.append(ReExportEdge(
                kind=ExportKind.WILDCARD,
                specifier=specifier,
                type_only=statement_type_only,
                position=node.start_byte,
            ))
            return True

        raise UnsupportedConstructError(tree.file_path, tree.text(node))

    @staticmethod
    def _specifier_names(tree: SyntaxTree, spec: Any) -> Tuple[str, str]:
        """(name, alias-or-name) of an export/import specifier."""
        name_node = spec.child_by_field_name("name")
        alias_node = spec.child_by_field_name("alias")
        if name_node is None:
            parts = [c for c in spec.children if c.type not in ("type", "typeof", "as", ",")]
            name_node = parts[0]
            alias_node = parts[1] if len(parts) > 1 else None
        name = module_name(tree, name_node)
        alias = module_name(tree, alias_node) if alias_node is not None else name
        return name, alias

    def declared_names(self, tree: SyntaxTree, node: Any, strict: bool = False) -> List[Tuple[str, bool, int]]:
        """
        Names introduced by a declaration as (name, type_only, position).

        Only type aliases and interfaces are type-only. With `strict`,
        declarations that introduce no usable name raise
        UnsupportedConstructError instead of being skipped.
        """
        match node.type:
            case node_type if node_type in TYPE_DECLARATIONS | NAMED_DECLARATIONS:
                name_node = node.child_by_field_name("name")
                if name_node is None:
                    if strict:
                        raise UnsupportedConstructError(tree.file_path, f"{node_type} without a name")
                    return []
                return [(tree.text(name_node), node_type in TYPE_DECLARATIONS, node.start_byte)]
            case node_type if node_type in NAMED_EXPRESSIONS:
                name_node = node.child_by_field_name("name")
                if name_node is None:
                    return []
                return [(tree.text(name_node), False, node.start_byte)]
            case node_type if node_type in VARIABLE_DECLARATIONS:
                names = []
                for declarator in node.named_children:
                    if declarator.type != "variable_declarator":
                        continue
                    pattern = declarator.child_by_field_name("name")
                    names.extend(
                        (tree.text(ident), False, ident.start_byte)
                        for ident in self._pattern_identifiers(pattern)
                    )
                return names
            case node_type if node_type in MODULE_DECLARATIONS:
                name_node = node.child_by_field_name("name")
                if name_node is None or name_node.type == "string":
                    if strict:
                        raise UnsupportedConstructError(tree.file_path, f"ambient module: {tree.text(node)}")
                    return []
                # `namespace A.B {}` binds A
                return [(tree.text(name_node).split(".")[0], False, node.start_byte)]
            case "ambient_declaration":
                names = []
                for child in node.named_children:
                    if child.type in LOCAL_DECLARATIONS:
                        names.extend(self.declared_names(tree, child, strict))
                return names
            case _:
                if strict:
                    raise UnsupportedConstructError(tree.file_path, f"exported {node.type}")
                return []

    def _pattern_identifiers(self, pattern: Any) -> List[Any]:
        """Identifier nodes bound by a variable name or destructuring pattern."""
        if pattern is None:
            return []
        match pattern.type:
            case "identifier" | "shorthand_property_identifier_pattern":
                return [pattern]
            case "pair_pattern":
                return self._pattern_identifiers(pattern.child_by_field_name("value"))
            case "assignment_pattern" | "object_assignment_pattern":
                return self._pattern_identifiers(pattern.child_by_field_name("left"))
            case "object_pattern" | "array_pattern" | "rest_pattern":
                found = []
                for child in pattern.named_children:
                    found.extend(self._pattern_identifiers(child))
                return found
            case _:
                return []

    # ------------------------------------------------------------------
    # Phase 2
    # ------------------------------------------------------------------

    def _collect_bindings(
        self,
        tree: SyntaxTree,
        imports: List[Any],
        declarations: List[Any],
    ) -> Dict[str, LocalBinding]:
        bindings: Dict[str, LocalBinding] = {}

        for node in imports:
            source = source_node(node)
            clause = next((c for c in node.named_children if c.type == "import_clause"), None)
            if source is None or clause is None:
                continue
            specifier = module_name(tree, source)
            statement_type_only = has_type_modifier(node)

            for child in clause.named_children:
                match child.type:
                    case "identifier":
                        bindings[tree.text(child)] = LocalBinding(
                            BindingKind.IMPORT_DEFAULT, statement_type_only, specifier, DEFAULT_EXPORT_NAME,
                        )
                    case "namespace_import":
                        ident = next((c for c in child.named_children if c.type == "identifier"), None)
                        if ident is not None:
                            bindings[tree.text(ident)] = LocalBinding(
                                BindingKind.IMPORT_NAMESPACE, statement_type_only, specifier,
                            )
                    case "named_imports":
                        for spec in child.named_children:
                            if spec.type != "import_specifier":
                                continue
                            imported, local = self._specifier_names(tree, spec)
                            bindings[local] = LocalBinding(
                                BindingKind.IMPORT_NAMED,
                                statement_type_only or has_type_modifier(spec),
                                specifier,
                                imported,
                            )
                    case _:
                        pass

        for node in declarations:
            for name, type_only, _ in self.declared_names(tree, node):
                existing = bindings.get(name)
                if existing is not None and existing.kind == BindingKind.DECLARATION:
                    # A name declared as both a type and a value is a value
                    existing.type_only = existing.type_only and type_only
                elif existing is None:
                    bindings[name] = LocalBinding(BindingKind.DECLARATION, type_only)

        return bindings

    @staticmethod
    def _bind_pending(
        pending: List[PendingExport],
        bindings: Dict[str, LocalBinding],
        definitions: List[ExportDefinition],
        re_exports: List[ReExportEdge],
    ) -> List[PendingExport]:
        """Consume pending exports that match a binding; return the unmatched ones."""
        remaining = dict(enumerate(pending))

        for index, entry in list(remaining.items()):
            binding = bindings.get(entry.local_name)
            if binding is None:
                continue
            type_only = binding.type_only or entry.type_only

            match binding.kind:
                case BindingKind.IMPORT_DEFAULT:
                    re_exports.append(ReExportEdge(
                        kind=ExportKind.DEFAULT,
                        specifier=binding.specifier,
                        imported_name=DEFAULT_EXPORT_NAME,
                        exported_name=entry.exported_name,
                        type_only=type_only,
                        position=entry.position,
                    ))
                case BindingKind.IMPORT_NAMED:
                    re_exports.append(ReExportEdge(
                        kind=(
                            ExportKind.DEFAULT
                            if binding.imported_name == DEFAULT_EXPORT_NAME
                            else ExportKind.NAMED
                        ),
                        specifier=binding.specifier,
                        imported_name=binding.imported_name,
                        exported_name=entry.exported_name,
                        type_only=type_only,
                        position=entry.position,
                    ))
                case BindingKind.IMPORT_NAMESPACE:
                    re_exports.append(ReExportEdge(
                        kind=ExportKind.NAMESPACE,
                        specifier=binding.specifier,
                        exported_name=entry.exported_name,
                        type_only=type_only,
                        position=entry.position,
                    ))
                case BindingKind.DECLARATION:
                    is_default = entry.exported_name == DEFAULT_EXPORT_NAME
                    definitions.append(ExportDefinition(
                        kind=ExportKind.DEFAULT if is_default else ExportKind.NAMED,
                        name=None if is_default else entry.exported_name,
                        type_only=type_only,
                        position=entry.position,
                        local_name=entry.local_name,
                    ))
            del remaining[index]

        return list(remaining.values())
