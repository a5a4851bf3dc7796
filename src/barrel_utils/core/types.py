"""
Core type definitions for barrel-file-utils.

Records produced while analyzing a module's export surface and while
resolving it down to the modules that define each symbol.
"""

from enum import StrEnum
from typing import List

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_EXPORT_NAME = "default"


class ExportKind(StrEnum):
    """Kinds of export items."""
    NAMED = "named"
    DEFAULT = "default"
    WILDCARD = "wildcard"
    NAMESPACE = "namespace"


class ExportDefinition(BaseModel):
    """
    A symbol whose defining declaration lives in the module.

    `name` is None for default exports. `local_name` is the local binding
    when the symbol was exported through a specifier list
    (`export { add as renamedAdd }`), None for inline declarations.
    """
    kind: ExportKind
    name: str | None = None
    type_only: bool = False
    position: int = 0
    local_name: str | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def export_name(self) -> str:
        """Name the definition is reachable under from other modules."""
        return DEFAULT_EXPORT_NAME if self.kind == ExportKind.DEFAULT else self.name

    def matches(self, name: str) -> bool:
        return self.export_name == name


class ReExportEdge(BaseModel):
    """
    An outbound re-export of the module.

    `specifier` is kept exactly as written. Wildcard edges carry no names;
    default edges import the `default` slot of their target.
    """
    kind: ExportKind
    specifier: str
    imported_name: str | None = None
    exported_name: str | None = None
    type_only: bool = False
    position: int = 0

    model_config = ConfigDict(frozen=True)


class ModuleExports(BaseModel):
    """The full export surface of one module before resolution."""
    definitions: List[ExportDefinition] = Field(default_factory=list)
    re_exports: List[ReExportEdge] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    def items(self) -> List[ExportDefinition | ReExportEdge]:
        """Definitions and re-exports interleaved in source order."""
        return sorted([*self.definitions, *self.re_exports], key=lambda item: item.position)

    def wildcards(self) -> List[ReExportEdge]:
        return [e for e in self.re_exports if e.kind == ExportKind.WILDCARD]

    def find_definitions(self, name: str) -> List[ExportDefinition]:
        return [d for d in self.definitions if d.matches(name)]

    def find_re_export(self, name: str) -> ReExportEdge | None:
        """First non-wildcard re-export published under `name`."""
        for edge in self.re_exports:
            if edge.kind != ExportKind.WILDCARD and edge.exported_name == name:
                return edge
        return None

    @property
    def is_empty(self) -> bool:
        return not self.definitions and not self.re_exports


class ResolvedExport(BaseModel):
    """
    Terminal result of following one export item to its defining module.

    `origin_module` is a canonical absolute path, or the specifier itself for
    external packages. Wildcard entries are external wildcards passed through
    unexpanded.

    `inline` marks a module's own inline declaration (`export function f`),
    whose statement already exports it under its own name.
    """
    exported_name: str
    origin_module: str
    origin_name: str
    type_only: bool = False
    kind: ExportKind = ExportKind.NAMED
    external: bool = False
    local_name: str | None = None
    inline: bool = False

    model_config = ConfigDict(frozen=True)

    def differs_only_in_type(self, other: "ResolvedExport") -> bool:
        return (
            self.kind == other.kind
            and self.origin_module == other.origin_module
            and self.origin_name == other.origin_name
            and self.type_only != other.type_only
        )


class ExportGroup(BaseModel):
    """Resolved exports sharing one origin; rendered as one statement."""
    origin_module: str
    external: bool = False
    kind: ExportKind = ExportKind.NAMED
    exports: List[ResolvedExport] = Field(default_factory=list)
