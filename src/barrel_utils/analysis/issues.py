"""
Barrel File Diagnostics.

Reports how a module depends on barrel files without rewriting anything:

- find_barrel_issues: `export *` statements in the file, and named
  re-exports that point at another internal barrel instead of the
  defining module.
- find_barrel_references: internal modules re-exported by the file that
  themselves re-export from internal modules.

External packages are never reported.
"""

import logging
from pathlib import Path
from typing import List, Literal, Union

from pydantic import BaseModel

from ..core.imports import convert_absolute_path_to_relative_import_path, is_internal_module
from ..core.path_resolver import PathResolver
from ..core.types import ExportKind, ModuleExports
from ..parsing.typescript.analyzer import ModuleAnalyzer

logger = logging.getLogger(__name__)


class ExportAllIssue(BaseModel):
    """The module contains an `export *`, which makes it a barrel file."""
    type: Literal["exportAll"] = "exportAll"
    barrel_file_path: str


class BarrelReferenceIssue(BaseModel):
    """A named re-export goes through another internal barrel file."""
    type: Literal["barrelFileReference"] = "barrelFileReference"
    exported_name: str
    barrel_file_path: str


class BarrelReference(BaseModel):
    barrel_file_path: str


BarrelIssue = Union[ExportAllIssue, BarrelReferenceIssue]


class BarrelAnalyzer:
    """
    Inspects the re-exports of a single module.

    Every module is analyzed at most once per BarrelAnalyzer.
    """

    def __init__(self, analyzer: ModuleAnalyzer | None = None, path_resolver: PathResolver | None = None):
        self.analyzer = analyzer or ModuleAnalyzer()
        self.path_resolver = path_resolver or PathResolver()
        self._cache: dict[Path, ModuleExports] = {}

    def _exports_of(self, module: Path) -> ModuleExports:
        if module not in self._cache:
            self._cache[module] = self.analyzer.analyze(module)
        return self._cache[module]

    def issues(self, file_path: Path) -> List[BarrelIssue]:
        module = self.path_resolver.resolve_file(file_path)
        exports = self._exports_of(module)
        result: List[BarrelIssue] = []

        for edge in exports.re_exports:
            if edge.kind == ExportKind.WILDCARD:
                result.append(ExportAllIssue(barrel_file_path=str(file_path)))
                continue
            if not is_internal_module(edge.specifier) or edge.kind == ExportKind.NAMESPACE:
                continue

            target = self.path_resolver.resolve(edge.specifier, module.parent)
            target_exports = self._exports_of(target)
            if target_exports.find_definitions(edge.imported_name):
                continue

            # Names provided by an external package are not barrel references
            forwarded = target_exports.find_re_export(edge.imported_name)
            if forwarded is not None:
                through_barrel = is_internal_module(forwarded.specifier)
            else:
                through_barrel = any(is_internal_module(w.specifier) for w in target_exports.wildcards())

            if through_barrel:
                logger.debug(f"'{edge.exported_name}' in {module} goes through barrel {target}")
                result.append(BarrelReferenceIssue(
                    exported_name=edge.exported_name,
                    barrel_file_path=convert_absolute_path_to_relative_import_path(target, module.parent),
                ))

        return result

    def references(self, file_path: Path) -> List[BarrelReference]:
        module = self.path_resolver.resolve_file(file_path)
        exports = self._exports_of(module)
        result: List[BarrelReference] = []
        seen = set()

        for edge in exports.re_exports:
            if not is_internal_module(edge.specifier):
                continue
            target = self.path_resolver.resolve(edge.specifier, module.parent)
            if target in seen:
                continue
            seen.add(target)

            if any(is_internal_module(e.specifier) for e in self._exports_of(target).re_exports):
                result.append(BarrelReference(
                    barrel_file_path=convert_absolute_path_to_relative_import_path(target, module.parent),
                ))

        return result


def find_barrel_issues(file_path: Path) -> List[BarrelIssue]:
    """Barrel file issues of a module, in statement order."""
    return BarrelAnalyzer().issues(Path(file_path))


def find_barrel_references(file_path: Path) -> List[BarrelReference]:
    """Internal barrel files re-exported by a module, one entry per barrel."""
    return BarrelAnalyzer().references(Path(file_path))
