"""
barrel-file-utils - Flatten JavaScript/TypeScript barrel files.

Rewrites a barrel module so that every export statement points directly at
the module defining the symbol, and every `export *` is expanded into an
explicit list of named exports.

Key Components:
- parsing: tree-sitter based export extraction
- graph: Recursive export resolution
- codegen: Export statement generation and file rewriting
- analysis: Barrel file diagnostics

Usage:
    from barrel_utils.engine import UnbarrelEngine

    result = UnbarrelEngine().unbarrel(Path("src/index.ts"))
"""

__version__ = "1.0.0"

from .core.types import (
    ExportDefinition, ExportGroup, ExportKind,
    ModuleExports, ReExportEdge, ResolvedExport,
)

__all__ = [
    "__version__",
    "ExportKind",
    "ExportDefinition",
    "ReExportEdge",
    "ModuleExports",
    "ResolvedExport",
    "ExportGroup",
]
