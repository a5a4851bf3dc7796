"""
Core modules for barrel-file-utils.

This package contains the fundamental building blocks:
- types: Export records (definitions, re-export edges, resolved exports)
- errors: The BarrelError hierarchy
- result: Ok/Err result type
- path_resolver: Specifier to module identity resolution
"""

from .errors import (
    AmbiguousReExportError,
    BarrelError,
    ConfigError,
    ParseError,
    UnresolvedExportError,
    UnresolvedModuleError,
    UnsupportedConstructError,
)
from .result import Err, Ok, Result
from .types import (
    ExportDefinition,
    ExportGroup,
    ExportKind,
    ModuleExports,
    ReExportEdge,
    ResolvedExport,
)

__all__ = [
    # Errors
    "BarrelError", "ParseError", "UnresolvedModuleError", "UnresolvedExportError",
    "AmbiguousReExportError", "UnsupportedConstructError", "ConfigError",
    # Result
    "Ok", "Err", "Result",
    # Types
    "ExportKind", "ExportDefinition", "ReExportEdge", "ModuleExports",
    "ResolvedExport", "ExportGroup",
]
