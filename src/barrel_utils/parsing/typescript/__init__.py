"""
JavaScript/TypeScript parsing module.

Usage:
    from barrel_utils.parsing.typescript import ModuleAnalyzer

    exports = ModuleAnalyzer().analyze(Path("src/index.ts"))
"""

from .analyzer import ModuleAnalyzer, ModuleScan
from .parser import TypeScriptParser

__all__ = [
    "ModuleAnalyzer",
    "ModuleScan",
    "TypeScriptParser",
]
