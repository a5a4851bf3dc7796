"""
Parsing module for barrel-file-utils.

Key Components:
- ModuleParser: Abstract base class for module parsers
- TypeScriptParser: tree-sitter parser for .ts/.tsx/.js/.jsx
- ModuleAnalyzer: Extracts a module's definitions and re-exports
"""

from .base import ModuleParser, ParserContext, SyntaxTree
from .typescript import (
    ModuleAnalyzer,
    ModuleScan,
    TypeScriptParser,
)

__all__ = [
    "ModuleParser",
    "ParserContext",
    "SyntaxTree",
    "TypeScriptParser",
    "ModuleAnalyzer",
    "ModuleScan",
]
