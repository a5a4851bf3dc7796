"""Code generation for rewritten barrel files."""

from .printer import ExportPrinter, ExportSpecifierNode, ExportStatementNode, StatementKind
from .rewriter import Rewriter

__all__ = [
    "ExportPrinter",
    "ExportSpecifierNode",
    "ExportStatementNode",
    "Rewriter",
    "StatementKind",
]
