"""
Export Statement Printer.

A minimal code generator for the export statements produced by the
rewriter. Output is deterministic; the quote character used for module
specifiers is configurable.
"""

import re
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Iterable, Tuple

IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


class StatementKind(StrEnum):
    NAMED = "named"
    WILDCARD = "wildcard"
    NAMESPACE = "namespace"


@dataclass(frozen=True)
class ExportSpecifierNode:
    """`local as exported`, or just `local` when both names match."""
    local: str
    exported: str
    type_only: bool = False


@dataclass(frozen=True)
class ExportStatementNode:
    """
    One generated export statement.

    NAMED statements without a source re-export local bindings.
    """
    kind: StatementKind
    source: str | None = None
    specifiers: Tuple[ExportSpecifierNode, ...] = field(default_factory=tuple)
    namespace: str | None = None
    type_only: bool = False


class ExportPrinter:
    """Renders ExportStatementNodes to source text."""

    def __init__(self, quote_style: str = "single"):
        self.quote = "'" if quote_style == "single" else '"'

    def print(self, statements: Iterable[ExportStatementNode]) -> str:
        """Render statements one per line (no trailing newline)."""
        return "\n".join(self.print_statement(s) for s in statements)

    def print_statement(self, statement: ExportStatementNode) -> str:
        type_prefix = "type " if statement.type_only else ""

        match statement.kind:
            case StatementKind.WILDCARD:
                return f"export {type_prefix}* from {self.string(statement.source)};"
            case StatementKind.NAMESPACE:
                return (
                    f"export {type_prefix}* as {self.name(statement.namespace)} "
                    f"from {self.string(statement.source)};"
                )
            case StatementKind.NAMED:
                body = ", ".join(self.print_specifier(s) for s in statement.specifiers)
                text = f"export {{ {body} }}" if body else "export {}"
                if statement.source is not None:
                    text += f" from {self.string(statement.source)}"
                return text + ";"

    def print_specifier(self, specifier: ExportSpecifierNode) -> str:
        prefix = "type " if specifier.type_only else ""
        if specifier.local == specifier.exported:
            return prefix + self.name(specifier.local)
        return f"{prefix}{self.name(specifier.local)} as {self.name(specifier.exported)}"

    def name(self, value: str) -> str:
        """Module export names that are not identifiers are written as strings."""
        if IDENTIFIER_PATTERN.match(value):
            return value
        return self.string(value)

    def string(self, value: str) -> str:
        escaped = value.replace("\\", "\\\\").replace(self.quote, "\\" + self.quote)
        return f"{self.quote}{escaped}{self.quote}"
