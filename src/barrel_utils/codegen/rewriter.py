"""
Barrel File Rewriter.

Turns resolved export groups into export statements and splices them into
the root module in place of its original re-export statements. Inline
declarations, imports, empty `export {}` statements and all other code are
kept as written. Modules reached through the graph are never edited.
"""

import logging
from pathlib import Path
from typing import List, Tuple

from ..config import UnbarrelConfig
from ..core.path_resolver import PathResolver
from ..core.types import ExportGroup, ExportKind
from ..parsing.typescript.analyzer import ModuleScan, StatementSpan
from .printer import ExportPrinter, ExportSpecifierNode, ExportStatementNode, StatementKind

logger = logging.getLogger(__name__)


class Rewriter:
    """
    Renders export groups and rewrites the root module's source.

    Example:
        ```python
        rewriter = Rewriter()
        statements = rewriter.render(groups, root)
        new_source = rewriter.rewrite(scan, statements)
        ```
    """

    def __init__(self, path_resolver: PathResolver | None = None, config: UnbarrelConfig | None = None):
        self.config = config or UnbarrelConfig()
        self.path_resolver = path_resolver or PathResolver(self.config)
        self.printer = ExportPrinter(self.config.quote_style)

    def render(self, groups: List[ExportGroup], root: Path) -> List[ExportStatementNode]:
        """One statement per group, in group order."""
        statements: List[ExportStatementNode] = []

        for group in groups:
            match group.kind:
                case ExportKind.WILDCARD:
                    statements.append(ExportStatementNode(
                        kind=StatementKind.WILDCARD,
                        source=self._source(group, root),
                        type_only=all(e.type_only for e in group.exports),
                    ))
                case ExportKind.NAMESPACE:
                    entry = group.exports[0]
                    statements.append(ExportStatementNode(
                        kind=StatementKind.NAMESPACE,
                        source=self._source(group, root),
                        namespace=entry.exported_name,
                        type_only=entry.type_only,
                    ))
                case _:
                    statements.extend(self._render_named(group, root))

        return statements

    def _render_named(self, group: ExportGroup, root: Path) -> List[ExportStatementNode]:
        if group.external or Path(group.origin_module) != root:
            specifiers = tuple(
                ExportSpecifierNode(e.origin_name, e.exported_name, e.type_only) for e in group.exports
            )
            return [ExportStatementNode(
                kind=StatementKind.NAMED, source=self._source(group, root), specifiers=specifiers,
            )]

        local_specifiers = []
        # Names with no local binding (an inline `export default`) are
        # re-exported from the root module itself
        self_specifiers = []
        for export in group.exports:
            # Inline declarations of the root stay where they are
            if export.inline:
                continue
            if export.local_name is None:
                self_specifiers.append(ExportSpecifierNode(export.origin_name, export.exported_name, export.type_only))
            else:
                local_specifiers.append(ExportSpecifierNode(export.local_name, export.exported_name, export.type_only))

        statements = []
        if local_specifiers:
            statements.append(ExportStatementNode(
                kind=StatementKind.NAMED, source=None, specifiers=tuple(local_specifiers),
            ))
        if self_specifiers:
            statements.append(ExportStatementNode(
                kind=StatementKind.NAMED, source=self._source(group, root), specifiers=tuple(self_specifiers),
            ))
        return statements

    def _source(self, group: ExportGroup, root: Path) -> str:
        if group.external:
            return group.origin_module
        return self.path_resolver.relative_specifier(Path(group.origin_module), root.parent)

    def rewrite(self, scan: ModuleScan, statements: List[ExportStatementNode]) -> str:
        """
        New source text of the scanned module.

        The generated block takes the place of the first re-export
        statement; the other re-export statements are removed together with
        their line when they stand alone on it.
        """
        source = scan.source
        spans = scan.re_export_statements
        if not spans:
            return source.decode("utf-8")

        block = self.printer.print(statements).encode("utf-8")

        if self._only_re_exports(source, spans):
            trailer = b"\n" if source.endswith(b"\n") and block else b""
            return (block + trailer).decode("utf-8")

        pieces: List[bytes] = []
        cursor = 0
        for index, span in enumerate(spans):
            start, end, whole_line = self._removal_range(source, span)
            pieces.append(source[cursor:start])
            if index == 0 and block:
                indent = source[start:span.start_byte] if whole_line else b""
                newline = b"\n" if whole_line and source[end - 1:end] == b"\n" else b""
                pieces.append(indent + block + newline)
            cursor = end
        pieces.append(source[cursor:])

        return b"".join(pieces).decode("utf-8")

    @staticmethod
    def _only_re_exports(source: bytes, spans: List[StatementSpan]) -> bool:
        cursor = 0
        for span in spans:
            if source[cursor:span.start_byte].strip():
                return False
            cursor = span.end_byte
        return not source[cursor:].strip()

    @staticmethod
    def _removal_range(source: bytes, span: StatementSpan) -> Tuple[int, int, bool]:
        """(start, end, whole_line) of the bytes to drop for a statement."""
        line_start = source.rfind(b"\n", 0, span.start_byte) + 1
        line_end = source.find(b"\n", span.end_byte)
        line_end = len(source) if line_end == -1 else line_end + 1

        before = source[line_start:span.start_byte]
        after = source[span.end_byte:line_end]
        if before.strip() or after.strip():
            return span.start_byte, span.end_byte, False
        return line_start, line_end, True
