"""
TypeScript/JavaScript Parser for barrel-file-utils.

Wraps tree-sitter with the TypeScript grammars. The TypeScript grammar is
used for every file, so type annotations are accepted in `.js` files too;
`.tsx` and `.jsx` files use the TSX grammar.
"""

import logging
from pathlib import Path
from typing import List

import tree_sitter as ts
import tree_sitter_typescript as tsts

from ...config import MARKUP_EXTENSIONS, SOURCE_EXTENSIONS
from ...core.errors import ParseError
from ..base import ModuleParser, ParserContext, SyntaxTree

logger = logging.getLogger(__name__)

TS_LANGUAGE = ts.Language(tsts.language_typescript())
TSX_LANGUAGE = ts.Language(tsts.language_tsx())


def _first_error(node) -> "ts.Node | None":
    """Depth-first search for the first ERROR or MISSING node."""
    if node.type == "ERROR" or node.is_missing:
        return node
    for child in node.children:
        if child.has_error:
            found = _first_error(child)
            if found is not None:
                return found
    return None


class TypeScriptParser(ModuleParser):
    """
    tree-sitter parser for TypeScript and JavaScript modules.

    Parsers are created lazily, one per grammar, and reused.
    """

    def __init__(self, context: ParserContext | None = None):
        super().__init__(context)
        self._parsers: dict[bool, ts.Parser] = {}

    @property
    def name(self) -> str:
        return "typescript"

    @property
    def extensions(self) -> List[str]:
        return list(SOURCE_EXTENSIONS)

    def is_markup(self, file_path: Path) -> bool:
        return file_path.suffix.lower() in MARKUP_EXTENSIONS

    def _get_parser(self, is_markup: bool) -> ts.Parser:
        parser = self._parsers.get(is_markup)
        if parser is None:
            parser = ts.Parser(TSX_LANGUAGE if is_markup else TS_LANGUAGE)
            self._parsers[is_markup] = parser
        return parser

    def parse(self, source: bytes, is_markup: bool = False, file_path: Path | None = None) -> SyntaxTree:
        tree = self._get_parser(is_markup).parse(source)
        label = file_path if file_path is not None else "<source>"

        if tree.root_node.has_error:
            error_node = _first_error(tree.root_node)
            if error_node is not None:
                row, column = error_node.start_point
                detail = f"syntax error at line {row + 1}, column {column + 1}"
            else:
                detail = "syntax error"
            raise ParseError(label, detail)

        self._logger.debug(f"Parsed {label} ({'tsx' if is_markup else 'typescript'})")
        return SyntaxTree(
            file_path=Path(file_path) if file_path is not None else Path(label),
            source=source,
            tree=tree,
            is_markup=is_markup,
        )
