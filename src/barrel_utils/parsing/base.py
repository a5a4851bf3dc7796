"""
Base Parser Infrastructure.

Defines the parser interface used by the analyzer and the SyntaxTree
container that keeps a parsed tree together with the bytes it was parsed
from (node offsets are byte offsets into that buffer).
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List

from ..core.errors import ParseError

logger = logging.getLogger(__name__)


class ParserContext:
    """Context passed to parsers."""

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding


@dataclass(frozen=True)
class SyntaxTree:
    """A parsed module."""

    file_path: Path
    source: bytes
    tree: Any
    is_markup: bool = False

    @property
    def root(self) -> Any:
        return self.tree.root_node

    def text(self, node: Any) -> str:
        """Source text of a node."""
        return self.source[node.start_byte:node.end_byte].decode("utf-8")


class ModuleParser(ABC):
    """
    Abstract Base Class for module parsers.
    """

    def __init__(self, context: ParserContext | None = None):
        self.context = context or ParserContext()
        self._logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    @property
    def extensions(self) -> List[str]:
        return []

    def can_parse(self, file_path: Path) -> bool:
        return file_path.suffix.lower() in self.extensions

    @abstractmethod
    def parse(self, source: bytes, is_markup: bool = False, file_path: Path | None = None) -> SyntaxTree:
        """Parse source bytes; raise ParseError on invalid syntax."""

    def parse_file(self, file_path: Path) -> SyntaxTree:
        """Read and parse a file."""
        try:
            source = file_path.read_bytes()
        except OSError as e:
            raise ParseError(file_path, f"cannot read file: {e}") from e

        try:
            source.decode(self.context.encoding)
        except UnicodeDecodeError as e:
            raise ParseError(file_path, f"not valid {self.context.encoding}") from e

        return self.parse(source, is_markup=self.is_markup(file_path), file_path=file_path)

    def is_markup(self, file_path: Path) -> bool:
        return False
