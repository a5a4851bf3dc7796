"""
Module Path Resolver.

Turns an import specifier into the canonical file it refers to, following a
fixed probe order:

    1. The literal path, if it is an existing file
    2. The literal path plus each source extension (.ts, .tsx, .js, .jsx)
    3. If the path is a directory, index + each source extension inside it

Each candidate is checked explicitly and yields an Ok/Err result; the first
Ok wins.
"""

import logging
import posixpath
from pathlib import Path
from typing import Iterator

from ..config import UnbarrelConfig
from .errors import UnresolvedModuleError
from .imports import convert_absolute_path_to_relative_import_path
from .result import Err, Ok, Result, first_ok

logger = logging.getLogger(__name__)


def _check_file(candidate: Path) -> Result[Path, Path]:
    if candidate.is_file():
        return Ok(candidate.resolve())
    return Err(candidate)


class PathResolver:
    """
    Resolves specifiers to canonical module identities.

    Identities are absolute paths with symlinks and '..' segments resolved,
    so two spellings of the same module compare equal.
    """

    def __init__(self, config: UnbarrelConfig | None = None):
        self.config = config or UnbarrelConfig()

    def candidates(self, specifier: str, from_dir: Path) -> Iterator[Path]:
        """Yield candidate files in probe order."""
        base = from_dir / specifier
        yield base
        # '.', '..' and 'dir/' can only name a directory
        last_segment = specifier.rstrip("/").rsplit("/", 1)[-1]
        if not specifier.endswith("/") and last_segment not in (".", ".."):
            for ext in self.config.extensions:
                yield base.with_name(base.name + ext)
        if base.is_dir():
            for index_file in self.config.index_files:
                yield base / index_file

    def probe(self, specifier: str, from_dir: Path) -> Result[Path, UnresolvedModuleError]:
        """Resolve without raising; returns Err(UnresolvedModuleError) when nothing matches."""
        result = first_ok(
            (_check_file(candidate) for candidate in self.candidates(specifier, from_dir)),
            default=Err(UnresolvedModuleError(specifier, from_dir)),
        )
        if result.is_ok():
            logger.debug(f"Resolved '{specifier}' from {from_dir} -> {result.unwrap()}")
        return result

    def resolve(self, specifier: str, from_dir: Path) -> Path:
        """Resolve or raise UnresolvedModuleError."""
        return self.probe(specifier, from_dir).unwrap()

    def resolve_file(self, file_path: Path) -> Path:
        """Canonicalize a path given directly (e.g. the CLI's root file)."""
        file_path = Path(file_path)
        return self.resolve(file_path.name, file_path.parent.absolute())

    def relative_specifier(self, target: Path, from_dir: Path) -> str:
        """
        Shortest relative specifier from `from_dir` that resolves back to `target`.

        Tries, in order: extension and trailing /index dropped, extension
        dropped, the full file name.
        """
        full = convert_absolute_path_to_relative_import_path(target, from_dir)
        stem, ext = posixpath.splitext(full)
        forms = []
        if posixpath.basename(stem) == "index" and ext in self.config.extensions:
            parent = posixpath.dirname(stem)
            forms.append(parent if parent not in ("", ".") else ".")
        forms.extend([stem, full])

        for form in forms:
            result = self.probe(form, from_dir)
            if result.is_ok() and result.unwrap() == target:
                return form
        return full
