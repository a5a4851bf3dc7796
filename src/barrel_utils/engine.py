"""
Unbarrel Engine.

Orchestrates one unbarrel run: analyze the root module, resolve every export
to its defining module, render the flattened export statements and write
them back into the root file.

Failures are returned as Err values instead of being raised, so callers
(the CLI, editor integrations) decide how to report them. The root file is
only written after every export resolved.
"""

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from .codegen.rewriter import Rewriter
from .config import UnbarrelConfig
from .core.errors import BarrelError
from .core.path_resolver import PathResolver
from .core.result import Err, Ok, Result
from .core.types import ExportGroup
from .graph.resolver import ExportGraphResolver
from .parsing.typescript.analyzer import ModuleAnalyzer

logger = logging.getLogger(__name__)


@dataclass
class UnbarrelReport:
    root_file: Path
    output: str
    changed: bool = False
    written: bool = False
    groups: List[ExportGroup] = field(default_factory=list)
    modules_analyzed: int = 0
    elapsed_ms: float = 0.0

    @property
    def export_count(self) -> int:
        return sum(len(g.exports) for g in self.groups)


@dataclass
class UnbarrelFailure:
    """Structured error for unbarrel runs."""
    message: str
    file_path: str | None = None
    cause: Exception | None = None


class UnbarrelEngine:
    """
    Runs unbarrel on a root module.

    Example:
        ```python
        result = UnbarrelEngine().unbarrel(Path("src/index.ts"))
        if result.is_ok():
            print(result.unwrap().output)
        ```
    """

    def __init__(self, config: UnbarrelConfig | None = None):
        self.config = config or UnbarrelConfig()
        self._logger = logging.getLogger(f"{__name__}.UnbarrelEngine")

    def unbarrel(self, root_file: Path, dry_run: bool = False) -> Result[UnbarrelReport, UnbarrelFailure]:
        """
        Flatten the exports of `root_file`.

        Returns Ok(UnbarrelReport) or Err(UnbarrelFailure). With `dry_run`
        the new source is computed but never written.
        """
        start_time = time.perf_counter()

        path_resolver = PathResolver(self.config)
        analyzer = ModuleAnalyzer()
        resolver = ExportGraphResolver(analyzer, path_resolver, self.config)
        rewriter = Rewriter(path_resolver, self.config)

        try:
            root = path_resolver.resolve_file(root_file)
            scan = analyzer.scan(root)
            resolver.prime(root, scan.exports)

            groups = resolver.resolve_root(root)
            statements = rewriter.render(groups, root)
            output = rewriter.rewrite(scan, statements)
        except BarrelError as e:
            self._logger.debug(f"Unbarrel of {root_file} failed: {e}")
            return Err(UnbarrelFailure(e.message, str(root_file), cause=e))

        report = UnbarrelReport(
            root_file=root,
            output=output,
            changed=output.encode("utf-8") != scan.source,
            groups=groups,
            modules_analyzed=resolver.modules_analyzed,
        )

        if report.changed and not dry_run:
            try:
                root.write_bytes(output.encode("utf-8"))
            except OSError as e:
                return Err(UnbarrelFailure(f"Failed to write {root}: {e}", str(root), cause=e))
            report.written = True
            logger.info(f"Rewrote {root} ({report.export_count} exports from {len(groups)} modules)")
        elif not report.changed:
            logger.info(f"{root} is already flat")

        report.elapsed_ms = (time.perf_counter() - start_time) * 1000
        return Ok(report)


def unbarrel(root_file: Path, config: UnbarrelConfig | None = None, dry_run: bool = False) -> str:
    """Convenience wrapper: run unbarrel and return the new source, raising on failure."""
    result = UnbarrelEngine(config).unbarrel(Path(root_file), dry_run=dry_run)
    if result.is_err():
        failure = result.unwrap_err()
        raise failure.cause if failure.cause is not None else BarrelError(failure.message)
    return result.unwrap().output
