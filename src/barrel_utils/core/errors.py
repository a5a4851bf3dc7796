"""
Error types for barrel-file-utils.

Every failure of an unbarrel run is a BarrelError. They are all terminal for
the current invocation: the engine never writes a partially resolved file.
"""

from pathlib import Path
from typing import Iterable, Sequence, Tuple


class BarrelError(Exception):
    """
    Base class for all resolution and rewriting failures.

    Attributes:
        message: Human-readable error message.
    """

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ParseError(BarrelError):
    """Raised when a module's source cannot be parsed."""

    def __init__(self, file_path: Path | str, detail: str = "invalid syntax"):
        self.file_path = str(file_path)
        self.detail = detail
        super().__init__(f"Failed to parse file: {self.file_path} ({detail})")


class UnresolvedModuleError(BarrelError):
    """Raised when a specifier does not resolve to any file."""

    def __init__(self, specifier: str, from_dir: Path | str):
        self.specifier = specifier
        self.from_dir = str(from_dir)
        super().__init__(f"Could not resolve module '{specifier}' from {self.from_dir}")


class UnresolvedExportError(BarrelError):
    """
    Raised when exported names cannot be located.

    Either a source-less export references local names with no matching
    import or declaration, or a re-exported name is not exported by its
    target module.
    """

    def __init__(self, module: Path | str, names: Iterable[str]):
        self.module = str(module)
        self.names = list(names)
        joined = ", ".join(self.names)
        super().__init__(f"Could not find export(s) {joined} in {self.module}")


class AmbiguousReExportError(BarrelError):
    """Raised when following a re-export chain loops, exceeds the depth limit, or has no single origin."""

    def __init__(
        self,
        module: Path | str,
        name: str,
        chain: Sequence[Tuple[str, str]] = (),
        reason: str = "cyclic re-export",
    ):
        self.module = str(module)
        self.name = name
        self.chain = list(chain)
        self.reason = reason
        hops = " -> ".join(f"{m}#{n}" for m, n in self.chain)
        message = f"{reason.capitalize()} of '{name}' in {self.module}"
        if hops:
            message += f" (via {hops})"
        super().__init__(message)


class UnsupportedConstructError(BarrelError):
    """Raised for export syntax outside the supported subset."""

    def __init__(self, file_path: Path | str, construct: str):
        self.file_path = str(file_path)
        self.construct = construct
        super().__init__(f"Unsupported construct in {self.file_path}: {construct}")


class ConfigError(BarrelError):
    """Raised when a configuration file is invalid."""

    def __init__(self, config_path: str, detail: str):
        self.config_path = config_path
        super().__init__(f"Invalid config {config_path}: {detail}")
