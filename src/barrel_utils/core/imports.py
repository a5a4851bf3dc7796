"""
Import specifier utilities.

Helpers for classifying specifiers and turning filesystem paths into
ESM import specifiers.
"""

import os
import posixpath
from pathlib import Path


def normalize_to_posix_path(file_path: str) -> str:
    """Replace platform separators with POSIX ones so the path can be used as a specifier."""
    return file_path.replace(os.sep, posixpath.sep)


def is_internal_module(specifier: str) -> bool:
    """
    Return True for relative specifiers such as './foo' or '../bar'.

    Bare specifiers ('react', 'react-dom/client', '@scope/pkg') are external
    packages and are never descended into.
    """
    return specifier.startswith(".")


def convert_to_esm_import_path(relative_path: str) -> str:
    """Convert a relative filesystem path such as 'foo/bar' into './foo/bar'."""
    normalized = normalize_to_posix_path(relative_path)
    if normalized.startswith("."):
        return normalized
    return "./" + normalized


def convert_absolute_path_to_relative_import_path(absolute_path: Path, base_dir: Path) -> str:
    """
    Convert an absolute path into a relative ESM specifier from `base_dir`.

    /foo/bar/baz.ts becomes ./baz.ts for base directory /foo/bar.
    """
    relative = os.path.relpath(absolute_path, base_dir)
    return convert_to_esm_import_path(relative)
