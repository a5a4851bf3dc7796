"""Command line interface for barrel-file-utils."""

from .main import main

__all__ = ["main"]
