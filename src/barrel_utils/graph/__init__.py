"""Export graph resolution."""

from .resolver import ExportGraphResolver, group_exports, merge_exports

__all__ = ["ExportGraphResolver", "group_exports", "merge_exports"]
