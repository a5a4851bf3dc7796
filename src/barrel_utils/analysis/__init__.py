"""Barrel file diagnostics."""

from .issues import (
    BarrelAnalyzer,
    BarrelReference,
    BarrelReferenceIssue,
    ExportAllIssue,
    find_barrel_issues,
    find_barrel_references,
)

__all__ = [
    "BarrelAnalyzer",
    "BarrelReference",
    "BarrelReferenceIssue",
    "ExportAllIssue",
    "find_barrel_issues",
    "find_barrel_references",
]
