"""Shared fixtures for barrel-file-utils tests."""

from pathlib import Path
from typing import Callable, Dict, Union

import pytest

Tree = Dict[str, Union[str, "Tree"]]


def write_tree(base: Path, tree: Tree) -> None:
    """Create files and directories from a nested {name: content-or-subtree} dict."""
    base.mkdir(parents=True, exist_ok=True)
    for name, content in tree.items():
        target = base / name
        if isinstance(content, dict):
            write_tree(target, content)
        else:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")


@pytest.fixture
def make_tree(tmp_path) -> Callable[[Tree], Path]:
    """Write a module tree under tmp_path and return its root directory."""

    def _make(tree: Tree) -> Path:
        write_tree(tmp_path, tree)
        return tmp_path

    return _make
