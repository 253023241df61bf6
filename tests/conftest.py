"""
Pytest configuration.

Puts the project root on the path and keeps every test's files inside a
temporary data directory.
"""

import sys
from pathlib import Path

import pytest

# Add project root to Python path
project_root = Path(__file__).parent.parent.absolute()
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from mindpad.tree import Node, add_child, new_tree  # noqa: E402


@pytest.fixture(autouse=True)
def data_dir(tmp_path, monkeypatch):
    """Point MINDPAD_DATA_DIR at a fresh temporary directory."""
    path = tmp_path / "data"
    monkeypatch.setenv("MINDPAD_DATA_DIR", str(path))
    monkeypatch.delenv("MINDPAD_LOG_LEVEL", raising=False)
    return path


@pytest.fixture
def small_tree() -> Node:
    """Root with children A and B; A has child A1."""
    root = new_tree("Root")
    a = add_child(root, "A")
    add_child(root, "B")
    add_child(a, "A1")
    return root


@pytest.fixture
def wide_tree() -> Node:
    """Root with four children, each with three children (17 nodes)."""
    root = new_tree("Hub")
    for i in range(4):
        branch = add_child(root, f"Branch {i}")
        for j in range(3):
            add_child(branch, f"Leaf {i}.{j}")
    return root
