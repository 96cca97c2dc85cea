from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared in-memory and on-disk directory fixtures.
3. Logging reset between tests that configure the root logger.
"""

import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Iterator

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from foldertree.infra.logging import shutdown_logging  # noqa: E402
from foldertree.infra.memory_fs import InMemoryFilesystem  # noqa: E402

FIXED_MTIME = datetime(2024, 1, 2, 3, 4, 5)


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def memory_fs() -> InMemoryFilesystem:
    """
    Return an in-memory filesystem with a small project.

    Structure (insertion order is listing order):
    /proj
      README.md
      /src
        main.py
        /lib
          util.py
      archive.tar.gz
      /docs
    """
    fs = InMemoryFilesystem()
    fs.add_file("/proj/README.md", "# Project", modified=FIXED_MTIME)
    fs.add_file("/proj/src/main.py", "print('hi')")
    fs.add_file("/proj/src/lib/util.py", "def util(): pass")
    fs.add_file("/proj/archive.tar.gz", "xx")
    fs.add_directory("/proj/docs")
    return fs


@pytest.fixture
def disk_project(tmp_path: Path) -> Path:
    """
    Create the same project layout on disk.

    Structure:
    /proj
      README.md
      /src
        main.py
        /lib
          util.py
      archive.tar.gz
      /docs
    """
    root = tmp_path / "proj"
    (root / "src" / "lib").mkdir(parents=True)
    (root / "docs").mkdir()
    (root / "README.md").write_text("# Project", encoding="utf-8")
    (root / "src" / "main.py").write_text("print('hi')", encoding="utf-8")
    (root / "src" / "lib" / "util.py").write_text("def util(): pass", encoding="utf-8")
    (root / "archive.tar.gz").write_bytes(b"xx")
    return root


@pytest.fixture
def reset_logging() -> Iterator[None]:
    """Detach the handlers installed by configure_logging before and after a test."""
    shutdown_logging()
    yield
    shutdown_logging()
