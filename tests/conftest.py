from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. A deterministic metadata resolver so the tree emitter can be tested
   without touching the filesystem.
3. Helpers to build Duplicacy log lines and to read NCDU exports back.
"""

import io
import json
import os
import sys
from typing import Any, Dict, List, Optional, Tuple

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from duplicacy2ncdu.domain.export_models import FileRecord  # noqa: E402

FAKE_ROOT = "/scan"
LOG_TIMESTAMP = "2025-03-14 09:26:53.589"


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------
def include_line(path: str, pattern: Optional[str] = None) -> str:
    """Build a Duplicacy PATTERN_INCLUDE line for the given path."""
    line = f"{LOG_TIMESTAMP} DEBUG PATTERN_INCLUDE {path} is included"
    if pattern:
        line += f" by pattern {pattern}"
    return line


def parse_export(text: str) -> List[Any]:
    """Decode an NCDU export and check its header."""
    doc = json.loads(text)
    assert isinstance(doc, list) and len(doc) == 4
    assert doc[0] == 1 and doc[1] == 2
    return doc


def tree_names(node: Any) -> Any:
    """
    Reduce an NCDU node to names only.

    Files become their name; directories become {name: [children...]}.
    """
    if isinstance(node, dict):
        return node["name"]
    info, children = node[0], node[1:]
    return {info["name"]: [tree_names(c) for c in children]}


class FakeResolver:
    """
    Deterministic stand-in for resolve_metadata.

    Records every (path, name) it is asked for and derives sizes from the
    path length so that records are distinguishable.
    """

    def __init__(self, missing: Tuple[str, ...] = ()):
        self.calls: List[Tuple[str, Optional[str]]] = []
        self._missing = set(missing)

    def __call__(self, path: str, name: Optional[str] = None) -> FileRecord:
        from duplicacy2ncdu.domain.errors import FilesystemError

        self.calls.append((path, name))
        if path in self._missing:
            raise FilesystemError(path, "No such file or directory")
        return FileRecord(
            name=name if name is not None else os.path.basename(path),
            asize=len(path),
            dsize=512,
            dev=1,
            ino=len(self.calls),
            nlink=1,
            notreg=False,
        )


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def fake_resolver() -> FakeResolver:
    return FakeResolver()


@pytest.fixture
def out_stream() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def base_config(tmp_path) -> Dict[str, Any]:
    """
    Return a valid, complete configuration dictionary rooted in tmp_path.

    Reflects the structure defined in 'duplicacy2ncdu.domain.config'.
    """
    return {
        "input_path": str(tmp_path / "backup.log"),
        "output_path": str(tmp_path / "export.json"),
        "root_path": str(tmp_path / "repo"),
        "overwrite": False,
        "order_check": "strict",
        "log_level": "INFO",
        "log_file": "",
    }


@pytest.fixture
def sample_repository(tmp_path):
    """
    Create a small repository and the matching depth-first Duplicacy log.

    Structure:
    /repo
      /a
        /b
          file1  (10 bytes)
        /c
          file2  (2000 bytes)
      top.txt
    """
    repo = tmp_path / "repo"
    (repo / "a" / "b").mkdir(parents=True)
    (repo / "a" / "c").mkdir(parents=True)
    (repo / "a" / "b" / "file1").write_bytes(b"0123456789")
    (repo / "a" / "c" / "file2").write_bytes(b"x" * 2000)
    (repo / "top.txt").write_text("top", encoding="utf-8")

    log_lines = [
        "2025-03-14 09:26:53.500 INFO REPOSITORY_SET Repository set to " + str(repo),
        include_line("a/"),
        include_line("a/b/"),
        include_line("a/b/file1"),
        include_line("a/c/"),
        include_line("a/c/file2", pattern="+a/c/*"),
        include_line("top.txt"),
        "2025-03-14 09:26:54.000 INFO BACKUP_END Backup for " + str(repo) + " at revision 1 completed",
    ]
    log_file = tmp_path / "backup.log"
    log_file.write_text("\n".join(log_lines) + "\n", encoding="utf-8")
    return repo, log_file
