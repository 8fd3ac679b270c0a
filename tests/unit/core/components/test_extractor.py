from __future__ import annotations

"""
Unit tests for the Duplicacy inclusion line extractor.

Verifies:
1. Path capture with and without the 'by pattern' suffix.
2. Silent skipping of unrelated log lines.
3. Directory notice filtering and extraction counters.
"""

import pytest

from conftest import include_line
from duplicacy2ncdu.core.pipeline.components.extractor import (
    extract_included_path,
    is_directory_notice,
    iter_included_files,
)
from duplicacy2ncdu.domain.pipeline_models import ExtractionStats


@pytest.mark.parametrize("path", [
    "docs/readme.md",
    "with space/file name.txt",
    "unicode/naïve.txt",
    "tricky/x is included y",
])
def test_extract_plain_inclusion(path):
    assert extract_included_path(include_line(path)) == path


def test_extract_inclusion_by_pattern():
    line = include_line("src/main.go", pattern="+src/*")
    assert extract_included_path(line) == "src/main.go"


@pytest.mark.parametrize("line", [
    "",
    "2025-03-14 09:26:53.589 INFO BACKUP_START Backup started",
    "2025-03-14 09:26:53.589 DEBUG PATTERN_EXCLUDE tmp/x is excluded",
    "2025-03-14 09:26:53.589 DEBUG PATTERN_INCLUDE a/b is included trailing garbage",
    "25-03-14 09:26:53.589 DEBUG PATTERN_INCLUDE a/b is included",
    " 2025-03-14 09:26:53.589 DEBUG PATTERN_INCLUDE a/b is included",
])
def test_non_matching_lines_yield_nothing(line):
    assert extract_included_path(line) is None


def test_timestamp_values_are_not_validated():
    """Only the shape of the timestamp matters, not whether it is a real date."""
    line = "2025-99-99 99:99:99.999 DEBUG PATTERN_INCLUDE a/f is included"
    assert extract_included_path(line) == "a/f"


def test_is_directory_notice():
    assert is_directory_notice("a/b/")
    assert not is_directory_notice("a/b")


def test_iter_included_files_filters_and_counts():
    lines = [
        "2025-03-14 09:26:53.500 INFO REPOSITORY_SET Repository set to /repo",
        include_line("a/"),
        include_line("a/f1"),
        include_line("a/sub/"),
        include_line("a/sub/f2", pattern="+a/sub/*"),
        "noise",
    ]
    stats = ExtractionStats()

    paths = list(iter_included_files(lines, stats))

    assert paths == ["a/f1", "a/sub/f2"]
    assert stats.lines_read == 6
    assert stats.lines_matched == 4
    assert stats.directories_skipped == 2


def test_iter_included_files_is_lazy():
    consumed = []

    def source():
        for p in ("a", "b", "c"):
            consumed.append(p)
            yield include_line(p)

    it = iter_included_files(source())
    assert next(it) == "a"
    assert consumed == ["a"]
