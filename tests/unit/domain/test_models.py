from __future__ import annotations

"""
Unit tests for domain data models.

Verifies:
1. FileRecord / ExportMetadata serialization order and immutability.
2. PathStack push/pop semantics and ancestor checks.
3. ConversionResult factories.
"""

import dataclasses

import pytest

from duplicacy2ncdu.domain.export_models import ExportMetadata, FileRecord
from duplicacy2ncdu.domain.pipeline_models import (
    EmitterStats,
    ExtractionStats,
    create_error_result,
    create_success_result,
)
from duplicacy2ncdu.domain.tree_models import PathStack


def test_file_record_to_dict_order():
    record = FileRecord(name="f", asize=10, dsize=512, dev=3, ino=42, nlink=1, notreg=False)
    assert list(record.to_dict().items()) == [
        ("name", "f"), ("asize", 10), ("dsize", 512), ("dev", 3),
        ("ino", 42), ("nlink", 1), ("notreg", False),
    ]


def test_file_record_is_immutable():
    record = FileRecord(name="f", asize=0, dsize=0, dev=0, ino=0, nlink=1, notreg=False)
    with pytest.raises(dataclasses.FrozenInstanceError):
        record.asize = 1


def test_export_metadata_to_dict():
    meta = ExportMetadata(progname="p", progver="1", timestamp=5)
    assert meta.to_dict() == {"progname": "p", "progver": "1", "timestamp": 5}


def test_path_stack_push_pop():
    stack = PathStack()
    assert not stack
    stack.push("a")
    stack.push("b")
    assert stack.depth == 2
    assert stack.components == ("a", "b")
    assert stack.pop() == "b"
    assert len(stack) == 1


def test_path_stack_pop_at_root_raises():
    with pytest.raises(IndexError):
        PathStack().pop()


def test_path_stack_ancestry():
    stack = PathStack()
    assert stack.is_ancestor_of(())
    assert stack.is_ancestor_of(("x",))

    stack.push("a")
    stack.push("b")
    assert stack.is_ancestor_of(("a", "b"))
    assert stack.is_ancestor_of(("a", "b", "c"))
    assert not stack.is_ancestor_of(("a",))
    assert not stack.is_ancestor_of(("a", "c", "b"))


def test_result_factories(base_config):
    extraction = ExtractionStats(lines_read=10, lines_matched=6, directories_skipped=2)
    emission = EmitterStats(files_emitted=4, directories_opened=2, max_depth=2)

    ok = create_success_result(base_config, extraction, emission, 0.5)
    assert ok.ok and ok.error == ""
    assert ok.files_emitted == 4
    assert ok.lines_read == 10
    assert ok.summary["order_check"] == "strict"

    failed = create_error_result("boom", base_config)
    assert not failed.ok
    assert failed.error == "boom"
    assert failed.files_emitted == 0
