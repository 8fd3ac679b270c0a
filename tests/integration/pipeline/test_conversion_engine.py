from __future__ import annotations

"""
Integration tests for the conversion engine.

Runs the full reader -> extractor -> emitter -> writer chain against a
real temporary repository and checks the resulting NCDU export.
"""

import io
import os

import pytest

from conftest import FAKE_ROOT, FakeResolver, include_line, parse_export, tree_names
from duplicacy2ncdu.core.pipeline.engine import build_metadata, convert_stream, run_conversion
from duplicacy2ncdu.domain.constants import PROGNAME, PROGVER
from duplicacy2ncdu.domain.pipeline_models import ExtractionStats


def test_run_conversion_on_real_repository(sample_repository, base_config):
    repo, _ = sample_repository

    result = run_conversion(base_config)

    assert result.ok, result.error
    assert result.lines_read == 8
    assert result.lines_matched == 6
    assert result.directories_skipped == 3
    assert result.files_emitted == 3
    assert result.directories_opened == 3
    assert result.max_depth == 2

    with open(base_config["output_path"], encoding="utf-8") as f:
        doc = parse_export(f.read())

    assert doc[2]["progname"] == PROGNAME
    assert doc[2]["progver"] == PROGVER
    assert isinstance(doc[2]["timestamp"], int)

    root = doc[3]
    assert root[0]["name"] == str(repo)
    assert tree_names(root) == {
        str(repo): [{"a": [{"b": ["file1"]}, {"c": ["file2"]}]}, "top.txt"]
    }

    file1 = root[1][1][1]
    assert file1["name"] == "file1"
    assert file1["asize"] == 10
    assert file1["dsize"] == os.lstat(repo / "a" / "b" / "file1").st_blocks * 512
    assert file1["notreg"] is False

    file2 = root[1][2][1]
    assert file2["asize"] == 2000


def test_run_conversion_fails_on_vanished_file(sample_repository, base_config):
    repo, _ = sample_repository
    (repo / "a" / "c" / "file2").unlink()

    result = run_conversion(base_config)

    assert not result.ok
    assert "file2" in result.error
    assert result.files_emitted == 1


def test_run_conversion_refuses_existing_output(sample_repository, base_config):
    with open(base_config["output_path"], "w", encoding="utf-8") as f:
        f.write("previous export")

    result = run_conversion(base_config)

    assert not result.ok
    assert "already exists" in result.error
    with open(base_config["output_path"], encoding="utf-8") as f:
        assert f.read() == "previous export"


def test_run_conversion_overwrites_when_allowed(sample_repository, base_config):
    with open(base_config["output_path"], "w", encoding="utf-8") as f:
        f.write("previous export")
    base_config["overwrite"] = True

    assert run_conversion(base_config).ok


def test_run_conversion_reports_ordering_violation(tmp_path, base_config):
    repo = tmp_path / "repo"
    for d in ("a/b", "a/c"):
        (repo / d).mkdir(parents=True)
    for f in ("a/b/1", "a/c/2", "a/b/3"):
        (repo / f).write_text(f)
    with open(base_config["input_path"], "w", encoding="utf-8") as log:
        log.write("\n".join(include_line(p) for p in ("a/b/1", "a/c/2", "a/b/3")) + "\n")

    strict = run_conversion(base_config)
    assert not strict.ok
    assert "depth-first" in strict.error

    base_config.update(order_check="warn", overwrite=True)
    tolerant = run_conversion(base_config)
    assert tolerant.ok
    assert tolerant.ordering_violations == 1


def test_run_conversion_missing_input_is_reported(base_config):
    result = run_conversion(base_config)
    assert not result.ok
    assert result.lines_read == 0


def test_convert_stream_with_fake_resolver():
    lines = [include_line("/a/b/file1"), include_line("/a/c/file2")]
    out = io.StringIO()
    extraction = ExtractionStats()

    stats = convert_stream(
        lines, out, FAKE_ROOT,
        resolver=FakeResolver(),
        metadata=build_metadata(timestamp=42),
        extraction=extraction,
    )

    doc = parse_export(out.getvalue())
    assert doc[2]["timestamp"] == 42
    assert tree_names(doc[3]) == {FAKE_ROOT: [{"a": [{"b": ["file1"]}, {"c": ["file2"]}]}]}
    assert stats.files_emitted == 2
    assert extraction.lines_matched == 2


@pytest.mark.skipif(os.name != "posix", reason="byte file names")
def test_undecodable_file_names_survive(tmp_path, base_config):
    repo = tmp_path / "repo"
    repo.mkdir()
    raw = b"caf\xe9.txt"
    with open(os.path.join(os.fsencode(str(repo)), raw), "wb") as f:
        f.write(b"data")
    with open(base_config["input_path"], "wb") as log:
        log.write(b"2025-03-14 09:26:53.589 DEBUG PATTERN_INCLUDE " + raw + b" is included\n")

    result = run_conversion(base_config)

    assert result.ok, result.error
    with open(base_config["output_path"], "rb") as f:
        assert b'"name":"caf\xe9.txt"' in f.read()
