"""Tests for file discovery, the temporary file list and index validity."""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

import pytest

from searchbridge.core.filelist import (
    collect_files,
    ensure_parent_directory,
    expand_files,
    index_looks_valid,
    read_file_list,
    temp_file_list,
    write_file_list,
)

EXTENSIONS = [".txt", ".pdf", ".htm", ".html", ".doc", ".docx"]

linux_only = pytest.mark.skipif(sys.platform != "linux", reason="needs arbitrary bytes in file names")


class TestExpandFiles:
    def test_groups_by_extension_and_recurses(self, docs_dir: Path) -> None:
        files = expand_files(docs_dir, EXTENSIONS)
        assert files == [
            str(docs_dir / "a.txt"),
            str(docs_dir / "b.txt"),
            str(docs_dir / "sub" / "c.pdf"),
        ]

    def test_paths_are_absolute(self, docs_dir: Path) -> None:
        assert all(os.path.isabs(p) for p in expand_files(docs_dir, EXTENSIONS))

    def test_extension_match_ignores_case(self, tmp_path: Path) -> None:
        (tmp_path / "LOUD.TXT").write_text("x", encoding="utf-8")
        (tmp_path / "page.htm").write_text("x", encoding="utf-8")
        (tmp_path / "page.html").write_text("x", encoding="utf-8")
        files = expand_files(tmp_path, EXTENSIONS)
        assert [os.path.basename(f) for f in files] == ["LOUD.TXT", "page.htm", "page.html"]


class TestCollectFiles:
    def test_skips_missing_and_blank_folders(self, docs_dir: Path, tmp_path: Path) -> None:
        files = collect_files(["", str(tmp_path / "missing"), str(docs_dir)], EXTENSIONS)
        assert len(files) == 3

    def test_deduplicates_overlapping_folders(self, docs_dir: Path) -> None:
        files = collect_files([str(docs_dir), str(docs_dir / "sub")], EXTENSIONS)
        assert len(files) == len(set(files)) == 3

    def test_nothing_found(self, tmp_path: Path) -> None:
        assert collect_files([str(tmp_path / "missing")], EXTENSIONS) == []

    @linux_only
    def test_skips_names_with_line_breaks(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        (tmp_path / "good.txt").write_text("x", encoding="utf-8")
        (tmp_path / "two\nlines.txt").write_text("x", encoding="utf-8")
        with caplog.at_level(logging.WARNING, logger="searchbridge.core.filelist"):
            files = collect_files([str(tmp_path)], EXTENSIONS)
        assert files == [str(tmp_path / "good.txt")]
        assert "line break" in caplog.text


class TestFileList:
    def test_round_trip(self, tmp_path: Path) -> None:
        files = ["/data/a.txt", "/data/with space/b.pdf", "C:\\docs\\c.doc"]
        list_path = write_file_list(files, str(tmp_path))
        assert read_file_list(list_path) == files
        assert os.path.basename(list_path).startswith("sb_add_")
        assert list_path.endswith(".lst")

    @linux_only
    def test_undecodable_name_round_trips_as_bytes(self, tmp_path: Path) -> None:
        name = os.fsdecode(b"/data/bad\xff.txt")
        list_path = write_file_list([name], str(tmp_path))
        assert Path(list_path).read_bytes() == b"/data/bad\xff.txt\n"
        assert read_file_list(list_path) == [name]

    def test_line_break_in_path_is_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="line break"):
            write_file_list(["/a.txt", "/b\r\n.txt"], str(tmp_path))
        assert list(tmp_path.iterdir()) == []

    def test_temp_list_removed_when_write_fails(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError), temp_file_list(["/a.txt", "/two\nlines.txt"], str(tmp_path)):
            pytest.fail("block must not run when the list cannot be written")
        assert list(tmp_path.iterdir()) == []

    def test_temp_list_removed_after_block(self, tmp_path: Path) -> None:
        with temp_file_list(["/a.txt"], str(tmp_path)) as list_path:
            assert os.path.exists(list_path)
        assert not os.path.exists(list_path)

    def test_temp_list_removed_on_error(self, tmp_path: Path) -> None:
        seen: list[str] = []
        with pytest.raises(RuntimeError), temp_file_list(["/a.txt"], str(tmp_path)) as list_path:
            seen.append(list_path)
            raise RuntimeError("job blew up")
        assert not os.path.exists(seen[0])

    def test_already_deleted_list_is_fine(self, tmp_path: Path) -> None:
        with temp_file_list(["/a.txt"], str(tmp_path)) as list_path:
            os.remove(list_path)
        assert not os.path.exists(list_path)


class TestIndexLooksValid:
    def test_missing_directory(self, tmp_path: Path) -> None:
        assert index_looks_valid(str(tmp_path / "nope")) is False

    def test_empty_directory(self, tmp_path: Path) -> None:
        assert index_looks_valid(str(tmp_path)) is False

    def test_marker_file_present(self, tmp_path: Path) -> None:
        (tmp_path / "main.IX").write_text("", encoding="utf-8")
        assert index_looks_valid(str(tmp_path)) is True

    def test_custom_marker(self, tmp_path: Path) -> None:
        (tmp_path / "segments.idx").write_text("", encoding="utf-8")
        assert index_looks_valid(str(tmp_path)) is False
        assert index_looks_valid(str(tmp_path), ".idx") is True


class TestEnsureParentDirectory:
    def test_creates_parent_only(self, tmp_path: Path) -> None:
        index_path = tmp_path / "indexes" / "main"
        ensure_parent_directory(str(index_path) + os.sep)
        assert (tmp_path / "indexes").is_dir()
        assert not index_path.exists()
