"""Tests for filesystem operations — asset reads, atomic writes."""

import os
from pathlib import Path

import pytest

from licensectl.domain.errors import MissingAsset, WriteError
from licensectl.infrastructure.filesystem import (
    atomic_write,
    read_asset,
    read_existing,
    resolve_path,
)


class TestResolvePath:
    def test_relative(self, tmp_path: Path) -> None:
        assert resolve_path(tmp_path, "assets/x") == tmp_path / "assets" / "x"

    def test_absolute_untouched(self, tmp_path: Path) -> None:
        other = tmp_path / "elsewhere"
        assert resolve_path(Path("/ignored"), other) == other


class TestReadAsset:
    def test_reads_verbatim(self, tmp_path: Path) -> None:
        path = tmp_path / "LICENSES"
        path.write_bytes("Copyright © 2024\r\nline 2".encode())
        assert read_asset(path) == "Copyright © 2024\r\nline 2"

    def test_missing(self, tmp_path: Path) -> None:
        with pytest.raises(MissingAsset) as exc_info:
            read_asset(tmp_path / "nope", section="THEMES")
        assert exc_info.value.section == "THEMES"
        assert exc_info.value.detail["path"] == str(tmp_path / "nope")

    def test_directory_is_unreadable(self, tmp_path: Path) -> None:
        with pytest.raises(MissingAsset):
            read_asset(tmp_path)

    def test_invalid_utf8(self, tmp_path: Path) -> None:
        path = tmp_path / "bad"
        path.write_bytes(b"\xff\xfe\xfa")
        with pytest.raises(MissingAsset, match="UTF-8"):
            read_asset(path)


class TestReadExisting:
    def test_missing_returns_none(self, tmp_path: Path) -> None:
        assert read_existing(tmp_path / "nope.md") is None

    def test_existing(self, tmp_path: Path) -> None:
        path = tmp_path / "a.md"
        path.write_text("hello", encoding="utf-8")
        assert read_existing(path) == "hello"


class TestAtomicWrite:
    def test_writes_and_creates_parents(self, tmp_path: Path) -> None:
        dest = tmp_path / "assets" / "licenses.md"
        atomic_write(dest, "# THEMES\n")
        assert dest.read_text(encoding="utf-8") == "# THEMES\n"

    def test_overwrites(self, tmp_path: Path) -> None:
        dest = tmp_path / "licenses.md"
        dest.write_text("old", encoding="utf-8")
        atomic_write(dest, "new")
        assert dest.read_text(encoding="utf-8") == "new"

    def test_no_temp_files_left(self, tmp_path: Path) -> None:
        dest = tmp_path / "licenses.md"
        atomic_write(dest, "content")
        assert sorted(p.name for p in tmp_path.iterdir()) == ["licenses.md"]

    def test_new_file_mode(self, tmp_path: Path) -> None:
        dest = tmp_path / "licenses.md"
        atomic_write(dest, "content")
        assert dest.stat().st_mode & 0o777 == 0o644

    def test_existing_mode_preserved(self, tmp_path: Path) -> None:
        dest = tmp_path / "licenses.md"
        dest.write_text("old", encoding="utf-8")
        os.chmod(dest, 0o600)
        atomic_write(dest, "new")
        assert dest.stat().st_mode & 0o777 == 0o600

    def test_rename_failure_leaves_destination(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        dest = tmp_path / "licenses.md"
        dest.write_text("old", encoding="utf-8")

        def fail_replace(src: object, dst: object) -> None:
            raise OSError(28, "No space left on device")

        monkeypatch.setattr(os, "replace", fail_replace)
        with pytest.raises(WriteError, match="No space left"):
            atomic_write(dest, "new")
        assert dest.read_text(encoding="utf-8") == "old"
        assert sorted(p.name for p in tmp_path.iterdir()) == ["licenses.md"]

    def test_parent_is_a_file(self, tmp_path: Path) -> None:
        blocker = tmp_path / "assets"
        blocker.write_text("not a directory", encoding="utf-8")
        with pytest.raises(WriteError):
            atomic_write(blocker / "licenses.md", "content")
