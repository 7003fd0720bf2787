"""Tests for locating and extracting the bytecode container."""

from __future__ import annotations

import zipfile
from pathlib import Path

import pytest

from dv_common.errors import BytecodeLoadError, NoBytecodeEntry
from dv_core import archive
from dv_core.archive import BYTECODE_ENTRY, extract_bytecode, remove_temp_file
from tests.helpers.sample_model import FAKE_DEX, corrupt_entry, write_apk


pytestmark = pytest.mark.unit_core


def test_extracts_entry_bytes_verbatim(tmp_path: Path) -> None:
    temp_dir = tmp_path / "tmp"
    temp_dir.mkdir()
    apk = write_apk(tmp_path / "app.apk")

    source = extract_bytecode(apk, temp_dir)

    assert source.is_extracted
    assert source.path == source.temp_path
    assert source.path.parent == temp_dir
    assert source.path.suffix == ".dex"
    assert source.path.read_bytes() == FAKE_DEX


def test_archive_without_entry_leaves_no_temp_file(tmp_path: Path) -> None:
    temp_dir = tmp_path / "tmp"
    temp_dir.mkdir()
    apk = write_apk(tmp_path / "app.apk", with_dex=False)

    with pytest.raises(NoBytecodeEntry) as excinfo:
        extract_bytecode(apk, temp_dir)

    assert excinfo.value.context["entry"] == BYTECODE_ENTRY
    assert list(temp_dir.iterdir()) == []


def test_nested_entry_does_not_count(tmp_path: Path) -> None:
    apk = tmp_path / "app.apk"
    with zipfile.ZipFile(apk, "w") as zf:
        zf.writestr("lib/classes.dex", FAKE_DEX)

    with pytest.raises(NoBytecodeEntry):
        extract_bytecode(apk, tmp_path)


def test_raw_container_used_in_place(tmp_path: Path) -> None:
    dex = tmp_path / "classes.dex"
    dex.write_bytes(FAKE_DEX)

    source = extract_bytecode(dex, tmp_path)

    assert source.path == dex
    assert source.temp_path is None
    assert not source.is_extracted


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        extract_bytecode(tmp_path / "nope.apk")


def test_copy_failure_removes_temp_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    temp_dir = tmp_path / "tmp"
    temp_dir.mkdir()
    apk = write_apk(tmp_path / "app.apk")

    def failing_copy(src, dst, length=0):
        raise OSError("disk full")

    monkeypatch.setattr(archive.shutil, "copyfileobj", failing_copy)

    with pytest.raises(OSError, match="disk full"):
        extract_bytecode(apk, temp_dir)
    assert list(temp_dir.iterdir()) == []


def test_remove_temp_file_is_best_effort(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    target = tmp_path / "x.dex"
    target.write_bytes(b"x")
    assert remove_temp_file(target) is True
    assert not target.exists()
    assert remove_temp_file(target) is True
    assert remove_temp_file(None) is True

    def deny(self, missing_ok=False):
        raise PermissionError("locked")

    monkeypatch.setattr(Path, "unlink", deny)
    assert remove_temp_file(target) is False


def test_damaged_entry_raises_load_error(tmp_path: Path) -> None:
    temp_dir = tmp_path / "tmp"
    temp_dir.mkdir()
    apk = corrupt_entry(write_apk(tmp_path / "app.apk"))

    with pytest.raises(BytecodeLoadError) as excinfo:
        extract_bytecode(apk, temp_dir)

    assert isinstance(excinfo.value.__cause__, zipfile.BadZipFile)
    assert excinfo.value.context["archive"] == str(apk)
    assert list(temp_dir.iterdir()) == []


def test_damaged_directory_raises_load_error(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    apk = write_apk(tmp_path / "app.apk")

    def broken_archive(*args, **kwargs):
        raise zipfile.BadZipFile("Bad magic number for central directory")

    monkeypatch.setattr(archive.zipfile, "ZipFile", broken_archive)

    with pytest.raises(BytecodeLoadError, match="not a readable archive"):
        extract_bytecode(apk, tmp_path)
