"""
엔트리 소스 테스트

로컬 디렉토리 나열, 파일 읽기, 디렉토리 엔트리 처리 테스트.
"""

import os
from pathlib import Path

import pytest

from keyperfile import EntryReadError, PhysicalEntrySource, SourceUnavailableError
from keyperfile.sources import FileEntry
from tests.sample_data import StaticEntrySource


class TestPhysicalEntrySource:
    """PhysicalEntrySource 테스트"""

    def test_list_entries(self, secrets_dir: Path):
        source = PhysicalEntrySource(secrets_dir)
        entries = {entry.name: entry for entry in source.list_entries()}

        assert set(entries) == {"Secret1", "Database__Password", "ignore.README", "nested"}
        assert entries["nested"].is_directory is True
        assert entries["Secret1"].is_directory is False

    def test_list_entries_is_not_recursive(self, secrets_dir: Path):
        names = [entry.name for entry in PhysicalEntrySource(secrets_dir).list_entries()]

        assert "Inner" not in names

    def test_list_entries_sorted(self, secrets_dir: Path):
        names = [entry.name for entry in PhysicalEntrySource(secrets_dir).list_entries()]

        assert names == sorted(names)

    def test_missing_directory(self, tmp_path: Path):
        source = PhysicalEntrySource(tmp_path / "missing")

        assert source.exists() is False
        with pytest.raises(SourceUnavailableError):
            source.list_entries()

    def test_path_is_file(self, secrets_dir: Path):
        with pytest.raises(SourceUnavailableError):
            PhysicalEntrySource(secrets_dir / "Secret1").list_entries()

    def test_open_read(self, secrets_dir: Path):
        entry = next(
            e for e in PhysicalEntrySource(secrets_dir).list_entries() if e.name == "Secret1"
        )
        with entry.open_read() as stream:
            assert stream.read() == b"SecretValue1"

    def test_open_read_directory_raises(self, secrets_dir: Path):
        entry = FileEntry(name="nested", path=secrets_dir / "nested", is_directory=True)

        with pytest.raises(EntryReadError, match="directory"):
            entry.open_read()

    def test_open_read_missing_file(self, tmp_path: Path):
        entry = FileEntry(name="gone", path=tmp_path / "gone")

        with pytest.raises(EntryReadError) as exc_info:
            entry.open_read()
        assert exc_info.value.entry_name == "gone"

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlink 미지원")
    def test_symlinked_file_is_file(self, tmp_path: Path):
        """k8s 시크릿 볼륨처럼 심볼릭 링크된 파일은 파일로 취급"""
        data_dir = tmp_path / "..data"
        data_dir.mkdir()
        (data_dir / "Token").write_text("abc", encoding="utf-8")
        mount = tmp_path / "mount"
        mount.mkdir()
        os.symlink(data_dir / "Token", mount / "Token")
        os.symlink(data_dir, mount / "linked_dir")

        entries = {e.name: e for e in PhysicalEntrySource(mount).list_entries()}

        assert entries["Token"].is_directory is False
        assert entries["linked_dir"].is_directory is True


class TestWatchSupport:
    """변경 알림 지원 여부 테스트"""

    def test_base_source_does_not_watch(self):
        with pytest.raises(NotImplementedError):
            StaticEntrySource().watch(lambda: None)
