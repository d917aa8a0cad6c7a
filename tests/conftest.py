"""
Pytest 설정 및 공통 Fixture
"""

from pathlib import Path

import pytest

from keyperfile import KeyPerFileOptions
from tests.sample_data import (
    SAMPLE_SECRETS,
    InMemoryEntrySource,
)


@pytest.fixture
def memory_source() -> InMemoryEntrySource:
    """샘플 시크릿이 담긴 메모리 소스"""
    return InMemoryEntrySource.from_files(SAMPLE_SECRETS)


@pytest.fixture
def memory_options(memory_source: InMemoryEntrySource) -> KeyPerFileOptions:
    """메모리 소스를 사용하는 옵션"""
    return KeyPerFileOptions(entry_source=memory_source)


@pytest.fixture
def secrets_dir(tmp_path: Path) -> Path:
    """실제 파일시스템 시크릿 디렉토리

    구조:
        Secret1                         -> SecretValue1
        Database__Password              -> p@ss
        ignore.README                   -> (무시 대상)
        nested/                         -> (디렉토리, 무시 대상)
    """
    directory = tmp_path / "secrets"
    directory.mkdir()
    (directory / "Secret1").write_text("SecretValue1", encoding="utf-8")
    (directory / "Database__Password").write_text("p@ss", encoding="utf-8")
    (directory / "ignore.README").write_text("not a secret", encoding="utf-8")
    (directory / "nested").mkdir()
    (directory / "nested" / "Inner").write_text("hidden", encoding="utf-8")
    return directory
