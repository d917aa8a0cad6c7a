"""
키-퍼-파일 설정 모듈

디렉토리의 파일 하나를 설정 키 하나로 읽어 계층형 설정 스냅샷을 제공합니다.
파일명의 "__"는 계층 구분자 ":"로 변환되고, 파일 내용이 값이 됩니다.
"""

from .errors import (
    EntryReadError,
    ErrorCategory,
    ErrorClassifier,
    InvalidConfigurationError,
    KeyPerFileError,
    SourceUnavailableError,
)
from .export import dump_snapshot
from .normalizer import KeyNormalizer, normalize_key
from .options import DEFAULT_IGNORE, DEFAULT_IGNORE_PREFIX, KeyPerFileOptions
from .provider import KeyPerFileConfigProvider
from .snapshot import Snapshot, SnapshotBuilder
from .sources import EntrySource, FileEntry, PhysicalEntrySource
from .store import SnapshotStore
from .watcher import ChangeWatcher

__all__ = [
    # Errors
    "EntryReadError",
    "ErrorCategory",
    "ErrorClassifier",
    "InvalidConfigurationError",
    "KeyPerFileError",
    "SourceUnavailableError",
    # Options
    "DEFAULT_IGNORE",
    "DEFAULT_IGNORE_PREFIX",
    "KeyPerFileOptions",
    # Sources
    "EntrySource",
    "FileEntry",
    "PhysicalEntrySource",
    "ChangeWatcher",
    # Core
    "KeyNormalizer",
    "normalize_key",
    "Snapshot",
    "SnapshotBuilder",
    "SnapshotStore",
    "KeyPerFileConfigProvider",
    "dump_snapshot",
]
