"""
엔트리 소스 (디렉토리 나열 / 파일 내용 읽기)

설정 코어는 아래 인터페이스만 사용하며, 실제 저장소
(로컬 파일시스템, 마운트된 시크릿 볼륨, 테스트용 메모리 소스)는 알지 못합니다.

- EntrySource.list_entries(): 최상위 엔트리 목록 (하위 디렉토리 재귀 없음)
- Entry.open_read(): 바이트 스트림 (디렉토리면 EntryReadError)
- EntrySource.watch(): 변경 알림 구독 (선택 기능)
"""

import logging
import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Callable, Protocol

from .errors import EntryReadError, SourceUnavailableError

logger = logging.getLogger(__name__)


class Entry(Protocol):
    """엔트리 (파일 또는 디렉토리)"""

    name: str
    is_directory: bool

    def open_read(self) -> BinaryIO: ...


class ChangeSubscription(Protocol):
    """변경 알림 구독 핸들"""

    @property
    def is_running(self) -> bool: ...

    def stop(self) -> None: ...


class EntrySource(ABC):
    """엔트리 소스 기본 클래스"""

    @abstractmethod
    def list_entries(self) -> list[Entry]:
        """최상위 엔트리 목록

        Raises:
            SourceUnavailableError: 소스를 나열할 수 없을 때
        """

    def watch(
        self,
        callback: Callable[[], None],
        debounce_seconds: float = 0.25,
    ) -> ChangeSubscription:
        """변경 알림 구독

        Args:
            callback: 변경 감지 시 호출할 함수 (인자 없음)
            debounce_seconds: 디바운스 시간 (초)
        """
        raise NotImplementedError(
            f"{type(self).__name__} does not support change notifications"
        )


@dataclass(frozen=True)
class FileEntry:
    """로컬 파일시스템 엔트리"""

    name: str
    path: Path
    is_directory: bool = False

    def open_read(self) -> BinaryIO:
        if self.is_directory:
            raise EntryReadError(
                f"Cannot create stream from directory: {self.name}",
                entry_name=self.name,
            )
        try:
            return open(self.path, "rb")
        except OSError as e:
            raise EntryReadError(
                f"Failed to open entry '{self.name}': {e}", entry_name=self.name
            ) from e


class PhysicalEntrySource(EntrySource):
    """로컬 디렉토리 엔트리 소스

    사용법:
        ```python
        source = PhysicalEntrySource("/run/secrets")
        for entry in source.list_entries():
            print(entry.name, entry.is_directory)
        ```
    """

    def __init__(self, root: str | Path):
        """
        Args:
            root: 나열할 디렉토리 (절대 경로)
        """
        self.root = Path(root)

    def exists(self) -> bool:
        return self.root.is_dir()

    def list_entries(self) -> list[Entry]:
        if not self.root.is_dir():
            raise SourceUnavailableError(
                f"The root directory doesn't exist: {self.root}"
            )

        entries: list[Entry] = []
        try:
            with os.scandir(self.root) as it:
                for item in it:
                    # 심볼릭 링크는 대상 기준으로 판단 (k8s 시크릿 볼륨은 링크 구조)
                    entries.append(
                        FileEntry(
                            name=item.name,
                            path=Path(item.path),
                            is_directory=item.is_dir(follow_symlinks=True),
                        )
                    )
        except OSError as e:
            raise SourceUnavailableError(
                f"Failed to list directory {self.root}: {e}"
            ) from e

        entries.sort(key=lambda entry: entry.name)
        return entries

    def watch(
        self,
        callback: Callable[[], None],
        debounce_seconds: float = 0.25,
    ) -> ChangeSubscription:
        from .watcher import ChangeWatcher

        watcher = ChangeWatcher(self.root, callback, debounce_seconds=debounce_seconds)
        watcher.start()
        return watcher

    def __repr__(self) -> str:
        return f"PhysicalEntrySource({str(self.root)!r})"
