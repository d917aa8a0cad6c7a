"""
테스트용 엔트리 소스

TestFileProvider 역할을 하는 메모리 기반 엔트리 소스와
샘플 시크릿 파일 목록을 제공합니다.
"""

import io
import threading
from typing import BinaryIO, Callable

from keyperfile import EntryReadError, EntrySource, SourceUnavailableError

# 샘플 시크릿 (파일명 -> 내용)
SAMPLE_SECRETS = {
    "Secret1": "SecretValue1",
    "Secret2": "SecretValue2",
}

SAMPLE_NESTED_SECRETS = {
    "Secret0__Secret1__Secret2__Key": "SecretValue2",
    "Secret0__Secret1__Key": "SecretValue1",
    "Secret0__Key": "SecretValue0",
}

SAMPLE_IGNORED_SECRETS = {
    "ignore.Secret0": "SecretValue0",
    "ignore.Secret1": "SecretValue1",
    "Secret2": "SecretValue2",
}


class MemoryEntry:
    """메모리 엔트리 (contents=None이면 빈 파일)"""

    def __init__(
        self,
        name: str,
        contents: str | bytes | None = None,
        is_directory: bool = False,
    ):
        self.name = name
        self.contents = contents
        self.is_directory = is_directory

    @classmethod
    def directory(cls, name: str) -> "MemoryEntry":
        return cls(name, is_directory=True)

    def open_read(self) -> BinaryIO:
        if self.is_directory:
            raise EntryReadError(
                f"Cannot create stream from directory: {self.name}",
                entry_name=self.name,
            )
        if self.contents is None:
            return io.BytesIO()
        if isinstance(self.contents, bytes):
            return io.BytesIO(self.contents)
        return io.BytesIO(self.contents.encode("utf-8"))


class FailingEntry(MemoryEntry):
    """열 때 OSError를 내는 엔트리"""

    def open_read(self) -> BinaryIO:
        raise PermissionError(f"Permission denied: {self.name}")


class _Subscription:
    def __init__(self, source: "InMemoryEntrySource", callback: Callable[[], None]):
        self.source = source
        self.callback = callback

    @property
    def is_running(self) -> bool:
        return self.callback in self.source._callbacks

    def stop(self) -> None:
        self.source.unsubscribe(self.callback)


class InMemoryEntrySource(EntrySource):
    """메모리 기반 엔트리 소스

    사용법:
        ```python
        source = InMemoryEntrySource.from_files({"Secret1": "SecretValue1"})
        source.add(MemoryEntry.directory("directory"))
        source.trigger_change()  # 구독자 콜백 호출
        ```
    """

    def __init__(self, *entries: MemoryEntry):
        self._entries: list[MemoryEntry] = list(entries)
        self._callbacks: list[Callable[[], None]] = []
        self._lock = threading.Lock()
        self.available = True
        self.list_count = 0

    @classmethod
    def from_files(cls, files: dict[str, str | bytes | None]) -> "InMemoryEntrySource":
        return cls(*(MemoryEntry(name, contents) for name, contents in files.items()))

    def add(self, entry: MemoryEntry) -> None:
        with self._lock:
            self._entries.append(entry)

    def set_files(self, files: dict[str, str | bytes | None]) -> None:
        """엔트리 전체 교체"""
        entries = [MemoryEntry(name, contents) for name, contents in files.items()]
        with self._lock:
            self._entries = entries

    def list_entries(self) -> list[MemoryEntry]:
        with self._lock:
            self.list_count += 1
            if not self.available:
                raise SourceUnavailableError("In-memory source is unavailable")
            return list(self._entries)

    def watch(
        self,
        callback: Callable[[], None],
        debounce_seconds: float = 0.25,
    ) -> _Subscription:
        with self._lock:
            self._callbacks.append(callback)
        return _Subscription(self, callback)

    def unsubscribe(self, callback: Callable[[], None]) -> None:
        with self._lock:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

    @property
    def subscriber_count(self) -> int:
        return len(self._callbacks)

    def trigger_change(self) -> None:
        """구독자 콜백 동기 호출"""
        with self._lock:
            callbacks = list(self._callbacks)
        for callback in callbacks:
            callback()


class StaticEntrySource(EntrySource):
    """watch()를 지원하지 않는 엔트리 소스"""

    def __init__(self, *entries: MemoryEntry):
        self._entries = list(entries)

    def list_entries(self) -> list[MemoryEntry]:
        return list(self._entries)
