"""
파일 시스템 감시 기반 변경 알림

watchdog 라이브러리로 디렉토리 변경을 감지하고
디바운스 후 콜백(리로드)을 호출합니다.
"""

import logging
import threading
from pathlib import Path
from typing import Callable

logger = logging.getLogger(__name__)

# watchdog 4+ 에서 파일을 읽기만 해도 발생하는 이벤트
READ_ONLY_EVENTS = ("opened", "closed_no_write")


class ChangeWatcher:
    """디렉토리 변경 감시기

    사용법:
        ```python
        watcher = ChangeWatcher("/run/secrets", provider.reload, debounce_seconds=0.25)
        watcher.start()

        # 앱 종료 시
        watcher.stop()
        ```
    """

    def __init__(
        self,
        directory: str | Path,
        callback: Callable[[], None],
        debounce_seconds: float = 0.25,
    ):
        """
        Args:
            directory: 감시할 디렉토리 (비재귀)
            callback: 변경 시 호출할 함수
            debounce_seconds: 디바운스 시간 (초)
        """
        self.directory = Path(directory)
        self.callback = callback
        self.debounce_seconds = debounce_seconds
        self._observer = None
        self._timer: threading.Timer | None = None
        self._lock = threading.Lock()

    @property
    def is_running(self) -> bool:
        return self._observer is not None

    def start(self) -> None:
        """파일 감시 시작"""
        try:
            from watchdog.events import FileSystemEventHandler
            from watchdog.observers import Observer
        except ImportError:
            logger.warning(
                "[Watcher] watchdog 미설치 - 변경 감지 비활성화. "
                "설치: pip install watchdog"
            )
            return

        if not self.directory.is_dir():
            logger.warning(f"[Watcher] 감시 디렉토리 없음: {self.directory}")
            return

        class Handler(FileSystemEventHandler):
            def __init__(handler_self, watcher: "ChangeWatcher"):
                handler_self.watcher = watcher

            def on_any_event(handler_self, event):
                if event.is_directory:
                    return
                # 리로드 자체의 파일 읽기로 다시 리로드되지 않도록 읽기 이벤트 제외
                if event.event_type in READ_ONLY_EVENTS:
                    return
                logger.debug(f"[Watcher] 변경 감지: {event.event_type} {event.src_path}")
                handler_self.watcher.schedule()

        observer = Observer()
        observer.schedule(Handler(self), str(self.directory), recursive=False)
        observer.daemon = True
        observer.start()
        self._observer = observer
        logger.info(f"[Watcher] 감시 시작: {self.directory}")

    def stop(self) -> None:
        """파일 감시 중지"""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

        if self._observer:
            self._observer.stop()
            self._observer.join()
            self._observer = None
            logger.info(f"[Watcher] 감시 중지: {self.directory}")

    def schedule(self) -> None:
        """디바운스 후 콜백 스케줄 (연속 이벤트는 마지막 기준)"""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = threading.Timer(self.debounce_seconds, self._fire)
            self._timer.daemon = True
            self._timer.start()

    def _fire(self) -> None:
        with self._lock:
            self._timer = None
        try:
            self.callback()
        except Exception as e:
            logger.error(f"[Watcher] 콜백 실행 실패: {e}")
