"""
키-퍼-파일 설정 프로바이더 (리로드 코디네이터)

디렉토리의 파일 하나가 설정 키 하나가 되는 설정 소스입니다.
주로 오케스트레이터가 마운트한 시크릿 파일을 설정으로 노출할 때 사용합니다.

설계 원칙:
- 새 스냅샷은 로컬에서 완전히 구성한 뒤 참조 교체 한 번으로 게시
- 읽기는 락 없이 현재 스냅샷만 참조
- 실패 시 이전 스냅샷 유지 (optional이면 조용히 무시, 아니면 호출자에게 전달)

사용법:
    ```python
    options = KeyPerFileOptions.from_directory("/run/secrets", reload_on_change=True)
    with KeyPerFileConfigProvider(options) as provider:
        password = provider.get("Database:Password")
        db = provider.get_section("Database").bind(DatabaseSettings)
    ```
"""

import logging
import threading
from typing import Any, Callable, Iterator, TypeVar

from pydantic import BaseModel

from .errors import ErrorClassifier, InvalidConfigurationError, KeyPerFileError
from .options import KeyPerFileOptions
from .snapshot import Snapshot, SnapshotBuilder
from .sources import ChangeSubscription
from .store import SnapshotStore

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class KeyPerFileConfigProvider:
    """키-퍼-파일 설정 프로바이더

    reload()는 어느 스레드에서든, 동시에 여러 번 호출할 수 있습니다.
    동시 리로드는 각자 스냅샷을 만들고 마지막 게시가 남습니다.
    """

    def __init__(
        self,
        options: KeyPerFileOptions,
        store: SnapshotStore | None = None,
    ):
        """
        Args:
            options: 소스 옵션
            store: 스냅샷 저장소 (None이면 새로 생성)

        Raises:
            InvalidConfigurationError: 옵션 오류 또는 변경 감지 미지원 소스
            KeyPerFileError: 최초 로드 실패 (optional이 아닐 때)
        """
        options.validate()
        self.options = options
        self._store = store or SnapshotStore()
        self._callbacks: list[Callable[[], None]] = []
        self._callbacks_lock = threading.Lock()
        self._subscription: ChangeSubscription | None = None
        self.last_error: Exception | None = None

        self._load()

        if options.reload_on_change and options.entry_source is not None:
            try:
                self._subscription = options.entry_source.watch(
                    self._on_source_changed,
                    debounce_seconds=options.reload_delay,
                )
            except NotImplementedError as e:
                raise InvalidConfigurationError(str(e)) from e

    def _load(self) -> None:
        """최초 로드 (optional이면 실패 시 빈 스냅샷)"""
        try:
            snapshot = SnapshotBuilder(self.options).build()
        except KeyPerFileError as e:
            self.last_error = e
            if not self.options.optional:
                logger.error(f"[Provider] 최초 로드 실패: {e}")
                raise
            logger.warning(f"[Provider] 최초 로드 실패 (optional, 빈 설정 사용): {e}")
            snapshot = Snapshot.empty()

        self._store.publish(snapshot)
        logger.info(f"[Provider] 설정 로드 완료: {len(snapshot)}개 키")

    def reload(self) -> bool:
        """스냅샷 재구성 및 게시

        Returns:
            새 스냅샷이 게시되면 True, optional 실패로 무시되면 False

        Raises:
            KeyPerFileError: 리로드 실패 (optional이 아닐 때, 이전 스냅샷 유지)
        """
        logger.debug(f"[Provider] 리로드 시작: {self.options.entry_source!r}")

        try:
            snapshot = SnapshotBuilder(self.options).build()
        except KeyPerFileError as e:
            self.last_error = e
            if self.options.optional:
                logger.warning(f"[Provider] 리로드 실패 (optional, 이전 설정 유지): {e}")
                return False
            logger.error(f"[Provider] 리로드 실패: {ErrorClassifier.format_message(e)}")
            raise

        self._store.publish(snapshot)
        self.last_error = None
        logger.info(f"[Provider] 리로드 완료: {len(snapshot)}개 키")

        self._notify()
        return True

    def _notify(self) -> None:
        with self._callbacks_lock:
            callbacks = list(self._callbacks)

        for callback in callbacks:
            try:
                callback()
            except Exception as e:
                logger.error(f"[Provider] 콜백 실행 실패: {e}")

    def _on_source_changed(self) -> None:
        """변경 감지 시 리로드 (감시 스레드에서 호출)"""
        logger.info("[Provider] 소스 변경 감지 - 리로드 실행")
        try:
            self.reload()
        except KeyPerFileError:
            # reload()에서 이미 로깅됨, 감시 스레드는 계속 동작
            pass

    def on_reload(self, callback: Callable[[], None]) -> None:
        """리로드 콜백 등록"""
        with self._callbacks_lock:
            self._callbacks.append(callback)

    def remove_callback(self, callback: Callable[[], None]) -> None:
        """리로드 콜백 제거"""
        with self._callbacks_lock:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

    @property
    def snapshot(self) -> Snapshot:
        """현재 스냅샷"""
        return self._store.current()

    @property
    def is_watching(self) -> bool:
        """변경 감지가 실제로 동작 중인지 (watchdog 미설치 등으로 시작 실패 시 False)"""
        return self._subscription is not None and self._subscription.is_running

    def get(self, key: str, default: str | None = None) -> str | None:
        """설정 값 조회 (대소문자 무시)"""
        return self._store.current().get(key, default)

    def __getitem__(self, key: str) -> str:
        return self._store.current()[key]

    def __contains__(self, key: object) -> bool:
        return key in self._store.current()

    def keys(self) -> list[str]:
        return list(self._store.current())

    def items(self) -> Iterator[tuple[str, str]]:
        return iter(self._store.current().items())

    def get_section(self, prefix: str) -> Snapshot:
        return self._store.current().get_section(prefix)

    def bind(self, model: type[ModelT]) -> ModelT:
        """현재 스냅샷을 pydantic 모델로 바인딩"""
        return self._store.current().bind(model)

    def close(self) -> None:
        """변경 감지 구독 해제"""
        if self._subscription is not None:
            self._subscription.stop()
            self._subscription = None

    def __enter__(self) -> "KeyPerFileConfigProvider":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()
