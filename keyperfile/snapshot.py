"""
설정 스냅샷 및 빌더

스냅샷은 한 번의 로드/리로드 결과인 불변 키 → 값 매핑입니다.
빌더는 로컬 dict에서 전체를 구성한 뒤에만 Snapshot을 만들기 때문에
구성 중인 상태가 외부에 노출되지 않습니다.

사용법:
    ```python
    snapshot = SnapshotBuilder(options).build()

    snapshot["Database:Password"]          # 대소문자 무시 조회
    snapshot.get_section("Database")       # "Database:" 하위 키
    snapshot.bind(DatabaseSettings)        # pydantic 모델 바인딩
    ```
"""

import logging
from collections.abc import Iterator, Mapping
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, TypeVar

from pydantic import BaseModel

from .errors import EntryReadError, KeyPerFileError, SourceUnavailableError
from .normalizer import KEY_DELIMITER, KeyNormalizer
from .options import KeyPerFileOptions
from .sources import Entry

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class Snapshot(Mapping[str, str]):
    """불변 설정 스냅샷

    - 조회는 대소문자를 무시합니다 ("secret1" == "Secret1")
    - 순회는 엔트리 순서대로 원래 표기의 키를 반환합니다
    """

    __slots__ = ("_entries", "_created_at")

    def __init__(
        self,
        data: Mapping[str, str] | None = None,
        created_at: datetime | None = None,
    ):
        entries: dict[str, tuple[str, str]] = {}
        for key, value in (data or {}).items():
            entries[key.casefold()] = (key, value)
        self._entries = MappingProxyType(entries)
        self._created_at = created_at or datetime.now(timezone.utc)

    @classmethod
    def empty(cls) -> "Snapshot":
        return cls()

    @property
    def created_at(self) -> datetime:
        """스냅샷 생성 시각 (UTC)"""
        return self._created_at

    def __getitem__(self, key: str) -> str:
        return self._entries[key.casefold()][1]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.casefold() in self._entries

    def __iter__(self) -> Iterator[str]:
        return (key for key, _ in self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"Snapshot(keys={list(self)!r}, created_at={self._created_at.isoformat()})"

    def get_section(self, prefix: str) -> "Snapshot":
        """하위 섹션 스냅샷

        Args:
            prefix: 섹션 키 (예: "Database" 또는 "App:Database")

        Returns:
            "prefix:" 하위 키만 포함하고 접두사를 제거한 Snapshot
        """
        # casefold()는 길이를 바꿀 수 있으므로 ("ß" → "ss") 세그먼트 단위로 비교
        segments = [s.casefold() for s in prefix.rstrip(KEY_DELIMITER).split(KEY_DELIMITER)]
        depth = len(segments)

        data: dict[str, str] = {}
        for key, value in self.items():
            parts = key.split(KEY_DELIMITER)
            if len(parts) > depth and [p.casefold() for p in parts[:depth]] == segments:
                data[KEY_DELIMITER.join(parts[depth:])] = value

        return Snapshot(data, created_at=self._created_at)

    def child_keys(self) -> list[str]:
        """최상위 세그먼트 목록 (정렬, 중복 제거)"""
        seen: dict[str, str] = {}
        for key in self:
            head = key.split(KEY_DELIMITER, 1)[0]
            seen.setdefault(head.casefold(), head)
        return sorted(seen.values(), key=str.casefold)

    def to_tree(self) -> dict[str, Any]:
        """계층형 dict로 변환

        "A:B:Key" → {"A": {"B": {"Key": ...}}}
        같은 키가 값과 섹션을 동시에 가지면 섹션이 우선합니다.
        """
        tree: dict[str, Any] = {}
        # 짧은 키부터 채워서 섹션이 값을 덮어쓰도록 함
        for key in sorted(self, key=lambda k: k.count(KEY_DELIMITER)):
            *parents, leaf = key.split(KEY_DELIMITER)
            node = tree
            for part in parents:
                child = node.get(part)
                if not isinstance(child, dict):
                    child = {}
                    node[part] = child
                node = child
            if not isinstance(node.get(leaf), dict):
                node[leaf] = self[key]
        return tree

    def bind(self, model: type[ModelT]) -> ModelT:
        """pydantic 모델로 바인딩

        Args:
            model: 바인딩할 pydantic 모델 클래스

        Returns:
            검증된 모델 인스턴스 (문자열 값은 모델 타입으로 변환됨)

        Raises:
            pydantic.ValidationError: 값이 모델과 맞지 않을 때
        """
        return model.model_validate(self.to_tree())


def _trim_newline(value: str) -> str:
    if value.endswith("\r\n"):
        return value[:-2]
    if value.endswith("\n"):
        return value[:-1]
    return value


class SnapshotBuilder:
    """엔트리 소스로부터 새 스냅샷 구성"""

    def __init__(self, options: KeyPerFileOptions):
        self.options = options
        self.normalizer = KeyNormalizer(options)

    def build(self) -> Snapshot:
        """스냅샷 구성

        Returns:
            새 Snapshot (optional이고 소스가 없으면 빈 Snapshot)

        Raises:
            SourceUnavailableError: 소스를 나열할 수 없고 optional이 아닐 때
            EntryReadError: 엔트리 내용을 읽을 수 없을 때
        """
        source = self.options.entry_source
        if source is None:
            if self.options.optional:
                return Snapshot.empty()
            raise SourceUnavailableError(
                "An entry source for the directory is required "
                "when this source is not optional."
            )

        try:
            entries = source.list_entries()
        except SourceUnavailableError:
            if self.options.optional:
                logger.debug(f"[Builder] 소스 없음 (optional): {source!r}")
                return Snapshot.empty()
            raise

        data: dict[str, str] = {}
        folded: dict[str, str] = {}
        for entry in entries:
            key = self.normalizer.normalize(entry)
            if key is None:
                continue

            previous = folded.get(key.casefold())
            if previous is not None:
                logger.warning(
                    f"[Builder] 중복 키: '{key}' ({entry.name}) - 이전 값 '{previous}' 대체"
                )
                data.pop(previous)

            data[key] = self._read(entry)
            folded[key.casefold()] = key

        logger.debug(f"[Builder] 스냅샷 구성 완료: {len(data)}개 키")
        return Snapshot(data)

    def _read(self, entry: Entry) -> str:
        """엔트리 내용을 UTF-8 문자열로 읽기 (BOM 제거)"""
        try:
            with entry.open_read() as stream:
                raw = stream.read()
        except KeyPerFileError:
            raise
        except OSError as e:
            raise EntryReadError(
                f"Failed to read entry '{entry.name}': {e}", entry_name=entry.name
            ) from e

        try:
            value = (raw or b"").decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise EntryReadError(
                f"Entry '{entry.name}' is not valid UTF-8: {e}", entry_name=entry.name
            ) from e

        if self.options.trim_trailing_newline:
            value = _trim_newline(value)
        return value
