"""
키-퍼-파일 소스 옵션

디렉토리 경로, 무시 규칙, 선택(optional) 여부, 변경 감지 설정을 관리합니다.
환경변수 기반 생성(from_env)과 검증(validate)을 지원합니다.
"""

import logging
import os
from dataclasses import dataclass
from typing import Any, Callable

from .errors import InvalidConfigurationError
from .path_utils import is_absolute_path, to_directory_path
from .sources import EntrySource, PhysicalEntrySource

logger = logging.getLogger(__name__)

IgnoreCondition = Callable[[str], bool]

DEFAULT_IGNORE_PREFIX = "ignore."

_TRUE_VALUES = {"1", "true", "yes", "on"}


class _DefaultIgnore:
    """ignore_condition 미설정 표시 (ignore_prefix 규칙 사용)"""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "DEFAULT_IGNORE"


# ignore_condition 3상태: DEFAULT_IGNORE(접두사 규칙) / callable(사용자 정의) / None(필터 없음)
DEFAULT_IGNORE = _DefaultIgnore()


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUE_VALUES


@dataclass
class KeyPerFileOptions:
    """키-퍼-파일 소스 옵션"""

    entry_source: EntrySource | None = None
    optional: bool = False
    ignore_prefix: str | None = DEFAULT_IGNORE_PREFIX
    ignore_condition: Any = DEFAULT_IGNORE
    reload_on_change: bool = False
    reload_delay: float = 0.25  # 변경 감지 후 리로드까지 대기 (초)
    trim_trailing_newline: bool = False

    @classmethod
    def from_directory(
        cls,
        path: str | None,
        optional: bool = False,
        reload_on_change: bool = False,
        **kwargs: Any,
    ) -> "KeyPerFileOptions":
        """디렉토리 경로로 옵션 생성

        Args:
            path: 시크릿 디렉토리 (절대 경로)
            optional: True면 디렉토리가 없어도 빈 설정으로 진행
            reload_on_change: 디렉토리 변경 시 자동 리로드
            **kwargs: 나머지 옵션 필드

        Raises:
            InvalidConfigurationError: path가 None이거나,
                optional=False인데 절대 경로가 아닐 때
        """
        if path is None:
            raise InvalidConfigurationError("A directory path is required.")

        options = cls(optional=optional, reload_on_change=reload_on_change, **kwargs)

        if not is_absolute_path(path):
            if not optional:
                raise InvalidConfigurationError(
                    f"The path must be absolute. (path: {path!r})"
                )
            logger.warning(f"[Options] 상대 경로 무시 (optional): {path}")
            return options

        directory = to_directory_path(path)
        if optional and not directory.is_dir():
            logger.info(f"[Options] 디렉토리 없음 (optional): {path}")
            return options

        options.entry_source = PhysicalEntrySource(directory)
        return options

    @classmethod
    def from_env(cls, prefix: str = "KEYPERFILE_") -> "KeyPerFileOptions":
        """환경변수에서 옵션 로드

        환경변수:
            - {prefix}DIRECTORY: 시크릿 디렉토리 (절대 경로)
            - {prefix}OPTIONAL: 디렉토리 없음 허용 (기본: false)
            - {prefix}RELOAD_ON_CHANGE: 변경 시 자동 리로드 (기본: false)
            - {prefix}IGNORE_PREFIX: 무시할 파일 접두사 (빈 값이면 비활성화)
            - {prefix}RELOAD_DELAY: 리로드 디바운스 (초, 기본: 0.25)
            - {prefix}TRIM_TRAILING_NEWLINE: 값 끝 줄바꿈 1개 제거 (기본: false)
        """
        ignore_prefix = os.getenv(f"{prefix}IGNORE_PREFIX", DEFAULT_IGNORE_PREFIX)

        try:
            reload_delay = float(os.getenv(f"{prefix}RELOAD_DELAY", "0.25"))
        except ValueError as e:
            raise InvalidConfigurationError(
                f"Invalid {prefix}RELOAD_DELAY: {os.getenv(f'{prefix}RELOAD_DELAY')}"
            ) from e

        return cls.from_directory(
            os.getenv(f"{prefix}DIRECTORY"),
            optional=_env_bool(f"{prefix}OPTIONAL", False),
            reload_on_change=_env_bool(f"{prefix}RELOAD_ON_CHANGE", False),
            ignore_prefix=ignore_prefix or None,
            reload_delay=reload_delay,
            trim_trailing_newline=_env_bool(f"{prefix}TRIM_TRAILING_NEWLINE", False),
        )

    def validate(self) -> None:
        """옵션 검증

        Raises:
            InvalidConfigurationError: 잘못된 옵션 값
        """
        errors = []

        if self.reload_delay < 0:
            errors.append(f"reload_delay must be >= 0: {self.reload_delay}")

        if not (
            self.ignore_condition is DEFAULT_IGNORE
            or self.ignore_condition is None
            or callable(self.ignore_condition)
        ):
            errors.append(
                "ignore_condition must be DEFAULT_IGNORE, None or a callable: "
                f"{self.ignore_condition!r}"
            )

        if self.entry_source is not None and not isinstance(
            self.entry_source, EntrySource
        ):
            errors.append(
                f"entry_source must be an EntrySource: {type(self.entry_source).__name__}"
            )

        if errors:
            for error in errors:
                logger.error(f"[Options] {error}")
            raise InvalidConfigurationError(
                f"Invalid options: {len(errors)} error(s)\n" + "\n".join(errors)
            )
