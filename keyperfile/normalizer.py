"""
파일명 → 설정 키 변환

- "Secret0__Secret1__Key" → "Secret0:Secret1:Key"
- 디렉토리는 항상 제외 (하위 디렉토리 재귀 없음)
- ignore_condition 설정 시 해당 조건만 사용, 미설정 시 ignore_prefix 규칙 사용
"""

from .options import DEFAULT_IGNORE, IgnoreCondition, KeyPerFileOptions
from .sources import Entry

# 파일명 내부 구분자
NAME_SEPARATOR = "__"

# 설정 키 계층 구분자
KEY_DELIMITER = ":"


def normalize_key(name: str) -> str:
    """파일명을 계층형 설정 키로 변환

    Examples:
        >>> normalize_key("Secret0__Secret1__Key")
        'Secret0:Secret1:Key'
        >>> normalize_key("Secret1")
        'Secret1'
    """
    return name.replace(NAME_SEPARATOR, KEY_DELIMITER)


def resolve_ignore_condition(options: KeyPerFileOptions) -> IgnoreCondition | None:
    """실제 적용할 무시 조건 반환 (None이면 필터 없음)"""
    if options.ignore_condition is not DEFAULT_IGNORE:
        return options.ignore_condition

    prefix = options.ignore_prefix
    if not prefix:
        return None

    return lambda name: name.startswith(prefix)


class KeyNormalizer:
    """엔트리 → 설정 키 변환기"""

    def __init__(self, options: KeyPerFileOptions):
        self._ignore = resolve_ignore_condition(options)

    def is_ignored(self, name: str) -> bool:
        return self._ignore is not None and bool(self._ignore(name))

    def normalize(self, entry: Entry) -> str | None:
        """엔트리를 설정 키로 변환

        Returns:
            설정 키 또는 None (디렉토리/무시 대상)
        """
        if entry.is_directory:
            return None
        if self.is_ignored(entry.name):
            return None
        return normalize_key(entry.name)
