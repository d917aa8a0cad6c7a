"""
에러 분류 시스템

키-퍼-파일 설정 로드 중 발생하는 에러를 정의하고,
재시도 가능 여부를 판단하여 리로드 루프/로그에 활용.
"""

from enum import Enum


class ErrorCategory(str, Enum):
    """에러 카테고리"""

    RETRYABLE = "retryable"  # 마운트 지연, 일시적 I/O 장애
    NON_RETRYABLE = "non_retryable"  # 설정 오류
    UNKNOWN = "unknown"


class KeyPerFileError(Exception):
    """키-퍼-파일 기본 에러"""

    category: ErrorCategory = ErrorCategory.UNKNOWN

    def __init__(self, message: str, category: ErrorCategory | None = None):
        super().__init__(message)
        if category is not None:
            self.category = category


class InvalidConfigurationError(KeyPerFileError, ValueError):
    """잘못된 설정 (상대 경로, 잘못된 옵션 값 등)

    설정 단계에서 즉시 실패합니다.
    """

    category = ErrorCategory.NON_RETRYABLE


class SourceUnavailableError(KeyPerFileError):
    """디렉토리(엔트리 소스)가 없거나 나열할 수 없음"""

    category = ErrorCategory.RETRYABLE


class EntryReadError(KeyPerFileError):
    """개별 엔트리 내용을 읽거나 디코딩할 수 없음"""

    category = ErrorCategory.RETRYABLE

    def __init__(
        self,
        message: str,
        entry_name: str = "",
        category: ErrorCategory | None = None,
    ):
        super().__init__(message, category)
        self.entry_name = entry_name


class ErrorClassifier:
    """에러 분류기"""

    @classmethod
    def classify(cls, error: Exception) -> ErrorCategory:
        """에러를 분류하여 카테고리 반환

        Args:
            error: 분류할 예외 객체

        Returns:
            ErrorCategory: 재시도 가능 여부에 따른 카테고리
        """
        if isinstance(error, KeyPerFileError):
            return error.category

        # 예외 타입 기반 분류
        if isinstance(error, UnicodeDecodeError):
            return ErrorCategory.NON_RETRYABLE

        if isinstance(error, OSError):
            return ErrorCategory.RETRYABLE

        if isinstance(error, (ValueError, TypeError, KeyError)):
            return ErrorCategory.NON_RETRYABLE

        return ErrorCategory.UNKNOWN

    @classmethod
    def format_message(cls, error: Exception) -> str:
        """에러 메시지 포맷팅

        Args:
            error: 포맷팅할 예외 객체

        Returns:
            str: 카테고리 라벨이 포함된 에러 메시지
        """
        category = cls.classify(error)
        label = {
            ErrorCategory.RETRYABLE: "[재시도 가능]",
            ErrorCategory.NON_RETRYABLE: "[재시도 불가]",
            ErrorCategory.UNKNOWN: "[분류되지 않음]",
        }

        return f"{label[category]} {type(error).__name__}: {str(error)}"
