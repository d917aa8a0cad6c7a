"""
에러 분류 시스템 테스트

에러 카테고리 및 재시도 가능 여부 판단 테스트.
"""

import pytest

from keyperfile.errors import (
    EntryReadError,
    ErrorCategory,
    ErrorClassifier,
    InvalidConfigurationError,
    KeyPerFileError,
    SourceUnavailableError,
)


class TestErrorClassifier:
    """에러 분류기 테스트"""

    def test_classify_invalid_configuration(self):
        """재시도 불가: 잘못된 설정"""
        error = InvalidConfigurationError("The path must be absolute.")

        assert ErrorClassifier.classify(error) == ErrorCategory.NON_RETRYABLE

    def test_classify_source_unavailable(self):
        """재시도 가능: 디렉토리 없음 (마운트 지연)"""
        error = SourceUnavailableError("The root directory doesn't exist: /run/secrets")

        assert ErrorClassifier.classify(error) == ErrorCategory.RETRYABLE

    def test_classify_entry_read_error(self):
        """재시도 가능: 엔트리 읽기 실패"""
        error = EntryReadError("Failed to read entry 'Secret1'", entry_name="Secret1")

        assert ErrorClassifier.classify(error) == ErrorCategory.RETRYABLE
        assert error.entry_name == "Secret1"

    def test_classify_explicit_category_override(self):
        """명시적 카테고리가 기본 카테고리보다 우선"""
        error = EntryReadError("bad utf-8", category=ErrorCategory.NON_RETRYABLE)

        assert ErrorClassifier.classify(error) == ErrorCategory.NON_RETRYABLE

    def test_classify_os_error(self):
        """재시도 가능: OSError"""
        assert ErrorClassifier.classify(PermissionError("denied")) == ErrorCategory.RETRYABLE

    def test_classify_unicode_error(self):
        """재시도 불가: 디코딩 실패"""
        error = UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte")

        assert ErrorClassifier.classify(error) == ErrorCategory.NON_RETRYABLE

    def test_classify_value_error(self):
        """재시도 불가: ValueError"""
        assert ErrorClassifier.classify(ValueError("bad")) == ErrorCategory.NON_RETRYABLE

    def test_classify_unknown(self):
        """분류 불가 에러"""
        assert ErrorClassifier.classify(RuntimeError("?")) == ErrorCategory.UNKNOWN


class TestErrorFormatting:
    """에러 메시지 포맷팅 테스트"""

    def test_format_retryable(self):
        message = ErrorClassifier.format_message(SourceUnavailableError("missing"))

        assert message == "[재시도 가능] SourceUnavailableError: missing"

    def test_format_non_retryable(self):
        message = ErrorClassifier.format_message(InvalidConfigurationError("relative"))

        assert message.startswith("[재시도 불가]")
        assert "relative" in message

    def test_format_unknown(self):
        message = ErrorClassifier.format_message(RuntimeError("boom"))

        assert message.startswith("[분류되지 않음]")


class TestErrorHierarchy:
    """에러 계층 테스트"""

    @pytest.mark.parametrize(
        "error_cls",
        [InvalidConfigurationError, SourceUnavailableError, EntryReadError],
    )
    def test_subclasses_base(self, error_cls):
        assert issubclass(error_cls, KeyPerFileError)

    def test_invalid_configuration_is_value_error(self):
        """잘못된 설정은 ValueError로도 잡을 수 있음"""
        with pytest.raises(ValueError, match="The path must be absolute."):
            raise InvalidConfigurationError("The path must be absolute.")
