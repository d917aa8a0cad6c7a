"""
FastAPI 의존성 주입 모듈

설정 프로바이더, Auth, 앱 설정 등의 의존성을 관리합니다.
"""

import os

from fastapi import Depends, Security

from keyperfile import KeyPerFileConfigProvider, KeyPerFileOptions

from .middleware.auth import APIKeyAuth, api_key_header, get_api_key_auth


# ============================================================================
# API Key 인증 의존성
# ============================================================================
async def verify_api_key(
    api_key: str | None = Security(api_key_header),
    auth: APIKeyAuth = Depends(get_api_key_auth),
) -> str:
    """API Key 검증 의존성

    Args:
        api_key: X-API-Key 헤더 값
        auth: APIKeyAuth 인스턴스

    Returns:
        검증된 API Key
    """
    return auth.verify(api_key)


# ============================================================================
# 설정 프로바이더 의존성
# ============================================================================
_config_provider: KeyPerFileConfigProvider | None = None


def set_config_provider(provider: KeyPerFileConfigProvider | None) -> None:
    """설정 프로바이더 설정 (앱 시작 시 호출)

    Args:
        provider: KeyPerFileConfigProvider 인스턴스 (None이면 해제)
    """
    global _config_provider
    _config_provider = provider


def get_config_provider() -> KeyPerFileConfigProvider | None:
    """설정 프로바이더 의존성

    Returns:
        KeyPerFileConfigProvider 인스턴스 또는 None
    """
    return _config_provider


# ============================================================================
# 환경 설정 의존성
# ============================================================================
class Settings:
    """앱 설정 클래스"""

    def __init__(self):
        self.env = os.getenv("ENV", "dev")
        self.debug = self.env == "dev"

        # API 서버 설정
        self.api_host = os.getenv("API_HOST", "0.0.0.0")
        self.api_port = int(os.getenv("API_PORT", "8000"))

        # 값 노출 여부 (기본: 마스킹)
        self.reveal_values = os.getenv("KEYPERFILE_REVEAL_VALUES", "").lower() in (
            "1",
            "true",
            "yes",
            "on",
        )

    def load_options(self) -> KeyPerFileOptions:
        """KEYPERFILE_* 환경변수에서 소스 옵션 로드"""
        return KeyPerFileOptions.from_env()


_settings: Settings | None = None


def get_settings() -> Settings:
    """앱 설정 의존성 (싱글톤)

    Returns:
        Settings 인스턴스
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
