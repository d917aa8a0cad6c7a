"""
API Key 인증

X-API-Key 헤더를 검증합니다.
유효한 키가 하나도 없으면 모든 요청을 거부하며,
개발용 기본 키는 ENV=dev가 명시된 경우에만 등록됩니다.
"""

import os
import secrets

from fastapi import HTTPException, status
from fastapi.security import APIKeyHeader


class APIKeyAuth:
    """API Key 검증기

    사용법:
        ```python
        @router.get("/protected")
        async def protected_endpoint(
            api_key: str | None = Security(api_key_header),
            auth: APIKeyAuth = Depends(get_api_key_auth),
        ):
            auth.verify(api_key)
        ```
    """

    # 헤더 이름
    HEADER_NAME = "X-API-Key"

    # 개발 환경 기본 키 (ENV=dev 명시 시에만 허용)
    DEV_API_KEY = "dev-api-key-change-in-production"

    def __init__(self, api_keys: list[str] | None = None):
        """
        Args:
            api_keys: 유효한 API Key 목록 (None이면 환경변수에서 로드)
        """
        if api_keys is None:
            api_keys = load_api_keys_from_env()
        self._api_keys = tuple(dict.fromkeys(api_keys))

    def verify(self, api_key: str | None) -> str:
        """API Key 검증

        Args:
            api_key: 요청 헤더의 키 (없으면 None)

        Returns:
            검증된 API Key

        Raises:
            HTTPException: 키가 없거나 유효하지 않을 때 (401)
        """
        if not api_key:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail={
                    "error": "MISSING_API_KEY",
                    "message": f"Missing {self.HEADER_NAME} header",
                },
            )

        candidate = api_key.encode("utf-8")
        if not any(secrets.compare_digest(candidate, key.encode("utf-8")) for key in self._api_keys):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail={
                    "error": "INVALID_API_KEY",
                    "message": "Invalid API key",
                },
            )

        return api_key


def load_api_keys_from_env() -> list[str]:
    """환경변수에서 API Key 로드

    환경변수:
        - API_KEYS: 쉼표로 구분된 API Key 목록
        - API_KEY: 단일 API Key
        - KEYPERFILE_API_KEY: 서비스 전용 API Key
        - ENV: "dev"이고 위 키가 모두 없으면 DEV_API_KEY 사용

    Returns:
        유효한 API Key 목록 (없으면 빈 목록)
    """
    keys: list[str] = []

    if api_keys_str := os.getenv("API_KEYS"):
        keys.extend(k.strip() for k in api_keys_str.split(",") if k.strip())

    for env_var in ["API_KEY", "KEYPERFILE_API_KEY"]:
        if key := os.getenv(env_var):
            keys.append(key)

    if not keys and os.getenv("ENV") == "dev":
        keys.append(APIKeyAuth.DEV_API_KEY)

    return keys


# OpenAPI 문서에 보안 스킴으로 노출 (검증은 APIKeyAuth.verify)
api_key_header = APIKeyHeader(name=APIKeyAuth.HEADER_NAME, auto_error=False)

# 싱글톤 인스턴스
_auth_instance: APIKeyAuth | None = None


def get_api_key_auth() -> APIKeyAuth:
    """API Key 검증기 반환 (싱글톤)"""
    global _auth_instance
    if _auth_instance is None:
        _auth_instance = APIKeyAuth()
    return _auth_instance
