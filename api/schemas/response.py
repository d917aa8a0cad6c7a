"""
API 응답 스키마 정의

설정 키 목록, 값 조회, 섹션 조회, 리로드 결과를 반환하는 Pydantic 모델입니다.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """API 에러 응답"""

    error: str = Field(..., description="에러 코드")
    message: str = Field(..., description="에러 메시지")
    details: dict[str, Any] | None = Field(
        default=None,
        description="상세 에러 정보",
    )

    model_config = {
        "json_schema_extra": {
            "example": {
                "error": "NOT_FOUND",
                "message": "Key 'Database:Password' not found",
                "details": None,
            }
        }
    }


class HealthResponse(BaseModel):
    """헬스체크 응답

    GET /health 응답으로 반환됩니다.
    """

    status: str = Field(default="ok", description="서버 상태")
    version: str = Field(..., description="API 버전")
    uptime_seconds: int = Field(default=0, description="서버 가동 시간 (초)")

    # 설정 상태
    config: str = Field(default="unknown", description="설정 프로바이더 상태")
    key_count: int = Field(default=0, description="현재 스냅샷 키 수")
    last_error: str | None = Field(default=None, description="마지막 리로드 에러")

    model_config = {
        "json_schema_extra": {
            "example": {
                "status": "ok",
                "version": "1.0.0",
                "uptime_seconds": 3600,
                "config": "loaded",
                "key_count": 12,
                "last_error": None,
            }
        }
    }


class ConfigResponse(BaseModel):
    """설정 조회 응답

    GET /api/v1/config/* 응답으로 반환됩니다.
    """

    last_updated: datetime | None = Field(
        default=None, description="스냅샷 생성 시각"
    )


class KeysResponse(ConfigResponse):
    """키 목록 응답"""

    key_count: int = Field(default=0, description="키 수")
    keys: list[str] = Field(default_factory=list, description="설정 키 목록")


class ValueResponse(ConfigResponse):
    """값 조회 응답"""

    key: str = Field(..., description="설정 키")
    value: str = Field(..., description="설정 값 (기본: 마스킹)")
    masked: bool = Field(default=True, description="마스킹 여부")


class SectionResponse(ConfigResponse):
    """섹션 조회 응답"""

    section: str = Field(..., description="섹션 키")
    values: dict[str, str] = Field(
        default_factory=dict,
        description="섹션 하위 값 (접두사 제거된 키 -> 값)",
    )
    masked: bool = Field(default=True, description="마스킹 여부")


class ReloadResponse(ConfigResponse):
    """리로드 결과 응답"""

    reloaded: bool = Field(..., description="새 스냅샷 게시 여부")
    key_count: int = Field(default=0, description="현재 스냅샷 키 수")
