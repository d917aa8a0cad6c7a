"""
API 응답 스키마 모듈
"""

from .response import (
    ConfigResponse,
    ErrorResponse,
    HealthResponse,
    KeysResponse,
    ReloadResponse,
    SectionResponse,
    ValueResponse,
)

__all__ = [
    "ConfigResponse",
    "ErrorResponse",
    "HealthResponse",
    "KeysResponse",
    "ReloadResponse",
    "SectionResponse",
    "ValueResponse",
]
