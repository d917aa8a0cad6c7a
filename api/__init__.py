"""
KeyPerFile 설정 조회 API 모듈

FastAPI 기반 HTTP API로 외부 시스템에서 설정 키/값을 조회하고 리로드할 수 있습니다.
"""

from .server import app, create_app

__all__ = ["app", "create_app"]
