"""
FastAPI 앱 정의 및 라우터 통합

키-퍼-파일 설정 조회 API 서버의 메인 모듈입니다.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from keyperfile import ErrorClassifier, KeyPerFileConfigProvider, KeyPerFileError

from .dependencies import get_config_provider, get_settings, set_config_provider
from .routes import config_router, health_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """앱 라이프사이클 관리

    시작 시:
        - KEYPERFILE_* 환경변수로 설정 프로바이더 초기화
          (이미 설정된 프로바이더가 있으면 그대로 사용)

    종료 시:
        - 직접 생성한 프로바이더의 변경 감지 해제
    """
    settings = get_settings()
    owned: KeyPerFileConfigProvider | None = None

    if get_config_provider() is None:
        try:
            owned = KeyPerFileConfigProvider(settings.load_options())
            set_config_provider(owned)
            logger.info(f"[Server] 설정 프로바이더 초기화 완료: {len(owned.snapshot)}개 키")
        except KeyPerFileError as e:
            logger.warning(
                f"[Server] 설정 프로바이더 초기화 실패: {ErrorClassifier.format_message(e)}"
            )

    yield

    if owned is not None:
        owned.close()
        set_config_provider(None)
    logger.info("[Server] 서버 종료")


def create_app(
    title: str = "KeyPerFile Config API",
    version: str = "1.0.0",
    debug: bool = False,
) -> FastAPI:
    """FastAPI 앱 생성

    Args:
        title: API 제목
        version: API 버전
        debug: 디버그 모드

    Returns:
        FastAPI 앱 인스턴스
    """
    settings = get_settings()

    app = FastAPI(
        title=title,
        version=version,
        description="""
# KeyPerFile 설정 API

마운트된 디렉토리(예: /run/secrets)의 파일을 설정 키/값으로 조회합니다.

## 주요 기능

- **키 목록**: GET /api/v1/config
- **값 조회**: GET /api/v1/config/values/{key}
- **섹션 조회**: GET /api/v1/config/sections/{section}
- **핫 리로드**: POST /api/v1/config/reload

## 인증

모든 설정 API 요청에는 `X-API-Key` 헤더가 필요합니다.
        """,
        debug=debug or settings.debug,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )

    # 라우터 등록
    app.include_router(health_router)  # /health
    app.include_router(config_router)  # /api/v1/config

    # 글로벌 예외 핸들러
    @app.exception_handler(Exception)
    async def global_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        """글로벌 예외 핸들러"""
        logger.exception(f"[Server] 처리되지 않은 예외: {exc}")
        return JSONResponse(
            status_code=500,
            content={
                "error": "INTERNAL_ERROR",
                "message": "Internal server error",
                "details": str(exc) if settings.debug else None,
            },
        )

    return app


# 기본 앱 인스턴스
app = create_app()


# 직접 실행 시
if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "api.server:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
    )
