"""
헬스체크 API 라우터

서버 상태, 설정 프로바이더 상태, 현재 키 수를 반환합니다.
"""

import time

from fastapi import APIRouter, Depends

from keyperfile import KeyPerFileConfigProvider

from ..dependencies import get_config_provider
from ..schemas.response import HealthResponse

router = APIRouter(tags=["Health"])

API_VERSION = "1.0.0"

# 서버 시작 시각
_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="헬스체크",
    description="서버 상태 및 설정 프로바이더 상태를 반환합니다.",
)
async def health_check(
    provider: KeyPerFileConfigProvider | None = Depends(get_config_provider),
) -> HealthResponse:
    """서버 헬스체크

    Returns:
        HealthResponse: 서버 상태 정보
    """
    uptime = int(time.time() - _start_time)

    if provider is None:
        return HealthResponse(
            status="degraded",
            version=API_VERSION,
            uptime_seconds=uptime,
            config="unavailable",
        )

    last_error = provider.last_error
    return HealthResponse(
        status="ok",
        version=API_VERSION,
        uptime_seconds=uptime,
        config="watching" if provider.is_watching else "loaded",
        key_count=len(provider.snapshot),
        last_error=str(last_error) if last_error else None,
    )


@router.get(
    "/health/live",
    summary="Liveness 체크",
    description="서버가 살아있는지 확인합니다. (Kubernetes liveness probe용)",
)
async def liveness() -> dict[str, str]:
    """Liveness 체크 (경량)"""
    return {"status": "ok"}


@router.get(
    "/health/ready",
    summary="Readiness 체크",
    description="설정 프로바이더가 준비되었는지 확인합니다. (Kubernetes readiness probe용)",
)
async def readiness(
    provider: KeyPerFileConfigProvider | None = Depends(get_config_provider),
) -> dict[str, str]:
    """Readiness 체크

    설정 프로바이더가 초기화되었으면 ready 반환
    """
    if provider is None:
        return {"status": "not_ready", "error": "Config provider not initialized"}
    return {"status": "ready"}
