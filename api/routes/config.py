"""
설정 API 라우터

설정 키/값/섹션 조회 및 핫 리로드를 제공합니다.
값은 KEYPERFILE_REVEAL_VALUES가 설정되지 않으면 마스킹됩니다.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.concurrency import run_in_threadpool

from keyperfile import ErrorClassifier, KeyPerFileConfigProvider, KeyPerFileError
from keyperfile.export import MASK

from ..dependencies import (
    Settings,
    get_config_provider,
    get_settings,
    verify_api_key,
)
from ..schemas.response import (
    KeysResponse,
    ReloadResponse,
    SectionResponse,
    ValueResponse,
)

router = APIRouter(
    prefix="/api/v1/config",
    tags=["Config"],
    dependencies=[Depends(verify_api_key)],
)


def _require_provider(
    provider: KeyPerFileConfigProvider | None,
) -> KeyPerFileConfigProvider:
    if provider is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={
                "error": "CONFIG_UNAVAILABLE",
                "message": "Config provider not initialized",
            },
        )
    return provider


@router.get(
    "",
    response_model=KeysResponse,
    summary="설정 키 목록 조회",
    description="현재 스냅샷의 설정 키 목록을 조회합니다.",
)
async def list_keys(
    provider: KeyPerFileConfigProvider | None = Depends(get_config_provider),
) -> KeysResponse:
    """설정 키 목록 조회"""
    snapshot = _require_provider(provider).snapshot

    return KeysResponse(
        last_updated=snapshot.created_at,
        key_count=len(snapshot),
        keys=list(snapshot),
    )


@router.get(
    "/values/{key:path}",
    response_model=ValueResponse,
    summary="설정 값 조회",
    description="계층형 키(예: Database:Password)로 값을 조회합니다.",
)
async def get_value(
    key: str,
    provider: KeyPerFileConfigProvider | None = Depends(get_config_provider),
    settings: Settings = Depends(get_settings),
) -> ValueResponse:
    """설정 값 조회

    Args:
        key: 계층형 설정 키 (대소문자 무시)
    """
    snapshot = _require_provider(provider).snapshot

    value = snapshot.get(key)
    if value is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={
                "error": "NOT_FOUND",
                "message": f"Key '{key}' not found",
            },
        )

    masked = not settings.reveal_values
    return ValueResponse(
        last_updated=snapshot.created_at,
        key=key,
        value=MASK if masked else value,
        masked=masked,
    )


@router.get(
    "/sections/{section:path}",
    response_model=SectionResponse,
    summary="섹션 조회",
    description="섹션 키 하위의 값을 조회합니다. (접두사 제거)",
)
async def get_section(
    section: str,
    provider: KeyPerFileConfigProvider | None = Depends(get_config_provider),
    settings: Settings = Depends(get_settings),
) -> SectionResponse:
    """섹션 조회

    Args:
        section: 섹션 키 (예: Database)
    """
    snapshot = _require_provider(provider).snapshot
    masked = not settings.reveal_values

    return SectionResponse(
        last_updated=snapshot.created_at,
        section=section,
        values={
            key: MASK if masked else value
            for key, value in snapshot.get_section(section).items()
        },
        masked=masked,
    )


@router.post(
    "/reload",
    response_model=ReloadResponse,
    summary="설정 핫 리로드",
    description="디렉토리를 다시 읽어 새 스냅샷을 게시합니다.",
)
async def reload_config(
    provider: KeyPerFileConfigProvider | None = Depends(get_config_provider),
) -> ReloadResponse:
    """설정 핫 리로드

    Returns:
        ReloadResponse: 리로드 결과와 현재 스냅샷 정보
    """
    provider = _require_provider(provider)

    try:
        reloaded = await run_in_threadpool(provider.reload)
    except KeyPerFileError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "RELOAD_FAILED",
                "message": ErrorClassifier.format_message(e),
            },
        )

    snapshot = provider.snapshot
    return ReloadResponse(
        last_updated=snapshot.created_at,
        reloaded=reloaded,
        key_count=len(snapshot),
    )
