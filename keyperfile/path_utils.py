"""
디렉토리 경로 판별 유틸리티

문제:
- 마운트된 시크릿 볼륨 경로는 반드시 절대 경로여야 함
- 설정은 Linux 컨테이너(/run/secrets)와 Windows 호스트(C:/secrets, //NAS/secrets)
  양쪽에서 작성될 수 있음
- POSIX에서 "C:/secrets"는 현재 디렉토리 기준 상대 경로

해결:
- 현재 플랫폼 규칙으로만 절대 경로 판별
- Windows에서만 드라이브 / UNC 경로를 절대 경로로 인식, 백슬래시 정규화
"""

import os
from pathlib import Path, PurePosixPath, PureWindowsPath

IS_WINDOWS = os.name == "nt"


def normalize_separators(path: str) -> str:
    """백슬래시를 슬래시로 정규화

    Examples:
        >>> normalize_separators("C:\\\\secrets\\\\app")
        'C:/secrets/app'
    """
    return path.replace("\\", "/")


def is_absolute_path(path: str) -> bool:
    """현재 플랫폼 기준 절대 경로 여부 판별

    Args:
        path: 검사할 경로

    Returns:
        POSIX: "/"로 시작하면 True
        Windows: 드라이브 경로(C:/) 또는 UNC 경로(//NAS/share)이면 True

    Examples:
        >>> is_absolute_path("/run/secrets")  # POSIX
        True
        >>> is_absolute_path("C:/secrets")  # POSIX
        False
        >>> is_absolute_path("secrets")
        False
    """
    if not path:
        return False

    if IS_WINDOWS:
        return PureWindowsPath(path).is_absolute()

    return PurePosixPath(path).is_absolute()


def to_directory_path(path: str) -> Path:
    """설정 문자열을 디렉토리 Path로 변환

    Windows에서는 백슬래시를 슬래시로 정규화합니다.
    POSIX에서는 백슬래시도 파일 이름 문자이므로 그대로 사용합니다.
    """
    if IS_WINDOWS:
        return Path(normalize_separators(path))
    return Path(path)
