#!/usr/bin/env python
"""
디렉토리 설정 스냅샷 출력 스크립트

사용법:
    # YAML 트리로 출력 (값 마스킹)
    python scripts/dump_config.py /run/secrets --mask

    # env 형식으로 출력
    python scripts/dump_config.py /run/secrets --format env

    # 변경 감지 시마다 다시 출력 (Ctrl+C로 종료)
    python scripts/dump_config.py /run/secrets --watch
"""

import argparse
import logging
import sys
import threading
from pathlib import Path

# 프로젝트 루트를 Python 경로에 추가
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from keyperfile import (  # noqa: E402
    ErrorClassifier,
    KeyPerFileConfigProvider,
    KeyPerFileError,
    KeyPerFileOptions,
    dump_snapshot,
)
from keyperfile.export import SUPPORTED_FORMATS  # noqa: E402

logger = logging.getLogger("dump_config")


def main() -> int:
    parser = argparse.ArgumentParser(description="KeyPerFile 스냅샷 출력")
    parser.add_argument("directory", help="시크릿 디렉토리 (절대 경로)")
    parser.add_argument(
        "--format",
        choices=SUPPORTED_FORMATS,
        default="yaml",
        help="출력 형식 (기본: yaml)",
    )
    parser.add_argument("--mask", action="store_true", help="값 마스킹")
    parser.add_argument("--optional", action="store_true", help="디렉토리 없음 허용")
    parser.add_argument(
        "--ignore-prefix",
        default="ignore.",
        help="무시할 파일 접두사 (빈 문자열이면 비활성화, 기본: ignore.)",
    )
    parser.add_argument("--trim-newline", action="store_true", help="값 끝 줄바꿈 제거")
    parser.add_argument("--watch", action="store_true", help="변경 시 다시 출력")
    parser.add_argument("-v", "--verbose", action="store_true", help="DEBUG 로그")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        options = KeyPerFileOptions.from_directory(
            args.directory,
            optional=args.optional,
            reload_on_change=args.watch,
            ignore_prefix=args.ignore_prefix or None,
            trim_trailing_newline=args.trim_newline,
        )
        provider = KeyPerFileConfigProvider(options)
    except KeyPerFileError as e:
        print(ErrorClassifier.format_message(e), file=sys.stderr)
        return 1

    def render() -> None:
        sys.stdout.write(dump_snapshot(provider.snapshot, args.format, mask=args.mask))
        sys.stdout.flush()

    render()
    if not args.watch:
        return 0

    with provider:
        provider.on_reload(render)
        try:
            threading.Event().wait()
        except KeyboardInterrupt:
            logger.info("[Dump] 종료")
    return 0


if __name__ == "__main__":
    sys.exit(main())
