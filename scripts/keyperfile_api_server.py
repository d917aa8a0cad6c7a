#!/usr/bin/env python
"""
KeyPerFile 설정 API 서버 실행 스크립트

사용법:
    # 개발 모드 (코드 리로드)
    python scripts/keyperfile_api_server.py --env dev --directory /run/secrets

    # 프로덕션 모드 (디렉토리 변경 감지)
    python scripts/keyperfile_api_server.py --env prod --directory /run/secrets --reload-on-change
"""

import argparse
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

# 프로젝트 루트를 Python 경로에 추가
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))


def setup_logging(level: str = "INFO") -> None:
    """로깅 설정"""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def load_env_file(env: str) -> None:
    """환경별 .env 파일 로드"""
    env_files = [
        PROJECT_ROOT / f".env.{env}",
        PROJECT_ROOT / ".env.local",
        PROJECT_ROOT / ".env",
    ]

    for env_file in env_files:
        if env_file.exists():
            load_dotenv(env_file)
            print(f"[Config] 환경 파일 로드: {env_file}")
            break


def main() -> None:
    """메인 함수"""
    parser = argparse.ArgumentParser(
        description="KeyPerFile 설정 API 서버",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
예시:
    # 개발 모드
    python scripts/keyperfile_api_server.py --env dev --directory /run/secrets

    # 커스텀 설정
    python scripts/keyperfile_api_server.py --host 0.0.0.0 --port 8080 --log-level DEBUG
        """,
    )

    parser.add_argument(
        "--env",
        choices=["dev", "staging", "prod"],
        default="dev",
        help="실행 환경 (기본: dev)",
    )
    parser.add_argument(
        "--host",
        default=None,
        help="바인딩 호스트 (기본: 환경변수 API_HOST 또는 0.0.0.0)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="바인딩 포트 (기본: 환경변수 API_PORT 또는 8000)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="로그 레벨",
    )

    # 설정 소스
    parser.add_argument(
        "--directory",
        default=None,
        help="시크릿 디렉토리 (기본: 환경변수 KEYPERFILE_DIRECTORY)",
    )
    parser.add_argument(
        "--optional",
        action="store_true",
        help="디렉토리가 없어도 빈 설정으로 시작",
    )
    parser.add_argument(
        "--reload-on-change",
        action="store_true",
        help="디렉토리 변경 시 자동 리로드",
    )
    parser.add_argument(
        "--reveal-values",
        action="store_true",
        help="API 응답에 실제 값 노출 (기본: 마스킹)",
    )

    args = parser.parse_args()

    os.environ["ENV"] = args.env
    load_env_file(args.env)

    log_level = args.log_level or ("DEBUG" if args.env == "dev" else "INFO")
    setup_logging(log_level)

    host = args.host or os.getenv("API_HOST", "0.0.0.0")
    port = args.port or int(os.getenv("API_PORT", "8000"))

    # 설정 소스 환경변수 (api.server lifespan에서 사용)
    if args.directory:
        os.environ["KEYPERFILE_DIRECTORY"] = args.directory
    if args.optional:
        os.environ["KEYPERFILE_OPTIONAL"] = "true"
    if args.reload_on_change:
        os.environ["KEYPERFILE_RELOAD_ON_CHANGE"] = "true"
    if args.reveal_values:
        os.environ["KEYPERFILE_REVEAL_VALUES"] = "true"

    print(f"""
[KeyPerFile API]
  환경: {args.env}
  주소: http://{host}:{port}
  디렉토리: {os.getenv("KEYPERFILE_DIRECTORY", "(미설정)")}
  변경 감지: {'ON' if args.reload_on_change else 'OFF'}
    """)

    import uvicorn

    try:
        uvicorn.run(
            "api.server:app",
            host=host,
            port=port,
            log_level=log_level.lower(),
        )
    except KeyboardInterrupt:
        print("\n[Server] 서버 종료")


if __name__ == "__main__":
    main()
