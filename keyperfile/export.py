"""
스냅샷 출력 포맷 변환

스냅샷을 YAML / JSON / env(KEY=value) 형식 문자열로 변환합니다.
디버깅 및 운영 점검용이며, mask=True면 값을 가립니다.
"""

import json
from typing import Any

import yaml

from .normalizer import KEY_DELIMITER, NAME_SEPARATOR
from .snapshot import Snapshot

MASK = "****"

SUPPORTED_FORMATS = ("yaml", "json", "env")


def _mask_tree(node: Any) -> Any:
    if isinstance(node, dict):
        return {k: _mask_tree(v) for k, v in node.items()}
    return MASK


def dump_snapshot(snapshot: Snapshot, fmt: str = "yaml", mask: bool = False) -> str:
    """스냅샷을 문자열로 변환

    Args:
        snapshot: 변환할 스냅샷
        fmt: "yaml", "json", "env" 중 하나
        mask: True면 모든 값을 "****"로 대체

    Returns:
        변환된 문자열

    Raises:
        ValueError: 지원하지 않는 포맷
    """
    fmt = fmt.lower()
    if fmt not in SUPPORTED_FORMATS:
        raise ValueError(
            f"Unsupported format: {fmt} (supported: {', '.join(SUPPORTED_FORMATS)})"
        )

    if fmt == "env":
        lines = []
        for key, value in snapshot.items():
            name = key.replace(KEY_DELIMITER, NAME_SEPARATOR)
            lines.append(f"{name}={MASK if mask else json.dumps(value, ensure_ascii=False)}")
        return "\n".join(lines) + ("\n" if lines else "")

    tree = snapshot.to_tree()
    if mask:
        tree = _mask_tree(tree)

    if fmt == "json":
        return json.dumps(tree, ensure_ascii=False, indent=2) + "\n"

    return yaml.safe_dump(
        tree, default_flow_style=False, allow_unicode=True, sort_keys=False
    )
