"""
스냅샷 저장소

현재 게시된 스냅샷 참조 하나만 보관합니다.
- current(): 락 없이 즉시 반환 (리로드 진행 중에도 안전)
- publish(): 참조 교체 한 번으로 원자적 게시
"""

from .snapshot import Snapshot


class SnapshotStore:
    """현재 스냅샷 보관소

    스냅샷은 불변이므로, current()로 얻은 참조는 이후 리로드와 무관하게
    계속 일관된 값을 보여줍니다.
    """

    def __init__(self, initial: Snapshot | None = None):
        self._current = initial if initial is not None else Snapshot.empty()

    def current(self) -> Snapshot:
        """현재 스냅샷"""
        return self._current

    def publish(self, snapshot: Snapshot) -> Snapshot:
        """새 스냅샷 게시

        Args:
            snapshot: 완전히 구성된 새 Snapshot

        Returns:
            교체된 이전 Snapshot
        """
        if not isinstance(snapshot, Snapshot):
            raise TypeError(f"Snapshot required, got {type(snapshot).__name__}")
        previous, self._current = self._current, snapshot
        return previous
