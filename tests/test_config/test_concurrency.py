"""
리로드 중 조회/바인딩 동시성 테스트

한 스레드가 계속 reload()를 호출하는 동안 다른 스레드에서
바인딩해도 예외가 없고, 항상 하나의 완전한 스냅샷만 관찰되어야 합니다.
"""

import threading
import time

from pydantic import BaseModel

from keyperfile import KeyPerFileConfigProvider, KeyPerFileOptions
from tests.sample_data import InMemoryEntrySource

DURATION_SECONDS = 0.25


class MyOptions(BaseModel):
    Number: int
    Text: str


def _run_reload_loop(provider: KeyPerFileConfigProvider, stop: threading.Event, errors: list):
    while not stop.is_set():
        try:
            provider.reload()
        except Exception as e:  # 테스트 실패로 보고
            errors.append(e)
            return


class TestReloadDuringBinding:
    """리로드 중 바인딩 테스트"""

    def test_binding_does_not_throw_if_reloaded_during_binding(self):
        source = InMemoryEntrySource.from_files({"Number": "-2", "Text": "Foo"})
        provider = KeyPerFileConfigProvider(KeyPerFileOptions(entry_source=source))

        stop = threading.Event()
        errors: list = []
        reloader = threading.Thread(
            target=_run_reload_loop, args=(provider, stop, errors), daemon=True
        )
        reloader.start()

        options = None
        deadline = time.monotonic() + DURATION_SECONDS
        try:
            while time.monotonic() < deadline:
                options = provider.bind(MyOptions)
        finally:
            stop.set()
            reloader.join(5.0)

        assert errors == []
        assert options.Number == -2
        assert options.Text == "Foo"

    def test_reads_never_mix_snapshots(self):
        """매 리로드마다 모든 값이 같은 세대 번호를 가짐"""
        keys = [f"Section__Key{i}" for i in range(20)]
        source = InMemoryEntrySource.from_files(dict.fromkeys(keys, "0"))
        provider = KeyPerFileConfigProvider(KeyPerFileOptions(entry_source=source))

        stop = threading.Event()
        errors: list = []

        def writer():
            generation = 0
            while not stop.is_set():
                generation += 1
                source.set_files(dict.fromkeys(keys, str(generation)))
                try:
                    provider.reload()
                except Exception as e:
                    errors.append(e)
                    return

        thread = threading.Thread(target=writer, daemon=True)
        thread.start()

        observed = set()
        deadline = time.monotonic() + DURATION_SECONDS
        try:
            while time.monotonic() < deadline:
                snapshot = provider.snapshot
                values = {snapshot[key.replace("__", ":")] for key in keys}
                assert len(values) == 1, f"torn snapshot: {values}"
                observed |= values
        finally:
            stop.set()
            thread.join(5.0)

        assert errors == []
        assert len(observed) >= 1

    def test_concurrent_reloads_publish_complete_snapshot(self):
        source = InMemoryEntrySource.from_files({"A": "1", "B": "1"})
        provider = KeyPerFileConfigProvider(KeyPerFileOptions(entry_source=source))
        errors: list = []

        def reload_many():
            for _ in range(50):
                try:
                    provider.reload()
                except Exception as e:
                    errors.append(e)

        threads = [threading.Thread(target=reload_many) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(10.0)

        assert errors == []
        assert dict(provider.items()) == {"A": "1", "B": "1"}
