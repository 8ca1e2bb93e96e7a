"""Tests for the reader/writer lock."""

from __future__ import annotations

import threading
import time

from postfinder.utils.locks import ReadWriteLock


class TestReadWriteLock:
    """Test ReadWriteLock semantics."""

    def test_readers_share(self) -> None:
        """Several readers hold the lock at the same time."""
        lock = ReadWriteLock()
        inside = threading.Barrier(3, timeout=5)
        errors: list[BaseException] = []

        def reader() -> None:
            try:
                with lock.read_locked():
                    inside.wait()
            except BaseException as exc:  # noqa: BLE001
                errors.append(exc)

        threads = [threading.Thread(target=reader) for _ in range(3)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=5)

        assert errors == []

    def test_writer_excludes_readers(self) -> None:
        """A reader waits until the writer releases."""
        lock = ReadWriteLock()
        events: list[str] = []
        lock.acquire_write()

        def reader() -> None:
            with lock.read_locked():
                events.append("read")

        thread = threading.Thread(target=reader)
        thread.start()
        time.sleep(0.05)
        events.append("write-done")
        lock.release_write()
        thread.join(timeout=5)

        assert events == ["write-done", "read"]

    def test_writer_waits_for_readers(self) -> None:
        """A writer waits until active readers are done."""
        lock = ReadWriteLock()
        events: list[str] = []
        lock.acquire_read()

        def writer() -> None:
            with lock.write_locked():
                events.append("write")

        thread = threading.Thread(target=writer)
        thread.start()
        time.sleep(0.05)
        events.append("read-done")
        lock.release_read()
        thread.join(timeout=5)

        assert events == ["read-done", "write"]

    def test_released_after_exception(self) -> None:
        """Context managers release the lock when the body raises."""
        lock = ReadWriteLock()
        try:
            with lock.write_locked():
                raise RuntimeError("boom")
        except RuntimeError:
            pass

        with lock.read_locked():
            pass
        with lock.write_locked():
            pass
