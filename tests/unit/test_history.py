"""Tests for the bounded, thread-safe response history."""

from __future__ import annotations

import threading

import pytest

from hookwatch.webhooks.history import MAX_HISTORY, ResponseHistory
from tests.conftest import make_response


class TestResponseHistory:
    def test_starts_empty(self) -> None:
        history = ResponseHistory()
        assert history.snapshot() == []
        assert history.latest() is None
        assert len(history) == 0

    def test_default_capacity_is_100(self) -> None:
        assert ResponseHistory().capacity == MAX_HISTORY == 100

    def test_rejects_zero_capacity(self) -> None:
        with pytest.raises(ValueError):
            ResponseHistory(capacity=0)

    def test_insertion_order_and_latest_is_tail(self) -> None:
        history = ResponseHistory()
        first = make_response(status_code=200)
        second = make_response(status_code=404)
        history.append(first)
        history.append(second)
        assert history.snapshot() == [first, second]
        assert history.latest() is second

    def test_keeps_most_recent_100_in_order(self) -> None:
        history = ResponseHistory()
        entries = [make_response(status_code=200, data={"n": i}) for i in range(250)]
        for entry in entries:
            history.append(entry)
        snapshot = history.snapshot()
        assert len(snapshot) == 100
        assert snapshot == entries[-100:]
        assert history.latest() is entries[-1]

    def test_small_capacity_evicts_oldest(self) -> None:
        history = ResponseHistory(capacity=2)
        a, b, c = (make_response(data={"n": i}) for i in range(3))
        for entry in (a, b, c):
            history.append(entry)
        assert history.snapshot() == [b, c]

    def test_clear_empties_regardless_of_size(self) -> None:
        history = ResponseHistory()
        for _ in range(150):
            history.append(make_response())
        history.clear()
        assert history.snapshot() == []
        assert history.latest() is None

    def test_snapshot_is_a_copy(self) -> None:
        history = ResponseHistory()
        history.append(make_response())
        snapshot = history.snapshot()
        snapshot.clear()
        assert len(history) == 1

    def test_concurrent_appends_lose_nothing(self) -> None:
        history = ResponseHistory(capacity=1000)
        barrier = threading.Barrier(8)

        def worker() -> None:
            barrier.wait()
            for _ in range(50):
                history.append(make_response())
                history.snapshot()

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert len(history) == 400

    def test_concurrent_appends_respect_capacity(self) -> None:
        history = ResponseHistory(capacity=10)
        threads = [
            threading.Thread(target=lambda: [history.append(make_response()) for _ in range(100)])
            for _ in range(4)
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert len(history) == 10
