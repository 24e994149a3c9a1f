"""Tests for the arena's readers-writer lock."""

from __future__ import annotations

import threading
import time

import pytest

from modelarena import StaticArena
from modelarena.store.locking import ReadWriteLock
from modelarena.types import PlotType

TIMEOUT = 5.0
SHORT = 0.2


def start(target) -> threading.Thread:
    thread = threading.Thread(target=target, daemon=True)
    thread.start()
    return thread


def wait_until(condition) -> None:
    deadline = time.monotonic() + TIMEOUT
    while not condition():
        if time.monotonic() > deadline:
            pytest.fail("condition not reached")
        time.sleep(0.01)


class TestReadWriteLock:
    def test_readers_share_the_lock(self):
        lock = ReadWriteLock()
        entered = threading.Event()

        def second_reader():
            with lock.read():
                entered.set()

        with lock.read():
            start(second_reader)
            assert entered.wait(TIMEOUT)

    def test_writer_waits_for_readers(self):
        lock = ReadWriteLock()
        acquired = threading.Event()

        def writer():
            with lock.write():
                acquired.set()

        with lock.read():
            thread = start(writer)
            assert not acquired.wait(SHORT)

        assert acquired.wait(TIMEOUT)
        thread.join(TIMEOUT)

    def test_readers_wait_for_writer(self):
        lock = ReadWriteLock()
        entered = threading.Event()

        def reader():
            with lock.read():
                entered.set()

        with lock.write():
            start(reader)
            assert not entered.wait(SHORT)

        assert entered.wait(TIMEOUT)

    def test_waiting_writer_goes_before_new_readers(self):
        """New readers queue behind a waiting writer instead of starving it."""
        lock = ReadWriteLock()
        order = []

        def writer():
            with lock.write():
                order.append("writer")

        def reader():
            with lock.read():
                order.append("reader")

        with lock.read():
            writer_thread = start(writer)
            wait_until(lambda: lock._writers_waiting == 1)
            reader_thread = start(reader)
            time.sleep(SHORT)
            assert order == []

        writer_thread.join(TIMEOUT)
        reader_thread.join(TIMEOUT)
        assert order == ["writer", "reader"]


class TestArenaLocking:
    def test_resolve_waits_for_registration(self, engine, explainer_a, alice_batch, two_rows):
        arena = StaticArena(engine=engine)
        arena.register_model(explainer_a).register_observations(alice_batch)

        registering = threading.Event()
        proceed = threading.Event()
        resolved = threading.Event()

        def hold_registration(progress, description):
            registering.set()
            proceed.wait(TIMEOUT)

        def register():
            arena.register_observations(two_rows, progress_callback=hold_registration)

        def resolve():
            arena.resolve(PlotType.FEATURE_IMPORTANCE, "A")
            resolved.set()

        register_thread = start(register)
        assert registering.wait(TIMEOUT)
        start(resolve)
        assert not resolved.wait(SHORT)

        proceed.set()
        assert resolved.wait(TIMEOUT)
        register_thread.join(TIMEOUT)
        assert arena.observations.row_ids() == ["Alice", "r1", "r2"]
