import asyncio
import threading

import pytest

from ceres_bridge.discovery.guard import InFlightGuard


def test_enter_leave_cycle():
    guard = InFlightGuard()

    assert guard.try_enter("a") is True
    assert guard.try_enter("a") is False
    assert guard.is_in_flight("a")

    guard.leave("a")

    assert not guard.is_in_flight("a")
    assert guard.try_enter("a") is True


def test_identities_are_independent():
    guard = InFlightGuard()

    assert guard.try_enter("a")
    assert guard.try_enter("b")
    assert len(guard) == 2


def test_leave_without_enter_is_noop():
    guard = InFlightGuard()
    guard.leave("never-entered")
    assert len(guard) == 0


@pytest.mark.asyncio
async def test_concurrent_tasks_only_one_enters():
    guard = InFlightGuard()

    async def attempt():
        await asyncio.sleep(0)
        return guard.try_enter("device")

    results = await asyncio.gather(*[attempt() for _ in range(50)])

    assert results.count(True) == 1


def test_concurrent_threads_only_one_enters():
    guard = InFlightGuard()
    barrier = threading.Barrier(16)
    results = []

    def attempt():
        barrier.wait()
        results.append(guard.try_enter("device"))

    threads = [threading.Thread(target=attempt) for _ in range(16)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert results.count(True) == 1
