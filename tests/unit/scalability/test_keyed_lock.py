"""KeyedLock: serialization per key, independence across keys, table cleanup."""

import asyncio

from schoolhub.scalability.keyed_lock import KeyedLock


async def test_same_key_is_serialized():
    lock = KeyedLock()
    trace = []

    async def worker(name: str):
        async with lock.hold("order:1"):
            trace.append(f"{name}-in")
            await asyncio.sleep(0.01)
            trace.append(f"{name}-out")

    await asyncio.gather(worker("a"), worker("b"))
    assert trace in (["a-in", "a-out", "b-in", "b-out"], ["b-in", "b-out", "a-in", "a-out"])


async def test_distinct_keys_do_not_wait_on_each_other():
    lock = KeyedLock()
    entered = asyncio.Event()

    async def holder():
        async with lock.hold("k1"):
            await entered.wait()

    task = asyncio.create_task(holder())
    await asyncio.sleep(0)
    assert lock.is_held("k1")
    async with lock.hold("k2"):
        entered.set()
    await task
    assert not lock.is_held("k1")


async def test_entries_are_dropped_after_release():
    lock = KeyedLock()
    async with lock.hold("k"):
        assert len(lock) == 1
    assert len(lock) == 0


async def test_entry_released_when_block_raises():
    lock = KeyedLock()
    try:
        async with lock.hold("k"):
            raise RuntimeError("boom")
    except RuntimeError:
        pass
    assert len(lock) == 0
    assert not lock.is_held("k")
