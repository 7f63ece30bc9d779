# File: tests/test_executor.py
import asyncio

import pytest

from site_probe.executor import run_bounded


@pytest.mark.asyncio()
async def test_results_follow_item_order():
    delays = {"a": 0.05, "b": 0.0, "c": 0.02}

    async def op(item):
        await asyncio.sleep(delays[item])
        return f"result-{item}"

    assert await run_bounded(["a", "b", "c"], 2, op) == ["result-a", "result-b", "result-c"]


@pytest.mark.asyncio()
async def test_never_exceeds_limit():
    state = {"now": 0, "peak": 0}

    async def op(item):
        state["now"] += 1
        state["peak"] = max(state["peak"], state["now"])
        await asyncio.sleep(0.01 * (item % 3))
        state["now"] -= 1
        return item * 2

    results = await run_bounded(range(12), 3, op)

    assert results == [i * 2 for i in range(12)]
    assert state["peak"] == 3


@pytest.mark.asyncio()
async def test_limit_one_is_sequential():
    log = []

    async def op(item):
        log.append(("start", item))
        await asyncio.sleep(0.01 if item == 0 else 0)
        log.append(("end", item))
        return item

    await run_bounded([0, 1, 2], 1, op)

    assert log == [
        ("start", 0), ("end", 0),
        ("start", 1), ("end", 1),
        ("start", 2), ("end", 2),
    ]


@pytest.mark.asyncio()
async def test_failure_does_not_cancel_siblings():
    finished = []

    async def op(item):
        if item == "boom":
            raise RuntimeError("boom")
        await asyncio.sleep(0.02)
        finished.append(item)
        return item

    with pytest.raises(RuntimeError, match="boom"):
        await run_bounded(["x", "boom", "y"], 3, op)

    assert sorted(finished) == ["x", "y"]


@pytest.mark.asyncio()
async def test_empty_items():
    async def op(item):  # pragma: no cover - never called
        raise AssertionError

    assert await run_bounded([], 2, op) == []


@pytest.mark.asyncio()
async def test_invalid_limit():
    async def op(item):
        return item

    with pytest.raises(ValueError):
        await run_bounded([1], 0, op)


@pytest.mark.asyncio()
async def test_cancelling_caller_cancels_started_operations():
    started, cancelled = [], []

    async def op(item):
        started.append(item)
        try:
            await asyncio.sleep(10)
        except asyncio.CancelledError:
            cancelled.append(item)
            raise

    runner = asyncio.create_task(run_bounded(range(5), 2, op))
    while len(started) < 2:
        await asyncio.sleep(0)

    # the runner is now blocked waiting for a free slot
    runner.cancel()
    with pytest.raises(asyncio.CancelledError):
        await runner

    assert started == [0, 1]
    assert sorted(cancelled) == [0, 1]


@pytest.mark.asyncio()
async def test_cancelling_caller_while_gathering():
    cancelled = []

    async def op(item):
        try:
            await asyncio.sleep(10)
        except asyncio.CancelledError:
            cancelled.append(item)
            raise

    runner = asyncio.create_task(run_bounded(["a", "b"], 5, op))
    await asyncio.sleep(0.01)
    runner.cancel()
    with pytest.raises(asyncio.CancelledError):
        await runner

    assert sorted(cancelled) == ["a", "b"]
