"""Tests for the asyncio FeedPoller."""

import asyncio

from journey_planner.domain.errors import FeedError
from journey_planner.domain.models import FeedSnapshot
from journey_planner.services import FeedPoller


class ScriptedCache:
    """Cache whose refresh returns or raises scripted results."""

    def __init__(self, name, results, poll_interval_seconds=0.01):
        self.name = name
        self.poll_interval_seconds = poll_interval_seconds
        self.snapshot = None
        self.last_error = None
        self.calls = 0
        self._results = list(results)

    async def refresh(self):
        self.calls += 1
        result = self._results[min(self.calls, len(self._results)) - 1]
        if isinstance(result, Exception):
            self.last_error = result
            raise result
        self.snapshot = result
        return result


def test_poll_once_notifies():
    snapshot = FeedSnapshot(feed="a")
    cache = ScriptedCache("a", [snapshot])
    notified = []
    poller = FeedPoller(caches=[cache], on_refresh=notified.append)

    result = asyncio.run(poller.poll_once(cache))

    assert result is snapshot
    assert notified == [cache]


def test_poll_once_absorbs_first_failure():
    cache = ScriptedCache("a", [FeedError("down", feed="a")])
    notified = []
    poller = FeedPoller(caches=[cache], on_refresh=notified.append)

    result = asyncio.run(poller.poll_once(cache))

    assert result is None
    # Failed refreshes are reported too, so the planner can show the error
    assert notified == [cache]


def test_refresh_all():
    first = ScriptedCache("a", [FeedSnapshot(feed="a")])
    second = ScriptedCache("b", [FeedError("down", feed="b")])
    poller = FeedPoller(caches=[first, second])

    results = asyncio.run(poller.refresh_all())

    assert results == [FeedSnapshot(feed="a"), None]


def test_run_until_stopped():
    fast = ScriptedCache("fast", [FeedSnapshot(feed="fast")], poll_interval_seconds=0.01)
    slow = ScriptedCache("slow", [FeedSnapshot(feed="slow")], poll_interval_seconds=60)
    notified = []
    poller = FeedPoller(caches=[fast, slow], on_refresh=lambda c: notified.append(c.name))

    async def scenario():
        stop = asyncio.Event()
        runner = asyncio.create_task(poller.run(stop))
        while fast.calls < 3:
            await asyncio.sleep(0.01)
        stop.set()
        await asyncio.wait_for(runner, timeout=5)

    asyncio.run(scenario())

    assert fast.calls >= 3
    assert slow.calls == 1
    assert notified.count("slow") == 1


def test_run_keeps_polling_after_failure():
    cache = ScriptedCache(
        "a",
        [FeedError("down", feed="a"), FeedSnapshot(feed="a")],
        poll_interval_seconds=0.01,
    )
    poller = FeedPoller(caches=[cache])

    async def scenario():
        stop = asyncio.Event()
        runner = asyncio.create_task(poller.run(stop))
        while cache.snapshot is None:
            await asyncio.sleep(0.01)
        stop.set()
        await asyncio.wait_for(runner, timeout=5)

    asyncio.run(scenario())

    assert cache.snapshot == FeedSnapshot(feed="a")
