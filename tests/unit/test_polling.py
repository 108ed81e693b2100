"""Tests for fixed-interval polling and the last-write-wins cache."""

import asyncio

import pytest

from beamdex.polling import LastWriteWinsCache, Poller


class TestPollerTick:
    """A tick never overlaps a fetch that is still running."""

    def test_tick_skipped_while_fetch_in_flight(self):
        async def run():
            gate = asyncio.Event()

            async def fetch():
                await gate.wait()
                return 1

            poller = Poller(fetch, interval=10, name="orders")
            assert poller.tick() is True
            await asyncio.sleep(0)
            assert poller.fetch_in_flight
            assert poller.tick() is False
            gate.set()
            await poller.stop()
            return poller

        poller = asyncio.run(run())

        assert poller.skipped_ticks == 1
        assert poller.completed == 1
        assert not poller.fetch_in_flight

    def test_result_delivered(self):
        results = []

        async def run():
            async def fetch():
                return ["order-1"]

            poller = Poller(fetch, interval=10, on_result=results.append)
            poller.tick()
            await poller.stop()

        asyncio.run(run())

        assert results == [["order-1"]]

    def test_failure_is_counted_and_swallowed(self):
        """A failing fetch does not stop the poller."""

        async def run():
            calls = 0

            async def fetch():
                nonlocal calls
                calls += 1
                if calls == 1:
                    raise RuntimeError("node unreachable")
                return calls

            poller = Poller(fetch, interval=10)
            poller.tick()
            await asyncio.sleep(0)
            await asyncio.sleep(0)
            poller.tick()
            await poller.stop()
            return poller

        poller = asyncio.run(run())

        assert poller.failures == 1
        assert poller.completed == 1

    def test_result_handler_failure_is_counted(self):
        """A raising on_result is logged like a fetch failure and stop() stays clean."""
        rendered = []

        def render(result):
            if result == 1:
                raise RuntimeError("render failed")
            rendered.append(result)

        async def run():
            calls = 0

            async def fetch():
                nonlocal calls
                calls += 1
                return calls

            poller = Poller(fetch, interval=10, on_result=render)
            poller.tick()
            await asyncio.sleep(0)
            await asyncio.sleep(0)
            poller.tick()
            await poller.stop()
            return poller

        poller = asyncio.run(run())

        assert poller.failures == 1
        assert poller.completed == 1
        assert rendered == [2]

    def test_invalid_interval(self):
        async def fetch():
            return None

        with pytest.raises(ValueError):
            Poller(fetch, interval=0)


class TestPollerLoop:
    def test_start_and_stop(self):
        async def run():
            count = 0

            async def fetch():
                nonlocal count
                count += 1
                return count

            poller = Poller(fetch, interval=0.01)
            poller.start()
            assert poller.is_running
            await asyncio.sleep(0.1)
            await poller.stop()
            return poller

        poller = asyncio.run(run())

        assert not poller.is_running
        assert poller.completed >= 2

    def test_start_twice_is_noop(self):
        async def run():
            async def fetch():
                return None

            poller = Poller(fetch, interval=10)
            poller.start()
            first = poller._loop_task
            poller.start()
            same = poller._loop_task is first
            await poller.stop()
            return same

        assert asyncio.run(run())


class TestLastWriteWinsCache:
    """The response that arrives last is kept, whatever its issue order."""

    def test_empty(self):
        cache = LastWriteWinsCache()
        assert not cache.has_value
        assert cache.get("fallback") == "fallback"

    def test_late_stale_response_wins(self):
        async def run():
            cache = LastWriteWinsCache()
            gate = asyncio.Event()

            async def slow():
                await gate.wait()
                return "old"

            async def fast():
                return "new"

            slow_refresh = asyncio.create_task(cache.refresh(slow))
            await asyncio.sleep(0)
            await cache.refresh(fast)
            seen_first = cache.value
            gate.set()
            await slow_refresh
            return cache, seen_first

        cache, seen_first = asyncio.run(run())

        assert seen_first == "new"
        assert cache.value == "old"
        assert cache.writes == 2

    def test_invalidate(self):
        cache = LastWriteWinsCache()
        cache.set(0)
        assert cache.has_value
        assert cache.get("fallback") == 0
        cache.invalidate()
        assert not cache.has_value
        assert cache.updated_at is None
