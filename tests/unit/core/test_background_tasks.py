"""
Tests for the detached task runner used for notifications.
"""

import asyncio
import logging

import pytest

from fieldfeed.core.background_tasks import BackgroundTaskRunner


class TestBackgroundTaskRunner:
    @pytest.mark.asyncio
    async def test_spawn_does_not_wait(self):
        runner = BackgroundTaskRunner()
        release = asyncio.Event()
        done = []

        async def job():
            await release.wait()
            done.append(True)

        runner.spawn(job(), name="job")

        assert runner.pending_count == 1
        assert done == []
        release.set()
        assert await runner.drain(timeout=1)
        assert done == [True]
        assert runner.pending_count == 0

    @pytest.mark.asyncio
    async def test_failures_are_logged_not_raised(self, caplog):
        runner = BackgroundTaskRunner()

        async def boom():
            raise RuntimeError("smtp down")

        with caplog.at_level(logging.ERROR):
            runner.spawn(boom(), name="notify-boom")
            assert await runner.drain(timeout=1)

        assert "notify-boom" in caplog.text
        assert "smtp down" in caplog.text

    @pytest.mark.asyncio
    async def test_drain_waits_for_tasks_spawned_meanwhile(self):
        runner = BackgroundTaskRunner()
        order = []

        async def child():
            order.append("child")

        async def parent():
            runner.spawn(child(), name="child")
            order.append("parent")

        runner.spawn(parent(), name="parent")

        assert await runner.drain(timeout=1)
        assert order == ["parent", "child"]

    @pytest.mark.asyncio
    async def test_drain_times_out(self):
        runner = BackgroundTaskRunner()
        runner.spawn(asyncio.sleep(10), name="slow")

        assert await runner.drain(timeout=0.05) is False
        await runner.shutdown(timeout=0.01)

    @pytest.mark.asyncio
    async def test_shutdown_cancels_stragglers_and_refuses_new_work(self):
        runner = BackgroundTaskRunner()
        task = runner.spawn(asyncio.sleep(10), name="slow")

        await runner.shutdown(timeout=0.05)

        assert task.cancelled()
        assert not runner.is_accepting
        coro = asyncio.sleep(0)
        assert runner.spawn(coro, name="late") is None
