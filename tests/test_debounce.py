# ABOUTME: Tests for the single-slot asyncio debouncer.
# ABOUTME: Verifies coalescing of bursts, cancellation, the one-pending-task limit and failure logging.

import asyncio
import logging

import pytest

from weather_lookup.debounce import Debouncer


class TestDebouncer:
    @pytest.mark.asyncio
    async def test_burst_runs_only_last_call(self):
        """Rapid schedule() calls coalesce into one run with the last arguments.

        Implementation: Schedules three calls back to back and awaits the last task.
        Passing implies: Earlier calls are cancelled before their delay elapses.
        """
        calls = []

        async def record(value):
            calls.append(value)
            return value

        debouncer = Debouncer(0.01)
        first = debouncer.schedule(record, "C")
        second = debouncer.schedule(record, "Co")
        last = debouncer.schedule(record, "Colombo")

        assert await last == "Colombo"
        assert calls == ["Colombo"]
        assert first.cancelled()
        assert second.cancelled()

    @pytest.mark.asyncio
    async def test_cancel_drops_pending_call(self):
        """cancel() stops a pending call from running.

        Implementation: Schedules a call, cancels it, then waits past the delay.
        Passing implies: Clearing the query can abort a scheduled lookup.
        """
        calls = []

        async def record(value):
            calls.append(value)

        debouncer = Debouncer(0.01)
        task = debouncer.schedule(record, "Lon")
        debouncer.cancel()
        await asyncio.sleep(0.05)

        assert calls == []
        assert task.cancelled()
        assert not debouncer.pending

    @pytest.mark.asyncio
    async def test_cancel_interrupts_running_call(self):
        """Cancelling after the delay also cancels the call in progress.

        Implementation: Schedules a call that blocks on an event, cancels once it started.
        Passing implies: A stale in-flight lookup cannot finish after a newer keystroke.
        """
        started = asyncio.Event()
        finished = []

        async def slow():
            started.set()
            await asyncio.sleep(10)
            finished.append(True)

        debouncer = Debouncer(0)
        task = debouncer.schedule(slow)
        await started.wait()
        debouncer.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task
        assert finished == []

    @pytest.mark.asyncio
    async def test_pending_reflects_single_slot(self):
        """Only the latest task is pending.

        Implementation: Schedules twice and checks pending before and after completion.
        Passing implies: The debouncer never holds a queue of timers.
        """

        async def noop():
            return None

        debouncer = Debouncer(0.01)
        debouncer.schedule(noop)
        task = debouncer.schedule(noop)
        assert debouncer.pending

        await task
        assert not debouncer.pending

    @pytest.mark.asyncio
    async def test_failed_call_is_logged(self, caplog):
        """An exception raised by the debounced call is logged instead of vanishing with the task.

        Implementation: Schedules a call that raises RuntimeError and never awaits the task.
        Passing implies: Fire-and-forget lookups still surface their failures.
        """

        async def boom():
            raise RuntimeError("geocoder exploded")

        debouncer = Debouncer(0)
        with caplog.at_level(logging.ERROR, logger="weather_lookup.debounce"):
            debouncer.schedule(boom)
            await asyncio.sleep(0.05)

        failures = [r for r in caplog.records if r.message == "Debounced call failed"]
        assert len(failures) == 1
        assert failures[0].exc_info[0] is RuntimeError

    @pytest.mark.asyncio
    async def test_cancelled_call_is_not_logged(self, caplog):
        """Cancellation is routine and produces no error record.

        Implementation: Schedules and immediately cancels a call, then waits past the delay.
        Passing implies: Superseded keystrokes never show up as failures in the log.
        """

        async def noop():
            return None

        debouncer = Debouncer(0.01)
        with caplog.at_level(logging.ERROR, logger="weather_lookup.debounce"):
            debouncer.schedule(noop)
            debouncer.cancel()
            await asyncio.sleep(0.05)

        assert not [r for r in caplog.records if r.levelno >= logging.ERROR]
