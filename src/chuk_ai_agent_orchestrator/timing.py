# chuk_ai_agent_orchestrator/timing.py
"""
Clock and task scheduling for delayed work.

Queue drains and delayed proactive deliveries are submitted as explicit
scheduled tasks to a single ``TaskScheduler``:

- AsyncioTaskScheduler: wall-clock, backed by ``loop.call_later``
- ManualTaskScheduler: virtual clock for tests; nothing runs until
  ``advance()`` moves time forward

Both are also a ``Clock``, so components that read "now" and components
that schedule work agree on time.
"""

from __future__ import annotations

import asyncio
import heapq
import inspect
import itertools
import logging
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime, timedelta
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel

logger = logging.getLogger(__name__)

TaskCallback = Callable[[], Any | Awaitable[Any]]


@runtime_checkable
class Clock(Protocol):
    """Source of the current time (timezone-aware UTC)."""

    def now(self) -> datetime: ...


class SystemClock:
    """Wall-clock time."""

    def now(self) -> datetime:
        return datetime.now(UTC)


class ScheduledTask(BaseModel):
    """Handle for a submitted task."""

    task_id: int
    name: str = ""
    due_at: datetime
    cancelled: bool = False


@runtime_checkable
class TaskScheduler(Protocol):
    """Protocol for submitting delayed work."""

    def now(self) -> datetime: ...

    def schedule(self, delay_seconds: float, callback: TaskCallback, name: str = "") -> ScheduledTask: ...

    def cancel(self, task: ScheduledTask) -> bool: ...


async def _run_callback(callback: TaskCallback, name: str) -> None:
    try:
        result = callback()
        if inspect.isawaitable(result):
            await result
    except Exception:
        logger.exception(f"Scheduled task '{name}' failed")


class AsyncioTaskScheduler:
    """Runs tasks on the running event loop after their delay."""

    def __init__(self, clock: Clock | None = None):
        self._clock = clock or SystemClock()
        self._ids = itertools.count(1)
        self._handles: dict[int, asyncio.TimerHandle] = {}
        self._running: set[asyncio.Task] = set()

    def now(self) -> datetime:
        return self._clock.now()

    def schedule(self, delay_seconds: float, callback: TaskCallback, name: str = "") -> ScheduledTask:
        loop = asyncio.get_running_loop()
        task = ScheduledTask(
            task_id=next(self._ids),
            name=name,
            due_at=self.now() + timedelta(seconds=max(0.0, delay_seconds)),
        )

        def _fire() -> None:
            self._handles.pop(task.task_id, None)
            running = loop.create_task(_run_callback(callback, name))
            self._running.add(running)
            running.add_done_callback(self._running.discard)

        self._handles[task.task_id] = loop.call_later(max(0.0, delay_seconds), _fire)
        logger.debug(f"Scheduled '{name}' in {delay_seconds:.2f}s")
        return task

    def cancel(self, task: ScheduledTask) -> bool:
        handle = self._handles.pop(task.task_id, None)
        if handle is None:
            return False
        handle.cancel()
        task.cancelled = True
        return True

    @property
    def pending_count(self) -> int:
        return len(self._handles)


class ManualTaskScheduler:
    """
    Deterministic scheduler with a virtual clock.

    Tasks run in due order (FIFO for equal due times) when ``advance`` or
    ``run_due`` is awaited. Tasks scheduled while advancing run in the same
    call if they fall due before the target time.
    """

    def __init__(self, start: datetime | None = None):
        self._now = start or datetime(2025, 1, 1, tzinfo=UTC)
        self._ids = itertools.count(1)
        self._queue: list[tuple[datetime, int, ScheduledTask, TaskCallback]] = []
        self.executed: list[str] = []

    def now(self) -> datetime:
        return self._now

    def schedule(self, delay_seconds: float, callback: TaskCallback, name: str = "") -> ScheduledTask:
        task_id = next(self._ids)
        task = ScheduledTask(
            task_id=task_id,
            name=name,
            due_at=self._now + timedelta(seconds=max(0.0, delay_seconds)),
        )
        heapq.heappush(self._queue, (task.due_at, task_id, task, callback))
        return task

    def cancel(self, task: ScheduledTask) -> bool:
        for _, _, queued, _ in self._queue:
            if queued.task_id == task.task_id and not queued.cancelled:
                queued.cancelled = True
                task.cancelled = True
                return True
        return False

    @property
    def pending_count(self) -> int:
        return sum(1 for _, _, t, _ in self._queue if not t.cancelled)

    def pending_names(self) -> list[str]:
        return [t.name for _, _, t, _ in sorted(self._queue, key=lambda e: (e[0], e[1])) if not t.cancelled]

    def set_time(self, when: datetime) -> None:
        """Jump the clock without running anything."""
        self._now = when

    async def advance(self, seconds: float) -> int:
        """Move time forward, running every task that falls due. Returns tasks run."""
        target = self._now + timedelta(seconds=seconds)
        ran = 0
        while self._queue and self._queue[0][0] <= target:
            due_at, _, task, callback = heapq.heappop(self._queue)
            if task.cancelled:
                continue
            self._now = max(self._now, due_at)
            self.executed.append(task.name)
            await _run_callback(callback, task.name)
            ran += 1
        self._now = target
        return ran

    async def run_due(self) -> int:
        """Run tasks already due without moving the clock."""
        return await self.advance(0)
