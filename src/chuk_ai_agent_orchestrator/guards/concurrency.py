# chuk_ai_agent_orchestrator/guards/concurrency.py
"""
Concurrency Guard - single-flight ownership of a user's conversation.

A lease records which responder is currently composing a reply for a user.
It is time-based, not a mutex: a lease older than the TTL is ignored, so a
crashed or abandoned turn cannot block the user forever.

Proactive dispatches call ``try_acquire`` and fail fast with ``Busy``; the
caller enqueues the action. Every ``release`` schedules a drain of the
user's queue after a short settle delay, and each drain replays exactly one
entry, so queued actions run strictly in order and never in parallel.
"""

from __future__ import annotations

import inspect
import logging
from collections import deque
from collections.abc import Awaitable, Callable
from typing import Any

from chuk_ai_agent_orchestrator.config import OrchestratorConfig
from chuk_ai_agent_orchestrator.guards.constants import DRAIN_BATCH_SIZE, drain_task_name
from chuk_ai_agent_orchestrator.models.action import ActionQueueEntry, GoalAction
from chuk_ai_agent_orchestrator.models.enums import ResponderType
from chuk_ai_agent_orchestrator.models.lease import ActiveLease, Busy
from chuk_ai_agent_orchestrator.store import InMemoryKeyedStore, KeyedStore
from chuk_ai_agent_orchestrator.timing import AsyncioTaskScheduler, Clock, TaskScheduler

logger = logging.getLogger(__name__)

DrainCallback = Callable[[str, GoalAction], Any | Awaitable[Any]]


class ConcurrencyGuard:
    """Lease table plus per-user FIFO of deferred proactive actions."""

    def __init__(
        self,
        scheduler: TaskScheduler | None = None,
        clock: Clock | None = None,
        config: OrchestratorConfig | None = None,
        leases: KeyedStore[ActiveLease] | None = None,
        queues: KeyedStore[deque[ActionQueueEntry]] | None = None,
    ):
        self._scheduler = scheduler or AsyncioTaskScheduler(clock)
        self._clock = clock or self._scheduler
        self._config = config or OrchestratorConfig()
        self._leases: KeyedStore[ActiveLease] = leases if leases is not None else InMemoryKeyedStore()
        self._queues: KeyedStore[deque[ActionQueueEntry]] = queues if queues is not None else InMemoryKeyedStore()
        self._draining: set[str] = set()
        self._expiry_retries: set[str] = set()
        self._on_drain: DrainCallback | None = None

    # --- Leases ---

    def current(self, user_id: str) -> ActiveLease | None:
        """The live lease for ``user_id``, or None (expired leases are dropped)."""
        lease = self._leases.get(user_id)
        if lease is None:
            return None
        if not lease.is_live(self._clock.now(), self._config.lease_ttl_seconds):
            logger.debug(f"Lease {lease.lease_id} for {user_id} expired after {lease.age_seconds(self._clock.now()):.1f}s")
            self._leases.delete(user_id)
            return None
        return lease

    def is_active(self, user_id: str) -> bool:
        return self.current(user_id) is not None

    def holder(self, user_id: str) -> ResponderType | None:
        lease = self.current(user_id)
        return lease.responder_id if lease else None

    def try_acquire(self, user_id: str, responder: ResponderType) -> ActiveLease | Busy:
        """Grant a lease unless a live one exists."""
        held = self.current(user_id)
        if held is not None:
            logger.info(
                f"Lease busy for {user_id}: {held.responder_id.value} is active, "
                f"{responder.value} denied"
            )
            return Busy(user_id=user_id, holder=held)
        return self._grant(user_id, responder)

    def claim(self, user_id: str, responder: ResponderType) -> ActiveLease:
        """Take the lease for a user-driven turn, replacing any existing one."""
        held = self.current(user_id)
        if held is not None and held.responder_id != responder:
            logger.info(f"User turn for {user_id} takes lease from {held.responder_id.value} to {responder.value}")
        return self._grant(user_id, responder)

    def _grant(self, user_id: str, responder: ResponderType) -> ActiveLease:
        lease = ActiveLease(user_id=user_id, responder_id=responder, granted_at=self._clock.now())
        self._leases.set(user_id, lease)
        logger.debug(f"Granted lease {lease.lease_id} on {user_id} to {responder.value}")
        return lease

    def release(self, user_id: str, lease: ActiveLease | None = None) -> bool:
        """
        Release the user's lease and schedule a queue drain.

        When ``lease`` is given, only that lease is released; a lease that was
        since replaced by another turn is left alone.
        """
        held = self._leases.get(user_id)
        released = False
        if held is not None and (lease is None or held.lease_id == lease.lease_id):
            self._leases.delete(user_id)
            released = True
            logger.debug(f"Released lease {held.lease_id} on {user_id}")
        if self.queue_length(user_id):
            self._schedule_drain(user_id)
        return released

    # --- Queue ---

    def enqueue(self, user_id: str, action: GoalAction) -> int:
        """Append an action to the user's FIFO. Returns the new length."""
        queue = self._queue(user_id)
        queue.append(ActionQueueEntry(action=action, enqueued_at=self._clock.now()))
        self._queues.set(user_id, queue)
        logger.info(f"Queued {action.format_compact()} for {user_id} (depth {len(queue)})")
        return len(queue)

    def requeue_front(self, user_id: str, action: GoalAction) -> int:
        """Put a replayed action back at the head so order is preserved."""
        queue = self._queue(user_id)
        queue.appendleft(ActionQueueEntry(action=action, enqueued_at=self._clock.now()))
        self._queues.set(user_id, queue)
        return len(queue)

    def queue_length(self, user_id: str) -> int:
        queue = self._queues.get(user_id)
        return len(queue) if queue else 0

    def pending(self, user_id: str) -> list[GoalAction]:
        """Snapshot of queued actions, oldest first."""
        queue = self._queues.get(user_id)
        return [entry.action for entry in queue] if queue else []

    def drain_queue(self, user_id: str) -> list[GoalAction]:
        """Pop at most the oldest queued action."""
        if user_id in self._draining:
            return []
        queue = self._queues.get(user_id)
        if not queue:
            return []
        self._draining.add(user_id)
        try:
            drained = [queue.popleft().action for _ in range(min(DRAIN_BATCH_SIZE, len(queue)))]
            if queue:
                self._queues.set(user_id, queue)
            else:
                self._queues.delete(user_id)
            return drained
        finally:
            self._draining.discard(user_id)

    def on_drain(self, callback: DrainCallback | None) -> None:
        """Register the consumer that replays drained actions."""
        self._on_drain = callback

    def _queue(self, user_id: str) -> deque[ActionQueueEntry]:
        queue = self._queues.get(user_id)
        return queue if queue is not None else deque()

    def _schedule_drain(self, user_id: str) -> None:
        self._scheduler.schedule(
            self._config.drain_delay_seconds,
            lambda: self._run_drain(user_id),
            name=drain_task_name(user_id),
        )

    def _schedule_expiry_retry(self, user_id: str, lease: ActiveLease) -> None:
        """Retry the drain once ``lease`` lapses, in case its holder never releases."""
        if user_id in self._expiry_retries:
            return
        self._expiry_retries.add(user_id)
        remaining = self._config.lease_ttl_seconds - lease.age_seconds(self._clock.now())

        async def _retry() -> None:
            self._expiry_retries.discard(user_id)
            if self.queue_length(user_id):
                await self._run_drain(user_id)

        self._scheduler.schedule(max(0.0, remaining), _retry, name=drain_task_name(user_id))

    async def _run_drain(self, user_id: str) -> None:
        # A turn that started during the settle delay owns the user now; its
        # release schedules the next drain, and so does the lease expiring.
        lease = self.current(user_id)
        if lease is not None:
            logger.debug(f"Drain for {user_id} skipped, lease held by {lease.responder_id.value}")
            self._schedule_expiry_retry(user_id, lease)
            return
        if self._on_drain is None:
            logger.debug(f"Drain for {user_id} skipped, no consumer registered")
            return
        for action in self.drain_queue(user_id):
            logger.info(f"Replaying queued {action.format_compact()} for {user_id}")
            result = self._on_drain(user_id, action)
            if inspect.isawaitable(result):
                await result

    # --- Housekeeping ---

    def forget(self, user_id: str) -> None:
        """Drop the user's lease and queue."""
        self._leases.delete(user_id)
        self._queues.delete(user_id)
        self._expiry_retries.discard(user_id)
