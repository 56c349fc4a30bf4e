# chuk_ai_agent_orchestrator/guards/__init__.py
"""Conversation ownership guards.

Components:
- ConcurrencyGuard: time-bounded per-user leases, FIFO queue of deferred
  proactive actions, scheduled sequential drains
- ActiveLease / Busy: acquisition results
"""

from chuk_ai_agent_orchestrator.guards.concurrency import ConcurrencyGuard, DrainCallback
from chuk_ai_agent_orchestrator.guards.constants import (
    DRAIN_BATCH_SIZE,
    delivery_task_name,
    drain_task_name,
)
from chuk_ai_agent_orchestrator.models.lease import ActiveLease, Busy

__all__ = [
    "ConcurrencyGuard",
    "DrainCallback",
    "ActiveLease",
    "Busy",
    "DRAIN_BATCH_SIZE",
    "delivery_task_name",
    "drain_task_name",
]
