# chuk_ai_agent_orchestrator/guards/constants.py
"""Shared constants for the guards subsystem.

Names for scheduled guard work, so tests and logs can find drains
and deliveries by user.
"""

from __future__ import annotations

# Scheduled task name prefixes
DRAIN_TASK_PREFIX = "drain"
DELIVERY_TASK_PREFIX = "deliver"

# Maximum entries popped by a single drain (strict sequential replay)
DRAIN_BATCH_SIZE = 1


def drain_task_name(user_id: str) -> str:
    return f"{DRAIN_TASK_PREFIX}:{user_id}"


def delivery_task_name(user_id: str, kind: str) -> str:
    return f"{DELIVERY_TASK_PREFIX}:{user_id}:{kind}"
