# chuk_ai_agent_orchestrator/models/lease.py
"""Lease records for the concurrency guard."""

from __future__ import annotations

import uuid
from datetime import datetime, timedelta
from typing import Literal

from pydantic import BaseModel, Field

from chuk_ai_agent_orchestrator.models.enums import ResponderType


class ActiveLease(BaseModel):
    """Time-bounded claim that a responder owns a user's current turn."""

    user_id: str
    responder_id: ResponderType
    granted_at: datetime
    lease_id: str = Field(default_factory=lambda: uuid.uuid4().hex[:12])

    model_config = {"frozen": True}

    def is_live(self, now: datetime, ttl_seconds: float) -> bool:
        """A lease older than the TTL is treated as expired."""
        return now - self.granted_at < timedelta(seconds=ttl_seconds)

    def age_seconds(self, now: datetime) -> float:
        return (now - self.granted_at).total_seconds()


class Busy(BaseModel):
    """Result of a failed acquisition: someone else holds the lease."""

    status: Literal["busy"] = "busy"
    user_id: str
    holder: ActiveLease

    model_config = {"frozen": True}

    def __bool__(self) -> bool:
        return False
