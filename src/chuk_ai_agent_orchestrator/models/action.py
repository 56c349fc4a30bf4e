# chuk_ai_agent_orchestrator/models/action.py
"""Proactive action records."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, Field

from chuk_ai_agent_orchestrator.models.enums import (
    ActionKind,
    ActionTiming,
    GoalKind,
    ResponderType,
)


class GoalAction(BaseModel):
    """
    Candidate or committed proactive intervention.

    Produced fresh on every evaluation and never persisted. ``priority`` is
    copied from the goal that produced the candidate and drives arbitration.
    """

    kind: ActionKind
    target_responder: ResponderType
    message_text: str
    timing: ActionTiming = ActionTiming.IMMEDIATE
    delay_ms: int = Field(default=0, ge=0)

    priority: int = 0
    source_goal: GoalKind | None = None

    model_config = {"frozen": True}

    @property
    def delay_seconds(self) -> float:
        return self.delay_ms / 1000.0

    def format_compact(self) -> str:
        """Format as compact string for logging."""
        return f"{self.kind.value}->{self.target_responder.value} ({self.timing.value}, {self.delay_ms}ms, p={self.priority})"


class ActionQueueEntry(BaseModel):
    """A deferred action waiting for the user's lease to free up."""

    action: GoalAction
    enqueued_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
