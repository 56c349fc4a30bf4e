# chuk_ai_agent_orchestrator/models/user_state.py
"""
Per-user state records.

- Goal: a standing objective (entertain, support, re-engage) with bounded
  progress
- UserState: engagement/satisfaction/topic signals plus the user's goals
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Optional

from pydantic import BaseModel, Field

from chuk_ai_agent_orchestrator.base_models import clamp_unit
from chuk_ai_agent_orchestrator.models.enums import (
    EntertainmentPreference,
    GoalKind,
    UserStatus,
)

# Largest progress step a single interaction may apply
MAX_PROGRESS_DELTA = 0.3


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Goal(BaseModel):
    """
    A per-user objective instantiated from a template.

    Identity is ``(user_id, template_id)``. Progress only moves by bounded
    deltas via ``adjust``; the single exception is ``complete`` for binary
    outcomes such as a resolved technical issue.
    """

    id: str
    user_id: str
    template_id: str
    kind: GoalKind
    priority: int
    description: str = ""
    success_criteria: list[str] = Field(default_factory=list)

    active: bool = False
    progress: float = Field(default=0.0, ge=0.0, le=1.0)
    last_updated: datetime = Field(default_factory=_utcnow)

    def activate(self, now: datetime) -> bool:
        """Mark active. Returns False if it already was."""
        if self.active:
            return False
        self.active = True
        self.last_updated = now
        return True

    def deactivate(self, now: datetime) -> bool:
        """Mark inactive. Returns False if it already was."""
        if not self.active:
            return False
        self.active = False
        self.last_updated = now
        return True

    def adjust(self, delta: float, now: datetime) -> float:
        """Move progress by a bounded delta, clamped to [0, 1]."""
        if abs(delta) > MAX_PROGRESS_DELTA + 1e-9:
            raise ValueError(f"Progress delta {delta} exceeds ±{MAX_PROGRESS_DELTA}")
        self.progress = clamp_unit(self.progress + delta)
        self.last_updated = now
        return self.progress

    def complete(self, now: datetime) -> None:
        """Binary resolution: progress jumps to 1.0."""
        self.progress = 1.0
        self.last_updated = now


class UserState(BaseModel):
    """Mutable record of one user's signals and goals."""

    user_id: str
    current_state: UserStatus = UserStatus.IDLE
    last_interaction_time: datetime = Field(default_factory=_utcnow)
    entertainment_preference: Optional[EntertainmentPreference] = None
    technical_context: Optional[str] = None  # raw text of the last technical message
    satisfaction_level: float = Field(default=0.5, ge=0.0, le=1.0)
    engagement_level: float = Field(default=0.5, ge=0.0, le=1.0)
    goals: list[Goal] = Field(default_factory=list)

    def goal(self, kind: GoalKind) -> Goal | None:
        """First goal of the given kind, if any."""
        for goal in self.goals:
            if goal.kind == kind:
                return goal
        return None

    def active_goals(self) -> list[Goal]:
        """Active goals, highest priority first."""
        return sorted((g for g in self.goals if g.active), key=lambda g: g.priority, reverse=True)

    def nudge_engagement(self, delta: float) -> float:
        self.engagement_level = clamp_unit(self.engagement_level + delta)
        return self.engagement_level

    def nudge_satisfaction(self, delta: float) -> float:
        self.satisfaction_level = clamp_unit(self.satisfaction_level + delta)
        return self.satisfaction_level

    def idle_seconds(self, now: datetime) -> float:
        """Seconds since the last interaction (never negative)."""
        return max(0.0, (now - self.last_interaction_time).total_seconds())


class GoalTemplate(BaseModel):
    """Blueprint a per-user Goal is instantiated from."""

    template_id: str
    kind: GoalKind
    priority: int
    description: str
    success_criteria: list[str] = Field(default_factory=list)

    model_config = {"frozen": True}

    def instantiate(self, user_id: str, now: datetime) -> Goal:
        return Goal(
            id=f"{user_id}_{self.template_id}",
            user_id=user_id,
            template_id=self.template_id,
            kind=self.kind,
            priority=self.priority,
            description=self.description,
            success_criteria=list(self.success_criteria),
            last_updated=now,
        )


# Static per-kind weights: technical support > entertainment > engagement
GOAL_PRIORITIES: dict[GoalKind, int] = {
    GoalKind.TECHNICAL_SUPPORT: 10,
    GoalKind.ENTERTAINMENT: 8,
    GoalKind.ENGAGEMENT: 6,
}

DEFAULT_GOAL_TEMPLATES: tuple[GoalTemplate, ...] = (
    GoalTemplate(
        template_id="entertain_on_hold",
        kind=GoalKind.ENTERTAINMENT,
        priority=GOAL_PRIORITIES[GoalKind.ENTERTAINMENT],
        description="Keep user entertained while waiting for support",
        success_criteria=[
            "User responds positively to entertainment",
            "Engagement level > 0.7",
            "User remains in conversation",
        ],
    ),
    GoalTemplate(
        template_id="provide_technical_support",
        kind=GoalKind.TECHNICAL_SUPPORT,
        priority=GOAL_PRIORITIES[GoalKind.TECHNICAL_SUPPORT],
        description="Answer technical questions effectively",
        success_criteria=[
            "User problem is resolved",
            "Technical accuracy is maintained",
            "User satisfaction > 0.8",
        ],
    ),
    GoalTemplate(
        template_id="maintain_engagement",
        kind=GoalKind.ENGAGEMENT,
        priority=GOAL_PRIORITIES[GoalKind.ENGAGEMENT],
        description="Keep user engaged and prevent abandonment",
        success_criteria=[
            "User continues conversation",
            "Response time < 5 minutes",
            "User asks follow-up questions",
        ],
    ),
)
