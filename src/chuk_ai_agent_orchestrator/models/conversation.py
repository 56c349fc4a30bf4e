# chuk_ai_agent_orchestrator/models/conversation.py
"""
Conversation context and the handoff state variant.

The handoff state is an explicit tagged union rather than a set of flags,
so a target without a reason (or the reverse) cannot be represented:

    Stable                      -- the current responder keeps the user
    PendingHandoff(target, ...) -- control should pass to ``target``
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from chuk_ai_agent_orchestrator.base_models import clamp_unit
from chuk_ai_agent_orchestrator.config import NEUTRAL_BASELINE
from chuk_ai_agent_orchestrator.models.enums import (
    ConversationTopic,
    HandoffReason,
    ResponderType,
)


class Stable(BaseModel):
    """No handoff pending."""

    status: Literal["stable"] = "stable"

    model_config = {"frozen": True}


class PendingHandoff(BaseModel):
    """Control should transfer to ``target`` for ``reason``."""

    status: Literal["pending_handoff"] = "pending_handoff"
    target: ResponderType
    reason: HandoffReason
    confidence: float = Field(default=1.0, ge=0.0, le=1.0)
    detail: str = ""

    model_config = {"frozen": True}


HandoffState = Annotated[Union[Stable, PendingHandoff], Field(discriminator="status")]


class ConversationContext(BaseModel):
    """Per-user conversation bookkeeping for handoff decisions."""

    user_id: str
    current_responder: ResponderType
    topic: ConversationTopic = ConversationTopic.GENERAL
    last_message_time: datetime = Field(default_factory=lambda: datetime.now(UTC))
    message_count: int = 0
    conversation_depth: int = 0  # turns with the current responder
    user_satisfaction: float = Field(default=NEUTRAL_BASELINE, ge=0.0, le=1.0)
    responder_performance: float = Field(default=NEUTRAL_BASELINE, ge=0.0, le=1.0)
    handoff: HandoffState = Field(default_factory=Stable)

    @property
    def pending_handoff(self) -> bool:
        return isinstance(self.handoff, PendingHandoff)

    @property
    def handoff_target(self) -> ResponderType | None:
        return self.handoff.target if isinstance(self.handoff, PendingHandoff) else None

    @property
    def handoff_reason(self) -> HandoffReason | None:
        return self.handoff.reason if isinstance(self.handoff, PendingHandoff) else None

    def shift_satisfaction(self, delta: float) -> None:
        self.user_satisfaction = clamp_unit(self.user_satisfaction + delta)

    def shift_performance(self, delta: float) -> None:
        self.responder_performance = clamp_unit(self.responder_performance + delta)


class HandoffNotice(BaseModel):
    """What the delivery layer needs to announce a pending transfer."""

    target: ResponderType
    reason: HandoffReason
    announcement: str
    detail: str = ""
