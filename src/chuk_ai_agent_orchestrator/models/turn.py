# chuk_ai_agent_orchestrator/models/turn.py
"""Boundary records exchanged with collaborators and the delivery layer."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field

from chuk_ai_agent_orchestrator.base_models import PayloadModel
from chuk_ai_agent_orchestrator.models.action import GoalAction
from chuk_ai_agent_orchestrator.models.conversation import HandoffNotice
from chuk_ai_agent_orchestrator.models.enums import ResponderType


class Classification(BaseModel):
    """Classifier output: which responder should take the message."""

    responder_type: ResponderType
    confidence: float = Field(ge=0.0, le=1.0)
    reasoning: str = ""


class ContentItem(BaseModel):
    """A curated piece of content (joke, fact, quote...)."""

    id: str
    responder_type: ResponderType
    content: str
    tags: list[str] = Field(default_factory=list)
    metadata: dict[str, Any] = Field(default_factory=dict)


class TurnResult(PayloadModel):
    """Result of ``process_turn`` handed back to the delivery layer."""

    response_text: str
    responder_used: ResponderType
    confidence: float
    proactive_action: Optional[GoalAction] = None
    handoff: Optional[HandoffNotice] = None


class ProactiveDelivery(PayloadModel):
    """A proactive response produced by a scheduled or drained action."""

    user_id: str
    action: GoalAction
    response_text: str
    from_queue: bool = False
