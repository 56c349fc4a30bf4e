# chuk_ai_agent_orchestrator/handoff/__init__.py
"""Conversation handoff between responders.

Components:
- HandoffStateMachine: per-user contexts, trigger evaluation, completion
- lookup_announcement: transfer messages by (reason, target)
"""

from chuk_ai_agent_orchestrator.handoff.machine import (
    EXPLICIT_TRIGGERS,
    REFRESH_ROTATION,
    TOPIC_RESPONDERS,
    ExplicitTrigger,
    HandoffStateMachine,
    detect_topic,
)
from chuk_ai_agent_orchestrator.handoff.messages import (
    GENERIC_ANNOUNCEMENT,
    HANDOFF_MESSAGES,
    lookup_announcement,
)

__all__ = [
    "HandoffStateMachine",
    "ExplicitTrigger",
    "EXPLICIT_TRIGGERS",
    "REFRESH_ROTATION",
    "TOPIC_RESPONDERS",
    "detect_topic",
    "GENERIC_ANNOUNCEMENT",
    "HANDOFF_MESSAGES",
    "lookup_announcement",
]
