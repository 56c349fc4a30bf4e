# chuk_ai_agent_orchestrator/models/__init__.py
"""Pydantic models and enums for the orchestration core."""

from chuk_ai_agent_orchestrator.models.action import ActionQueueEntry, GoalAction
from chuk_ai_agent_orchestrator.models.conversation import (
    ConversationContext,
    HandoffNotice,
    HandoffState,
    PendingHandoff,
    Stable,
)
from chuk_ai_agent_orchestrator.models.enums import (
    ActionKind,
    ActionTiming,
    ConversationTopic,
    EntertainmentPreference,
    GoalKind,
    HandoffReason,
    ResponderType,
    UserStatus,
)
from chuk_ai_agent_orchestrator.models.lease import ActiveLease, Busy
from chuk_ai_agent_orchestrator.models.turn import (
    Classification,
    ContentItem,
    ProactiveDelivery,
    TurnResult,
)
from chuk_ai_agent_orchestrator.models.user_state import (
    DEFAULT_GOAL_TEMPLATES,
    GOAL_PRIORITIES,
    MAX_PROGRESS_DELTA,
    Goal,
    GoalTemplate,
    UserState,
)

__all__ = [
    # Enums
    "ActionKind",
    "ActionTiming",
    "ConversationTopic",
    "EntertainmentPreference",
    "GoalKind",
    "HandoffReason",
    "ResponderType",
    "UserStatus",
    # State
    "Goal",
    "GoalTemplate",
    "GOAL_PRIORITIES",
    "DEFAULT_GOAL_TEMPLATES",
    "UserState",
    "MAX_PROGRESS_DELTA",
    "ConversationContext",
    "HandoffState",
    "PendingHandoff",
    "Stable",
    "HandoffNotice",
    # Actions and leases
    "GoalAction",
    "ActionQueueEntry",
    "ActiveLease",
    "Busy",
    # Boundary
    "Classification",
    "ContentItem",
    "TurnResult",
    "ProactiveDelivery",
]
