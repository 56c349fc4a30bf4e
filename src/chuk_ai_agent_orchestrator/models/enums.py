# chuk_ai_agent_orchestrator/models/enums.py
"""Enums shared by the orchestration core."""

from enum import Enum

# =============================================================================
# Responders
# =============================================================================


class ResponderType(str, Enum):
    """Closed set of responder identities."""

    GENERAL = "general"
    TECHNICAL = "technical"
    JOKE = "joke"
    TRIVIA = "trivia"
    GIF = "gif"
    ACCOUNT_SUPPORT = "account_support"
    BILLING_SUPPORT = "billing_support"
    WEBSITE_SUPPORT = "website_support"
    OPERATOR_SUPPORT = "operator_support"
    HOLD_AGENT = "hold_agent"
    STORY_TELLER = "story_teller"
    RIDDLE_MASTER = "riddle_master"
    QUOTE_MASTER = "quote_master"
    GAME_HOST = "game_host"
    MUSIC_GURU = "music_guru"
    YOUTUBE_GURU = "youtube_guru"
    DND_MASTER = "dnd_master"


# =============================================================================
# User state
# =============================================================================


class UserStatus(str, Enum):
    """Coarse conversational state of a user."""

    ON_HOLD = "on_hold"
    WAITING_FOR_HELP = "waiting_for_help"
    ACTIVE_CONVERSATION = "active_conversation"
    IDLE = "idle"


class EntertainmentPreference(str, Enum):
    """What kind of entertainment a user has asked for."""

    JOKES = "jokes"
    TRIVIA = "trivia"
    GENERAL_CHAT = "general_chat"
    MIXED = "mixed"


# =============================================================================
# Goals and actions
# =============================================================================


class GoalKind(str, Enum):
    """Standing objectives tracked per user."""

    ENTERTAINMENT = "entertainment"
    TECHNICAL_SUPPORT = "technical_support"
    ENGAGEMENT = "engagement"


class ActionKind(str, Enum):
    """Kinds of proactive intervention."""

    PROACTIVE_MESSAGE = "proactive_message"
    AGENT_SWITCH = "agent_switch"
    ENTERTAINMENT_OFFER = "entertainment_offer"
    TECHNICAL_CHECK = "technical_check"
    STATUS_UPDATE = "status_update"


class ActionTiming(str, Enum):
    """Whether an action should go out now or after its delay."""

    IMMEDIATE = "immediate"
    DELAYED = "delayed"


# =============================================================================
# Conversation / handoff
# =============================================================================


class ConversationTopic(str, Enum):
    """Topic detected from the latest user message."""

    GENERAL = "general"
    TECHNICAL = "technical"
    HUMOR = "humor"
    EDUCATIONAL = "educational"
    VISUAL_ENTERTAINMENT = "visual_entertainment"


class HandoffReason(str, Enum):
    """Why control should pass to another responder."""

    FORCED = "forced"
    EXPLICIT_REQUEST = "explicit_request"
    EXPERTISE_MISMATCH = "expertise_mismatch"
    PERFORMANCE_DECLINE = "performance_decline"
    CONVERSATION_STAGNATION = "conversation_stagnation"
