# chuk_ai_agent_orchestrator/state_store.py
"""
User State Store - per-user engagement, satisfaction and topic signals.

Records are created lazily on first contact, updated from every inbound
message, and garbage-collected after an inactivity window. Updates never
fail: an unknown user is simply initialized.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import timedelta

from chuk_ai_agent_orchestrator.config import OrchestratorConfig
from chuk_ai_agent_orchestrator.lexicon import (
    CHAT_TERMS,
    HELP_TERMS,
    HOLD_TERMS,
    JOKE_TERMS,
    TECHNICAL_CONTEXT_TERMS,
    TRIVIA_TERMS,
    contains_any,
)
from chuk_ai_agent_orchestrator.models.enums import EntertainmentPreference, UserStatus
from chuk_ai_agent_orchestrator.models.user_state import (
    DEFAULT_GOAL_TEMPLATES,
    GoalTemplate,
    UserState,
)
from chuk_ai_agent_orchestrator.store import InMemoryKeyedStore, KeyedStore
from chuk_ai_agent_orchestrator.timing import Clock, SystemClock

logger = logging.getLogger(__name__)

# Engagement nudges
SUBSTANTIVE_MESSAGE_CHARS = 50
TERSE_MESSAGE_CHARS = 10
ENGAGEMENT_BOOST = 0.2
ENGAGEMENT_PENALTY = -0.1


class UserStateStore:
    """Owns every UserState, keyed by user id."""

    def __init__(
        self,
        store: KeyedStore[UserState] | None = None,
        clock: Clock | None = None,
        config: OrchestratorConfig | None = None,
        templates: Sequence[GoalTemplate] = DEFAULT_GOAL_TEMPLATES,
    ):
        self._store: KeyedStore[UserState] = store if store is not None else InMemoryKeyedStore()
        self._clock = clock or SystemClock()
        self._config = config or OrchestratorConfig()
        self._templates = tuple(templates)

    def initialize(self, user_id: str) -> UserState:
        """Create (or reset) the record for ``user_id`` with fresh goals."""
        now = self._clock.now()
        state = UserState(
            user_id=user_id,
            last_interaction_time=now,
            goals=[template.instantiate(user_id, now) for template in self._templates],
        )
        self._store.set(user_id, state)
        logger.debug(f"Initialized user state for {user_id}")
        return state

    def get(self, user_id: str) -> UserState | None:
        return self._store.get(user_id)

    def get_or_create(self, user_id: str) -> UserState:
        return self._store.get(user_id) or self.initialize(user_id)

    def update(self, user_id: str, text: str) -> UserState:
        """Reclassify the user's state from an inbound message."""
        state = self.get_or_create(user_id)
        state.last_interaction_time = self._clock.now()

        if contains_any(text, HOLD_TERMS):
            state.current_state = UserStatus.ON_HOLD
        elif contains_any(text, HELP_TERMS):
            state.current_state = UserStatus.WAITING_FOR_HELP
        else:
            state.current_state = UserStatus.ACTIVE_CONVERSATION

        if contains_any(text, JOKE_TERMS):
            state.entertainment_preference = EntertainmentPreference.JOKES
        elif contains_any(text, TRIVIA_TERMS):
            state.entertainment_preference = EntertainmentPreference.TRIVIA
        elif contains_any(text, CHAT_TERMS):
            state.entertainment_preference = EntertainmentPreference.GENERAL_CHAT
        elif state.entertainment_preference is None:
            state.entertainment_preference = EntertainmentPreference.MIXED

        if contains_any(text, TECHNICAL_CONTEXT_TERMS):
            state.technical_context = text

        if len(text) > SUBSTANTIVE_MESSAGE_CHARS and ("?" in text or "help" in text.lower()):
            state.nudge_engagement(ENGAGEMENT_BOOST)
        elif len(text) < TERSE_MESSAGE_CHARS:
            state.nudge_engagement(ENGAGEMENT_PENALTY)

        self._store.set(user_id, state)
        logger.debug(
            f"User {user_id}: state={state.current_state.value}, "
            f"engagement={state.engagement_level:.2f}, preference={state.entertainment_preference}"
        )
        return state

    def set_status(
        self,
        user_id: str,
        status: UserStatus,
        preference: EntertainmentPreference | None = None,
    ) -> UserState:
        """Set the user's status directly, e.g. parking a new connection on hold."""
        state = self.get_or_create(user_id)
        state.current_state = status
        if preference is not None:
            state.entertainment_preference = preference
        self._store.set(user_id, state)
        return state

    def save(self, state: UserState) -> None:
        self._store.set(state.user_id, state)

    def remove(self, user_id: str) -> UserState | None:
        return self._store.delete(user_id)

    def cleanup_inactive(self, max_inactive_seconds: float | None = None) -> list[str]:
        """Drop users idle longer than the window. Returns the removed ids."""
        if max_inactive_seconds is None:
            max_inactive_seconds = self._config.inactivity_seconds
        window = timedelta(seconds=max_inactive_seconds)
        now = self._clock.now()
        removed: list[str] = []
        for user_id, state in self._store.items():
            if now - state.last_interaction_time > window:
                self._store.delete(user_id)
                removed.append(user_id)
        if removed:
            logger.info(f"Cleaned up {len(removed)} inactive user states")
        return removed

    def __len__(self) -> int:
        return len(self._store)

    def __contains__(self, user_id: object) -> bool:
        return user_id in self._store
