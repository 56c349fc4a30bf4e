# chuk_ai_agent_orchestrator/proactive_scheduler.py
"""
Proactive Action Scheduler - turns active goals into at most one
system-initiated action per turn.

Algorithm:
1. Only users parked with the waiting-room responder get proactive content.
2. Active goals are refreshed and taken in priority order.
3. Each goal yields exactly one candidate.
4. The highest-priority candidate wins (Immediate beats Delayed on ties);
   the rest are discarded, never accumulated.

Delay heuristic: 15s by default, 10s once the user has been idle > 30s,
5s once idle > 60s. The longer the wait, the sooner we step in.
"""

from __future__ import annotations

import logging
import random

from chuk_ai_agent_orchestrator.config import (
    BASE_DELAY_MS,
    MIN_DELAY_IDLE_SECONDS,
    MIN_DELAY_MS,
    SHORT_DELAY_IDLE_SECONDS,
    SHORT_DELAY_MS,
    OrchestratorConfig,
)
from chuk_ai_agent_orchestrator.goal_engine import GoalEngine
from chuk_ai_agent_orchestrator.guards.concurrency import ConcurrencyGuard
from chuk_ai_agent_orchestrator.models.action import GoalAction
from chuk_ai_agent_orchestrator.models.enums import (
    ActionKind,
    ActionTiming,
    EntertainmentPreference,
    GoalKind,
    ResponderType,
)
from chuk_ai_agent_orchestrator.models.user_state import Goal, UserState
from chuk_ai_agent_orchestrator.responders import ENTERTAINMENT_ROSTER, parse_responder
from chuk_ai_agent_orchestrator.state_store import UserStateStore
from chuk_ai_agent_orchestrator.timing import Clock, SystemClock

logger = logging.getLogger(__name__)

PREFERENCE_RESPONDERS: dict[EntertainmentPreference, ResponderType] = {
    EntertainmentPreference.JOKES: ResponderType.JOKE,
    EntertainmentPreference.TRIVIA: ResponderType.TRIVIA,
    EntertainmentPreference.GENERAL_CHAT: ResponderType.GENERAL,
}

# Direct instructions sent to the entertainment responder on the user's behalf
ENTERTAINMENT_PROMPTS: dict[ResponderType, str] = {
    ResponderType.JOKE: "Tell me a joke right now. I want to hear one of your best ones!",
    ResponderType.TRIVIA: "Share a fascinating trivia fact with me right now. I want to learn something interesting!",
    ResponderType.GENERAL: "I'm here to chat while you wait! What's on your mind?",
    ResponderType.GIF: "Show me a fun GIF that will brighten my wait!",
    ResponderType.STORY_TELLER: "Tell me a short, fun story while I wait.",
    ResponderType.RIDDLE_MASTER: "Give me a clever riddle to solve while I wait.",
    ResponderType.QUOTE_MASTER: "Share an inspiring quote with me right now.",
    ResponderType.GAME_HOST: "Start a quick game I can play while I wait.",
    ResponderType.MUSIC_GURU: "Recommend some great music for me to listen to while I wait.",
    ResponderType.DND_MASTER: "Start a quick D&D adventure for me and roll the first dice!",
}

TECHNICAL_CHECK_PREFIX = "I'm here to help with your technical question. "
TECHNICAL_CHECK_WITH_CONTEXT = "I can see you mentioned something technical - let me assist you with that."
TECHNICAL_CHECK_NO_CONTEXT = "What technical issue can I help you solve today?"


def compute_delay_ms(idle_seconds: float) -> int:
    """Delivery delay for an entertainment action given how long the user has waited."""
    if idle_seconds > MIN_DELAY_IDLE_SECONDS:
        return MIN_DELAY_MS
    if idle_seconds > SHORT_DELAY_IDLE_SECONDS:
        return SHORT_DELAY_MS
    return BASE_DELAY_MS


def arbitrate(candidates: list[GoalAction]) -> GoalAction | None:
    """Pick the single winning action: highest priority, then Immediate first."""
    if not candidates:
        return None
    # max() keeps the first of equal keys, so candidate order breaks remaining ties
    return max(
        candidates,
        key=lambda action: (action.priority, action.timing == ActionTiming.IMMEDIATE),
    )


class ProactiveActionScheduler:
    """Produces zero or one proactive action for a user."""

    def __init__(
        self,
        states: UserStateStore,
        goals: GoalEngine,
        guard: ConcurrencyGuard,
        clock: Clock | None = None,
        config: OrchestratorConfig | None = None,
        rng: random.Random | None = None,
    ):
        self._states = states
        self._goals = goals
        self._guard = guard
        self._clock = clock or SystemClock()
        self._config = config or OrchestratorConfig()
        self._rng = rng or random.Random()
        self._waiting_room = parse_responder(self._config.waiting_room_responder)
        self._technical = ResponderType.TECHNICAL

    def generate(self, user_id: str) -> GoalAction | None:
        """Return the one action to deliver for ``user_id``, or None."""
        holder = self._guard.holder(user_id)
        if holder != self._waiting_room:
            logger.debug(
                f"No proactive action for {user_id}: lease held by "
                f"{holder.value if holder else 'nobody'}, not the waiting room"
            )
            return None

        candidates = self.candidates(user_id)
        winner = arbitrate(candidates)
        if winner is None:
            return None

        logger.info(f"Selected proactive action for {user_id}: {winner.format_compact()}")
        if len(candidates) > 1:
            logger.debug(f"Discarded {len(candidates) - 1} lower-priority proactive candidates for {user_id}")
        return winner

    def candidates(self, user_id: str) -> list[GoalAction]:
        """One candidate per active goal, in priority order (not arbitrated)."""
        self._goals.activate(user_id)
        # Re-read after activation; the store may hand out copies
        state = self._states.get(user_id)
        if state is None:
            return []

        actions: list[GoalAction] = []
        for goal in state.active_goals():
            action = self._action_for_goal(goal, state)
            if action is not None:
                actions.append(action)
        return actions

    def _action_for_goal(self, goal: Goal, state: UserState) -> GoalAction | None:
        if goal.kind == GoalKind.ENTERTAINMENT:
            return self._entertainment_action(goal, state)
        if goal.kind == GoalKind.TECHNICAL_SUPPORT:
            return self._technical_action(goal, state)
        if goal.kind == GoalKind.ENGAGEMENT:
            return self._engagement_action(goal, state)
        return None

    def _random_entertainer(self) -> ResponderType:
        return self._rng.choice(ENTERTAINMENT_ROSTER)

    def _entertainment_action(self, goal: Goal, state: UserState) -> GoalAction:
        preference = state.entertainment_preference or EntertainmentPreference.MIXED
        responder = PREFERENCE_RESPONDERS.get(preference) or self._random_entertainer()
        return GoalAction(
            kind=ActionKind.PROACTIVE_MESSAGE,
            target_responder=responder,
            message_text=ENTERTAINMENT_PROMPTS[responder],
            timing=ActionTiming.IMMEDIATE,
            delay_ms=compute_delay_ms(state.idle_seconds(self._clock.now())),
            priority=goal.priority,
            source_goal=goal.kind,
        )

    def _technical_action(self, goal: Goal, state: UserState) -> GoalAction:
        suffix = TECHNICAL_CHECK_WITH_CONTEXT if state.technical_context else TECHNICAL_CHECK_NO_CONTEXT
        return GoalAction(
            kind=ActionKind.TECHNICAL_CHECK,
            target_responder=self._technical,
            message_text=TECHNICAL_CHECK_PREFIX + suffix,
            timing=ActionTiming.IMMEDIATE,
            delay_ms=0,
            priority=goal.priority,
            source_goal=goal.kind,
        )

    def _engagement_action(self, goal: Goal, state: UserState) -> GoalAction:
        # Engagement never addresses the user directly; it redirects to entertainment
        responder = self._random_entertainer()
        return GoalAction(
            kind=ActionKind.ENTERTAINMENT_OFFER,
            target_responder=responder,
            message_text=ENTERTAINMENT_PROMPTS[responder],
            timing=ActionTiming.DELAYED,
            delay_ms=compute_delay_ms(state.idle_seconds(self._clock.now())),
            priority=goal.priority,
            source_goal=goal.kind,
        )
