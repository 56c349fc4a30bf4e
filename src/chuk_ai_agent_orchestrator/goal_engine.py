# chuk_ai_agent_orchestrator/goal_engine.py
"""
Goal Engine - decides which per-user objectives are active and tracks
their progress from interaction outcomes.

Activation rules are re-evaluated every turn, each goal independently:

- Entertainment: leased to the waiting room AND (on hold OR engagement < 0.6)
- TechnicalSupport: waiting for help OR a technical snippet was captured
- Engagement: leased to the waiting room AND (engagement < 0.5 OR idle > 30s)

A goal whose rule holds and is inactive is activated (and reported); an
active goal whose rule no longer holds is deactivated; everything else is a
no-op, so two consecutive evaluations without a state change report nothing
the second time.

Progress is asymmetric: technical resolution is binary, entertainment and
engagement move gradually.
"""

from __future__ import annotations

import logging

from chuk_ai_agent_orchestrator.config import (
    ENGAGEMENT_THRESHOLD,
    ENTERTAINMENT_ENGAGEMENT_THRESHOLD,
    OrchestratorConfig,
)
from chuk_ai_agent_orchestrator.guards.concurrency import ConcurrencyGuard
from chuk_ai_agent_orchestrator.lexicon import (
    CONTINUED_HELP_TERMS,
    RESOLVED_TERMS,
    contains_any,
    sentiment_counts,
)
from chuk_ai_agent_orchestrator.models.enums import GoalKind, UserStatus
from chuk_ai_agent_orchestrator.models.user_state import Goal, UserState
from chuk_ai_agent_orchestrator.responders import parse_responder
from chuk_ai_agent_orchestrator.state_store import UserStateStore
from chuk_ai_agent_orchestrator.timing import Clock, SystemClock

log = logging.getLogger(__name__)

# Progress deltas
ENTERTAINMENT_POSITIVE_STEP = 0.3
ENTERTAINMENT_NEGATIVE_STEP = -0.2
ENGAGEMENT_STEP = 0.2
TECHNICAL_CONTINUED_STEP = 0.1

# Signal deltas
SATISFACTION_STEP = 0.1
RESOLUTION_SATISFACTION_STEP = 0.2
ENGAGEMENT_SIGNAL_STEP = 0.1

SUBSTANTIVE_REPLY_CHARS = 20


class GoalEngine:
    """Activates goals from user state and updates their progress."""

    def __init__(
        self,
        states: UserStateStore,
        guard: ConcurrencyGuard,
        clock: Clock | None = None,
        config: OrchestratorConfig | None = None,
    ):
        self._states = states
        self._guard = guard
        self._clock = clock or SystemClock()
        self._config = config or OrchestratorConfig()
        self._waiting_room = parse_responder(self._config.waiting_room_responder)

    # --- Activation ---

    def in_waiting_room(self, user_id: str) -> bool:
        """True while the user's live lease is held by the waiting-room responder."""
        return self._guard.holder(user_id) == self._waiting_room

    def should_activate(self, goal: Goal, state: UserState) -> bool:
        """Evaluate a single goal's activation rule."""
        if goal.kind == GoalKind.ENTERTAINMENT:
            return self.in_waiting_room(state.user_id) and (
                state.current_state == UserStatus.ON_HOLD
                or state.engagement_level < ENTERTAINMENT_ENGAGEMENT_THRESHOLD
            )
        if goal.kind == GoalKind.TECHNICAL_SUPPORT:
            return state.current_state == UserStatus.WAITING_FOR_HELP or state.technical_context is not None
        if goal.kind == GoalKind.ENGAGEMENT:
            idle = state.idle_seconds(self._clock.now())
            return self.in_waiting_room(state.user_id) and (
                state.engagement_level < ENGAGEMENT_THRESHOLD or idle > self._config.idle_threshold_seconds
            )
        return False

    def activate(self, user_id: str) -> list[Goal]:
        """
        Re-evaluate every goal for ``user_id``.

        Returns only the goals that went from inactive to active on this call.
        """
        state = self._states.get(user_id)
        if state is None:
            return []

        now = self._clock.now()
        activated: list[Goal] = []
        for goal in state.goals:
            if self.should_activate(goal, state):
                if goal.activate(now):
                    activated.append(goal)
            elif goal.deactivate(now):
                log.debug(f"Deactivated goal {goal.id}")

        self._states.save(state)

        if activated:
            log.info(f"Activated goals for {user_id}: {[g.kind.value for g in activated]}")
        return activated

    def active_goals(self, user_id: str) -> list[Goal]:
        """Active goals, highest priority first."""
        state = self._states.get(user_id)
        return state.active_goals() if state else []

    # --- Progress ---

    def update_progress(self, user_id: str, user_reply: str, responder_output: str = "") -> None:
        """Scan the user's reply and move progress on active goals."""
        state = self._states.get(user_id)
        if state is None:
            return

        now = self._clock.now()
        positive_hits, negative_hits = sentiment_counts(user_reply)
        positive = positive_hits > 0
        negative = negative_hits > 0

        for goal in state.goals:
            if not goal.active:
                continue

            if goal.kind == GoalKind.ENTERTAINMENT:
                if positive:
                    goal.adjust(ENTERTAINMENT_POSITIVE_STEP, now)
                    state.nudge_satisfaction(SATISFACTION_STEP)
                elif negative:
                    goal.adjust(ENTERTAINMENT_NEGATIVE_STEP, now)
                    state.nudge_satisfaction(-SATISFACTION_STEP)

            elif goal.kind == GoalKind.TECHNICAL_SUPPORT:
                if contains_any(user_reply, RESOLVED_TERMS):
                    goal.complete(now)
                    state.nudge_satisfaction(RESOLUTION_SATISFACTION_STEP)
                elif contains_any(user_reply, CONTINUED_HELP_TERMS):
                    goal.adjust(TECHNICAL_CONTINUED_STEP, now)

            elif goal.kind == GoalKind.ENGAGEMENT:
                if negative and not positive:
                    goal.adjust(-ENGAGEMENT_STEP, now)
                    state.nudge_engagement(-ENGAGEMENT_SIGNAL_STEP)
                elif positive or len(user_reply) > SUBSTANTIVE_REPLY_CHARS:
                    goal.adjust(ENGAGEMENT_STEP, now)
                    state.nudge_engagement(ENGAGEMENT_SIGNAL_STEP)

            goal.last_updated = now

        self._states.save(state)
        log.debug(
            f"Progress for {user_id}: "
            + ", ".join(f"{g.kind.value}={g.progress:.2f}" for g in state.goals if g.active)
        )
