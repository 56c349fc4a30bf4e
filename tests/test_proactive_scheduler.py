# tests/test_proactive_scheduler.py
"""
Tests for ProactiveActionScheduler.

Covers:
- the waiting-room lease gate
- candidate synthesis per goal kind
- arbitration (priority, then Immediate before Delayed)
- the idle-time delay heuristic
"""

from datetime import timedelta

import pytest

from chuk_ai_agent_orchestrator.goal_engine import GoalEngine
from chuk_ai_agent_orchestrator.models.action import GoalAction
from chuk_ai_agent_orchestrator.models.enums import (
    ActionKind,
    ActionTiming,
    EntertainmentPreference,
    GoalKind,
    ResponderType,
    UserStatus,
)
from chuk_ai_agent_orchestrator.proactive_scheduler import ProactiveActionScheduler, arbitrate, compute_delay_ms
from chuk_ai_agent_orchestrator.responders import ENTERTAINMENT_ROSTER


def park(states, guard, user_id="u1", preference=EntertainmentPreference.JOKES):
    states.set_status(user_id, UserStatus.ON_HOLD, preference)
    guard.try_acquire(user_id, ResponderType.HOLD_AGENT)
    return user_id


class TestComputeDelay:
    @pytest.mark.parametrize(
        "idle, expected",
        [(0, 15000), (30, 15000), (30.5, 10000), (60, 10000), (61, 5000), (3600, 5000)],
    )
    def test_delay_shrinks_with_idle_time(self, idle, expected):
        assert compute_delay_ms(idle) == expected


class TestArbitrate:
    def make(self, priority, timing=ActionTiming.IMMEDIATE, responder=ResponderType.JOKE):
        return GoalAction(
            kind=ActionKind.PROACTIVE_MESSAGE,
            target_responder=responder,
            message_text="x",
            timing=timing,
            priority=priority,
        )

    def test_empty(self):
        assert arbitrate([]) is None

    def test_highest_priority_wins(self):
        low, high = self.make(6), self.make(10)
        assert arbitrate([low, high]) is high

    def test_immediate_breaks_ties(self):
        delayed = self.make(8, ActionTiming.DELAYED)
        immediate = self.make(8, ActionTiming.IMMEDIATE)
        assert arbitrate([delayed, immediate]) is immediate

    def test_first_wins_full_tie(self):
        a = self.make(8, responder=ResponderType.JOKE)
        b = self.make(8, responder=ResponderType.TRIVIA)
        assert arbitrate([a, b]) is a


class TestScenarios:
    def test_default_user_gets_nothing(self, states, proactive):
        states.initialize("u1")
        assert proactive.generate("u1") is None

    def test_unknown_user_gets_nothing(self, proactive):
        assert proactive.generate("ghost") is None
        assert proactive.candidates("ghost") == []

    def test_on_hold_joke_lover(self, states, guard, proactive):
        user_id = park(states, guard)
        action = proactive.generate(user_id)

        assert action is not None
        assert action.kind == ActionKind.PROACTIVE_MESSAGE
        assert action.target_responder == ResponderType.JOKE
        assert action.timing == ActionTiming.IMMEDIATE
        assert action.delay_ms == 15000
        assert action.source_goal == GoalKind.ENTERTAINMENT
        assert "joke" in action.message_text.lower()

    def test_store_handing_out_copies(self, copying_states, copying_guard, scheduler, config, rng):
        goals = GoalEngine(copying_states, copying_guard, clock=scheduler, config=config)
        proactive = ProactiveActionScheduler(
            copying_states, goals, copying_guard, clock=scheduler, config=config, rng=rng
        )
        user_id = park(copying_states, copying_guard)

        action = proactive.generate(user_id)
        assert action is not None
        assert action.target_responder == ResponderType.JOKE
        assert action.source_goal == GoalKind.ENTERTAINMENT

    @pytest.mark.parametrize("idle, expected", [(31, 10000), (61, 5000)])
    def test_delay_tracks_idle_time(self, states, guard, proactive, scheduler, idle, expected):
        states.set_status("u1", UserStatus.ON_HOLD, EntertainmentPreference.JOKES)
        # Jump before leasing so the lease is fresh
        scheduler.set_time(scheduler.now() + timedelta(seconds=idle))
        guard.try_acquire("u1", ResponderType.HOLD_AGENT)

        action = proactive.generate("u1")
        assert action.target_responder == ResponderType.JOKE
        assert action.timing == ActionTiming.IMMEDIATE
        assert action.delay_ms == expected

    def test_trivia_preference(self, states, guard, proactive):
        park(states, guard, preference=EntertainmentPreference.TRIVIA)
        assert proactive.generate("u1").target_responder == ResponderType.TRIVIA

    def test_mixed_preference_picks_from_roster(self, states, guard, proactive):
        park(states, guard, preference=EntertainmentPreference.MIXED)
        action = proactive.generate("u1")
        assert action.target_responder in ENTERTAINMENT_ROSTER


class TestLeaseGate:
    def test_no_lease(self, states, proactive):
        states.set_status("u1", UserStatus.ON_HOLD, EntertainmentPreference.JOKES)
        assert proactive.generate("u1") is None

    def test_other_responder_holds_lease(self, states, guard, proactive):
        states.update("u1", "my code has a bug")
        guard.try_acquire("u1", ResponderType.TECHNICAL)
        assert proactive.generate("u1") is None

    async def test_expired_waiting_room_lease(self, states, guard, proactive, scheduler):
        park(states, guard)
        await scheduler.advance(31)
        assert proactive.generate("u1") is None


class TestCandidates:
    def test_technical_outranks_entertainment(self, states, guard, proactive):
        states.update("u1", "my python code has a bug")
        park(states, guard)

        action = proactive.generate("u1")
        assert action.kind == ActionKind.TECHNICAL_CHECK
        assert action.target_responder == ResponderType.TECHNICAL
        assert action.delay_ms == 0
        assert "mentioned something technical" in action.message_text

    def test_technical_check_without_snippet(self, states, guard, proactive):
        states.update("u1", "I need help please")
        guard.try_acquire("u1", ResponderType.HOLD_AGENT)
        action = proactive.generate("u1")
        assert action.kind == ActionKind.TECHNICAL_CHECK
        assert "What technical issue" in action.message_text

    def test_engagement_offer_is_delayed(self, states, guard, proactive):
        state = states.initialize("u1")
        state.engagement_level = 0.3
        states.save(state)
        guard.try_acquire("u1", ResponderType.HOLD_AGENT)

        candidates = proactive.candidates("u1")
        offer = next(c for c in candidates if c.source_goal == GoalKind.ENGAGEMENT)
        assert offer.kind == ActionKind.ENTERTAINMENT_OFFER
        assert offer.timing == ActionTiming.DELAYED
        assert offer.target_responder in ENTERTAINMENT_ROSTER

    def test_at_most_one_action(self, states, guard, proactive):
        state = states.update("u1", "help, my python code has a bug")
        state.engagement_level = 0.1
        states.save(state)
        guard.try_acquire("u1", ResponderType.HOLD_AGENT)

        candidates = proactive.candidates("u1")
        assert len(candidates) == 3
        action = proactive.generate("u1")
        assert isinstance(action, GoalAction)
        assert action.source_goal == GoalKind.TECHNICAL_SUPPORT
