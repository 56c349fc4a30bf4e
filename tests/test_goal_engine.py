# tests/test_goal_engine.py
"""
Tests for GoalEngine.

Covers:
- activation rules (lease-gated entertainment/engagement, technical support)
- idempotent activation and deactivation when a rule stops holding
- asymmetric progress updates and their satisfaction/engagement side effects
- all signals staying within [0, 1]
"""

import itertools
from datetime import timedelta

import pytest

from chuk_ai_agent_orchestrator.goal_engine import GoalEngine
from chuk_ai_agent_orchestrator.models.enums import GoalKind, ResponderType, UserStatus


def kinds(goals):
    return [g.kind for g in goals]


@pytest.fixture
def on_hold(states, guard):
    """A user parked on hold with the waiting-room responder holding the lease."""
    states.set_status("u1", UserStatus.ON_HOLD)
    guard.try_acquire("u1", ResponderType.HOLD_AGENT)
    return "u1"


class TestActivation:
    def test_unknown_user(self, goals):
        assert goals.activate("ghost") == []
        assert goals.active_goals("ghost") == []

    def test_default_state_activates_nothing(self, states, goals):
        states.initialize("u1")
        assert goals.activate("u1") == []

    def test_entertainment_on_hold(self, goals, on_hold):
        assert kinds(goals.activate(on_hold)) == [GoalKind.ENTERTAINMENT]

    def test_activation_is_idempotent(self, goals, on_hold):
        assert goals.activate(on_hold)
        assert goals.activate(on_hold) == []
        assert kinds(goals.active_goals(on_hold)) == [GoalKind.ENTERTAINMENT]

    def test_entertainment_requires_waiting_room_lease(self, states, guard, goals):
        states.set_status("u1", UserStatus.ON_HOLD)
        assert goals.activate("u1") == []

        guard.try_acquire("u1", ResponderType.JOKE)
        assert goals.activate("u1") == []
        assert not goals.in_waiting_room("u1")

    def test_low_engagement_activates_entertainment(self, states, guard, goals):
        state = states.initialize("u1")
        state.engagement_level = 0.55
        states.save(state)
        guard.try_acquire("u1", ResponderType.HOLD_AGENT)
        assert kinds(goals.activate("u1")) == [GoalKind.ENTERTAINMENT]

    def test_technical_support_needs_no_lease(self, states, goals):
        states.update("u1", "I found a bug in my code")
        assert kinds(goals.activate("u1")) == [GoalKind.TECHNICAL_SUPPORT]

    def test_engagement_after_idle(self, states, guard, goals, scheduler):
        states.set_status("u1", UserStatus.ON_HOLD)
        scheduler.set_time(scheduler.now() + timedelta(seconds=31))
        guard.try_acquire("u1", ResponderType.HOLD_AGENT)
        assert kinds(goals.activate("u1")) == [GoalKind.ENTERTAINMENT, GoalKind.ENGAGEMENT]

    def test_engagement_on_low_engagement(self, states, guard, goals):
        state = states.initialize("u1")
        state.engagement_level = 0.3
        states.save(state)
        guard.try_acquire("u1", ResponderType.HOLD_AGENT)
        assert kinds(goals.activate("u1")) == [GoalKind.ENTERTAINMENT, GoalKind.ENGAGEMENT]

    def test_deactivates_when_rule_stops_holding(self, guard, goals, on_hold):
        goals.activate(on_hold)
        guard.release(on_hold)

        assert goals.activate(on_hold) == []
        assert goals.active_goals(on_hold) == []

    def test_activation_is_saved(self, copying_states, guard, scheduler, config):
        goals = GoalEngine(copying_states, guard, clock=scheduler, config=config)
        copying_states.update("u1", "I found a bug in my code")

        assert kinds(goals.activate("u1")) == [GoalKind.TECHNICAL_SUPPORT]
        assert kinds(goals.active_goals("u1")) == [GoalKind.TECHNICAL_SUPPORT]
        assert goals.activate("u1") == []

    def test_active_goals_priority_order(self, states, guard, goals):
        state = states.update("u1", "help, my python code has a bug")
        state.engagement_level = 0.2
        states.save(state)
        guard.try_acquire("u1", ResponderType.HOLD_AGENT)
        goals.activate("u1")
        assert kinds(goals.active_goals("u1")) == [
            GoalKind.TECHNICAL_SUPPORT,
            GoalKind.ENTERTAINMENT,
            GoalKind.ENGAGEMENT,
        ]


class TestEntertainmentProgress:
    def test_positive_reply(self, states, goals, on_hold):
        goals.activate(on_hold)
        goals.update_progress(on_hold, "thanks, that was great")
        state = states.get(on_hold)
        assert state.goal(GoalKind.ENTERTAINMENT).progress == pytest.approx(0.3)
        assert state.satisfaction_level == pytest.approx(0.6)

    def test_negative_reply(self, states, goals, on_hold):
        goals.activate(on_hold)
        goals.update_progress(on_hold, "thanks")
        goals.update_progress(on_hold, "that's boring")
        state = states.get(on_hold)
        assert state.goal(GoalKind.ENTERTAINMENT).progress == pytest.approx(0.1)
        assert state.satisfaction_level == pytest.approx(0.5)

    def test_negated_praise_counts_as_negative(self, states, goals, on_hold):
        goals.activate(on_hold)
        goals.update_progress(on_hold, "that was not helpful at all")
        state = states.get(on_hold)
        assert state.goal(GoalKind.ENTERTAINMENT).progress == 0.0
        assert state.satisfaction_level == pytest.approx(0.4)

    def test_neutral_reply_changes_nothing(self, states, goals, on_hold):
        goals.activate(on_hold)
        goals.update_progress(on_hold, "hmm")
        assert states.get(on_hold).goal(GoalKind.ENTERTAINMENT).progress == 0.0


class TestTechnicalProgress:
    @pytest.fixture
    def technical_user(self, states, goals):
        states.update("u1", "I have a bug")
        goals.activate("u1")
        return "u1"

    def test_resolution_is_binary(self, states, goals, technical_user):
        goals.update_progress(technical_user, "it works now")
        state = states.get(technical_user)
        assert state.goal(GoalKind.TECHNICAL_SUPPORT).progress == 1.0
        assert state.satisfaction_level == pytest.approx(0.7)

    def test_continued_help(self, states, goals, technical_user):
        goals.update_progress(technical_user, "I need more help")
        assert states.get(technical_user).goal(GoalKind.TECHNICAL_SUPPORT).progress == pytest.approx(0.1)


class TestEngagementProgress:
    @pytest.fixture
    def disengaged(self, states, guard, goals):
        state = states.initialize("u1")
        state.engagement_level = 0.3
        states.save(state)
        guard.try_acquire("u1", ResponderType.HOLD_AGENT)
        goals.activate("u1")
        return "u1"

    def test_negative_reply(self, states, goals, disengaged):
        goals.update_progress(disengaged, "no, stop")
        state = states.get(disengaged)
        assert state.goal(GoalKind.ENGAGEMENT).progress == 0.0
        assert state.engagement_level == pytest.approx(0.2)

    def test_negated_praise_is_not_engagement(self, states, goals, disengaged):
        goals.update_progress(disengaged, "not helpful")
        state = states.get(disengaged)
        assert state.goal(GoalKind.ENGAGEMENT).progress == 0.0
        assert state.engagement_level == pytest.approx(0.2)

    def test_positive_reply(self, states, goals, disengaged):
        goals.update_progress(disengaged, "awesome")
        state = states.get(disengaged)
        assert state.goal(GoalKind.ENGAGEMENT).progress == pytest.approx(0.2)
        assert state.engagement_level == pytest.approx(0.4)

    def test_substantive_reply(self, states, goals, disengaged):
        goals.update_progress(disengaged, "tell me about the history of rome")
        state = states.get(disengaged)
        assert state.goal(GoalKind.ENGAGEMENT).progress == pytest.approx(0.2)

    def test_inactive_goals_untouched(self, states, goals, disengaged):
        goals.update_progress(disengaged, "it works, thanks")
        assert states.get(disengaged).goal(GoalKind.TECHNICAL_SUPPORT).progress == 0.0


class TestBounds:
    def test_signals_stay_in_unit_interval(self, states, guard, goals):
        replies = ["thanks great", "no stop boring", "fixed it", "more help please", "k", "x" * 40]
        state = states.update("u1", "my code has a bug, I'm waiting")
        state.engagement_level = 0.1
        states.save(state)
        guard.try_acquire("u1", ResponderType.HOLD_AGENT)
        goals.activate("u1")

        for reply in itertools.islice(itertools.cycle(replies), 60):
            states.update("u1", reply)
            goals.activate("u1")
            goals.update_progress("u1", reply)
            state = states.get("u1")
            assert 0.0 <= state.engagement_level <= 1.0
            assert 0.0 <= state.satisfaction_level <= 1.0
            for goal in state.goals:
                assert 0.0 <= goal.progress <= 1.0
