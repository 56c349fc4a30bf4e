# tests/conftest.py
"""
Shared pytest fixtures and configuration for chuk_ai_agent_orchestrator tests.

Every component runs on a ManualTaskScheduler, so time only moves when a
test calls ``advance``; nothing sleeps on the wall clock.
"""

import copy
import logging
import random
from unittest.mock import AsyncMock

import pytest

from chuk_ai_agent_orchestrator.config import OrchestratorConfig
from chuk_ai_agent_orchestrator.goal_engine import GoalEngine
from chuk_ai_agent_orchestrator.guards.concurrency import ConcurrencyGuard
from chuk_ai_agent_orchestrator.handoff.machine import HandoffStateMachine
from chuk_ai_agent_orchestrator.models.enums import ResponderType
from chuk_ai_agent_orchestrator.models.turn import Classification
from chuk_ai_agent_orchestrator.orchestrator import AgentOrchestrator
from chuk_ai_agent_orchestrator.proactive_scheduler import ProactiveActionScheduler
from chuk_ai_agent_orchestrator.state_store import UserStateStore
from chuk_ai_agent_orchestrator.store import InMemoryKeyedStore
from chuk_ai_agent_orchestrator.timing import ManualTaskScheduler

# Configure logging for tests
logging.basicConfig(level=logging.WARNING)
logging.getLogger("chuk_ai_agent_orchestrator").setLevel(logging.DEBUG)


@pytest.fixture
def config():
    """Explicit settings so environment overrides never leak into tests."""
    return OrchestratorConfig(
        lease_ttl_seconds=30,
        drain_delay_seconds=1.0,
        inactivity_seconds=3600,
        waiting_room_responder="hold_agent",
        default_responder="general",
        history_window=10,
        idle_threshold_seconds=30,
    )


@pytest.fixture
def scheduler():
    return ManualTaskScheduler()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def guard(scheduler, config):
    return ConcurrencyGuard(scheduler=scheduler, clock=scheduler, config=config)


@pytest.fixture
def states(scheduler, config):
    return UserStateStore(clock=scheduler, config=config)


@pytest.fixture
def goals(states, guard, scheduler, config):
    return GoalEngine(states, guard, clock=scheduler, config=config)


@pytest.fixture
def proactive(states, goals, guard, scheduler, config, rng):
    return ProactiveActionScheduler(states, goals, guard, clock=scheduler, config=config, rng=rng)


@pytest.fixture
def handoff(scheduler, config, rng):
    return HandoffStateMachine(clock=scheduler, config=config, rng=rng)


@pytest.fixture
def mock_classifier():
    """Classifier that routes everything to the general responder."""
    mock = AsyncMock()
    mock.classify.return_value = Classification(
        responder_type=ResponderType.GENERAL,
        confidence=0.8,
        reasoning="test",
    )
    return mock


@pytest.fixture
def mock_completion():
    """Completion service with a canned reply."""
    mock = AsyncMock()
    mock.complete.return_value = "Here you go!"
    return mock


@pytest.fixture
def deliveries():
    """Collects (user_id, ProactiveDelivery) pairs from the orchestrator."""
    return []


@pytest.fixture
def orchestrator(mock_classifier, mock_completion, config, scheduler, rng, deliveries):
    async def deliver(user_id, delivery):
        deliveries.append((user_id, delivery))

    return AgentOrchestrator(
        classifier=mock_classifier,
        completion=mock_completion,
        config=config,
        scheduler=scheduler,
        rng=rng,
        delivery=deliver,
    )


class CopyingKeyedStore(InMemoryKeyedStore):
    """Hands out copies, the way an external backend would; only ``set`` persists."""

    def get(self, key):
        return copy.deepcopy(super().get(key))

    def items(self):
        return [(key, copy.deepcopy(value)) for key, value in super().items()]


@pytest.fixture
def copying_guard(scheduler, config):
    return ConcurrencyGuard(
        scheduler=scheduler,
        clock=scheduler,
        config=config,
        leases=CopyingKeyedStore(),
        queues=CopyingKeyedStore(),
    )


@pytest.fixture
def copying_states(scheduler, config):
    return UserStateStore(store=CopyingKeyedStore(), clock=scheduler, config=config)
