# chuk_ai_agent_orchestrator/orchestrator.py
"""
Agent Orchestrator - the facade the delivery layer talks to.

A user turn runs in this order:

1. resolve the responder (forced, or classified; classifier failure falls
   back to the default responder with zero confidence)
2. look it up in the registry (unknown responders fail the turn)
3. claim the user's lease for that responder
4. complete a pending route change, then observe the turn for handoffs
5. update user state and refresh goals
6. call the completion service (failure becomes an apology)
7. update goal progress and pick at most one proactive action
8. release the lease, which schedules a drain of queued actions

State updates happen before the completion call, so a failed completion
keeps the engagement and goal changes made for the turn.

Proactive actions go through ``execute_proactive_action`` (direct) or
``dispatch`` (after the action's delay). Both fail fast when the user's
lease is held; the action is queued and replayed by the guard's drain.
"""

from __future__ import annotations

import inspect
import logging
import random
from collections.abc import Awaitable, Callable, Sequence
from typing import Any

from chuk_ai_agent_orchestrator.classifier import Classifier
from chuk_ai_agent_orchestrator.completion import CompletionService, Message
from chuk_ai_agent_orchestrator.config import OrchestratorConfig
from chuk_ai_agent_orchestrator.exceptions import LeaseConflictError
from chuk_ai_agent_orchestrator.goal_engine import GoalEngine
from chuk_ai_agent_orchestrator.guards.concurrency import ConcurrencyGuard
from chuk_ai_agent_orchestrator.guards.constants import delivery_task_name
from chuk_ai_agent_orchestrator.handoff.machine import HandoffStateMachine
from chuk_ai_agent_orchestrator.models.action import GoalAction
from chuk_ai_agent_orchestrator.models.conversation import ConversationContext
from chuk_ai_agent_orchestrator.models.enums import (
    EntertainmentPreference,
    ResponderType,
    UserStatus,
)
from chuk_ai_agent_orchestrator.models.lease import Busy
from chuk_ai_agent_orchestrator.models.turn import ProactiveDelivery, TurnResult
from chuk_ai_agent_orchestrator.models.user_state import Goal, UserState
from chuk_ai_agent_orchestrator.proactive_scheduler import ProactiveActionScheduler
from chuk_ai_agent_orchestrator.responders import (
    ResponderConfig,
    ResponderRegistry,
    parse_responder,
)
from chuk_ai_agent_orchestrator.state_store import UserStateStore
from chuk_ai_agent_orchestrator.store import KeyedStore
from chuk_ai_agent_orchestrator.timing import AsyncioTaskScheduler, ScheduledTask, TaskScheduler

logger = logging.getLogger(__name__)

DeliveryCallback = Callable[[str, ProactiveDelivery], Any | Awaitable[Any]]


class AgentOrchestrator:
    """Routes user turns to responders and runs proactive actions."""

    def __init__(
        self,
        classifier: Classifier,
        completion: CompletionService,
        registry: ResponderRegistry | None = None,
        config: OrchestratorConfig | None = None,
        scheduler: TaskScheduler | None = None,
        rng: random.Random | None = None,
        state_store: KeyedStore[UserState] | None = None,
        context_store: KeyedStore[ConversationContext] | None = None,
        delivery: DeliveryCallback | None = None,
    ):
        self.classifier = classifier
        self.completion = completion
        self.registry = registry or ResponderRegistry()
        self.config = config or OrchestratorConfig()
        self.scheduler = scheduler or AsyncioTaskScheduler()
        rng = rng or random.Random()

        # The scheduler doubles as the clock so scheduled work and timestamps agree
        clock = self.scheduler
        self.states = UserStateStore(store=state_store, clock=clock, config=self.config)
        self.guard = ConcurrencyGuard(scheduler=self.scheduler, clock=clock, config=self.config)
        self.goals = GoalEngine(self.states, self.guard, clock=clock, config=self.config)
        self.proactive = ProactiveActionScheduler(
            self.states, self.goals, self.guard, clock=clock, config=self.config, rng=rng
        )
        self.handoff = HandoffStateMachine(
            store=context_store, registry=self.registry, clock=clock, config=self.config, rng=rng
        )

        self._default = parse_responder(self.config.default_responder)
        self._waiting_room = parse_responder(self.config.waiting_room_responder)
        self._delivery = delivery
        self.guard.on_drain(self._replay)

    # --- User turns ---

    async def process_turn(
        self,
        user_id: str,
        text: str,
        history: Sequence[Message] | None = None,
        forced_responder: ResponderType | str | None = None,
    ) -> TurnResult:
        """Handle one user message end to end."""
        responder, confidence = await self._resolve_responder(text, forced_responder)
        responder_config = self.registry.get(responder)

        lease = self.guard.claim(user_id, responder)
        try:
            context = self.handoff.get(user_id)
            if context is not None and context.current_responder != responder:
                self.handoff.complete_handoff(user_id, responder)
            self.handoff.observe_turn(user_id, text, responder)

            self.states.update(user_id, text)
            self.goals.activate(user_id)

            response_text = await self._complete(responder_config, history, text)

            self.goals.update_progress(user_id, text, response_text)
            action = self.proactive.generate(user_id)

            return TurnResult(
                response_text=response_text,
                responder_used=responder,
                confidence=confidence,
                proactive_action=action,
                handoff=self.handoff.handoff_info(user_id),
            )
        finally:
            self.guard.release(user_id, lease)

    async def _resolve_responder(
        self, text: str, forced_responder: ResponderType | str | None
    ) -> tuple[ResponderType, float]:
        if forced_responder is not None:
            return parse_responder(forced_responder), 1.0
        try:
            classification = await self.classifier.classify(text)
        except Exception as e:
            logger.warning(f"Classification failed, routing to {self._default.value}: {e}")
            return self._default, 0.0
        logger.debug(
            f"Classified as {classification.responder_type.value} "
            f"({classification.confidence:.2f}): {classification.reasoning}"
        )
        return classification.responder_type, classification.confidence

    async def _complete(
        self, responder: ResponderConfig, history: Sequence[Message] | None, text: str
    ) -> str:
        window = self.config.history_window
        recent = list(history or [])[-window:] if window else []
        try:
            return await self.completion.complete(responder, recent, text)
        except Exception as e:
            logger.warning(f"Completion failed for {responder.type.value}, sending apology: {e}")
            return self.config.apology_text

    # --- Proactive actions ---

    async def execute_proactive_action(
        self,
        user_id: str,
        action: GoalAction,
        history: Sequence[Message] | None = None,
    ) -> str:
        """
        Run a proactive action now.

        Raises LeaseConflictError when another responder holds the user's
        lease; the action has been queued by then and will be replayed by the
        automatic drain.
        """
        return await self._execute(user_id, action, history, from_queue=False)

    async def _execute(
        self,
        user_id: str,
        action: GoalAction,
        history: Sequence[Message] | None,
        from_queue: bool,
    ) -> str:
        acquired = self.guard.try_acquire(user_id, action.target_responder)
        if isinstance(acquired, Busy):
            if from_queue:
                self.guard.requeue_front(user_id, action)
            else:
                self.guard.enqueue(user_id, action)
            raise LeaseConflictError(user_id, acquired.holder, action.target_responder.value)

        try:
            responder_config = self.registry.get(action.target_responder)
            text = await self._complete(responder_config, history, action.message_text)
            logger.info(f"Proactive {action.kind.value} delivered to {user_id} by {action.target_responder.value}")
            return text
        finally:
            self.guard.release(user_id, acquired)

    def dispatch(self, user_id: str, action: GoalAction) -> ScheduledTask:
        """Schedule ``action`` to run after its delay."""

        async def _fire() -> None:
            try:
                text = await self.execute_proactive_action(user_id, action)
            except LeaseConflictError as e:
                logger.info(f"Deferred proactive action for {user_id}: {e}")
                return
            await self._deliver(user_id, ProactiveDelivery(user_id=user_id, action=action, response_text=text))

        logger.debug(f"Dispatching {action.format_compact()} for {user_id}")
        return self.scheduler.schedule(
            action.delay_seconds,
            _fire,
            name=delivery_task_name(user_id, action.kind.value),
        )

    async def _replay(self, user_id: str, action: GoalAction) -> None:
        try:
            text = await self._execute(user_id, action, None, from_queue=True)
        except LeaseConflictError as e:
            logger.info(f"Queued action for {user_id} still blocked: {e}")
            return
        await self._deliver(
            user_id,
            ProactiveDelivery(user_id=user_id, action=action, response_text=text, from_queue=True),
        )

    async def _deliver(self, user_id: str, delivery: ProactiveDelivery) -> None:
        if self._delivery is None:
            return
        result = self._delivery(user_id, delivery)
        if inspect.isawaitable(result):
            await result

    # --- Session helpers ---

    def park_on_hold(self, user_id: str) -> UserState:
        """Put a newly connected user in the waiting room."""
        state = self.states.set_status(user_id, UserStatus.ON_HOLD, EntertainmentPreference.MIXED)
        if self.handoff.get(user_id) is None:
            self.handoff.initialize(user_id, self._waiting_room)
        return state

    def user_state(self, user_id: str) -> UserState | None:
        return self.states.get(user_id)

    def context(self, user_id: str) -> ConversationContext | None:
        return self.handoff.get(user_id)

    def active_goals(self, user_id: str) -> list[Goal]:
        return self.goals.active_goals(user_id)

    def cleanup_inactive(self, max_inactive_seconds: float | None = None) -> list[str]:
        """Forget users idle past the window: state, context, lease and queue."""
        removed = self.states.cleanup_inactive(max_inactive_seconds)
        self.handoff.cleanup(max_inactive_seconds)
        for user_id in removed:
            self.handoff.forget(user_id)
            self.guard.forget(user_id)
        return removed
