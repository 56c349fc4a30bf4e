# chuk_ai_agent_orchestrator/handoff/machine.py
"""
Handoff State Machine - decides if, when and to whom control of a
conversation passes to another responder.

Each turn the context is analyzed (topic, satisfaction, performance) and
the triggers are evaluated in precedence order; the first match wins:

1. forced      - first turn with the waiting room: random entertainer
2. explicit    - agent-specific trigger phrases
3. expertise   - the topic's ideal responder differs (depth > 2)
4. performance - performance < 0.4 (depth > 3)
5. stagnation  - depth > 8 and satisfaction < 0.6

The result replaces the context's handoff state (Stable when nothing
matched). ``complete_handoff`` swaps the responder and starts it on a clean
slate.
"""

from __future__ import annotations

import logging
import random
from datetime import timedelta

from pydantic import BaseModel

from chuk_ai_agent_orchestrator.config import NEUTRAL_BASELINE, OrchestratorConfig
from chuk_ai_agent_orchestrator.handoff.messages import lookup_announcement
from chuk_ai_agent_orchestrator.lexicon import (
    EDUCATIONAL_TOPIC_TERMS,
    HUMOR_TOPIC_TERMS,
    TECHNICAL_TOPIC_TERMS,
    VISUAL_TOPIC_TERMS,
    contains_any,
    sentiment_counts,
)
from chuk_ai_agent_orchestrator.models.conversation import (
    ConversationContext,
    HandoffNotice,
    PendingHandoff,
    Stable,
)
from chuk_ai_agent_orchestrator.models.enums import (
    ConversationTopic,
    HandoffReason,
    ResponderType,
)
from chuk_ai_agent_orchestrator.responders import (
    ENTERTAINMENT_ROSTER,
    ResponderRegistry,
    parse_responder,
)
from chuk_ai_agent_orchestrator.store import InMemoryKeyedStore, KeyedStore
from chuk_ai_agent_orchestrator.timing import Clock, SystemClock

logger = logging.getLogger(__name__)

# Trigger thresholds
FORCED_HANDOFF_DEPTH = 1
EXPERTISE_MIN_DEPTH = 2
PERFORMANCE_FLOOR = 0.4
PERFORMANCE_MIN_DEPTH = 3
STAGNATION_MIN_DEPTH = 8
STAGNATION_SATISFACTION = 0.6
DRAG_MIN_DEPTH = 5
DRAG_SATISFACTION = 0.5

# Per-turn signal deltas
POSITIVE_STEP = 0.1
NEGATIVE_STEP = -0.2
DRAG_STEP = -0.1


class ExplicitTrigger(BaseModel):
    """Phrases that mean the user is asking for a specific responder."""

    target: ResponderType
    terms: tuple[str, ...]
    confidence: float
    detail: str

    model_config = {"frozen": True}


EXPLICIT_TRIGGERS: tuple[ExplicitTrigger, ...] = (
    ExplicitTrigger(
        target=ResponderType.JOKE,
        terms=("tell me a joke",),
        confidence=0.9,
        detail="User explicitly requested humor",
    ),
    ExplicitTrigger(
        target=ResponderType.TRIVIA,
        terms=("fact", "facts", "trivia", "learn"),
        confidence=0.8,
        detail="User requested educational content",
    ),
    ExplicitTrigger(
        target=ResponderType.GIF,
        terms=("gif", "gifs", "meme", "memes", "visual"),
        confidence=0.8,
        detail="User requested visual entertainment",
    ),
    ExplicitTrigger(
        target=ResponderType.YOUTUBE_GURU,
        terms=("youtube", "video", "viral", "show me something funny", "entertaining video"),
        confidence=0.9,
        detail="User requested YouTube videos or viral content",
    ),
    ExplicitTrigger(
        target=ResponderType.DND_MASTER,
        terms=("d&d", "dnd", "dungeons and dragons", "rpg", "dice", "dungeon master", "roll dice"),
        confidence=0.9,
        detail="User requested a D&D RPG experience",
    ),
    ExplicitTrigger(
        target=ResponderType.GAME_HOST,
        terms=("play a game", "let's play", "lets play"),
        confidence=0.8,
        detail="User requested an interactive game",
    ),
)

TOPIC_RESPONDERS: dict[ConversationTopic, ResponderType] = {
    ConversationTopic.TECHNICAL: ResponderType.TECHNICAL,
    ConversationTopic.HUMOR: ResponderType.JOKE,
    ConversationTopic.EDUCATIONAL: ResponderType.TRIVIA,
    ConversationTopic.VISUAL_ENTERTAINMENT: ResponderType.GIF,
}

# Who to rotate to when a conversation goes stale
REFRESH_ROTATION: dict[ResponderType, ResponderType] = {
    ResponderType.GENERAL: ResponderType.JOKE,
    ResponderType.JOKE: ResponderType.TRIVIA,
    ResponderType.TRIVIA: ResponderType.GIF,
    ResponderType.GIF: ResponderType.RIDDLE_MASTER,
    ResponderType.TECHNICAL: ResponderType.HOLD_AGENT,
    ResponderType.ACCOUNT_SUPPORT: ResponderType.HOLD_AGENT,
    ResponderType.BILLING_SUPPORT: ResponderType.HOLD_AGENT,
    ResponderType.WEBSITE_SUPPORT: ResponderType.HOLD_AGENT,
    ResponderType.OPERATOR_SUPPORT: ResponderType.HOLD_AGENT,
    ResponderType.HOLD_AGENT: ResponderType.JOKE,
    ResponderType.STORY_TELLER: ResponderType.RIDDLE_MASTER,
    ResponderType.RIDDLE_MASTER: ResponderType.QUOTE_MASTER,
    ResponderType.QUOTE_MASTER: ResponderType.GAME_HOST,
    ResponderType.GAME_HOST: ResponderType.MUSIC_GURU,
    ResponderType.MUSIC_GURU: ResponderType.YOUTUBE_GURU,
    ResponderType.YOUTUBE_GURU: ResponderType.STORY_TELLER,
    ResponderType.DND_MASTER: ResponderType.STORY_TELLER,
}


def detect_topic(text: str) -> ConversationTopic | None:
    """Topic signalled by the message, or None to keep the current one."""
    if contains_any(text, TECHNICAL_TOPIC_TERMS):
        return ConversationTopic.TECHNICAL
    if contains_any(text, HUMOR_TOPIC_TERMS):
        return ConversationTopic.HUMOR
    if contains_any(text, EDUCATIONAL_TOPIC_TERMS):
        return ConversationTopic.EDUCATIONAL
    if contains_any(text, VISUAL_TOPIC_TERMS):
        return ConversationTopic.VISUAL_ENTERTAINMENT
    return None


class HandoffStateMachine:
    """Per-user conversation contexts and handoff decisions."""

    def __init__(
        self,
        store: KeyedStore[ConversationContext] | None = None,
        registry: ResponderRegistry | None = None,
        clock: Clock | None = None,
        config: OrchestratorConfig | None = None,
        rng: random.Random | None = None,
    ):
        self._contexts: KeyedStore[ConversationContext] = store if store is not None else InMemoryKeyedStore()
        self._registry = registry or ResponderRegistry()
        self._clock = clock or SystemClock()
        self._config = config or OrchestratorConfig()
        self._rng = rng or random.Random()
        self._waiting_room = parse_responder(self._config.waiting_room_responder)
        self._default = parse_responder(self._config.default_responder)

    @property
    def waiting_room(self) -> ResponderType:
        return self._waiting_room

    # --- Context lifecycle ---

    def initialize(self, user_id: str, responder: ResponderType | None = None) -> ConversationContext:
        context = ConversationContext(
            user_id=user_id,
            current_responder=responder or self._default,
            last_message_time=self._clock.now(),
        )
        self._contexts.set(user_id, context)
        return context

    def get(self, user_id: str) -> ConversationContext | None:
        return self._contexts.get(user_id)

    def get_or_create(self, user_id: str, responder: ResponderType | None = None) -> ConversationContext:
        return self._contexts.get(user_id) or self.initialize(user_id, responder)

    def observe_turn(self, user_id: str, user_text: str, responder: ResponderType | None = None) -> ConversationContext:
        """Record one user turn, analyze it, and evaluate handoff triggers."""
        context = self.get_or_create(user_id, responder)
        context.last_message_time = self._clock.now()
        context.message_count += 1
        context.conversation_depth += 1

        self._analyze(context, user_text)

        decision = self.evaluate(context, user_text)
        if decision is not None:
            logger.info(
                f"Handoff flagged for {user_id}: {context.current_responder.value} -> "
                f"{decision.target.value} ({decision.reason.value})"
            )
            context.handoff = decision
        else:
            context.handoff = Stable()

        self._contexts.set(user_id, context)
        return context

    def _analyze(self, context: ConversationContext, user_text: str) -> None:
        topic = detect_topic(user_text)
        if topic is not None:
            context.topic = topic

        positive, negative = sentiment_counts(user_text)
        if positive > negative:
            context.shift_satisfaction(POSITIVE_STEP)
            context.shift_performance(POSITIVE_STEP)
        elif negative > positive:
            context.shift_satisfaction(NEGATIVE_STEP)
            context.shift_performance(NEGATIVE_STEP)

        # A long, unhappy conversation drags performance down
        if context.conversation_depth > DRAG_MIN_DEPTH and context.user_satisfaction < DRAG_SATISFACTION:
            context.shift_performance(DRAG_STEP)

    # --- Trigger evaluation ---

    def evaluate(self, context: ConversationContext, user_text: str) -> PendingHandoff | None:
        """Apply the triggers in precedence order; first match wins."""
        current = context.current_responder

        if current == self._waiting_room and context.conversation_depth == FORCED_HANDOFF_DEPTH:
            target = self._rng.choice(ENTERTAINMENT_ROSTER)
            return PendingHandoff(
                target=target,
                reason=HandoffReason.FORCED,
                confidence=1.0,
                detail=f"No specialists available - connecting to {target.value} while the user waits",
            )

        for trigger in EXPLICIT_TRIGGERS:
            if trigger.target != current and contains_any(user_text, trigger.terms):
                return PendingHandoff(
                    target=trigger.target,
                    reason=HandoffReason.EXPLICIT_REQUEST,
                    confidence=trigger.confidence,
                    detail=trigger.detail,
                )

        ideal = TOPIC_RESPONDERS.get(context.topic)
        if ideal is not None and ideal != current and context.conversation_depth > EXPERTISE_MIN_DEPTH:
            return PendingHandoff(
                target=ideal,
                reason=HandoffReason.EXPERTISE_MISMATCH,
                confidence=0.8,
                detail=f"Topic '{context.topic.value}' better handled by {ideal.value}",
            )

        if context.responder_performance < PERFORMANCE_FLOOR and context.conversation_depth > PERFORMANCE_MIN_DEPTH:
            return PendingHandoff(
                target=self.suggest_better_responder(context),
                reason=HandoffReason.PERFORMANCE_DECLINE,
                confidence=0.7,
                detail="Current responder performance declining",
            )

        if (
            context.conversation_depth > STAGNATION_MIN_DEPTH
            and context.user_satisfaction < STAGNATION_SATISFACTION
        ):
            return PendingHandoff(
                target=self.suggest_refresh_responder(current),
                reason=HandoffReason.CONVERSATION_STAGNATION,
                confidence=0.6,
                detail="Conversation needs a fresh perspective",
            )

        return None

    def suggest_better_responder(self, context: ConversationContext) -> ResponderType:
        ideal = TOPIC_RESPONDERS.get(context.topic)
        if ideal is not None:
            return ideal
        return ResponderType.JOKE if context.current_responder == ResponderType.GENERAL else ResponderType.GENERAL

    def suggest_refresh_responder(self, current: ResponderType) -> ResponderType:
        return REFRESH_ROTATION.get(current, self._waiting_room)

    # --- Announcements / completion ---

    def announcement(self, context: ConversationContext) -> str | None:
        """Human-readable transfer message for a pending handoff."""
        if not isinstance(context.handoff, PendingHandoff):
            return None
        target = context.handoff.target
        name = self._registry.display_name(target) if target in self._registry else None
        return lookup_announcement(context.handoff.reason, target, name)

    def handoff_info(self, user_id: str) -> HandoffNotice | None:
        context = self._contexts.get(user_id)
        if context is None or not isinstance(context.handoff, PendingHandoff):
            return None
        return HandoffNotice(
            target=context.handoff.target,
            reason=context.handoff.reason,
            announcement=self.announcement(context) or "",
            detail=context.handoff.detail,
        )

    def should_handoff(self, user_id: str) -> bool:
        context = self._contexts.get(user_id)
        return bool(context and context.pending_handoff)

    def complete_handoff(self, user_id: str, new_responder: ResponderType) -> ConversationContext:
        """Hand the conversation to ``new_responder`` with a clean slate."""
        context = self._contexts.get(user_id)
        if context is None:
            return self.initialize(user_id, new_responder)

        previous = context.current_responder
        context.handoff = Stable()
        context.current_responder = new_responder
        context.conversation_depth = 0
        context.responder_performance = NEUTRAL_BASELINE
        self._contexts.set(user_id, context)
        logger.info(f"Handoff complete for {user_id}: {previous.value} -> {new_responder.value}")
        return context

    def forget(self, user_id: str) -> ConversationContext | None:
        return self._contexts.delete(user_id)

    def cleanup(self, max_age_seconds: float | None = None) -> list[str]:
        """Drop contexts with no message inside the window."""
        if max_age_seconds is None:
            max_age_seconds = self._config.inactivity_seconds
        window = timedelta(seconds=max_age_seconds)
        now = self._clock.now()
        removed = [
            user_id for user_id, context in self._contexts.items() if now - context.last_message_time > window
        ]
        for user_id in removed:
            self._contexts.delete(user_id)
        return removed
