#!/usr/bin/env python3
"""
01_waiting_room.py — Waiting Room Orchestration

Demonstrates:
1. Parking a newly connected user with the hold agent
2. The forced entertainment handoff on the first waiting-room turn
3. Goal activation and the single proactive action per turn
4. Dispatching the action after its delay
5. Lease conflicts: a busy user gets the action queued and replayed
6. Routing regular messages with the keyword classifier

Time is driven by a ManualTaskScheduler, so the demo never sleeps.
No API keys required.
"""

import asyncio
import logging
import random

from chuk_ai_agent_orchestrator.classifier import KeywordClassifier
from chuk_ai_agent_orchestrator.completion import DemoCompletionService
from chuk_ai_agent_orchestrator.content import StaticContentLookup
from chuk_ai_agent_orchestrator.exceptions import LeaseConflictError
from chuk_ai_agent_orchestrator.models.enums import ResponderType
from chuk_ai_agent_orchestrator.orchestrator import AgentOrchestrator
from chuk_ai_agent_orchestrator.timing import ManualTaskScheduler

logging.basicConfig(level=logging.WARNING)


def section(title: str) -> None:
    print(f"\n{'=' * 60}")
    print(f"{title}")
    print("=" * 60)


async def main() -> None:
    print("Waiting Room Orchestration Demo")
    print("No API keys required.\n")

    scheduler = ManualTaskScheduler()
    rng = random.Random(42)

    def deliver(user_id, delivery):
        origin = "queue" if delivery.from_queue else "dispatch"
        print(f"  [{origin}] {delivery.action.target_responder.value} -> {user_id}: {delivery.response_text}")

    orchestrator = AgentOrchestrator(
        classifier=KeywordClassifier(),
        completion=DemoCompletionService(StaticContentLookup(rng=rng)),
        scheduler=scheduler,
        rng=rng,
        delivery=deliver,
    )

    # ------------------------------------------------------------------ #
    section("1. Park the user on hold")
    # ------------------------------------------------------------------ #

    state = orchestrator.park_on_hold("alice")
    print(f"Status: {state.current_state.value}, preference: {state.entertainment_preference.value}")
    print(f"Responder: {orchestrator.context('alice').current_responder.value}")

    # ------------------------------------------------------------------ #
    section("2. First waiting-room turn")
    # ------------------------------------------------------------------ #

    result = await orchestrator.process_turn(
        "alice", "I'm still waiting for support", forced_responder=ResponderType.HOLD_AGENT
    )
    print(f"Reply: {result.response_text}")
    print(f"Payload keys: {sorted(result.to_payload())}")
    if result.handoff:
        print(f"Handoff: {result.handoff.reason.value} -> {result.handoff.target.value}")
        print(f"  {result.handoff.announcement}")
    print(f"Active goals: {[g.kind.value for g in orchestrator.active_goals('alice')]}")

    action = result.proactive_action
    if action:
        print(f"Proactive action: {action.format_compact()}")

    # ------------------------------------------------------------------ #
    section("3. Dispatch after the delay")
    # ------------------------------------------------------------------ #

    if action:
        orchestrator.dispatch("alice", action)
        print(f"Pending: {scheduler.pending_names()}")
        await scheduler.advance(action.delay_seconds)

    # ------------------------------------------------------------------ #
    section("4. Lease conflict and replay")
    # ------------------------------------------------------------------ #

    lease = orchestrator.guard.claim("alice", ResponderType.TECHNICAL)
    print(f"Lease held by: {orchestrator.guard.holder('alice').value}")
    if action:
        try:
            await orchestrator.execute_proactive_action("alice", action)
        except LeaseConflictError as e:
            print(f"Conflict: {e}")
            print(f"Queue length: {orchestrator.guard.queue_length('alice')}")

    orchestrator.guard.release("alice", lease)
    await scheduler.advance(orchestrator.config.drain_delay_seconds)
    print(f"Queue length after drain: {orchestrator.guard.queue_length('alice')}")

    # ------------------------------------------------------------------ #
    section("5. Classified routing")
    # ------------------------------------------------------------------ #

    for text in ("tell me a joke", "did you know any fun fact?", "my python code throws an error"):
        result = await orchestrator.process_turn("bob", text)
        print(f"{text!r} -> {result.responder_used.value} ({result.confidence:.2f})")
        print(f"  {result.response_text}")
        if result.handoff:
            print(f"  Handoff suggested: {result.handoff.target.value} ({result.handoff.reason.value})")


if __name__ == "__main__":
    asyncio.run(main())
