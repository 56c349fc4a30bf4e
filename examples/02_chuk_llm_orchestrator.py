#!/usr/bin/env python3
"""
02_chuk_llm_orchestrator.py — Orchestration with a real LLM via chuk-llm

Routes a short scripted conversation through ChukLLMClassifier and
ChukLLMCompletionService, dispatching proactive actions on the asyncio
event loop.

Requires provider credentials in the environment (or a .env file), e.g.
OPENAI_API_KEY. CHUK_LLM_PROVIDER / CHUK_DEFAULT_MODEL select the provider.
"""

import asyncio
import logging

from dotenv import load_dotenv

from chuk_ai_agent_orchestrator.classifier import ChukLLMClassifier
from chuk_ai_agent_orchestrator.completion import ChukLLMCompletionService
from chuk_ai_agent_orchestrator.models.enums import ResponderType
from chuk_ai_agent_orchestrator.orchestrator import AgentOrchestrator

load_dotenv()

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Quiet down the HTTP client loggers
logging.getLogger("httpx").setLevel(logging.ERROR)
logging.getLogger("httpcore").setLevel(logging.ERROR)
logging.getLogger("chuk_llm").setLevel(logging.WARNING)

SCRIPT = [
    ("I'm waiting for someone from support", ResponderType.HOLD_AGENT),
    ("tell me a joke", None),
    ("my react component keeps re-rendering, any idea why?", None),
]


async def main() -> None:
    async def deliver(user_id, delivery):
        print(f"\n[proactive:{delivery.action.target_responder.value}] {delivery.response_text}")

    orchestrator = AgentOrchestrator(
        classifier=ChukLLMClassifier(),
        completion=ChukLLMCompletionService(),
        delivery=deliver,
    )
    orchestrator.park_on_hold("demo")

    history = []
    for text, forced in SCRIPT:
        print(f"\nUser: {text}")
        result = await orchestrator.process_turn("demo", text, history=history, forced_responder=forced)
        print(f"{result.responder_used.value}: {result.response_text}")

        history.append({"role": "user", "content": text})
        history.append({"role": "assistant", "content": result.response_text})

        if result.handoff:
            print(f"  -> {result.handoff.announcement}")
        if result.proactive_action:
            logger.info(f"Dispatching {result.proactive_action.format_compact()}")
            orchestrator.dispatch("demo", result.proactive_action)

    # Give dispatched actions time to fire
    await asyncio.sleep(16)


if __name__ == "__main__":
    asyncio.run(main())
