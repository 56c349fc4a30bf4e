# chuk_ai_agent_orchestrator/completion.py
"""
Completion services - produce a responder's reply.

The orchestrator hands over the responder's configuration (system prompt,
model, sampling), a bounded slice of history and the user's text. Any
failure surfaces as ``CompletionError``; the orchestrator turns it into an
apology for the user.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable

from chuk_ai_agent_orchestrator.config import DEFAULT_LLM_PROVIDER
from chuk_ai_agent_orchestrator.content import ContentLookup, StaticContentLookup
from chuk_ai_agent_orchestrator.exceptions import CompletionError
from chuk_ai_agent_orchestrator.models.enums import ResponderType
from chuk_ai_agent_orchestrator.responders import ResponderConfig

logger = logging.getLogger(__name__)

Message = dict[str, str]


@runtime_checkable
class CompletionService(Protocol):
    """Generates a reply for one responder persona."""

    async def complete(self, responder: ResponderConfig, history: Sequence[Message], user_text: str) -> str: ...


def build_messages(responder: ResponderConfig, history: Sequence[Message], user_text: str) -> list[Message]:
    """System prompt, then prior turns, then the new user message."""
    messages: list[Message] = [{"role": "system", "content": responder.system_prompt}]
    for entry in history:
        role = entry.get("role")
        content = entry.get("content")
        if role in ("user", "assistant") and content:
            messages.append({"role": role, "content": content})
    messages.append({"role": "user", "content": user_text})
    return messages


def _extract_text(completion: Any) -> str:
    if isinstance(completion, dict):
        return completion.get("response") or completion.get("content") or ""
    if hasattr(completion, "choices") and completion.choices:
        # OpenAI-style response
        return completion.choices[0].message.content or ""
    return str(completion or "")


class ChukLLMCompletionService:
    """Completion through chuk-llm, one client per model."""

    def __init__(self, provider: str = DEFAULT_LLM_PROVIDER):
        self.provider = provider
        self._clients: dict[str, Any] = {}

    def _get_client(self, model: str):
        client = self._clients.get(model)
        if client is None:
            from chuk_llm.llm.client import get_client

            client = get_client(provider=self.provider, model=model)
            self._clients[model] = client
        return client

    async def complete(self, responder: ResponderConfig, history: Sequence[Message], user_text: str) -> str:
        messages = build_messages(responder, history, user_text)
        try:
            completion = await self._get_client(responder.model).create_completion(
                messages=messages,
                temperature=responder.temperature,
                max_tokens=responder.max_tokens,
            )
        except Exception as e:
            raise CompletionError(f"{responder.type.value} completion failed: {e}") from e

        text = _extract_text(completion).strip()
        if not text:
            raise CompletionError(f"{responder.type.value} returned an empty completion")
        logger.debug(f"{responder.type.value} completion: {len(text)} chars via {self.provider}/{responder.model}")
        return text


class DemoCompletionService:
    """Offline replies assembled from curated content; no network."""

    def __init__(self, content: ContentLookup | None = None):
        self._content = content or StaticContentLookup()

    async def complete(self, responder: ResponderConfig, history: Sequence[Message], user_text: str) -> str:
        item = await self._content.lookup(responder.type, user_text)
        if item is not None:
            return item.content
        if responder.type == ResponderType.HOLD_AGENT:
            return "Thanks for your patience! A specialist will be with you shortly."
        return f"[{responder.name}] You said: {user_text}"
