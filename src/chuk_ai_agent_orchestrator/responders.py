# chuk_ai_agent_orchestrator/responders.py
"""
Responder identities and their configuration table.

The registry is validated when it is built, so a typo in a responder key is
caught at construction rather than on the first request that needs it.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field

from chuk_ai_agent_orchestrator.config import DEFAULT_TOKEN_MODEL
from chuk_ai_agent_orchestrator.exceptions import UnknownResponderTypeError
from chuk_ai_agent_orchestrator.models.enums import ResponderType

logger = logging.getLogger(__name__)

ENTERTAINMENT_ROSTER: tuple[ResponderType, ...] = (
    ResponderType.JOKE,
    ResponderType.TRIVIA,
    ResponderType.GIF,
    ResponderType.STORY_TELLER,
    ResponderType.RIDDLE_MASTER,
    ResponderType.QUOTE_MASTER,
    ResponderType.GAME_HOST,
    ResponderType.MUSIC_GURU,
    ResponderType.DND_MASTER,
)


def parse_responder(value: Any) -> ResponderType:
    """Convert a string or enum to a ResponderType, rejecting unknown keys."""
    if isinstance(value, ResponderType):
        return value
    if isinstance(value, str):
        try:
            return ResponderType(value.strip().lower())
        except ValueError:
            pass
    raise UnknownResponderTypeError(value)


class ResponderConfig(BaseModel):
    """Prompt and sampling settings for one responder persona."""

    type: ResponderType
    name: str
    description: str
    system_prompt: str
    model: str = DEFAULT_TOKEN_MODEL
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    max_tokens: int = Field(default=1000, gt=0)

    model_config = {"frozen": True}


def _config(
    responder: ResponderType,
    name: str,
    description: str,
    system_prompt: str,
    temperature: float = 0.7,
    max_tokens: int = 1000,
) -> ResponderConfig:
    return ResponderConfig(
        type=responder,
        name=name,
        description=description,
        system_prompt=system_prompt,
        temperature=temperature,
        max_tokens=max_tokens,
    )


DEFAULT_RESPONDERS: dict[ResponderType, ResponderConfig] = {
    ResponderType.GENERAL: _config(
        ResponderType.GENERAL,
        "General Assistant",
        "Casual conversation, general questions, creative tasks and everyday assistance",
        "You are a friendly, helpful general assistant. Be warm and conversational, "
        "answer general questions, and adapt your tone to the user.",
    ),
    ResponderType.TECHNICAL: _config(
        ResponderType.TECHNICAL,
        "Technical Assistant",
        "Programming, debugging and technical questions",
        "You are a skilled technical assistant. Give practical, accurate solutions "
        "with code examples where relevant, and explain your reasoning clearly.",
        temperature=0.3,
        max_tokens=1500,
    ),
    ResponderType.JOKE: _config(
        ResponderType.JOKE,
        "Adaptive Joke Master",
        "Family-friendly jokes and puns",
        "You are a joke master. When asked for a joke, tell one immediately. "
        "Keep it wholesome and offer another afterwards.",
        temperature=0.9,
        max_tokens=500,
    ),
    ResponderType.TRIVIA: _config(
        ResponderType.TRIVIA,
        "Trivia Master",
        "Fascinating facts and trivia",
        "You are a trivia master. Share one surprising, accurate fact at a time "
        "and make it memorable.",
        temperature=0.7,
        max_tokens=600,
    ),
    ResponderType.GIF: _config(
        ResponderType.GIF,
        "GIF Master",
        "Visual entertainment, GIFs and memes",
        "You are a GIF master. Describe or suggest a fitting GIF or meme for the "
        "moment, with a short playful caption.",
        temperature=0.8,
        max_tokens=400,
    ),
    ResponderType.ACCOUNT_SUPPORT: _config(
        ResponderType.ACCOUNT_SUPPORT,
        "Account Support Specialist",
        "Login, profile and account security issues",
        "You are an account support specialist. Help with login, profile and "
        "security issues; never ask for passwords.",
        temperature=0.3,
    ),
    ResponderType.BILLING_SUPPORT: _config(
        ResponderType.BILLING_SUPPORT,
        "Billing Support Specialist",
        "Payments, subscriptions and refunds",
        "You are a billing support specialist. Explain charges, subscriptions and "
        "refund options clearly and precisely.",
        temperature=0.3,
    ),
    ResponderType.WEBSITE_SUPPORT: _config(
        ResponderType.WEBSITE_SUPPORT,
        "Website Issues Specialist",
        "Browser and site functionality problems",
        "You are a website issues specialist. Troubleshoot browser, loading and "
        "functionality problems step by step.",
        temperature=0.3,
    ),
    ResponderType.OPERATOR_SUPPORT: _config(
        ResponderType.OPERATOR_SUPPORT,
        "Customer Service Operator",
        "Complex issues spanning several departments",
        "You are a customer service operator. Coordinate complex requests and "
        "explain clearly who will handle what.",
        temperature=0.4,
    ),
    ResponderType.HOLD_AGENT: _config(
        ResponderType.HOLD_AGENT,
        "Hold Agent",
        "Keeps waiting users informed and entertained",
        "You are the hold agent. Keep the user informed about their wait, stay "
        "upbeat, and offer entertainment while a specialist becomes available.",
        temperature=0.6,
        max_tokens=400,
    ),
    ResponderType.STORY_TELLER: _config(
        ResponderType.STORY_TELLER,
        "Story Teller",
        "Short engaging stories",
        "You are a story teller. Tell a short, vivid, family-friendly story.",
        temperature=0.9,
        max_tokens=800,
    ),
    ResponderType.RIDDLE_MASTER: _config(
        ResponderType.RIDDLE_MASTER,
        "Riddle Master",
        "Riddles and brain teasers",
        "You are a riddle master. Pose one riddle at a time and reveal the answer "
        "only when asked.",
        temperature=0.8,
        max_tokens=400,
    ),
    ResponderType.QUOTE_MASTER: _config(
        ResponderType.QUOTE_MASTER,
        "Quote Master",
        "Inspirational and entertaining quotes",
        "You are a quote master. Share a fitting quote with its author and a "
        "one-line reflection.",
        temperature=0.7,
        max_tokens=300,
    ),
    ResponderType.GAME_HOST: _config(
        ResponderType.GAME_HOST,
        "Game Host",
        "Quick interactive text games",
        "You are a game host. Start a quick interactive text game and explain the "
        "rules in one or two lines.",
        temperature=0.8,
        max_tokens=500,
    ),
    ResponderType.MUSIC_GURU: _config(
        ResponderType.MUSIC_GURU,
        "Music Guru",
        "Music recommendations and discussion",
        "You are a music guru. Recommend music tailored to the user's taste and "
        "say why they might enjoy it.",
        temperature=0.8,
        max_tokens=500,
    ),
    ResponderType.YOUTUBE_GURU: _config(
        ResponderType.YOUTUBE_GURU,
        "YouTube Guru",
        "Funny videos and viral content",
        "You are a YouTube guru. Suggest funny or viral videos and describe why "
        "they are worth watching.",
        temperature=0.8,
        max_tokens=500,
    ),
    ResponderType.DND_MASTER: _config(
        ResponderType.DND_MASTER,
        "D&D Master",
        "RPG-lite adventures with dice rolls",
        "You are a dungeon master running a short RPG-lite adventure. Describe "
        "scenes briefly, roll dice openly, and ask the player what they do.",
        temperature=0.9,
        max_tokens=800,
    ),
}


class ResponderRegistry:
    """Lookup table from responder identity to configuration."""

    def __init__(self, configs: Mapping[Any, ResponderConfig] | None = None):
        source = DEFAULT_RESPONDERS if configs is None else configs
        table: dict[ResponderType, ResponderConfig] = {}
        for key, config in source.items():
            responder = parse_responder(key)
            if config.type != responder:
                raise ValueError(f"Responder config for {responder.value} declares type {config.type.value}")
            table[responder] = config
        self._configs = table
        logger.debug(f"Responder registry built with {len(table)} responders")

    def get(self, key: Any) -> ResponderConfig:
        """Return the config for ``key``; unknown or unconfigured keys are fatal."""
        responder = parse_responder(key)
        config = self._configs.get(responder)
        if config is None:
            raise UnknownResponderTypeError(key)
        return config

    def __contains__(self, key: object) -> bool:
        try:
            return parse_responder(key) in self._configs
        except UnknownResponderTypeError:
            return False

    def __len__(self) -> int:
        return len(self._configs)

    def types(self) -> list[ResponderType]:
        return list(self._configs)

    def display_name(self, key: Any) -> str:
        return self.get(key).name
