# chuk_ai_agent_orchestrator/content.py
"""Curated content lookup (jokes, facts, riddles, quotes)."""

from __future__ import annotations

import random
from collections.abc import Iterable
from typing import Protocol, runtime_checkable

from chuk_ai_agent_orchestrator.models.enums import ResponderType
from chuk_ai_agent_orchestrator.models.turn import ContentItem


@runtime_checkable
class ContentLookup(Protocol):
    """Returns a curated item for a responder, optionally matching a query."""

    async def lookup(self, responder_type: ResponderType, query: str = "") -> ContentItem | None: ...


def _items(responder: ResponderType, prefix: str, entries: Iterable[tuple[str, tuple[str, ...]]]) -> list[ContentItem]:
    return [
        ContentItem(id=f"{prefix}_{i}", responder_type=responder, content=text, tags=list(tags))
        for i, (text, tags) in enumerate(entries, start=1)
    ]


DEFAULT_CONTENT: list[ContentItem] = [
    *_items(
        ResponderType.JOKE,
        "joke",
        [
            ("Why don't scientists trust atoms? Because they make up everything!", ("science", "pun")),
            ("I'm reading a book about anti-gravity. It's impossible to put down!", ("books", "pun")),
            ("Why did the scarecrow win an award? He was outstanding in his field!", ("farm", "classic")),
            ("Why do programmers prefer dark mode? Because light attracts bugs.", ("programming", "tech")),
        ],
    ),
    *_items(
        ResponderType.TRIVIA,
        "trivia",
        [
            ("Honey never spoils: edible honey has been found in ancient Egyptian tombs.", ("food", "history")),
            ("Octopuses have three hearts and blue blood.", ("animals", "science")),
            ("A day on Venus is longer than its year.", ("space", "science")),
            ("The first computer bug was an actual moth found in a relay in 1947.", ("programming", "history")),
        ],
    ),
    *_items(
        ResponderType.RIDDLE_MASTER,
        "riddle",
        [
            ("What has keys but can't open locks? (A piano)", ("music", "classic")),
            ("What gets wetter the more it dries? (A towel)", ("household", "classic")),
        ],
    ),
    *_items(
        ResponderType.QUOTE_MASTER,
        "quote",
        [
            ("\"The best way to predict the future is to invent it.\" - Alan Kay", ("tech", "inspiration")),
            ("\"Patience is bitter, but its fruit is sweet.\" - Jean-Jacques Rousseau", ("waiting", "inspiration")),
        ],
    ),
    *_items(
        ResponderType.GIF,
        "gif",
        [
            ("[GIF: a cat tapping its paws impatiently, then giving a thumbs up]", ("cat", "waiting")),
            ("[GIF: a dancing robot celebrating]", ("robot", "celebration")),
        ],
    ),
]


class StaticContentLookup:
    """In-memory content table with tag and keyword matching."""

    def __init__(self, items: Iterable[ContentItem] | None = None, rng: random.Random | None = None):
        self._by_type: dict[ResponderType, list[ContentItem]] = {}
        for item in DEFAULT_CONTENT if items is None else items:
            self._by_type.setdefault(item.responder_type, []).append(item)
        self._rng = rng or random.Random()

    async def lookup(self, responder_type: ResponderType, query: str = "") -> ContentItem | None:
        candidates = self._by_type.get(responder_type, [])
        if not candidates:
            return None

        words = {w for w in query.lower().split() if len(w) > 2}
        if words:
            matching = [
                item
                for item in candidates
                if words & set(item.tags) or any(w in item.content.lower() for w in words)
            ]
            if matching:
                candidates = matching
        return self._rng.choice(candidates)

    def __len__(self) -> int:
        return sum(len(items) for items in self._by_type.values())
