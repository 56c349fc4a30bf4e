# chuk_ai_agent_orchestrator/lexicon.py
"""Shared word lists and case-insensitive term matching.

Single words match on word boundaries ("no" does not match "know");
multi-word phrases and terms containing punctuation match as substrings.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from functools import lru_cache


@lru_cache(maxsize=512)
def _term_pattern(term: str) -> re.Pattern[str]:
    if re.fullmatch(r"[a-z0-9']+", term):
        return re.compile(rf"\b{re.escape(term)}\b")
    return re.compile(re.escape(term))


def contains_any(text: str, terms: Iterable[str]) -> bool:
    """True if any term occurs in ``text`` (case-insensitive)."""
    lowered = text.lower()
    return any(_term_pattern(term).search(lowered) for term in terms)


def count_matches(text: str, terms: Iterable[str]) -> int:
    """Number of distinct terms occurring in ``text``."""
    lowered = text.lower()
    return sum(1 for term in terms if _term_pattern(term).search(lowered))


# User state classification
HOLD_TERMS = ("waiting", "wait", "hold", "queue")
HELP_TERMS = ("help", "problem", "error", "bug")
JOKE_TERMS = ("joke", "jokes", "funny")
TRIVIA_TERMS = ("trivia", "fact", "facts", "learn")
CHAT_TERMS = ("chat", "talk")
TECHNICAL_CONTEXT_TERMS = ("code", "programming", "javascript", "python", "react", "bug", "error")

# Sentiment
POSITIVE_TERMS = (
    "thanks",
    "thank you",
    "great",
    "good",
    "nice",
    "awesome",
    "helpful",
    "perfect",
    "love",
    "amazing",
)
NEGATIVE_TERMS = (
    "no",
    "stop",
    "boring",
    "annoying",
    "not helpful",
    "wrong",
    "bad",
    "stupid",
)

# Negative phrases that embed a positive word ("not helpful"); matched first
# and removed so the embedded word is not also counted as praise
NEGATED_PHRASES = tuple(term for term in NEGATIVE_TERMS if " " in term)


def sentiment_counts(text: str) -> tuple[int, int]:
    """(positive, negative) term counts, with negated phrases taking precedence."""
    negative = count_matches(text, NEGATIVE_TERMS)
    remainder = text.lower()
    for phrase in NEGATED_PHRASES:
        remainder = _term_pattern(phrase).sub(" ", remainder)
    return count_matches(remainder, POSITIVE_TERMS), negative


RESOLVED_TERMS = ("fixed", "works", "solved")
CONTINUED_HELP_TERMS = ("help", "more")

# Topic detection
TECHNICAL_TOPIC_TERMS = ("code", "programming", "bug")
HUMOR_TOPIC_TERMS = ("joke", "funny", "laugh")
EDUCATIONAL_TOPIC_TERMS = ("fact", "trivia", "learn")
VISUAL_TOPIC_TERMS = ("gif", "meme", "visual")
