# chuk_ai_agent_orchestrator/classifier.py
"""
Message classification - which responder should take a user message.

Two implementations of the ``Classifier`` protocol:

- KeywordClassifier: offline keyword scoring. Category precedence is
  gif > joke > trivia > technical > general, each with a capped confidence
  that grows with the number of matched keywords.
- ChukLLMClassifier: asks an LLM via chuk-llm for a JSON verdict and falls
  back to keyword scoring when the call or the parse fails.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Protocol, runtime_checkable

from chuk_ai_agent_orchestrator.config import DEFAULT_LLM_PROVIDER, DEFAULT_TOKEN_MODEL
from chuk_ai_agent_orchestrator.exceptions import ClassificationError, UnknownResponderTypeError
from chuk_ai_agent_orchestrator.models.enums import ResponderType
from chuk_ai_agent_orchestrator.models.turn import Classification
from chuk_ai_agent_orchestrator.responders import parse_responder

logger = logging.getLogger(__name__)


@runtime_checkable
class Classifier(Protocol):
    """Maps a user message to a responder."""

    async def classify(self, text: str) -> Classification: ...


TECHNICAL_KEYWORDS = (
    "code", "programming", "debug", "error", "bug", "api", "database", "sql",
    "javascript", "python", "react", "node", "css", "html", "function",
    "variable", "array", "class", "method", "framework", "library",
    "algorithm", "data structure", "server", "frontend", "backend",
    "deployment", "git", "github", "repository", "commit", "merge", "branch",
    "typescript", "npm", "package", "dependency", "component", "async",
    "await", "promise", "callback", "schema", "docker", "kubernetes", "aws",
    "cloud", "rest", "graphql", "websocket", "http", "cors", "jwt", "oauth",
    "webpack", "testing", "unit test", "ci/cd", "devops", "linux", "bash",
    "terminal", "command line", "regex", "json", "yaml",
)

JOKE_KEYWORDS = (
    "dad joke", "pun", "puns", "joke", "jokes", "funny", "humor", "cheesy",
    "groan", "laugh", "make me laugh", "tell me a joke", "corny", "silly",
    "witty", "punchline", "one-liner", "wordplay", "play on words",
)

TRIVIA_KEYWORDS = (
    "trivia", "fact", "facts", "fun fact", "random fact", "did you know",
    "interesting fact", "tell me about", "history", "science", "nature",
    "space", "animals", "geography", "fascinating", "knowledge", "learn",
    "discovery", "invention", "world record", "ancient", "historical",
    "curiosity", "mystery", "tell me something", "educate me",
)

GIF_KEYWORDS = (
    "gif", "gifs", "animated", "animation", "reaction gif", "meme", "memes",
    "funny image", "visual", "show me", "picture", "image", "thumbs up",
    "applause", "facepalm", "eye roll", "shrug", "giphy", "tenor",
)


def _score(lowered: str, keywords: tuple[str, ...]) -> int:
    return sum(1 for keyword in keywords if keyword in lowered)


class KeywordClassifier:
    """Deterministic keyword-scoring classifier."""

    async def classify(self, text: str) -> Classification:
        return self.classify_sync(text)

    def classify_sync(self, text: str) -> Classification:
        lowered = text.lower()

        gif = _score(lowered, GIF_KEYWORDS)
        if gif:
            return Classification(
                responder_type=ResponderType.GIF,
                confidence=min(0.95, 0.7 + gif * 0.15),
                reasoning=f"Detected {gif} GIF/visual content keywords in the message",
            )

        joke = _score(lowered, JOKE_KEYWORDS)
        if joke:
            return Classification(
                responder_type=ResponderType.JOKE,
                confidence=min(0.9, 0.6 + joke * 0.15),
                reasoning=f"Detected {joke} joke keywords in the message",
            )

        trivia = _score(lowered, TRIVIA_KEYWORDS)
        if trivia:
            return Classification(
                responder_type=ResponderType.TRIVIA,
                confidence=min(0.85, 0.55 + trivia * 0.1),
                reasoning=f"Detected {trivia} trivia keywords in the message",
            )

        technical = _score(lowered, TECHNICAL_KEYWORDS)
        if technical:
            return Classification(
                responder_type=ResponderType.TECHNICAL,
                confidence=min(0.8, 0.5 + technical * 0.1),
                reasoning=f"Detected {technical} technical keywords in the message",
            )

        return Classification(
            responder_type=ResponderType.GENERAL,
            confidence=0.5,
            reasoning="No specific keywords detected, classifying as general",
        )


CLASSIFICATION_PROMPT = """You are a message classifier that decides which assistant should handle a user's message.

Choose one of: "technical" (programming, debugging, systems), "joke" (jokes, puns, humor),
"trivia" (facts, "did you know", knowledge), "gif" (GIFs, memes, visual content),
"general" (everything else).

Respond with a JSON object only:
{"responder_type": "...", "confidence": 0.0-1.0, "reasoning": "..."}"""


def parse_classification(raw: str) -> Classification:
    """Parse an LLM JSON verdict; any malformed answer is a ClassificationError."""
    try:
        payload: dict[str, Any] = json.loads(raw)
        if not isinstance(payload, dict):
            raise TypeError(f"expected an object, got {type(payload).__name__}")
        return Classification(
            responder_type=parse_responder(payload.get("responder_type")),
            confidence=float(payload.get("confidence", 0.5)),
            reasoning=str(payload.get("reasoning", "")),
        )
    except (json.JSONDecodeError, TypeError, ValueError, UnknownResponderTypeError) as e:
        raise ClassificationError(f"Unparseable classification: {raw[:100]!r}") from e


class ChukLLMClassifier:
    """LLM-backed classifier with keyword fallback."""

    def __init__(
        self,
        provider: str = DEFAULT_LLM_PROVIDER,
        model: str = DEFAULT_TOKEN_MODEL,
        fallback: KeywordClassifier | None = None,
    ):
        self.provider = provider
        self.model = model
        self.fallback = fallback or KeywordClassifier()
        self._client = None

    def _get_client(self):
        if self._client is None:
            from chuk_llm.llm.client import get_client

            self._client = get_client(provider=self.provider, model=self.model)
        return self._client

    async def classify(self, text: str) -> Classification:
        try:
            completion = await self._get_client().create_completion(
                messages=[
                    {"role": "system", "content": CLASSIFICATION_PROMPT},
                    {"role": "user", "content": text},
                ]
            )
            raw = completion.get("response", "") if isinstance(completion, dict) else str(completion)
            return parse_classification(raw or "")
        except Exception as e:
            logger.warning(f"LLM classification failed, using keyword fallback: {e}")
            return self.fallback.classify_sync(text)
