# chuk_ai_agent_orchestrator/config.py
"""Environment-driven defaults for the orchestration core."""

from __future__ import annotations

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()

# Central model config: can be overridden by environment variable
DEFAULT_TOKEN_MODEL = os.getenv("CHUK_DEFAULT_MODEL", "gpt-4o-mini")
DEFAULT_LLM_PROVIDER = os.getenv("CHUK_LLM_PROVIDER", "openai")

LEASE_TTL_SECONDS = float(os.getenv("CHUK_ORCH_LEASE_TTL_SECONDS", "30"))
DRAIN_DELAY_SECONDS = float(os.getenv("CHUK_ORCH_DRAIN_DELAY_SECONDS", "1.0"))
INACTIVITY_SECONDS = float(os.getenv("CHUK_ORCH_INACTIVITY_SECONDS", "3600"))
WAITING_ROOM_RESPONDER = os.getenv("CHUK_ORCH_WAITING_ROOM", "hold_agent")
DEFAULT_RESPONDER = os.getenv("CHUK_ORCH_DEFAULT_RESPONDER", "general")
HISTORY_WINDOW = int(os.getenv("CHUK_ORCH_HISTORY_WINDOW", "10"))

# Goal activation thresholds
IDLE_THRESHOLD_SECONDS = 30.0
ENTERTAINMENT_ENGAGEMENT_THRESHOLD = 0.6
ENGAGEMENT_THRESHOLD = 0.5

# Proactive delay heuristic (milliseconds)
BASE_DELAY_MS = 15000
SHORT_DELAY_MS = 10000
MIN_DELAY_MS = 5000
SHORT_DELAY_IDLE_SECONDS = 30.0
MIN_DELAY_IDLE_SECONDS = 60.0

# Neutral baseline for satisfaction/performance on a fresh context
NEUTRAL_BASELINE = 0.7

APOLOGY_TEXT = "I apologize, but I encountered an error while processing your request. Please try again."


class OrchestratorConfig(BaseModel):
    """Runtime settings shared by the orchestration components.

    Defaults come from the environment (see module constants); tests pass
    explicit values instead.
    """

    lease_ttl_seconds: float = Field(default=LEASE_TTL_SECONDS, gt=0)
    drain_delay_seconds: float = Field(default=DRAIN_DELAY_SECONDS, ge=0)
    inactivity_seconds: float = Field(default=INACTIVITY_SECONDS, gt=0)
    waiting_room_responder: str = WAITING_ROOM_RESPONDER
    default_responder: str = DEFAULT_RESPONDER
    history_window: int = Field(default=HISTORY_WINDOW, ge=0)
    idle_threshold_seconds: float = IDLE_THRESHOLD_SECONDS
    apology_text: str = APOLOGY_TEXT
