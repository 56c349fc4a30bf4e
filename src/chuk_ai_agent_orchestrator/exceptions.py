# chuk_ai_agent_orchestrator/exceptions.py
"""Error taxonomy for the orchestration core.

- ClassificationError / CompletionError: external collaborator failures,
  recovered by the orchestrator.
- LeaseConflictError: a proactive action hit a held lease; the action has
  already been queued when this is raised.
- UnknownResponderTypeError: configuration defect, fails the request.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from chuk_ai_agent_orchestrator.models.lease import ActiveLease


class OrchestratorError(Exception):
    """Base class for all orchestration errors."""


class ClassificationError(OrchestratorError):
    """The message classifier failed or timed out."""


class CompletionError(OrchestratorError):
    """The completion service failed or returned nothing usable."""


class LeaseConflictError(OrchestratorError):
    """Another responder is already active for the user."""

    def __init__(self, user_id: str, holder: ActiveLease, requested: Any):
        self.user_id = user_id
        self.holder = holder
        self.requested = requested
        super().__init__(
            f"Responder already active for user {user_id}: "
            f"{holder.responder_id.value} holds the lease, {requested} was queued"
        )


class UnknownResponderTypeError(OrchestratorError, ValueError):
    """Lookup of a responder identity that is not configured."""

    def __init__(self, key: Any):
        self.key = key
        super().__init__(f"Unknown responder type: {key!r}")
