# chuk_ai_agent_orchestrator/base_models.py
"""Payload base model for delivery-layer records, plus the unit-interval clamp."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


def clamp_unit(value: float) -> float:
    """Clamp a signal to the closed interval [0, 1]."""
    return max(0.0, min(1.0, value))


class PayloadModel(BaseModel):
    """Base for records handed to a delivery layer that speaks in dicts.

    Socket handlers written against plain payloads can index fields
    (``result["response_text"]``), probe them (``"handoff" in result``) and
    emit ``to_payload()`` straight onto the wire.
    """

    def __getitem__(self, key: str) -> Any:
        if key not in type(self).model_fields:
            raise KeyError(key)
        return getattr(self, key)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key in type(self).model_fields

    def get(self, key: str, default: Any = None) -> Any:
        return getattr(self, key) if key in self else default

    def to_payload(self) -> dict[str, Any]:
        """JSON-safe dict: enums as values, datetimes as ISO strings, no None fields."""
        return self.model_dump(mode="json", exclude_none=True)
