# chuk_ai_agent_orchestrator/store.py
"""
Keyed store abstraction for per-user state.

Every per-user map in the orchestrator (user states, conversation contexts,
leases, action queues) goes through a ``KeyedStore`` so a sharded or
external implementation can be swapped in without touching orchestration
logic.

Usage::

    from chuk_ai_agent_orchestrator.store import InMemoryKeyedStore

    states: InMemoryKeyedStore[UserState] = InMemoryKeyedStore()
    states.set("user-1", state)
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Generic, Protocol, TypeVar, runtime_checkable

T = TypeVar("T")


@runtime_checkable
class KeyedStore(Protocol[T]):
    """Protocol for user-keyed storage."""

    def get(self, key: str) -> T | None: ...

    def set(self, key: str, value: T) -> None: ...

    def delete(self, key: str) -> T | None: ...

    def keys(self) -> list[str]: ...

    def items(self) -> list[tuple[str, T]]: ...

    def __contains__(self, key: object) -> bool: ...

    def __len__(self) -> int: ...


class InMemoryKeyedStore(Generic[T]):
    """Process-local dict-backed store."""

    def __init__(self) -> None:
        self._data: dict[str, T] = {}

    def get(self, key: str) -> T | None:
        return self._data.get(key)

    def set(self, key: str, value: T) -> None:
        self._data[key] = value

    def delete(self, key: str) -> T | None:
        return self._data.pop(key, None)

    def keys(self) -> list[str]:
        # Snapshot so callers may delete while iterating
        return list(self._data.keys())

    def items(self) -> list[tuple[str, T]]:
        return list(self._data.items())

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())
