"""Boundary Protocols — contracts between the request pipeline and the store.

Invariants:
    - Core NEVER imports from shell; dependency arrows point inward only
    - The store is reached only through these Protocol types
    - Implementations provided by infrastructure/ and injected per request

Design Decisions:
    - Protocol over ABC: structural subtyping, so test fakes need no base class
"""

from contextlib import AbstractAsyncContextManager
from typing import Any, Protocol


class QueryResult(Protocol):
    """The slice of a driver result the customer query consumes."""
    def scalars(self) -> Any: ...


class StoreSession(Protocol):
    """One checked-out unit of work against the store."""
    async def execute(self, statement: Any) -> QueryResult: ...


class CustomerStore(Protocol):
    """Shared, pooled store handle, safe for concurrent requests."""
    def session(self) -> AbstractAsyncContextManager[StoreSession]: ...
