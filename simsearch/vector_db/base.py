# simsearch/vector_db/base.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Protocol, runtime_checkable


@dataclass(frozen=True)
class SearchResult:
    """
    Canonical vector search hit shape.

    Backends return richer objects; plugins normalize them to this before
    handing them to the executor.
    """

    id: str
    score: float
    payload: dict[str, Any] = field(default_factory=dict)


@runtime_checkable
class VectorDBPlugin(Protocol):
    """
    Read-only similarity search over an existing index.

    Implementations are thin wrappers around a vector-database client.
    They are constructed per invocation, closed by the caller when the
    invocation ends, and raise:
    - IndexNotFoundError when `index_name` does not exist
    - VectorSearchError for any other backend failure
    """

    plugin_name: str
    plugin_type: str  # must be "vector_db"

    def search(
        self,
        index_name: str,
        query_vector: list[float],
        limit: int,
        *,
        namespace: Optional[str] = None,
        metadata_filter: Optional[Mapping[str, Any]] = None,
    ) -> list[SearchResult]: ...

    def close(self) -> None:
        """Release the client handle. Safe to call more than once."""
        ...
