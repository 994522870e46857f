# simsearch/core/models.py
"""
Per-invocation data model.

Every object here is created fresh for one adapter call and discarded when
the call returns. Nothing is shared between invocations.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional

DEFAULT_TOP_K = 4


class ProjectionMode(str, Enum):
    """Output shape, chosen by the caller's declared output port."""

    DOCUMENT_LIST = "document"
    CONCATENATED_TEXT = "text"

    @classmethod
    def from_output(cls, output: Optional[str]) -> "ProjectionMode":
        """`"document"` selects the document list; anything else selects text."""
        if output == cls.DOCUMENT_LIST.value:
            return cls.DOCUMENT_LIST
        return cls.CONCATENATED_TEXT


@dataclass(frozen=True)
class QueryDescriptor:
    """
    Normalized, validated query.

    Produced by the resolver and consumed read-only by the executor.
    """

    index_name: str
    query_text: str
    namespace: Optional[str] = None
    metadata_filter: Optional[Mapping[str, Any]] = None
    top_k: int = DEFAULT_TOP_K
    min_score_fraction: Optional[float] = None
    skip_search: bool = False


@dataclass(frozen=True)
class Credentials:
    """Resolved vector-database credentials. Never persisted."""

    api_key: str
    environment: str = ""

    def __repr__(self) -> str:
        masked = "***" if self.api_key else "<none>"
        return f"Credentials(api_key={masked}, environment={self.environment!r})"


@dataclass(frozen=True)
class Document:
    content: str
    metadata: Mapping[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"content": self.content, "metadata": dict(self.metadata)}


@dataclass(frozen=True)
class ScoredMatch:
    """A document and its similarity score, as returned by the database."""

    document: Document
    score: float


__all__ = [
    "DEFAULT_TOP_K",
    "ProjectionMode",
    "QueryDescriptor",
    "Credentials",
    "Document",
    "ScoredMatch",
]
