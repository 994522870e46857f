# simsearch/core/__init__.py
"""
Core contracts: per-invocation models and the exception hierarchy.
"""

from simsearch.core.exceptions import (
    ConfigurationError,
    CredentialError,
    EmbeddingError,
    ExecutionError,
    IndexNotFoundError,
    PayloadDecodeError,
    ProjectionError,
    SimSearchError,
    VectorDBConnectionError,
    VectorSearchError,
)
from simsearch.core.models import (
    DEFAULT_TOP_K,
    Credentials,
    Document,
    ProjectionMode,
    QueryDescriptor,
    ScoredMatch,
)

__all__ = [
    # Models
    "DEFAULT_TOP_K",
    "Credentials",
    "Document",
    "ProjectionMode",
    "QueryDescriptor",
    "ScoredMatch",
    # Exceptions
    "SimSearchError",
    "ConfigurationError",
    "PayloadDecodeError",
    "CredentialError",
    "ExecutionError",
    "VectorDBConnectionError",
    "IndexNotFoundError",
    "VectorSearchError",
    "EmbeddingError",
    "ProjectionError",
]
