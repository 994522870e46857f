# simsearch/core/exceptions.py
"""
All exceptions raised by simsearch.

Hierarchy:
    SimSearchError
    ├── ConfigurationError - malformed or missing input (never retried)
    │   ├── PayloadDecodeError - "values" payload is not valid JSON
    │   ├── CredentialError - credentials could not be resolved
    │   └── ConfigFileError - YAML config missing, unparsable or invalid
    ├── ExecutionError - database / network / embeddings failure
    │   ├── VectorDBConnectionError - client session could not be opened
    │   ├── IndexNotFoundError - requested index does not exist
    │   ├── VectorSearchError - the similarity query itself failed
    │   └── EmbeddingError - the embeddings capability raised
    ├── ProjectionError - matches could not be projected (a defect)
    ├── PluginRegistryError
    │   └── PluginNotFoundError
    └── NodeRegistryError
        ├── DuplicateNodeError
        └── NodeNotFoundError

Callers that only care about "did the invocation fail" catch SimSearchError.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class SimSearchError(Exception):
    """
    Base exception for all simsearch errors.

    Examples:
        >>> try:
        ...     text = adapter.run(params, output="text")
        ... except SimSearchError as e:
        ...     print(f"Invocation failed: {e}")
    """

    pass


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(SimSearchError):
    """
    Malformed or missing input.

    Raised before any I/O happens, for example:
    - blank index name
    - no embeddings capability
    - empty query text while the search is not skipped
    """

    pass


class PayloadDecodeError(ConfigurationError):
    """The "values" payload (or one of its nested fields) is not valid JSON."""

    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        if field:
            message = f"{message} (field: {field})"
        super().__init__(message)


class CredentialError(ConfigurationError):
    """Credentials could not be resolved from the credential store."""

    pass


class ConfigFileError(ConfigurationError):
    """YAML configuration file is missing, unparsable or fails validation."""

    def __init__(self, message: str, path: Optional[Path] = None):
        self.path = path
        if path:
            message = f"{message} (file: {path})"
        super().__init__(message)


# =============================================================================
# Execution Errors
# =============================================================================


class ExecutionError(SimSearchError):
    """
    Database, network or embeddings failure.

    Not retried here; the caller decides whether to re-run the invocation.
    """

    pass


class VectorDBConnectionError(ExecutionError):
    """Client session to the vector database could not be established."""

    pass


class IndexNotFoundError(ExecutionError):
    """The requested index does not exist."""

    def __init__(self, index_name: str):
        self.index_name = index_name
        super().__init__(f"Index '{index_name}' does not exist")


class VectorSearchError(ExecutionError):
    """Vector database lookup failed."""

    pass


class EmbeddingError(ExecutionError):
    """Embeddings capability failed (API failure, invalid output, etc.)."""

    pass


# =============================================================================
# Projection Errors
# =============================================================================


class ProjectionError(SimSearchError):
    """Matches could not be projected. Never expected for valid matches."""

    pass


# =============================================================================
# Registry Errors
# =============================================================================


class PluginRegistryError(SimSearchError):
    """Base error for plugin registry operations."""

    pass


class PluginNotFoundError(PluginRegistryError):
    """Raised when the requested plugin doesn't exist."""

    pass


class NodeRegistryError(SimSearchError):
    """Base error for node registry operations."""

    pass


class DuplicateNodeError(NodeRegistryError):
    """Two nodes were registered under the same name."""

    pass


class NodeNotFoundError(NodeRegistryError):
    """No node registered under the requested name."""

    pass


__all__ = [
    "SimSearchError",
    # Configuration
    "ConfigurationError",
    "PayloadDecodeError",
    "CredentialError",
    "ConfigFileError",
    # Execution
    "ExecutionError",
    "VectorDBConnectionError",
    "IndexNotFoundError",
    "VectorSearchError",
    "EmbeddingError",
    # Projection
    "ProjectionError",
    # Registries
    "PluginRegistryError",
    "PluginNotFoundError",
    "NodeRegistryError",
    "DuplicateNodeError",
    "NodeNotFoundError",
]
