"""
simsearch - configurable similarity-search retrieval adapter.

Connects to an existing vector index, runs one similarity search per call,
filters by score and returns either a JSON document list or plain text.

Quick Start:
    >>> from simsearch import SimilaritySearchAdapter, EnvCredentialResolver
    >>> adapter = SimilaritySearchAdapter(credential_resolver=EnvCredentialResolver())
    >>> text = adapter.run(
    ...     {
    ...         "embeddings": embedder,
    ...         "index_name": "docs",
    ...         "values": '{"question": "What is X?", "query": "{}"}',
    ...     },
    ...     output="text",
    ... )

Architecture:
    simsearch/
    ├── adapter/     # resolver -> executor -> projector
    ├── core/        # models, exceptions, plugin registry
    ├── vector_db/   # pinecone, qdrant plugins
    ├── embedding/   # openai, cohere plugins
    ├── host/        # credentials, node descriptor, node registry
    ├── config/      # YAML + pydantic configuration
    └── cli/         # typer CLI
"""

__version__ = "0.1.0"

# =============================================================================
# CORE TYPES
# =============================================================================

from simsearch.core import (
    ConfigurationError,
    Credentials,
    Document,
    ExecutionError,
    ProjectionError,
    ProjectionMode,
    QueryDescriptor,
    ScoredMatch,
    SimSearchError,
)

# =============================================================================
# ADAPTER
# =============================================================================

from simsearch.adapter import QueryExecutor, SimilaritySearchAdapter
from simsearch.config import SimSearchConfig, load_config
from simsearch.host import (
    EnvCredentialResolver,
    InMemoryNodeRegistry,
    StaticCredentialResolver,
)

__all__ = [
    "__version__",
    # Types
    "Credentials",
    "Document",
    "ProjectionMode",
    "QueryDescriptor",
    "ScoredMatch",
    # Exceptions
    "SimSearchError",
    "ConfigurationError",
    "ExecutionError",
    "ProjectionError",
    # Adapter
    "SimilaritySearchAdapter",
    "QueryExecutor",
    # Config / host
    "SimSearchConfig",
    "load_config",
    "EnvCredentialResolver",
    "StaticCredentialResolver",
    "InMemoryNodeRegistry",
]
