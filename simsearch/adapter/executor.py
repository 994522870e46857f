# simsearch/adapter/executor.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, List

from simsearch.core.exceptions import (
    EmbeddingError,
    ExecutionError,
    VectorDBConnectionError,
    VectorSearchError,
)
from simsearch.core.models import Credentials, Document, QueryDescriptor, ScoredMatch
from simsearch.embedding.engine import EmbeddingEngine
from simsearch.logging.logger import get_logger
from simsearch.logging.tags import EXECUTOR, VECTOR_SEARCH
from simsearch.vector_db import create_vector_db_plugin
from simsearch.vector_db.base import SearchResult, VectorDBPlugin

logger = get_logger(__name__)

DEFAULT_TEXT_KEY = "text"

PluginFactory = Callable[..., VectorDBPlugin]


@dataclass
class QueryExecutor:
    """
    Runs one similarity search against an existing index.

    A fresh vector-DB plugin (and so a fresh client handle) is created for
    every call; nothing is pooled or cached here.

    Flow:
        credentials -> plugin, query_text -> vector, plugin.search -> ScoredMatch
    """

    plugin_name: str = "pinecone"
    plugin_kwargs: dict[str, Any] = field(default_factory=dict)
    text_key: str = DEFAULT_TEXT_KEY
    log_matches: bool = True
    plugin_factory: PluginFactory = create_vector_db_plugin

    def _open(self, credentials: Credentials) -> VectorDBPlugin:
        try:
            return self.plugin_factory(
                self.plugin_name,
                api_key=credentials.api_key,
                environment=credentials.environment,
                **self.plugin_kwargs,
            )
        except ExecutionError:
            raise
        except Exception as exc:
            raise VectorDBConnectionError(
                f"Failed to connect to vector DB '{self.plugin_name}': {exc}"
            ) from exc

    def _to_match(self, hit: SearchResult) -> ScoredMatch:
        payload = dict(hit.payload or {})
        content = payload.get(self.text_key)
        return ScoredMatch(
            document=Document(
                content="" if content is None else str(content),
                metadata=payload,
            ),
            score=float(hit.score),
        )

    def _close(self, plugin: VectorDBPlugin) -> None:
        close = getattr(plugin, "close", None)
        if not callable(close):
            return
        try:
            close()
        except Exception as exc:
            logger.warning(f"{EXECUTOR} Failed to close vector DB '{self.plugin_name}': {exc}")

    def execute(
        self,
        descriptor: QueryDescriptor,
        credentials: Credentials,
        embeddings: Any,
    ) -> List[ScoredMatch]:
        logger.info(
            f"{EXECUTOR} Running similarity search on index='{descriptor.index_name}' "
            f"via '{self.plugin_name}'"
        )

        plugin = self._open(credentials)
        try:
            return self._search(plugin, descriptor, embeddings)
        finally:
            self._close(plugin)

    def _search(
        self,
        plugin: VectorDBPlugin,
        descriptor: QueryDescriptor,
        embeddings: Any,
    ) -> List[ScoredMatch]:
        try:
            query_vector = EmbeddingEngine(embeddings).embed(descriptor.query_text)
        except EmbeddingError:
            raise
        except Exception as exc:
            raise EmbeddingError(f"Failed to embed query: {descriptor.query_text[:50]!r}") from exc

        try:
            hits = plugin.search(
                descriptor.index_name,
                query_vector,
                descriptor.top_k,
                namespace=descriptor.namespace,
                metadata_filter=descriptor.metadata_filter,
            )
            matches = [self._to_match(hit) for hit in list(hits)[: descriptor.top_k]]
        except ExecutionError:
            raise
        except Exception as exc:
            raise VectorSearchError(
                f"Vector search failed for index '{descriptor.index_name}'"
            ) from exc

        if self.log_matches:
            logger.debug(f"{VECTOR_SEARCH} {len(matches)} match(es): {matches!r}")

        return matches


__all__ = ["DEFAULT_TEXT_KEY", "QueryExecutor"]
