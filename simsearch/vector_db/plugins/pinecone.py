# simsearch/vector_db/plugins/pinecone.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from simsearch.core.exceptions import (
    IndexNotFoundError,
    VectorDBConnectionError,
    VectorSearchError,
)
from simsearch.core.registry import register_plugin
from simsearch.logging.logger import get_logger
from simsearch.logging.tags import VECTOR_DB
from simsearch.vector_db.base import SearchResult

try:
    from pinecone import Pinecone
    from pinecone.exceptions import NotFoundException
except ImportError:  # pragma: no cover - optional dependency
    Pinecone = None  # type: ignore[assignment]
    NotFoundException = None  # type: ignore[assignment]

logger = get_logger(__name__)


def _field(obj: Any, name: str, default: Any = None) -> Any:
    # SDK responses are model objects in recent releases and dicts in older ones.
    if isinstance(obj, Mapping):
        return obj.get(name, default)
    return getattr(obj, name, default)


@dataclass
class PineconeVectorDB:
    """
    Pinecone-based vector DB plugin.

    Thin wrapper around `pinecone.Pinecone` that runs a metadata-inclusive
    similarity query against an existing index:

    - `.search(index_name, query_vector, limit, namespace=..., metadata_filter=...)`

    `environment` is accepted for credential compatibility with pod-based
    projects; the current client routes by index name and does not need it.
    `index_host` skips the control-plane lookup when the data-plane host is known.
    """

    plugin_name: str = "pinecone"
    plugin_type: str = "vector_db"

    api_key: Optional[str] = None
    environment: Optional[str] = None
    index_host: Optional[str] = None

    def __post_init__(self) -> None:
        if Pinecone is None:
            raise RuntimeError("pinecone is not installed. Install with: `pip install pinecone`.")
        if not self.api_key:
            raise VectorDBConnectionError("Pinecone API key is required")

        logger.info(
            f"{VECTOR_DB} Initializing Pinecone client: "
            f"environment={self.environment or '<none>'}, api_key=***"
        )

        try:
            self._client = Pinecone(api_key=self.api_key)
        except Exception as exc:
            raise VectorDBConnectionError(f"Failed to create Pinecone client: {exc}") from exc
        self._indexes: list[Any] = []

    def _open_index(self, index_name: str) -> Any:
        try:
            if self.index_host:
                index = self._client.Index(host=self.index_host)
            else:
                index = self._client.Index(index_name)
        except Exception as exc:
            if NotFoundException is not None and isinstance(exc, NotFoundException):
                raise IndexNotFoundError(index_name) from exc
            raise VectorDBConnectionError(
                f"Failed to open Pinecone index '{index_name}': {exc}"
            ) from exc

        self._indexes.append(index)
        return index

    def search(
        self,
        index_name: str,
        query_vector: list[float],
        limit: int,
        *,
        namespace: Optional[str] = None,
        metadata_filter: Optional[Mapping[str, Any]] = None,
    ) -> list[SearchResult]:
        index = self._open_index(index_name)

        query: dict[str, Any] = {
            "vector": query_vector,
            "top_k": limit,
            "include_metadata": True,
        }
        if namespace:
            query["namespace"] = namespace
        if metadata_filter:
            query["filter"] = dict(metadata_filter)

        logger.info(
            f"{VECTOR_DB} Querying index='{index_name}', namespace='{namespace or ''}', "
            f"top_k={limit}, filtered={bool(metadata_filter)}"
        )

        try:
            response = index.query(**query)
        except Exception as exc:
            if NotFoundException is not None and isinstance(exc, NotFoundException):
                raise IndexNotFoundError(index_name) from exc
            raise VectorSearchError(f"Pinecone query failed for index '{index_name}'") from exc

        results = []
        for match in _field(response, "matches", None) or []:
            score = _field(match, "score")
            results.append(
                SearchResult(
                    id=str(_field(match, "id", "")),
                    score=float(score) if score is not None else 0.0,
                    payload=dict(_field(match, "metadata", None) or {}),
                )
            )
        return results

    def close(self) -> None:
        # Index handles own the HTTP pool; the control-plane client holds none.
        indexes, self._indexes = self._indexes, []
        for index in indexes:
            close = getattr(index, "close", None)
            if not callable(close):
                continue
            try:
                close()
            except Exception as exc:
                logger.warning(f"{VECTOR_DB} Failed to close Pinecone index handle: {exc}")


# Register on import
register_plugin(PineconeVectorDB, plugin_name="pinecone", plugin_type="vector_db")
