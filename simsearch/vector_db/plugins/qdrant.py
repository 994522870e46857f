# simsearch/vector_db/plugins/qdrant.py
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
    from qdrant_client import QdrantClient
    from qdrant_client.http import models as rest
except ImportError:  # pragma: no cover - optional dependency
    QdrantClient = None  # type: ignore[assignment]
    rest = None  # type: ignore[assignment]

logger = get_logger(__name__)

NAMESPACE_PAYLOAD_KEY = "namespace"

_BOOLEAN_CLAUSES = ("must", "should", "must_not")
_RANGE_OPERATORS = {"$gt": "gt", "$gte": "gte", "$lt": "lt", "$lte": "lte"}


def _condition(key: str, value: Any) -> tuple[list[Any], list[Any]]:
    """Translate one filter entry into (must, must_not) conditions."""
    if isinstance(value, list):
        return [rest.FieldCondition(key=key, match=rest.MatchAny(any=value))], []

    if not isinstance(value, Mapping):
        return [rest.FieldCondition(key=key, match=rest.MatchValue(value=value))], []

    must: list[Any] = []
    must_not: list[Any] = []
    range_kwargs: dict[str, Any] = {}

    for op, operand in value.items():
        if op == "$eq":
            must.append(rest.FieldCondition(key=key, match=rest.MatchValue(value=operand)))
        elif op == "$ne":
            must_not.append(rest.FieldCondition(key=key, match=rest.MatchValue(value=operand)))
        elif op == "$in":
            must.append(rest.FieldCondition(key=key, match=rest.MatchAny(any=list(operand))))
        elif op == "$nin":
            must_not.append(rest.FieldCondition(key=key, match=rest.MatchAny(any=list(operand))))
        elif op in _RANGE_OPERATORS:
            range_kwargs[_RANGE_OPERATORS[op]] = operand
        else:
            raise VectorSearchError(f"Unsupported filter operator {op!r} for key {key!r}")

    if range_kwargs:
        must.append(rest.FieldCondition(key=key, range=rest.Range(**range_kwargs)))

    return must, must_not


def build_filter(
    metadata_filter: Optional[Mapping[str, Any]],
    namespace: Optional[str] = None,
) -> Any:
    """
    Build a Qdrant Filter.

    Accepts either a native Qdrant filter ({"must": [...], ...}) or a flat
    metadata mapping ({"genre": "drama", "year": {"$gte": 2020}}).
    The namespace, when given, becomes an extra `must` payload condition.
    """
    if not metadata_filter and not namespace:
        return None

    if metadata_filter and any(k in metadata_filter for k in _BOOLEAN_CLAUSES):
        native = rest.Filter(**dict(metadata_filter))
        if namespace:
            ns_cond = rest.FieldCondition(
                key=NAMESPACE_PAYLOAD_KEY, match=rest.MatchValue(value=namespace)
            )
            return rest.Filter(must=[native, ns_cond])
        return native

    must: list[Any] = []
    must_not: list[Any] = []
    for key, value in (metadata_filter or {}).items():
        m, mn = _condition(key, value)
        must.extend(m)
        must_not.extend(mn)

    if namespace:
        must.append(
            rest.FieldCondition(key=NAMESPACE_PAYLOAD_KEY, match=rest.MatchValue(value=namespace))
        )

    return rest.Filter(must=must or None, must_not=must_not or None)


@dataclass
class QdrantVectorDB:
    """
    Qdrant-based vector DB plugin.

    Thin wrapper around `qdrant_client.QdrantClient`. Qdrant has no native
    namespaces, so a namespace is matched against the `namespace` payload key.

    Credentials map as: api_key -> api_key, environment -> cluster URL
    (only when it looks like one; otherwise host/port are used).
    """

    plugin_name: str = "qdrant"
    plugin_type: str = "vector_db"

    api_key: Optional[str] = None
    environment: Optional[str] = None
    url: Optional[str] = None
    host: str = "localhost"
    port: int = 6333
    https: bool = False

    def __post_init__(self) -> None:
        if QdrantClient is None:
            raise RuntimeError(
                "qdrant-client is not installed. Install with: `pip install qdrant-client`."
            )

        url = self.url
        if not url and self.environment and "://" in self.environment:
            url = self.environment
        if not url:
            url = f"{'https' if self.https else 'http'}://{self.host}:{self.port}"

        logger.info(
            f"{VECTOR_DB} Initializing QdrantClient: url={url}, "
            f"api_key={'***' if self.api_key else '<none>'}"
        )

        try:
            self._client = QdrantClient(url=url, api_key=self.api_key or None)
        except Exception as exc:
            raise VectorDBConnectionError(f"Failed to create Qdrant client: {exc}") from exc

    def search(
        self,
        index_name: str,
        query_vector: list[float],
        limit: int,
        *,
        namespace: Optional[str] = None,
        metadata_filter: Optional[Mapping[str, Any]] = None,
    ) -> list[SearchResult]:
        try:
            exists = self._client.collection_exists(collection_name=index_name)
        except Exception as exc:
            raise VectorDBConnectionError(f"Failed to reach Qdrant: {exc}") from exc

        if not exists:
            raise IndexNotFoundError(index_name)

        query_filter = build_filter(metadata_filter, namespace)

        logger.info(
            f"{VECTOR_DB} Searching collection='{index_name}', namespace='{namespace or ''}', "
            f"limit={limit}, filtered={query_filter is not None}"
        )

        try:
            response = self._client.query_points(
                collection_name=index_name,
                query=query_vector,
                limit=limit,
                query_filter=query_filter,
                with_payload=True,
            )
        except Exception as exc:
            raise VectorSearchError(f"Qdrant search failed for collection '{index_name}'") from exc

        return [
            SearchResult(
                id=str(point.id),
                score=float(point.score) if point.score is not None else 0.0,
                payload=dict(point.payload or {}),
            )
            for point in response.points
        ]

    def close(self) -> None:
        try:
            self._client.close()
        except Exception as exc:
            logger.warning(f"{VECTOR_DB} Failed to close QdrantClient: {exc}")


# Register on import
register_plugin(QdrantVectorDB, plugin_name="qdrant", plugin_type="vector_db")
