# simsearch/adapter/resolver.py
"""
Configuration resolver: raw parameters -> QueryDescriptor.

Raw parameters (all optional at the type level, validated here):
    embeddings       injected embeddings capability
    index_name       name of an existing index
    namespace        partition inside the index
    metadata_filter  mapping or JSON string
    top_k            number of matches to request (default 4)
    min_score        minimum score as a percentage, 0-100
    values           JSON payload carrying question, nested filter and skip flag

The "values" payload is decoded twice. The outer object is parsed first;
then every string property has its wire markers restored, and properties
named "query" or "filter" are parsed as JSON again. This double decode is
the host's wire convention and is applied unconditionally. A payload that
is already a mapping (structured configuration) skips the textual steps.
"""

from __future__ import annotations

import json
import math
from typing import Any, Mapping, Optional

from simsearch.adapter.escape import decode_markers, encode_markers
from simsearch.core.exceptions import ConfigurationError, PayloadDecodeError
from simsearch.core.models import DEFAULT_TOP_K, QueryDescriptor
from simsearch.embedding.engine import supports_embeddings
from simsearch.logging.logger import get_logger
from simsearch.logging.tags import RESOLVER

logger = get_logger(__name__)

# Payload properties that carry JSON-encoded strings of their own.
NESTED_JSON_FIELDS = ("query", "filter")


def _load_json(raw: str, field: str) -> Any:
    try:
        return json.loads(raw)
    except (TypeError, ValueError) as exc:
        raise PayloadDecodeError(f"Invalid JSON: {exc}", field=field) from exc


def decode_values(values: Any) -> dict[str, Any]:
    """
    Decode the "values" payload into a plain dict.

    Raises PayloadDecodeError when either decode level fails and
    ConfigurationError when the payload is missing or not an object.
    """
    if values is None or (isinstance(values, str) and not values.strip()):
        raise ConfigurationError("A 'values' payload with the query is required")

    decoded = _load_json(values, "values") if isinstance(values, str) else values
    if not isinstance(decoded, Mapping):
        raise ConfigurationError(
            f"'values' payload must be a JSON object, got {type(decoded).__name__}"
        )

    out: dict[str, Any] = {}
    for prop, value in decoded.items():
        if isinstance(value, str):
            value = decode_markers(value)
            if prop in NESTED_JSON_FIELDS:
                value = _load_json(value, prop)
        out[prop] = value

    return out


def encode_values(values: Mapping[str, Any]) -> str:
    """
    Build a "values" payload in wire form; inverse of decode_values().

    Nested "query"/"filter" objects are serialized to JSON strings and every
    string property gets its newlines and double quotes replaced by markers.
    """
    out: dict[str, Any] = {}
    for prop, value in values.items():
        if prop in NESTED_JSON_FIELDS and not isinstance(value, str):
            value = json.dumps(value)
        if isinstance(value, str):
            value = encode_markers(value)
        out[prop] = value
    return json.dumps(out)


def parse_top_k(raw: Any, default: int = DEFAULT_TOP_K) -> int:
    """
    Absent, blank, zero or unparsable values fall back to the default.
    Fractions are truncated. Anything else below 1 is rejected.
    """
    if raw is None or isinstance(raw, bool) or (isinstance(raw, str) and not raw.strip()):
        return default

    try:
        value = float(raw)
    except (TypeError, ValueError):
        logger.warning(f"{RESOLVER} Unparsable top_k={raw!r}, using {default}")
        return default

    if not math.isfinite(value):
        logger.warning(f"{RESOLVER} Non-finite top_k={raw!r}, using {default}")
        return default

    if value == 0:
        return default

    top_k = int(value)
    if top_k < 1:
        raise ConfigurationError(f"top_k must be >= 1, got {raw!r}")
    return top_k


def parse_min_score(raw: Any) -> Optional[float]:
    """Convert a 0-100 percentage to a fraction. Absent, blank or zero means no threshold."""
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return None

    try:
        percentage = float(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"min_score must be a number, got {raw!r}") from exc

    if isinstance(raw, bool) or not math.isfinite(percentage):
        raise ConfigurationError(f"min_score must be a number, got {raw!r}")
    if not 0 <= percentage <= 100:
        raise ConfigurationError(f"min_score must be between 0 and 100, got {raw!r}")

    if percentage == 0:
        return None
    return percentage / 100


def parse_metadata_filter(raw: Any) -> Optional[dict[str, Any]]:
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return None

    value = raw
    if isinstance(raw, str):
        try:
            value = json.loads(raw)
        except ValueError as exc:
            raise ConfigurationError(f"metadata_filter is not valid JSON: {exc}") from exc

    if not isinstance(value, Mapping):
        raise ConfigurationError(
            f"metadata_filter must be a JSON object, got {type(value).__name__}"
        )
    return dict(value) or None


def _is_skip(flag: Any) -> bool:
    return flag is True or flag == "true"


def resolve(
    raw_params: Mapping[str, Any],
    default_top_k: int = DEFAULT_TOP_K,
) -> QueryDescriptor:
    """
    Validate and normalize raw parameters into a QueryDescriptor.

    Raises:
        ConfigurationError: on any missing or malformed input.
    """
    if not supports_embeddings(raw_params.get("embeddings")):
        raise ConfigurationError("An embeddings capability is required")

    index_name = str(raw_params.get("index_name") or "").strip()
    if not index_name:
        raise ConfigurationError("index_name must not be blank")

    namespace = str(raw_params.get("namespace") or "").strip() or None
    top_level_filter = parse_metadata_filter(raw_params.get("metadata_filter"))
    top_k = parse_top_k(raw_params.get("top_k"), default_top_k)
    min_score_fraction = parse_min_score(raw_params.get("min_score"))

    values = decode_values(raw_params.get("values"))

    query = values.get("query") or {}
    if not isinstance(query, Mapping):
        raise ConfigurationError(
            f"'values.query' must be a JSON object, got {type(query).__name__}"
        )

    skip_search = _is_skip(query.get("skip_search"))

    metadata_filter = top_level_filter
    if "filter" in query:
        payload_filter = query["filter"]
        if payload_filter is not None and not isinstance(payload_filter, Mapping):
            raise ConfigurationError(
                f"'values.query.filter' must be a JSON object, got {type(payload_filter).__name__}"
            )
        if top_level_filter and payload_filter != top_level_filter:
            logger.warning(
                f"{RESOLVER} Payload filter overrides the separately supplied metadata filter"
            )
        metadata_filter = dict(payload_filter) if payload_filter else None

    question = values.get("question")
    query_text = question if isinstance(question, str) else ("" if question is None else str(question))

    if not skip_search and not query_text.strip():
        raise ConfigurationError("Query text ('values.question') must not be empty")

    descriptor = QueryDescriptor(
        index_name=index_name,
        query_text=query_text,
        namespace=namespace,
        metadata_filter=metadata_filter,
        top_k=top_k,
        min_score_fraction=min_score_fraction,
        skip_search=skip_search,
    )

    logger.debug(
        f"{RESOLVER} Resolved index='{index_name}', namespace='{namespace or ''}', "
        f"top_k={top_k}, min_score={min_score_fraction}, skip_search={skip_search}"
    )
    return descriptor


__all__ = [
    "NESTED_JSON_FIELDS",
    "decode_values",
    "encode_values",
    "parse_top_k",
    "parse_min_score",
    "parse_metadata_filter",
    "resolve",
]
