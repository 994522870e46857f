# simsearch/adapter/__init__.py
from simsearch.adapter.adapter import AdapterState, SimilaritySearchAdapter
from simsearch.adapter.escape import decode_markers, encode_markers, normalize_escapes
from simsearch.adapter.executor import QueryExecutor
from simsearch.adapter.projector import apply_threshold, project
from simsearch.adapter.resolver import decode_values, encode_values, resolve

__all__ = [
    "AdapterState",
    "SimilaritySearchAdapter",
    "QueryExecutor",
    "resolve",
    "decode_values",
    "encode_values",
    "project",
    "apply_threshold",
    "encode_markers",
    "decode_markers",
    "normalize_escapes",
]
