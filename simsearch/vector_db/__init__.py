# simsearch/vector_db/__init__.py
"""
Vector DB plugin system for simsearch.

Usage:
    from simsearch.vector_db import create_vector_db_plugin

    db = create_vector_db_plugin("pinecone", api_key="...")
    db = create_vector_db_plugin("qdrant", url="http://localhost:6333")

    hits = db.search("my-index", vector, limit=4, namespace="docs")
"""

from __future__ import annotations

from typing import Any

from simsearch.core.registry import available_plugins, get_plugin
from simsearch.vector_db.base import SearchResult, VectorDBPlugin


def get_vector_db_plugin(plugin_name: str) -> type:
    return get_plugin(plugin_name, "vector_db")


def create_vector_db_plugin(plugin_name: str, **kwargs: Any) -> VectorDBPlugin:
    PluginCls = get_vector_db_plugin(plugin_name)
    return PluginCls(**kwargs)


def available_vector_db_plugins() -> list[str]:
    return available_plugins("vector_db")


__all__ = [
    "SearchResult",
    "VectorDBPlugin",
    "get_vector_db_plugin",
    "create_vector_db_plugin",
    "available_vector_db_plugins",
]
