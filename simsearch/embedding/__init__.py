# simsearch/embedding/__init__.py
"""
Embeddings for simsearch.

The adapter accepts any object with `embed(text) -> list[float]` (or a
LangChain-style `embed_query`). Bundled plugins are available by name:

    from simsearch.embedding import create_embedding_plugin

    embedder = create_embedding_plugin("openai", model="text-embedding-3-small")
    embedder = create_embedding_plugin("cohere")
"""

from __future__ import annotations

from typing import Any

from simsearch.core.registry import available_plugins, get_plugin
from simsearch.embedding.base import EmbeddingPlugin, EmbeddingsCapability
from simsearch.embedding.engine import EmbeddingEngine, supports_embeddings


def create_embedding_plugin(plugin_name: str, **kwargs: Any) -> EmbeddingPlugin:
    PluginCls = get_plugin(plugin_name, "embedding")
    return PluginCls(**kwargs)


def available_embedding_plugins() -> list[str]:
    return available_plugins("embedding")


__all__ = [
    "EmbeddingsCapability",
    "EmbeddingPlugin",
    "EmbeddingEngine",
    "supports_embeddings",
    "create_embedding_plugin",
    "available_embedding_plugins",
]
