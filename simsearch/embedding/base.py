# simsearch/embedding/base.py
from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable


@runtime_checkable
class EmbeddingsCapability(Protocol):
    """
    Anything that maps text to a fixed-length numeric vector.

    simsearch never computes embeddings itself; callers inject one of these.
    """

    def embed(self, text: str) -> Sequence[float]: ...


@runtime_checkable
class EmbeddingPlugin(EmbeddingsCapability, Protocol):
    plugin_name: str
    plugin_type: str  # must be "embedding"
