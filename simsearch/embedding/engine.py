# simsearch/embedding/engine.py
from __future__ import annotations

from typing import Any

from simsearch.core.exceptions import EmbeddingError


def supports_embeddings(obj: Any) -> bool:
    """True for objects exposing `embed(text)` or LangChain-style `embed_query(text)`."""
    if obj is None:
        return False
    return callable(getattr(obj, "embed", None)) or callable(getattr(obj, "embed_query", None))


class EmbeddingEngine:
    """
    Thin wrapper around an injected embeddings capability.

    Architecture:
    - capability construction is done upstream (host or CLI wiring)
    - engine only enforces the contract and delegates calls
    """

    def __init__(self, capability: Any):
        if not supports_embeddings(capability):
            raise TypeError(
                f"{type(capability).__name__} does not expose embed() or embed_query()"
            )
        self._capability = capability

    def embed(self, text: str) -> list[float]:
        embed = getattr(self._capability, "embed", None)
        if not callable(embed):
            embed = self._capability.embed_query

        out = embed(text)
        if hasattr(out, "tolist"):
            out = out.tolist()
        if not isinstance(out, (list, tuple)) or not out:
            raise EmbeddingError("Embeddings capability must return a non-empty list[float]")
        if any(isinstance(x, bool) or not isinstance(x, (int, float)) for x in out):
            raise EmbeddingError("Embeddings capability must return list[float]")
        return [float(x) for x in out]
