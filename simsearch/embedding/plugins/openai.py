# simsearch/embedding/plugins/openai.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from simsearch.core.exceptions import EmbeddingError
from simsearch.core.registry import register_plugin
from simsearch.embedding.credentials import resolve_api_key

try:
    from openai import OpenAI
except ImportError:
    OpenAI = None  # type: ignore


@dataclass
class OpenAIEmbeddingClient:
    """
    Embedding plugin for the OpenAI API.

    Config example:
        embedding:
          plugin_name: openai
          kwargs:
            model: text-embedding-3-small
            dimensions: 1536
    """

    plugin_name: str = "openai"
    plugin_type: str = "embedding"

    api_key: str | None = None
    model: str = "text-embedding-3-small"
    dimensions: int | None = None
    base_url: str | None = None

    def __post_init__(self) -> None:
        if OpenAI is None:
            raise RuntimeError("Install openai: `pip install openai`")

        client_kwargs: dict[str, Any] = {
            "api_key": resolve_api_key(provider="openai", api_key=self.api_key)
        }
        if self.base_url:
            client_kwargs["base_url"] = self.base_url

        try:
            self._client = OpenAI(**client_kwargs)
        except Exception as exc:
            raise EmbeddingError("Failed to initialize OpenAI embedding client") from exc

    def embed(self, text: str) -> list[float]:
        kwargs: dict[str, Any] = {
            "input": text,
            "model": self.model,
        }
        if self.dimensions is not None:
            kwargs["dimensions"] = self.dimensions

        try:
            response = self._client.embeddings.create(**kwargs)
            return list(response.data[0].embedding)
        except Exception as exc:
            raise EmbeddingError(f"Failed to embed text: {text[:50]!r}...") from exc


register_plugin(OpenAIEmbeddingClient, plugin_name="openai", plugin_type="embedding")
