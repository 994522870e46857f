# simsearch/embedding/plugins/cohere.py
from __future__ import annotations

from dataclasses import dataclass

import httpx

from simsearch.core.exceptions import EmbeddingError
from simsearch.core.registry import register_plugin
from simsearch.embedding.credentials import resolve_api_key


@dataclass
class CohereEmbeddingClient:
    """
    Cohere embedding plugin using direct HTTP requests.

    Queries are embedded with input_type="search_query", the counterpart of
    the "search_document" type used when the index was populated.
    """

    plugin_name: str = "cohere"
    plugin_type: str = "embedding"

    api_key: str | None = None
    model: str = "embed-english-v3.0"
    input_type: str = "search_query"
    base_url: str = "https://api.cohere.ai/v1"
    timeout: float = 30.0

    def __post_init__(self) -> None:
        key = resolve_api_key(provider="cohere", api_key=self.api_key)

        self._client = httpx.Client(
            base_url=self.base_url,
            headers={
                "Authorization": f"Bearer {key}",
                "Content-Type": "application/json",
            },
            timeout=self.timeout,
        )

    def embed(self, text: str) -> list[float]:
        payload: dict[str, object] = {
            "texts": [text],
            "model": self.model,
            "input_type": self.input_type,
            "embedding_types": ["float"],
        }

        try:
            response = self._client.post("/embed", json=payload)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as exc:
            try:
                detail = f": {exc.response.json().get('message', '')}"
            except ValueError:
                detail = ""
            raise EmbeddingError(
                f"Cohere API request failed with status {exc.response.status_code}{detail}"
            ) from exc
        except httpx.HTTPError as exc:
            raise EmbeddingError(f"Failed to embed text: {exc}") from exc

        # {"embeddings": {"float": [[...]]}} or {"embeddings": [[...]]}
        embeddings = data.get("embeddings", {})
        if isinstance(embeddings, dict):
            embeddings = embeddings.get("float", [])

        if not embeddings or not embeddings[0]:
            raise EmbeddingError("No embedding returned from Cohere API")

        return list(embeddings[0])

    def close(self) -> None:
        self._client.close()


register_plugin(CohereEmbeddingClient, plugin_name="cohere", plugin_type="embedding")
