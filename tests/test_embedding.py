# tests/test_embedding.py
from __future__ import annotations

import json
from types import SimpleNamespace

import httpx
import pytest

import simsearch.embedding.plugins.openai as openai_plugin
from simsearch.core.exceptions import CredentialError, EmbeddingError
from simsearch.embedding import (
    EmbeddingEngine,
    available_embedding_plugins,
    create_embedding_plugin,
    supports_embeddings,
)
from simsearch.embedding.credentials import resolve_api_key
from simsearch.embedding.plugins.cohere import CohereEmbeddingClient


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("OPENAI_API_KEY", "COHERE_API_KEY", "CO_API_KEY", "SIMSEARCH_EMBEDDING_API_KEY"):
        monkeypatch.delenv(name, raising=False)


class DummyEmbedPlugin:
    def embed(self, text: str):
        return [1.0, 2.0, 3.0]


class LangChainStyle:
    def embed_query(self, text: str):
        return (1, 2)


class TestEmbeddingEngine:
    def test_basic_call(self):
        assert EmbeddingEngine(DummyEmbedPlugin()).embed("hello") == [1.0, 2.0, 3.0]

    def test_embed_query_fallback(self):
        assert EmbeddingEngine(LangChainStyle()).embed("hello") == [1.0, 2.0]

    def test_tolist_results(self):
        class ArrayLike:
            def tolist(self):
                return [0.5]

        class Embedder:
            def embed(self, text):
                return ArrayLike()

        assert EmbeddingEngine(Embedder()).embed("x") == [0.5]

    def test_rejects_unsupported(self):
        with pytest.raises(TypeError):
            EmbeddingEngine(object())

    @pytest.mark.parametrize("bad", [[], None, "vec", [True, False], ["a"]])
    def test_rejects_bad_vectors(self, bad):
        class Embedder:
            def embed(self, text):
                return bad

        with pytest.raises(EmbeddingError):
            EmbeddingEngine(Embedder()).embed("x")

    def test_supports_embeddings(self):
        assert supports_embeddings(DummyEmbedPlugin())
        assert supports_embeddings(LangChainStyle())
        assert not supports_embeddings(None)
        assert not supports_embeddings("embed")


class TestResolveApiKey:
    def test_explicit(self):
        assert resolve_api_key(provider="openai", api_key="explicit") == "explicit"

    def test_provider_env(self, monkeypatch):
        monkeypatch.setenv("CO_API_KEY", "co")
        assert resolve_api_key(provider="cohere") == "co"

    def test_generic_env(self, monkeypatch):
        monkeypatch.setenv("SIMSEARCH_EMBEDDING_API_KEY", "generic")
        assert resolve_api_key(provider="openai") == "generic"

    def test_missing(self):
        with pytest.raises(CredentialError) as exc_info:
            resolve_api_key(provider="openai")
        assert "OPENAI_API_KEY" in str(exc_info.value)


def test_plugins_registered():
    assert {"openai", "cohere"} <= set(available_embedding_plugins())


class FakeOpenAI:
    def __init__(self, **kwargs):
        self.kwargs = kwargs
        self.requests = []
        self.embeddings = SimpleNamespace(create=self._create)

    def _create(self, **kwargs):
        self.requests.append(kwargs)
        return SimpleNamespace(data=[SimpleNamespace(embedding=[0.1, 0.2])])


class TestOpenAIPlugin:
    def test_embed(self, monkeypatch):
        monkeypatch.setattr(openai_plugin, "OpenAI", FakeOpenAI)

        client = create_embedding_plugin("openai", api_key="sk", dimensions=2)

        assert client.embed("hello") == [0.1, 0.2]
        assert client._client.kwargs == {"api_key": "sk"}
        assert client._client.requests == [
            {"input": "hello", "model": "text-embedding-3-small", "dimensions": 2}
        ]

    def test_api_error_wrapped(self, monkeypatch):
        monkeypatch.setattr(openai_plugin, "OpenAI", FakeOpenAI)
        client = openai_plugin.OpenAIEmbeddingClient(api_key="sk")

        def boom(**kwargs):
            raise RuntimeError("rate limited")

        client._client.embeddings = SimpleNamespace(create=boom)

        with pytest.raises(EmbeddingError):
            client.embed("hello")

    def test_missing_key(self, monkeypatch):
        monkeypatch.setattr(openai_plugin, "OpenAI", FakeOpenAI)
        with pytest.raises(CredentialError):
            openai_plugin.OpenAIEmbeddingClient()


def _cohere_with(handler) -> CohereEmbeddingClient:
    client = CohereEmbeddingClient(api_key="co-key")
    client._client = httpx.Client(
        base_url=client.base_url,
        headers={"Authorization": "Bearer co-key"},
        transport=httpx.MockTransport(handler),
    )
    return client


class TestCoherePlugin:
    def test_embed_typed_response(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"embeddings": {"float": [[0.1, 0.2]]}})

        client = _cohere_with(handler)

        assert client.embed("hello") == [0.1, 0.2]
        assert seen["path"] == "/v1/embed"
        assert seen["body"]["texts"] == ["hello"]
        assert seen["body"]["input_type"] == "search_query"

    def test_embed_plain_response(self):
        client = _cohere_with(lambda request: httpx.Response(200, json={"embeddings": [[0.3]]}))
        assert client.embed("hello") == [0.3]

    def test_http_error(self):
        client = _cohere_with(
            lambda request: httpx.Response(401, json={"message": "invalid api token"})
        )
        with pytest.raises(EmbeddingError) as exc_info:
            client.embed("hello")
        assert "401" in str(exc_info.value)
        assert "invalid api token" in str(exc_info.value)

    def test_empty_response(self):
        client = _cohere_with(lambda request: httpx.Response(200, json={"embeddings": []}))
        with pytest.raises(EmbeddingError):
            client.embed("hello")

    def test_key_from_env(self, monkeypatch):
        monkeypatch.setenv("COHERE_API_KEY", "env-key")
        client = CohereEmbeddingClient()
        assert client._client.headers["Authorization"] == "Bearer env-key"
        client.close()
