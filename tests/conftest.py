# tests/conftest.py
"""
Shared fixtures.

Nothing here talks to a real vector database or embedding API: the
embedder and vector DB are in-memory dummies that record their calls.
"""

from __future__ import annotations

import json

import pytest

from simsearch.adapter.executor import QueryExecutor
from simsearch.core.models import Credentials
from simsearch.host.credentials import StaticCredentialResolver
from simsearch.vector_db.base import SearchResult


class DummyEmbedder:
    def __init__(self, vector=None):
        self.vector = vector or [0.1, 0.2, 0.3]
        self.calls = []

    def embed(self, text: str):
        self.calls.append(text)
        return list(self.vector)


class DummyVectorDB:
    """Records every search and returns canned hits."""

    instances = []

    def __init__(self, hits=None, **kwargs):
        self.hits = list(hits or [])
        self.kwargs = kwargs
        self.searches = []
        self.closed = 0
        DummyVectorDB.instances.append(self)

    def search(self, index_name, query_vector, limit, *, namespace=None, metadata_filter=None):
        self.searches.append(
            {
                "index_name": index_name,
                "query_vector": query_vector,
                "limit": limit,
                "namespace": namespace,
                "metadata_filter": metadata_filter,
            }
        )
        return list(self.hits)

    def close(self):
        self.closed += 1


def hit(text, score, **extra):
    payload = {"text": text, **extra}
    return SearchResult(id=f"id-{text}", score=score, payload=payload)


class RecordingFactory:
    """Stand-in for create_vector_db_plugin."""

    def __init__(self, hits=None):
        self.hits = hits or []
        self.calls = []
        self.dbs = []

    def __call__(self, plugin_name, **kwargs):
        self.calls.append((plugin_name, kwargs))
        db = DummyVectorDB(self.hits, **kwargs)
        self.dbs.append(db)
        return db


def values_payload(question="hello", filter=None, skip_search="false", **query_extra):
    query = {"skip_search": skip_search, **query_extra}
    if filter is not None:
        query["filter"] = filter
    return json.dumps({"question": question, "query": json.dumps(query)})


@pytest.fixture
def embedder():
    return DummyEmbedder()


@pytest.fixture
def factory():
    return RecordingFactory([hit("X", 0.9)])


@pytest.fixture
def executor(factory):
    return QueryExecutor(plugin_factory=factory)


@pytest.fixture
def credential_resolver():
    return StaticCredentialResolver({"pineconeApi": {"apiKey": "pk-test", "environment": "us-east-1"}})


@pytest.fixture
def credentials():
    return Credentials(api_key="pk-test", environment="us-east-1")
