# tests/test_node.py
"""
Tests for the host node and the node registry.
"""

from __future__ import annotations

import json

import pytest

from simsearch.adapter.executor import QueryExecutor
from simsearch.core.exceptions import CredentialError, DuplicateNodeError, NodeNotFoundError
from simsearch.host.credentials import StaticCredentialResolver
from simsearch.host.node import (
    NodeData,
    PineconeExistingIndexNode,
    register_builtin_nodes,
    to_raw_params,
)
from simsearch.host.node_registry import InMemoryNodeRegistry, NodeRegistry
from tests.conftest import DummyEmbedder, RecordingFactory, hit, values_payload


def _node_data(**inputs):
    base = {
        "embeddings": DummyEmbedder(),
        "pineconeIndex": "docs",
        "values": values_payload("hello"),
    }
    base.update(inputs)
    return base


class TestNodeRegistry:
    def test_register_and_get(self):
        registry = InMemoryNodeRegistry()
        register_builtin_nodes(registry)

        node = registry.get("pineconeExistingIndexV2")

        assert node.category == "Vector Stores"
        assert node.input_names() == [
            "embeddings",
            "pineconeIndex",
            "pineconeNamespace",
            "pineconeMetadataFilter",
            "topK",
            "minScore",
            "values",
        ]
        assert node.output_names() == ["document", "text"]
        assert node.credential_names == ("pineconeApi",)
        assert "pineconeExistingIndexV2" in registry
        assert len(registry) == 1

    def test_duplicate(self):
        registry = InMemoryNodeRegistry()
        register_builtin_nodes(registry)
        with pytest.raises(DuplicateNodeError):
            register_builtin_nodes(registry)

    def test_unknown(self):
        with pytest.raises(NodeNotFoundError):
            InMemoryNodeRegistry().get("nope")

    def test_satisfies_protocol(self):
        assert isinstance(InMemoryNodeRegistry(), NodeRegistry)

    def test_factory_builds_node(self):
        registry = InMemoryNodeRegistry()
        register_builtin_nodes(registry)
        node = registry.get("pineconeExistingIndexV2").factory()
        assert isinstance(node, PineconeExistingIndexNode)


def test_to_raw_params_maps_host_names():
    raw = to_raw_params(
        {
            "embeddings": "E",
            "pineconeIndex": "idx",
            "pineconeNamespace": "ns",
            "pineconeMetadataFilter": "{}",
            "topK": "3",
            "minScore": 50,
            "values": "{}",
            "unrelated": 1,
        }
    )
    assert raw == {
        "embeddings": "E",
        "index_name": "idx",
        "namespace": "ns",
        "metadata_filter": "{}",
        "top_k": "3",
        "min_score": 50,
        "values": "{}",
    }


class TestNodeInit:
    def test_text_output(self, credential_resolver):
        factory = RecordingFactory([hit("X", 0.9)])
        node = PineconeExistingIndexNode(executor=QueryExecutor(plugin_factory=factory))

        out = node.init(
            NodeData(inputs=_node_data(pineconeNamespace="kb", topK="2"), outputs={"output": "text"}),
            credential_resolver,
        )

        assert out == "X\n"
        search = factory.dbs[0].searches[0]
        assert search["index_name"] == "docs"
        assert search["namespace"] == "kb"
        assert search["limit"] == 2

    def test_document_output(self, credential_resolver):
        factory = RecordingFactory([hit("X", 0.9)])
        node = PineconeExistingIndexNode(executor=QueryExecutor(plugin_factory=factory))

        out = node.init(NodeData(inputs=_node_data(), outputs={"output": "document"}), credential_resolver)

        assert json.loads(out)[0]["content"] == "X"

    def test_skip_search(self, credential_resolver):
        factory = RecordingFactory([hit("X", 0.9)])
        node = PineconeExistingIndexNode(executor=QueryExecutor(plugin_factory=factory))

        out = node.init(
            NodeData(inputs=_node_data(values=values_payload("hello", skip_search="true"))),
            credential_resolver,
        )

        assert out == ""
        assert factory.calls == []

    def test_credential_from_node_inputs(self):
        factory = RecordingFactory([hit("X", 0.9)])
        node = PineconeExistingIndexNode(executor=QueryExecutor(plugin_factory=factory))

        node.init(
            NodeData(inputs=_node_data(pineconeApiKey="node-key", pineconeEnv="gcp")),
            StaticCredentialResolver({}),
        )

        assert factory.calls[0][1] == {"api_key": "node-key", "environment": "gcp"}

    def test_environment_filled_from_node_inputs(self):
        factory = RecordingFactory([hit("X", 0.9)])
        node = PineconeExistingIndexNode(executor=QueryExecutor(plugin_factory=factory))

        node.init(
            NodeData(inputs=_node_data(pineconeEnv="gcp")),
            StaticCredentialResolver({"pineconeApi": {"apiKey": "store-key"}}),
        )

        assert factory.calls[0][1] == {"api_key": "store-key", "environment": "gcp"}

    def test_named_credential(self):
        factory = RecordingFactory([hit("X", 0.9)])
        node = PineconeExistingIndexNode(executor=QueryExecutor(plugin_factory=factory))
        resolver = StaticCredentialResolver({"team-pinecone": {"apiKey": "team-key"}})

        node.init(NodeData(inputs=_node_data(), credential="team-pinecone"), resolver)

        assert factory.calls[0][1]["api_key"] == "team-key"

    def test_no_credentials_anywhere(self):
        node = PineconeExistingIndexNode(executor=QueryExecutor(plugin_factory=RecordingFactory()))

        with pytest.raises(CredentialError):
            node.init(NodeData(inputs=_node_data()), StaticCredentialResolver({}))
