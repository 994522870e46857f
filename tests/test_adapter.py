# tests/test_adapter.py
"""
End-to-end adapter behaviour with in-memory collaborators.
"""

from __future__ import annotations

import asyncio
import json
from unittest.mock import MagicMock

import pytest

from simsearch.adapter.adapter import SimilaritySearchAdapter
from simsearch.adapter.executor import QueryExecutor
from simsearch.config.schema import PluginConfig, SimSearchConfig
from simsearch.core.exceptions import (
    ConfigurationError,
    CredentialError,
    IndexNotFoundError,
    SimSearchError,
)
from simsearch.host.credentials import StaticCredentialResolver
from tests.conftest import DummyEmbedder, RecordingFactory, hit, values_payload


def _params(values, **overrides):
    params = {"embeddings": DummyEmbedder(), "index_name": "docs", "values": values}
    params.update(overrides)
    return params


def test_text_output_for_single_match(credential_resolver, factory):
    adapter = SimilaritySearchAdapter(
        credential_resolver=credential_resolver,
        executor=QueryExecutor(plugin_factory=factory),
    )
    values = values_payload("hello", filter={"a": 1}, skip_search="false")

    assert adapter.run(_params(values), output="text") == "X\n"
    assert factory.dbs[0].searches[0]["metadata_filter"] == {"a": 1}


def test_skip_search_returns_empty_without_executing(credential_resolver):
    executor = MagicMock(spec=QueryExecutor)
    resolver = MagicMock(wraps=credential_resolver)
    adapter = SimilaritySearchAdapter(credential_resolver=resolver, executor=executor)
    values = values_payload("hello", filter={"a": 1}, skip_search="true")

    assert adapter.run(_params(values), output="text") == ""
    executor.execute.assert_not_called()
    resolver.resolve.assert_not_called()


def test_min_score_filters_results(credential_resolver):
    factory = RecordingFactory([hit("good", 0.9), hit("bad", 0.5)])
    adapter = SimilaritySearchAdapter(
        credential_resolver=credential_resolver,
        executor=QueryExecutor(plugin_factory=factory),
    )

    out = adapter.run(_params(values_payload(), min_score=75), output="text")

    assert out == "good\n"


def test_document_output(credential_resolver):
    factory = RecordingFactory([hit("a", 0.9, source="faq")])
    adapter = SimilaritySearchAdapter(
        credential_resolver=credential_resolver,
        executor=QueryExecutor(plugin_factory=factory),
    )

    out = adapter.run(_params(values_payload()), output="document")

    assert json.loads(out) == [{"content": "a", "metadata": {"text": "a", "source": "faq"}}]


def test_top_k_limits_results(credential_resolver):
    factory = RecordingFactory([hit(f"d{i}", 0.9) for i in range(10)])
    adapter = SimilaritySearchAdapter(
        credential_resolver=credential_resolver,
        executor=QueryExecutor(plugin_factory=factory),
    )

    out = adapter.run(_params(values_payload(), top_k=4))

    assert out == "d0\nd1\nd2\nd3\n"
    assert factory.dbs[0].searches[0]["limit"] == 4


def test_configuration_error_before_any_io(credential_resolver):
    executor = MagicMock(spec=QueryExecutor)
    adapter = SimilaritySearchAdapter(credential_resolver=credential_resolver, executor=executor)

    with pytest.raises(ConfigurationError):
        adapter.run(_params(values_payload(), index_name=""))
    executor.execute.assert_not_called()


def test_unknown_credential(factory):
    adapter = SimilaritySearchAdapter(
        credential_resolver=StaticCredentialResolver({}),
        executor=QueryExecutor(plugin_factory=factory),
    )

    with pytest.raises(CredentialError):
        adapter.run(_params(values_payload()))
    assert factory.calls == []


def test_execution_errors_propagate(credential_resolver):
    class MissingIndexDB:
        def search(self, index_name, *args, **kwargs):
            raise IndexNotFoundError(index_name)

    adapter = SimilaritySearchAdapter(
        credential_resolver=credential_resolver,
        executor=QueryExecutor(plugin_factory=lambda name, **kw: MissingIndexDB()),
    )

    with pytest.raises(SimSearchError) as exc_info:
        adapter.run(_params(values_payload()))
    assert isinstance(exc_info.value, IndexNotFoundError)


def test_from_config(credential_resolver):
    config = SimSearchConfig(
        vector_db=PluginConfig(plugin_name="qdrant", kwargs={"port": 6334}),
        embedding=PluginConfig(plugin_name="openai"),
        credential="qdrantApi",
        text_key="body",
        default_top_k=6,
        log_matches=False,
    )

    adapter = SimilaritySearchAdapter.from_config(config, credential_resolver)

    assert adapter.credential_name == "qdrantApi"
    assert adapter.default_top_k == 6
    assert adapter.executor.plugin_name == "qdrant"
    assert adapter.executor.plugin_kwargs == {"port": 6334}
    assert adapter.executor.text_key == "body"
    assert adapter.executor.log_matches is False


def test_arun_matches_run(credential_resolver, factory):
    adapter = SimilaritySearchAdapter(
        credential_resolver=credential_resolver,
        executor=QueryExecutor(plugin_factory=factory),
    )

    out = asyncio.run(adapter.arun(_params(values_payload()), output="text"))

    assert out == "X\n"
