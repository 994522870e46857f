# tests/test_config_loader.py
from __future__ import annotations

import pytest
import yaml

from simsearch.config import DEFAULT_CONFIG_PATH, deep_merge, load_config, load_yaml
from simsearch.core.exceptions import ConfigFileError, ConfigurationError


def test_default_config_loads_and_validates():
    cfg = load_config()

    assert cfg.vector_db.plugin_name == "pinecone"
    assert cfg.embedding.plugin_name == "openai"
    assert cfg.embedding.kwargs["model"] == "text-embedding-3-small"
    assert cfg.credential == "pineconeApi"
    assert cfg.text_key == "text"
    assert cfg.default_top_k == 4
    assert cfg.log_matches is True


def test_default_config_path_exists():
    assert DEFAULT_CONFIG_PATH.is_file()


def test_user_config_is_merged(tmp_path):
    user = tmp_path / "simsearch.yaml"
    user.write_text(
        yaml.safe_dump(
            {
                "vector_db": {"plugin_name": "qdrant", "kwargs": {"port": 6334}},
                "default_top_k": 10,
            }
        )
    )

    cfg = load_config(user)

    assert cfg.vector_db.plugin_name == "qdrant"
    assert cfg.vector_db.kwargs == {"port": 6334}
    assert cfg.embedding.plugin_name == "openai"
    assert cfg.default_top_k == 10


def test_env_placeholders_expanded(tmp_path, monkeypatch):
    monkeypatch.setenv("SIMSEARCH_TEST_HOST", "qdrant.internal")
    user = tmp_path / "simsearch.yaml"
    user.write_text("vector_db:\n  plugin_name: qdrant\n  kwargs:\n    host: ${SIMSEARCH_TEST_HOST}\n")

    cfg = load_config(user)

    assert cfg.vector_db.kwargs["host"] == "qdrant.internal"


def test_deep_merge():
    merged = deep_merge({"a": {"b": 1, "c": 2}, "d": 1}, {"a": {"c": 3}, "e": 4})
    assert merged == {"a": {"b": 1, "c": 3}, "d": 1, "e": 4}


def test_missing_file(tmp_path):
    with pytest.raises(ConfigFileError) as exc_info:
        load_yaml(tmp_path / "nope.yaml")
    assert "nope.yaml" in str(exc_info.value)


def test_directory_rejected(tmp_path):
    with pytest.raises(ConfigFileError):
        load_yaml(tmp_path)


def test_invalid_yaml(tmp_path):
    bad = tmp_path / "bad.yaml"
    bad.write_text("vector_db: [unclosed\n")
    with pytest.raises(ConfigFileError):
        load_yaml(bad)


def test_non_mapping_root(tmp_path):
    bad = tmp_path / "list.yaml"
    bad.write_text("- a\n- b\n")
    with pytest.raises(ConfigFileError):
        load_yaml(bad)


def test_validation_error_is_configuration_error(tmp_path):
    bad = tmp_path / "bad.yaml"
    bad.write_text("default_top_k: 0\nunknown_key: 1\n")

    with pytest.raises(ConfigurationError) as exc_info:
        load_config(bad)
    assert isinstance(exc_info.value, ConfigFileError)
