# simsearch/cli/commands/query.py
"""
Query command: one similarity search from the shell.

Usage:
    simsearch query "What is X?" --index docs
    simsearch query "What is X?" --index docs --namespace kb --top-k 8 --min-score 75
    simsearch query "What is X?" --index docs --filter '{"source": "faq"}' --output document

Credentials come from the environment (PINECONE_API_KEY, or SIMSEARCH_API_KEY).
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

import typer

from simsearch.adapter import SimilaritySearchAdapter, encode_values
from simsearch.cli.ui import console, ui
from simsearch.config import load_config
from simsearch.core.exceptions import ConfigurationError, SimSearchError
from simsearch.embedding import create_embedding_plugin
from simsearch.host.credentials import EnvCredentialResolver
from simsearch.logging.logger import configure_logging, get_logger
from simsearch.logging.tags import CLI

logger = get_logger(__name__)


def _parse_filter(raw: Optional[str]) -> Optional[dict[str, Any]]:
    if not raw:
        return None
    try:
        value = json.loads(raw)
    except ValueError as exc:
        raise ConfigurationError(f"--filter is not valid JSON: {exc}") from exc
    if not isinstance(value, dict):
        raise ConfigurationError("--filter must be a JSON object")
    return value


def build_values(question: str, metadata_filter: Optional[dict[str, Any]], skip_search: bool) -> str:
    query: dict[str, Any] = {"skip_search": "true" if skip_search else "false"}
    if metadata_filter:
        query["filter"] = metadata_filter
    return encode_values({"question": question, "query": query})


class LazyEmbedder:
    """
    Builds the configured embedding plugin on first embed().

    A skipped search never calls embed(), so it never needs embedding
    credentials.
    """

    def __init__(self, plugin_name: str, kwargs: dict[str, Any]):
        self.plugin_name = plugin_name
        self.kwargs = kwargs
        self._plugin: Optional[Any] = None

    def embed(self, text: str) -> list[float]:
        if self._plugin is None:
            logger.debug(f"{CLI} Using embedding plugin '{self.plugin_name}'")
            self._plugin = create_embedding_plugin(self.plugin_name, **self.kwargs)
        return self._plugin.embed(text)

    def close(self) -> None:
        close = getattr(self._plugin, "close", None)
        if callable(close):
            close()
        self._plugin = None


def command(
    question: str,
    index: str,
    namespace: Optional[str] = None,
    filter: Optional[str] = None,
    top_k: Optional[int] = None,
    min_score: Optional[float] = None,
    output: str = "text",
    skip_search: bool = False,
    config: Optional[Path] = None,
    credential: Optional[str] = None,
    verbose: bool = False,
) -> None:
    configure_logging(logging.DEBUG if verbose else logging.WARNING)

    try:
        cfg = load_config(config)
        adapter = SimilaritySearchAdapter.from_config(cfg, EnvCredentialResolver())
        if credential:
            adapter.credential_name = credential

        embedder = LazyEmbedder(cfg.embedding.plugin_name, dict(cfg.embedding.kwargs))
        raw_params = {
            "embeddings": embedder,
            "index_name": index,
            "namespace": namespace,
            "top_k": top_k,
            "min_score": min_score,
            "values": build_values(question, _parse_filter(filter), skip_search),
        }
        try:
            result = adapter.run(raw_params, output=output)
        finally:
            embedder.close()
    except SimSearchError as e:
        ui.error(str(e))
        raise typer.Exit(code=1)

    if not result:
        ui.warning("No results")
        return

    if output == "document":
        console.print_json(result)
    else:
        typer.echo(result, nl=False)
