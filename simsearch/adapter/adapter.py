# simsearch/adapter/adapter.py
"""
SimilaritySearchAdapter: one invocation = resolve -> execute -> project.

States:
    RESOLVING -> SHORT_CIRCUIT -> DONE
    RESOLVING -> EXECUTING -> PROJECTING -> DONE
    any state -> FAILED (error propagates, no retry)

Credentials are looked up on entry to EXECUTING only, so a skipped search
never touches the credential store or the database.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional

from simsearch.adapter.executor import QueryExecutor
from simsearch.adapter.projector import project
from simsearch.adapter.resolver import resolve
from simsearch.config.schema import SimSearchConfig
from simsearch.core.models import DEFAULT_TOP_K, ProjectionMode
from simsearch.host.credentials import DEFAULT_CREDENTIAL_NAME, CredentialResolver
from simsearch.logging.logger import get_logger
from simsearch.logging.tags import ADAPTER

logger = get_logger(__name__)


class AdapterState(str, Enum):
    RESOLVING = "resolving"
    SHORT_CIRCUIT = "short_circuit"
    EXECUTING = "executing"
    PROJECTING = "projecting"
    DONE = "done"
    FAILED = "failed"


@dataclass
class SimilaritySearchAdapter:
    """
    Stateless retrieval adapter.

    Nothing survives between calls: the descriptor, credentials, plugin
    handle and matches all live for a single run().

    Example:
        adapter = SimilaritySearchAdapter(credential_resolver=EnvCredentialResolver())
        text = adapter.run(
            {"embeddings": embedder, "index_name": "docs", "values": payload},
            output="text",
        )
    """

    credential_resolver: CredentialResolver
    executor: QueryExecutor = field(default_factory=QueryExecutor)
    credential_name: str = DEFAULT_CREDENTIAL_NAME
    default_top_k: int = DEFAULT_TOP_K

    @classmethod
    def from_config(
        cls,
        config: SimSearchConfig,
        credential_resolver: CredentialResolver,
    ) -> "SimilaritySearchAdapter":
        executor = QueryExecutor(
            plugin_name=config.vector_db.plugin_name,
            plugin_kwargs=dict(config.vector_db.kwargs),
            text_key=config.text_key,
            log_matches=config.log_matches,
        )
        return cls(
            credential_resolver=credential_resolver,
            executor=executor,
            credential_name=config.credential,
            default_top_k=config.default_top_k,
        )

    def _enter(self, state: AdapterState) -> AdapterState:
        logger.debug(f"{ADAPTER} -> {state.name}")
        return state

    def run(self, raw_params: Mapping[str, Any], output: Optional[str] = None) -> str:
        """
        Run one invocation and return the projected string.

        `output` is the caller's declared output port: "document" yields a
        JSON document list, anything else the concatenated text.

        Raises:
            ConfigurationError: malformed input or unresolvable credentials
            ExecutionError: database or embeddings failure
            ProjectionError: matches could not be rendered
        """
        state = self._enter(AdapterState.RESOLVING)
        try:
            descriptor = resolve(raw_params, self.default_top_k)

            if descriptor.skip_search:
                state = self._enter(AdapterState.SHORT_CIRCUIT)
                logger.info(f"{ADAPTER} Search skipped for index='{descriptor.index_name}'")
                self._enter(AdapterState.DONE)
                return ""

            state = self._enter(AdapterState.EXECUTING)
            credentials = self.credential_resolver.resolve(self.credential_name)
            matches = self.executor.execute(descriptor, credentials, raw_params["embeddings"])

            state = self._enter(AdapterState.PROJECTING)
            result = project(
                matches,
                ProjectionMode.from_output(output),
                descriptor.min_score_fraction,
            )
        except Exception as exc:
            self._enter(AdapterState.FAILED)
            logger.error(f"{ADAPTER} Invocation failed in {state.name}: {exc}")
            raise

        self._enter(AdapterState.DONE)
        return result

    async def arun(self, raw_params: Mapping[str, Any], output: Optional[str] = None) -> str:
        """Same as run(), executed in a worker thread."""
        return await asyncio.to_thread(self.run, raw_params, output)


__all__ = ["AdapterState", "SimilaritySearchAdapter"]
