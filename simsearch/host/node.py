# simsearch/host/node.py
"""
Host-facing node: "Pinecone Load Existing Index".

Translates the host's node data (input names as the host declares them)
into adapter parameters and returns the adapter's string.

Input mapping:
    embeddings              -> embeddings
    pineconeIndex           -> index_name
    pineconeNamespace       -> namespace
    pineconeMetadataFilter  -> metadata_filter
    topK                    -> top_k
    minScore                -> min_score
    values                  -> values

The output port comes from `outputs["output"]` ("document" or "text").
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Mapping, Optional

from simsearch.adapter.adapter import SimilaritySearchAdapter
from simsearch.adapter.executor import QueryExecutor
from simsearch.core.exceptions import CredentialError
from simsearch.core.models import Credentials
from simsearch.host.credentials import (
    DEFAULT_CREDENTIAL_NAME,
    ENVIRONMENT_PARAMS,
    CredentialResolver,
    credentials_from_mapping,
    get_credential_param,
)
from simsearch.host.node_registry import NodeDescriptor, NodeOutput, NodeParam, NodeRegistry
from simsearch.logging.logger import get_logger
from simsearch.logging.tags import NODE

logger = get_logger(__name__)

NODE_INPUT_MAP: Dict[str, str] = {
    "embeddings": "embeddings",
    "pineconeIndex": "index_name",
    "pineconeNamespace": "namespace",
    "pineconeMetadataFilter": "metadata_filter",
    "topK": "top_k",
    "minScore": "min_score",
    "values": "values",
}

BASE_CLASSES = ("Pinecone", "VectorStoreRetriever", "BaseRetriever")


@dataclass
class NodeData:
    """What the host hands a node on each invocation."""

    inputs: Dict[str, Any] = field(default_factory=dict)
    outputs: Dict[str, Any] = field(default_factory=dict)
    credential: Optional[str] = None


class _NodeInputFallbackResolver:
    """
    Wraps a host resolver so keys missing from the credential store are
    read from node inputs of the same name.
    """

    def __init__(self, inner: CredentialResolver, node_inputs: Mapping[str, Any]):
        self._inner = inner
        self._node_inputs = node_inputs

    def resolve(self, name: str) -> Credentials:
        try:
            creds = self._inner.resolve(name)
        except CredentialError:
            logger.debug(f"{NODE} Credential '{name}' not in store, trying node inputs")
            return credentials_from_mapping(name, {}, self._node_inputs)

        if not creds.environment:
            environment = get_credential_param(ENVIRONMENT_PARAMS, {}, self._node_inputs)
            if environment:
                creds = replace(creds, environment=environment)
        return creds


def to_raw_params(inputs: Mapping[str, Any]) -> Dict[str, Any]:
    return {param: inputs.get(host_name) for host_name, param in NODE_INPUT_MAP.items()}


def _build_descriptor() -> NodeDescriptor:
    return NodeDescriptor(
        label="Pinecone Load Existing Index - V2",
        name="pineconeExistingIndexV2",
        version=1.0,
        type="Pinecone",
        category="Vector Stores",
        description="Load existing index from Pinecone (i.e: Document has been upserted)",
        base_classes=BASE_CLASSES,
        inputs=(
            NodeParam(label="Embeddings", name="embeddings", type="Embeddings"),
            NodeParam(label="Pinecone Index", name="pineconeIndex", type="string"),
            NodeParam(
                label="Pinecone Namespace",
                name="pineconeNamespace",
                type="string",
                placeholder="my-first-namespace",
                optional=True,
                additional_params=True,
            ),
            NodeParam(
                label="Pinecone Metadata Filter",
                name="pineconeMetadataFilter",
                type="json",
                optional=True,
                additional_params=True,
            ),
            NodeParam(
                label="Top K",
                name="topK",
                type="number",
                description="Number of top results to fetch. Default to 4",
                placeholder="4",
                optional=True,
                additional_params=True,
            ),
            NodeParam(
                label="Minimum Score (%)",
                name="minScore",
                type="number",
                description="Minimum score for embeddings documents to be included",
                placeholder="75",
                optional=True,
            ),
            NodeParam(
                label="Query Values",
                name="values",
                type="json",
                description="JSON payload with question, query.filter and query.skip_search",
                optional=True,
            ),
        ),
        outputs=(
            NodeOutput(label="Document", name="document", base_classes=BASE_CLASSES),
            NodeOutput(label="Text", name="text", base_classes=("string", "json")),
        ),
        credential_names=(DEFAULT_CREDENTIAL_NAME,),
        factory=PineconeExistingIndexNode,
    )


class PineconeExistingIndexNode:
    """
    Stateless node. Each init() builds a fresh adapter around the injected
    executor (or a default Pinecone one).
    """

    def __init__(self, executor: Optional[QueryExecutor] = None):
        self.executor = executor

    @property
    def descriptor(self) -> NodeDescriptor:
        return _build_descriptor()

    def init(self, node_data: NodeData, credential_resolver: CredentialResolver) -> str:
        credential_name = node_data.credential or DEFAULT_CREDENTIAL_NAME
        output = (node_data.outputs or {}).get("output")

        logger.info(
            f"{NODE} pineconeExistingIndexV2 index='{node_data.inputs.get('pineconeIndex')}' "
            f"output='{output or 'text'}'"
        )

        adapter = SimilaritySearchAdapter(
            credential_resolver=_NodeInputFallbackResolver(credential_resolver, node_data.inputs),
            executor=self.executor or QueryExecutor(),
            credential_name=credential_name,
        )
        return adapter.run(to_raw_params(node_data.inputs), output=output)


def register_builtin_nodes(registry: NodeRegistry) -> None:
    registry.register(_build_descriptor())


__all__ = [
    "NODE_INPUT_MAP",
    "NodeData",
    "PineconeExistingIndexNode",
    "to_raw_params",
    "register_builtin_nodes",
]
