# simsearch/host/__init__.py
"""
Host runtime seams: credential resolution and node registration.

The node itself lives in simsearch.host.node.
"""

from simsearch.host.credentials import (
    DEFAULT_CREDENTIAL_NAME,
    CredentialResolver,
    EnvCredentialResolver,
    StaticCredentialResolver,
)
from simsearch.host.node_registry import (
    InMemoryNodeRegistry,
    NodeDescriptor,
    NodeOutput,
    NodeParam,
    NodeRegistry,
)

__all__ = [
    "DEFAULT_CREDENTIAL_NAME",
    "CredentialResolver",
    "EnvCredentialResolver",
    "StaticCredentialResolver",
    "InMemoryNodeRegistry",
    "NodeDescriptor",
    "NodeOutput",
    "NodeParam",
    "NodeRegistry",
]
