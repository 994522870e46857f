# simsearch/host/node_registry.py
"""
Node descriptors and the registry interface a host runtime exposes.

The host owns discovery and UI rendering. This module only describes what a
node declares (inputs, outputs, credential) and offers an in-memory registry
for embedding hosts and the CLI.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Protocol, runtime_checkable

from simsearch.core.exceptions import DuplicateNodeError, NodeNotFoundError
from simsearch.logging.logger import get_logger
from simsearch.logging.tags import NODE

logger = get_logger(__name__)


@dataclass(frozen=True)
class NodeParam:
    label: str
    name: str
    type: str
    description: str = ""
    placeholder: Optional[str] = None
    optional: bool = False
    additional_params: bool = False


@dataclass(frozen=True)
class NodeOutput:
    label: str
    name: str
    base_classes: tuple[str, ...] = ()


@dataclass(frozen=True)
class NodeDescriptor:
    """
    Static description of a node.

    `factory` builds a fresh node instance; the registry never shares one
    instance across invocations.
    """

    label: str
    name: str
    version: float
    type: str
    category: str
    description: str
    base_classes: tuple[str, ...] = ()
    inputs: tuple[NodeParam, ...] = ()
    outputs: tuple[NodeOutput, ...] = ()
    credential_names: tuple[str, ...] = ()
    factory: Optional[Callable[[], Any]] = field(default=None, compare=False, repr=False)

    def input_names(self) -> List[str]:
        return [p.name for p in self.inputs]

    def output_names(self) -> List[str]:
        return [o.name for o in self.outputs]


@runtime_checkable
class NodeRegistry(Protocol):
    def register(self, descriptor: NodeDescriptor) -> None: ...


class InMemoryNodeRegistry:
    """Dict-backed NodeRegistry. Names are unique."""

    def __init__(self) -> None:
        self._nodes: Dict[str, NodeDescriptor] = {}

    def register(self, descriptor: NodeDescriptor) -> None:
        if descriptor.name in self._nodes:
            raise DuplicateNodeError(f"Node '{descriptor.name}' is already registered")
        self._nodes[descriptor.name] = descriptor
        logger.debug(f"{NODE} Registered node '{descriptor.name}' (v{descriptor.version})")

    def get(self, name: str) -> NodeDescriptor:
        try:
            return self._nodes[name]
        except KeyError:
            available = ", ".join(sorted(self._nodes)) or "<none>"
            raise NodeNotFoundError(
                f"Unknown node '{name}'. Available: {available}"
            ) from None

    def list(self) -> List[NodeDescriptor]:
        return [self._nodes[name] for name in sorted(self._nodes)]

    def __contains__(self, name: object) -> bool:
        return name in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)


__all__ = [
    "NodeParam",
    "NodeOutput",
    "NodeDescriptor",
    "NodeRegistry",
    "InMemoryNodeRegistry",
]
