# simsearch/core/registry.py
"""
Plugin registry for vector-DB and embedding plugins.

Plugin modules self-register on import:

    register_plugin(PineconeVectorDB, plugin_name="pinecone", plugin_type="vector_db")

Lookups trigger a one-time auto-discovery that imports every module under the
known plugin namespaces.
"""

from __future__ import annotations

import importlib
import pkgutil
from dataclasses import dataclass
from typing import Any, Dict, List, Literal, Type

from simsearch.core.exceptions import PluginNotFoundError
from simsearch.logging.logger import get_logger
from simsearch.logging.tags import REGISTRY

logger = get_logger(__name__)

PluginType = Literal["vector_db", "embedding"]

PLUGIN_NAMESPACES: Dict[str, str] = {
    "vector_db": "simsearch.vector_db.plugins",
    "embedding": "simsearch.embedding.plugins",
}


@dataclass(frozen=True)
class PluginKey:
    name: str
    type: str


_PLUGINS: Dict[PluginKey, Type[Any]] = {}
_DISCOVERY_DONE: bool = False


def register_plugin(
    plugin_cls: Type[Any],
    *,
    plugin_name: str,
    plugin_type: PluginType,
) -> None:
    key = PluginKey(plugin_name, plugin_type)

    if key in _PLUGINS:
        logger.info(
            f"{REGISTRY} Overwriting plugin registration for "
            f"name='{plugin_name}', type='{plugin_type}'"
        )

    _PLUGINS[key] = plugin_cls
    logger.debug(
        f"{REGISTRY} Registered plugin name='{plugin_name}', "
        f"type='{plugin_type}', cls='{plugin_cls.__name__}'"
    )


def get_plugin(plugin_name: str, plugin_type: PluginType) -> Type[Any]:
    """
    Return the plugin class registered for (plugin_name, plugin_type).

    Example:
        PineconeCls = get_plugin("pinecone", "vector_db")
        db = PineconeCls(api_key="...")
    """
    if not _DISCOVERY_DONE:
        auto_discover_plugins()

    key = PluginKey(plugin_name, plugin_type)
    try:
        return _PLUGINS[key]
    except KeyError as exc:
        available = ", ".join(available_plugins(plugin_type)) or "<none>"
        raise PluginNotFoundError(
            f"No {plugin_type} plugin registered for name='{plugin_name}'. "
            f"Available: {available}"
        ) from exc


def available_plugins(plugin_type: PluginType) -> List[str]:
    if not _DISCOVERY_DONE:
        auto_discover_plugins()

    return sorted(k.name for k in _PLUGINS if k.type == plugin_type)


def auto_discover_plugins() -> None:
    """
    Import all modules under the plugin namespaces so that plugins can
    self-register via register_plugin().
    """
    global _DISCOVERY_DONE
    if _DISCOVERY_DONE:
        return

    for ns in PLUGIN_NAMESPACES.values():
        try:
            pkg = importlib.import_module(ns)
        except ModuleNotFoundError:
            continue

        if not hasattr(pkg, "__path__"):
            continue

        for module_info in pkgutil.iter_modules(pkg.__path__, prefix=f"{ns}."):
            try:
                importlib.import_module(module_info.name)
                logger.debug(f"{REGISTRY} Auto-discovered plugin module '{module_info.name}'")
            except Exception as exc:
                logger.warning(
                    f"{REGISTRY} Failed to import plugin module '{module_info.name}': {exc}"
                )

    _DISCOVERY_DONE = True


__all__ = [
    "PluginType",
    "register_plugin",
    "get_plugin",
    "available_plugins",
    "auto_discover_plugins",
]
