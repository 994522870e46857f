# simsearch/cli/commands/nodes.py
"""
Nodes command: describe the built-in host nodes.

Usage:
    simsearch nodes
"""

from __future__ import annotations

from simsearch.cli.ui import console, ui
from simsearch.host.node import register_builtin_nodes
from simsearch.host.node_registry import InMemoryNodeRegistry


def command() -> None:
    registry = InMemoryNodeRegistry()
    register_builtin_nodes(registry)

    for node in registry.list():
        ui.header(node.label, f"{node.name} v{node.version} - {node.category}")

        table = ui.table("Input", "Type", "Optional", "Description")
        for param in node.inputs:
            table.add_row(param.name, param.type, "yes" if param.optional else "", param.description)
        console.print(table)

        ui.print(f"Outputs: {', '.join(node.output_names())}", "dim")
        ui.print(f"Credentials: {', '.join(node.credential_names)}", "dim")
