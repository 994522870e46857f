# simsearch/cli/commands/plugins.py
"""
Plugins command: show registered vector-DB and embedding plugins.

Usage:
    simsearch plugins
    simsearch plugins --type vector_db
"""

from __future__ import annotations

from typing import Optional

import typer

from simsearch.cli.ui import console, ui
from simsearch.core.registry import PLUGIN_NAMESPACES, available_plugins, get_plugin


def _summary(cls: type) -> str:
    doc = cls.__doc__ or ""
    for line in doc.strip().splitlines():
        if line.strip():
            return line.strip()
    return ""


def command(type: Optional[str] = None) -> None:
    types = list(PLUGIN_NAMESPACES)
    if type:
        if type not in PLUGIN_NAMESPACES:
            ui.error(f"Unknown plugin type '{type}'. Choose from: {', '.join(types)}")
            raise typer.Exit(code=1)
        types = [type]

    table = ui.table("Type", "Name", "Description", title="Available plugins")
    for plugin_type in types:
        for name in available_plugins(plugin_type):
            table.add_row(plugin_type, name, _summary(get_plugin(name, plugin_type)))

    console.print(table)
