# simsearch/cli/commands/config.py
"""
Config command.

Usage:
    simsearch config                  # Summary table
    simsearch config --json           # Full resolved config as JSON
    simsearch config --path           # Location of the packaged defaults
    simsearch config -c my.yaml       # Defaults merged with a user file
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from simsearch.cli.ui import console, ui
from simsearch.config import DEFAULT_CONFIG_PATH, SimSearchConfig, load_config
from simsearch.core.exceptions import ConfigFileError


def _show_summary(cfg: SimSearchConfig) -> None:
    table = ui.table("Component", "Plugin", "Details")

    emb_model = cfg.embedding.kwargs.get("model", "")
    table.add_row("Vector DB", cfg.vector_db.plugin_name, ", ".join(sorted(cfg.vector_db.kwargs)))
    table.add_row("Embedding", cfg.embedding.plugin_name, str(emb_model))
    table.add_row("Credential", cfg.credential, "")
    table.add_row("Search", "", f"text_key={cfg.text_key}, top_k={cfg.default_top_k}")

    console.print(table)


def command(
    config_path: Optional[Path] = None,
    as_json: bool = False,
    show_path: bool = False,
) -> None:
    if show_path:
        typer.echo(str(DEFAULT_CONFIG_PATH))
        return

    try:
        cfg = load_config(config_path)
    except ConfigFileError as e:
        ui.error(str(e))
        raise typer.Exit(code=1)

    if as_json:
        typer.echo(cfg.model_dump_json(indent=2))
        return

    ui.header("simsearch configuration", str(config_path or DEFAULT_CONFIG_PATH))
    _show_summary(cfg)
