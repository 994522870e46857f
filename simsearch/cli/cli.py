# simsearch/cli/cli.py
"""
simsearch CLI - main application.

Commands:
    simsearch query      Run one similarity search against an existing index
    simsearch plugins    List vector-DB and embedding plugins
    simsearch nodes      List host nodes and their inputs
    simsearch config     Show the resolved configuration

Commands import their implementation only when invoked.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

app = typer.Typer(
    name="simsearch",
    help="simsearch - similarity search against an existing vector index.",
    no_args_is_help=True,
    add_completion=False,
)


@app.command("query")
def query(
    question: str = typer.Argument("", help="Question to embed and search for."),
    index: str = typer.Option(..., "--index", "-i", help="Name of the existing index."),
    namespace: Optional[str] = typer.Option(None, "--namespace", "-n", help="Namespace inside the index."),
    filter: Optional[str] = typer.Option(None, "--filter", "-f", help="Metadata filter as a JSON object."),
    top_k: Optional[int] = typer.Option(None, "--top-k", "-k", help="Number of matches to fetch."),
    min_score: Optional[float] = typer.Option(None, "--min-score", "-m", help="Minimum score in percent (0-100)."),
    output: str = typer.Option("text", "--output", "-o", help="Output shape: 'document' or 'text'."),
    skip_search: bool = typer.Option(False, "--skip-search", help="Resolve only; return an empty result."),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="User YAML config."),
    credential: Optional[str] = typer.Option(None, "--credential", help="Credential name to resolve."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging."),
) -> None:
    """Run one similarity search and print the result."""
    from simsearch.cli.commands import query as mod

    mod.command(
        question=question,
        index=index,
        namespace=namespace,
        filter=filter,
        top_k=top_k,
        min_score=min_score,
        output=output,
        skip_search=skip_search,
        config=config,
        credential=credential,
        verbose=verbose,
    )


@app.command("plugins")
def plugins(
    type: Optional[str] = typer.Option(None, "--type", "-t", help="Filter by type (vector_db, embedding)."),
) -> None:
    """List available plugins."""
    from simsearch.cli.commands import plugins as mod

    mod.command(type=type)


@app.command("nodes")
def nodes() -> None:
    """List built-in host nodes."""
    from simsearch.cli.commands import nodes as mod

    mod.command()


@app.command("config")
def config(
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="User YAML config."),
    as_json: bool = typer.Option(False, "--json", help="Output as JSON."),
    show_path: bool = typer.Option(False, "--path", "-p", help="Show default config path."),
) -> None:
    """Show the resolved configuration."""
    from simsearch.cli.commands import config as mod

    mod.command(config_path=config_path, as_json=as_json, show_path=show_path)


if __name__ == "__main__":
    app()
