# simsearch/cli/__init__.py
from simsearch.cli.cli import app

__all__ = ["app"]
