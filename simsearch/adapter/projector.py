# simsearch/adapter/projector.py
"""
Result projector: scored matches -> output string.

Pure function of its inputs; no I/O besides debug logging.
"""

from __future__ import annotations

import json
from typing import Iterable, List, Optional

from simsearch.adapter.escape import normalize_escapes
from simsearch.core.exceptions import ProjectionError
from simsearch.core.models import ProjectionMode, ScoredMatch
from simsearch.logging.logger import get_logger
from simsearch.logging.tags import PROJECTOR

logger = get_logger(__name__)

TEXT_METADATA_KEY = "text"


def _text_of(match: ScoredMatch) -> str:
    value = match.document.metadata.get(TEXT_METADATA_KEY)
    return "" if value is None else str(value)


def apply_threshold(
    matches: Iterable[ScoredMatch],
    min_score_fraction: Optional[float],
) -> List[ScoredMatch]:
    """Drop matches scoring strictly below the threshold. Order is preserved."""
    matches = list(matches)
    if not min_score_fraction:
        return matches
    return [m for m in matches if m.score >= min_score_fraction]


def project(
    matches: Iterable[ScoredMatch],
    mode: ProjectionMode,
    min_score_fraction: Optional[float] = None,
) -> str:
    try:
        kept = apply_threshold(matches, min_score_fraction)

        if mode is ProjectionMode.DOCUMENT_LIST:
            out = json.dumps(
                [m.document.to_dict() for m in kept],
                ensure_ascii=False,
                default=str,
            )
        else:
            text = "".join(f"{_text_of(m)}\n" for m in kept)
            out = normalize_escapes(text)
    except (AttributeError, TypeError, ValueError) as exc:
        raise ProjectionError(f"Failed to project matches as {mode.name}: {exc}") from exc

    logger.debug(f"{PROJECTOR} Projected {len(kept)} match(es) as {mode.name}")
    return out


__all__ = ["TEXT_METADATA_KEY", "apply_threshold", "project"]
