# simsearch/embedding/credentials.py
"""
API key resolution for embedding providers.

Rules:
- Plugins must NOT read environment variables directly.
- Resolution order:
  1. Explicit value
  2. Provider-specific env var
  3. Generic fallback env var
- Fail with actionable errors.
"""

from __future__ import annotations

import os
from typing import Optional

from simsearch.core.exceptions import CredentialError
from simsearch.logging.logger import get_logger
from simsearch.logging.tags import EMBEDDING

logger = get_logger(__name__)

GENERIC_API_KEY_ENV = "SIMSEARCH_EMBEDDING_API_KEY"

PROVIDER_ENV_MAP: dict[str, list[str]] = {
    "openai": ["OPENAI_API_KEY"],
    "cohere": ["COHERE_API_KEY", "CO_API_KEY"],
}


def resolve_api_key(*, provider: str, api_key: Optional[str] = None) -> str:
    if api_key:
        logger.debug(f"{EMBEDDING} Using explicit API key for provider '{provider}'")
        return api_key

    env_vars = PROVIDER_ENV_MAP.get(provider, [])
    for env_name in env_vars:
        value = os.getenv(env_name)
        if value:
            logger.debug(f"{EMBEDDING} Using API key from env '{env_name}' for '{provider}'")
            return value

    fallback = os.getenv(GENERIC_API_KEY_ENV)
    if fallback:
        logger.debug(f"{EMBEDDING} Using API key from env '{GENERIC_API_KEY_ENV}' for '{provider}'")
        return fallback

    expected = ", ".join(env_vars + [GENERIC_API_KEY_ENV])
    raise CredentialError(
        f"API key for embedding provider '{provider}' not found. "
        f"Set one of: {expected}, or pass api_key."
    )
