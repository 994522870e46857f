# simsearch/host/credentials.py
"""
Credential resolution for vector-database connections.

The adapter never stores credentials. It asks a CredentialResolver for a
named credential once per invocation and forgets the result afterwards.

Rules:
- Resolution order per key:
  1. The credential store entry
  2. The node input of the same name (host fallback)
- Host key aliases are accepted ("pineconeApiKey" for "apiKey",
  "pineconeEnv" for "environment").
- Fail with actionable errors.
"""

from __future__ import annotations

import os
from typing import Any, Mapping, Optional, Protocol, runtime_checkable

from simsearch.core.exceptions import CredentialError
from simsearch.core.models import Credentials
from simsearch.logging.logger import get_logger
from simsearch.logging.tags import CREDENTIALS

logger = get_logger(__name__)

DEFAULT_CREDENTIAL_NAME = "pineconeApi"

API_KEY_PARAMS = ("apiKey", "pineconeApiKey")
ENVIRONMENT_PARAMS = ("environment", "pineconeEnv")

# Generic env fallbacks (lowest priority)
GENERIC_API_KEY_ENV = "SIMSEARCH_API_KEY"
GENERIC_ENVIRONMENT_ENV = "SIMSEARCH_ENVIRONMENT"

# credential name -> (api key env vars, environment env vars)
CREDENTIAL_ENV_MAP: dict[str, tuple[list[str], list[str]]] = {
    "pineconeApi": (["PINECONE_API_KEY"], ["PINECONE_ENVIRONMENT", "PINECONE_ENV"]),
    "qdrantApi": (["QDRANT_API_KEY"], ["QDRANT_URL"]),
}


@runtime_checkable
class CredentialResolver(Protocol):
    def resolve(self, name: str) -> Credentials: ...


def get_credential_param(
    keys: tuple[str, ...],
    credential_data: Mapping[str, Any],
    node_inputs: Optional[Mapping[str, Any]] = None,
) -> Optional[str]:
    """First non-empty value for any of `keys`, store first, node inputs second."""
    for source in (credential_data, node_inputs or {}):
        for key in keys:
            value = source.get(key)
            if value:
                return str(value)
    return None


def credentials_from_mapping(
    name: str,
    credential_data: Mapping[str, Any],
    node_inputs: Optional[Mapping[str, Any]] = None,
) -> Credentials:
    api_key = get_credential_param(API_KEY_PARAMS, credential_data, node_inputs)
    if not api_key:
        raise CredentialError(
            f"Credential '{name}' has no API key. Expected one of: {', '.join(API_KEY_PARAMS)}"
        )

    environment = get_credential_param(ENVIRONMENT_PARAMS, credential_data, node_inputs) or ""
    return Credentials(api_key=api_key, environment=environment)


class StaticCredentialResolver:
    """
    Resolver over an in-process credential store.

    Example:
        resolver = StaticCredentialResolver(
            {"pineconeApi": {"apiKey": "...", "environment": "us-east-1"}}
        )
    """

    def __init__(
        self,
        store: Mapping[str, Mapping[str, Any]],
        node_inputs: Optional[Mapping[str, Any]] = None,
    ):
        self._store = store
        self._node_inputs = node_inputs

    def resolve(self, name: str) -> Credentials:
        if name not in self._store and not self._node_inputs:
            known = ", ".join(sorted(self._store)) or "<none>"
            raise CredentialError(f"Unknown credential '{name}'. Known: {known}")

        logger.debug(f"{CREDENTIALS} Resolving credential '{name}' from static store")
        return credentials_from_mapping(name, self._store.get(name, {}), self._node_inputs)


class EnvCredentialResolver:
    """
    Resolver backed by environment variables.

    Resolution order:
      1. Credential-specific env vars (CREDENTIAL_ENV_MAP)
      2. SIMSEARCH_API_KEY / SIMSEARCH_ENVIRONMENT
    """

    def __init__(self, env: Optional[Mapping[str, str]] = None):
        self._env = os.environ if env is None else env

    def _first(self, names: list[str]) -> Optional[str]:
        for env_name in names:
            value = self._env.get(env_name)
            if value:
                logger.debug(f"{CREDENTIALS} Using env '{env_name}'")
                return value
        return None

    def resolve(self, name: str) -> Credentials:
        key_vars, env_vars = CREDENTIAL_ENV_MAP.get(name, ([], []))

        api_key = self._first(key_vars + [GENERIC_API_KEY_ENV])
        if not api_key:
            expected = ", ".join(key_vars + [GENERIC_API_KEY_ENV])
            raise CredentialError(f"API key for credential '{name}' not found. Set one of: {expected}")

        environment = self._first(env_vars + [GENERIC_ENVIRONMENT_ENV]) or ""
        return Credentials(api_key=api_key, environment=environment)


__all__ = [
    "DEFAULT_CREDENTIAL_NAME",
    "CredentialResolver",
    "get_credential_param",
    "credentials_from_mapping",
    "StaticCredentialResolver",
    "EnvCredentialResolver",
]
