# simsearch/config/loader.py
"""
Configuration loader for simsearch.

Responsibilities:
- Load the packaged default config
- Deep-merge an optional user config over it
- Expand ${ENV_VAR} placeholders
- Validate the result via SimSearchConfig
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import ValidationError

from simsearch.config.schema import SimSearchConfig
from simsearch.core.exceptions import ConfigFileError
from simsearch.logging.logger import get_logger
from simsearch.logging.tags import CONFIG

logger = get_logger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent / "default.yaml"


def _expand_env(value: Any) -> Any:
    if isinstance(value, str):
        return os.path.expandvars(value)
    if isinstance(value, dict):
        return {k: _expand_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_expand_env(v) for v in value]
    return value


def deep_merge(a: dict[str, Any], b: dict[str, Any]) -> dict[str, Any]:
    out = dict(a)
    for k, v in b.items():
        if k in out and isinstance(out[k], dict) and isinstance(v, dict):
            out[k] = deep_merge(out[k], v)
        else:
            out[k] = v
    return out


def load_yaml(path: Union[str, Path]) -> dict[str, Any]:
    p = Path(path)

    if not p.exists():
        raise ConfigFileError("Config file not found", path=p)
    if p.is_dir():
        raise ConfigFileError("Config path is a directory, not a file", path=p)

    try:
        with p.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigFileError(f"Invalid YAML syntax: {e}", path=p) from e

    if not isinstance(data, dict):
        raise ConfigFileError("Config root must be a mapping (dict)", path=p)

    return _expand_env(data)


def load_config(user_config_path: Optional[Union[str, Path]] = None) -> SimSearchConfig:
    """
    Load and validate runtime configuration.

    Flow:
    1. Load default config
    2. Merge user config
    3. Validate
    """
    logger.debug(f"{CONFIG} Loading default config from {DEFAULT_CONFIG_PATH}")
    raw = load_yaml(DEFAULT_CONFIG_PATH)

    if user_config_path:
        logger.debug(f"{CONFIG} Loading user config from {user_config_path}")
        raw = deep_merge(raw, load_yaml(user_config_path))

    try:
        return SimSearchConfig.model_validate(raw)
    except ValidationError as e:
        path = Path(user_config_path) if user_config_path else None
        raise ConfigFileError(f"Invalid configuration: {e}", path=path) from e
