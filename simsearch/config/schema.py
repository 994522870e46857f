# simsearch/config/schema.py
"""
Pydantic schema for simsearch configuration.

All provider-specific settings are expressed as:
- plugin_name: plugin id in the central registry
- kwargs: arbitrary plugin init kwargs
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class PluginConfig(BaseModel):
    """Generic plugin configuration block."""

    plugin_name: str = Field(..., description="Plugin name in the central registry")
    kwargs: dict[str, Any] = Field(default_factory=dict, description="Plugin init kwargs")

    model_config = ConfigDict(extra="forbid")


class SimSearchConfig(BaseModel):
    """Fully resolved runtime configuration."""

    vector_db: PluginConfig
    embedding: PluginConfig
    credential: str = Field("pineconeApi", min_length=1)
    text_key: str = Field("text", min_length=1)
    default_top_k: int = Field(4, ge=1)
    log_matches: bool = True

    model_config = ConfigDict(extra="forbid")
