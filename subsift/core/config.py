"""Configuration management for SUBSIFT.

Loads configuration from config.yaml, with support for CLI overrides
and environment variables.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel, Field

from subsift.utils.http_client import DEFAULT_USER_AGENTS


class GeneralConfig(BaseModel):
    """HTTP behaviour shared by every source."""

    timeout: Optional[float] = None
    retries: int = Field(default=3, ge=1)
    retry_delay: float = Field(default=1.0, ge=0.0)
    user_agents: List[str] = Field(default_factory=lambda: list(DEFAULT_USER_AGENTS))
    proxy: Optional[str] = None
    verify_ssl: bool = True


class SourcesConfig(BaseModel):
    """Enable/disable the built-in sources."""

    anubis: bool = True
    crtsh: bool = True
    normalize_all: bool = False


class Config(BaseModel):
    """Top-level SUBSIFT configuration."""

    general: GeneralConfig = Field(default_factory=GeneralConfig)
    sources: SourcesConfig = Field(default_factory=SourcesConfig)


def load_config(config_path: Optional[str] = None) -> Config:
    """Load configuration from a YAML file, applying environment variable overrides.

    Args:
        config_path: Optional path to a YAML configuration file. Defaults to
                     ``config.yaml`` in the current working directory.

    Returns:
        Populated :class:`Config` instance.
    """
    path = Path(config_path) if config_path else Path("config.yaml")

    raw: Dict[str, Any] = {}
    if path.exists():
        with path.open("r", encoding="utf-8") as fh:
            raw = yaml.safe_load(fh) or {}

    # Environment variable overrides (SUBSIFT__SECTION__KEY=value)
    _apply_env_overrides(raw)

    return Config(**raw)


def _apply_env_overrides(raw: Dict[str, Any]) -> None:
    """Mutate *raw* in-place with values from environment variables.

    Environment variables follow the pattern ``SUBSIFT__<SECTION>__<KEY>``.
    For example ``SUBSIFT__GENERAL__RETRIES=5``.
    """
    prefix = "SUBSIFT__"
    for env_key, env_val in os.environ.items():
        if not env_key.startswith(prefix):
            continue
        parts = env_key[len(prefix):].lower().split("__")
        if len(parts) == 2:
            section, key = parts
            raw.setdefault(section, {})[key] = env_val
