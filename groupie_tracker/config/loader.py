"""YAML configuration loader with environment variable overrides.

Layers, later ones win:

  1. ``config/config.yaml`` -- static defaults checked into the repo
  2. ``.env`` file         -- local overrides (not committed)
  3. Environment vars      -- deploy-time values

Only values that Settings knows about are overridden; YAML-only keys such
as ``search.suggestion_limit`` and ``catalog.join_mode`` pass through.
"""

from pathlib import Path

import yaml

from groupie_tracker.config.settings import Settings


def load_config(path: str = "config/config.yaml", settings: Settings | None = None) -> dict:
    """Load YAML config and merge with environment-based Settings.

    Args:
        path: Path to the YAML configuration file.  A missing file is
            treated as empty.
        settings: Settings instance to merge.  A fresh one is built when
            omitted.

    Returns:
        Fully resolved configuration dictionary.
    """
    config_path = Path(path)
    if config_path.exists():
        with open(config_path) as f:
            yaml_config = yaml.safe_load(f) or {}
    else:
        yaml_config = {}

    settings = settings or Settings()
    env_overrides = {
        "app": {
            "host": settings.app_host,
            "port": settings.app_port,
            "env": settings.app_env,
        },
        "catalog": {
            "sources": settings.source_urls(),
            "fetch_timeout": settings.fetch_timeout,
            "refresh_interval": settings.refresh_interval,
        },
        "logging": {
            "level": settings.log_level,
        },
    }

    _deep_merge(yaml_config, env_overrides)
    return yaml_config


def _deep_merge(base: dict, overrides: dict) -> None:
    """Recursively merge overrides into base dict, mutating base in place."""
    for key, value in overrides.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
