"""YAML config loading with env var expansion.

Optional: the library never reads config files on its own. Callers that
want file-based settings pass the result to ``FSUpdater.from_config`` and
``NodeCache.from_config``.
"""

import logging
import os
import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from .models import MirrorConfig

_LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}


def load_config(cli_path: str | None = None) -> MirrorConfig:
    """Load config with resolution order: explicit > project-local > user-global > defaults."""
    config_paths = [
        Path(cli_path) if cli_path else None,
        Path("./fs-mirror.yaml"),
        Path.home() / ".fs-mirror" / "config.yaml",
    ]

    for path in config_paths:
        if path and path.exists():
            try:
                with open(path) as f:
                    raw = yaml.safe_load(f)
                if raw is None:
                    continue
                raw = _expand_env_vars(raw)
                return MirrorConfig(**raw)
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in {path}: {e}") from e
            except (ValidationError, TypeError) as e:
                raise ValueError(f"Invalid config in {path}: {e}") from e

    return MirrorConfig()


def _expand_env_vars(obj: object) -> object:
    """Recursively expand ${VAR} references in strings."""
    if isinstance(obj, str):
        return re.sub(r"\$\{(\w+)\}", lambda m: os.environ.get(m.group(1), ""), obj)
    elif isinstance(obj, dict):
        return {k: _expand_env_vars(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_vars(v) for v in obj]
    return obj


def configure_logging(config: MirrorConfig) -> logging.Logger:
    """Apply the configured level to the package logger.

    Handlers are left to the application.
    """
    logger = logging.getLogger("fsmirror_core")
    logger.setLevel(_LOG_LEVELS[config.log_level])
    return logger


# Default YAML template for a project-local fs-mirror.yaml
DEFAULT_CONFIG_TEMPLATE = """\
# fs-mirror.yaml

updater:
  # true: link files and directories to their sources
  # false: copy file contents, link directories as junctions
  # omit to probe the filesystem
  # symlink_mode: true
  retry: true                  # rebuild from scratch after a failed update

scanner:
  index_ttl: 5.0               # seconds a directory scan is reused

# Logging
log_level: "info"              # debug | info | warn | error
"""
