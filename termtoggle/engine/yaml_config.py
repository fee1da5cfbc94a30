"""YAML configuration loader.

Values from the ``terminal`` section override the environment-derived
defaults from TermConfig.from_env().

Example YAML:
    terminal:
      default_size: 15
      terminal_mapping: ctrl+backslash
      shell: /bin/zsh
      shade_terminals: true
      shading_factor: -30
      shade_filetypes: [none, fzf]
      log_level: DEBUG
"""
from __future__ import annotations

import logging
from dataclasses import fields
from pathlib import Path

import yaml

from .config import TermConfig

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".termtoggle.yaml"


def global_config_path() -> Path:
    """Return the per-user config path (~/.termtoggle/config.yaml)."""
    return Path.home() / ".termtoggle" / "config.yaml"


def discover_config_path(cwd: Path | None = None) -> Path | None:
    """Find ./.termtoggle.yaml, then ~/.termtoggle/config.yaml."""
    candidates = [(cwd or Path.cwd()) / CONFIG_FILENAME, global_config_path()]
    for candidate in candidates:
        if candidate.is_file():
            logger.info("Auto-discovered config: %s", candidate)
            return candidate
    logger.debug(
        "No config file found (tried %s); using environment only",
        ", ".join(str(c) for c in candidates),
    )
    return None


def load_yaml_config(path: str | Path, base: TermConfig | None = None) -> TermConfig:
    """Load the ``terminal`` section of *path* over *base* (or the env)."""
    path = Path(path)
    logger.info(
        "load_yaml_config: attempting to load config from %s (exists=%s)",
        path, path.exists(),
    )
    try:
        with open(path) as f:
            raw = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.error(
            "load_yaml_config: config file not found at %s (absolute path: %s)",
            path, path.absolute(),
        )
        raise
    except yaml.YAMLError as exc:
        logger.error("load_yaml_config: YAML parse error in %s: %s", path, exc)
        raise

    config = base or TermConfig.from_env()
    section = raw.get("terminal", {}) if isinstance(raw, dict) else {}
    if not isinstance(section, dict):
        logger.warning("load_yaml_config: 'terminal' in %s is not a mapping; ignored", path)
        section = {}

    known = {f.name for f in fields(TermConfig)}
    for key, value in section.items():
        if key not in known:
            logger.warning("load_yaml_config: unknown key terminal.%s in %s", key, path)
            continue
        setattr(config, key, value)
    config.validate()

    logger.info(
        "load_yaml_config: loaded %s (keys: %s)",
        path.name, ", ".join(sorted(section)) or "(none)",
    )
    return config
