"""Configuration loaded from environment variables.

All settings have sensible defaults. Override via TERMTOGGLE_* env vars
or a YAML file (see yaml_config).
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field

from .models import DEFAULT_SIZE

logger = logging.getLogger(__name__)

_TRUTHY = {"1", "true", "yes", "on"}


def _default_shell() -> str:
    return os.environ.get("SHELL") or "/bin/sh"


@dataclass
class TermConfig:
    """Terminal session configuration."""

    # Height of a new bottom split, and of adopted terminal windows.
    default_size: int = DEFAULT_SIZE
    # Content types shaded in addition to terminal buffers.
    shade_filetypes: list[str] = field(default_factory=list)
    # Key that toggles terminals, globally and inside terminal buffers.
    # None disables both mappings.
    terminal_mapping: str | None = "ctrl+backslash"
    shade_terminals: bool = False
    # Percentage applied to the terminal background when shading.
    shading_factor: int = -30
    shell: str = field(default_factory=_default_shell)
    log_level: str = "INFO"

    def validate(self) -> None:
        """Replace out-of-range values with defaults."""
        if isinstance(self.default_size, bool) or not isinstance(self.default_size, int) \
                or self.default_size < 1:
            logger.warning(
                "TermConfig: invalid default_size %r; using %d",
                self.default_size, DEFAULT_SIZE,
            )
            self.default_size = DEFAULT_SIZE
        if isinstance(self.shade_filetypes, str):
            self.shade_filetypes = [self.shade_filetypes]
        if not isinstance(self.shade_filetypes, list):
            self.shade_filetypes = []
        cleaned: list[str] = []
        for ft in self.shade_filetypes:
            if isinstance(ft, str) and ft.strip() and ft.strip() not in cleaned:
                cleaned.append(ft.strip())
        self.shade_filetypes = cleaned
        if not self.terminal_mapping:
            self.terminal_mapping = None
        if not isinstance(self.shade_terminals, bool):
            self.shade_terminals = str(self.shade_terminals).lower() in _TRUTHY
        if isinstance(self.shading_factor, bool) or not isinstance(self.shading_factor, int) \
                or not -100 <= self.shading_factor <= 100:
            logger.warning(
                "TermConfig: invalid shading_factor %r; using -30", self.shading_factor,
            )
            self.shading_factor = -30
        if not self.shell:
            self.shell = _default_shell()
        self.log_level = str(self.log_level or "INFO").upper()

    @classmethod
    def from_env(cls) -> TermConfig:
        """Load configuration from TERMTOGGLE_* environment variables."""
        env_vars = {
            k: v for k, v in os.environ.items() if k.startswith("TERMTOGGLE_")
        }
        if env_vars:
            logger.info(
                "TermConfig.from_env: env overrides: %s",
                ", ".join(f"{k}={v}" for k, v in sorted(env_vars.items())),
            )
        else:
            logger.debug("TermConfig.from_env: no TERMTOGGLE_* env vars set, using defaults")

        try:
            default_size = int(os.getenv("TERMTOGGLE_SIZE", str(DEFAULT_SIZE)))
        except ValueError:
            logger.warning("TermConfig.from_env: TERMTOGGLE_SIZE is not an integer")
            default_size = DEFAULT_SIZE
        try:
            shading_factor = int(os.getenv("TERMTOGGLE_SHADING_FACTOR", "-30"))
        except ValueError:
            logger.warning("TermConfig.from_env: TERMTOGGLE_SHADING_FACTOR is not an integer")
            shading_factor = -30

        mapping = os.getenv("TERMTOGGLE_MAPPING")
        config = cls(
            default_size=default_size,
            shade_filetypes=[
                ft for ft in os.getenv("TERMTOGGLE_SHADE_FILETYPES", "").split(",")
                if ft.strip()
            ],
            terminal_mapping=cls.terminal_mapping if mapping is None else (mapping or None),
            shade_terminals=(
                os.getenv("TERMTOGGLE_SHADE_TERMINALS", "").lower() in _TRUTHY
            ),
            shading_factor=shading_factor,
            shell=os.getenv("TERMTOGGLE_SHELL") or _default_shell(),
            log_level=os.getenv("TERMTOGGLE_LOG_LEVEL", cls.log_level),
        )
        config.validate()
        logger.info(
            "TermConfig.from_env: size=%d mapping=%s shell=%s shade=%s",
            config.default_size, config.terminal_mapping,
            config.shell, config.shade_terminals,
        )
        return config
