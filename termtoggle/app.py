"""termtoggle: main application entry point."""

from __future__ import annotations

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

import yaml

from termtoggle.engine.config import TermConfig
from termtoggle.engine.yaml_config import discover_config_path, load_yaml_config


def _configure_logging(level_name: str) -> Path:
    """Send every record to a rotating file; the TUI owns the terminal."""
    log_dir = Path.home() / ".termtoggle" / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "termtoggle.log"

    root = logging.getLogger()
    root.setLevel(getattr(logging, level_name.upper(), logging.INFO))
    root.handlers.clear()
    formatter = logging.Formatter(
        "%(asctime)s %(levelname)s %(name)s [pid=%(process)d] %(message)s"
    )
    file_handler = RotatingFileHandler(
        log_file, maxBytes=2_000_000, backupCount=5, encoding="utf-8"
    )
    file_handler.setFormatter(formatter)
    root.addHandler(file_handler)
    return log_file


def _load_config(args) -> TermConfig:
    """Resolve the config file, then apply command-line overrides."""
    logger = logging.getLogger(__name__)
    config_path = args.config
    if config_path:
        logger.info(
            "Using explicit config path: %s (exists=%s)",
            config_path, Path(config_path).exists(),
        )
    else:
        discovered = discover_config_path()
        config_path = str(discovered) if discovered else None

    config = load_yaml_config(config_path) if config_path else TermConfig.from_env()

    if args.size is not None:
        config.default_size = args.size
    if args.shell:
        config.shell = args.shell
    if args.log_level:
        config.log_level = args.log_level
    if args.no_mapping:
        config.terminal_mapping = None
    config.validate()
    return config


def main() -> None:
    import argparse

    parser = argparse.ArgumentParser(
        prog="termtoggle",
        description="termtoggle: numbered, toggleable terminal sessions",
    )
    parser.add_argument(
        "--config", metavar="PATH",
        help="YAML config file (default: ./.termtoggle.yaml, then ~/.termtoggle/config.yaml)",
    )
    parser.add_argument(
        "--size", metavar="N", type=int,
        help="Height of new terminal splits (default: 12)",
    )
    parser.add_argument(
        "--shell", metavar="CMD",
        help="Shell command run in new terminals (default: $SHELL)",
    )
    parser.add_argument(
        "--log-level", metavar="LEVEL",
        help="Log level for ~/.termtoggle/logs/termtoggle.log",
    )
    parser.add_argument(
        "--no-mapping", action="store_true",
        help="Do not register the toggle key mapping",
    )
    args = parser.parse_args()

    log_level = args.log_level or os.getenv("TERMTOGGLE_LOG_LEVEL", "INFO")
    log_file = _configure_logging(log_level)
    logger = logging.getLogger(__name__)
    logger.info("Starting termtoggle cwd=%s log=%s", Path.cwd(), log_file)

    try:
        config = _load_config(args)
    except FileNotFoundError as exc:
        print(f"Error: config file not found: {exc.filename}", file=sys.stderr)
        sys.exit(2)
    except yaml.YAMLError as exc:
        print(f"Error: invalid config file: {exc}", file=sys.stderr)
        sys.exit(2)
    logging.getLogger().setLevel(getattr(logging, config.log_level, logging.INFO))

    # TUI mode
    from termtoggle.tui.app import TermToggleApp

    app = TermToggleApp(config=config, cwd=str(Path.cwd()))
    app.run()
    logger.info("termtoggle exited")


if __name__ == "__main__":
    main()
