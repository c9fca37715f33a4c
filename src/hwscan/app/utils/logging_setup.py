"""
Module app.utils.logging_setup
------------------------------

This module provides logging configuration for HWSCAN. It uses the
logger_config.yaml file so the console and file handlers stay consistent
across the CLI and the embedded server.
"""

import logging
import logging.config
from pathlib import Path

import yaml

from hwscan.core.configuration import LoggingConfig

PACKAGED_CONFIG = Path(__file__).resolve().parent.parent.parent / "config" / "logger_config.yaml"


def find_logger_config(explicit: str | Path | None = None) -> Path:
    """
    Locate logger_config.yaml.

    Raises:
        FileNotFoundError: If no candidate exists.
    """
    config_paths = [
        Path.cwd() / "config" / "logger_config.yaml",  # Running from project root
        PACKAGED_CONFIG,  # Shipped with the package
    ]
    if explicit is not None:
        config_paths.insert(0, Path(explicit))

    for path in config_paths:
        if path.exists():
            return path

    raise FileNotFoundError("Could not find logger_config.yaml in expected locations.")


def setup_logging(settings: LoggingConfig | None = None, level: str | None = None) -> None:
    """
    Setup logging using logger_config.yaml.

    Args:
        settings (LoggingConfig | None): Config file override and log directory.
        level (str | None): Console level override (e.g. "DEBUG").
    """
    settings = settings or LoggingConfig()
    config_file = find_logger_config(settings.config_file)

    with open(config_file, encoding="utf-8") as f:
        config = yaml.safe_load(f)

    # Rewrite file handlers into the log directory; drop them if it cannot be created
    logs_dir = Path(settings.log_dir)
    file_handlers = [name for name, h in config.get("handlers", {}).items() if "filename" in h]
    try:
        if file_handlers:
            logs_dir.mkdir(parents=True, exist_ok=True)
        for name in file_handlers:
            handler_config = config["handlers"][name]
            handler_config["filename"] = str(logs_dir / Path(handler_config["filename"]).name)
    except OSError:
        for name in file_handlers:
            del config["handlers"][name]
        for logger_config in [config.get("root", {}), *config.get("loggers", {}).values()]:
            logger_config["handlers"] = [h for h in logger_config.get("handlers", []) if h not in file_handlers]
        file_handlers = []

    if level and "console" in config.get("handlers", {}):
        config["handlers"]["console"]["level"] = level.upper()

    logging.config.dictConfig(config)

    logger = logging.getLogger("app")
    logger.debug(f"Logging initialized from {config_file}")
    if file_handlers:
        logger.debug(f"Log directory: {logs_dir.resolve()}")


def get_app_logger(name: str) -> logging.Logger:
    """
    Get a logger for a specific component.

    Args:
        name: Logger name (e.g., 'app.cli', 'app.server')
    """
    return logging.getLogger(name)
