from __future__ import annotations

"""Central logging configuration for the AppData toolkit.

Import and call :func:`setup_logging` at start-up (the CLI does this).
"""

import logging
import logging.config
import os
from typing import Optional

from appdata_toolkit.config import ConfigManager

__all__ = ["setup_logging"]


def setup_logging(level: Optional[str] = None) -> None:
    """Configure logging from the packaged/user YAML configuration.

    *level*, when given, overrides the level of the ``appdata_toolkit``
    logger and of the console handler.
    """
    log_dir = os.environ.get("APPDATA_LOG_DIR", "logs")
    log_file = os.path.join(log_dir, "app.log")

    try:
        logging_config = ConfigManager().get_logging_config()

        if logging_config and isinstance(logging_config, dict) and logging_config.get("version"):
            # Update the filename dynamically
            if "handlers" in logging_config and "file" in logging_config["handlers"]:
                os.makedirs(log_dir, exist_ok=True)
                logging_config["handlers"]["file"]["filename"] = log_file

            logging.config.dictConfig(logging_config)
            logging.getLogger(__name__).debug("Logging initialised from config files")
        else:
            _setup_minimal_logging()
    except (OSError, ValueError, TypeError) as exc:
        # dictConfig reports bad sections as ValueError
        print(f"Error loading logging config: {exc}")
        _setup_minimal_logging()

    if level:
        _apply_level(level)
    _apply_debug_overrides()


def _setup_minimal_logging() -> None:
    """Set up minimal console-only logging when config is unavailable."""
    minimal_config = {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'simple': {
                'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            },
        },
        'handlers': {
            'console': {
                'class': 'logging.StreamHandler',
                'formatter': 'simple',
                'level': 'WARNING',
            },
        },
        'root': {
            'level': 'WARNING',
            'handlers': ['console'],
        },
    }

    logging.config.dictConfig(minimal_config)
    logging.error("===== Logging initialised with minimal fallback (config error) =====")


def _apply_level(level: str) -> None:
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown log level: {level}")
    package_logger = logging.getLogger("appdata_toolkit")
    package_logger.setLevel(numeric)
    for handler in package_logger.handlers + logging.getLogger().handlers:
        if isinstance(handler, logging.StreamHandler) and not isinstance(handler, logging.FileHandler):
            handler.setLevel(numeric)


def _apply_debug_overrides() -> None:
    """Apply environment-driven module-specific debug overrides.

    Supports ``APPDATA_DEBUG_MODULES=comma,separated,logger,names`` which
    switches the listed loggers to DEBUG.
    """
    extra_modules = os.environ.get('APPDATA_DEBUG_MODULES', '').strip()
    targets = [m.strip() for m in extra_modules.split(',') if m.strip()]
    for name in targets:
        logger = logging.getLogger(name)
        logger.setLevel(logging.DEBUG)
        # Ensure at least one handler emits DEBUG for this logger
        has_debug_handler = any(h.level <= logging.DEBUG for h in logger.handlers)
        if not has_debug_handler:
            h = logging.StreamHandler()
            h.setLevel(logging.DEBUG)
            fmt = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
            h.setFormatter(fmt)
            logger.addHandler(h)
        logger.info("Debug override active for logger '%s'", name)
