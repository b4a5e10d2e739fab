from __future__ import annotations

"""Configuration loading and access helpers.

This module centralises the tunables of the toolkit (logging setup, parser
chunk size, desktop-file lookup location).  It loads YAML files packaged with
*appdata_toolkit* and optionally merges them with user overrides.

Override directory: ``$APPDATA_TOOLKIT_CONFIG_DIR`` when set, otherwise
``~/.appdata_toolkit/*.yml``.
"""

import importlib.resources as pkg_resources
import logging
import os
from pathlib import Path
from typing import Any, Dict

import yaml

logger = logging.getLogger(__name__)

__all__ = ["ConfigManager"]


def _get_user_config_dir() -> Path:
    """Get the directory holding user overrides."""
    override = os.environ.get("APPDATA_TOOLKIT_CONFIG_DIR")
    if override:
        return Path(override)
    return Path.home() / ".appdata_toolkit"


class _Singleton(type):
    _instance: "ConfigManager" | None = None

    def __call__(cls, *args, **kwargs):  # type: ignore[no-self-use]
        if cls._instance is None:
            cls._instance = super().__call__(*args, **kwargs)
        return cls._instance


class ConfigManager(metaclass=_Singleton):
    """Lazy-loads and exposes configuration sections as dictionaries."""

    _DEFAULT_FILENAMES = {
        "logging": "logging.yml",
        "parser": "parser.yml",
    }

    def __init__(self) -> None:
        self._data: Dict[str, Dict[str, Any]] = {}
        self._ensure_loaded()

    @classmethod
    def reset(cls) -> None:
        """Drop the cached instance so the next call reloads from disk."""
        cls._instance = None

    # ------------------------------------------------------------------
    # Public helpers
    # ------------------------------------------------------------------
    def get_logging_config(self) -> Dict[str, Any]:
        return self._data.get("logging", {})

    def get_parser_config(self) -> Dict[str, Any]:
        return self._data.get("parser", {})

    # ------------------------------------------------------------------
    # Internal loading logic
    # ------------------------------------------------------------------
    def _ensure_loaded(self) -> None:
        if self._data:
            return  # already loaded

        startup_summary = []
        user_config_dir = _get_user_config_dir()

        for key, filename in self._DEFAULT_FILENAMES.items():
            merged_cfg: Dict[str, Any] = {}
            status = "missing"

            # 1. load packaged default
            try:
                resource = pkg_resources.files(__package__).joinpath(filename)
                with resource.open("r", encoding="utf-8") as fh:
                    packaged_data = yaml.safe_load(fh) or {}
                    merged_cfg.update(packaged_data)
                    status = "loaded"
            except (FileNotFoundError, OSError):
                logger.error("Missing packaged config for %s (%s)", key, filename)
                status = "missing"
            except yaml.YAMLError as exc:
                logger.error("Invalid packaged config for %s (%s): %s", key, filename, exc)
                status = "invalid"

            # 2. load user overrides
            user_path = user_config_dir / filename
            if user_path.exists():
                try:
                    user_data = yaml.safe_load(user_path.read_text(encoding="utf-8")) or {}
                    merged_cfg.update(user_data)
                    if status == "loaded":
                        status = "loaded+overrides"
                except (OSError, yaml.YAMLError) as exc:
                    logger.error("Could not parse user config %s: %s", user_path, exc)

            self._data[key] = merged_cfg
            startup_summary.append(f"{key}: {status}")

        logger.debug("Config startup: %s", " | ".join(startup_summary))
