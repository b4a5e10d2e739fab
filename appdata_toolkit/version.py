"""Application version detection utilities.

Provides a single public function, ``get_app_version()``, used by the CLI.
"""

from __future__ import annotations

from importlib import metadata
from typing import Optional

_CACHED_VERSION: Optional[str] = None

DISTRIBUTION = "appdata-toolkit"


def get_app_version() -> str:
    """Return the version string (e.g., ``v1.2.3``).

    Installed: read the distribution metadata.
    Development fallback: return "vdev" when the package is not installed.
    """
    global _CACHED_VERSION
    if _CACHED_VERSION:
        return _CACHED_VERSION

    try:
        text = metadata.version(DISTRIBUTION)
    except metadata.PackageNotFoundError:
        text = ""

    _CACHED_VERSION = f"v{text}" if text else "vdev"
    return _CACHED_VERSION
