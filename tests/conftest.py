"""Test configuration and fixtures for the AppData toolkit tests.

Provides a fresh store and parser per test, plus helpers that write AppData
documents and desktop files into a temporary root.
"""

import pytest
import tempfile
import shutil
import logging
import textwrap
from pathlib import Path

# Add project root to path
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from appdata_toolkit.config import ConfigManager
from appdata_toolkit.core.store import MetadataStore

# Configure test logging
logging.basicConfig(
    level=logging.DEBUG,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path_factory, monkeypatch):
    """Point user overrides at an empty directory so only packaged defaults load."""
    monkeypatch.setenv("APPDATA_TOOLKIT_CONFIG_DIR", str(tmp_path_factory.mktemp("config")))
    ConfigManager.reset()
    yield
    ConfigManager.reset()


@pytest.fixture
def temp_dir():
    """Creates a temporary directory for test operations."""
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def store():
    """Creates an empty MetadataStore."""
    return MetadataStore()


@pytest.fixture
def write_file():
    """Returns a helper writing dedented text to a path, creating parents."""
    def _write(path: Path, text: str) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(text).lstrip("\n"), encoding="utf-8")
        return path
    return _write


@pytest.fixture
def desktop_root(temp_dir, write_file):
    """Returns a helper creating ``<root>/usr/share/applications/<name>``."""
    def _make(name: str, text: str) -> Path:
        return write_file(temp_dir / "usr" / "share" / "applications" / name, text)
    return _make
