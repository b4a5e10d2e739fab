import logging

import pytest

from appdata_toolkit.config import ConfigManager
from appdata_toolkit.logging_config import setup_logging


def test_packaged_defaults():
    cfg = ConfigManager().get_parser_config()
    assert cfg["chunk_size"] == 8192
    assert cfg["applications_dir"] == "/usr/share/applications"
    assert cfg["desktop_entry_max_line"] == 1024
    assert ConfigManager().get_logging_config()["version"] == 1


def test_singleton():
    assert ConfigManager() is ConfigManager()


def test_user_overrides(tmp_path, monkeypatch):
    (tmp_path / "parser.yml").write_text("chunk_size: 16\n", encoding="utf-8")
    monkeypatch.setenv("APPDATA_TOOLKIT_CONFIG_DIR", str(tmp_path))
    ConfigManager.reset()
    cfg = ConfigManager().get_parser_config()
    assert cfg["chunk_size"] == 16
    assert cfg["applications_dir"] == "/usr/share/applications"


def test_parser_uses_config(tmp_path, monkeypatch, store):
    pytest.importorskip("lxml")
    from appdata_toolkit.core.parser import AppdataParser

    (tmp_path / "parser.yml").write_text("chunk_size: 32\napplications_dir: /opt/apps\n", encoding="utf-8")
    monkeypatch.setenv("APPDATA_TOOLKIT_CONFIG_DIR", str(tmp_path))
    ConfigManager.reset()
    parser = AppdataParser(store)
    assert parser.chunk_size == 32
    assert parser.applications_dir == "/opt/apps"
    assert AppdataParser(store, chunk_size=5).chunk_size == 5


def test_setup_logging(tmp_path, monkeypatch):
    monkeypatch.setenv("APPDATA_LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.setenv("APPDATA_DEBUG_MODULES", "appdata_toolkit.core.store")
    setup_logging("INFO")
    assert logging.getLogger("appdata_toolkit").level == logging.INFO
    assert logging.getLogger("appdata_toolkit.core.store").level == logging.DEBUG
    assert (tmp_path / "logs").is_dir()


def test_setup_logging_rejects_unknown_level(tmp_path, monkeypatch):
    monkeypatch.setenv("APPDATA_LOG_DIR", str(tmp_path / "logs"))
    with pytest.raises(ValueError):
        setup_logging("LOUD")
