import json

import pytest

lxml = pytest.importorskip("lxml")

from appdata_toolkit.cli import main


@pytest.fixture(autouse=True)
def log_dir(tmp_path, monkeypatch):
    monkeypatch.setenv("APPDATA_LOG_DIR", str(tmp_path / "logs"))


def test_files_to_json(temp_dir, capsys):
    path = temp_dir / "foo.appdata.xml"
    path.write_bytes(b"<component><id>foo.desktop</id><name>Foo</name></component>")
    assert main([str(path)]) == 0
    records = json.loads(capsys.readouterr().out)
    assert records == [{
        "name": "application:Foo",
        "arch": "noarch",
        "evr": "",
        "category": "desktop",
        "summary": None,
        "url": None,
        "description": None,
        "licenses": [],
        "groups": [],
        "extends": [],
        "keywords": [],
        "requires": ["foo.appdata.xml"],
        "provides": ["application-appdata(foo.appdata.xml)", "application:Foo = "],
    }]


def test_directory_with_failure(temp_dir, capsys):
    (temp_dir / "a.metainfo.xml").write_bytes(b"<component><name>A</name></component>")
    (temp_dir / "b.metainfo.xml").write_bytes(b"<component><name>B</name>")
    assert main(["-d", str(temp_dir)]) == 1
    captured = capsys.readouterr()
    assert [r["name"] for r in json.loads(captured.out)] == ["application:A"]
    assert "b.metainfo.xml" in captured.err


def test_desktop_fallback_flag(temp_dir, desktop_root, capsys):
    desktop_root("foo.desktop", "[Desktop Entry]\nName=Foo\nComment=Bar\n")
    doc = temp_dir / "foo.appdata.xml"
    doc.write_bytes(b"<component><id>foo.desktop</id></component>")
    assert main(["--desktop-fallback", "-r", str(temp_dir), str(doc)]) == 0
    [record] = json.loads(capsys.readouterr().out)
    assert record["name"] == "application:Foo"
    assert record["summary"] == "Bar"
