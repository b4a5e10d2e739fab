import io

import pytest

lxml = pytest.importorskip("lxml")

from appdata_toolkit import AppdataService, MetadataStore, ParseOptions, parse_directory, parse_document
from appdata_toolkit.core.exceptions import AppdataSyntaxError, FileOpenError

DOC = b"<component><id>foo.desktop</id><name>Foo</name><summary>Does foo</summary></component>"


def test_parse_document_from_path(temp_dir):
    path = temp_dir / "foo.appdata.xml"
    path.write_bytes(DOC)
    store = parse_document(path)
    [rec] = store.records()
    assert rec.name == "application:Foo"
    assert rec.summary == "Does foo"


def test_parse_document_from_stream_into_existing_store():
    store = MetadataStore()
    service = AppdataService(store)
    handles = service.parse_document(io.BytesIO(DOC), ParseOptions(source_filename="x.appdata.xml"))
    assert store.record(handles[0]).requires == ["x.appdata.xml"]
    assert parse_document(io.BytesIO(DOC), store=store) is store
    assert len(store.records()) == 2


def test_missing_file(temp_dir):
    with pytest.raises(FileOpenError):
        AppdataService().parse_document(temp_dir / "missing.appdata.xml")


def test_syntax_error_propagates():
    service = AppdataService()
    with pytest.raises(AppdataSyntaxError):
        service.parse_document(io.BytesIO(b"<component><name>Foo</component>"))
    assert service.store.records() == []


def test_parse_directory(temp_dir):
    (temp_dir / "foo.appdata.xml").write_bytes(DOC)
    (temp_dir / "bad.appdata.xml").write_bytes(b"<component>")
    store = MetadataStore()
    report = parse_directory(temp_dir, store=store)
    assert report.parsed == ["foo.appdata.xml"]
    assert len(report.failed) == 1
    assert [r.name for r in store.records()] == ["application:Foo"]
