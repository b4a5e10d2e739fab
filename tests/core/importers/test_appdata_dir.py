import pytest

lxml = pytest.importorskip("lxml")

from appdata_toolkit.core.exceptions import AppdataSyntaxError, DirectoryOpenError, FileOpenError
from appdata_toolkit.core.importers import AppdataDirectoryImporter, build_owner_index
from appdata_toolkit.core.models import DirectoryOptions

APPDATA_DIR = "/usr/share/metainfo"


def _component(component_id, name=None):
    name_xml = f"<name>{name}</name>" if name else ""
    return f'<?xml version="1.0"?>\n<component><id>{component_id}</id>{name_xml}</component>\n'


@pytest.fixture
def metainfo(temp_dir, write_file):
    """Returns a helper writing files into ``<root>/usr/share/metainfo``."""
    def _make(name, text):
        return write_file(temp_dir / APPDATA_DIR.lstrip("/") / name, text)
    return _make


@pytest.fixture
def importer(store):
    return AppdataDirectoryImporter(store)


def test_can_import(importer):
    assert importer.can_import("foo.appdata.xml")
    assert importer.can_import("/x/y/foo.metainfo.xml")
    assert not importer.can_import(".hidden.appdata.xml")
    assert not importer.can_import("foo.xml")
    assert importer.get_supported_extensions() == [".appdata.xml", ".metainfo.xml"]


def test_scan_with_one_malformed_file(importer, store, temp_dir, metainfo):
    metainfo("a.appdata.xml", _component("a.desktop", "A"))
    metainfo("b.metainfo.xml", _component("b.desktop", "B"))
    metainfo("c.appdata.xml", "<component><name>C</name>")
    metainfo("notes.txt", "not xml")
    metainfo(".d.appdata.xml", _component("d.desktop", "D"))

    report = importer.import_directory(APPDATA_DIR, DirectoryOptions(root_path_prefix=str(temp_dir)))

    assert report.parsed == ["a.appdata.xml", "b.metainfo.xml"]
    assert len(report.failed) == 1
    assert isinstance(report.failed[0], AppdataSyntaxError)
    assert report.failed[0].file_path.endswith("c.appdata.xml")
    assert not report.ok
    assert sorted(r.name for r in store.records()) == ["application:A", "application:B"]
    assert store.finalize_count == 1


def test_source_filename_links(importer, store, temp_dir, metainfo):
    metainfo("org.example.Foo.metainfo.xml", _component("org.example.Foo.desktop"))
    importer.import_directory(APPDATA_DIR, DirectoryOptions(root_path_prefix=str(temp_dir)))
    rec = store.records()[0]
    assert rec.requires == ["org.example.Foo.metainfo.xml"]
    assert rec.provides[0] == "application-appdata(org.example.Foo.metainfo.xml)"


def test_desktop_fallback_enabled_in_batch(importer, store, temp_dir, metainfo, desktop_root):
    metainfo("foo.appdata.xml", _component("foo.desktop"))
    desktop_root("foo.desktop", "[Desktop Entry]\nName=Foo\nComment=Bar\n")
    importer.import_directory(APPDATA_DIR, DirectoryOptions(root_path_prefix=str(temp_dir)))
    rec = store.records()[0]
    assert rec.name == "application:Foo"
    assert rec.summary == "Bar"


def test_owner_index(store):
    owner = store.add_record()
    store.set_str(owner, "name", "foo-bin")
    store.add_str_array(owner, "files", "/usr/bin/foo")
    store.add_str_array(owner, "files", APPDATA_DIR + "/foo.appdata.xml")
    store.add_str_array(owner, "files", APPDATA_DIR + "/sub/bar.appdata.xml")
    store.add_str_array(owner, "files", "/usr/share/other/baz.metainfo.xml")
    other = store.add_record()
    store.add_str_array(other, "files", APPDATA_DIR + "/baz.metainfo.xml")

    assert build_owner_index(store, APPDATA_DIR + "/") == [
        (owner, "foo.appdata.xml"),
        (other, "baz.metainfo.xml"),
    ]


def test_scan_uses_owner_index(importer, store, temp_dir, metainfo):
    owner = store.add_record()
    store.set_str(owner, "name", "foo-bin")
    store.add_str_array(owner, "files", APPDATA_DIR + "/foo.appdata.xml")
    store.finalize_batch()
    metainfo("foo.appdata.xml", _component("foo.desktop", "Foo"))
    metainfo("bar.appdata.xml", _component("bar.desktop", "Bar"))

    report = importer.import_directory(
        APPDATA_DIR,
        DirectoryOptions(root_path_prefix=str(temp_dir), use_filelist_index=True),
    )

    by_name = {store.record(h).name: store.record(h) for h in report.handles}
    assert by_name["application:Foo"].requires == ["foo-bin"]
    assert "application-appdata(foo-bin)" in by_name["application:Foo"].provides
    assert by_name["application:Bar"].requires == ["bar.appdata.xml"]


def test_missing_directory(importer, temp_dir):
    report = importer.import_directory(str(temp_dir / "missing"))
    assert report.parsed == []
    assert isinstance(report.failed[0], DirectoryOpenError)


def test_unopenable_entry_reported(importer, store, temp_dir, metainfo):
    metainfo("a.appdata.xml", _component("a.desktop", "A"))
    (temp_dir / APPDATA_DIR.lstrip("/") / "dir.appdata.xml").mkdir()

    report = importer.import_directory(APPDATA_DIR, DirectoryOptions(root_path_prefix=str(temp_dir)))

    assert report.parsed == ["a.appdata.xml"]
    assert isinstance(report.failed[0], FileOpenError)
    assert [r.name for r in store.records()] == ["application:A"]


def test_deferred_finalize(importer, store, temp_dir, metainfo):
    metainfo("a.appdata.xml", _component("a.desktop", "A"))
    report = importer.import_directory(
        APPDATA_DIR, DirectoryOptions(root_path_prefix=str(temp_dir), defer_finalize=True)
    )
    assert store.records() == []
    assert store.is_pending(report.handles[0])
