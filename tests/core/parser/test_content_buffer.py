import pytest

from appdata_toolkit.core.parser.content_buffer import ContentBuffer


def test_append_and_clear():
    buf = ContentBuffer()
    buf.append("Hel")
    buf.append("")
    buf.append("lo")
    assert buf.value == "Hello"
    assert len(buf) == 5
    buf.clear()
    assert buf.value == ""
    assert len(buf) == 0


def test_insert_and_overwrite():
    buf = ContentBuffer()
    buf.append("abef")
    buf.insert(2, "cd")
    assert buf.value == "abcdef"
    buf.overwrite(0, "XY")
    assert buf.value == "XYcdef"
    buf.insert(6, "!")
    assert str(buf) == "XYcdef!"


def test_out_of_range_edits_rejected():
    buf = ContentBuffer()
    buf.append("ab")
    with pytest.raises(IndexError):
        buf.insert(3, "x")
    with pytest.raises(IndexError):
        buf.overwrite(1, "xyz")


def test_normalize_then_indent_in_place():
    buf = ContentBuffer()
    buf.append("  item\n  text ")
    buf.normalize_whitespace()
    assert buf.value == "item\ntext"
    buf.indent(4)
    assert buf.value == "    item\n    text"
    assert len(buf) == len(buf.value)
