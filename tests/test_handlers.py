"""Tests for input discovery and PDF output placement."""

from pathlib import Path

import pytest

from einvoice_pdf.input_handler import InputHandler
from einvoice_pdf.output_handler import OutputHandler
from einvoice_pdf.utils.exceptions import InputDirectoryNotFoundError, InputError


def test_discover_is_sorted_and_case_insensitive(tmp_path):
    for name in ("b.xml", "A.XML", "c.Xml", "readme.md"):
        (tmp_path / name).write_text("<x/>", encoding="utf-8")

    names = [path.name for path in InputHandler().discover(tmp_path)]

    assert names == ["A.XML", "b.xml", "c.Xml"]


def test_discover_skips_directories_named_like_documents(tmp_path):
    (tmp_path / "folder.xml").mkdir()
    assert InputHandler().discover(tmp_path) == []


def test_validate_directory_missing(tmp_path):
    with pytest.raises(InputDirectoryNotFoundError) as exc_info:
        InputHandler().validate_directory(tmp_path / "missing")
    assert exc_info.value.details["directory"].endswith("missing")


def test_validate_directory_rejects_file(tmp_path):
    path = tmp_path / "file.xml"
    path.write_text("<x/>", encoding="utf-8")

    with pytest.raises(InputError):
        InputHandler().validate_directory(path)


def test_custom_extension_gets_leading_dot(tmp_path):
    assert InputHandler("EIX").extension == ".eix"


def test_output_handler_creates_directory(tmp_path):
    target_dir = tmp_path / "out" / "nested"
    OutputHandler(target_dir)
    assert target_dir.is_dir()


def test_output_path_uses_source_stem(tmp_path):
    handler = OutputHandler(tmp_path)
    assert handler.output_path_for(Path("/in/24322000000012345678.xml")) == tmp_path / "24322000000012345678.pdf"


def test_discard_stale_and_write(tmp_path):
    handler = OutputHandler(tmp_path)
    target = handler.output_path_for("doc.xml")
    target.write_bytes(b"old")

    handler.discard_stale(target)
    assert not target.exists()

    handler.discard_stale(target)
    handler.write(b"%PDF-1.4", target)
    assert target.read_bytes() == b"%PDF-1.4"
