import os
import sys
from pathlib import Path

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from tag_extractor.application.errors import PathOutsideDataDirError, ReadFailure, WriteFailure
from tag_extractor.application.services.file_access import FileAccessService


def test_read_lines_returns_lines_without_terminators(tmp_path):
    f = tmp_path / "doc.txt"
    f.write_text("first line\r\nsecond\n\nlast", encoding="utf-8")
    assert FileAccessService().read_lines(f) == ["first line", "second", "", "last"]


def test_read_lines_missing_file(tmp_path):
    with pytest.raises(ReadFailure) as exc:
        FileAccessService().read_lines(tmp_path / "missing.txt")
    assert exc.value.path == tmp_path / "missing.txt"


def test_read_lines_directory_is_read_failure(tmp_path):
    with pytest.raises(ReadFailure):
        FileAccessService().read_lines(tmp_path)


def test_read_lines_invalid_utf8(tmp_path):
    f = tmp_path / "latin1.txt"
    f.write_bytes(b"caf\xe9 au lait")
    with pytest.raises(ReadFailure) as exc:
        FileAccessService().read_lines(f)
    assert "utf-8" in exc.value.reason


def test_normalize_report_path():
    files = FileAccessService()
    assert files.normalize_report_path("out/tags") == Path("out/tags.txt")
    assert files.normalize_report_path("tags.txt") == Path("tags.txt")
    assert files.normalize_report_path("TAGS.TXT") == Path("TAGS.TXT")
    assert files.normalize_report_path("tags.csv") == Path("tags.csv.txt")


def test_write_report_appends_extension_and_truncates(tmp_path):
    files = FileAccessService()
    target = tmp_path / "report"
    (tmp_path / "report.txt").write_text("old content that is longer than the new one\n")

    out = files.write_report(target, "Tags for file: a\n===\nant : 1\n")

    assert out == (tmp_path / "report.txt").absolute()
    assert out.read_bytes() == b"Tags for file: a\n===\nant : 1\n"


def test_write_report_into_missing_directory(tmp_path):
    with pytest.raises(WriteFailure):
        FileAccessService().write_report(tmp_path / "nope" / "tags.txt", "x\n")


def test_resolve_confines_paths_to_data_dir(tmp_path):
    files = FileAccessService(data_dir=tmp_path)
    assert files.resolve("doc.txt") == tmp_path.resolve() / "doc.txt"
    assert files.resolve(tmp_path / "sub" / "doc.txt") == tmp_path.resolve() / "sub" / "doc.txt"

    for bad in ["../doc.txt", "sub/../../doc.txt", "/etc/passwd", str(tmp_path) + "-sibling/doc.txt"]:
        with pytest.raises(PathOutsideDataDirError):
            files.resolve(bad)


def test_resolve_follows_symlinks_out_of_data_dir(tmp_path):
    data = tmp_path / "data"
    data.mkdir()
    secret = tmp_path / "secret.cfg"
    secret.write_text("password")
    (data / "link.txt").symlink_to(secret)

    with pytest.raises(PathOutsideDataDirError):
        FileAccessService(data_dir=data).read_lines("link.txt")


def test_write_report_outside_data_dir_is_refused(tmp_path):
    data = tmp_path / "data"
    data.mkdir()
    with pytest.raises(PathOutsideDataDirError):
        FileAccessService(data_dir=data).write_report(tmp_path / "planted", "x\n")
    assert not (tmp_path / "planted.txt").exists()
