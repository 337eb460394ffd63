import os
import sys

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from loguru import logger

from tag_extractor.application.errors import ReadFailure
from tag_extractor.application.log_setup import resolve_level, setup_logging
from tag_extractor.application.services.file_access import FileAccessService
from tag_extractor.application.settings import Settings


def test_resolve_level():
    assert resolve_level(Settings(debug=True)) == "DEBUG"
    assert resolve_level(Settings(debug=False)) == "INFO"
    assert resolve_level(Settings(debug=True, log_level="warning")) == "WARNING"


def test_file_sink_records_path_of_failed_read(tmp_path):
    log_file = tmp_path / "app.log"
    setup_logging(Settings(log_file=str(log_file), log_level="INFO"))
    try:
        logger.info("unrelated message")
        with pytest.raises(ReadFailure):
            FileAccessService().read_lines(tmp_path / "missing.txt")
    finally:
        # closes the file sink so the content is flushed
        logger.remove()
        setup_logging(Settings())

    lines = log_file.read_text(encoding="utf-8").splitlines()
    assert any("| - - unrelated message" in line for line in lines)
    failed = [line for line in lines if "Could not read" in line]
    assert len(failed) == 1
    assert str(tmp_path / "missing.txt") in failed[0]
    assert "WARNING" in failed[0]
