"""Tests for the application logger."""

import logging
from pathlib import Path

from assetfolder import __version__
from assetfolder.utils.logger import get_logger, set_logging_enabled
from assetfolder.utils.settings import Settings


def test_shared_logger():
    """Test that every caller gets the same named logger."""
    assert get_logger() is get_logger()
    assert get_logger().name == "AssetFolder"


def test_toggle_file_logging(temp_dir: Path):
    """Test enabling and disabling the log file."""
    log_path = temp_dir / "loader.log"
    Settings().save_log_path(log_path)
    logger = get_logger()

    try:
        set_logging_enabled(True)
        logger.info("folder scan started")

        assert Settings().load_logging_enabled() is True
        text = log_path.read_text(encoding="utf-8")
        assert f"AssetFolder v{__version__}" in text
        assert "folder scan started" in text
    finally:
        set_logging_enabled(False)

    assert Settings().load_logging_enabled() is False
    assert not any(isinstance(h, logging.FileHandler) for h in logger.handlers)
