"""Application logging utility."""

import logging
import sys

from assetfolder.utils.settings import Settings

# Global logger instance
_logger: logging.Logger | None = None
_file_handler: logging.FileHandler | None = None


def setup_logging() -> logging.Logger:
    """Setup and return the application logger."""
    global _logger

    if _logger is not None:
        return _logger

    _logger = logging.getLogger("AssetFolder")
    _logger.setLevel(logging.DEBUG)

    # Console handler (always enabled)
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.INFO)
    console_formatter = logging.Formatter("%(levelname)s: %(message)s")
    console_handler.setFormatter(console_formatter)
    _logger.addHandler(console_handler)

    # File handler (based on settings)
    settings = Settings()
    if settings.load_logging_enabled():
        _enable_file_logging()

    return _logger


def _enable_file_logging():
    """Enable file logging."""
    global _file_handler

    if _file_handler is not None or _logger is None:
        return

    log_path = Settings().load_log_path()

    try:
        # Overwrite log file each time (mode='w')
        _file_handler = logging.FileHandler(log_path, mode="w", encoding="utf-8")
        _file_handler.setLevel(logging.DEBUG)
        file_formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        _file_handler.setFormatter(file_formatter)
        _logger.addHandler(_file_handler)

        from assetfolder import __version__

        # File only; the console handler is INFO
        _logger.debug(f"AssetFolder v{__version__} logging to {log_path}")
    except OSError as e:
        _file_handler = None
        _logger.warning(f"Could not create log file: {e}")


def _disable_file_logging():
    """Disable file logging."""
    global _file_handler

    if _file_handler is not None and _logger is not None:
        _logger.removeHandler(_file_handler)
        _file_handler.close()
        _file_handler = None


def set_logging_enabled(enabled: bool):
    """Enable or disable file logging."""
    settings = Settings()
    settings.save_logging_enabled(enabled)

    if enabled:
        _enable_file_logging()
    else:
        _disable_file_logging()


def get_logger() -> logging.Logger:
    """Get the application logger."""
    if _logger is None:
        return setup_logging()
    return _logger
