"""Application settings management."""

from pathlib import Path

from PySide6.QtCore import QSettings


class Settings:
    """Manage loader settings using QSettings."""

    def __init__(self):
        self._settings = QSettings("AssetFolder", "AssetFolder")

    # Concurrent load limit
    def save_max_concurrent_loads(self, count: int):
        """Save the maximum number of loads running at once."""
        self._settings.setValue("loading/max_concurrent_loads", count)

    def load_max_concurrent_loads(self) -> int:
        """Load the maximum number of loads running at once. Default 4."""
        count = self._settings.value("loading/max_concurrent_loads", 4, type=int)
        return max(1, count)

    # Assets root
    def save_assets_root(self, path: Path):
        """Save the root folder that relative asset folders resolve against."""
        self._settings.setValue("loading/assets_root", str(path))

    def load_assets_root(self) -> Path | None:
        """Load the assets root. Returns None if not set."""
        path_str = self._settings.value("loading/assets_root")
        if path_str:
            return Path(path_str)
        return None

    def resolve_folder(self, folder: Path) -> Path:
        """Resolve a folder against the assets root if it is relative."""
        root = self.load_assets_root()
        if root is not None and not folder.is_absolute():
            return root / folder
        return folder

    # Logging enabled
    def save_logging_enabled(self, enabled: bool):
        """Save logging enabled setting."""
        self._settings.setValue("debug/logging_enabled", enabled)

    def load_logging_enabled(self) -> bool:
        """Load logging enabled setting. Default False."""
        return self._settings.value("debug/logging_enabled", False, type=bool)

    # Log file path
    def save_log_path(self, path: Path):
        """Save log file path."""
        self._settings.setValue("debug/log_path", str(path))

    def load_log_path(self) -> Path:
        """Load log file path. Default assetfolder.log in the working directory."""
        path_str = self._settings.value("debug/log_path")
        if path_str:
            return Path(path_str)
        return Path.cwd() / "assetfolder.log"
