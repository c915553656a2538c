"""Folder enumeration for asset loading."""

from pathlib import Path
from typing import Iterable

from PySide6.QtCore import QThread, Signal

from assetfolder.core.naming import derive_identifier, is_hidden_or_disabled


def list_folder(folder: Path) -> list[Path]:
    """List regular files directly inside folder, sorted by name.

    Raises:
        FileNotFoundError: If folder does not exist
        NotADirectoryError: If folder is not a directory
    """
    if not folder.exists():
        raise FileNotFoundError(f"Folder does not exist: {folder}")
    if not folder.is_dir():
        raise NotADirectoryError(f"Path is not a directory: {folder}")

    return sorted((p for p in folder.iterdir() if p.is_file()), key=lambda p: p.name)


def eligible_files(paths: Iterable[Path], suffix: str) -> list[tuple[Path, str]]:
    """Filter paths down to loadable asset files.

    Hidden/disabled files are dropped before the suffix is looked at.

    Returns:
        List of (path, stem) pairs
    """
    files = []
    for path in paths:
        if is_hidden_or_disabled(path):
            continue

        stem = derive_identifier(path, suffix)
        if stem is None:
            continue

        files.append((path, stem))
    return files


class FolderScanner(QThread):
    """Background thread for enumerating an asset folder.

    Signals:
        file_found: Emits (path, stem) for each eligible file
        finished_scan: Emits the number of eligible files, once, after the last file_found
        error: Emits error message string
    """

    file_found = Signal(object, object)  # Path, stem
    finished_scan = Signal(int)
    error = Signal(str)

    def __init__(self, folder: Path, suffix: str, parent=None):
        """Initialize scanner.

        Args:
            folder: Folder to enumerate (not recursive)
            suffix: Filename suffix to match, including the leading dot
            parent: Parent QObject
        """
        super().__init__(parent)
        self._folder = folder
        self._suffix = suffix

    def run(self) -> None:
        """Execute the scan in background thread."""
        try:
            paths = list_folder(self._folder)
        except OSError as e:
            self.error.emit(str(e))
            return

        files = eligible_files(paths, self._suffix)
        for path, stem in files:
            self.file_found.emit(path, stem)

        self.finished_scan.emit(len(files))
