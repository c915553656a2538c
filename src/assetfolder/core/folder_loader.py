"""Bulk loading of every asset in a folder that matches a filename suffix."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Generic, Hashable, Optional, TypeVar

from PySide6.QtCore import QObject, Signal

from assetfolder.core.asset_server import AssetHandle, AssetServer
from assetfolder.core.folder_index import FolderIndex
from assetfolder.core.load_state import LoadState
from assetfolder.core.loaders import AssetLoader
from assetfolder.core.scanner import FolderScanner, eligible_files, list_folder
from assetfolder.utils.logger import get_logger

Id = TypeVar("Id", bound=Hashable)

_logger = get_logger()


def _log_summary(folder: Path, loaded: int, failed: int) -> None:
    if failed == 0:
        _logger.info(f"Loaded {loaded} assets from folder '{folder}'")
    else:
        _logger.warning(
            f"Loaded {loaded} of {loaded + failed} assets from folder '{folder}' ({failed} failed)"
        )


class FolderLoader(QObject):
    """One load cycle over one (folder, suffix) pair.

    Owns the cycle's FolderIndex and LoadState. Every eligible file produces
    exactly one terminal outcome; failures are counted and logged but never
    added to the index. Reloading a folder means creating a new FolderLoader.

    Signals:
        asset_added: Emits (asset_id, handle) for each successful load
        asset_failed: Emits (path, reason) for each failed load
        ready: Emits (loaded_count, failed_count) once every file has finished
        scan_failed: Emits error message if the folder cannot be listed
    """

    asset_added = Signal(object, object)
    asset_failed = Signal(object, str)  # Path, reason
    ready = Signal(int, int)
    scan_failed = Signal(str)

    def __init__(
        self,
        folder: Path,
        suffix: str,
        loader: AssetLoader,
        server: AssetServer,
        id_factory: Callable[[str], Hashable] = str,
        parent=None,
    ):
        """Initialize a load cycle. Nothing happens until start() is called.

        Args:
            folder: Folder holding the asset files
            suffix: Filename suffix to match (e.g. ".spell.json")
            loader: Loader used for every matching file
            server: Asset server that runs the loads
            id_factory: Converts a filename stem into an identifier
            parent: Parent QObject
        """
        super().__init__(parent)
        self._folder = Path(folder)
        self._suffix = suffix
        self._loader = loader
        self._server = server
        self._id_factory = id_factory

        self._index: FolderIndex[Any, AssetHandle] = FolderIndex()
        self._state = LoadState()
        self._failed_paths: list[Path] = []
        self._requests: dict[AssetHandle, Any] = {}  # handle -> asset id
        self._scanner: Optional[FolderScanner] = None
        self._ready_emitted = False
        self._detached = False

        server.asset_loaded.connect(self._on_asset_loaded)
        server.asset_failed.connect(self._on_asset_failed)

    @property
    def folder(self) -> Path:
        return self._folder

    @property
    def suffix(self) -> str:
        return self._suffix

    @property
    def index(self) -> FolderIndex[Any, AssetHandle]:
        return self._index

    @property
    def state(self) -> LoadState:
        return self._state

    @property
    def failed_paths(self) -> list[Path]:
        return list(self._failed_paths)

    @property
    def is_started(self) -> bool:
        return self._scanner is not None

    @property
    def is_loading(self) -> bool:
        """Check if the cycle has started and is not ready yet."""
        return self.is_started and not self._state.is_ready

    @property
    def is_ready(self) -> bool:
        return self._state.is_ready

    @property
    def is_detached(self) -> bool:
        return self._detached

    def get(self, asset_id: Any) -> Any:
        """Get the loaded asset for an identifier. Returns None if absent."""
        handle = self._index.get(asset_id)
        if handle is None:
            return None
        return self._server.get(handle)

    def start(self) -> None:
        """Start scanning the folder and loading every eligible file.

        Raises:
            RuntimeError: If the cycle was already started
        """
        if self._scanner is not None:
            raise RuntimeError(f"Load cycle for '{self._folder}' already started")

        _logger.info(f"Loading '{self._suffix}' assets from folder '{self._folder}'")

        self._scanner = FolderScanner(self._folder, self._suffix)
        self._scanner.file_found.connect(self._on_file_found)
        self._scanner.finished_scan.connect(self._on_scan_finished)
        self._scanner.error.connect(self._on_scan_error)
        self._scanner.start()

    def detach(self) -> None:
        """Stop listening to the asset server and release this cycle's assets.

        Files the scanner reports afterwards are not requested. Loads still in
        flight complete on the server but their results are dropped.
        """
        if self._detached:
            return
        self._detached = True
        self._server.asset_loaded.disconnect(self._on_asset_loaded)
        self._server.asset_failed.disconnect(self._on_asset_failed)

        for handle in self._requests:
            self._server.release(handle)
        _logger.debug(f"Released {len(self._requests)} assets from folder '{self._folder}'")

    def wait_for_scan(self, msecs: int = 5000) -> None:
        """Block until the scanner thread has finished."""
        if self._scanner is not None:
            self._scanner.wait(msecs)

    def _on_file_found(self, path: Path, stem: str):
        """Request a load for an eligible file."""
        if self._detached:
            return

        path = Path(path)
        try:
            asset_id = self._id_factory(stem)
        except Exception as e:
            _logger.warning(f"Invalid asset id {stem!r} for {path}, skipping: {e}")
            self._failed_paths.append(path)
            self._state.record_finished(key=path, failed=True)
            self._check_ready()
            return

        handle = self._server.load(path, self._loader)
        self._requests[handle] = asset_id

    def _on_scan_finished(self, count: int):
        """Record the number of files the scan produced."""
        if self._detached:
            return
        _logger.debug(f"Found {count} '{self._suffix}' files in '{self._folder}'")
        self._state.mark_enumerated(count)
        self._check_ready()

    def _on_scan_error(self, message: str):
        _logger.error(f"Could not scan folder '{self._folder}': {message}")
        self.scan_failed.emit(message)

    def _on_asset_loaded(self, handle: AssetHandle):
        """Register a successful load in the index."""
        if handle not in self._requests:
            return

        asset_id = self._requests[handle]
        if not self._state.record_finished(key=handle.id):
            return

        previous = self._index.insert(asset_id, handle)
        if previous is not None and previous != handle:
            self._server.release(previous)
        _logger.debug(f"Loaded asset from folder: {asset_id!r} ({handle.path})")
        self.asset_added.emit(asset_id, handle)
        self._check_ready()

    def _on_asset_failed(self, handle: AssetHandle, reason: str):
        """Count a failed load without indexing it."""
        if handle not in self._requests:
            return

        asset_id = self._requests[handle]
        if not self._state.record_finished(key=handle.id, failed=True):
            return

        self._failed_paths.append(handle.path)
        _logger.warning(
            f"Asset failed to load and will be skipped: {handle.path} (ID: {asset_id!r}): {reason}"
        )
        self.asset_failed.emit(handle.path, reason)
        self._check_ready()

    def _check_ready(self):
        """Emit ready the first time the tracker reports it."""
        if self._ready_emitted or not self._state.is_ready:
            return

        self._ready_emitted = True
        _log_summary(self._folder, self._state.loaded_count, self._state.failed_count)
        self.ready.emit(self._state.loaded_count, self._state.failed_count)

    def __repr__(self) -> str:
        return f"FolderLoader({str(self._folder)!r}, {self._suffix!r}, {self._state!r})"


@dataclass
class FolderLoadResult(Generic[Id]):
    """Outcome of a synchronous folder load."""

    index: FolderIndex[Id, Any]
    state: LoadState
    failed_paths: list[Path] = field(default_factory=list)


def load_folder_sync(
    folder: Path,
    suffix: str,
    loader: AssetLoader,
    id_factory: Callable[[str], Hashable] = str,
    progress_callback=None,
) -> FolderLoadResult:
    """Synchronous folder load (for testing or CLI use).

    The index maps identifiers straight to the loaded assets.

    Args:
        folder: Folder holding the asset files
        suffix: Filename suffix to match
        loader: Loader used for every matching file
        id_factory: Converts a filename stem into an identifier
        progress_callback: Optional callback(current, total, filename)

    Returns:
        FolderLoadResult with a ready LoadState

    Raises:
        FileNotFoundError: If folder does not exist
        NotADirectoryError: If folder is not a directory
    """
    folder = Path(folder)
    files = eligible_files(list_folder(folder), suffix)

    index: FolderIndex[Any, Any] = FolderIndex()
    state = LoadState()
    failed_paths: list[Path] = []

    total = len(files)
    state.mark_enumerated(total)

    for i, (path, stem) in enumerate(files):
        if progress_callback:
            progress_callback(i + 1, total, path.name)

        try:
            asset_id = id_factory(stem)
            asset = loader.load(path)
        except Exception as e:
            _logger.warning(f"Asset failed to load and will be skipped: {path}: {e}")
            failed_paths.append(path)
            state.record_finished(key=path, failed=True)
            continue

        index.insert(asset_id, asset)
        state.record_finished(key=path)

    _log_summary(folder, state.loaded_count, state.failed_count)
    return FolderLoadResult(index=index, state=state, failed_paths=failed_paths)
