"""Background asset loading with bounded concurrency.

Each load request runs on its own worker thread. Results come back through
queued signals, so ``asset_loaded`` and ``asset_failed`` are always emitted on
the thread that owns the server.
"""

import itertools
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Generic, Optional, TypeVar

from PySide6.QtCore import QObject, QThread, Signal

from assetfolder.core.loaders import AssetLoader
from assetfolder.utils.logger import get_logger
from assetfolder.utils.settings import Settings

T = TypeVar("T")

_logger = get_logger()


@dataclass(frozen=True)
class AssetHandle(Generic[T]):
    """Opaque reference to an asset owned by an AssetServer.

    Holding a handle does not guarantee that the asset is loaded.
    """

    id: int
    path: Path


class HandleState(Enum):
    """Load progress of a single handle."""

    QUEUED = "queued"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


class LoadWorker(QThread):
    """Background worker that loads one asset."""

    load_succeeded = Signal(int, object)  # handle_id, asset
    load_failed = Signal(int, str)  # handle_id, reason

    def __init__(self, handle_id: int, path: Path, loader: AssetLoader):
        super().__init__()
        self._handle_id = handle_id
        self._path = path
        self._loader = loader

    def run(self):
        """Load the asset."""
        try:
            asset = self._loader.load(self._path)
        except Exception as e:
            self.load_failed.emit(self._handle_id, f"{type(e).__name__}: {e}")
            return
        self.load_succeeded.emit(self._handle_id, asset)


class AssetServer(QObject):
    """Loads assets in the background and owns the loaded data.

    Features:
    - Concurrent loading limit to prevent resource exhaustion
    - Exactly one asset_loaded or asset_failed per load() call, unless the
      handle is released first
    """

    asset_loaded = Signal(object)  # AssetHandle
    asset_failed = Signal(object, str)  # AssetHandle, reason

    def __init__(self, max_concurrent: Optional[int] = None, parent=None):
        super().__init__(parent)
        if max_concurrent is None:
            max_concurrent = Settings().load_max_concurrent_loads()
        self._max_concurrent = max(1, max_concurrent)
        self._ids = itertools.count(1)
        self._handles: dict[int, AssetHandle] = {}
        self._states: dict[int, HandleState] = {}
        self._assets: dict[int, Any] = {}
        self._queue: list[tuple[AssetHandle, AssetLoader]] = []
        self._pending: dict[int, LoadWorker] = {}

    @property
    def max_concurrent(self) -> int:
        return self._max_concurrent

    def load(self, path: Path, loader: AssetLoader) -> AssetHandle:
        """Request a load. Returns immediately with the asset's handle."""
        handle = AssetHandle(next(self._ids), Path(path))
        self._handles[handle.id] = handle
        self._states[handle.id] = HandleState.QUEUED
        self._queue.append((handle, loader))
        self._process_queue()
        return handle

    def get(self, handle: AssetHandle) -> Any:
        """Get the loaded asset for a handle. Returns None if not loaded."""
        return self._assets.get(handle.id)

    def state(self, handle: AssetHandle) -> Optional[HandleState]:
        """Get the load state of a handle. Returns None for unknown handles."""
        return self._states.get(handle.id)

    def release(self, handle: AssetHandle) -> None:
        """Drop a handle and its loaded asset.

        A queued load is cancelled. A running load finishes but its result is
        discarded and no signal is emitted for it. Unknown handles are ignored.
        """
        if self._handles.pop(handle.id, None) is None:
            return
        self._states.pop(handle.id, None)
        self._assets.pop(handle.id, None)
        self._queue = [(h, loader) for h, loader in self._queue if h.id != handle.id]

    def handle_count(self) -> int:
        """Get the number of handles the server is tracking."""
        return len(self._handles)

    def is_idle(self) -> bool:
        """Check if no loads are queued or running."""
        return not self._queue and not self._pending

    def wait_for_workers(self, msecs: int = 5000) -> None:
        """Block until running workers have finished."""
        for worker in list(self._pending.values()):
            worker.wait(msecs)

    def _process_queue(self):
        """Start queued loads up to the concurrent limit."""
        while self._queue and len(self._pending) < self._max_concurrent:
            handle, loader = self._queue.pop(0)

            worker = LoadWorker(handle.id, handle.path, loader)
            worker.load_succeeded.connect(self._on_load_succeeded)
            worker.load_failed.connect(self._on_load_failed)
            worker.finished.connect(lambda hid=handle.id: self._on_worker_finished(hid))

            self._pending[handle.id] = worker
            self._states[handle.id] = HandleState.LOADING
            worker.start()

    def _on_load_succeeded(self, handle_id: int, asset: Any):
        """Store the asset and announce it."""
        handle = self._handles.get(handle_id)
        if handle is None:
            return
        self._assets[handle_id] = asset
        self._states[handle_id] = HandleState.LOADED
        _logger.debug(f"Loaded asset: {handle.path}")
        self.asset_loaded.emit(handle)

    def _on_load_failed(self, handle_id: int, reason: str):
        """Announce a failed load."""
        handle = self._handles.get(handle_id)
        if handle is None:
            return
        self._states[handle_id] = HandleState.FAILED
        _logger.debug(f"Asset failed to load: {handle.path} ({reason})")
        self.asset_failed.emit(handle, reason)

    def _on_worker_finished(self, handle_id: int):
        """Clean up finished worker and process queue."""
        if handle_id in self._pending:
            worker = self._pending.pop(handle_id)
            worker.deleteLater()

        # Process more from queue
        self._process_queue()
