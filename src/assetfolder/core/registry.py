"""Registry of folder load cycles."""

from pathlib import Path
from typing import Callable, Hashable, Optional

from assetfolder.core.asset_server import AssetServer
from assetfolder.core.folder_loader import FolderLoader
from assetfolder.core.loaders import AssetLoader
from assetfolder.utils.logger import get_logger

_logger = get_logger()

CycleKey = tuple[Path, str, type, Callable]


class FolderRegistry:
    """Holds the current load cycle for each (folder, suffix, asset type, id type).

    The registry is an ordinary object: create one and pass it to whatever
    needs the loaded folders.
    """

    def __init__(self, server: AssetServer) -> None:
        self._server = server
        self._cycles: dict[CycleKey, FolderLoader] = {}

    @property
    def server(self) -> AssetServer:
        return self._server

    @staticmethod
    def make_key(
        folder: Path, suffix: str, loader: AssetLoader, id_factory: Callable[[str], Hashable]
    ) -> CycleKey:
        asset_type = getattr(loader, "asset_type", type(loader))
        return (Path(folder), suffix, asset_type, id_factory)

    def get(
        self,
        folder: Path,
        suffix: str,
        loader: AssetLoader,
        id_factory: Callable[[str], Hashable] = str,
    ) -> Optional[FolderLoader]:
        """Get the current cycle for a combination, or None."""
        return self._cycles.get(self.make_key(folder, suffix, loader, id_factory))

    def load(
        self,
        folder: Path,
        suffix: str,
        loader: AssetLoader,
        id_factory: Callable[[str], Hashable] = str,
    ) -> FolderLoader:
        """Return the current cycle for a combination, starting one if needed."""
        key = self.make_key(folder, suffix, loader, id_factory)
        cycle = self._cycles.get(key)
        if cycle is None:
            cycle = self._start_cycle(key, loader)
        return cycle

    def reload(
        self,
        folder: Path,
        suffix: str,
        loader: AssetLoader,
        id_factory: Callable[[str], Hashable] = str,
    ) -> FolderLoader:
        """Discard the current cycle for a combination and start a fresh one."""
        key = self.make_key(folder, suffix, loader, id_factory)
        old = self._cycles.pop(key, None)
        if old is not None:
            _logger.info(f"Reloading folder '{old.folder}' ({old.suffix})")
            old.detach()
            old.wait_for_scan()
        return self._start_cycle(key, loader)

    def cycles(self) -> list[FolderLoader]:
        """Get all current cycles."""
        return list(self._cycles.values())

    def __len__(self) -> int:
        return len(self._cycles)

    def _start_cycle(self, key: CycleKey, loader: AssetLoader) -> FolderLoader:
        folder, suffix, _, id_factory = key
        cycle = FolderLoader(folder, suffix, loader, self._server, id_factory=id_factory)
        self._cycles[key] = cycle
        cycle.start()
        return cycle
