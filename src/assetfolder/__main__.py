"""Command line entry point: load a folder of JSON records and list them.

Usage: python -m assetfolder <folder> <suffix>
"""

import sys
from pathlib import Path


def setup_logging():
    """Setup application logging."""
    from assetfolder.utils.logger import setup_logging as init_logging

    logger = init_logging()

    # Setup exception hook to log crashes
    def exception_hook(exc_type, exc_value, exc_tb):
        logger.critical("Uncaught exception", exc_info=(exc_type, exc_value, exc_tb))
        sys.__excepthook__(exc_type, exc_value, exc_tb)

    sys.excepthook = exception_hook
    return logger


USAGE = "Usage: python -m assetfolder <folder> <suffix>   (e.g. prefabs/spells .spell.json)"


def main(argv: list[str] | None = None) -> int:
    argv = sys.argv if argv is None else argv
    if len(argv) != 3:
        print(USAGE, file=sys.stderr)
        return 2

    logger = setup_logging()

    from PySide6.QtCore import QCoreApplication

    from assetfolder.core.asset_server import AssetServer
    from assetfolder.core.folder_loader import FolderLoader
    from assetfolder.core.loaders import RecordLoader
    from assetfolder.utils.settings import Settings

    folder = Settings().resolve_folder(Path(argv[1]))
    suffix = argv[2]
    logger.debug(f"Folder: {folder}, suffix: {suffix}")

    app = QCoreApplication.instance() or QCoreApplication(argv)
    server = AssetServer()
    cycle = FolderLoader(folder, suffix, RecordLoader(dict), server)

    def on_ready(loaded: int, failed: int):
        for asset_id, handle in sorted(cycle.index, key=lambda item: str(item[0])):
            print(f"{asset_id}: {server.get(handle)}")
        print(f"{loaded} loaded, {failed} failed")
        app.exit(0)

    def on_scan_failed(message: str):
        print(message, file=sys.stderr)
        app.exit(1)

    cycle.ready.connect(on_ready)
    cycle.scan_failed.connect(on_scan_failed)
    cycle.start()

    result = app.exec()
    cycle.wait_for_scan()
    server.wait_for_workers()
    return result


if __name__ == "__main__":
    sys.exit(main())
