"""Core folder loading: naming rules, index, load tracking and background loading."""

from .naming import derive_identifier, id_from_filename, is_hidden_or_disabled
from .folder_index import FolderIndex
from .load_state import LoadPhase, LoadState
from .loaders import AssetLoader, ImageLoader, RecordLoader, optional_string
from .asset_server import AssetHandle, AssetServer, HandleState
from .scanner import FolderScanner, eligible_files, list_folder
from .folder_loader import FolderLoader, FolderLoadResult, load_folder_sync
from .registry import FolderRegistry

__all__ = [
    "derive_identifier",
    "id_from_filename",
    "is_hidden_or_disabled",
    "FolderIndex",
    "LoadPhase",
    "LoadState",
    "AssetLoader",
    "ImageLoader",
    "RecordLoader",
    "optional_string",
    "AssetHandle",
    "AssetServer",
    "HandleState",
    "FolderScanner",
    "eligible_files",
    "list_folder",
    "FolderLoader",
    "FolderLoadResult",
    "load_folder_sync",
    "FolderRegistry",
]
