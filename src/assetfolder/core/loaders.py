"""Asset loaders: turn a file on disk into an in-memory asset.

Loaders run on worker threads, so they must not touch Qt GUI objects. Any
exception raised by ``load`` is reported as a failed load.
"""

import dataclasses
import json
import logging
from pathlib import Path
from typing import Any, Iterable, Optional, Protocol

from PIL import Image

logger = logging.getLogger(__name__)


class AssetLoader(Protocol):
    """Anything that can load one asset file.

    Loaders may also expose an ``asset_type`` attribute naming the type they
    produce. FolderRegistry keys its cycles on it.
    """

    def load(self, path: Path) -> Any: ...


def optional_string(value: Any) -> Optional[str]:
    """Decode a logically optional string field.

    Absent (None) and empty values decode to None.

    Raises:
        TypeError: If value is neither None nor a string
    """
    if value is None:
        return None
    if not isinstance(value, str):
        raise TypeError(f"Expected a string, got {type(value).__name__}")
    return value or None


class RecordLoader:
    """Load a JSON object file into a record type (usually a dataclass).

    Example file ``fireball.spell.json``::

        {"name": "Fireball", "damage": 50.0, "mana_cost": 25, "icon": ""}
    """

    def __init__(self, record_type: type, optional_fields: Iterable[str] = ()):
        """Initialize loader.

        Args:
            record_type: Callable taking the record's fields as keyword arguments
            optional_fields: Field names decoded with optional_string
        """
        self.record_type = record_type
        self.optional_fields = frozenset(optional_fields)
        if dataclasses.is_dataclass(record_type):
            self._known_fields: Optional[frozenset[str]] = frozenset(
                f.name for f in dataclasses.fields(record_type)
            )
        else:
            self._known_fields = None

    def load(self, path: Path) -> Any:
        """Read and decode one record.

        Raises:
            OSError: If the file cannot be read
            ValueError: If the file is not a JSON object or has unknown keys
        """
        with open(path, encoding="utf-8") as f:
            data = json.load(f)

        if not isinstance(data, dict):
            raise ValueError(f"Expected a JSON object in {path.name}")

        if self._known_fields is not None:
            unknown = set(data) - self._known_fields
            if unknown:
                raise ValueError(f"Unknown fields in {path.name}: {', '.join(sorted(unknown))}")

        for name in self.optional_fields:
            data[name] = optional_string(data.get(name))

        logger.debug(f"Decoded {path.name} as {self.record_type.__name__}")
        return self.record_type(**data)

    @property
    def asset_type(self) -> type:
        return self.record_type

    def __repr__(self) -> str:
        return f"RecordLoader({self.record_type.__name__})"


class ImageLoader:
    """Load image files with Pillow."""

    asset_type = Image.Image

    def __init__(self, mode: Optional[str] = None):
        """Initialize loader.

        Args:
            mode: Pillow mode to convert to (e.g. "RGBA"), None keeps the file's mode
        """
        self.mode = mode

    def load(self, path: Path) -> Image.Image:
        """Fully decode an image so the file handle can be released."""
        with Image.open(path) as img:
            img.load()
            if self.mode and img.mode != self.mode:
                return img.convert(self.mode)
            return img.copy()

    def __repr__(self) -> str:
        return f"ImageLoader(mode={self.mode!r})"
