"""Identifier to asset handle index for one loaded folder."""

from typing import Generic, Hashable, Iterator, Optional, TypeVar

from assetfolder.utils.logger import get_logger

Id = TypeVar("Id", bound=Hashable)
Ref = TypeVar("Ref")

_logger = get_logger()


class FolderIndex(Generic[Id, Ref]):
    """Maps identifiers derived from filenames to asset references.

    Entries are only added or overwritten, never removed; a reload builds a new
    index. If two files map to the same identifier, the later insert wins.
    """

    def __init__(self) -> None:
        self._assets: dict[Id, Ref] = {}

    def get(self, asset_id: Id) -> Optional[Ref]:
        """Get the reference for an identifier."""
        return self._assets.get(asset_id)

    def contains(self, asset_id: Id) -> bool:
        """Check if the index contains an identifier."""
        return asset_id in self._assets

    def __contains__(self, asset_id: object) -> bool:
        return asset_id in self._assets

    def insert(self, asset_id: Id, ref: Ref) -> Optional[Ref]:
        """Insert or overwrite a reference.

        Returns:
            The reference previously stored under asset_id, or None
        """
        previous = self._assets.get(asset_id)
        if asset_id in self._assets and previous != ref:
            _logger.warning(f"Duplicate asset id {asset_id!r}: {previous!r} replaced by {ref!r}")
        self._assets[asset_id] = ref
        return previous

    def iter(self) -> Iterator[tuple[Id, Ref]]:
        """Iterate over (id, reference) pairs of a snapshot of the index."""
        return iter(list(self._assets.items()))

    def __iter__(self) -> Iterator[tuple[Id, Ref]]:
        return self.iter()

    def keys(self) -> list[Id]:
        """Get all known identifiers."""
        return list(self._assets)

    def __len__(self) -> int:
        return len(self._assets)

    def is_empty(self) -> bool:
        """Check if nothing has been indexed yet."""
        return not self._assets

    def as_dict(self) -> dict[Id, Ref]:
        """Return a copy of the underlying mapping."""
        return dict(self._assets)

    def __repr__(self) -> str:
        return f"FolderIndex({len(self._assets)} assets)"
