"""Filename conventions for folder assets.

An asset file is named ``<stem><suffix>``, where the suffix may contain several
dots (``fireball.spell.ron``). Files whose name starts with ``.`` (hidden) or
``_`` (disabled) are never loaded.
"""

import os
from pathlib import PurePath
from typing import Callable, Optional, TypeVar, Union

Id = TypeVar("Id")

PathLike = Union[str, os.PathLike]

# Filename prefixes that take a file out of consideration
HIDDEN_PREFIX = "."
DISABLED_PREFIX = "_"


def filename_of(path: PathLike) -> str:
    """Return the final component of a path."""
    return PurePath(os.fspath(path)).name


def is_hidden_or_disabled(path: PathLike) -> bool:
    """Check if a path names a hidden or disabled file.

    Only the filename is inspected, so a file inside ``_drafts/`` is still
    eligible.
    """
    name = filename_of(path)
    return name.startswith(HIDDEN_PREFIX) or name.startswith(DISABLED_PREFIX)


def derive_identifier(
    path: PathLike,
    suffix: str,
    id_factory: Callable[[str], Id] = str,
) -> Optional[Id]:
    """Derive an identifier from a filename by stripping the suffix.

    Args:
        path: Path to the asset file; parent directories are ignored
        suffix: Exact, case-sensitive tail the filename must end with
            (e.g. ".spell.ron")
        id_factory: One-way conversion from the stem to the identifier type

    Returns:
        ``id_factory(stem)``, or None if the filename does not end with suffix.
        An empty stem is passed through unchanged.
    """
    name = filename_of(path)
    if not name.endswith(suffix):
        return None

    stem = name[: len(name) - len(suffix)]
    return id_factory(stem)


def id_from_filename(
    path: PathLike,
    suffix: str,
    id_factory: Callable[[str], Id] = str,
) -> Optional[Id]:
    """Eligibility check and identifier derivation in one call.

    Returns None for hidden/disabled files and for suffix mismatches.
    """
    if is_hidden_or_disabled(path):
        return None
    return derive_identifier(path, suffix, id_factory)
