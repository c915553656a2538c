"""Pytest fixtures for AssetFolder tests."""

import json
import os
import shutil
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import pytest
from PySide6.QtCore import QSettings

# Tests run without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@dataclass
class Spell:
    """Spell record used by the folder fixtures."""

    name: str
    damage: float
    mana_cost: int
    icon: Optional[str] = None


@dataclass(frozen=True)
class SpellId:
    """Identifier derived from a spell filename."""

    name: str


SPELL_SUFFIX = ".spell.json"


@pytest.fixture(autouse=True, scope="session")
def isolated_settings(tmp_path_factory):
    """Keep QSettings writes out of the user's real configuration."""
    settings_dir = tmp_path_factory.mktemp("settings")
    QSettings.setDefaultFormat(QSettings.Format.IniFormat)
    QSettings.setPath(QSettings.Format.IniFormat, QSettings.Scope.UserScope, str(settings_dir))
    yield settings_dir


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    tmp = Path(tempfile.mkdtemp())
    yield tmp
    # Cleanup
    shutil.rmtree(tmp, ignore_errors=True)


@pytest.fixture
def spell_dir(temp_dir: Path):
    """Create a spell folder with loadable, broken and ineligible files."""
    spells = temp_dir / "spells"
    spells.mkdir()

    (spells / "fireball.spell.json").write_text(
        json.dumps({"name": "Fireball", "damage": 50.0, "mana_cost": 25, "icon": ""})
    )
    (spells / "ice_bolt.spell.json").write_text(
        json.dumps({"name": "Ice Bolt", "damage": 30.0, "mana_cost": 15, "icon": "ice"})
    )
    (spells / "broken.spell.json").write_text("{not json")

    # Ineligible files
    (spells / "_disabled.spell.json").write_text(
        json.dumps({"name": "Disabled", "damage": 1.0, "mana_cost": 1})
    )
    (spells / ".hidden.spell.json").write_text(
        json.dumps({"name": "Hidden", "damage": 1.0, "mana_cost": 1})
    )
    (spells / "note.txt").write_text("not a spell")

    # Subfolders are not scanned
    nested = spells / "nested"
    nested.mkdir()
    (nested / "meteor.spell.json").write_text(
        json.dumps({"name": "Meteor", "damage": 99.0, "mana_cost": 80})
    )

    return spells


@pytest.fixture
def empty_dir(temp_dir: Path):
    """Create an empty folder."""
    empty = temp_dir / "empty"
    empty.mkdir()
    return empty


@pytest.fixture
def undecodable_dir(empty_dir: Path):
    """Create a folder holding one spell whose filename is not valid UTF-8."""
    name = b"caf\xe9" + SPELL_SUFFIX.encode()
    try:
        with open(os.path.join(os.fsencode(empty_dir), name), "wb") as f:
            f.write(json.dumps({"name": "Cafe", "damage": 5.0, "mana_cost": 2}).encode())
    except OSError:
        pytest.skip("filesystem rejects filenames that are not valid UTF-8")
    return empty_dir
