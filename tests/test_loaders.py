"""Tests for asset loaders and field decoding."""

import json
from pathlib import Path

import pytest
from PIL import Image, UnidentifiedImageError

from assetfolder.core.loaders import ImageLoader, RecordLoader, optional_string

from conftest import Spell


class TestOptionalString:
    """Test optional string decoding."""

    def test_absent(self):
        assert optional_string(None) is None

    def test_empty(self):
        assert optional_string("") is None

    def test_value(self):
        assert optional_string("icons/fire") == "icons/fire"

    def test_wrong_type(self):
        with pytest.raises(TypeError):
            optional_string(5)


class TestRecordLoader:
    """Test JSON record loading."""

    def test_load_dataclass(self, spell_dir: Path):
        """Test decoding into a dataclass."""
        loader = RecordLoader(Spell, optional_fields=["icon"])

        spell = loader.load(spell_dir / "ice_bolt.spell.json")

        assert spell == Spell(name="Ice Bolt", damage=30.0, mana_cost=15, icon="ice")

    def test_empty_optional_field(self, spell_dir: Path):
        """Test that an empty optional string becomes None."""
        loader = RecordLoader(Spell, optional_fields=["icon"])

        spell = loader.load(spell_dir / "fireball.spell.json")

        assert spell.icon is None

    def test_missing_optional_field(self, temp_dir: Path):
        """Test that an absent optional string becomes None."""
        path = temp_dir / "meteor.spell.json"
        path.write_text(json.dumps({"name": "Meteor", "damage": 99.0, "mana_cost": 80}))

        spell = RecordLoader(Spell, optional_fields=["icon"]).load(path)

        assert spell.icon is None

    def test_unknown_field(self, temp_dir: Path):
        """Test rejecting keys the record does not have."""
        path = temp_dir / "odd.spell.json"
        path.write_text(json.dumps({"name": "Odd", "damage": 1.0, "mana_cost": 1, "range": 3}))

        with pytest.raises(ValueError, match="range"):
            RecordLoader(Spell).load(path)

    def test_not_an_object(self, temp_dir: Path):
        """Test rejecting a JSON list."""
        path = temp_dir / "list.spell.json"
        path.write_text("[1, 2, 3]")

        with pytest.raises(ValueError):
            RecordLoader(Spell).load(path)

    def test_invalid_json(self, spell_dir: Path):
        """Test that malformed JSON raises."""
        with pytest.raises(ValueError):
            RecordLoader(Spell).load(spell_dir / "broken.spell.json")

    def test_plain_dict(self, spell_dir: Path):
        """Test loading into a dict without field checks."""
        data = RecordLoader(dict).load(spell_dir / "fireball.spell.json")

        assert data["name"] == "Fireball"


class TestImageLoader:
    """Test image loading with Pillow."""

    def test_load_png(self, temp_dir: Path):
        """Test loading an image file."""
        path = temp_dir / "icon.png"
        Image.new("RGB", (4, 2), (255, 0, 0)).save(path)

        img = ImageLoader().load(path)

        assert img.size == (4, 2)
        assert img.mode == "RGB"

    def test_convert_mode(self, temp_dir: Path):
        """Test converting to a requested mode."""
        path = temp_dir / "icon.png"
        Image.new("RGB", (2, 2)).save(path)

        img = ImageLoader(mode="RGBA").load(path)

        assert img.mode == "RGBA"

    def test_not_an_image(self, temp_dir: Path):
        """Test that non-image data raises."""
        path = temp_dir / "fake.png"
        path.write_text("not an image")

        with pytest.raises(UnidentifiedImageError):
            ImageLoader().load(path)
