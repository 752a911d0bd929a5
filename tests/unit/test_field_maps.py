"""Tests for importable field maps."""

from pathlib import Path

import pytest

from ninja_import.core.reader import UnknownEntityError, get_entity_map, get_field_maps
from ninja_import.core.reader.field_maps import clear_field_maps_cache, load_field_maps


class TestPackagedFieldMaps:
    """Tests for the field maps shipped with the package."""

    def test_entity_types(self) -> None:
        entity_types = get_field_maps().entity_types
        assert entity_types == sorted(entity_types)
        for expected in ("client", "invoice", "product", "vendor"):
            assert expected in entity_types

    def test_client_fields(self) -> None:
        keys = [f.key for f in get_entity_map("client")]
        assert keys[0] == "client.name"
        assert "contact.email" in keys

    def test_every_field_has_display_texts(self) -> None:
        field_maps = get_field_maps()
        for entity_type in field_maps.entity_types:
            for field in field_maps.get(entity_type):
                assert field.index
                assert field.label

    def test_unknown_entity(self) -> None:
        with pytest.raises(UnknownEntityError) as exc_info:
            get_entity_map("spaceship")

        assert exc_info.value.entity_type == "spaceship"
        assert "client" in exc_info.value.known
        assert "spaceship" in str(exc_info.value)
        assert exc_info.value.code == "IMP-MAP-001"

    def test_cached(self) -> None:
        assert get_field_maps() is get_field_maps()

    def test_cache_clear(self) -> None:
        first = get_field_maps()
        clear_field_maps_cache()
        assert get_field_maps() is not first


class TestLoadFieldMaps:
    """Tests for load_field_maps function."""

    def test_load(self, tmp_path: Path) -> None:
        path = tmp_path / "maps.yaml"
        path.write_text(
            'version: "2.1"\n'
            "entities:\n"
            "  client:\n"
            "    client.name: {index: Kunde, label: Name}\n",
            encoding="utf-8",
        )

        field_maps = load_field_maps(path)

        assert field_maps.version == "2.1"
        field = field_maps.get("client")[0]
        assert (field.key, field.index, field.label) == ("client.name", "Kunde", "Name")

    def test_missing_texts_derived_from_key(self, tmp_path: Path) -> None:
        path = tmp_path / "maps.yaml"
        path.write_text(
            "entities:\n  invoice:\n    invoice.po_number:\n    notes: {index: Item}\n",
            encoding="utf-8",
        )

        fields = load_field_maps(path).get("invoice")

        assert (fields[0].index, fields[0].label) == ("Invoice", "Po Number")
        assert (fields[1].index, fields[1].label) == ("Item", "Notes")

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "maps.yaml"
        path.write_text("", encoding="utf-8")

        field_maps = load_field_maps(path)

        assert field_maps.version == "0"
        assert field_maps.entity_types == []
