"""
Importable field maps.

Which fields each entity type accepts from a CSV upload. The maps live in
field_maps.yaml next to this module and are cached after the first load.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

from .errors import UnknownEntityError
from .models import ImportableField

FIELD_MAPS_FILE = Path(__file__).parent / "field_maps.yaml"


class FieldMaps(BaseModel, frozen=True):
    """All entity field maps."""

    version: str
    entities: dict[str, list[ImportableField]] = Field(default_factory=dict)

    model_config = {"frozen": True}

    @property
    def entity_types(self) -> list[str]:
        """Known entity types, sorted."""
        return sorted(self.entities)

    def get(self, entity_type: str) -> list[ImportableField]:
        """
        Get the importable fields of an entity type.

        Raises:
            UnknownEntityError: If there is no map for entity_type
        """
        try:
            return self.entities[entity_type]
        except KeyError:
            raise UnknownEntityError(entity_type, self.entity_types) from None


def load_field_maps(path: Path) -> FieldMaps:
    """
    Load field maps from a YAML file.

    YAML format:
    ```yaml
    version: "1.0.0"
    entities:
      client:
        client.name: {index: Client, label: Name}
        contact.email: {index: Contact, label: Email}
    ```
    """
    with open(path, encoding="utf-8") as f:
        data: dict[str, Any] = yaml.safe_load(f) or {}

    entities: dict[str, list[ImportableField]] = {}
    for entity_type, fields_data in (data.get("entities") or {}).items():
        entities[entity_type] = [
            _parse_field(key, field_data) for key, field_data in (fields_data or {}).items()
        ]

    return FieldMaps(version=str(data.get("version", "0")), entities=entities)


def _parse_field(key: str, data: dict[str, Any] | None) -> ImportableField:
    """Parse one field, deriving missing display texts from the key."""
    data = data or {}
    group, _, name = key.partition(".")
    name = name or group

    return ImportableField(
        key=key,
        index=data.get("index") or _humanize(group),
        label=data.get("label") or _humanize(name),
    )


def _humanize(value: str) -> str:
    return value.replace("_", " ").title()


@lru_cache(maxsize=1)
def get_field_maps() -> FieldMaps:
    """Get the packaged field maps (cached)."""
    return load_field_maps(FIELD_MAPS_FILE)


def get_entity_map(entity_type: str) -> list[ImportableField]:
    """Shortcut for ``get_field_maps().get(entity_type)``."""
    return get_field_maps().get(entity_type)


def clear_field_maps_cache() -> None:
    """Clear the field maps cache (for testing)."""
    get_field_maps.cache_clear()
