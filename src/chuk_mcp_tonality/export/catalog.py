"""
Key catalog - every conventional key with its signature in all clefs.

The catalog is written to YAML so it can be read by other tools or
checked into a project, and loaded back with full validation.
"""

from __future__ import annotations

from pathlib import Path

import yaml

from chuk_mcp_tonality.constants import MAJOR, MINOR
from chuk_mcp_tonality.core.tonality import Tonality
from chuk_mcp_tonality.models.key import KeyCatalog, KeySignatureInfo


def build_key_catalog() -> KeyCatalog:
    """Build the catalog of all 30 conventional keys, in circle-of-fifths order."""
    return KeyCatalog(
        major=[
            KeySignatureInfo.from_key_signature(key.get_key_signature())
            for key in Tonality.get_valid_keys(MAJOR)
        ],
        minor=[
            KeySignatureInfo.from_key_signature(key.get_key_signature())
            for key in Tonality.get_valid_keys(MINOR)
        ],
    )


def dump_key_catalog(catalog: KeyCatalog, path: Path) -> Path:
    """
    Write a catalog to a YAML file.

    Args:
        catalog: The catalog to write
        path: Destination file (parent directories are created)

    Returns:
        The path written
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        yaml.safe_dump(catalog.to_yaml_dict(), f, sort_keys=False)
    return path


def load_key_catalog(path: Path) -> KeyCatalog:
    """
    Load a catalog from a YAML file.

    Raises:
        pydantic.ValidationError: If the file does not describe a valid catalog
    """
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    return KeyCatalog.model_validate(data)
