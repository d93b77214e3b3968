"""
Export pipeline - keys to MIDI files and YAML catalogs.
"""

from chuk_mcp_tonality.export.catalog import build_key_catalog, dump_key_catalog, load_key_catalog
from chuk_mcp_tonality.export.midi import (
    TICKS_PER_BAR,
    TICKS_PER_BEAT,
    key_signature_message,
    read_tonality,
    tonality_to_midi,
)

__all__ = [
    # MIDI
    "TICKS_PER_BAR",
    "TICKS_PER_BEAT",
    "key_signature_message",
    "read_tonality",
    "tonality_to_midi",
    # Catalog
    "build_key_catalog",
    "dump_key_catalog",
    "load_key_catalog",
]
