"""
Core tonal-harmony primitives.

These are the invariants everything else composes on:
- Note: A spelled pitch (letter, accidental, octave)
- Interval: A diatonic interval (quality, number, direction)
- Tonality: A key - tonic + mode, with validity and enumeration
- KeySignature: The ordered, clef-aware accidentals of a key
"""

from chuk_mcp_tonality.core.key_signature import (
    FLAT_LADDER,
    SHARP_LADDER,
    KeySignature,
    Rung,
    derive_signature,
)
from chuk_mcp_tonality.core.pitch import Interval, Note
from chuk_mcp_tonality.core.tonality import Tonality

__all__ = [
    # Pitch
    "Note",
    "Interval",
    # Key signature
    "KeySignature",
    "Rung",
    "SHARP_LADDER",
    "FLAT_LADDER",
    "derive_signature",
    # Key
    "Tonality",
]
