"""
Constants and enums for the tonality system.

No magic strings - use enums and Literal types for constrained values.
"""

from enum import Enum
from typing import Literal


class Clef(str, Enum):
    """
    Staff clefs supported for key signature placement.

    The clef decides the octave each accidental is engraved at,
    never which accidentals a key signature holds.
    """

    TREBLE = "treble"  # G clef, second line
    BASS = "bass"  # F clef, fourth line
    ALTO = "alto"  # C clef, middle line
    TENOR = "tenor"  # C clef, fourth line

    @classmethod
    def resolve(cls, value: str) -> "Clef":
        """Map a clef string to a Clef, falling back to treble when unknown."""
        try:
            return cls(value)
        except ValueError:
            return cls.TREBLE


DEFAULT_CLEF = Clef.TREBLE

# Mode codes accepted by key enumeration
ModeCode = Literal["M", "m"]

MAJOR: ModeCode = "M"
MINOR: ModeCode = "m"

# Reference octave for enumerated tonics (octave has no meaning for a key)
TONIC_OCTAVE = 4

# Maximum number of accidentals in any key signature
MAX_ACCIDENTALS = 7

# Environment variable overriding the export directory
OUTPUT_DIR_ENV = "CHUK_TONALITY_OUTPUT_DIR"


class ErrorMessages:
    """Standardized error messages."""

    INVALID_KEY = "Invalid key: '{key}'. Expected format like 'F# minor', 'Bb_major' or 'C#m'."
    UNCONVENTIONAL_KEY = "'{key}' is not a conventionally notated key."
    INVALID_MODE = "Invalid mode: '{mode}'. Expected 'M' (major) or 'm' (minor)."
    INVALID_NOTE = "Invalid note: '{note}'. Expected format like 'F#5' or 'Bb'."


class SuccessMessages:
    """Standardized success messages."""

    KEY_MIDI_EXPORTED = "Exported {key} key signature to {path}."
    KEY_TABLE_EXPORTED = "Exported {count} key signatures to {path}."
