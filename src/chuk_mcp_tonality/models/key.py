"""
Key models - serializable views of tonalities and key signatures.

These are what tools return and what the YAML key catalog stores.
The core types stay plain Python; these models carry the validation
when data comes back in from disk.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from chuk_mcp_tonality.constants import MAX_ACCIDENTALS, Clef
from chuk_mcp_tonality.core.key_signature import KeySignature
from chuk_mcp_tonality.core.pitch import Note
from chuk_mcp_tonality.core.tonality import Tonality


class TonalityInfo(BaseModel):
    """A key summarized for display."""

    name: str = Field(..., description="Key name (e.g. 'F# minor', 'Gn major')")
    tonic: str = Field(..., description="Tonic label (e.g. 'F#', 'Gn')")
    mode: str = Field(..., description="'major' or 'minor'")
    valid: bool = Field(..., description="Whether the key is conventionally notated")
    midi_key: str | None = Field(None, description="MIDI key signature name, if valid")

    model_config = {"frozen": True}

    @classmethod
    def from_tonality(cls, tonality: Tonality) -> TonalityInfo:
        """Create a summary from a tonality."""
        return cls(
            name=str(tonality),
            tonic=tonality.tonic.letter_accidental,
            mode=tonality.mode_name,
            valid=tonality.is_valid_key(),
            midi_key=tonality.to_midi_key(),
        )


class KeySignatureInfo(BaseModel):
    """
    A key signature in every clef.

    Accidentals are stored as note strings with octave (e.g. 'F#5'),
    one ordered list per clef.
    """

    key: str = Field(..., description="Key name (e.g. 'A major')")
    sharps: bool = Field(False, description="Signature is made of sharps")
    flats: bool = Field(False, description="Signature is made of flats")
    count: int = Field(0, ge=0, le=MAX_ACCIDENTALS, description="Number of accidentals")
    clefs: dict[Clef, list[str]] = Field(
        default_factory=dict, description="Accidentals per clef, in application order"
    )

    model_config = {"frozen": True}

    @field_validator("clefs")
    @classmethod
    def validate_clefs(cls, v: dict[Clef, list[str]]) -> dict[Clef, list[str]]:
        """Every clef must list the same letters and accidentals, in the same order."""
        sequences = {
            tuple(Note.parse(name).letter_accidental for name in names) for names in v.values()
        }
        if len(sequences) > 1:
            raise ValueError("Clefs disagree on the accidentals of the key signature")
        return v

    @classmethod
    def from_key_signature(cls, signature: KeySignature) -> KeySignatureInfo:
        """Create a catalog entry from a key signature."""
        mode = "major" if signature.is_major else "minor"
        return cls(
            key=f"{signature.tonic.letter_accidental} {mode}",
            sharps=signature.has_sharps(),
            flats=signature.has_flats(),
            count=len(signature),
            clefs={
                clef: [str(note) for note in signature.get_accidentals_for(clef.value)]
                for clef in Clef
            },
        )

    def to_tonality(self) -> Tonality:
        """The key this entry describes."""
        return Tonality.parse(self.key)

    def to_yaml_dict(self) -> dict[str, object]:
        """Plain dict for YAML output (clef names as strings)."""
        return {
            "key": self.key,
            "sharps": self.sharps,
            "flats": self.flats,
            "count": self.count,
            "clefs": {clef.value: list(notes) for clef, notes in self.clefs.items()},
        }


class KeyCatalog(BaseModel):
    """Every conventional key with its signature in all clefs."""

    major: list[KeySignatureInfo] = Field(default_factory=list)
    minor: list[KeySignatureInfo] = Field(default_factory=list)

    def entries(self) -> list[KeySignatureInfo]:
        return [*self.major, *self.minor]

    def find(self, tonality: Tonality) -> KeySignatureInfo | None:
        """Look up the entry for a key."""
        for entry in self.entries():
            if entry.to_tonality() == tonality:
                return entry
        return None

    def to_yaml_dict(self) -> dict[str, object]:
        return {
            "major": [entry.to_yaml_dict() for entry in self.major],
            "minor": [entry.to_yaml_dict() for entry in self.minor],
        }
