"""
Key signature primitives - the circle-of-fifths derivation.

A key signature is derived from the relative major of a key:
the reference tonic's label is located on either the sharp ladder or
the flat ladder, and every rung from the top of that ladder down to the
matched one contributes its accidental. Walking the ladder in order gives
the accidentals in the order they are written on the staff.

Each rung also carries the octave the accidental is engraved at in each clef,
so one derivation yields all four clef views.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from chuk_mcp_tonality.constants import DEFAULT_CLEF, Clef

from .pitch import LETTERS, Interval, Note

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Rung:
    """
    One step of a circle-of-fifths ladder.

    label is the reference major tonic that first needs this accidental.
    letter + accidental is the accidental it adds.
    octaves maps each clef to the octave the accidental sits at on the staff.
    """

    label: str
    letter: str
    accidental: str
    octaves: dict[Clef, int]

    def note(self, clef: Clef) -> Note:
        """The accidental as it is engraved in a clef."""
        return Note(self.letter, self.accidental, self.octaves[clef])


def _octaves(treble: int, bass: int, alto: int, tenor: int) -> dict[Clef, int]:
    return {Clef.TREBLE: treble, Clef.BASS: bass, Clef.ALTO: alto, Clef.TENOR: tenor}


# High and low staff positions shared by most accidentals
_HIGH = _octaves(5, 3, 4, 4)
_LOW = _octaves(4, 2, 3, 3)

# Sharps in application order: F# C# G# D# A# E# B#
# In tenor clef F# and G# drop below C# to stay on the staff.
SHARP_LADDER: tuple[Rung, ...] = (
    Rung("Gn", "F", "#", _octaves(5, 3, 4, 3)),
    Rung("Dn", "C", "#", _HIGH),
    Rung("An", "G", "#", _octaves(5, 3, 4, 3)),
    Rung("En", "D", "#", _HIGH),
    Rung("Bn", "A", "#", _LOW),
    Rung("F#", "E", "#", _HIGH),
    Rung("C#", "B", "#", _LOW),
)

# Flats in application order: Bb Eb Ab Db Gb Cb Fb
FLAT_LADDER: tuple[Rung, ...] = (
    Rung("Fn", "B", "b", _LOW),
    Rung("Bb", "E", "b", _HIGH),
    Rung("Eb", "A", "b", _LOW),
    Rung("Ab", "D", "b", _HIGH),
    Rung("Db", "G", "b", _LOW),
    Rung("Gb", "C", "b", _HIGH),
    Rung("Cb", "F", "b", _LOW),
)


def _walk(ladder: tuple[Rung, ...], label: str) -> tuple[Rung, ...]:
    """Rungs from the top of the ladder through the one labelled `label`."""
    for index, rung in enumerate(ladder):
        if rung.label == label:
            return ladder[: index + 1]
    return ()


def reference_tonic(tonic: Note, is_major: bool) -> Note | None:
    """
    The major tonic whose key signature a key shares.

    Major keys use their own tonic; minor keys use the relative major,
    a minor third above. None when the relative major cannot be spelled
    (e.g. Cbb minor).
    """
    if is_major:
        return tonic
    try:
        return tonic.transpose(Interval.MINOR_THIRD)
    except ValueError:
        logger.debug("No relative major for %s minor", tonic.letter_accidental)
        return None


def derive_signature(label: str) -> tuple[Rung, ...]:
    """
    Derive the accidentals of a key signature from its reference major label.

    Args:
        label: Two-character label of the reference major tonic (e.g. 'Bb', 'Gn')

    Returns:
        The ladder rungs reached, in application order. Empty for 'Cn' and for
        labels on neither ladder.
    """
    # The ladders share no label, so at most one of these is non-empty
    return _walk(FLAT_LADDER, label) + _walk(SHARP_LADDER, label)


class KeySignature:
    """
    The ordered sharps or flats of a key, engraved for a clef.

    All four clef views are computed at construction; they hold the same
    accidentals in the same order and differ only in octave.

    Examples:
        KeySignature(Note("A"), True, "treble") -> F#5,C#5,G#5
        KeySignature(Note("D"), False, "bass") -> Bb2
    """

    __slots__ = ("_tonic", "_is_major", "_clef", "_rungs", "_views")

    def __init__(self, tonic: Note, is_major: bool, clef: str = DEFAULT_CLEF.value) -> None:
        """
        Derive the key signature of a key.

        Args:
            tonic: Tonic of the key
            is_major: True for a major key, False for minor
            clef: 'treble', 'bass', 'alto' or 'tenor' (others read as treble)
        """
        self._tonic = tonic
        self._is_major = is_major
        self._clef = clef

        reference = reference_tonic(tonic, is_major)
        self._rungs: tuple[Rung, ...] = ()
        if reference is not None:
            self._rungs = derive_signature(reference.letter_accidental)
        self._views: dict[Clef, tuple[Note, ...]] = {
            c: tuple(rung.note(c) for rung in self._rungs) for c in Clef
        }

    @property
    def tonic(self) -> Note:
        return self._tonic

    @property
    def is_major(self) -> bool:
        return self._is_major

    @property
    def clef(self) -> str:
        return self._clef

    def get_accidentals(self) -> list[Note]:
        """The accidentals in this key signature's own clef (e.g. [F#5, C#5])."""
        return self.get_accidentals_for(self._clef)

    def get_accidentals_for(self, clef: str) -> list[Note]:
        """The accidentals engraved for a given clef; unknown clefs read as treble."""
        resolved = Clef.resolve(clef)
        if resolved.value != clef:
            logger.debug("Unknown clef %r, using treble", clef)
        return list(self._views[resolved])

    def is_in_key_signature(self, note: Note, consider_letter_only: bool = True) -> bool:
        """
        Indicate whether a note is affected by this key signature.

        The treble view is consulted whatever the clef: membership depends on
        letters and accidentals only.

        Args:
            note: The note to look up
            consider_letter_only: If True, only the letter is compared, so Fb is
                "in" G major's signature (F#). If False, letter and accidental
                must both match.

        Returns:
            True if an accidental of the signature matches the note
        """
        for accidental in self._views[Clef.TREBLE]:
            if accidental.letter != note.letter:
                continue
            if consider_letter_only or accidental.accidental == note.accidental:
                return True
        return False

    def has_sharps(self) -> bool:
        """True if the key signature is made of sharps."""
        treble = self._views[Clef.TREBLE]
        return len(treble) > 0 and treble[0].accidental == "#"

    def has_flats(self) -> bool:
        """True if the key signature is made of flats."""
        treble = self._views[Clef.TREBLE]
        return len(treble) > 0 and treble[0].accidental == "b"

    def accidental_map(self) -> dict[str, str]:
        """Accidental applied to each of the seven letters ('' when left natural)."""
        applied = {rung.letter: rung.accidental for rung in self._rungs}
        return {letter: applied.get(letter, "") for letter in LETTERS}

    def __len__(self) -> int:
        return len(self._rungs)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, KeySignature):
            return NotImplemented
        return self.get_accidentals() == other.get_accidentals()

    def __hash__(self) -> int:
        return hash(tuple(self.get_accidentals()))

    def __str__(self) -> str:
        return ",".join(str(note) for note in self.get_accidentals())

    def __repr__(self) -> str:
        mode = "major" if self._is_major else "minor"
        return f"KeySignature({self._tonic.letter_accidental} {mode}, {self._clef!r}: {self})"
