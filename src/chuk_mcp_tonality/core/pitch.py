"""
Pitch primitives - Note and Interval.

These are the foundational spelled-pitch types for key and key signature work.
Note is a letter + accidental + octave (scientific pitch notation, C4 = 60).
Interval is a diatonic interval: quality + number + direction.

Unlike a bare pitch class, spelling matters here: F# and Gb are different notes,
and transposing by a minor third always moves the letter by a third.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import total_ordering
from typing import ClassVar

LETTERS = "CDEFGAB"

# Semitones above C for each natural letter
_NATURAL_SEMITONES: dict[str, int] = {
    "C": 0,
    "D": 2,
    "E": 4,
    "F": 5,
    "G": 7,
    "A": 9,
    "B": 11,
}

# Accidental spelling -> alteration in semitones
_ALTERATIONS: dict[str, int] = {
    "": 0,
    "#": 1,
    "b": -1,
    "##": 2,
    "bb": -2,
}

_ACCIDENTAL_ALIASES: dict[str, str] = {
    "n": "",
    "x": "##",
}

_NOTE_PATTERN = re.compile(r"^([A-Ga-g])(##|bb|x|#|b|n)?(-?\d+)?$")


@dataclass(frozen=True)
class Note:
    """
    A spelled note: letter, accidental and octave.

    The natural accidental may be given as "" or "n"; it is stored as "".
    The two-character label renders naturals as "n" (e.g. "Gn").

    Examples:
        Note("F", "#", 5) = F#5
        Note("B", "b") = Bb4
        Note("C", "n", 4) = C4 (label "Cn")
    """

    letter: str
    accidental: str = ""
    octave: int = 4

    def __post_init__(self) -> None:
        letter = str(self.letter).upper()
        if letter not in _NATURAL_SEMITONES:
            raise ValueError(f"Unknown note letter: {self.letter!r}")
        accidental = _ACCIDENTAL_ALIASES.get(self.accidental, self.accidental)
        if accidental not in _ALTERATIONS:
            raise ValueError(f"Unknown accidental: {self.accidental!r}")
        object.__setattr__(self, "letter", letter)
        object.__setattr__(self, "accidental", accidental)

    @property
    def letter_accidental(self) -> str:
        """Letter plus accidental, naturals rendered as 'n' (e.g. 'F#', 'Gn')."""
        return f"{self.letter}{self.accidental or 'n'}"

    @property
    def alteration(self) -> int:
        """Semitone alteration of the accidental (-2 to +2)."""
        return _ALTERATIONS[self.accidental]

    @property
    def semitones(self) -> int:
        """Absolute semitone number. C0 = 0, C4 = 48."""
        return self.octave * 12 + _NATURAL_SEMITONES[self.letter] + self.alteration

    @property
    def midi(self) -> int:
        """MIDI note number. C4 = 60."""
        return self.semitones + 12

    def same_pitch_name(self, other: Note) -> bool:
        """True if letter and accidental match, ignoring octave."""
        return self.letter == other.letter and self.accidental == other.accidental

    def transpose(self, interval: Interval) -> Note:
        """
        Transpose by a diatonic interval, keeping correct spelling.

        The letter moves by the interval number; the accidental is chosen so the
        distance in semitones equals the interval's.

        Args:
            interval: The interval to move by (ascending or descending)

        Returns:
            The transposed note

        Raises:
            ValueError: If the result would need more than a double accidental
        """
        direction = -1 if interval.descending else 1
        steps = direction * (interval.number - 1)

        diatonic = self.octave * 7 + LETTERS.index(self.letter) + steps
        octave, index = divmod(diatonic, 7)
        letter = LETTERS[index]

        target = self.semitones + interval.semitones
        alteration = target - (octave * 12 + _NATURAL_SEMITONES[letter])
        for accidental, value in _ALTERATIONS.items():
            if value == alteration:
                return Note(letter, accidental, octave)

        raise ValueError(f"Cannot spell {self} transposed by {interval}")

    @classmethod
    def parse(cls, name: str) -> Note:
        """
        Parse a note from a string like 'F#5', 'Bb', 'Cn4' or 'Ebb3'.

        The octave defaults to 4 when omitted.
        """
        match = _NOTE_PATTERN.match(name.strip())
        if match is None:
            raise ValueError(f"Invalid note: {name!r}")

        letter, accidental, octave = match.groups()
        return cls(letter, accidental or "", int(octave) if octave else 4)

    def __str__(self) -> str:
        return f"{self.letter_accidental}{self.octave}"

    def __repr__(self) -> str:
        return f"Note({self.letter!r}, {self.accidental!r}, {self.octave})"


# Semitones of the major/perfect interval for each simple number
_BASE_SEMITONES: dict[int, int] = {1: 0, 2: 2, 3: 4, 4: 5, 5: 7, 6: 9, 7: 11}
_PERFECT_NUMBERS = frozenset({1, 4, 5})

_PERFECT_QUALITIES: dict[str, int] = {"d": -1, "P": 0, "A": 1}
_MAJOR_QUALITIES: dict[str, int] = {"d": -2, "m": -1, "M": 0, "A": 1}

_INTERVAL_PATTERN = re.compile(r"^([+-])?([PMmAd])(\d+)$")


@total_ordering
class Interval:
    """
    A diatonic interval: quality, number and direction.

    Quality is one of P (perfect), M (major), m (minor), A (augmented),
    d (diminished). Number is 1 (unison), 2 (second), ... 8 (octave) and beyond.

    Immutable and hashable.
    """

    __slots__ = ("_quality", "_number", "_descending")
    _quality: str
    _number: int
    _descending: bool

    # Named intervals (class constants)
    UNISON: ClassVar[Interval]
    MINOR_SECOND: ClassVar[Interval]
    MAJOR_SECOND: ClassVar[Interval]
    MINOR_THIRD: ClassVar[Interval]
    MAJOR_THIRD: ClassVar[Interval]
    PERFECT_FOURTH: ClassVar[Interval]
    AUGMENTED_FOURTH: ClassVar[Interval]
    DIMINISHED_FIFTH: ClassVar[Interval]
    PERFECT_FIFTH: ClassVar[Interval]
    MINOR_SIXTH: ClassVar[Interval]
    MAJOR_SIXTH: ClassVar[Interval]
    MINOR_SEVENTH: ClassVar[Interval]
    MAJOR_SEVENTH: ClassVar[Interval]
    OCTAVE: ClassVar[Interval]

    # Short aliases
    P1: ClassVar[Interval]
    m2: ClassVar[Interval]
    M2: ClassVar[Interval]
    m3: ClassVar[Interval]
    M3: ClassVar[Interval]
    P4: ClassVar[Interval]
    A4: ClassVar[Interval]
    d5: ClassVar[Interval]
    P5: ClassVar[Interval]
    m6: ClassVar[Interval]
    M6: ClassVar[Interval]
    m7: ClassVar[Interval]
    M7: ClassVar[Interval]
    P8: ClassVar[Interval]

    def __init__(self, quality: str, number: int, descending: bool = False) -> None:
        """Create an interval, e.g. Interval('m', 3) for an ascending minor third."""
        if number < 1:
            raise ValueError(f"Interval number must be >= 1, got {number}")
        simple = (number - 1) % 7 + 1
        qualities = _PERFECT_QUALITIES if simple in _PERFECT_NUMBERS else _MAJOR_QUALITIES
        if quality not in qualities:
            raise ValueError(f"Invalid quality {quality!r} for interval number {number}")
        object.__setattr__(self, "_quality", quality)
        object.__setattr__(self, "_number", number)
        object.__setattr__(self, "_descending", descending)

    @property
    def quality(self) -> str:
        return self._quality

    @property
    def number(self) -> int:
        return self._number

    @property
    def descending(self) -> bool:
        return self._descending

    @property
    def semitones(self) -> int:
        """Signed size in semitones (negative when descending)."""
        octaves, index = divmod(self._number - 1, 7)
        simple = index + 1
        qualities = _PERFECT_QUALITIES if simple in _PERFECT_NUMBERS else _MAJOR_QUALITIES
        size = octaves * 12 + _BASE_SEMITONES[simple] + qualities[self._quality]
        return -size if self._descending else size

    @classmethod
    def parse(cls, name: str) -> Interval:
        """Parse an interval from a string like 'm3', '+P5' or '-M6'."""
        match = _INTERVAL_PATTERN.match(name.strip())
        if match is None:
            raise ValueError(f"Invalid interval: {name!r}")
        sign, quality, number = match.groups()
        return cls(quality, int(number), descending=sign == "-")

    def __neg__(self) -> Interval:
        """The same interval in the opposite direction."""
        return Interval(self._quality, self._number, not self._descending)

    def _key(self) -> tuple[str, int, bool]:
        return (self._quality, self._number, self._descending)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Interval):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other: Interval) -> bool:
        if not isinstance(other, Interval):
            return NotImplemented
        return (self.semitones, self._number) < (other.semitones, other._number)

    def __hash__(self) -> int:
        return hash(self._key())

    def __repr__(self) -> str:
        direction = ", descending=True" if self._descending else ""
        return f"Interval({self._quality!r}, {self._number}{direction})"

    def __str__(self) -> str:
        sign = "-" if self._descending else ""
        return f"{sign}{self._quality}{self._number}"


# Initialize class constants after class is defined
Interval.UNISON = Interval("P", 1)
Interval.MINOR_SECOND = Interval("m", 2)
Interval.MAJOR_SECOND = Interval("M", 2)
Interval.MINOR_THIRD = Interval("m", 3)
Interval.MAJOR_THIRD = Interval("M", 3)
Interval.PERFECT_FOURTH = Interval("P", 4)
Interval.AUGMENTED_FOURTH = Interval("A", 4)
Interval.DIMINISHED_FIFTH = Interval("d", 5)
Interval.PERFECT_FIFTH = Interval("P", 5)
Interval.MINOR_SIXTH = Interval("m", 6)
Interval.MAJOR_SIXTH = Interval("M", 6)
Interval.MINOR_SEVENTH = Interval("m", 7)
Interval.MAJOR_SEVENTH = Interval("M", 7)
Interval.OCTAVE = Interval("P", 8)

# Short aliases
Interval.P1 = Interval.UNISON
Interval.m2 = Interval.MINOR_SECOND
Interval.M2 = Interval.MAJOR_SECOND
Interval.m3 = Interval.MINOR_THIRD
Interval.M3 = Interval.MAJOR_THIRD
Interval.P4 = Interval.PERFECT_FOURTH
Interval.A4 = Interval.AUGMENTED_FOURTH
Interval.d5 = Interval.DIMINISHED_FIFTH
Interval.P5 = Interval.PERFECT_FIFTH
Interval.m6 = Interval.MINOR_SIXTH
Interval.M6 = Interval.MAJOR_SIXTH
Interval.m7 = Interval.MINOR_SEVENTH
Interval.M7 = Interval.MAJOR_SEVENTH
Interval.P8 = Interval.OCTAVE
