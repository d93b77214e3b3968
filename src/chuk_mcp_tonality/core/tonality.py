"""
Tonality - a key as tonic + mode.

A Tonality can be built for any tonic, including spellings nobody writes
(G# major). Whether it names a conventional key is a question you ask it,
not something enforced at construction.
"""

from __future__ import annotations

import logging
import re
from typing import ClassVar

from chuk_mcp_tonality.constants import DEFAULT_CLEF, MAJOR, MINOR, TONIC_OCTAVE

from .key_signature import KeySignature
from .pitch import Interval, Note

logger = logging.getLogger(__name__)

# Conventional keys in circle-of-fifths order:
# the natural key, then ascending sharps, then ascending flats.
_MAJOR_KEYS: tuple[tuple[str, str], ...] = (
    ("C", ""),
    ("G", ""),
    ("D", ""),
    ("A", ""),
    ("E", ""),
    ("B", ""),
    ("F", "#"),
    ("C", "#"),
    ("F", ""),
    ("B", "b"),
    ("E", "b"),
    ("A", "b"),
    ("D", "b"),
    ("G", "b"),
    ("C", "b"),
)
_MINOR_KEYS: tuple[tuple[str, str], ...] = (
    ("A", ""),
    ("E", ""),
    ("B", ""),
    ("F", "#"),
    ("C", "#"),
    ("G", "#"),
    ("D", "#"),
    ("A", "#"),
    ("D", ""),
    ("G", ""),
    ("C", ""),
    ("F", ""),
    ("B", "b"),
    ("E", "b"),
    ("A", "b"),
)

_KEY_TABLES: dict[str, tuple[tuple[str, str], ...]] = {
    MAJOR: _MAJOR_KEYS,
    MINOR: _MINOR_KEYS,
}

_VALID_KEYS: dict[str, frozenset[tuple[str, str]]] = {
    mode: frozenset(table) for mode, table in _KEY_TABLES.items()
}

_MODE_WORDS: dict[str, bool] = {
    "major": True,
    "maj": True,
    "minor": False,
    "min": False,
}

_KEY_PATTERN = re.compile(r"^([A-Ga-g](?:##|bb|x|#|b|n)?)(?:[\s_]+([A-Za-z]+)|(m))?$")


class Tonality:
    """
    A key: a tonic note plus a major/minor mode.

    Two tonalities are equal when their tonics share letter and accidental
    (the octave is ignored) and their modes match.

    Examples:
        Tonality(Note("G"), True) = G major
        Tonality(Note("F", "#"), False) = F# minor
    """

    __slots__ = ("_tonic", "_is_major")

    # Fixed key tables, exposed for callers that need the raw spellings
    MAJOR_KEYS: ClassVar[tuple[tuple[str, str], ...]] = _MAJOR_KEYS
    MINOR_KEYS: ClassVar[tuple[tuple[str, str], ...]] = _MINOR_KEYS

    def __init__(self, tonic: Note, is_major: bool) -> None:
        self._tonic = tonic
        self._is_major = is_major

    @property
    def tonic(self) -> Note:
        """The tonic of the key."""
        return self._tonic

    @property
    def is_major(self) -> bool:
        return self._is_major

    @property
    def mode(self) -> str:
        """Mode code: 'M' for major, 'm' for minor."""
        return MAJOR if self._is_major else MINOR

    @property
    def mode_name(self) -> str:
        return "major" if self._is_major else "minor"

    def is_valid_key(self) -> bool:
        """
        Indicate whether this tonic/mode pair is a conventionally notated key.

        G major is valid; G# major is not (it would need a double sharp).
        """
        pair = (self._tonic.letter, self._tonic.accidental)
        return pair in _VALID_KEYS[self.mode]

    def get_key_signature(self, clef: str = DEFAULT_CLEF.value) -> KeySignature:
        """
        Get the key signature of this key in a clef.

        Args:
            clef: 'treble', 'bass', 'alto' or 'tenor' (others read as treble)

        Returns:
            The key signature
        """
        return KeySignature(self._tonic, self._is_major, clef)

    def relative(self) -> Tonality | None:
        """
        The relative key sharing this key's signature.

        C major -> A minor, F# minor -> A major. None when the relative
        tonic would need a triple accidental (Cbb minor, B## major).
        """
        interval = -Interval.MINOR_THIRD if self._is_major else Interval.MINOR_THIRD
        try:
            return Tonality(self._tonic.transpose(interval), not self._is_major)
        except ValueError:
            logger.debug("No relative key for %s", self)
            return None

    def accidental_count(self) -> int:
        """Signed number of accidentals: +n sharps, -n flats, 0 for none."""
        signature = self.get_key_signature()
        return len(signature) if signature.has_sharps() else -len(signature)

    def to_midi_key(self) -> str | None:
        """
        The MIDI key signature name of this key (e.g. 'F#m', 'Bb', 'C').

        Returns None for keys that are not conventionally notated,
        which MIDI key signatures cannot express.
        """
        if not self.is_valid_key():
            return None
        suffix = "" if self._is_major else "m"
        return f"{self._tonic.letter}{self._tonic.accidental}{suffix}"

    @classmethod
    def from_midi_key(cls, name: str) -> Tonality:
        """Build a tonality from a MIDI key signature name like 'C#m' or 'Eb'."""
        if name.endswith("m"):
            return cls(Note.parse(name[:-1]), False)
        return cls(Note.parse(name), True)

    @classmethod
    def get_valid_keys(cls, mode: str) -> list[Tonality]:
        """
        Get every conventional key in a mode, in circle-of-fifths order.

        Args:
            mode: 'M' (major) or 'm' (minor)

        Returns:
            The 15 keys of the mode, natural key first, then ascending sharps,
            then ascending flats. Empty for any other mode.
        """
        table = _KEY_TABLES.get(mode)
        if table is None:
            return []
        return [
            cls(Note(letter, accidental, TONIC_OCTAVE), mode == MAJOR)
            for letter, accidental in table
        ]

    @classmethod
    def parse(cls, name: str) -> Tonality:
        """
        Parse a key from a string.

        Accepts 'F# minor', 'Gn major', 'Bb_major', 'C#m' and 'Eb' (major).

        Args:
            name: Key name

        Returns:
            Parsed Tonality

        Raises:
            ValueError: If the text does not name a key
        """
        match = _KEY_PATTERN.match(name.strip())
        if match is None:
            raise ValueError(f"Invalid key format: {name}")

        tonic_str, mode_str, minor_suffix = match.groups()
        tonic = Note.parse(tonic_str)
        if minor_suffix:
            return cls(tonic, False)
        if mode_str is None:
            return cls(tonic, True)

        mode_word = mode_str.lower()
        if mode_word not in _MODE_WORDS:
            raise ValueError(f"Unknown mode: {mode_str}")
        return cls(tonic, _MODE_WORDS[mode_word])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tonality):
            return NotImplemented
        return self._tonic.same_pitch_name(other._tonic) and self._is_major == other._is_major

    def __hash__(self) -> int:
        return hash((self._tonic.letter, self._tonic.accidental, self._is_major))

    def __str__(self) -> str:
        return f"{self._tonic.letter_accidental} {self.mode_name}"

    def __repr__(self) -> str:
        return f"Tonality({self._tonic!r}, {self._is_major})"
