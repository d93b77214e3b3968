"""
MIDI export - key signatures as MIDI files.

A MIDI key signature is a single meta event naming the key ('F#m', 'Bb').
This module writes it using mido, optionally followed by the tonic as a
sustained note so the file is audible, and reads it back.
All operations are deterministic: same key -> same MIDI file.
"""

from __future__ import annotations

import logging

from mido import Message, MetaMessage, MidiFile, MidiTrack

from chuk_mcp_tonality.core.tonality import Tonality

logger = logging.getLogger(__name__)

# Standard ticks per beat (quarter note) - industry standard
TICKS_PER_BEAT = 480

# One 4/4 bar, the length of the tonic note
TICKS_PER_BAR = TICKS_PER_BEAT * 4

TONIC_VELOCITY = 90


def key_signature_message(tonality: Tonality) -> MetaMessage:
    """
    Build the key_signature meta message for a key.

    Raises:
        ValueError: If the key is not conventionally notated
    """
    midi_key = tonality.to_midi_key()
    if midi_key is None:
        raise ValueError(f"'{tonality}' has no MIDI key signature")
    return MetaMessage("key_signature", key=midi_key, time=0)


def tonality_to_midi(
    tonality: Tonality,
    tempo_bpm: int = 120,
    include_tonic: bool = True,
) -> MidiFile:
    """
    Create a MIDI file announcing a key.

    Args:
        tonality: The key (must be conventionally notated)
        tempo_bpm: Tempo in beats per minute
        include_tonic: Sustain the tonic for one bar after the key signature

    Returns:
        A mido MidiFile with a key_signature meta event

    Raises:
        ValueError: If the key has no MIDI key signature
    """
    signature = key_signature_message(tonality)

    mid = MidiFile(ticks_per_beat=TICKS_PER_BEAT)
    track = MidiTrack()
    mid.tracks.append(track)

    # Set tempo (microseconds per beat)
    tempo_us = int(60_000_000 / tempo_bpm)
    track.append(MetaMessage("set_tempo", tempo=tempo_us, time=0))
    track.append(signature)

    if include_tonic:
        pitch = tonality.tonic.midi
        track.append(Message("note_on", note=pitch, velocity=TONIC_VELOCITY, time=0))
        track.append(Message("note_off", note=pitch, velocity=0, time=TICKS_PER_BAR))

    track.append(MetaMessage("end_of_track", time=0))

    logger.debug("Wrote %s as MIDI key %s", tonality, signature.key)
    return mid


def read_tonality(mid: MidiFile) -> Tonality | None:
    """
    Get the key of a MIDI file from its first key_signature meta event.

    Returns:
        The key, or None if the file carries no key signature
    """
    for track in mid.tracks:
        for msg in track:
            if msg.is_meta and msg.type == "key_signature":
                return Tonality.from_midi_key(msg.key)
    return None
