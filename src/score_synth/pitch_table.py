from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from score_synth.errors import InvalidNoteError

MIN_OCTAVE = 0
MAX_OCTAVE = 8

CHROMATIC_SCALE: tuple[str, ...] = ("C", "Db", "D", "Eb", "E", "F", "Gb", "G", "Ab", "A", "Bb", "B")

# Octaves 0-8 per pitch, tabulated values (not derived from A440 equal temperament).
NOTE_FREQUENCIES: Mapping[str, tuple[float, ...]] = MappingProxyType(
    {
        "C": (16.35, 32.70, 65.41, 130.81, 261.63, 523.25, 1046.50, 2093.00, 4186.01),
        "Db": (17.32, 34.65, 69.30, 138.59, 277.18, 554.37, 1108.73, 2217.46, 4434.92),
        "D": (18.35, 36.71, 73.42, 146.83, 293.66, 587.33, 1174.66, 2349.32, 4698.63),
        "Eb": (19.45, 38.89, 77.78, 155.56, 311.13, 622.25, 1244.51, 2489.02, 4978.03),
        "E": (20.60, 41.20, 82.41, 164.81, 329.63, 659.25, 1318.51, 2637.02, 5274.04),
        "F": (21.83, 43.65, 87.31, 174.61, 349.23, 698.46, 1396.91, 2793.83, 5587.65),
        "Gb": (23.12, 46.25, 92.50, 185.00, 369.99, 739.99, 1479.98, 2959.96, 5919.91),
        "G": (24.50, 49.00, 98.00, 196.00, 392.00, 783.99, 1567.98, 3135.96, 6271.93),
        "Ab": (25.96, 51.91, 103.83, 207.65, 415.30, 830.61, 1661.22, 3322.44, 6644.88),
        "A": (27.50, 55.00, 110.00, 220.00, 440.00, 880.00, 1760.00, 3520.00, 7040.00),
        "Bb": (29.14, 58.27, 116.54, 233.08, 466.16, 932.33, 1864.66, 3729.31, 7458.62),
        "B": (30.87, 61.74, 123.47, 246.94, 493.88, 987.77, 1975.53, 3951.07, 7902.13),
    }
)

NOTE_ALIASES: Mapping[str, str] = MappingProxyType(
    {
        "A#": "Bb",
        "C#": "Db",
        "D#": "Eb",
        "F#": "Gb",
        "G#": "Ab",
    }
)

# Fraction-of-a-beat values, used directly as seconds. Short spellings are kept
# for scores written against the original note-type names.
NOTE_TYPE_DURATIONS: Mapping[str, float] = MappingProxyType(
    {
        "whole": 1.0,
        "half": 0.5,
        "quarter": 0.25,
        "eighth": 0.125,
        "sixteenth": 0.0625,
        "w": 1.0,
        "h": 0.5,
        "qtr": 0.25,
        "eigth": 0.125,
    }
)


def canonical_pitch_name(pitch_name: str) -> str:
    return NOTE_ALIASES.get(pitch_name, pitch_name)


def chromatic_index(pitch_name: str) -> int:
    name = canonical_pitch_name(pitch_name)
    try:
        return CHROMATIC_SCALE.index(name)
    except ValueError:
        raise InvalidNoteError(f"invalid note: {pitch_name!r}") from None


def resolve_frequency(pitch_name: str, octave: int) -> float:
    """Look up the tabulated frequency in Hz for ``pitch_name`` at ``octave``.

    Sharp spellings are mapped to their flat equivalent first. Raises
    ``InvalidNoteError`` for unknown names or octaves outside [0, 8].
    """
    name = canonical_pitch_name(pitch_name)
    row = NOTE_FREQUENCIES.get(name)
    if row is None:
        raise InvalidNoteError(f"invalid note: {pitch_name!r}")
    if isinstance(octave, bool) or not isinstance(octave, int) or not (MIN_OCTAVE <= octave <= MAX_OCTAVE):
        raise InvalidNoteError(f"invalid octave for {pitch_name!r}: {octave!r} (expected {MIN_OCTAVE}-{MAX_OCTAVE})")
    return row[octave]


def note_type_duration(note_type: str) -> float:
    return NOTE_TYPE_DURATIONS.get(note_type, 0.0)


def split_note_name(value: str) -> tuple[str, int]:
    """Split a compact note spelling such as ``"C#4"`` into ``("C#", 4)``."""
    text = value.strip()
    idx = len(text)
    while idx > 0 and text[idx - 1].isdigit():
        idx -= 1
    name, digits = text[:idx], text[idx:]
    if not name or not digits:
        raise InvalidNoteError(f"invalid note name: {value!r}")
    return name, int(digits)
