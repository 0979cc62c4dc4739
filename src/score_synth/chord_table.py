from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from score_synth.errors import InvalidChordError, InvalidNoteError
from score_synth.pitch_table import (
    CHROMATIC_SCALE,
    MAX_OCTAVE,
    MIN_OCTAVE,
    NOTE_FREQUENCIES,
    chromatic_index,
)

CHORD_INTERVALS: Mapping[str, tuple[int, ...]] = MappingProxyType(
    {
        # triads
        "Major": (0, 4, 7),
        "Minor": (0, 3, 7),
        "Diminished": (0, 3, 6),
        "Augmented": (0, 4, 8),
        "5": (0, 7),
        # sevenths
        "7": (0, 4, 7, 10),
        "maj7": (0, 4, 7, 11),
        "m7": (0, 3, 7, 10),
        "m7b5": (0, 3, 6, 10),
        "dim7": (0, 3, 6, 9),
        "aug7": (0, 4, 8, 10),
        "mMaj7": (0, 3, 7, 11),
        "maj7b5": (0, 4, 6, 11),
        "m7#5": (0, 3, 8, 10),
        # sixths
        "6": (0, 4, 7, 9),
        "m6": (0, 3, 7, 9),
        "6/9": (0, 4, 7, 9, 14),
        "m6/9": (0, 3, 7, 9, 14),
        # ninths
        "9": (0, 4, 7, 10, 14),
        "m9": (0, 3, 7, 10, 14),
        "maj9": (0, 4, 7, 11, 14),
        "7#9": (0, 4, 7, 10, 15),
        "7b9": (0, 4, 7, 10, 13),
        "aug9": (0, 4, 8, 10, 14),
        # extended / altered
        "11": (0, 4, 7, 10, 14, 17),
        "m11": (0, 3, 7, 10, 14, 17),
        "13": (0, 4, 7, 10, 14, 17, 21),
        "m13": (0, 3, 7, 10, 14, 17, 21),
        "sus2": (0, 2, 7),
        "sus4": (0, 5, 7),
        "7sus4": (0, 5, 7, 10),
        "maj7#11": (0, 4, 7, 11, 14, 18),
        "7alt": (0, 4, 7, 10, 13, 15, 21),  # b9, #9, b13
        "7b13": (0, 4, 7, 10, 14, 20),
        "13b9": (0, 4, 7, 10, 13, 17, 21),
        "13sus4": (0, 5, 7, 10, 14, 17, 21),
        "maj13": (0, 4, 7, 11, 14, 17, 21),
    }
)


def resolve_chord_intervals(quality: str) -> tuple[int, ...]:
    intervals = CHORD_INTERVALS.get(quality)
    if intervals is None:
        raise InvalidChordError(f"invalid chord: {quality!r}")
    return intervals


def chord_frequencies(root: str, quality: str, octave: int) -> tuple[float, ...]:
    """Resolve a chord to the tabulated frequencies of its tones, lowest first.

    Tones whose octave falls outside [0, 8] are dropped rather than clamped, so a
    chord near the top of the table may resolve to fewer tones (or none).
    """
    if isinstance(octave, bool) or not isinstance(octave, int):
        raise InvalidChordError(f"invalid octave for chord root {root!r}: {octave!r}")
    intervals = resolve_chord_intervals(quality)
    try:
        root_idx = chromatic_index(root)
    except InvalidNoteError:
        raise InvalidChordError(f"invalid root note: {root!r}") from None

    freqs: list[float] = []
    for interval in intervals:
        position = root_idx + interval
        target_octave = octave + position // 12
        if MIN_OCTAVE <= target_octave <= MAX_OCTAVE:
            freqs.append(NOTE_FREQUENCIES[CHROMATIC_SCALE[position % 12]][target_octave])
    return tuple(freqs)
