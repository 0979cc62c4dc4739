from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, Union

import numpy as np

from score_synth.chord_table import chord_frequencies
from score_synth.envelope import normalize
from score_synth.mixing import sample_count, silence
from score_synth.pitch_table import note_type_duration, resolve_frequency
from score_synth.waveforms import WaveformGenerator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Note:
    """A single pitched tone, or a rest when ``pitch`` is ``None``.

    - ``pitch`` is a pitch name such as ``"Eb"`` or ``"C#"``.
    - ``octave`` is the table octave from 0 to 8 (ignored for rests).
    - ``note_type`` is a duration name such as ``"quarter"``; unknown names give
      a zero-length note.

    The frequency is resolved on construction, so an unknown pitch or octave
    raises ``InvalidNoteError`` before the note can be added to a bar.
    """

    pitch: Optional[str]
    octave: int
    note_type: str
    duration: float = field(init=False)
    frequency: float = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "duration", note_type_duration(self.note_type))
        frequency = 0.0 if self.pitch is None else resolve_frequency(self.pitch, self.octave)
        object.__setattr__(self, "frequency", frequency)

    @classmethod
    def rest(cls, note_type: str) -> "Note":
        return cls(pitch=None, octave=0, note_type=note_type)

    @property
    def is_rest(self) -> bool:
        return self.pitch is None

    @property
    def num_samples(self) -> int:
        return sample_count(self.duration)

    def render(self, generator: WaveformGenerator) -> np.ndarray:
        if self.is_rest:
            return silence(self.duration)
        return generator(self.frequency, self.duration)


@dataclass(frozen=True)
class Chord:
    """Several tones built from a root and a chord quality, sounded together."""

    root: str
    quality: str
    note_type: str
    octave: int
    duration: float = field(init=False)
    frequencies: tuple[float, ...] = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "duration", note_type_duration(self.note_type))
        frequencies = chord_frequencies(self.root, self.quality, self.octave)
        object.__setattr__(self, "frequencies", frequencies)
        if not frequencies:
            logger.debug("Chord %s %s at octave %d has no tones in range", self.root, self.quality, self.octave)

    @property
    def num_samples(self) -> int:
        return sample_count(self.duration)

    def render(self, generator: WaveformGenerator) -> np.ndarray:
        chord_wave = silence(self.duration)
        for frequency in self.frequencies:
            note_wave = generator(frequency, self.duration)
            n = min(len(chord_wave), len(note_wave))
            chord_wave[:n] += note_wave[:n]
        return normalize(chord_wave)


PlayableEvent = Union[Note, Chord]
PLAYABLE_EVENT_TYPES = (Note, Chord)
