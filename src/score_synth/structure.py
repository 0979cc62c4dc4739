from __future__ import annotations

import logging
from dataclasses import dataclass, field

import numpy as np

from score_synth.envelope import DEFAULT_ENVELOPE, EnvelopeSettings, normalize
from score_synth.errors import InvalidEventTypeError
from score_synth.events import PLAYABLE_EVENT_TYPES, PlayableEvent
from score_synth.mixing import SAMPLE_RATE, concatenate_waveforms, mix_waveforms
from score_synth.waveforms import WaveformGenerator, make_generator

logger = logging.getLogger(__name__)

TimeSignature = tuple[int, int]


def _check_time_signature(time_signature: TimeSignature) -> None:
    if (
        len(time_signature) != 2
        or any(isinstance(v, bool) or not isinstance(v, int) or v <= 0 for v in time_signature)
    ):
        raise ValueError(f"Time signature must be two positive integers, got {time_signature!r}.")


def _check_items(items: list, allowed: type | tuple[type, ...], owner: str, expected: str) -> None:
    for item in items:
        if not isinstance(item, allowed):
            raise InvalidEventTypeError(f"{owner} items must be a {expected}, got {type(item).__name__}.")


@dataclass
class Bar:
    """Events played back to back. ``key`` and ``time_signature`` are metadata."""

    key: str = "C"
    time_signature: TimeSignature = (4, 4)
    events: list[PlayableEvent] = field(default_factory=list)

    def __post_init__(self) -> None:
        _check_time_signature(self.time_signature)
        events, self.events = list(self.events), []
        for event in events:
            self.add_note_or_chord(event)

    def add_note_or_chord(self, event: PlayableEvent) -> None:
        if not isinstance(event, PLAYABLE_EVENT_TYPES):
            raise InvalidEventTypeError(f"Bar items must be a Note or Chord, got {type(event).__name__}.")
        self.events.append(event)

    @property
    def num_samples(self) -> int:
        return sum(event.num_samples for event in self.events)

    @property
    def duration_s(self) -> float:
        return self.num_samples / SAMPLE_RATE

    def render(self, generator: WaveformGenerator) -> np.ndarray:
        _check_items(self.events, PLAYABLE_EVENT_TYPES, "Bar", "Note or Chord")
        return concatenate_waveforms(event.render(generator) for event in self.events)


@dataclass
class Track:
    """Bars played back to back."""

    key: str = "C"
    bars: list[Bar] = field(default_factory=list)

    def __post_init__(self) -> None:
        bars, self.bars = list(self.bars), []
        for bar in bars:
            self.add_bar(bar)

    def add_bar(self, bar: Bar) -> None:
        if not isinstance(bar, Bar):
            raise InvalidEventTypeError(f"Track items must be a Bar, got {type(bar).__name__}.")
        self.bars.append(bar)

    @property
    def num_samples(self) -> int:
        return sum(bar.num_samples for bar in self.bars)

    @property
    def duration_s(self) -> float:
        return self.num_samples / SAMPLE_RATE

    def render(self, generator: WaveformGenerator) -> np.ndarray:
        _check_items(self.bars, Bar, "Track", "Bar")
        return concatenate_waveforms(bar.render(generator) for bar in self.bars)


@dataclass
class Song:
    """Tracks that all start at time zero and are mixed into one buffer."""

    key: str = "C"
    time_signature: TimeSignature = (4, 4)
    tracks: list[Track] = field(default_factory=list)

    def __post_init__(self) -> None:
        _check_time_signature(self.time_signature)
        tracks, self.tracks = list(self.tracks), []
        for track in tracks:
            self.add_track(track)

    def add_track(self, track: Track) -> None:
        if not isinstance(track, Track):
            raise InvalidEventTypeError(f"Song items must be a Track, got {type(track).__name__}.")
        self.tracks.append(track)

    @property
    def num_samples(self) -> int:
        return max((track.num_samples for track in self.tracks), default=0)

    @property
    def duration_s(self) -> float:
        return self.num_samples / SAMPLE_RATE

    def render(self, generator: WaveformGenerator) -> np.ndarray:
        _check_items(self.tracks, Track, "Song", "Track")
        # Tracks are summed in insertion order for reproducible output.
        track_waves = [track.render(generator) for track in self.tracks]
        return normalize(mix_waveforms(track_waves))


def render(song: Song, waveform_kind: str = "sine", envelope: EnvelopeSettings = DEFAULT_ENVELOPE) -> np.ndarray:
    """Render ``song`` to mono float samples in [-1, 1] at 44100 Hz."""
    generator = make_generator(waveform_kind, envelope)
    samples = song.render(generator)
    logger.debug(
        "Rendered %d tracks with %s waveform: %d samples (%.3fs)",
        len(song.tracks),
        waveform_kind,
        len(samples),
        len(samples) / SAMPLE_RATE,
    )
    return samples
