from __future__ import annotations

from types import MappingProxyType
from typing import Callable, Mapping

import numpy as np

from score_synth.envelope import DEFAULT_ENVELOPE, EnvelopeSettings, apply_envelope, normalize
from score_synth.mixing import SAMPLE_RATE, sample_count

BASE_AMPLITUDE = 0.5

# (frequency_hz, duration_s) -> samples
WaveformGenerator = Callable[[float, float], np.ndarray]


def _sample_times(duration: float) -> np.ndarray:
    return np.arange(sample_count(duration), dtype=np.float64) / SAMPLE_RATE


def _phase(frequency: float, t: np.ndarray) -> np.ndarray:
    return np.mod(frequency * t, 1.0)


def sine_wave(frequency: float, duration: float) -> np.ndarray:
    t = _sample_times(duration)
    return BASE_AMPLITUDE * np.sin(2.0 * np.pi * frequency * t)


def square_wave(frequency: float, duration: float) -> np.ndarray:
    t = _sample_times(duration)
    return BASE_AMPLITUDE * np.sign(np.sin(2.0 * np.pi * frequency * t))


def sawtooth_wave(frequency: float, duration: float) -> np.ndarray:
    t = _sample_times(duration)
    return BASE_AMPLITUDE * (2.0 * _phase(frequency, t) - 1.0)


def triangle_wave(frequency: float, duration: float) -> np.ndarray:
    t = _sample_times(duration)
    return BASE_AMPLITUDE * (2.0 * np.abs(2.0 * _phase(frequency, t) - 1.0) - 1.0)


RAW_WAVEFORMS: Mapping[str, WaveformGenerator] = MappingProxyType(
    {
        "sine": sine_wave,
        "square": square_wave,
        "sawtooth": sawtooth_wave,
        "triangle": triangle_wave,
    }
)

WAVEFORM_KINDS: tuple[str, ...] = tuple(RAW_WAVEFORMS)


def make_generator(kind: str = "sine", envelope: EnvelopeSettings = DEFAULT_ENVELOPE) -> WaveformGenerator:
    """Return the enveloped, normalized generator used to render notes and chords."""
    try:
        raw = RAW_WAVEFORMS[kind]
    except KeyError:
        raise ValueError(f"Unknown waveform kind: {kind!r} (expected one of {', '.join(WAVEFORM_KINDS)})") from None

    def generate(frequency: float, duration: float) -> np.ndarray:
        return normalize(apply_envelope(raw(frequency, duration), envelope))

    generate.__name__ = f"{kind}_generator"
    return generate
