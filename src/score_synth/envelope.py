from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from score_synth.mixing import SAMPLE_RATE


@dataclass(frozen=True)
class EnvelopeSettings:
    """ADSR shape applied to every generated tone.

    Times are in seconds and converted to whole sample counts; each phase is
    additionally capped at a quarter of the buffer so short notes still get a
    complete (if compressed) attack and release.
    """

    attack_s: float = 0.02
    decay_s: float = 0.05
    sustain_level: float = 0.7
    release_s: float = 0.05

    def __post_init__(self) -> None:
        if self.attack_s < 0 or self.decay_s < 0 or self.release_s < 0:
            raise ValueError("Envelope times must be >= 0.")
        if not (0.0 <= self.sustain_level <= 1.0):
            raise ValueError("Envelope sustain_level must be in [0,1].")

    def phase_lengths(self, length: int, sample_rate: int = SAMPLE_RATE) -> tuple[int, int, int]:
        quarter = length // 4
        attack = min(int(self.attack_s * sample_rate), quarter)
        decay = min(int(self.decay_s * sample_rate), quarter)
        release = min(int(self.release_s * sample_rate), quarter)
        return attack, decay, release


DEFAULT_ENVELOPE = EnvelopeSettings()


def envelope_curve(length: int, settings: EnvelopeSettings = DEFAULT_ENVELOPE, sample_rate: int = SAMPLE_RATE) -> np.ndarray:
    attack, decay, release = settings.phase_lengths(length, sample_rate)
    sustain = settings.sustain_level

    curve = np.full(length, sustain, dtype=np.float64)
    if attack > 0:
        curve[:attack] = np.arange(attack, dtype=np.float64) / attack
    if decay > 0:
        curve[attack : attack + decay] = 1.0 - (1.0 - sustain) * np.arange(decay, dtype=np.float64) / decay
    if release > 0:
        curve[length - release :] = sustain * (1.0 - np.arange(release, dtype=np.float64) / release)
    return curve


def apply_envelope(
    samples: np.ndarray,
    settings: EnvelopeSettings = DEFAULT_ENVELOPE,
    sample_rate: int = SAMPLE_RATE,
) -> np.ndarray:
    samples = np.asarray(samples, dtype=np.float64)
    return samples * envelope_curve(len(samples), settings, sample_rate)


def normalize(samples: np.ndarray) -> np.ndarray:
    """Scale so the peak absolute sample is 1.0; all-zero input stays all-zero."""
    samples = np.asarray(samples, dtype=np.float64)
    if samples.size == 0:
        return samples.copy()
    peak = float(np.max(np.abs(samples)))
    if peak == 0.0:
        peak = 1.0
    return samples / peak
