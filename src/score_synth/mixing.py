from __future__ import annotations

from typing import Iterable

import numpy as np

SAMPLE_RATE = 44100


def sample_count(duration_s: float, sample_rate: int = SAMPLE_RATE) -> int:
    return max(0, int(round(sample_rate * duration_s)))


def silence(duration_s: float, sample_rate: int = SAMPLE_RATE) -> np.ndarray:
    return np.zeros(sample_count(duration_s, sample_rate), dtype=np.float64)


def concatenate_waveforms(waveforms: Iterable[np.ndarray]) -> np.ndarray:
    """Place buffers end to end; the result length is the sum of the inputs."""
    parts = [np.asarray(w, dtype=np.float64) for w in waveforms]
    if not parts:
        return np.zeros(0, dtype=np.float64)
    return np.concatenate(parts)


def mix_waveforms(waveforms: Iterable[np.ndarray]) -> np.ndarray:
    """Sum buffers sample-wise from time zero, zero-padding the shorter ones.

    Buffers are accumulated in iteration order so repeated mixes of the same
    input are bit-identical.
    """
    parts = [np.asarray(w, dtype=np.float64) for w in waveforms]
    length = max((len(p) for p in parts), default=0)
    mixed = np.zeros(length, dtype=np.float64)
    for part in parts:
        mixed[: len(part)] += part
    return mixed
