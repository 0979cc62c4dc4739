from __future__ import annotations

import wave
from pathlib import Path

import numpy as np

from score_synth.mixing import SAMPLE_RATE


def _get_sd():
    import sounddevice as sd

    return sd


def to_pcm16(samples: np.ndarray) -> np.ndarray:
    clipped = np.clip(np.asarray(samples, dtype=np.float64), -1.0, 1.0)
    return (clipped * 32767.0).astype(np.int16)


def to_pcm16_bytes(samples: np.ndarray, big_endian: bool = True) -> bytes:
    """Encode as signed 16-bit mono frames; big-endian matches line-out players."""
    dtype = ">i2" if big_endian else "<i2"
    return to_pcm16(samples).astype(dtype).tobytes()


def write_wav(path: str | Path, samples: np.ndarray, sample_rate: int = SAMPLE_RATE) -> Path:
    output = Path(path)
    output.parent.mkdir(parents=True, exist_ok=True)
    with wave.open(str(output), "wb") as f:
        f.setnchannels(1)
        f.setsampwidth(2)
        f.setframerate(int(sample_rate))
        f.writeframes(to_pcm16_bytes(samples, big_endian=False))
    return output


def play_samples(samples: np.ndarray, sample_rate: int = SAMPLE_RATE, tail_seconds: float = 0.0) -> None:
    sd = _get_sd()
    audio = np.asarray(samples, dtype=np.float32)
    if tail_seconds > 0:
        audio = np.concatenate([audio, np.zeros(int(round(tail_seconds * sample_rate)), dtype=np.float32)])
    sd.play(audio, samplerate=int(sample_rate), blocking=True)
