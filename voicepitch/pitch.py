"""Voiced/unvoiced detection and autocorrelation pitch estimation on PCM frames."""

from __future__ import annotations

import logging
import math
import struct
import time
from collections.abc import Sequence

from voicepitch.kissfft import FFTPlan

__all__ = [
    "hanning_coef",
    "find_max_index",
    "find_closest_index",
    "decode_pcm16",
    "PitchDetector",
    "SAMPLE_RATE",
    "FRAME_SIZE",
    "VOICED_THRESHOLD",
    "UNVOICED",
]

SAMPLE_RATE = 48000
FRAME_SIZE = 1024
VOICED_THRESHOLD = 80000000
UNVOICED = -1.0

_log = logging.getLogger(__name__)


def hanning_coef(n: int, idx: int) -> float:
    """Coefficient ``idx`` of an ``n``-point Hann window."""
    if n < 2:
        raise ValueError(f"window length must be at least 2, got {n}")
    return 0.5 * (1.0 - math.cos(2.0 * math.pi * idx / (n - 1)))


def _check_range(values: Sequence[float], min_idx: int, max_idx: int) -> None:
    if not 0 <= min_idx < len(values) or max_idx > len(values):
        raise IndexError(f"range [{min_idx}, {max_idx}) outside sequence of {len(values)}")


def find_max_index(values: Sequence[float], min_idx: int, max_idx: int) -> int:
    """Index of the first largest value in ``values[min_idx:max_idx]``.

    ``min_idx`` is returned if the range is empty.
    """
    _check_range(values, min_idx, max_idx)
    best = min_idx
    for i in range(min_idx, max_idx):
        if values[i] > values[best]:
            best = i
    return best


def find_closest_index(values: Sequence[float], value: float, min_idx: int, max_idx: int) -> int:
    """Index of the first element of ``values[min_idx:max_idx]`` nearest to ``value``."""
    _check_range(values, min_idx, max_idx)
    best = min_idx
    best_resid = abs(values[best] - value)
    for i in range(min_idx, max_idx):
        resid = abs(values[i] - value)
        if resid < best_resid:
            best_resid = resid
            best = i
    return best


def decode_pcm16(data: bytes, count: int) -> list[float]:
    """Decode ``count`` signed little-endian 16-bit samples from the start of ``data``."""
    if count < 0:
        raise ValueError(f"sample count must not be negative, got {count}")
    needed = 2 * count
    if len(data) < needed:
        raise ValueError(f"need {needed} bytes for {count} samples, got {len(data)}")
    return [float(s) for s in struct.unpack(f"<{count}h", bytes(data[:needed]))]


class PitchDetector:
    """Estimates the pitch of mono PCM-16 frames by autocorrelation.

    A frame whose energy (sum of squared samples) is below ``voiced_threshold``
    is unvoiced and gives -1.  Otherwise the circular autocorrelation is
    computed as ``ifft(|fft(x)|**2)`` and its peak lag ``l`` is searched in
    ``[frame_size // 10, frame_size - frame_size // 10)``; the pitch is
    ``sample_rate / l``.
    """

    __slots__ = ("sample_rate", "frame_size", "voiced_threshold", "last_frequency",
                 "_forward", "_inverse")

    def __init__(
        self,
        sample_rate: int = SAMPLE_RATE,
        frame_size: int = FRAME_SIZE,
        voiced_threshold: float = VOICED_THRESHOLD,
    ) -> None:
        if sample_rate <= 0:
            raise ValueError(f"sample rate must be positive, got {sample_rate}")
        if frame_size < 10:
            raise ValueError(f"frame size must be at least 10, got {frame_size}")
        self.sample_rate = sample_rate
        self.frame_size = frame_size
        self.voiced_threshold = voiced_threshold
        self.last_frequency = UNVOICED
        self._forward = FFTPlan(frame_size, False)
        self._inverse = FFTPlan(frame_size, True)

    def __repr__(self) -> str:
        return (f"PitchDetector(sample_rate={self.sample_rate}, frame_size={self.frame_size}, "
                f"voiced_threshold={self.voiced_threshold})")

    def process_frame(self, data: bytes) -> float:
        """Analyse one frame of PCM-16 bytes; return and remember the detected pitch."""
        start = time.perf_counter()
        samples = decode_pcm16(data, self.frame_size)

        energy = sum(x * x for x in samples)
        if energy < self.voiced_threshold:
            self.last_frequency = UNVOICED
        else:
            spectrum = self._forward.transform(samples)
            power = [z.real * z.real + z.imag * z.imag for z in spectrum]
            autocorrelation = [z.real for z in self._inverse.transform(power)]
            edge = self.frame_size // 10
            lag = find_max_index(autocorrelation, edge, self.frame_size - edge)
            self.last_frequency = self.sample_rate / lag

        _log.debug("Time delay: %d us", int((time.perf_counter() - start) * 1e6))
        return self.last_frequency