"""Self-contained mixed-radix complex FFT over Python complex numbers."""

from __future__ import annotations

import cmath
import math
from collections.abc import Sequence

__all__ = ["KissFFT"]


def _stages(nfft: int) -> tuple[tuple[int, int], ...]:
    """Factor ``nfft`` into (radix, remainder) stages: fours, twos, then odd numbers."""
    stages: list[tuple[int, int]] = []
    n = nfft
    p = 4
    while True:
        while n % p:
            if p == 4:
                p = 2
            elif p == 2:
                p = 3
            else:
                p += 2
            if p * p > n:
                p = n
        n //= p
        stages.append((p, n))
        if n <= 1:
            return tuple(stages)


class KissFFT:
    """A forward or inverse complex FFT of fixed length ``nfft``.

    The inverse is unscaled: transforming forward then inverse multiplies
    the input by ``nfft``.
    """

    __slots__ = ("nfft", "inverse", "_twiddles", "_stages")

    def __init__(self, nfft: int, inverse: bool = False) -> None:
        if nfft < 1:
            raise ValueError(f"FFT size must be positive, got {nfft}")
        self.nfft = nfft
        self.inverse = bool(inverse)
        phinc = (2.0 if self.inverse else -2.0) * math.pi / nfft
        self._twiddles = tuple(cmath.exp(complex(0.0, i * phinc)) for i in range(nfft))
        self._stages = _stages(nfft)

    def __repr__(self) -> str:
        return f"KissFFT(nfft={self.nfft}, inverse={self.inverse})"

    def transform(self, src: Sequence[complex]) -> list[complex]:
        """Return the transform of the ``nfft`` values in ``src``."""
        if len(src) != self.nfft:
            raise ValueError(f"expected {self.nfft} values, got {len(src)}")
        data = [complex(x) for x in src]
        out = [0j] * self.nfft
        self._work(0, out, 0, data, 0, 1, 1)
        return out

    def _work(
        self,
        stage: int,
        out: list[complex],
        oo: int,
        src: list[complex],
        io: int,
        fstride: int,
        in_stride: int,
    ) -> None:
        p, m = self._stages[stage]
        step = fstride * in_stride
        if m == 1:
            for k in range(p):
                out[oo + k] = src[io + k * step]
        else:
            for k in range(p):
                self._work(stage + 1, out, oo + k * m, src, io + k * step, fstride * p, in_stride)

        if p == 2:
            self._bfly2(out, oo, fstride, m)
        elif p == 3:
            self._bfly3(out, oo, fstride, m)
        elif p == 4:
            self._bfly4(out, oo, fstride, m)
        elif p == 5:
            self._bfly5(out, oo, fstride, m)
        else:
            self._bfly_generic(out, oo, fstride, m, p)

    def _bfly2(self, f: list[complex], o: int, fstride: int, m: int) -> None:
        tw = self._twiddles
        for k in range(m):
            t = f[o + m + k] * tw[k * fstride]
            f[o + m + k] = f[o + k] - t
            f[o + k] += t

    def _bfly3(self, f: list[complex], o: int, fstride: int, m: int) -> None:
        tw = self._twiddles
        epi3 = tw[fstride * m].imag
        for k in range(m):
            a, b, c = o + k, o + k + m, o + k + 2 * m
            s1 = f[b] * tw[k * fstride]
            s2 = f[c] * tw[2 * k * fstride]
            s3 = s1 + s2
            s0 = (s1 - s2) * epi3
            fm = f[a] - s3 * 0.5
            f[a] += s3
            f[c] = fm - 1j * s0
            f[b] = fm + 1j * s0

    def _bfly4(self, f: list[complex], o: int, fstride: int, m: int) -> None:
        tw = self._twiddles
        rot = 1j if self.inverse else -1j
        for k in range(m):
            a, b, c, d = o + k, o + k + m, o + k + 2 * m, o + k + 3 * m
            s0 = f[b] * tw[k * fstride]
            s1 = f[c] * tw[2 * k * fstride]
            s2 = f[d] * tw[3 * k * fstride]
            s5 = f[a] - s1
            f[a] += s1
            s3 = s0 + s2
            s4 = (s0 - s2) * rot
            f[c] = f[a] - s3
            f[a] += s3
            f[b] = s5 + s4
            f[d] = s5 - s4

    def _bfly5(self, f: list[complex], o: int, fstride: int, m: int) -> None:
        tw = self._twiddles
        ya = tw[fstride * m]
        yb = tw[fstride * 2 * m]
        for u in range(m):
            i0, i1, i2, i3, i4 = (o + u + j * m for j in range(5))
            s0 = f[i0]
            s1 = f[i1] * tw[u * fstride]
            s2 = f[i2] * tw[2 * u * fstride]
            s3 = f[i3] * tw[3 * u * fstride]
            s4 = f[i4] * tw[4 * u * fstride]

            s7 = s1 + s4
            s10 = s1 - s4
            s8 = s2 + s3
            s9 = s2 - s3

            f[i0] = s0 + s7 + s8

            s5 = s0 + s7 * ya.real + s8 * yb.real
            s6 = -1j * (s10 * ya.imag + s9 * yb.imag)
            f[i1] = s5 - s6
            f[i4] = s5 + s6

            s11 = s0 + s7 * yb.real + s8 * ya.real
            s12 = 1j * (s10 * yb.imag - s9 * ya.imag)
            f[i2] = s11 + s12
            f[i3] = s11 - s12

    def _bfly_generic(self, f: list[complex], o: int, fstride: int, m: int, p: int) -> None:
        tw = self._twiddles
        norig = self.nfft
        for u in range(m):
            scratch = [f[o + u + q1 * m] for q1 in range(p)]
            for q1 in range(p):
                k = u + q1 * m
                twidx = 0
                acc = scratch[0]
                for q in range(1, p):
                    twidx += fstride * k
                    if twidx >= norig:
                        twidx -= norig
                    acc += scratch[q] * tw[twidx]
                f[o + k] = acc