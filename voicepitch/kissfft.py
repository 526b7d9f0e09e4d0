"""Mixed-radix complex FFT with radix 2, 3, 4 and 5 butterflies and a generic fallback."""

from __future__ import annotations

import cmath
import math
from collections.abc import Sequence

__all__ = ["FFTPlan", "factorize", "next_fast_size", "next_fast_size_real", "fft"]


def factorize(n: int) -> list[tuple[int, int]]:
    """Split ``n`` into (radix, remainder) stages: fours first, then twos, then odd primes.

    Each stage's remainder equals the next stage's radix times its remainder;
    the last remainder is 1.
    """
    if n < 1:
        raise ValueError(f"FFT size must be positive, got {n}")
    floor_sqrt = math.isqrt(n)
    stages: list[tuple[int, int]] = []
    p = 4
    while True:
        while n % p:
            if p == 4:
                p = 2
            elif p == 2:
                p = 3
            else:
                p += 2
            if p > floor_sqrt:
                p = n
        n //= p
        stages.append((p, n))
        if n <= 1:
            return stages


def next_fast_size(n: int) -> int:
    """Return the smallest k >= n whose only prime factors are 2, 3 and 5."""
    if n < 1:
        raise ValueError(f"size must be positive, got {n}")
    while True:
        m = n
        for radix in (2, 3, 5):
            while m % radix == 0:
                m //= radix
        if m <= 1:
            return n
        n += 1


def next_fast_size_real(n: int) -> int:
    """Return an even fast size suitable for a real FFT of at least ``n`` points."""
    return next_fast_size((n + 1) >> 1) << 1


class FFTPlan:
    """A precomputed forward or inverse complex FFT of a fixed size.

    The inverse transform is not scaled: a forward then inverse transform
    multiplies the input by ``nfft``.
    """

    __slots__ = ("nfft", "inverse", "factors", "twiddles")

    def __init__(self, nfft: int, inverse: bool = False) -> None:
        if nfft < 1:
            raise ValueError(f"FFT size must be positive, got {nfft}")
        self.nfft = nfft
        self.inverse = bool(inverse)
        sign = 1.0 if self.inverse else -1.0
        self.twiddles: tuple[complex, ...] = tuple(
            cmath.exp(complex(0.0, sign * 2.0 * math.pi * i / nfft)) for i in range(nfft)
        )
        self.factors: tuple[tuple[int, int], ...] = tuple(factorize(nfft))

    def __repr__(self) -> str:
        return f"FFTPlan(nfft={self.nfft}, inverse={self.inverse})"

    def transform(self, data: Sequence[complex], stride: int = 1) -> list[complex]:
        """Transform ``nfft`` samples of ``data`` taken every ``stride`` elements."""
        if stride < 1:
            raise ValueError(f"stride must be positive, got {stride}")
        needed = (self.nfft - 1) * stride + 1
        if len(data) < needed:
            raise ValueError(
                f"need at least {needed} input samples for nfft={self.nfft}, "
                f"stride={stride}; got {len(data)}"
            )
        samples = [complex(x) for x in data]
        out = [0j] * self.nfft
        self._work(out, 0, samples, 0, 1, stride, 0)
        return out

    def _work(
        self,
        out: list[complex],
        out_off: int,
        data: list[complex],
        in_off: int,
        fstride: int,
        in_stride: int,
        stage: int,
    ) -> None:
        p, m = self.factors[stage]
        step = fstride * in_stride
        if m == 1:
            for k in range(p):
                out[out_off + k] = data[in_off + k * step]
        else:
            for k in range(p):
                self._work(out, out_off + k * m, data, in_off + k * step,
                           fstride * p, in_stride, stage + 1)

        if p == 2:
            self._bfly2(out, out_off, fstride, m)
        elif p == 3:
            self._bfly3(out, out_off, fstride, m)
        elif p == 4:
            self._bfly4(out, out_off, fstride, m)
        elif p == 5:
            self._bfly5(out, out_off, fstride, m)
        else:
            self._bfly_generic(out, out_off, fstride, m, p)

    def _bfly2(self, f: list[complex], o: int, fstride: int, m: int) -> None:
        tw = self.twiddles
        for k in range(m):
            t = f[o + m + k] * tw[k * fstride]
            f[o + m + k] = f[o + k] - t
            f[o + k] += t

    def _bfly3(self, f: list[complex], o: int, fstride: int, m: int) -> None:
        tw = self.twiddles
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
        tw = self.twiddles
        inverse = self.inverse
        for k in range(m):
            a, b, c, d = o + k, o + k + m, o + k + 2 * m, o + k + 3 * m
            s0 = f[b] * tw[k * fstride]
            s1 = f[c] * tw[2 * k * fstride]
            s2 = f[d] * tw[3 * k * fstride]
            s5 = f[a] - s1
            f[a] += s1
            s3 = s0 + s2
            s4 = s0 - s2
            f[c] = f[a] - s3
            f[a] += s3
            if inverse:
                f[b] = s5 + 1j * s4
                f[d] = s5 - 1j * s4
            else:
                f[b] = s5 - 1j * s4
                f[d] = s5 + 1j * s4

    def _bfly5(self, f: list[complex], o: int, fstride: int, m: int) -> None:
        tw = self.twiddles
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
        tw = self.twiddles
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


def fft(data: Sequence[complex], inverse: bool = False) -> list[complex]:
    """Transform all of ``data`` with a plan sized to its length."""
    if not data:
        raise ValueError("cannot transform an empty sequence")
    return FFTPlan(len(data), inverse).transform(data)