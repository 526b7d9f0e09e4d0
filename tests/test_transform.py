import cmath
import math
import random

import pytest

from voicepitch.kissfft import FFTPlan
from voicepitch.transform import KissFFT


def _random_input(n, seed):
    rng = random.Random(seed)
    return [complex(rng.random() - 0.5, rng.random() - 0.5) for _ in range(n)]


def _naive_dft(data, inverse=False):
    n = len(data)
    sign = 1.0 if inverse else -1.0
    roots = [cmath.exp(complex(0.0, sign * 2.0 * math.pi * k / n)) for k in range(n)]
    return [sum(x * roots[(k0 * k1) % n] for k1, x in enumerate(data)) for k0 in range(n)]


def _rmse(reference, result):
    total = sum(abs(z) ** 2 for z in reference)
    diff = sum(abs(a - b) ** 2 for a, b in zip(reference, result))
    return math.sqrt(diff / total)


@pytest.mark.parametrize("nfft", [32, 1024, 840])
def test_matches_direct_dft(nfft):
    data = _random_input(nfft, nfft)
    result = KissFFT(nfft, False).transform(data)
    assert len(result) == nfft
    assert _rmse(_naive_dft(data), result) < 1e-10


@pytest.mark.parametrize("nfft", [1, 2, 3, 5, 7, 9, 12, 25, 49, 60, 77])
def test_small_sizes_match_direct_dft(nfft):
    data = _random_input(nfft, 1000 + nfft)
    result = KissFFT(nfft).transform(data)
    expected = _naive_dft(data)
    for a, b in zip(expected, result):
        assert abs(a - b) < 1e-9


@pytest.mark.parametrize("nfft", [16, 30, 35])
def test_inverse_matches_direct_idft(nfft):
    data = _random_input(nfft, 7 * nfft)
    result = KissFFT(nfft, True).transform(data)
    assert _rmse(_naive_dft(data, inverse=True), result) < 1e-10


@pytest.mark.parametrize("nfft", [8, 45, 840])
def test_round_trip_scales_by_length(nfft):
    data = _random_input(nfft, 3 * nfft)
    spectrum = KissFFT(nfft).transform(data)
    back = KissFFT(nfft, True).transform(spectrum)
    for x, y in zip(data, back):
        assert abs(y / nfft - x) < 1e-12


@pytest.mark.parametrize("nfft", [64, 90, 121])
def test_agrees_with_plan_implementation(nfft):
    data = _random_input(nfft, 11 * nfft)
    a = KissFFT(nfft).transform(data)
    b = FFTPlan(nfft).transform(data)
    for x, y in zip(a, b):
        assert abs(x - y) < 1e-9


def test_impulse_gives_flat_spectrum():
    data = [1.0] + [0.0] * 15
    assert all(abs(z - 1.0) < 1e-12 for z in KissFFT(16).transform(data))


def test_invalid_size_raises():
    with pytest.raises(ValueError):
        KissFFT(0)


def test_wrong_input_length_raises():
    with pytest.raises(ValueError):
        KissFFT(8).transform([0j] * 7)