import numpy as np
import pytest

from sonogram.dsp.transforms import (
    DEFAULT_FLOOR_DBFS,
    LEGACY_REFERENCE_OFFSET,
    LoudnessMapper,
    SpectralTransform,
    full_scale_offset,
    half_spectrum
)
from sonogram.dsp.window import hann_window


def test_spectral_transform_matches_windowed_fft() -> None:
    rng = np.random.default_rng(7)
    window = hann_window(256)
    frame = rng.uniform(-1.0, 1.0, 256)

    spectrum = SpectralTransform(window)(frame)

    assert spectrum.shape == (256,)
    np.testing.assert_allclose(spectrum, np.fft.fft(frame * window.coefficients), atol=1e-9)
    assert half_spectrum(spectrum).shape == (128,)


def test_spectral_transform_rejects_wrong_length() -> None:
    with pytest.raises(ValueError):
        SpectralTransform(hann_window(64))(np.zeros(32))


def test_full_scale_offset_2048() -> None:
    window = hann_window(2048)
    expected = 20 * np.log10(1023.5 / (2 * np.sqrt(767.625)))

    assert full_scale_offset(window) == pytest.approx(expected)


@pytest.mark.parametrize('fft_size, k', ((1024, 64), (2048, 100), (4096, 300)))
def test_full_scale_sine_near_zero_dbfs(
    fft_size,
    k
) -> None:
    window = hann_window(fft_size)
    n = np.arange(fft_size)
    frame = np.sin(2 * np.pi * k * n / fft_size)

    spectrum = SpectralTransform(window)(frame)
    mapper = LoudnessMapper.for_window(window)

    assert mapper.to_dbfs(spectrum[k]) == pytest.approx(0.0, abs=1.0)
    assert mapper(half_spectrum(spectrum))[k] == pytest.approx(0.0, abs=1.0)


def test_legacy_offset() -> None:
    energy = 767.625
    mapper = LoudnessMapper(energy, reference_offset=LEGACY_REFERENCE_OFFSET)
    coefficient = complex(np.sqrt(energy) * 10, 0.0)

    assert mapper.to_dbfs(coefficient) == pytest.approx(10.0)
    assert mapper.to_dbfs(coefficient, window_energy=energy * 100) == pytest.approx(-10.0)


def test_zero_magnitude_clamps_to_floor() -> None:
    mapper = LoudnessMapper.for_window(hann_window(64))
    dbfs = mapper(np.zeros(32, dtype=np.complex128))

    assert mapper.to_dbfs(0j) == DEFAULT_FLOOR_DBFS
    assert np.all(np.isfinite(dbfs))
    assert np.all(dbfs == DEFAULT_FLOOR_DBFS)


def test_vectorized_matches_scalar() -> None:
    rng = np.random.default_rng(3)
    coefficients = rng.normal(size=64) + 1j * rng.normal(size=64)
    coefficients[5] = 0
    coefficients[9] = 1e-12
    mapper = LoudnessMapper(100.0, reference_offset=0.0, floor=-80.0)

    expected = [mapper.to_dbfs(c) for c in coefficients]

    np.testing.assert_allclose(mapper(coefficients), expected)
    assert mapper(coefficients).min() == -80.0
