"""
Per-frame spectral transforms.
Inherits from torch.nn.Module so the stages compose with nn.Sequential.
"""

import numpy as np
import torch.nn as nn
from scipy import fft

from sonogram.dsp.window import Window


__all__ = [
    'LEGACY_REFERENCE_OFFSET',
    'DEFAULT_FLOOR_DBFS',
    'full_scale_offset',
    'half_spectrum',
    'SpectralTransform',
    'LoudnessMapper'
]


# fixed window-gain compensation of the first renderer, kept for comparison
LEGACY_REFERENCE_OFFSET = 10.0

# lowest palette threshold
DEFAULT_FLOOR_DBFS = -120.0


def full_scale_offset(
    window: Window
) -> float:
    """Level in dB of a bin-aligned full-scale sinusoid after energy normalization.

    Subtracting it places such a sinusoid at 0 dBFS for any window size.
    """
    return float(20 * np.log10(window.coherent_gain / (2 * np.sqrt(window.energy))))


def half_spectrum(
    spectrum: np.ndarray
) -> np.ndarray:
    """Non-redundant bins 0 .. n/2 - 1 of a real-input spectrum."""
    return spectrum[:len(spectrum) // 2]


class SpectralTransform(nn.Module):
    """Window a frame and compute its DFT.

    Input: [fft_size] real samples
    Output: [fft_size] complex coefficients
    """

    def __init__(self, window: Window):
        super().__init__()
        self.window = window

    def forward(self, frame: np.ndarray) -> np.ndarray:
        if len(frame) != self.window.size:
            raise ValueError(f'Frame length {len(frame)} does not match window size {self.window.size}')
        return fft.fft(frame * self.window.coefficients)


class LoudnessMapper(nn.Module):
    """Convert complex bin coefficients to dBFS.

    dBFS = 20 * log10(|c| / sqrt(window_energy)) - reference_offset

    Results that are non-finite or below `floor` are clamped to `floor`.

    Input: [n_bins] complex coefficients
    Output: [n_bins] dBFS values
    """

    def __init__(
        self,
        window_energy: float,
        reference_offset: float,
        floor: float = DEFAULT_FLOOR_DBFS
    ):
        super().__init__()
        self.window_energy = window_energy
        self.reference_offset = reference_offset
        self.floor = floor

    @classmethod
    def for_window(
        cls,
        window: Window,
        reference_offset: float | None = None,
        floor: float = DEFAULT_FLOOR_DBFS
    ) -> 'LoudnessMapper':
        if reference_offset is None:
            reference_offset = full_scale_offset(window)
        return cls(window.energy, reference_offset=reference_offset, floor=floor)

    def to_dbfs(
        self,
        coefficient: complex,
        window_energy: float | None = None
    ) -> float:
        energy = self.window_energy if window_energy is None else window_energy
        magnitude = abs(coefficient)
        if magnitude == 0:
            return self.floor

        with np.errstate(divide='ignore', invalid='ignore'):
            dbfs = 20 * np.log10(magnitude / np.sqrt(energy)) - self.reference_offset
        if not np.isfinite(dbfs) or dbfs < self.floor:
            return self.floor
        return float(dbfs)

    def forward(self, coefficients: np.ndarray) -> np.ndarray:
        with np.errstate(divide='ignore', invalid='ignore'):
            magnitude = np.abs(coefficients) / np.sqrt(self.window_energy)
            dbfs = 20 * np.log10(magnitude) - self.reference_offset
        dbfs[~np.isfinite(dbfs)] = self.floor
        return np.maximum(dbfs, self.floor)
