"""Hann analysis window shared by every frame of a render."""

import logging

from dataclasses import dataclass
from functools import lru_cache

import numpy as np
from scipy.signal import get_window

from sonogram.errors import ConfigurationError


__all__ = [
    'Window',
    'hann_window'
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class Window:
    """Taper coefficients plus their total energy.

    Args:
        coefficients: Read-only array of length fft_size
        energy: Sum of squared coefficients
    """

    coefficients: np.ndarray
    energy: float

    @property
    def size(self) -> int:
        return len(self.coefficients)

    @property
    def coherent_gain(self) -> float:
        return float(np.sum(self.coefficients))


@lru_cache(maxsize=None)
def hann_window(
    fft_size: int
) -> Window:
    """Symmetric Hann taper, w[i] = 0.5 * (1 - cos(2*pi*i / (fft_size - 1))).

    Cached per fft_size; callers share the returned instance.
    """
    if fft_size < 2:
        raise ConfigurationError(f'fft_size must be at least 2, got {fft_size}')

    coefficients = get_window('hann', fft_size, fftbins=False).astype(np.float64)
    coefficients.flags.writeable = False
    energy = float(np.sum(coefficients ** 2))

    logger.debug('Built Hann window of size %d (energy %.3f)', fft_size, energy)
    return Window(coefficients=coefficients, energy=energy)
