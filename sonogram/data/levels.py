"""Signal level statistics reported alongside a render."""

import numpy as np


__all__ = [
    'compute_dc_offset',
    'compute_min_max_level',
    'compute_peak_level_db'
]


def compute_dc_offset(samples: np.ndarray) -> float:
    if len(samples) == 0:
        raise ValueError('No samples provided')
    return float(np.mean(samples))


def compute_min_max_level(samples: np.ndarray) -> tuple[float, float]:
    if len(samples) == 0:
        raise ValueError('No samples provided')
    return float(np.min(samples)), float(np.max(samples))


def compute_peak_level_db(max_level: float) -> float:
    """Peak level in dB relative to full scale; -inf for a silent signal."""
    with np.errstate(divide='ignore'):
        return float(20 * np.log10(np.abs(max_level)))
