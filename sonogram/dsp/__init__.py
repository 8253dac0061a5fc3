from sonogram.dsp.window import Window, hann_window
from sonogram.dsp.transforms import LoudnessMapper, SpectralTransform

__all__ = [
    'Window',
    'hann_window',
    'LoudnessMapper',
    'SpectralTransform'
]
