from sonogram.visualization.palette import (
    BASE_PALETTE,
    DEFAULT_PALETTE,
    ColorPalette,
    ColorThreshold
)
from sonogram.visualization.raster import RasterImage, plot_spectrogram, render, save_png

__all__ = [
    'BASE_PALETTE',
    'DEFAULT_PALETTE',
    'ColorPalette',
    'ColorThreshold',
    'RasterImage',
    'plot_spectrogram',
    'render',
    'save_png'
]
