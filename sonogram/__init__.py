from sonogram.config import RenderConfig
from sonogram.errors import ConfigurationError, SonogramError
from sonogram.visualization.raster import RasterImage, render

__all__ = [
    'ConfigurationError',
    'RasterImage',
    'RenderConfig',
    'SonogramError',
    'render'
]
