"""Spectrogram raster composition, PNG encoding and preview."""

import logging

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import numpy as np
import matplotlib.pyplot as plt

from sonogram.data.frames import FrameSource
from sonogram.dsp.transforms import LoudnessMapper, SpectralTransform, half_spectrum
from sonogram.dsp.window import hann_window
from sonogram.errors import ConfigurationError
from sonogram.visualization.palette import DEFAULT_PALETTE, ColorPalette


__all__ = [
    'BACKGROUND',
    'RasterImage',
    'render',
    'save_png',
    'plot_spectrogram'
]

logger = logging.getLogger(__name__)

# opaque black
BACKGROUND = (0, 0, 0)


class RasterImage:
    """Grid of opaque RGB pixels, row 0 at the top.

    Args:
        pixels: uint8 array of shape [height, width, 3]; exposed as a read-only view
    """

    def __init__(
        self,
        pixels: np.ndarray
    ) -> None:
        if pixels.ndim != 3 or pixels.shape[2] != 3 or pixels.dtype != np.uint8:
            raise ValueError(f'Expected uint8 array of shape [height, width, 3], got {pixels.dtype} {pixels.shape}')
        # freeze a view so the caller keeps a writeable buffer
        pixels = pixels.view()
        pixels.flags.writeable = False
        self.__pixels = pixels

    @classmethod
    def blank(
        cls,
        width: int,
        height: int
    ) -> 'RasterImage':
        pixels = np.empty((height, width, 3), dtype=np.uint8)
        pixels[:, :] = BACKGROUND
        return cls(pixels)

    @property
    def pixels(
        self
    ) -> np.ndarray:
        return self.__pixels

    @property
    def width(
        self
    ) -> int:
        return self.__pixels.shape[1]

    @property
    def height(
        self
    ) -> int:
        return self.__pixels.shape[0]

    def pixel(
        self,
        x: int,
        y: int
    ) -> tuple[int, int, int]:
        r, g, b = self.__pixels[y, x]
        return int(r), int(g), int(b)

    def to_bytes(self) -> bytes:
        return self.__pixels.tobytes()

    def __eq__(self, other) -> bool:
        if not isinstance(other, RasterImage):
            return NotImplemented
        return np.array_equal(self.__pixels, other.pixels)

    __hash__ = None

    def __repr__(self) -> str:
        return f'RasterImage(width={self.width}, height={self.height})'


def _compose_column(
    frame: np.ndarray,
    transform: SpectralTransform,
    mapper: LoudnessMapper,
    palette: ColorPalette,
    n_bins: int
) -> np.ndarray:
    dbfs = mapper(half_spectrum(transform(frame))[:n_bins])
    # low frequencies at the bottom
    return palette.colorize(dbfs)[::-1]


def render(
    samples: np.ndarray,
    width: int,
    height: int,
    fft_size: int,
    hop_size: int,
    palette: ColorPalette = DEFAULT_PALETTE,
    reference_offset: float | None = None,
    workers: int = 1
) -> RasterImage:
    """Render a spectrogram of mono samples.

    One column per frame, one row per frequency bin up to `height`. Columns
    beyond the available frame count stay black; bins above `height` are
    dropped.

    Args:
        samples: 1-D array of normalized samples
        width: Horizontal pixel count
        height: Vertical pixel count
        fft_size: Analysis window length
        hop_size: Frame advance
        palette: Color table shared by every column
        reference_offset: dB calibration offset; full-scale sinusoid at 0 dBFS when None
        workers: Threads used to compute columns

    Returns:
        Frozen RasterImage of shape [height, width]
    """
    if width < 1:
        raise ConfigurationError(f'width must be positive, got {width}')
    if height < 1:
        raise ConfigurationError(f'height must be positive, got {height}')
    if workers < 1:
        raise ConfigurationError(f'workers must be positive, got {workers}')

    window = hann_window(fft_size)
    frames = FrameSource(samples, fft_size, hop_size)
    transform = SpectralTransform(window)
    mapper = LoudnessMapper.for_window(window, reference_offset=reference_offset, floor=palette.floor)

    pixels = np.empty((height, width, 3), dtype=np.uint8)
    pixels[:, :] = BACKGROUND

    n_columns = min(width, len(frames))
    n_bins = min(fft_size // 2, height)
    logger.debug('Rendering %d of %d columns, %d bins each', n_columns, width, n_bins)

    def compute(x: int) -> np.ndarray:
        return _compose_column(frames[x], transform, mapper, palette, n_bins)

    if workers == 1:
        for x in range(n_columns):
            pixels[height - n_bins:, x] = compute(x)
    else:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            # map yields in submission order, so columns land by index
            for x, column in enumerate(executor.map(compute, range(n_columns))):
                pixels[height - n_bins:, x] = column

    return RasterImage(pixels)


def save_png(
    image: RasterImage,
    fn: str | Path
) -> Path:
    if image.width == 0:
        raise ValueError('Cannot encode an image without columns')

    path = Path(fn)
    plt.imsave(path, image.pixels, format='png')
    logger.info('Saved %dx%d spectrogram to %s', image.width, image.height, path)
    return path


def plot_spectrogram(
    image: RasterImage,
    title: str = 'Spectrogram'
) -> None:
    """Show a rendered spectrogram with time on x-axis and frequency bin on y-axis."""
    fig, ax = plt.subplots(figsize=(8, 4))
    ax.imshow(image.pixels, aspect='auto', extent=(0, image.width, 0, image.height))
    ax.set_xlabel('Frame')
    ax.set_ylabel('Frequency bin')
    plt.suptitle(title)
    plt.tight_layout()
    plt.show()
