import logging

from pathlib import Path

import numpy as np

from sonogram.config import SAMPLE_RATE, RenderConfig
from sonogram.data.levels import compute_dc_offset, compute_min_max_level, compute_peak_level_db
from sonogram.data.loader import read_wav
from sonogram.visualization.palette import DEFAULT_PALETTE, ColorPalette
from sonogram.visualization.raster import RasterImage, render, save_png


__all__ = [
    'log_levels',
    'render_samples',
    'render_file'
]

logger = logging.getLogger(__name__)


def log_levels(
    samples: np.ndarray
) -> dict[str, float]:
    if len(samples) == 0:
        logger.info('No samples, skipping level statistics')
        return {}

    min_level, max_level = compute_min_max_level(samples)
    levels = {
        'dc_offset': compute_dc_offset(samples),
        'min_level': min_level,
        'max_level': max_level,
        'peak_level_db': compute_peak_level_db(max_level)
    }
    logger.info(
        'DC offset %.6f, min level %.2f, max level %.2f, peak %.2f dB',
        levels['dc_offset'], levels['min_level'], levels['max_level'], levels['peak_level_db']
    )
    return levels


def render_samples(
    samples: np.ndarray,
    config: RenderConfig = RenderConfig(),
    palette: ColorPalette = DEFAULT_PALETTE,
    reference_offset: float | None = None
) -> RasterImage:
    config.validate()
    return render(
        samples=samples,
        width=config.resolve_width(len(samples)),
        height=config.height,
        fft_size=config.fft_size,
        hop_size=config.hop_size,
        palette=palette,
        reference_offset=reference_offset,
        workers=config.workers
    )


def render_file(
    fn_audio: str | Path,
    fn_image: str | Path,
    config: RenderConfig = RenderConfig(),
    expected_rate: int = SAMPLE_RATE
) -> RasterImage:
    """Decode a WAV file, render its spectrogram and save it as PNG.

    Format and parameter errors are raised before any rendering starts.
    """
    samples, _, _ = read_wav(fn_audio, expected_rate=expected_rate)
    log_levels(samples)

    image = render_samples(samples, config)
    save_png(image, fn_image)
    return image
