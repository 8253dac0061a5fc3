import logging
import os

import numpy as np
import soundfile as sf

from pathlib import Path

from sonogram.config import SAMPLE_RATE, SUPPORTED_BIT_DEPTHS
from sonogram.errors import ConfigurationError


__all__ = [
    'validate_format',
    'normalize_pcm',
    'read_wav'
]

logger = logging.getLogger(__name__)

_SUBTYPE_BIT_DEPTHS: dict[str, int] = {
    'PCM_S8': 8,
    'PCM_U8': 8,
    'PCM_16': 16,
    'PCM_24': 24,
    'PCM_32': 32
}


def validate_format(
    sample_rate: int,
    bit_depth: int | None,
    expected_rate: int = SAMPLE_RATE
) -> None:
    if sample_rate != expected_rate:
        msg: str = f'Input sample rate {sample_rate} Hz is not valid, expected {expected_rate} Hz'
        raise ConfigurationError(msg)

    if bit_depth not in SUPPORTED_BIT_DEPTHS:
        msg: str = f'Unsupported audio bit depth ({bit_depth})! Supported: {sorted(SUPPORTED_BIT_DEPTHS)}'
        raise ConfigurationError(msg)


def normalize_pcm(
    pcm: np.ndarray,
    bit_depth: int
) -> np.ndarray:
    """Scale integer PCM samples of the given bit depth onto [-1.0, 1.0]."""
    if bit_depth not in SUPPORTED_BIT_DEPTHS:
        raise ConfigurationError(f'Unsupported audio bit depth ({bit_depth})!')
    return np.asarray(pcm, dtype=np.float64) / SUPPORTED_BIT_DEPTHS[bit_depth]


def read_wav(
    fn: str | Path,
    expected_rate: int = SAMPLE_RATE
) -> (np.ndarray, int, int):
    """Decode a WAV file into normalized mono samples.

    Only the first channel of a multi-channel file is kept.

    Args:
        fn: Path to the WAV file
        expected_rate: Sample rate the file must declare

    Returns:
        Tuple of (read-only samples, sample rate, bit depth)
    """
    if not isinstance(fn, str | Path):
        msg: str = f'Not supported argument type #1 ({type(fn)})! It must be string or Path!'
        raise TypeError(msg)

    if not os.path.exists(fn):
        msg: str = f'File {fn} not exist!'
        raise IOError(msg)

    try:
        info = sf.info(str(fn))
    except RuntimeError as e:
        raise ConfigurationError(f'{fn} is not a valid WAV audio file') from e

    if info.format not in ('WAV', 'WAVEX'):
        raise ConfigurationError(f'{fn} is not a valid WAV audio file ({info.format})')

    bit_depth = _SUBTYPE_BIT_DEPTHS.get(info.subtype)
    validate_format(info.samplerate, bit_depth, expected_rate=expected_rate)

    # soundfile returns left-justified int32; shift back to the native range
    data, _ = sf.read(str(fn), dtype='int32', always_2d=True)
    pcm = data[:, 0].astype(np.int64) >> (32 - bit_depth)

    samples = normalize_pcm(pcm, bit_depth)
    samples.flags.writeable = False

    logger.info('Read %d samples from %s (%d Hz, %d bit)', len(samples), fn, info.samplerate, bit_depth)
    return samples, info.samplerate, bit_depth
