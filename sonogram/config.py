"""Render parameters and input format constants."""

from dataclasses import dataclass

from sonogram.errors import ConfigurationError


__all__ = [
    'SAMPLE_RATE',
    'SUPPORTED_BIT_DEPTHS',
    'DEFAULT_FFT_SIZE',
    'DEFAULT_HOP_SIZE',
    'DEFAULT_HEIGHT',
    'RenderConfig'
]


SAMPLE_RATE = 48000

# bit depth -> divisor mapping integer PCM onto [-1.0, 1.0]
SUPPORTED_BIT_DEPTHS: dict[int, float] = {
    16: 32768.0,
    24: 8388608.0,
    32: 2147483648.0
}

DEFAULT_FFT_SIZE = 2048
DEFAULT_HOP_SIZE = 880
DEFAULT_HEIGHT = 512


@dataclass(frozen=True)
class RenderConfig:
    """Parameters of a single spectrogram render.

    Args:
        fft_size: Analysis window length, power of two recommended
        hop_size: Samples advanced between consecutive frames
        height: Vertical pixel cap, usually fft_size / 2
        width: Horizontal pixel cap; derived from the sample count when None
        workers: Number of threads computing columns
    """

    fft_size: int = DEFAULT_FFT_SIZE
    hop_size: int = DEFAULT_HOP_SIZE
    height: int = DEFAULT_HEIGHT
    width: int | None = None
    workers: int = 1

    def validate(self) -> 'RenderConfig':
        if self.fft_size < 2:
            raise ConfigurationError(f'fft_size must be at least 2, got {self.fft_size}')
        if self.hop_size < 1:
            raise ConfigurationError(f'hop_size must be positive, got {self.hop_size}')
        if self.height < 1:
            raise ConfigurationError(f'height must be positive, got {self.height}')
        if self.width is not None and self.width < 1:
            raise ConfigurationError(f'width must be positive, got {self.width}')
        if self.workers < 1:
            raise ConfigurationError(f'workers must be positive, got {self.workers}')
        return self

    def resolve_width(
        self,
        n_samples: int
    ) -> int:
        if self.width is not None:
            return self.width
        # at least one column so short inputs still produce a saveable image
        return max(n_samples // self.hop_size, 1)
