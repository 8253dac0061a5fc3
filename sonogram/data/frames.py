import numpy as np

from sonogram.errors import ConfigurationError


__all__ = [
    'frame_count',
    'FrameSource'
]


def frame_count(
    n_samples: int,
    fft_size: int,
    hop_size: int
) -> int:
    if n_samples < fft_size:
        return 0
    return (n_samples - fft_size) // hop_size + 1


class FrameSource:
    """Overlapping fixed-length analysis frames over a sample buffer.

    Frame k covers samples [k * hop_size, k * hop_size + fft_size). A trailing
    partial frame is dropped, never zero-padded. Frames are read-only views
    created on access, so iterating again restarts from the first frame.

    Args:
        samples: 1-D array of normalized samples
        fft_size: Frame length in samples
        hop_size: Frame advance in samples
    """

    def __init__(
        self,
        samples: np.ndarray,
        fft_size: int,
        hop_size: int
    ) -> None:
        if fft_size < 1:
            raise ConfigurationError(f'fft_size must be positive, got {fft_size}')
        if hop_size < 1:
            raise ConfigurationError(f'hop_size must be positive, got {hop_size}')

        samples = np.asarray(samples, dtype=np.float64)
        if samples.ndim != 1:
            raise ConfigurationError(f'Expected mono samples, got array of shape {samples.shape}')

        self.__samples = samples
        self.__fft_size = fft_size
        self.__hop_size = hop_size

    @property
    def fft_size(
        self
    ) -> int:
        return self.__fft_size

    @property
    def hop_size(
        self
    ) -> int:
        return self.__hop_size

    def __len__(self) -> int:
        return frame_count(len(self.__samples), self.__fft_size, self.__hop_size)

    def __getitem__(self, idx: int) -> np.ndarray:
        n_frames = len(self)
        if idx < 0:
            idx += n_frames
        if not 0 <= idx < n_frames:
            raise IndexError(f'Frame index out of range (0..{n_frames - 1})')

        start = idx * self.__hop_size
        frame = self.__samples[start:start + self.__fft_size]
        frame.flags.writeable = False
        return frame

    def __iter__(self):
        for idx in range(len(self)):
            yield self[idx]
