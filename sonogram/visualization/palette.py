"""dBFS to color mapping.

The base table runs from black at -120 dBFS through blue, indigo, violet,
magenta, red, orange and yellow to white at 0 dBFS in 2.5 dB steps. It is
refined once by inserting a midpoint threshold between each neighbouring pair.
"""

from typing import Iterable, NamedTuple, Sequence

import numpy as np


__all__ = [
    'Color',
    'ColorThreshold',
    'BASE_PALETTE',
    'interpolate_color',
    'refine_palette',
    'ColorPalette',
    'DEFAULT_PALETTE'
]


class Color(NamedTuple):
    r: int
    g: int
    b: int
    a: int = 255


class ColorThreshold(NamedTuple):
    value: float
    color: Color


BASE_PALETTE: tuple[ColorThreshold, ...] = (
    ColorThreshold(-120.0, Color(0, 0, 0)),       # black
    ColorThreshold(-117.5, Color(0, 0, 17)),
    ColorThreshold(-115.0, Color(0, 0, 34)),
    ColorThreshold(-112.5, Color(0, 0, 51)),
    ColorThreshold(-110.0, Color(0, 0, 69)),
    ColorThreshold(-107.5, Color(0, 0, 86)),
    ColorThreshold(-105.0, Color(0, 0, 104)),
    ColorThreshold(-102.5, Color(0, 0, 121)),
    ColorThreshold(-100.0, Color(0, 0, 139)),     # dark blue
    ColorThreshold(-97.5, Color(0, 0, 155)),
    ColorThreshold(-95.0, Color(0, 0, 172)),
    ColorThreshold(-92.5, Color(0, 0, 188)),
    ColorThreshold(-90.0, Color(0, 0, 205)),      # medium blue
    ColorThreshold(-87.5, Color(0, 0, 218)),
    ColorThreshold(-85.0, Color(0, 0, 230)),
    ColorThreshold(-82.5, Color(0, 0, 242)),
    ColorThreshold(-80.0, Color(0, 0, 255)),      # blue
    ColorThreshold(-77.5, Color(19, 0, 223)),
    ColorThreshold(-75.0, Color(38, 0, 192)),
    ColorThreshold(-72.5, Color(57, 0, 161)),
    ColorThreshold(-70.0, Color(75, 0, 130)),     # indigo
    ColorThreshold(-67.5, Color(94, 0, 150)),
    ColorThreshold(-65.0, Color(112, 0, 171)),
    ColorThreshold(-62.5, Color(130, 0, 191)),
    ColorThreshold(-60.0, Color(148, 0, 211)),    # dark violet
    ColorThreshold(-57.5, Color(146, 0, 193)),
    ColorThreshold(-55.0, Color(144, 0, 175)),
    ColorThreshold(-52.5, Color(142, 0, 157)),
    ColorThreshold(-50.0, Color(139, 0, 139)),    # dark magenta
    ColorThreshold(-47.5, Color(168, 0, 104)),
    ColorThreshold(-45.0, Color(197, 0, 69)),
    ColorThreshold(-42.5, Color(226, 0, 34)),
    ColorThreshold(-40.0, Color(255, 0, 0)),      # red
    ColorThreshold(-37.5, Color(255, 18, 0)),
    ColorThreshold(-35.0, Color(255, 35, 0)),
    ColorThreshold(-32.5, Color(255, 52, 0)),
    ColorThreshold(-30.0, Color(255, 69, 0)),     # red-orange
    ColorThreshold(-27.5, Color(255, 93, 0)),
    ColorThreshold(-25.0, Color(255, 117, 0)),
    ColorThreshold(-22.5, Color(255, 141, 0)),
    ColorThreshold(-20.0, Color(255, 165, 0)),    # orange
    ColorThreshold(-17.5, Color(255, 188, 0)),
    ColorThreshold(-15.0, Color(255, 210, 0)),
    ColorThreshold(-12.5, Color(255, 233, 0)),
    ColorThreshold(-10.0, Color(255, 255, 0)),    # yellow
    ColorThreshold(-7.5, Color(255, 255, 64)),
    ColorThreshold(-5.0, Color(255, 255, 128)),
    ColorThreshold(-2.5, Color(255, 255, 192)),
    ColorThreshold(0.0, Color(255, 255, 255))     # white
)


def interpolate_color(
    c1: Color,
    c2: Color,
    fraction: float
) -> Color:
    """Per-channel linear blend, truncated to integers; alpha is always opaque."""
    return Color(
        int(c1.r + fraction * (c2.r - c1.r)),
        int(c1.g + fraction * (c2.g - c1.g)),
        int(c1.b + fraction * (c2.b - c1.b)),
        255
    )


def _check_ascending(
    thresholds: Sequence[ColorThreshold]
) -> None:
    if len(thresholds) == 0:
        raise ValueError('Palette needs at least one threshold')
    for prev, curr in zip(thresholds, thresholds[1:]):
        if not curr.value > prev.value:
            raise ValueError(f'Threshold values must be strictly increasing ({prev.value} >= {curr.value})')


def refine_palette(
    base: Sequence[ColorThreshold],
    passes: int = 1
) -> tuple[ColorThreshold, ...]:
    """Insert a midpoint threshold between every consecutive pair.

    Each pass turns k thresholds into 2k - 1.
    """
    _check_ascending(base)

    refined = tuple(base)
    for _ in range(passes):
        fine = []
        for lower, upper in zip(refined, refined[1:]):
            fine.append(lower)
            fine.append(ColorThreshold(
                (lower.value + upper.value) / 2,
                interpolate_color(lower.color, upper.color, 0.5)
            ))
        fine.append(refined[-1])
        refined = tuple(fine)

    return refined


class ColorPalette:
    """Immutable ascending threshold table with first-match lookup.

    Args:
        base: Hand-authored thresholds, strictly ascending by value
        passes: Number of midpoint refinement passes
    """

    def __init__(
        self,
        base: Iterable[ColorThreshold] = BASE_PALETTE,
        passes: int = 1
    ) -> None:
        self.__thresholds = refine_palette(tuple(base), passes=passes)

        values = np.array([t.value for t in self.__thresholds], dtype=np.float64)
        rgb = np.array([t.color[:3] for t in self.__thresholds], dtype=np.uint8)
        values.flags.writeable = False
        rgb.flags.writeable = False
        self.__values = values
        self.__rgb = rgb

    @property
    def thresholds(
        self
    ) -> tuple[ColorThreshold, ...]:
        return self.__thresholds

    @property
    def floor(
        self
    ) -> float:
        return self.__thresholds[0].value

    @property
    def rgb(
        self
    ) -> np.ndarray:
        return self.__rgb

    def __len__(self) -> int:
        return len(self.__thresholds)

    def lookup_index(
        self,
        dbfs: float
    ) -> int:
        if np.isnan(dbfs):
            return 0

        for idx, threshold in enumerate(self.__thresholds):
            if dbfs <= threshold.value:
                return idx

        # louder than every threshold: brightest color
        return len(self.__thresholds) - 1

    def lookup(
        self,
        dbfs: float
    ) -> Color:
        return self.__thresholds[self.lookup_index(dbfs)].color

    def lookup_many(
        self,
        values: np.ndarray
    ) -> np.ndarray:
        """Vectorized lookup_index over an array of dBFS values."""
        values = np.asarray(values, dtype=np.float64)
        values = np.where(np.isnan(values), -np.inf, values)
        indices = np.searchsorted(self.__values, values, side='left')
        return np.minimum(indices, len(self.__thresholds) - 1)

    def colorize(
        self,
        values: np.ndarray
    ) -> np.ndarray:
        """RGB rows for an array of dBFS values, shape [n, 3]."""
        return self.__rgb[self.lookup_many(values)]


DEFAULT_PALETTE = ColorPalette(BASE_PALETTE)
