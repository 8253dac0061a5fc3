import numpy as np
import pytest

from sonogram.visualization.palette import (
    BASE_PALETTE,
    DEFAULT_PALETTE,
    Color,
    ColorPalette,
    ColorThreshold,
    interpolate_color,
    refine_palette
)


def test_base_palette_shape() -> None:
    assert len(BASE_PALETTE) == 49
    assert BASE_PALETTE[0] == ColorThreshold(-120.0, Color(0, 0, 0, 255))
    assert BASE_PALETTE[-1] == ColorThreshold(0.0, Color(255, 255, 255, 255))


@pytest.mark.parametrize('k', (1, 2, 5, 49))
def test_refined_size_and_order(
    k
) -> None:
    refined = refine_palette(BASE_PALETTE[:k])
    values = [t.value for t in refined]

    assert len(refined) == 2 * k - 1
    assert all(a < b for a, b in zip(values, values[1:]))


def test_refined_midpoints() -> None:
    refined = refine_palette(BASE_PALETTE)

    assert refined[0] == BASE_PALETTE[0]
    assert refined[1] == ColorThreshold(-118.75, Color(0, 0, 8, 255))
    assert refined[2] == BASE_PALETTE[1]
    assert refined[-1] == BASE_PALETTE[-1]
    assert all(t.color.a == 255 for t in refined)


def test_refine_two_passes() -> None:
    assert len(refine_palette(BASE_PALETTE, passes=2)) == 2 * (2 * 49 - 1) - 1


def test_interpolate_color_truncates() -> None:
    assert interpolate_color(Color(0, 0, 17), Color(0, 0, 34), 0.5) == Color(0, 0, 25, 255)
    assert interpolate_color(Color(255, 0, 0), Color(255, 18, 0), 0.5) == Color(255, 9, 0, 255)
    assert interpolate_color(Color(10, 20, 30, 0), Color(20, 40, 60, 0), 0.0).a == 255


@pytest.mark.parametrize('base', (
    (),
    (ColorThreshold(0.0, Color(0, 0, 0)), ColorThreshold(0.0, Color(1, 1, 1))),
    (ColorThreshold(1.0, Color(0, 0, 0)), ColorThreshold(0.0, Color(1, 1, 1))),
))
def test_refine_rejects_invalid_base(
    base
) -> None:
    with pytest.raises(ValueError):
        refine_palette(base)


def test_lookup_first_threshold_at_or_above() -> None:
    palette = DEFAULT_PALETTE

    assert palette.lookup(-200.0) == Color(0, 0, 0)
    assert palette.lookup(-120.0) == Color(0, 0, 0)
    assert palette.lookup(-119.0) == Color(0, 0, 8)
    assert palette.lookup(-80.0) == Color(0, 0, 255)
    assert palette.lookup(-0.5) == Color(255, 255, 255)


@pytest.mark.parametrize('dbfs', (0.0001, 3.0, 1e9, np.inf))
def test_lookup_above_all_thresholds_is_brightest(
    dbfs
) -> None:
    assert DEFAULT_PALETTE.lookup(dbfs) == Color(255, 255, 255)
    assert DEFAULT_PALETTE.lookup_index(dbfs) == len(DEFAULT_PALETTE) - 1


def test_lookup_non_finite_low() -> None:
    assert DEFAULT_PALETTE.lookup_index(-np.inf) == 0
    assert DEFAULT_PALETTE.lookup_index(np.nan) == 0


def test_lookup_monotonic() -> None:
    values = np.linspace(-140.0, 10.0, 3001)
    indices = [DEFAULT_PALETTE.lookup_index(v) for v in values]

    assert all(a <= b for a, b in zip(indices, indices[1:]))


def test_lookup_idempotent() -> None:
    palette = ColorPalette()
    first = [palette.lookup(v) for v in (-90.1, -45.0, -3.3)]
    second = [palette.lookup(v) for v in (-90.1, -45.0, -3.3)]

    assert first == second
    assert palette.thresholds == DEFAULT_PALETTE.thresholds


def test_lookup_many_matches_scalar() -> None:
    values = np.concatenate([
        np.linspace(-130.0, 5.0, 997),
        [t.value for t in DEFAULT_PALETTE.thresholds],
        [np.nan, -np.inf, np.inf]
    ])
    expected = [DEFAULT_PALETTE.lookup_index(v) for v in values]

    np.testing.assert_array_equal(DEFAULT_PALETTE.lookup_many(values), expected)
    np.testing.assert_array_equal(
        DEFAULT_PALETTE.colorize(values),
        [DEFAULT_PALETTE.lookup(v)[:3] for v in values]
    )


def test_palette_tables_read_only() -> None:
    with pytest.raises(ValueError):
        DEFAULT_PALETTE.rgb[0, 0] = 1
    assert DEFAULT_PALETTE.floor == -120.0
