import numpy as np
import pytest

from mandelview.colormaps import create_colormap_classic
from mandelview.compute import (
    BOUNDED,
    IN_SET_COLOR,
    check_divergence,
    check_palette_capacity,
    escape_time,
    pixel_to_plane,
    round_to_color,
)

CLASSIC = create_colormap_classic()


@pytest.mark.parametrize("x, y", [
    (2.0, 0.0),
    (0.0, 2.0),
    (5.0, -3.0),
    (2.0, 2.0),
    (-0.5, 2.5),
    (-3.0, 0.0),
    (0.0, -2.0),
])
def test_points_outside_radius_escape_on_first_round(x, y):
    assert escape_time(x, y, 512) == 1


@pytest.mark.parametrize("max_round", [1, 2, 10, 512, 1024])
def test_origin_never_escapes(max_round):
    assert escape_time(0.0, 0.0, max_round) is None


def test_escape_round_is_one_indexed():
    # c = 1 + i: z1 = 1 + i (|z|² = 2), z2 = 1 + 3i (|z|² = 10)
    assert escape_time(1.0, 1.0, 512) == 2


def test_points_inside_set_stay_bounded():
    assert escape_time(-1.0, 0.0, 1024) is None
    assert escape_time(0.25, 0.0, 1024) is None
    assert escape_time(-0.7, 0.0, 512) is None


def test_slow_escape_is_capped():
    slow = escape_time(0.26, 0.0, 1024)
    assert slow is not None and slow > 10
    assert escape_time(0.26, 0.0, slow) is None
    assert escape_time(0.26, 0.0, slow + 1) == slow


def test_cap_of_one_runs_no_iterations():
    assert escape_time(1.0, 1.0, 1) is None
    # the radius shortcut still applies
    assert escape_time(3.0, 0.0, 1) == 1


def test_escape_time_rejects_zero_cap():
    with pytest.raises(ValueError):
        escape_time(0.0, 0.0, 0)


def test_kernel_reports_bounded_sentinel():
    assert check_divergence(0.0, 0.0, 64) == BOUNDED


@pytest.mark.parametrize("width, height", [(640, 480), (64, 48), (800, 600)])
def test_center_pixel_maps_to_view_center(width, height):
    cx, cy, scale = -0.7, 0.1, 0.005
    x, y = pixel_to_plane(width // 2, height // 2, width, height, cx, cy, scale)
    assert x == pytest.approx(cx, abs=1e-12)
    assert y == pytest.approx(cy, abs=1e-12)


def test_top_row_is_largest_imaginary_part():
    width, height, scale = 640, 480, 0.005
    x0, y0 = pixel_to_plane(0, 0, width, height, 0.0, 0.0, scale)
    x1, y1 = pixel_to_plane(1, 1, width, height, 0.0, 0.0, scale)
    assert x0 == pytest.approx(-scale * width / 2)
    assert y0 == pytest.approx(scale * height / 2)
    assert x1 > x0
    assert y1 < y0


def test_pixel_mapping_is_reproducible():
    args = (123, 45, 640, 480, -0.743643887037151, 0.131825904205330, 1e-9)
    assert pixel_to_plane(*args) == pixel_to_plane(*args)


def test_bounded_is_opaque_black():
    assert round_to_color(None, CLASSIC) == IN_SET_COLOR == (0, 0, 0, 255)


def test_band_start_is_exact_stop_color():
    assert round_to_color(256, CLASSIC) == (0x00, 0xff, 0x00, 0xff)
    assert round_to_color(512, CLASSIC) == (0xff, 0xff, 0x00, 0xff)
    assert round_to_color(768, CLASSIC) == (0x00, 0xff, 0xff, 0xff)


def test_first_round_blends_toward_second_stop():
    # b: (128 * 255 + 0 * 1) // 256 = 127, g: (255 * 1) // 256 = 0
    assert round_to_color(1, CLASSIC) == (0, 0, 127, 255)
    assert round_to_color(128, CLASSIC) == (0, 127, 64, 255)


def test_colors_are_continuous_within_a_band():
    for round_ in range(1, 1023):
        if (round_ + 1) % 256 == 0:
            continue
        a = np.array(round_to_color(round_, CLASSIC), dtype=int)
        b = np.array(round_to_color(round_ + 1, CLASSIC), dtype=int)
        assert np.all(np.abs(a - b) <= 1), round_
        assert a[3] == b[3] == 255


def test_round_past_last_band_is_rejected():
    round_to_color(1023, CLASSIC)
    with pytest.raises(ValueError):
        round_to_color(1024, CLASSIC)


def test_round_zero_is_rejected():
    with pytest.raises(ValueError):
        round_to_color(0, CLASSIC)


def test_palette_capacity():
    check_palette_capacity(512, CLASSIC, 256)
    check_palette_capacity(1024, CLASSIC, 256)
    with pytest.raises(ValueError, match="color stops"):
        check_palette_capacity(1025, CLASSIC, 256)
    with pytest.raises(ValueError):
        check_palette_capacity(16, CLASSIC[:1], 256)
    with pytest.raises(ValueError):
        check_palette_capacity(16, CLASSIC, 0)
