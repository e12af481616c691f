import pytest

from solong.visual import channel_shifts, convert_color

RED_565, GREEN_565, BLUE_565 = 0xF800, 0x07E0, 0x001F


def test_true_color_shifts():
    assert channel_shifts(0xFF0000, 0x00FF00, 0x0000FF) == (16, 8, 8, 8, 0, 8)


def test_565_shifts():
    assert channel_shifts(RED_565, GREEN_565, BLUE_565) == (11, 5, 5, 6, 0, 5)


@pytest.mark.parametrize("mask", [0, -1])
def test_invalid_mask_rejected(mask):
    with pytest.raises(ValueError):
        channel_shifts(mask, 0xFF00, 0xFF)


@pytest.mark.parametrize("color", [0x000000, 0x123456, 0xFFFFFF, 0xABCDEF])
def test_deep_visual_keeps_color(color):
    shifts = channel_shifts(RED_565, GREEN_565, BLUE_565)
    assert convert_color(color, 24, shifts) == color
    assert convert_color(color, 32, shifts) == color


@pytest.mark.parametrize("color", [0x000000, 0x123456, 0xFFFFFF, 0xABCDEF, 0x00FF00])
def test_eight_bit_channels_round_trip_at_low_depth(color):
    shifts = channel_shifts(0xFF0000, 0x00FF00, 0x0000FF)
    assert convert_color(color, 16, shifts) == color


def test_565_white_fills_all_masks():
    shifts = channel_shifts(RED_565, GREEN_565, BLUE_565)
    assert convert_color(0xFFFFFF, 16, shifts) == RED_565 | GREEN_565 | BLUE_565


def test_565_black_is_zero():
    shifts = channel_shifts(RED_565, GREEN_565, BLUE_565)
    assert convert_color(0x000000, 16, shifts) == 0


@pytest.mark.parametrize(
    "color,mask",
    [(0xFF0000, RED_565), (0x00FF00, GREEN_565), (0x0000FF, BLUE_565)],
)
def test_565_primaries_fill_their_mask(color, mask):
    shifts = channel_shifts(RED_565, GREEN_565, BLUE_565)
    assert convert_color(color, 16, shifts) == mask


def test_565_result_stays_within_masks():
    shifts = channel_shifts(RED_565, GREEN_565, BLUE_565)
    for color in (0x010203, 0x7F7F7F, 0xFEDCBA):
        pixel = convert_color(color, 16, shifts)
        assert pixel & ~(RED_565 | GREEN_565 | BLUE_565) == 0