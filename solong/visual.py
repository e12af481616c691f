"""Packing 0xRRGGBB colours into the pixel layout of a display visual."""

from __future__ import annotations

ChannelShifts = tuple[int, int, int, int, int, int]


def _mask_shift_and_width(mask: int) -> tuple[int, int]:
    if mask <= 0:
        raise ValueError(f"colour mask must be a positive bit field, got {mask:#x}")
    shift = (mask & -mask).bit_length() - 1
    mask >>= shift
    width = 0
    while mask & 1:
        mask >>= 1
        width += 1
    return shift, width


def channel_shifts(red_mask: int, green_mask: int, blue_mask: int) -> ChannelShifts:
    """Return (red shift, red bits, green shift, green bits, blue shift, blue bits).

    The shift is the position of a mask's lowest set bit and the bit count is
    the length of the run of ones starting there.
    """
    red = _mask_shift_and_width(red_mask)
    green = _mask_shift_and_width(green_mask)
    blue = _mask_shift_and_width(blue_mask)
    return (*red, *green, *blue)


def convert_color(color: int, depth: int, shifts: ChannelShifts) -> int:
    """Convert a 0xRRGGBB colour to a pixel value for a visual of ``depth`` bits.

    Visuals of 24 bits or more take the colour unchanged; shallower ones get
    each channel truncated to its bit count and moved to its shift.
    """
    if depth >= 24:
        return color
    red = (color >> 8) & 0xFF00
    green = color & 0xFF00
    blue = (color << 8) & 0xFF00
    red_shift, red_bits, green_shift, green_bits, blue_shift, blue_bits = shifts
    return (
        ((red >> (16 - red_bits)) << red_shift)
        + ((green >> (16 - green_bits)) << green_shift)
        + ((blue >> (16 - blue_bits)) << blue_shift)
    )