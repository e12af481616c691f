"""A small reader for XPM images."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path

from solong.colors import text_to_rgb

TRANSPARENT = 0xFF000000

_WORD_SEPARATORS = re.compile(r"[ \t]+")
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class XpmError(ValueError):
    """Raised when XPM data cannot be read."""


@dataclass(frozen=True)
class XpmImage:
    """A decoded XPM image; pixels are 32-bit values, rows top to bottom."""

    width: int
    height: int
    pixels: tuple[tuple[int, ...], ...]

    def pixel(self, x: int, y: int) -> int:
        """Return the pixel value at column ``x`` of row ``y``."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} image")
        return self.pixels[y][x]

    def to_bytes(self, bytes_per_pixel: int, big_endian: bool) -> bytes:
        """Pack the pixels row after row, each in ``bytes_per_pixel`` bytes."""
        if bytes_per_pixel <= 0:
            raise ValueError("bytes_per_pixel must be positive")
        order = "big" if big_endian else "little"
        mask = (1 << (8 * bytes_per_pixel)) - 1
        return b"".join(
            (value & mask).to_bytes(bytes_per_pixel, order)
            for row in self.pixels
            for value in row
        )


def split_words(text: str) -> list[str]:
    """Split on runs of spaces and tabs, dropping empty words."""
    return [word for word in _WORD_SEPARATORS.split(text) if word]


def find(text: str, needle: str) -> int:
    """Return the first position of ``needle`` in ``text``, or -1."""
    return text.find(needle)


def find_unquoted(text: str, needle: str) -> int:
    """Return the first position of ``needle`` outside double quotes, or -1."""
    quoted = False
    for pos in range(len(text) - len(needle) + 1):
        if text[pos] == '"':
            quoted = not quoted
        if not quoted and text.startswith(needle, pos):
            return pos
    return -1


def _blank(text: str, start: int, stop: int) -> str:
    return text[:start] + " " * (stop - start) + text[stop:]


def strip_comments(text: str) -> str:
    """Replace C-style comments outside strings by spaces, keeping offsets."""
    while (begin := find_unquoted(text, "/*")) != -1:
        end = text.find("*/", begin + 2)
        text = _blank(text, begin, len(text) if end == -1 else end + 2)
    while (begin := find_unquoted(text, "//")) != -1:
        end = text.find("\n", begin + 2)
        text = _blank(text, begin, len(text) if end == -1 else end + 1)
    return text


def quoted_strings(text: str) -> Iterator[str]:
    """Yield the contents of each double-quoted string in order."""
    pos = 0
    while (start := text.find('"', pos)) != -1:
        end = text.find('"', start + 1)
        if end == -1:
            return
        yield text[start + 1 : end]
        pos = end + 1


def _atoi(word: str) -> int:
    match = _LEADING_INT.match(word)
    return int(match.group(1)) if match else 0


def _next_line(lines: Iterator[str], what: str) -> str:
    line = next(lines, None)
    if line is None:
        raise XpmError(f"XPM data ends before the {what}")
    return line


def _parse_header(line: str) -> tuple[int, int, int, int]:
    words = split_words(line)
    if len(words) < 4:
        raise XpmError(f"XPM header needs four values, got {line!r}")
    values = tuple(_atoi(word) for word in words[:4])
    if any(value <= 0 for value in values):
        raise XpmError(f"invalid XPM header {line!r}")
    width, height, ncolors, cpp = values
    return width, height, ncolors, cpp


def _parse_color(line: str, cpp: int) -> tuple[str, int]:
    words = split_words(line[cpp:])
    try:
        index = words.index("c")
    except ValueError:
        raise XpmError(f"colour line without a 'c' key: {line!r}") from None
    if index + 1 >= len(words):
        raise XpmError(f"colour line without a colour value: {line!r}")
    name = words[index + 1]
    end = words[index + 2] if index + 2 < len(words) else None
    return line[:cpp], text_to_rgb(name, end)


def parse_xpm(lines: Iterable[str]) -> XpmImage:
    """Build an image from the string values of an XPM: header, colours, pixels."""
    source = iter(lines)
    width, height, ncolors, cpp = _parse_header(_next_line(source, "header"))

    colors: dict[str, int] = {}
    for _ in range(ncolors):
        key, value = _parse_color(_next_line(source, "colour table"), cpp)
        # Short keys overwrite earlier definitions; long keys keep the first.
        if cpp <= 2:
            colors[key] = value
        else:
            colors.setdefault(key, value)

    rows = []
    for _ in range(height):
        line = _next_line(source, "pixel rows")
        if len(line) < width * cpp:
            raise XpmError(f"pixel row shorter than {width * cpp} characters: {line!r}")
        row = []
        for start in range(0, width * cpp, cpp):
            value = colors.get(line[start : start + cpp], 0)
            row.append(TRANSPARENT if value == -1 else value & 0xFFFFFFFF)
        rows.append(tuple(row))
    return XpmImage(width=width, height=height, pixels=tuple(rows))


def parse_xpm_text(text: str) -> XpmImage:
    """Parse the text of an XPM file."""
    return parse_xpm(quoted_strings(strip_comments(text)))


def load_xpm(path: str | Path) -> XpmImage:
    """Read and parse an XPM file."""
    try:
        text = Path(path).read_bytes().decode("latin-1")
    except OSError as exc:
        raise XpmError(f"cannot read {path}: {exc}") from exc
    return parse_xpm_text(text)