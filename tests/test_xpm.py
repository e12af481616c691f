import pytest

from solong.xpm import (
    TRANSPARENT,
    XpmError,
    XpmImage,
    find,
    find_unquoted,
    load_xpm,
    parse_xpm,
    parse_xpm_text,
    quoted_strings,
    split_words,
    strip_comments,
)

SAMPLE = """/* XPM */
static char *sample[] = {
/* columns rows colors chars-per-pixel */
"3 2 3 1 ",
"  c None",
". c #FF0000",
"X c blue",
// pixels follow
".X ",
" X.",
};
"""


def test_split_words_on_spaces_and_tabs():
    assert split_words("  a\tb  c ") == ["a", "b", "c"]


def test_split_words_keeps_newlines():
    assert split_words("a\nb c") == ["a\nb", "c"]


def test_split_words_empty():
    assert split_words(" \t ") == []


def test_find():
    assert find("hello world", "wor") == 6
    assert find("hello", "xyz") == -1
    assert find("ab", "abc") == -1


def test_find_unquoted_skips_strings():
    assert find_unquoted('"ab" ab', "ab") == 5
    assert find_unquoted('"/*x*/"', "/*") == -1


def test_strip_comments_keeps_length():
    text = "a /* b */ c"
    result = strip_comments(text)
    assert result == "a" + " " * 9 + "c"
    assert len(result) == len(text)


def test_strip_comments_line_comment_includes_newline():
    assert strip_comments("x // note\ny") == "x " + " " * 8 + "y"


def test_strip_comments_leaves_quoted_text():
    text = '"/* keep */" /* drop */'
    assert strip_comments(text) == '"/* keep */"' + " " * 11


def test_quoted_strings():
    assert list(quoted_strings('x "ab" y "cd" "e')) == ["ab", "cd"]


def test_parse_sample():
    image = parse_xpm_text(SAMPLE)
    assert (image.width, image.height) == (3, 2)
    assert image.pixels == (
        (0xFF0000, 0xFF, TRANSPARENT),
        (TRANSPARENT, 0xFF, 0xFF0000),
    )


def test_pixel_access_and_bounds():
    image = parse_xpm_text(SAMPLE)
    assert image.pixel(1, 0) == 0xFF
    with pytest.raises(IndexError):
        image.pixel(3, 0)


def test_to_bytes_little_and_big_endian():
    image = XpmImage(width=1, height=1, pixels=((0xFF0000,),))
    assert image.to_bytes(4, False) == b"\x00\x00\xff\x00"
    assert image.to_bytes(4, True) == b"\x00\xff\x00\x00"


def test_to_bytes_transparent():
    image = XpmImage(width=1, height=1, pixels=((TRANSPARENT,),))
    assert image.to_bytes(4, False) == b"\x00\x00\x00\xff"


def test_to_bytes_length():
    image = parse_xpm_text(SAMPLE)
    assert len(image.to_bytes(3, False)) == 3 * 2 * 3


def test_two_char_keys_last_definition_wins():
    image = parse_xpm(["1 1 2 2", "ab c red", "ab c blue", "ab"])
    assert image.pixels == ((0xFF,),)


def test_long_keys_first_definition_wins():
    image = parse_xpm(["1 1 2 3", "abc c red", "abc c blue", "abc"])
    assert image.pixels == ((0xFF0000,),)


def test_two_word_color_name():
    image = parse_xpm(["1 1 1 1", "a c light blue", "a"])
    assert image.pixel(0, 0) == 0xADD8E6


def test_unknown_key_is_black():
    image = parse_xpm(["2 1 1 1", "a c red", "az"])
    assert image.pixels == ((0xFF0000, 0),)


@pytest.mark.parametrize(
    "lines",
    [
        [],
        ["0 1 1 1", "a c red", "a"],
        ["1 1 1"],
        ["1 1 1 1", "a red", "a"],
        ["1 1 1 1", "a c", "a"],
        ["1 2 1 1", "a c red", "a"],
        ["3 1 1 1", "a c red", "aa"],
        ["1 1 2 1", "a c red"],
    ],
)
def test_invalid_data_raises(lines):
    with pytest.raises(XpmError):
        parse_xpm(lines)


def test_load_xpm(tmp_path):
    path = tmp_path / "sample.xpm"
    path.write_text(SAMPLE)
    image = load_xpm(path)
    assert image == parse_xpm_text(SAMPLE)


def test_load_missing_file(tmp_path):
    with pytest.raises(XpmError):
        load_xpm(tmp_path / "missing.xpm")