from upcean.bitmap import Bitmap
from upcean.font import FILLER_GLYPH, FONT_5X8, draw_char, draw_string, get_glyph, render_text


def glyph_rows(bitmap: Bitmap, x: int, y: int):
    """Reads back the 5x8 cell at (x, y) as glyph rows."""
    return tuple(sum(bitmap.get_bit(x + i, y + row) << i for i in range(5)) for row in range(8))


def test_font_covers_printable_ascii():
    assert len(FONT_5X8) == 96
    assert all(len(glyph) == 8 for glyph in FONT_5X8)
    assert get_glyph(ord(" ")) == (0,) * 8
    assert get_glyph(ord("0")) == (0x0f, 0x09, 0x09, 0x09, 0x09, 0x09, 0x0f, 0x00)


def test_filler_glyph_for_everything_else():
    assert get_glyph(0) == FILLER_GLYPH
    assert get_glyph(0x1f) == FILLER_GLYPH
    assert get_glyph(0x7f) == FILLER_GLYPH
    assert get_glyph(0xe9) == FILLER_GLYPH
    assert get_glyph(0x2603) == FILLER_GLYPH


def test_draw_char():
    bitmap = Bitmap(12, 10)
    draw_char(bitmap, 3, 1, "8")
    assert glyph_rows(bitmap, 3, 1) == get_glyph(ord("8"))
    # Only the five leftmost columns of a glyph are drawn.
    assert not any(bitmap.get_bit(x, y) for x in range(8, 12) for y in range(10))


def test_draw_char_outside_the_bitmap():
    bitmap = Bitmap(4, 4)
    draw_char(bitmap, -2, -3, "0")
    # Rows 3 to 6 of the glyph land on rows 0 to 3, shifted two columns left.
    assert bitmap.to_string() == "0100\n0100\n0100\n1100"


def test_draw_char_extended_and_wide_characters():
    bitmap = Bitmap(10, 8)
    draw_char(bitmap, 0, 0, "é")
    draw_char(bitmap, 5, 0, "☃")
    assert glyph_rows(bitmap, 0, 0) == FILLER_GLYPH
    assert glyph_rows(bitmap, 5, 0) == FILLER_GLYPH


def test_draw_string_advances_and_wraps():
    bitmap = Bitmap(20, 20)
    draw_string(bitmap, 2, 1, "12\n3")
    assert glyph_rows(bitmap, 2, 1) == get_glyph(ord("1"))
    assert glyph_rows(bitmap, 7, 1) == get_glyph(ord("2"))
    assert glyph_rows(bitmap, 2, 9) == get_glyph(ord("3"))


def test_draw_string_turns_control_characters_into_spaces():
    bitmap = Bitmap(20, 8)
    draw_string(bitmap, 0, 0, "\t\x01A")
    assert not any(bitmap.get_bit(x, y) for x in range(10) for y in range(8))
    assert glyph_rows(bitmap, 10, 0) == get_glyph(ord("A"))


def test_render_text_size():
    bitmap = render_text("ab\ncde")
    assert (bitmap.width, bitmap.height) == (19, 20)
    assert glyph_rows(bitmap, 2, 2) == get_glyph(ord("a"))
    assert glyph_rows(bitmap, 12, 10) == get_glyph(ord("e"))


def test_render_text_single_line():
    bitmap = render_text("Hi")
    assert (bitmap.width, bitmap.height) == (14, 12)
    assert not any(bitmap.get_bit(x, 0) or bitmap.get_bit(x, 1) for x in range(14))
