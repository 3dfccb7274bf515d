from typing import Optional

import pytest
from upcean.bitmap import Bitmap
from upcean.encoding import (BAD_CHARACTER_MESSAGE, BAD_LENGTH_MESSAGE, BAD_SUPPLEMENT_MESSAGE,
                             UPC_E_COMPRESSION_MESSAGE, UPC_E_LEADING_DIGIT_MESSAGE, BarcodeFormat,
                             BarcodeFormatError, FormatHint, encode_barcode)
from upcean.font import get_glyph, render_text
from upcean.render import (DEFAULT_BANNER, build_barcode, draw_bars, draw_supplement, long_bar_mask, make_barcode,
                           make_ean_8, make_ean_13, make_upc_a, make_upc_e, supplement_width)


def column(bitmap: Bitmap, x: int, stop: Optional[int] = None):
    """Returns the rows that are set in the given column, optionally only those above row stop."""
    return [y for y in range(bitmap.height if stop is None else stop) if bitmap.get_bit(x, y)]


def glyph_at(bitmap: Bitmap, x: int, y: int):
    return tuple(sum(bitmap.get_bit(x + i, y + row) << i for i in range(5)) for row in range(8))


def same_bitmap(first: Bitmap, second: Bitmap) -> bool:
    return (first.width, first.height, first.buf) == (second.width, second.height, second.buf)


@pytest.mark.parametrize("barcode_format, digits", [
    (BarcodeFormat.UPC_A, "036000291452"),
    (BarcodeFormat.EAN_13, "4101450004474"),
    (BarcodeFormat.EAN_8, "96385074"),
    (BarcodeFormat.UPC_E, "01234565"),
])
def test_long_bar_mask_matches_the_bit_string(barcode_format, digits):
    bit_string = encode_barcode(digits, barcode_format)
    mask = long_bar_mask(barcode_format)
    assert len(mask) == len(bit_string)
    # Guards are always long.
    assert mask.startswith("111")


def test_draw_bars():
    bitmap = Bitmap(6, 6)
    draw_bars(bitmap, "1011", 1, 1, 3, 4, "1001")
    assert column(bitmap, 1) == [1, 2, 3, 4]
    assert column(bitmap, 2) == []
    assert column(bitmap, 3) == [1, 2, 3]
    assert column(bitmap, 4) == [1, 2, 3, 4]


def test_upc_a_short():
    bitmap = make_upc_a("03600029145?", short_form=True)
    assert (bitmap.width, bitmap.height) == (95, 40)
    bit_string = encode_barcode("036000291452", BarcodeFormat.UPC_A)
    for x, bit in enumerate(bit_string):
        assert column(bitmap, x, 32) == (list(range(32)) if bit == "1" else [])
    # The computed check digit is printed last.
    assert glyph_at(bitmap, 13 + 11 * 6, 33) == get_glyph(ord("2"))
    assert glyph_at(bitmap, 13, 33) == get_glyph(ord("0"))


def test_upc_a_full():
    bitmap = make_upc_a("036000291452")
    assert (bitmap.width, bitmap.height) == (107, 60)
    # Start guard, and the first digit (0 = 0001101), reach down to the guard height.
    assert column(bitmap, 6) == list(range(57))
    assert column(bitmap, 6 + 6) == list(range(57))
    # The second digit (3 = 0111101) is a normal bar.
    assert column(bitmap, 6 + 11) == list(range(51))
    # The leading and check digits are printed outside the bars, a little higher up.
    assert glyph_at(bitmap, 0, 46) == get_glyph(ord("0"))
    assert glyph_at(bitmap, 103, 46) == get_glyph(ord("2"))
    assert glyph_at(bitmap, 18, 53) == get_glyph(ord("3"))


def test_upc_a_offset_and_extra_width():
    bitmap = make_upc_a("036000291452", y=8, extra_width=28)
    assert (bitmap.width, bitmap.height) == (129, 68)
    assert column(bitmap, 6)[0] == 8
    assert make_upc_a("036000291452", extra_width=4).width == 107
    assert make_upc_a("036000291452", short_form=True, extra_width=28).width == 123


def test_ean_13():
    full = make_ean_13("400638133393?")
    assert (full.width, full.height) == (101, 60)
    assert glyph_at(full, 0, 53) == get_glyph(ord("4"))
    # Check digit 1 goes under the right half.
    assert glyph_at(full, 57 + 5 * 7, 53) == get_glyph(ord("1"))
    short = make_ean_13("4006381333931", short_form=True)
    assert (short.width, short.height) == (95, 40)
    assert glyph_at(short, 9, 33) == get_glyph(ord("4"))


def test_ean_8():
    full = make_ean_8("9638507?")
    assert (full.width, full.height) == (67, 60)
    # EAN-8 bars start at the left edge, without room for a leading digit.
    assert column(full, 0) == list(range(57))
    assert glyph_at(full, 37 + 3 * 7, 53) == get_glyph(ord("4"))
    short = make_ean_8("96385074", short_form=True)
    assert (short.width, short.height) == (67, 40)
    assert glyph_at(short, 10, 33) == get_glyph(ord("9"))


def test_upc_e():
    full = make_upc_e("123456?")
    assert (full.width, full.height) == (63, 60)
    assert glyph_at(full, 0, 46) == get_glyph(ord("0"))
    assert glyph_at(full, 59, 46) == get_glyph(ord("5"))
    # End guard 010101 is long.
    assert column(full, 6 + 50) == list(range(57))
    short = make_upc_e("012345000065", short_form=True)
    assert (short.width, short.height) == (51, 40)
    assert glyph_at(short, 2 + 7 * 6, 33) == get_glyph(ord("5"))
    assert make_upc_e("123456?", extra_width=55).width == 112


def test_upc_e_errors():
    with pytest.raises(BarcodeFormatError) as error:
        make_upc_e("21234565")
    assert str(error.value) == UPC_E_LEADING_DIGIT_MESSAGE
    with pytest.raises(BarcodeFormatError) as error:
        make_upc_e("012345100065")
    assert str(error.value) == UPC_E_COMPRESSION_MESSAGE


@pytest.mark.parametrize("digits", ["036000291452", "123456789012", "98765432109?", "000000000000"])
def test_ean_13_with_leading_zero_draws_the_same_bars_as_upc_a(digits):
    upc_a = build_barcode(digits, short_form=True)
    ean_13 = build_barcode("0" + digits, short_form=True)
    assert (upc_a.width, upc_a.height) == (ean_13.width, ean_13.height)
    # Everything above the human-readable digits is identical, banner included.
    assert upc_a.rows()[:upc_a.height - 7] == ean_13.rows()[:ean_13.height - 7]


def test_supplement_width():
    assert supplement_width("12") == 28
    assert supplement_width("12345") == 55
    with pytest.raises(BarcodeFormatError):
        supplement_width("123")


def test_draw_supplement_short():
    bitmap = Bitmap(28, 40)
    draw_supplement(bitmap, "42", 0, 0, 39, False)
    # 1011 guard, then 4 in Left-B (0011101), 01, then 2 in Left-A (0010011).
    bit_string = "1011" + "0011101" + "01" + "0010011"
    for x, bit in enumerate(bit_string):
        assert column(bitmap, 8 + x, 32) == (list(range(32)) if bit == "1" else [])
    assert glyph_at(bitmap, 13, 33) == get_glyph(ord("4"))
    assert glyph_at(bitmap, 19, 33) == get_glyph(ord("2"))


def test_draw_supplement_full_puts_text_above():
    bitmap = Bitmap(28, 60)
    draw_supplement(bitmap, "42", 0, 1, 56, True)
    assert column(bitmap, 8) == list(range(9, 57))
    assert glyph_at(bitmap, 13, 1) == get_glyph(ord("4"))


def test_build_barcode_with_supplement():
    bitmap = build_barcode("03600029145?", "12345")
    assert (bitmap.width, bitmap.height) == (156, 68)
    supplement_x = 156 - 55 + 8
    assert column(bitmap, supplement_x) == list(range(17, 65))
    assert glyph_at(bitmap, supplement_x + 10, 9) == get_glyph(ord("1"))
    short = build_barcode("03600029145?", "12", short_form=True, banner="")
    assert (short.width, short.height) == (123, 40)
    assert column(short, 95 + 8) == list(range(32))


def test_banner():
    with_default = build_barcode("036000291452")
    without = build_barcode("036000291452", banner="")
    custom = build_barcode("036000291452", banner="hi")
    assert with_default.height == 68
    assert without.height == 60
    assert custom.height == 68
    assert glyph_at(custom, 49, 0) == get_glyph(ord("h"))
    assert glyph_at(custom, 54, 0) == get_glyph(ord("i"))
    x = (with_default.width + 1 - len(DEFAULT_BANNER) * 5) // 2
    assert glyph_at(with_default, x, 0) == get_glyph(ord(DEFAULT_BANNER[0]))
    # Below the banner, the barcode is the same as without one.
    assert with_default.rows()[8:] == without.rows()


def test_long_banner_is_clipped():
    bitmap = build_barcode("96385074", hint=FormatHint.EAN_8, banner="x" * 40)
    assert bitmap.width == 67


def test_make_barcode_matches_build_barcode():
    assert same_bitmap(make_barcode("4101450004474", "42"), build_barcode("4101450004474", "42"))
    assert same_bitmap(make_barcode("0123456?", hint=FormatHint.UPC_E, short_form=True),
                       build_barcode("0123456?", hint=FormatHint.UPC_E, short_form=True))


@pytest.mark.parametrize("digits, supplement, hint, message", [
    ("12345", "", FormatHint.AUTO, BAD_LENGTH_MESSAGE),
    ("", "", FormatHint.AUTO, BAD_LENGTH_MESSAGE),
    ("12345678901234567890", "", FormatHint.AUTO, BAD_LENGTH_MESSAGE),
    ("03600029145?", "123", FormatHint.AUTO, BAD_SUPPLEMENT_MESSAGE),
    ("03600029145?", "1", FormatHint.AUTO, BAD_SUPPLEMENT_MESSAGE),
    ("03600029145?", "123456", FormatHint.AUTO, BAD_SUPPLEMENT_MESSAGE),
    ("21234565", "", FormatHint.UPC_E, UPC_E_LEADING_DIGIT_MESSAGE),
    ("012345100065", "", FormatHint.UPC_E, UPC_E_COMPRESSION_MESSAGE),
])
def test_make_barcode_renders_errors_as_text(digits, supplement, hint, message):
    bitmap = make_barcode(digits, supplement, hint)
    assert same_bitmap(bitmap, render_text(message))
    with pytest.raises(BarcodeFormatError):
        build_barcode(digits, supplement, hint)


@pytest.mark.parametrize("digits, supplement", [("0360002914a2", ""), ("03600?291452", ""), ("036000291452", "1?")])
def test_make_barcode_rejects_bad_characters(digits, supplement):
    bitmap = make_barcode(digits, supplement)
    assert same_bitmap(bitmap, render_text(BAD_CHARACTER_MESSAGE))
    assert bitmap.height == 4 + 8 * 3
