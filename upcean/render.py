import logging
from typing import List, Optional, Tuple

from upcean.bitmap import Bitmap
from upcean.encoding import (BAD_SUPPLEMENT_MESSAGE, BarcodeFormat, BarcodeFormatError, FormatHint, complete_digits,
                             encode_barcode, encode_supplement, resolve_format, validate_digits)
from upcean.font import GLYPH_HEIGHT, GLYPH_WIDTH, draw_char, draw_string, render_text
from upcean.tables import DIGIT_WIDTH, MIDDLE_GUARD, SIDE_GUARD, UPC_E_END_GUARD

logger = logging.getLogger(__name__)

DEFAULT_BANNER = "www.milk.com"
FULL_HEIGHT = 60
SHORT_HEIGHT = 40
# Full-size barcodes have room for the first digit to the left of the bars.
FULL_BARS_X = 6
# Width taken by a supplement, including the gap between it and the main barcode.
SUPPLEMENT_WIDTHS = {2: 28, 5: 55}
SUPPLEMENT_GAP = 8

# (x, y, digit) for each human-readable digit drawn, with y counted up from the bottom of the bitmap.
TextLayout = List[Tuple[int, int, str]]


def draw_digit_char(bitmap: Bitmap, x: int, y: int, char: str):
    """Draws a human-readable digit; anything that isn't a digit is drawn as 0."""
    draw_char(bitmap, x, y, char if "0" <= char <= "9" else "0")


def long_bar_mask(barcode_format: BarcodeFormat) -> str:
    """
    Returns a string as long as the barcode's bit string, with 1 wherever a bar reaches down to the guard height in
    full-size barcodes: the guards, plus the first and last digits of a UPC-A.
    """
    side: str = "1" * len(SIDE_GUARD)
    middle: str = "1" * len(MIDDLE_GUARD)
    digit: str = "0" * DIGIT_WIDTH
    match barcode_format:
        case BarcodeFormat.UPC_A:
            long_digit: str = "1" * DIGIT_WIDTH
            return side + long_digit + digit * 5 + middle + digit * 5 + long_digit + side
        case BarcodeFormat.EAN_13:
            return side + digit * 6 + middle + digit * 6 + side
        case BarcodeFormat.EAN_8:
            return side + digit * 4 + middle + digit * 4 + side
        case BarcodeFormat.UPC_E:
            return side + digit * 6 + "1" * len(UPC_E_END_GUARD)


def draw_bars(bitmap: Bitmap, bit_string: str, x: int, y1: int, bar_y2: int, guard_y2: Optional[int] = None,
              mask: Optional[str] = None):
    """
    Draws a string of bits as one-pixel-wide bars starting at column x. Bars flagged in the mask extend to guard_y2,
    the others end at bar_y2.
    """
    for i, bit in enumerate(bit_string):
        if bit == "1":
            long_bar: bool = mask is not None and guard_y2 is not None and mask[i] == "1"
            bitmap.vline(x + i, y1, guard_y2 if long_bar else bar_y2)


def _draw_main_barcode(digits: str, barcode_format: BarcodeFormat, width: int, height: int, bars_x: int, y: int,
                       short_form: bool, text: TextLayout) -> Bitmap:
    """Allocates the bitmap of a main barcode and draws its bars and digits."""
    logger.debug("Drawing %s %s in a %dx%d bitmap", barcode_format.value, digits, width, height)
    bitmap = Bitmap(width, height)
    bit_string: str = encode_barcode(digits, barcode_format)
    if short_form:
        draw_bars(bitmap, bit_string, bars_x, y, height - 9)
    else:
        draw_bars(bitmap, bit_string, bars_x, y, height - 10, height - 4, long_bar_mask(barcode_format))
    for text_x, from_bottom, char in text:
        draw_digit_char(bitmap, text_x, height - from_bottom, char)
    return bitmap


def _full_width(base_width: int, extra_width: int) -> int:
    """UPC-A and UPC-E already have 6 spare columns to the right of their bars, which a supplement can use."""
    return base_width + max(0, extra_width - 6)


def make_upc_a(digits: str, short_form: bool = False, y: int = 0, extra_width: int = 0) -> Bitmap:
    """Makes a UPC-A barcode from 12 digits, the last of which may be the ? placeholder."""
    digits = complete_digits(BarcodeFormat.UPC_A, digits)
    if short_form:
        text: TextLayout = [(13 + i * 6, 7, digits[i]) for i in range(12)]
        return _draw_main_barcode(digits, BarcodeFormat.UPC_A, 95 + extra_width, SHORT_HEIGHT + y, 0, y, True, text)
    text = [(0, 14, digits[0]), (103, 14, digits[11])]
    for i in range(5):
        text.append((18 + i * 7, 7, digits[i + 1]))
        text.append((57 + i * 7, 7, digits[i + 6]))
    return _draw_main_barcode(digits, BarcodeFormat.UPC_A, _full_width(107, extra_width), FULL_HEIGHT + y,
                              FULL_BARS_X, y, False, text)


def make_upc_e(digits: str, short_form: bool = False, y: int = 0, extra_width: int = 0) -> Bitmap:
    """Makes a UPC-E barcode from 7 or 8 compressed digits, or from 12 digits that can be compressed."""
    digits = complete_digits(BarcodeFormat.UPC_E, digits)
    if short_form:
        text: TextLayout = [(2 + i * 6, 7, digits[i]) for i in range(8)]
        return _draw_main_barcode(digits, BarcodeFormat.UPC_E, 51 + extra_width, SHORT_HEIGHT + y, 0, y, True, text)
    text = [(0, 14, digits[0]), (59, 14, digits[7])]
    text.extend((11 + i * 7, 7, digits[i + 1]) for i in range(6))
    return _draw_main_barcode(digits, BarcodeFormat.UPC_E, _full_width(63, extra_width), FULL_HEIGHT + y,
                              FULL_BARS_X, y, False, text)


def make_ean_13(digits: str, short_form: bool = False, y: int = 0, extra_width: int = 0) -> Bitmap:
    """Makes an EAN-13 barcode from 13 digits, the last of which may be the ? placeholder."""
    digits = complete_digits(BarcodeFormat.EAN_13, digits)
    if short_form:
        text: TextLayout = [(9 + i * 6, 7, digits[i]) for i in range(13)]
        return _draw_main_barcode(digits, BarcodeFormat.EAN_13, 95 + extra_width, SHORT_HEIGHT + y, 0, y, True, text)
    text = [(0, 7, digits[0])]
    for i in range(6):
        text.append((11 + i * 7, 7, digits[i + 1]))
        text.append((57 + i * 7, 7, digits[i + 7]))
    return _draw_main_barcode(digits, BarcodeFormat.EAN_13, 101 + extra_width, FULL_HEIGHT + y, FULL_BARS_X, y,
                              False, text)


def make_ean_8(digits: str, short_form: bool = False, y: int = 0, extra_width: int = 0) -> Bitmap:
    """Makes an EAN-8 barcode from 8 digits, the last of which may be the ? placeholder."""
    digits = complete_digits(BarcodeFormat.EAN_8, digits)
    if short_form:
        text: TextLayout = [(10 + i * 6, 7, digits[i]) for i in range(8)]
        return _draw_main_barcode(digits, BarcodeFormat.EAN_8, 67 + extra_width, SHORT_HEIGHT + y, 0, y, True, text)
    text = []
    for i in range(4):
        text.append((5 + i * 7, 7, digits[i]))
        text.append((37 + i * 7, 7, digits[i + 4]))
    return _draw_main_barcode(digits, BarcodeFormat.EAN_8, 67 + extra_width, FULL_HEIGHT + y, 0, y, False, text)


ENCODERS = {
    BarcodeFormat.UPC_A: make_upc_a,
    BarcodeFormat.UPC_E: make_upc_e,
    BarcodeFormat.EAN_13: make_ean_13,
    BarcodeFormat.EAN_8: make_ean_8,
}


def supplement_width(digits: str) -> int:
    """Returns the width a supplement adds to the right of the main barcode."""
    try:
        return SUPPLEMENT_WIDTHS[len(digits)]
    except KeyError:
        raise BarcodeFormatError(BAD_SUPPLEMENT_MESSAGE) from None


def draw_supplement(bitmap: Bitmap, digits: str, x: int, y1: int, y2: int, text_above: bool):
    """
    Draws a supplement, bars and digits, whose space (gap included) starts at column x. The digits go above the bars
    in full-size barcodes and below them in short ones.
    """
    if text_above:
        text_y: int = y1
        y1 += GLYPH_HEIGHT
    else:
        y2 -= GLYPH_HEIGHT
        text_y = y2 + 2
    x += SUPPLEMENT_GAP
    text_x: int = x + (5 if len(digits) == 2 else 10)
    draw_bars(bitmap, encode_supplement(digits), x, y1, y2)
    for i, char in enumerate(digits):
        draw_digit_char(bitmap, text_x + i * 6, text_y, char)


def draw_banner(bitmap: Bitmap, banner: str):
    """Centers the banner along the top row."""
    # Truncates toward zero, so long banners hang off both sides evenly.
    x: int = int((bitmap.width + 1 - len(banner) * GLYPH_WIDTH) / 2)
    draw_string(bitmap, x, 0, banner)


def build_barcode(digits: str, supplement: str = "", hint: FormatHint = FormatHint.AUTO, short_form: bool = False,
                  banner: Optional[str] = None) -> Bitmap:
    """
    Builds the complete barcode image: the main code, the optional supplement and the banner above them.
    A banner of None gets the default banner, and an empty banner leaves out the banner row altogether.
    Raises BarcodeFormatError if the digits can't be encoded.
    """
    validate_digits(digits)
    validate_digits(supplement, allow_placeholder=False)
    extra_width: int = supplement_width(supplement) if supplement else 0
    if banner is None:
        banner = DEFAULT_BANNER
    y: int = GLYPH_HEIGHT if banner else 0

    barcode_format: BarcodeFormat = resolve_format(digits, hint)
    logger.debug("Resolved %s (hint %s) to %s", digits, hint.value, barcode_format.value)
    bitmap: Bitmap = ENCODERS[barcode_format](digits, short_form, y, extra_width)

    if supplement:
        if short_form:
            draw_supplement(bitmap, supplement, bitmap.width - extra_width, y, bitmap.height - 1, False)
        else:
            draw_supplement(bitmap, supplement, bitmap.width - extra_width, y + 1, bitmap.height - 4, True)
    if banner:
        draw_banner(bitmap, banner)
    return bitmap


def make_barcode(digits: str, supplement: str = "", hint: FormatHint = FormatHint.AUTO, short_form: bool = False,
                 banner: Optional[str] = None) -> Bitmap:
    """Same as build_barcode, except that bad input yields a bitmap of the explanation instead of an exception."""
    try:
        return build_barcode(digits, supplement, hint, short_form, banner)
    except BarcodeFormatError as e:
        logger.warning("Can't encode %r (supplement %r): %s", digits, supplement, str(e).replace("\n", " "))
        return render_text(str(e))
