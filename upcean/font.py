from typing import Tuple

from upcean.bitmap import Bitmap

GLYPH_WIDTH = 5
GLYPH_HEIGHT = 8

# Drawn for control codes, DEL and anything past 7-bit ASCII.
FILLER_GLYPH: Tuple[int, ...] = (0x0f, 0x0f, 0x0f, 0x0f, 0x0f, 0x0f, 0x0f, 0x00)

# The 5x8 font for printable ASCII (0x20 - 0x7f), eight rows per glyph, top row first. Bit 0 of each row is the
# leftmost pixel; only the low five bits are ever drawn.
FONT_5X8: Tuple[Tuple[int, ...], ...] = (
    (0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00),  # space
    (0x02, 0x02, 0x02, 0x02, 0x02, 0x00, 0x02, 0x00),  # !
    (0x05, 0x05, 0x05, 0x00, 0x00, 0x00, 0x00, 0x00),  # "
    (0x05, 0x05, 0x0f, 0x05, 0x0f, 0x05, 0x05, 0x00),  # #
    (0x02, 0x0f, 0x01, 0x0f, 0x08, 0x0f, 0x04, 0x00),  # $
    (0x0b, 0x0b, 0x08, 0x06, 0x01, 0x0d, 0x0d, 0x00),  # %
    (0x03, 0x05, 0x02, 0x05, 0x0d, 0x05, 0x0b, 0x00),  # &
    (0x04, 0x04, 0x06, 0x00, 0x00, 0x00, 0x00, 0x00),  # '
    (0x04, 0x02, 0x02, 0x02, 0x02, 0x02, 0x04, 0x00),  # (
    (0x02, 0x04, 0x04, 0x04, 0x04, 0x04, 0x02, 0x00),  # )
    (0x00, 0x09, 0x06, 0x0f, 0x06, 0x09, 0x00, 0x00),  # *
    (0x00, 0x02, 0x02, 0x07, 0x02, 0x02, 0x00, 0x00),  # +
    (0x00, 0x00, 0x00, 0x00, 0x04, 0x04, 0x06, 0x00),  # ,
    (0x00, 0x00, 0x00, 0x0f, 0x00, 0x00, 0x00, 0x00),  # -
    (0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x02, 0x00),  # .
    (0x08, 0x08, 0x04, 0x06, 0x02, 0x01, 0x01, 0x00),  # /
    (0x0f, 0x09, 0x09, 0x09, 0x09, 0x09, 0x0f, 0x00),  # 0
    (0x06, 0x04, 0x04, 0x04, 0x04, 0x04, 0x0f, 0x00),  # 1
    (0x0f, 0x09, 0x08, 0x0f, 0x01, 0x09, 0x0f, 0x00),  # 2
    (0x0f, 0x08, 0x08, 0x0f, 0x08, 0x08, 0x0f, 0x00),  # 3
    (0x09, 0x09, 0x09, 0x0f, 0x08, 0x08, 0x08, 0x00),  # 4
    (0x0f, 0x09, 0x01, 0x0f, 0x08, 0x09, 0x0f, 0x00),  # 5
    (0x03, 0x01, 0x01, 0x0f, 0x09, 0x09, 0x0f, 0x00),  # 6
    (0x0f, 0x09, 0x09, 0x0c, 0x04, 0x04, 0x04, 0x00),  # 7
    (0x0f, 0x09, 0x09, 0x0f, 0x09, 0x09, 0x0f, 0x00),  # 8
    (0x0f, 0x09, 0x09, 0x0f, 0x08, 0x08, 0x08, 0x00),  # 9
    (0x00, 0x02, 0x00, 0x00, 0x00, 0x02, 0x00, 0x00),  # :
    (0x00, 0x04, 0x00, 0x00, 0x04, 0x04, 0x06, 0x00),  # ;
    (0x08, 0x04, 0x02, 0x01, 0x02, 0x04, 0x08, 0x00),  # <
    (0x00, 0x00, 0x0f, 0x00, 0x0f, 0x00, 0x00, 0x00),  # =
    (0x01, 0x02, 0x04, 0x08, 0x04, 0x02, 0x01, 0x00),  # >
    (0x0f, 0x09, 0x08, 0x0e, 0x02, 0x00, 0x02, 0x00),  # ?
    (0x0f, 0x09, 0x0d, 0x0d, 0x0d, 0x01, 0x0f, 0x00),  # @
    (0x0f, 0x09, 0x09, 0x0f, 0x09, 0x09, 0x09, 0x00),  # A
    (0x07, 0x09, 0x09, 0x07, 0x09, 0x09, 0x07, 0x00),  # B
    (0x0f, 0x01, 0x01, 0x01, 0x01, 0x01, 0x0f, 0x00),  # C
    (0x07, 0x09, 0x09, 0x09, 0x09, 0x09, 0x07, 0x00),  # D
    (0x0f, 0x01, 0x01, 0x0f, 0x01, 0x01, 0x0f, 0x00),  # E
    (0x0f, 0x01, 0x01, 0x0f, 0x01, 0x01, 0x01, 0x00),  # F
    (0x0f, 0x01, 0x01, 0x0d, 0x09, 0x09, 0x0f, 0x00),  # G
    (0x09, 0x09, 0x09, 0x0f, 0x09, 0x09, 0x09, 0x00),  # H
    (0x07, 0x02, 0x02, 0x02, 0x02, 0x02, 0x07, 0x00),  # I
    (0x0e, 0x04, 0x04, 0x04, 0x04, 0x05, 0x07, 0x00),  # J
    (0x09, 0x09, 0x09, 0x07, 0x09, 0x09, 0x09, 0x00),  # K
    (0x01, 0x01, 0x01, 0x01, 0x01, 0x01, 0x0f, 0x00),  # L
    (0x09, 0x0f, 0x0f, 0x0f, 0x09, 0x09, 0x09, 0x00),  # M
    (0x09, 0x0b, 0x0d, 0x09, 0x09, 0x09, 0x09, 0x00),  # N
    (0x0f, 0x09, 0x09, 0x09, 0x09, 0x09, 0x0f, 0x00),  # O
    (0x0f, 0x09, 0x09, 0x0f, 0x01, 0x01, 0x01, 0x00),  # P
    (0x0f, 0x09, 0x09, 0x09, 0x0b, 0x05, 0x0b, 0x00),  # Q
    (0x07, 0x09, 0x09, 0x07, 0x09, 0x09, 0x09, 0x00),  # R
    (0x0f, 0x01, 0x01, 0x0f, 0x08, 0x08, 0x0f, 0x00),  # S
    (0x0f, 0x02, 0x02, 0x02, 0x02, 0x02, 0x02, 0x00),  # T
    (0x09, 0x09, 0x09, 0x09, 0x09, 0x09, 0x0f, 0x00),  # U
    (0x09, 0x09, 0x09, 0x09, 0x09, 0x05, 0x02, 0x00),  # V
    (0x09, 0x09, 0x09, 0x09, 0x0f, 0x0f, 0x09, 0x00),  # W
    (0x09, 0x09, 0x05, 0x06, 0x0a, 0x09, 0x09, 0x00),  # X
    (0x09, 0x09, 0x09, 0x0f, 0x08, 0x08, 0x0f, 0x00),  # Y
    (0x0f, 0x08, 0x08, 0x06, 0x01, 0x01, 0x0f, 0x00),  # Z
    (0x0e, 0x02, 0x02, 0x02, 0x02, 0x02, 0x0e, 0x00),  # [
    (0x01, 0x01, 0x02, 0x06, 0x04, 0x08, 0x08, 0x00),  # \
    (0x07, 0x04, 0x04, 0x04, 0x04, 0x04, 0x07, 0x00),  # ]
    (0x02, 0x05, 0x05, 0x00, 0x00, 0x00, 0x00, 0x00),  # ^
    (0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x0f, 0x00),  # _
    (0x02, 0x02, 0x06, 0x00, 0x00, 0x00, 0x00, 0x00),  # `
    (0x00, 0x00, 0x0f, 0x08, 0x0f, 0x09, 0x0f, 0x00),  # a
    (0x01, 0x01, 0x0f, 0x09, 0x09, 0x09, 0x0f, 0x00),  # b
    (0x00, 0x00, 0x0f, 0x01, 0x01, 0x01, 0x0f, 0x00),  # c
    (0x08, 0x08, 0x0f, 0x09, 0x09, 0x09, 0x0f, 0x00),  # d
    (0x00, 0x00, 0x0f, 0x09, 0x0f, 0x01, 0x0f, 0x00),  # e
    (0x0e, 0x02, 0x0f, 0x02, 0x02, 0x02, 0x02, 0x00),  # f
    (0x00, 0x00, 0x0f, 0x09, 0x09, 0x0f, 0x08, 0x0c),  # g
    (0x01, 0x01, 0x0f, 0x09, 0x09, 0x09, 0x09, 0x00),  # h
    (0x02, 0x00, 0x03, 0x02, 0x02, 0x02, 0x07, 0x00),  # i
    (0x04, 0x00, 0x04, 0x04, 0x04, 0x04, 0x05, 0x07),  # j
    (0x01, 0x01, 0x09, 0x05, 0x03, 0x05, 0x09, 0x00),  # k
    (0x03, 0x02, 0x02, 0x02, 0x02, 0x02, 0x07, 0x00),  # l
    (0x00, 0x00, 0x09, 0x0f, 0x0f, 0x09, 0x09, 0x00),  # m
    (0x00, 0x00, 0x0f, 0x09, 0x09, 0x09, 0x09, 0x00),  # n
    (0x00, 0x00, 0x0f, 0x09, 0x09, 0x09, 0x0f, 0x00),  # o
    (0x00, 0x00, 0x0f, 0x09, 0x09, 0x0f, 0x01, 0x01),  # p
    (0x00, 0x00, 0x0f, 0x09, 0x09, 0x0f, 0x08, 0x08),  # q
    (0x00, 0x00, 0x0f, 0x01, 0x01, 0x01, 0x01, 0x00),  # r
    (0x00, 0x00, 0x0f, 0x01, 0x0f, 0x08, 0x0f, 0x00),  # s
    (0x00, 0x02, 0x0f, 0x02, 0x02, 0x02, 0x0e, 0x00),  # t
    (0x00, 0x00, 0x09, 0x09, 0x09, 0x09, 0x0f, 0x00),  # u
    (0x00, 0x00, 0x09, 0x09, 0x09, 0x05, 0x02, 0x00),  # v
    (0x00, 0x00, 0x09, 0x09, 0x0f, 0x0f, 0x09, 0x00),  # w
    (0x00, 0x00, 0x09, 0x09, 0x06, 0x09, 0x09, 0x00),  # x
    (0x00, 0x00, 0x09, 0x09, 0x09, 0x0f, 0x08, 0x0c),  # y
    (0x00, 0x00, 0x0f, 0x08, 0x06, 0x01, 0x0f, 0x00),  # z
    (0x08, 0x04, 0x04, 0x02, 0x04, 0x04, 0x08, 0x00),  # {
    (0x02, 0x02, 0x02, 0x02, 0x02, 0x02, 0x02, 0x00),  # |
    (0x01, 0x02, 0x02, 0x04, 0x02, 0x02, 0x01, 0x00),  # }
    (0x00, 0x0a, 0x05, 0x00, 0x00, 0x00, 0x00, 0x00),  # ~
    (0x0f, 0x0f, 0x0f, 0x0f, 0x0f, 0x0f, 0x0f, 0x00),  # DEL
)


def get_glyph(code: int) -> Tuple[int, ...]:
    """Returns the eight rows of the glyph for the given character code, falling back to the filler glyph."""
    if 0x20 <= code < 0x80:
        return FONT_5X8[code - 0x20]
    return FILLER_GLYPH


def _make_font_bitmap() -> Bitmap:
    """Lays the whole font out as a single 8-pixel-wide column, 256 glyphs tall, so it can be blitted from."""
    font_bitmap = Bitmap(8, 256 * GLYPH_HEIGHT)
    for code in range(256):
        font_bitmap.buf[code * GLYPH_HEIGHT:(code + 1) * GLYPH_HEIGHT] = bytes(get_glyph(code))
    return font_bitmap


FONT_BITMAP: Bitmap = _make_font_bitmap()


def draw_char(bitmap: Bitmap, x: int, y: int, char: str):
    """Draws a single character with its top left corner at (x, y)."""
    code: int = ord(char)
    if code > 0xff:
        code = 0x7f
    bitmap.copy_rect(x, y, FONT_BITMAP, 0, code * GLYPH_HEIGHT, GLYPH_WIDTH, GLYPH_HEIGHT)


def draw_string(bitmap: Bitmap, x: int, y: int, text: str):
    """
    Draws a string starting at (x, y), 5 pixels per character. A newline returns to the starting column, one glyph
    height further down; any other control character is drawn as a space.
    """
    origin_x: int = x
    for char in text:
        if char == "\n":
            x = origin_x
            y += GLYPH_HEIGHT
            continue
        if char < " ":
            char = " "
        draw_char(bitmap, x, y, char)
        x += GLYPH_WIDTH


def render_text(text: str) -> Bitmap:
    """Returns a new bitmap just big enough to hold the given (possibly multi-line) text, plus a 2 pixel margin."""
    lines = text.split("\n")
    max_width: int = max(len(line) for line in lines)
    bitmap = Bitmap(max_width * GLYPH_WIDTH + 4, len(lines) * GLYPH_HEIGHT + 4)
    draw_string(bitmap, 2, 2, text)
    return bitmap
