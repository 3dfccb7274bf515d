from typing import List


class Bitmap:
    """
    A monochrome raster packed at one bit per pixel, row by row, where bit 0 of each byte is the leftmost pixel.
    Coordinates outside the bitmap are tolerated everywhere: reads return 0 and writes are ignored, so the drawing
    code never has to clip anything itself.
    """

    def __init__(self, width: int, height: int):
        self.width: int = width
        self.height: int = height
        self.width_bytes: int = (width + 7) // 8
        self.buf: bytearray = bytearray(self.width_bytes * height)

    def __repr__(self) -> str:
        return f"Bitmap({self.width}, {self.height})"

    def get_byte(self, x_byte: int, y: int) -> int:
        """Returns the byte at the given byte-column and row, or 0 if it is out of range."""
        if x_byte < 0 or x_byte >= self.width_bytes or y < 0 or y >= self.height:
            return 0
        return self.buf[self.width_bytes * y + x_byte]

    def get_bit(self, x: int, y: int) -> int:
        """Returns the pixel at (x, y). Anything outside the bitmap reads as 0."""
        if x < 0 or x >= self.width:
            return 0
        return self.get_byte(x >> 3, y) >> (x & 0x7) & 1

    def set_bit(self, x: int, y: int, value: int = 1):
        """Sets or clears the pixel at (x, y). Anything outside the bitmap is silently ignored."""
        if x < 0 or x >= self.width or y < 0 or y >= self.height:
            return
        index: int = self.width_bytes * y + (x >> 3)
        if value:
            self.buf[index] |= 1 << (x & 0x7)
        else:
            self.buf[index] &= ~(1 << (x & 0x7)) & 0xff

    def copy_rect(self, dx: int, dy: int, src: "Bitmap", sx: int, sy: int, width: int, height: int):
        """Copies a width x height rectangle from src at (sx, sy) to this bitmap at (dx, dy), one bit at a time."""
        for y in range(height):
            for x in range(width):
                self.set_bit(x + dx, y + dy, src.get_bit(x + sx, y + sy))

    def vline(self, x: int, y1: int, y2: int):
        """Draws a vertical line at column x, from y1 to y2 inclusive."""
        for y in range(y1, y2 + 1):
            self.set_bit(x, y, 1)

    def rows(self) -> List[bytes]:
        """Returns the packed bytes of each row, top to bottom."""
        return [bytes(self.buf[y * self.width_bytes:(y + 1) * self.width_bytes]) for y in range(self.height)]

    def to_string(self, on: str = "1", off: str = "0") -> str:
        """Returns the bitmap as lines of characters, one per row."""
        return "\n".join("".join(on if self.get_bit(x, y) else off for x in range(self.width))
                         for y in range(self.height))
