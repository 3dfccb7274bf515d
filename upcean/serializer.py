import io
from typing import Tuple

from PIL import Image

from upcean.bitmap import Bitmap

BARCODE_IMAGE_NAME = "milk_barcode"
BARCODE_COMMENT = "the milk.com barcode generator; http://www.milk.com/barcode/"
TEXT_IMAGE_NAME = "milk_text"
TEXT_COMMENT = "milk.com text image; http://www.milk.com/barcode/"
HTTP_HEADER = "Content-Type: image/x-xbitmap\nCache-Control: max-age=3600\n\n"
VALUES_PER_LINE = 10

# Decides whether each byte value is followed by " ," (bit set) or ", " (bit clear), four bytes per entry, low bit
# first, repeating every 128 bytes. Do not edit; some XBM readers are picky about this.
SPACING_TABLE: Tuple[int, ...] = (
    15, 9, 10, 11, 5, 11, 11, 15, 9, 9, 4, 11, 9, 10, 5, 11,
    8, 10, 15, 10, 14, 11, 2, 11, 5, 11, 0, 0, 0, 0, 0, 0,
)
SPACING_PERIOD = len(SPACING_TABLE) * 4


def to_xbm(bitmap: Bitmap, name: str = BARCODE_IMAGE_NAME, comment: str = BARCODE_COMMENT,
           http_header: bool = False) -> str:
    """Returns the bitmap as an XBM image, optionally preceded by an HTTP response header."""
    output = io.StringIO()
    if http_header:
        output.write(HTTP_HEADER)
    output.write(f"#define {name}_width {bitmap.width}\n"
                 f"#define {name}_height {bitmap.height}\n"
                 f"static char {name}_bits[] = {{\n")
    column: int = VALUES_PER_LINE
    spacing: int = 0
    for row in bitmap.rows():
        for value in row:
            if column == VALUES_PER_LINE:
                output.write("   ")
                column = 0
            separator: str = " ," if SPACING_TABLE[spacing >> 2] & (1 << (spacing & 0x3)) else ", "
            output.write(f"0x{value:02x}{separator}")
            spacing = (spacing + 1) % SPACING_PERIOD
            column += 1
            if column == VALUES_PER_LINE:
                output.write("\n")
    output.write(f"}};\n/* {comment} */\n")
    return output.getvalue()


def text_to_xbm(bitmap: Bitmap, http_header: bool = False) -> str:
    """Returns a text image (such as an error message) as an XBM image."""
    return to_xbm(bitmap, TEXT_IMAGE_NAME, TEXT_COMMENT, http_header)


def to_pbm(bitmap: Bitmap, comment: str = "UPC/EAN BARCODE") -> str:
    """
    Returns a string containing the image data in the plain PBM format (P1).
    This data can be saved to a .pbm file directly or loaded into Pillow for further enhancement or format conversion.
    """
    pbm_data: str = f"P1\n# {comment}\n{bitmap.width} {bitmap.height}\n"
    if bitmap.height:
        pbm_data += bitmap.to_string() + "\n"
    return pbm_data


def to_pillow_image(bitmap: Bitmap) -> Image.Image:
    """Converts the bitmap into a Pillow Image object, in 8-bit grayscale."""
    pbm_memory_file = io.BytesIO(to_pbm(bitmap).encode("utf-8"))
    pillow_image = Image.open(pbm_memory_file)
    pillow_image = pillow_image.convert("L")  # Converts pillow_image to 8-bit grayscale
    return pillow_image
