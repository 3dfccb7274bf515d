"""
UPC and EAN barcode generator.

Turns UPC-A, UPC-E, EAN-13 and EAN-8 numbers, with optional 2- or 5-digit supplements, into monochrome bitmaps that
can be written out as XBM, PBM, or any format Pillow supports.

    >>> from upcean import make_barcode, to_xbm
    >>> print(to_xbm(make_barcode("03600029145?")))
"""

from upcean.bitmap import Bitmap
from upcean.encoding import BarcodeFormat, BarcodeFormatError, FormatHint
from upcean.render import build_barcode, make_barcode
from upcean.serializer import to_pbm, to_pillow_image, to_xbm

__all__ = [
    "Bitmap",
    "BarcodeFormat",
    "BarcodeFormatError",
    "FormatHint",
    "build_barcode",
    "make_barcode",
    "to_pbm",
    "to_pillow_image",
    "to_xbm",
]
