import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, Optional, Tuple

from PIL import Image

from upcean.bitmap import Bitmap
from upcean.checksum import PLACEHOLDER, UPC_A_MULTIPLIER, checksum_is_correct
from upcean.encoding import (MULTIPLIERS, BarcodeFormat, BarcodeFormatError, FormatHint, complete_digits,
                             encode_barcode, encode_supplement, expand_upc_e, resolve_format, to_upc_e_digits,
                             validate_digits)
from upcean.font import render_text
from upcean.render import build_barcode
from upcean.serializer import (BARCODE_COMMENT, BARCODE_IMAGE_NAME, TEXT_COMMENT, TEXT_IMAGE_NAME, to_pbm,
                               to_pillow_image, to_xbm)

logger = logging.getLogger(__name__)

DEFAULT_DIGITS = "000000000000"
DEFAULT_TEXT = "Enjoy UPC and EAN barcodes\nat www.milk.com!"

# Each mode maps to the accepted formats and whether to draw the short form. Text mode has no barcode at all.
MODES: Dict[str, Optional[Tuple[FormatHint, bool]]] = {
    "upcean": (FormatHint.AUTO, False),
    "upcean-short": (FormatHint.AUTO, True),
    "upce": (FormatHint.UPC_E, False),
    "upce-short": (FormatHint.UPC_E, True),
    "ean8": (FormatHint.EAN_8, False),
    "ean8-short": (FormatHint.EAN_8, True),
    "upca-ean13": (FormatHint.UPC_EAN, False),
    "upca-ean13-short": (FormatHint.UPC_EAN, True),
    "text": None,
}


def main():
    arg_parser = argparse.ArgumentParser(description="UPC and EAN Barcode Generator")
    arg_parser.add_argument("value", type=str, nargs="?",
                            help="The value to encode, as [:mode:]digits[,supplement][:banner]; "
                            "use ? in place of the check digit to have it calculated")
    arg_parser.add_argument("-m", "--mode", choices=MODES, default="upcean",
                            help="The kind of barcode to generate, or text to render the value as text")
    arg_parser.add_argument("-o", "--outputpath", type=str,
                            help="The output path for the barcode file; .xbm and .pbm are written as text, any other "
                            "extension is converted with Pillow. Prints XBM to standard output if omitted")
    arg_parser.add_argument("--http-header", action="store_true",
                            help="Precede the XBM output with an HTTP response header")
    arg_parser.add_argument("-s", "--bitstring", action="store_true",
                            help="Output a string of bits, where 0 and 1 correspond to white and black bars, "
                            "respectively")
    arg_parser.add_argument("--debug", action="store_true",
                            help="Log what the generator is doing")
    args = arg_parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.debug else logging.WARNING,
                        format="%(levelname)s: %(name)s: %(message)s")

    mode, value = split_mode(args.value, args.mode)

    if MODES[mode] is None:
        output_image(render_text(value if value is not None else DEFAULT_TEXT), args, TEXT_IMAGE_NAME, TEXT_COMMENT)
        return

    hint, short_form = MODES[mode]
    digits, supplement, banner = parse_value(value if value is not None else DEFAULT_DIGITS)

    # If the user passed the -s | --bitstring parameter, outputs the bit string and exits.
    if args.bitstring:
        try:
            print(get_bit_string(digits, supplement, hint))
        except BarcodeFormatError as e:
            sys.exit(f"Error: {e}")
        return

    try:
        bitmap = build_barcode(digits, supplement, hint, short_form, banner)
    except BarcodeFormatError as e:
        logger.warning("Rendering the error message instead of a barcode: %s", str(e).replace("\n", " "))
        output_image(render_text(str(e)), args, TEXT_IMAGE_NAME, TEXT_COMMENT)
        return

    warning: Optional[str] = check_digit_warning(digits, resolve_format(digits, hint))
    if warning is not None:
        print(warning, file=sys.stderr)
    output_image(bitmap, args, BARCODE_IMAGE_NAME, BARCODE_COMMENT)


def split_mode(value: Optional[str], default_mode: str) -> Tuple[str, Optional[str]]:
    """Strips a leading ":mode:" from the value, if it names a known mode, and returns the mode and the rest."""
    if value is not None and value.startswith(":"):
        mode, separator, rest = value[1:].partition(":")
        if separator and mode in MODES:
            return mode, rest
    return default_mode, value


def parse_value(value: str) -> Tuple[str, str, Optional[str]]:
    """
    Splits a value of the form digits[,supplement][:banner] into its parts. Characters other than digits and ? are
    skipped, so "0-36000-29145-?" is fine. The banner is None if there is no colon at all.
    """
    digits: str = ""
    supplement: str = ""
    in_supplement: bool = False
    for i, char in enumerate(value):
        if "0" <= char <= "9" or char == PLACEHOLDER:
            if in_supplement:
                supplement += char
            else:
                digits += char
        elif char == ",":
            in_supplement = True
        elif char == ":":
            return digits, supplement, value[i + 1:]
    return digits, supplement, None


def get_bit_string(digits: str, supplement: str, hint: FormatHint) -> str:
    """Returns the bars of the main barcode as a string of bits, followed by those of the supplement, if any."""
    validate_digits(digits)
    validate_digits(supplement, allow_placeholder=False)
    barcode_format: BarcodeFormat = resolve_format(digits, hint)
    bit_string: str = encode_barcode(complete_digits(barcode_format, digits), barcode_format)
    if supplement:
        bit_string += " " + encode_supplement(supplement)
    return bit_string


def check_digit_warning(digits: str, barcode_format: BarcodeFormat) -> Optional[str]:
    """
    Returns a warning if the user supplied a check digit that doesn't match the rest of the number. The barcode is
    still generated with the digit as given.
    """
    if digits.endswith(PLACEHOLDER):
        return None
    if barcode_format == BarcodeFormat.UPC_E:
        correct: bool = checksum_is_correct(expand_upc_e(to_upc_e_digits(digits)), UPC_A_MULTIPLIER)
    else:
        correct = checksum_is_correct(digits, MULTIPLIERS[barcode_format])
    if correct:
        return None
    return (f"Warning: the entered {barcode_format.value} barcode number is incorrect and won't be scannable "
            f"(checksum failed). Use {PLACEHOLDER} as the last digit to have it calculated.")


def output_image(bitmap: Bitmap, args: argparse.Namespace, name: str, comment: str):
    """Writes the image to the requested file, or prints it as XBM."""
    if args.outputpath is None:
        sys.stdout.write(to_xbm(bitmap, name, comment, args.http_header))
        return
    output_path = Path(args.outputpath)
    match output_path.suffix.lower():
        case ".xbm":
            write_text_file(to_xbm(bitmap, name, comment), output_path)
        case ".pbm":
            write_text_file(to_pbm(bitmap), output_path)
        case _:
            save_pillow_image(to_pillow_image(bitmap), output_path)
    print(f'File saved successfully to "{output_path}".')


def confirm_overwrite(path: Path):
    """If a file with the specified name already exists, asks if it's ok to overwrite it, and exits if not."""
    if path.is_dir():
        sys.exit("Error: no filename provided.")
    if path.exists():
        while True:
            reply = input(f"The file \"{path}\" already exists. Do you want to overwrite it? (Y/N) ").upper().strip()
            if reply == "Y":
                break
            elif reply == "N":
                sys.exit()


def write_text_file(data: str, path: Path):
    """Writes an XBM or PBM image to file."""
    confirm_overwrite(path)
    try:
        path.write_text(data, encoding="ascii")
    except FileNotFoundError:
        sys.exit("Error: incorrect path: no such directory.")
    except OSError:
        sys.exit("Error: file could not be written.")


def save_pillow_image(image: Image.Image, path: Path):
    """
    Saves the Pillow Image object to file, in the format specified in the file's extension.
    If the file's extension doesn't indicate a correct image format, or if the provided path is incorrect,
    exits with an error message.
    """
    if path.suffix == "":
        sys.exit("Error: filename has no extension.")
    confirm_overwrite(path)
    try:
        image.save(path)
    except ValueError:
        sys.exit(f"Error: \"{path.suffix}\": incorrect or unsupported file format.")
    except FileNotFoundError:
        sys.exit("Error: incorrect path: no such directory.")
    except OSError:
        sys.exit("Error: file could not be written.")


if __name__ == "__main__":
    main()
