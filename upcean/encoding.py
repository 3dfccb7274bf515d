import logging
from enum import Enum
from typing import Generator, Optional, Tuple

from upcean.checksum import (EAN_8_MULTIPLIER, EAN_13_MULTIPLIER, PLACEHOLDER, UPC_A_MULTIPLIER, char_to_digit,
                             complete_check_digit)
from upcean.tables import (LEADING_DIGIT_ENCODING, LEFT_ENCODING, MIDDLE_GUARD, RIGHT_ENCODING, SIDE_GUARD,
                           SUPPLEMENT_GUARD, SUPPLEMENT_SEPARATOR, UPC_E_END_GUARD, UPC_E_PARITY_ENCODING)

logger = logging.getLogger(__name__)

NOT_SUPPORTED = "The entered number is not supported;\n"
BAD_LENGTH_MESSAGE = (NOT_SUPPORTED + "You must supply 7, 8, 12, or 13 digits\n"
                      "for the primary UPC/EAN number to encode.")
BAD_CHARACTER_MESSAGE = (NOT_SUPPORTED + "Only the digits 0 to 9 may be used,\n"
                         "plus ? in place of the check digit.")
BAD_SUPPLEMENT_MESSAGE = NOT_SUPPORTED + "supplements may only be 2 or 5 digits."
UPC_E_LEADING_DIGIT_MESSAGE = NOT_SUPPORTED + "UPC-E barcodes must start with the\ndigit 0 or 1."
UPC_E_COMPRESSION_MESSAGE = (NOT_SUPPORTED + "In order to fit into a UPC-E barcode,\n"
                             "the original number must meet several\nrestrictions.")
ONLY_POSSIBLE_FOR = {
    7: "Passing 7 digits is only possible for\nUPC-E barcodes.",
    8: "Passing 8 digits is only possible for\nEAN-8 and UPC-E barcodes.",
    12: "Passing 12 digits is only possible for\nUPC-A and UPC-E barcodes.",
    13: "Passing 13 digits is only possible for\nEAN-13 barcodes.",
}


class BarcodeFormatError(ValueError):
    """The digits can't be encoded in the requested format. The message is meant to be shown to the user as-is."""


class BarcodeFormat(Enum):
    UPC_A = "UPC-A"
    UPC_E = "UPC-E"
    EAN_13 = "EAN-13"
    EAN_8 = "EAN-8"


class FormatHint(Enum):
    """Which formats the caller is willing to accept; AUTO picks one from the number of digits."""
    AUTO = "auto"
    UPC_E = "upce"
    EAN_8 = "ean8"
    UPC_EAN = "upcean"


DIGIT_COUNTS = {BarcodeFormat.UPC_A: 12, BarcodeFormat.EAN_13: 13, BarcodeFormat.EAN_8: 8, BarcodeFormat.UPC_E: 8}
MULTIPLIERS = {BarcodeFormat.UPC_A: UPC_A_MULTIPLIER, BarcodeFormat.EAN_13: EAN_13_MULTIPLIER,
               BarcodeFormat.EAN_8: EAN_8_MULTIPLIER, BarcodeFormat.UPC_E: UPC_A_MULTIPLIER}


def validate_digits(digits: str, allow_placeholder: bool = True):
    """Raises BarcodeFormatError unless every character is a digit, except an optional placeholder at the end."""
    body: str = digits[:-1] if allow_placeholder and digits.endswith(PLACEHOLDER) else digits
    if not all("0" <= char <= "9" for char in body):
        raise BarcodeFormatError(BAD_CHARACTER_MESSAGE)


def resolve_format(digits: str, hint: FormatHint = FormatHint.AUTO) -> BarcodeFormat:
    """
    Picks the barcode format for the given digits. There is some overlap between the digit counts: automatically,
    UPC-A takes precedence over UPC-E for 12 digits, and UPC-E over EAN-8 for 8 digits that start with a zero.
    """
    number_of_digits: int = len(digits)
    match number_of_digits, hint:
        case 7, FormatHint.AUTO | FormatHint.UPC_E:
            return BarcodeFormat.UPC_E
        case 8, FormatHint.AUTO:
            return BarcodeFormat.UPC_E if digits[0] == "0" else BarcodeFormat.EAN_8
        case 8, FormatHint.UPC_E:
            return BarcodeFormat.UPC_E
        case 8, FormatHint.EAN_8:
            return BarcodeFormat.EAN_8
        case 12, FormatHint.AUTO | FormatHint.UPC_EAN:
            return BarcodeFormat.UPC_A
        case 12, FormatHint.UPC_E:
            return BarcodeFormat.UPC_E
        case 13, FormatHint.AUTO | FormatHint.UPC_EAN:
            return BarcodeFormat.EAN_13
        case (7 | 8 | 12 | 13), _:
            raise BarcodeFormatError(NOT_SUPPORTED + ONLY_POSSIBLE_FOR[number_of_digits])
        case _:
            raise BarcodeFormatError(BAD_LENGTH_MESSAGE)


def compress_upc_e(expanded: str) -> str:
    """
    Compresses a 12-digit UPC-A number into the 8 digits of a UPC-E number (the check digit is carried over).
    Raises BarcodeFormatError if the number doesn't have one of the forms that UPC-E can represent.
    """
    if expanded[0] not in "01":
        raise BarcodeFormatError(UPC_E_COMPRESSION_MESSAGE)
    check_digit: str = expanded[11]
    # Tries the forms that keep the most manufacturer digits first.
    if expanded[5] != "0":
        if expanded[6:10] != "0000" or expanded[10] < "5":
            raise BarcodeFormatError(UPC_E_COMPRESSION_MESSAGE)
        return f"{expanded[0:6]}{expanded[10]}{check_digit}"
    if expanded[4] != "0":
        if expanded[6:10] != "0000":
            raise BarcodeFormatError(UPC_E_COMPRESSION_MESSAGE)
        return f"{expanded[0:5]}{expanded[10]}4{check_digit}"
    if expanded[3] not in "012":
        if expanded[6:9] != "000":
            raise BarcodeFormatError(UPC_E_COMPRESSION_MESSAGE)
        return f"{expanded[0:4]}{expanded[9:11]}3{check_digit}"
    if expanded[6:8] != "00":
        raise BarcodeFormatError(UPC_E_COMPRESSION_MESSAGE)
    return f"{expanded[0:3]}{expanded[8:11]}{expanded[3]}{check_digit}"


def expand_upc_e(compressed: str) -> str:
    """
    Expands the 8 digits of a UPC-E number into its 12-digit UPC-A form, computing the check digit if it is the
    placeholder. The expansion depends on the last explicit digit:

        XABCDE0Y -> XAB00000CDEY    XABCDE3Y -> XABC00000DEY
        XABCDE1Y -> XAB10000CDEY    XABCDE4Y -> XABCD00000EY
        XABCDE2Y -> XAB20000CDEY    XABCDE5Y -> XABCDE00005Y (and so on up to 9)
    """
    if compressed[0] not in "01":
        raise BarcodeFormatError(UPC_E_LEADING_DIGIT_MESSAGE)
    last_explicit_digit: str = compressed[6]
    if last_explicit_digit in "012":
        middle = f"{compressed[1:3]}{last_explicit_digit}0000{compressed[3:6]}"
    elif last_explicit_digit == "3":
        middle = f"{compressed[1:4]}00000{compressed[4:6]}"
    elif last_explicit_digit == "4":
        middle = f"{compressed[1:5]}00000{compressed[5]}"
    else:
        middle = f"{compressed[1:6]}0000{last_explicit_digit}"
    return complete_check_digit(f"{compressed[0]}{middle}{compressed[7]}", UPC_A_MULTIPLIER)


def to_upc_e_digits(digits: str) -> str:
    """Returns the 8 UPC-E digits (with the check digit filled in) for a 7-, 8- or 12-digit number."""
    match len(digits):
        case 7:
            compressed = f"0{digits}"
        case 8:
            compressed = digits
        case 12:
            compressed = compress_upc_e(digits)
        case _:
            raise BarcodeFormatError(BAD_LENGTH_MESSAGE)
    expanded: str = expand_upc_e(compressed)
    logger.debug("UPC-E %s expands to %s", compressed, expanded)
    return f"{compressed[:7]}{expanded[11]}"


def complete_digits(barcode_format: BarcodeFormat, digits: str) -> str:
    """Returns the final digits to draw for the given format, with the check digit computed where needed."""
    if barcode_format == BarcodeFormat.UPC_E:
        return to_upc_e_digits(digits)
    if len(digits) != DIGIT_COUNTS[barcode_format]:
        raise BarcodeFormatError(BAD_LENGTH_MESSAGE)
    return complete_check_digit(digits, MULTIPLIERS[barcode_format])


def get_digit_groups(digits: str, barcode_format: BarcodeFormat) -> Tuple[str, str, str]:
    """
    Returns a tuple containing all the digit groups: the leading digit, left digits, and right digits.
    The leading digit is only encoded through parity (EAN-13, UPC-E) and is empty otherwise. For UPC-E, the right
    group is the check digit, which is also only encoded through parity.
    """
    match barcode_format:
        case BarcodeFormat.EAN_13:
            return digits[0], digits[1:7], digits[7:]
        case BarcodeFormat.UPC_A:
            return "", digits[:6], digits[6:]
        case BarcodeFormat.EAN_8:
            return "", digits[:4], digits[4:]
        case BarcodeFormat.UPC_E:
            return digits[0], digits[1:7], digits[7]


def get_bits(number: int, length: int) -> Generator[int, None, None]:
    """Generates the specified number of bits of a number, starting with the most significant bit."""
    for i in range(length - 1, -1, -1):
        yield number >> i & 1


def encode_digit(digit: int, parity: Optional[int] = None) -> str:
    """
    Encodes a digit into a string of 7 bits and returns it. If the optional keyword argument "parity" is provided
    (0 or 1), uses left-hand encoding and returns a bit string with the requested parity.
    If no "parity" keyword argument is provided, uses right-hand encoding.
    """
    value: int = LEFT_ENCODING[digit][parity] if parity is not None else RIGHT_ENCODING[digit]
    return "".join(str(bit) for bit in get_bits(value, 7))


def encode_left_side(left_digits: str, parity_pattern: int = 0) -> str:
    """
    Encodes left-hand digits and returns a string of bits. Each bit of parity_pattern, most significant first,
    selects Set A (0) or Set B (1) for the corresponding digit.
    """
    output: str = ""
    for i, digit in enumerate(left_digits):
        parity: int = parity_pattern >> (len(left_digits) - 1 - i) & 1
        output += encode_digit(char_to_digit(digit), parity)
    return output


def encode_right_side(right_digits: str) -> str:
    """Encodes right-hand digits and returns a string of bits."""
    return "".join(encode_digit(char_to_digit(digit)) for digit in right_digits)


def upc_e_parity(digits: str) -> int:
    """Returns the parity pattern of a UPC-E barcode, which carries its number system and check digit."""
    pattern: int = UPC_E_PARITY_ENCODING[char_to_digit(digits[7])]
    if digits[0] == "1":
        pattern = ~pattern & 0b111111
    return pattern


def encode_barcode(digits: str, barcode_format: BarcodeFormat) -> str:
    """Returns the entire barcode (without any supplement) as a string of bits. The digits must be complete."""
    leading_digit, left_digits, right_digits = get_digit_groups(digits, barcode_format)
    if barcode_format == BarcodeFormat.UPC_E:
        return f"{SIDE_GUARD}{encode_left_side(left_digits, upc_e_parity(digits))}{UPC_E_END_GUARD}"
    parity_pattern: int = LEADING_DIGIT_ENCODING[char_to_digit(leading_digit)] if leading_digit else 0
    left_side: str = encode_left_side(left_digits, parity_pattern)
    right_side: str = encode_right_side(right_digits)
    return f"{SIDE_GUARD}{left_side}{MIDDLE_GUARD}{right_side}{SIDE_GUARD}"


def supplement_parity(digits: str) -> int:
    """
    Returns the parity pattern of a supplement. Two digits use the value of the code modulo 4; five digits use a
    checksum-like sum, looked up in the UPC-E parity table.
    """
    values = [char_to_digit(digit) for digit in digits]
    match len(values):
        case 2:
            return (values[0] * 10 + values[1]) & 0b11
        case 5:
            parity_digit: int = ((values[0] + values[2] + values[4]) * 3 + (values[1] + values[3]) * 9) % 10
            return UPC_E_PARITY_ENCODING[parity_digit]
        case _:
            raise BarcodeFormatError(BAD_SUPPLEMENT_MESSAGE)


def encode_supplement(digits: str) -> str:
    """Returns a 2- or 5-digit supplement as a string of bits: its guard, then the digits separated by 01."""
    parity_pattern: int = supplement_parity(digits)
    encoded_digits = [encode_left_side(digit, parity_pattern >> (len(digits) - 1 - i) & 1)
                      for i, digit in enumerate(digits)]
    return SUPPLEMENT_GUARD + SUPPLEMENT_SEPARATOR.join(encoded_digits)
