from typing import Tuple

SIDE_GUARD = "101"
MIDDLE_GUARD = "01010"
UPC_E_END_GUARD = "010101"
SUPPLEMENT_GUARD = "1011"
SUPPLEMENT_SEPARATOR = "01"
DIGIT_WIDTH = 7

# Parity values used to pick a left-hand pattern: 0 for odd parity (Set A), 1 for even parity (Set B).
PARITY_A = 0
PARITY_B = 1

# Values for encoding the left-hand side of the barcode, as 7-bit numbers read from the most significant bit (1 for a
# bar, 0 for a space). Index first by digit, then by parity.
LEFT_ENCODING: Tuple[Tuple[int, int], ...] = (
    (0b0001101, 0b0100111),
    (0b0011001, 0b0110011),
    (0b0010011, 0b0011011),
    (0b0111101, 0b0100001),
    (0b0100011, 0b0011101),
    (0b0110001, 0b0111001),
    (0b0101111, 0b0000101),
    (0b0111011, 0b0010001),
    (0b0110111, 0b0001001),
    (0b0001011, 0b0010111),
)

# Values for encoding the right-hand side of UPC-A, EAN-13 and EAN-8 barcodes.
RIGHT_ENCODING: Tuple[int, ...] = (
    0b1110010,
    0b1100110,
    0b1101100,
    0b1000010,
    0b1011100,
    0b1001110,
    0b1010000,
    0b1000100,
    0b1001000,
    0b1110100,
)

# The very first digit of an EAN-13 barcode is encoded in the parities of the six left-hand digits, most significant
# bit first. For example, 1 is 0b001011: "A", "A", "B", "A", "B", "B".
LEADING_DIGIT_ENCODING: Tuple[int, ...] = (
    0b000000,
    0b001011,
    0b001101,
    0b001110,
    0b010011,
    0b011001,
    0b011100,
    0b010101,
    0b010110,
    0b011010,
)

# The check digit of a UPC-E barcode is encoded in the parities of its six explicit digits. These are the patterns for
# number system 0; number system 1 uses their complements. The last five bits double as the parity patterns of 5-digit
# supplements.
UPC_E_PARITY_ENCODING: Tuple[int, ...] = (
    0b111000,
    0b110100,
    0b110010,
    0b110001,
    0b101100,
    0b100110,
    0b100011,
    0b101010,
    0b101001,
    0b100101,
)
