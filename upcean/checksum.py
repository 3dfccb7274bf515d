PLACEHOLDER = "?"

# Weight of the first payload digit. UPC-A (and so UPC-E) and EAN-8 start at 3; EAN-13 starts at 1 because its extra
# leading digit shifts everything one place to the right.
UPC_A_MULTIPLIER = 3
EAN_13_MULTIPLIER = 1
EAN_8_MULTIPLIER = 3


def char_to_digit(char: str) -> int:
    """Returns the value of a digit character, or 0 for anything that isn't one (such as the placeholder)."""
    return int(char) if "0" <= char <= "9" else 0


def compute_check_digit(payload: str, multiplier: int) -> int:
    """
    Computes the mod-10 check digit for the given payload digits (everything except the check digit itself).
    The weight of each digit alternates between 3 and 1, starting with the given multiplier.
    """
    checksum: int = 0
    for char in payload:
        checksum += char_to_digit(char) * multiplier
        multiplier ^= 2
    return (10 - checksum % 10) % 10


def complete_check_digit(digits: str, multiplier: int) -> str:
    """
    If the last character is the placeholder, replaces it with the computed check digit.
    A check digit supplied by the caller is kept as it is, even if it is wrong.
    """
    if digits[-1] != PLACEHOLDER:
        return digits
    return f"{digits[:-1]}{compute_check_digit(digits[:-1], multiplier)}"


def checksum_is_correct(digits: str, multiplier: int) -> bool:
    """Returns True if the final digit matches the check digit computed from the rest."""
    return digits[-1] == str(compute_check_digit(digits[:-1], multiplier))
