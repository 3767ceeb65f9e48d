"""
Check digit calculation according to ICAO Doc 9303 Part 3.

Character mapping:
- 0-9 → 0-9
- A-Z → 10-35
- < and anything else → 0
"""

from __future__ import annotations

from string import ascii_uppercase, digits

from ..exceptions import CheckDigitError

CHARACTER_VALUES: dict[str, int] = {
    **{char: value for value, char in enumerate(digits)},
    **{char: value + 10 for value, char in enumerate(ascii_uppercase)},
    "<": 0,
}

CHECK_DIGIT_WEIGHTS = (7, 3, 1)


def compute_check_digit(data: str) -> str:
    """
    Compute the check digit of an MRZ field.

    Characters outside the MRZ alphabet count as 0, so malformed input still
    yields a digit.

    Args:
        data: Field content, already padded with fillers

    Returns:
        Single character check digit (0-9)
    """
    total = 0
    for i, char in enumerate(data):
        total += CHARACTER_VALUES.get(char, 0) * CHECK_DIGIT_WEIGHTS[i % 3]
    return str(total % 10)


def verify_check_digit(data: str, check_digit: str, field: str) -> None:
    """Raise CheckDigitError if ``check_digit`` does not protect ``data``."""
    expected = compute_check_digit(data)
    if check_digit != expected:
        raise CheckDigitError(field, data, expected, check_digit)
