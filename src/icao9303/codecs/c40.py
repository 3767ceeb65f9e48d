"""
C40 encoding of MRZ text inside digital seal features.

Three characters pack into two bytes as ``1600*u1 + 40*u2 + u3 + 1``. A
trailing pair is completed with SHIFT1 (value 0), and a single trailing
character is written as ``0xFE`` followed by its DataMatrix ASCII value.
Both ``<`` and space encode as value 3 and decode as a space.
"""

from __future__ import annotations

from string import ascii_uppercase, digits

from ..exceptions import C40EncodingError, C40ValueError, FieldRangeError

SHIFT1 = 0
UNLATCH = 0xFE

CHAR_TO_C40: dict[str, int] = {
    " ": 3,
    "<": 3,
    **{char: value + 4 for value, char in enumerate(digits)},
    **{char: value + 14 for value, char in enumerate(ascii_uppercase)},
}

C40_TO_CHAR: dict[int, str] = {
    3: " ",
    **{value + 4: char for value, char in enumerate(digits)},
    **{value + 14: char for value, char in enumerate(ascii_uppercase)},
}

# DataMatrix ASCII values are the character code plus one
CHAR_TO_DATAMATRIX: dict[str, int] = {
    char: ord(" " if char == "<" else char) + 1 for char in CHAR_TO_C40
}

DATAMATRIX_TO_CHAR: dict[int, str] = {
    value: chr(value - 1) for value in (33, *range(49, 59), *range(66, 92))
}


def _char_to_c40(char: str) -> int:
    try:
        return CHAR_TO_C40[char.upper()]
    except KeyError:
        msg = (
            f"Character '{char}' is not allowed in digital seals; only 0-9, A-Z, "
            "<SPACE> and '<' can be C40-encoded"
        )
        raise C40EncodingError(msg) from None


def _c40_to_char(value: int) -> str:
    try:
        return C40_TO_CHAR[value]
    except KeyError:
        msg = f"C40 value {value} is invalid; digital seals use 0 or 3-39"
        raise C40ValueError(msg) from None


def _pack(u1: int, u2: int, u3: int) -> bytes:
    return ((1600 * u1) + (40 * u2) + u3 + 1).to_bytes(2, "big")


def c40_encode(text: str) -> bytes:
    """
    Encode MRZ-alphabet text as C40.

    Example:
        >>> list(c40_encode("XK CD"))
        [235, 4, 102, 169]

    Raises:
        C40EncodingError: If the text contains a character outside the C40 set
    """
    output = bytearray()
    full, remainder = divmod(len(text), 3)
    for i in range(0, full * 3, 3):
        output += _pack(*(_char_to_c40(char) for char in text[i : i + 3]))
    tail = text[full * 3 :]
    if remainder == 2:
        output += _pack(_char_to_c40(tail[0]), _char_to_c40(tail[1]), SHIFT1)
    elif remainder == 1:
        _char_to_c40(tail)
        output += bytes([UNLATCH, CHAR_TO_DATAMATRIX[tail.upper()]])
    return bytes(output)


def c40_decode(data: bytes) -> str:
    """
    Decode C40 bytes back to text; SHIFT1 padding is dropped.

    Example:
        >>> c40_decode(bytes([235, 17, 254, 69]))
        'XKCD'

    Raises:
        C40ValueError: If a byte pair or DataMatrix value is out of range
        FieldRangeError: If the data has an odd number of bytes
    """
    if len(data) % 2:
        msg = f"C40 data must have an even number of bytes, got {len(data)}"
        raise FieldRangeError(msg)
    output = []
    for i in range(0, len(data), 2):
        i1, i2 = data[i], data[i + 1]
        if i1 == UNLATCH:
            try:
                output.append(DATAMATRIX_TO_CHAR[i2])
            except KeyError:
                msg = f"DataMatrix ASCII value {i2} is invalid; digital seals use 33, 49-58 or 66-91"
                raise C40ValueError(msg) from None
            continue
        i16 = (i1 * 256) + i2 - 1
        u1, rest = divmod(i16, 1600)
        u2, u3 = divmod(rest, 40)
        output.append(_c40_to_char(u1))
        output.append(_c40_to_char(u2))
        if u3 != SHIFT1:
            output.append(_c40_to_char(u3))
    return "".join(output)
