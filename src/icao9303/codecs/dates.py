"""Three-byte date encoding used in digital seal header zones."""

from __future__ import annotations

from datetime import date

from ..exceptions import FieldRangeError, InvalidDateError

DATE_LENGTH = 3


def date_to_bytes(value: date) -> bytes:
    """
    Pack a date as the integer ``MMDDYYYY`` in three big-endian bytes.

    Example:
        >>> list(date_to_bytes(date(1957, 3, 25)))
        [49, 158, 245]
    """
    return int(f"{value.month:02d}{value.day:02d}{value.year:04d}").to_bytes(DATE_LENGTH, "big")


def bytes_to_date(data: bytes) -> date:
    """Unpack a three-byte seal date."""
    if len(data) != DATE_LENGTH:
        msg = f"Seal dates are {DATE_LENGTH} bytes long, got {len(data)}"
        raise FieldRangeError(msg)
    text = str(int.from_bytes(data, "big")).zfill(8)
    try:
        return date(int(text[4:]), int(text[:2]), int(text[2:4]))
    except ValueError as e:
        msg = f"Bytes {bytes(data).hex().upper()} do not encode a valid date ({text})"
        raise InvalidDateError(msg) from e
