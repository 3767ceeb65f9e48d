from datetime import date

import pytest

from icao9303.codecs.dates import bytes_to_date, date_to_bytes
from icao9303.exceptions import FieldRangeError, InvalidDateError


def test_date_to_bytes():
    """Dates are the integer MMDDYYYY in three big-endian bytes."""
    assert list(date_to_bytes(date(1957, 3, 25))) == [49, 158, 245]
    assert bytes_to_date(bytes([49, 158, 245])) == date(1957, 3, 25)


def test_date_round_trip():
    for value in (date(2007, 4, 15), date(1999, 12, 31), date(2024, 1, 1)):
        assert bytes_to_date(date_to_bytes(value)) == value


def test_bytes_to_date_rejects_wrong_length():
    with pytest.raises(FieldRangeError):
        bytes_to_date(b"\x00\x00")


def test_bytes_to_date_rejects_invalid_date():
    with pytest.raises(InvalidDateError):
        bytes_to_date((13321957).to_bytes(3, "big"))
