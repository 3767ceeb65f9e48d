import pytest

from icao9303.codecs.c40 import c40_decode, c40_encode
from icao9303.exceptions import C40EncodingError, C40ValueError, FieldRangeError


def test_c40_encode_with_shift_padding():
    """Two trailing characters are completed with SHIFT1."""
    assert list(c40_encode("XK CD")) == [235, 4, 102, 169]


def test_c40_encode_single_trailing_character():
    """One trailing character is written as 0xFE and its ASCII value plus one."""
    assert list(c40_encode("XKCD")) == [235, 17, 254, 69]


def test_c40_decode():
    assert c40_decode(bytes([235, 17, 254, 69])) == "XKCD"
    assert c40_decode(bytes([235, 4, 102, 169])) == "XK CD"


def test_c40_triplet():
    assert list(c40_encode("UTO")) == [217, 197]
    assert c40_decode(bytes([217, 197])) == "UTO"


def test_filler_encodes_as_space():
    assert c40_encode("X<K") == c40_encode("X K")
    assert c40_decode(c40_encode("D<<")) == "D  "


@pytest.mark.parametrize("text", ["", "D23145890", "UTSS00000", "P<UTOERIKSSON<<ANNA", "A", "AB"])
def test_c40_round_trip(text):
    assert c40_decode(c40_encode(text)) == text.replace("<", " ")


def test_c40_encode_uppercases():
    assert c40_encode("uto") == c40_encode("UTO")


def test_c40_encode_rejects_characters_outside_set():
    with pytest.raises(C40EncodingError) as exc_info:
        c40_encode("A-B")
    assert isinstance(exc_info.value, TypeError)

    with pytest.raises(C40EncodingError):
        c40_encode("AB-C")


def test_c40_decode_rejects_invalid_values():
    # First value 1 is not part of the C40 set used by seals
    with pytest.raises(C40ValueError):
        c40_decode(bytes([6, 65]))
    with pytest.raises(C40ValueError):
        c40_decode(bytes([254, 1]))


def test_c40_decode_rejects_odd_length():
    with pytest.raises(FieldRangeError):
        c40_decode(bytes([217, 197, 254]))
