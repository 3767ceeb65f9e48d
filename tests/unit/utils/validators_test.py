from icao9303.utils.validators import (
    describe_errors,
    validate_hex_string,
    validate_identifier_code,
    validate_mrz_string,
)


def test_validate_mrz_string():
    assert validate_mrz_string("ABC<1 ") == []
    assert validate_mrz_string("abc") == []
    assert validate_mrz_string("A-B") == ["must only use the characters A-Z, 0-9, ' ', or '<'"]


def test_validate_mrz_string_bounds():
    assert validate_mrz_string("ABCD", maximum=3) == ["length must not be more than 3 characters"]
    assert validate_mrz_string("", minimum=1) == ["length must be at least 1 character"]


def test_validate_hex_string():
    assert validate_hex_string("1A2b") == []
    assert validate_hex_string("XYZ") == ["must only use the characters 0-9 or A-F"]
    assert validate_hex_string("123456789", maximum=8) == ["length must not be more than 8 characters"]


def test_validate_identifier_code():
    assert validate_identifier_code("UTSS") == []
    assert validate_identifier_code("UT01") == []
    assert validate_identifier_code("U1SS") == ["country code (characters 1-2) must use only characters A-Z"]
    assert validate_identifier_code("UTS") == ["full identifier code must be 4 characters long"]


def test_describe_errors():
    assert describe_errors([]) == ""
    assert describe_errors(["must only use 0-9"]) == "Must only use 0-9."
    assert (
        describe_errors(["length must be at least 1 character", "must only use 0-9"])
        == "Length must be at least 1 character; and must only use 0-9."
    )
