import pytest

from icao9303.exceptions import CheckDigitError
from icao9303.utils.check_digit import compute_check_digit, verify_check_digit


def test_document_number_check_digit():
    """Test the worked example document number."""
    assert compute_check_digit("362142069") == "9"


@pytest.mark.parametrize(
    ("data", "expected"),
    [
        ("L898902C3", "6"),
        ("740812", "2"),
        ("120415", "9"),
        ("ZE184226B<<<<<", "1"),
        ("D23145890", "7"),
        ("<<<<<<<<<", "0"),
        ("", "0"),
    ],
)
def test_icao_specimen_check_digits(data, expected):
    """Test check digits printed on the ICAO specimen documents."""
    assert compute_check_digit(data) == expected


def test_unmapped_characters_count_as_zero():
    """Characters outside the MRZ alphabet are permitted and weigh nothing."""
    assert compute_check_digit("1?") == compute_check_digit("1<") == "7"
    # Lowercase is not folded to uppercase
    assert compute_check_digit("B") == "7"
    assert compute_check_digit("b") == "0"


def test_verify_check_digit_passes():
    verify_check_digit("362142069", "9", "document number")


def test_verify_check_digit_reports_field_and_slice():
    """A mismatch names the field, the protected data and both digits."""
    with pytest.raises(CheckDigitError) as exc_info:
        verify_check_digit("362142069", "3", "document number")

    error = exc_info.value
    assert isinstance(error, ValueError)
    assert error.field == "document number"
    assert error.data == "362142069"
    assert error.expected == "9"
    assert error.actual == "3"
    assert "document number" in str(error)
    assert "362142069" in str(error)
