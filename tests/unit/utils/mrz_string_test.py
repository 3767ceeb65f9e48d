import logging
from datetime import date

import pytest

from icao9303.config import configure
from icao9303.exceptions import InvalidDateError
from icao9303.models.fields import Gender
from icao9303.utils.mrz_string import (
    date_to_mrz,
    date_to_viz,
    expand_year,
    gender_to_mrz,
    mrz_to_date,
    mrz_to_gender,
    mrz_to_name,
    mrz_to_text,
    name_to_mrz,
    normalize,
    optional_data_to_mrz,
    pad,
    to_viz,
)


def test_normalize_strips_diacritics_and_punctuation():
    assert normalize("Anna-María O'Neill") == "ANNA<MARIA<ONEILL"
    assert normalize("Müller, Jürgen") == "MULLER<JURGEN"


def test_pad():
    assert pad("p", 2) == "P<"
    assert pad("UTO", 3) == "UTO"


def test_name_to_mrz_separates_primary_identifier():
    """Test that ', ' becomes the '<<' separator."""
    assert name_to_mrz("Eriksson, Anna Maria", 39) == "ERIKSSON<<ANNA<MARIA" + "<" * 19
    assert name_to_mrz("Eriksson, Anna-Maria", 31) == "ERIKSSON<<ANNA<MARIA" + "<" * 11


def test_name_to_mrz_uses_last_script_variant():
    assert name_to_mrz("ЭРИКССОН, АННА/Eriksson, Anna", 30) == "ERIKSSON<<ANNA" + "<" * 16


def test_name_to_mrz_truncates_with_warning(caplog):
    """Overlong names are truncated and logged, never rejected."""
    with caplog.at_level(logging.WARNING, logger="icao9303.utils.mrz_string"):
        result = name_to_mrz("Abcdefghijklmnopqrstuvwxyz, Abcdefghij", 30)

    assert result == "ABCDEFGHIJKLMNOPQRSTUVWXYZ<<AB"
    assert len(result) == 30
    assert "Name (full_name) is longer than 30 and will be truncated." in caplog.text


def test_optional_data_to_mrz(caplog):
    assert optional_data_to_mrz("ZE184226B", 14) == "ZE184226B<<<<<"
    with caplog.at_level(logging.WARNING, logger="icao9303.utils.mrz_string"):
        assert optional_data_to_mrz("123456789", 7) == "1234567"
    assert "Optional data (optional_data)" in caplog.text


def test_dates():
    assert date_to_mrz(date(1974, 8, 12)) == "740812"
    assert date_to_mrz(date(2003, 1, 5)) == "030105"
    assert date_to_viz(date(2023, 9, 30)) == "30 SEP 2023"


def test_gender_mapping():
    """X is written as a filler and a filler reads back as X."""
    assert gender_to_mrz("X") == "<"
    assert gender_to_mrz("F") == "F"
    assert mrz_to_gender("<") == "X"
    assert mrz_to_gender(" ") == "X"
    assert mrz_to_gender("M") == "M"


def test_expand_year_cutoff():
    assert expand_year("31") == 2031
    assert expand_year("32") == 1932
    assert expand_year("00") == 2000
    assert expand_year("40", cutoff=50) == 2040


def test_year_cutoff_is_configurable():
    assert mrz_to_date("400101") == date(1940, 1, 1)
    configure(year_cutoff=50)
    assert mrz_to_date("400101") == date(2040, 1, 1)


def test_mrz_to_date():
    assert mrz_to_date("740812") == date(1974, 8, 12)
    assert mrz_to_date("120415") == date(2012, 4, 15)


def test_mrz_to_date_expiry_ignores_cutoff():
    assert mrz_to_date("330823", expiry=True) == date(2033, 8, 23)
    assert mrz_to_date("961210", expiry=True) == date(2096, 12, 10)
    assert mrz_to_date("330823") == date(1933, 8, 23)


@pytest.mark.parametrize("value", ["741312", "740230", "74081A", "7408"])
def test_mrz_to_date_rejects_invalid(value):
    with pytest.raises(InvalidDateError):
        mrz_to_date(value)


def test_mrz_to_name():
    assert mrz_to_name("ERIKSSON<<ANNA<MARIA<<<<<<<<<<") == "ERIKSSON, ANNA MARIA"
    assert mrz_to_name("ERIKSSON<<<<<<<<<<<") == "ERIKSSON"


def test_mrz_to_text():
    assert mrz_to_text("P<") == "P"
    assert mrz_to_text("D23145890") == "D23145890"
    assert mrz_to_text("AB<CD<<<") == "AB<CD"


def test_to_viz():
    assert to_viz(date(2012, 4, 15)) == "15 APR 2012"
    assert to_viz("Utopia") == "UTOPIA"
    assert to_viz(Gender.FEMALE) == "F"
    assert to_viz(3) == "3"
