from datetime import date

import pytest

from icao9303.exceptions import FieldRangeError, FieldTypeError, InvalidDateError
from icao9303.models.visa import CrewFields, VisaFields


def test_visa_fields_defaults():
    visa = VisaFields(place_of_issue="Utopia", valid_from="2007-04-15")

    assert visa.valid_from == date(2007, 4, 15)
    assert visa.number_of_entries == "Multiple"
    assert visa.passport_number == ""
    assert visa.use_passport_in_mrz is False


def test_number_of_entries_accepts_count_or_text():
    visa = VisaFields(place_of_issue="Utopia", valid_from="2007-04-15", number_of_entries=3)
    assert visa.number_of_entries == 3

    visa.number_of_entries = "Multiple"
    assert visa.number_of_entries == "Multiple"

    with pytest.raises(FieldRangeError):
        visa.number_of_entries = 255
    assert visa.number_of_entries == "Multiple"


def test_passport_number_is_bounded():
    visa = VisaFields(place_of_issue="Utopia", valid_from="2007-04-15", passport_number="d23145890")
    assert visa.passport_number == "D23145890"

    with pytest.raises(FieldRangeError):
        visa.passport_number = "D231458901"


def test_invalid_valid_from():
    with pytest.raises(InvalidDateError):
        VisaFields(place_of_issue="Utopia", valid_from="2007-02-30")


def test_pydantic_errors_are_translated():
    """Errors raised by pydantic itself surface as package errors."""
    with pytest.raises(FieldTypeError):
        VisaFields(place_of_issue="Utopia", valid_from="2007-04-15", use_passport_in_mrz="maybe")


def test_crew_fields():
    crew = CrewFields(issue_date="2007-04-15")

    assert crew.employer == "Unknown"
    assert crew.occupation == "Unknown"
    assert crew.issue_date == date(2007, 4, 15)
