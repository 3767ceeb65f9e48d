from datetime import date

import pytest

from icao9303.documents import CrewID
from icao9303.exceptions import CheckDigitError
from icao9303.mrz import CrewIDComposer
from icao9303.vds import CREW_ID_SEAL_LAYOUT, derive_fields, derive_seal_feature

pytestmark = pytest.mark.vds

CREW_ID_SPECIMEN = [
    "I<UTOD231458907<<<<<<<<<<<<<<<",
    "<<<<<<0<1204159XXX<<<<<<<<<<<6",
    "ERIKSSON<<ANNA<MARIA<<<<<<<<<<",
]


class TestCrewIDComposer:
    def test_line2_has_no_holder_data(self):
        assert CrewID().mrz_lines == CREW_ID_SPECIMEN

    def test_parse_values_skip_birth_gender_and_nationality(self):
        values = CrewIDComposer().parse_values(CREW_ID_SPECIMEN)

        assert values == {
            "type_code": "I",
            "authority_code": "UTO",
            "number": "D23145890",
            "expiration_date": date(2012, 4, 15),
            "optional_data": "",
            "full_name": "ERIKSSON, ANNA MARIA",
        }

    def test_tampered_expiry(self):
        line2 = CREW_ID_SPECIMEN[1][:8] + "130415" + CREW_ID_SPECIMEN[1][14:]

        with pytest.raises(CheckDigitError) as excinfo:
            CrewIDComposer().parse_values([CREW_ID_SPECIMEN[0], line2, CREW_ID_SPECIMEN[2]])

        assert excinfo.value.field == "date of expiry"


class TestCrewID:
    def test_defaults(self):
        card = CrewID()

        assert list(card.seal.features) == [0x01, 0x02]
        assert card.seal.type_category == 0x08
        assert card.header_zone[-1] == 0x08
        assert card.employer_code == "00"
        assert card.seal.features[0x01] == derive_seal_feature(CREW_ID_SEAL_LAYOUT, card.mrz_lines)

    def test_birth_date_does_not_reach_mrz(self):
        card = CrewID()
        before = card.mrz_lines

        card.update(birth_date="1980-01-01", gender_marker="M", nationality_code="ZZZ")

        assert card.mrz_lines == before

    def test_load_mrz_keeps_fields_it_does_not_carry(self):
        card = CrewID(birth_date="1980-01-01")

        card.load_mrz(CREW_ID_SPECIMEN)

        assert card.fields.number == "D23145890"
        assert card.fields.birth_date == date(1980, 1, 1)

    def test_seal_fields(self):
        values = derive_fields(CREW_ID_SEAL_LAYOUT, CrewID().seal.features[0x01])

        assert values["number"] == "D23145890"
        assert values["expiration_date"] == date(2012, 4, 15)
        assert "birth_date" not in values
        assert "nationality_code" not in values

    def test_load_signed_seal(self):
        source = CrewID(
            number="C1234",
            expiration_date="2035-01-01",
            employer_code="1A2B",
            issue_date="2020-02-02",
        )
        source.stub_sign()
        card = CrewID(birth_date="1980-01-01")

        card.load_signed_seal(source.signed_seal)

        assert card.fields.number == "C1234"
        assert card.fields.expiration_date == date(2035, 1, 1)
        assert card.fields.birth_date == date(1980, 1, 1)
        assert card.details.issue_date == date(2020, 2, 2)
        assert card.employer_code == "1A2B"

    def test_viz(self):
        viz = CrewID(employer="Air Utopia").viz()

        assert viz["employer"] == "AIR UTOPIA"
        assert "birth_date" not in viz
        assert "url" not in viz
