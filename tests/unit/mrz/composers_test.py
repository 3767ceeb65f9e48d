from datetime import date

import pytest

from icao9303.exceptions import CheckDigitError, LineLengthError
from icao9303.models.fields import DocumentFieldSet
from icao9303.mrz import (
    DocumentFormat,
    MRVAComposer,
    MRVBComposer,
    MRZComposerFactory,
    TD1Composer,
    TD2Composer,
    TD3Composer,
    compose_mrz,
    parse_mrz,
)

pytestmark = pytest.mark.mrz

TD3_SPECIMEN = [
    "P<UTOERIKSSON<<ANNA<MARIA<<<<<<<<<<<<<<<<<<<",
    "L898902C36UTO7408122F1204159ZE184226B<<<<<10",
]
TD2_SPECIMEN = [
    "I<UTOERIKSSON<<ANNA<MARIA<<<<<<<<<<<",
    "D231458907UTO7408122F1204159<<<<<<<6",
]
TD1_SPECIMEN = [
    "I<UTOD231458907<<<<<<<<<<<<<<<",
    "7408122F1204159UTO<<<<<<<<<<<6",
    "ERIKSSON<<ANNA<MARIA<<<<<<<<<<",
]
MRVA_SPECIMEN = [
    "V<UTOERIKSSON<<ANNA<MARIA<<<<<<<<<<<<<<<<<<<",
    "L8988901C4XXX4009078F96121096ZE184226B<<<<<<",
]
MRVB_SPECIMEN = [
    "V<UTOERIKSSON<<ANNA<MARIA<<<<<<<<<<<",
    "L8988901C4XXX4009078F9612109<<<<<<<<",
]


def make_fields(**overrides):
    values = {
        "type_code": "P",
        "authority_code": "UTO",
        "number": "L898902C3",
        "full_name": "Eriksson, Anna-Maria",
        "nationality_code": "UTO",
        "birth_date": "1974-08-12",
        "gender_marker": "F",
        "expiration_date": "2012-04-15",
        "optional_data": "ZE184226B",
    }
    values.update(overrides)
    return DocumentFieldSet(**values)


def visa_fields(**overrides):
    values = {
        "type_code": "V",
        "number": "L8988901C",
        "nationality_code": "XXX",
        "birth_date": "1940-09-07",
        "expiration_date": "1996-12-10",
        "optional_data": "6ZE184226B",
    }
    values.update(overrides)
    return make_fields(**values)


class TestSpecimens:
    def test_td3(self):
        assert TD3Composer().compose(make_fields()) == TD3_SPECIMEN

    def test_td3_line2_with_empty_optional_data(self):
        fields = make_fields(
            number="362142069",
            birth_date="1998-04-17",
            expiration_date="2033-08-23",
            optional_data="",
        )

        line2 = TD3Composer().compose(fields)[1]

        assert line2 == "3621420699UTO9804175F3308235" + "<" * 15 + "4"

    def test_td2(self):
        fields = make_fields(type_code="I", number="D23145890", optional_data="")

        assert TD2Composer().compose(fields) == TD2_SPECIMEN

    def test_td1(self):
        fields = make_fields(type_code="I", number="D23145890", optional_data="")

        assert TD1Composer().compose(fields) == TD1_SPECIMEN

    def test_mrv_a(self):
        assert MRVAComposer().compose(visa_fields()) == MRVA_SPECIMEN

    def test_mrv_b(self):
        assert MRVBComposer().compose(visa_fields(optional_data="")) == MRVB_SPECIMEN

    def test_number_override(self):
        lines = TD3Composer().compose(make_fields(number="X0000000"), number="L898902C3")

        assert lines == TD3_SPECIMEN


class TestParsing:
    def test_parse_td3_specimen(self):
        fields = TD3Composer().parse(TD3_SPECIMEN)

        assert fields.type_code == "P"
        assert fields.authority_code == "UTO"
        assert fields.full_name == "ERIKSSON, ANNA MARIA"
        assert fields.number == "L898902C3"
        assert fields.birth_date == date(1974, 8, 12)
        assert fields.gender_marker == "F"
        assert fields.expiration_date == date(2012, 4, 15)
        assert fields.optional_data == "ZE184226B"

    def test_parse_td1_specimen(self):
        fields = TD1Composer().parse(TD1_SPECIMEN)

        assert fields.type_code == "I"
        assert fields.number == "D23145890"
        assert fields.nationality_code == "UTO"
        assert fields.optional_data == ""
        assert fields.full_name == "ERIKSSON, ANNA MARIA"

    def test_parse_mrv_a_specimen(self):
        fields = MRVAComposer().parse(MRVA_SPECIMEN)

        assert fields.nationality_code == "XXX"
        assert fields.birth_date == date(1940, 9, 7)
        assert fields.expiration_date == date(2096, 12, 10)
        assert fields.optional_data == "6ZE184226B"

    def test_accepts_joined_and_newline_separated_text(self):
        composer = TD2Composer()

        joined = composer.parse("".join(TD2_SPECIMEN))
        separated = composer.parse("\n".join(TD2_SPECIMEN))

        assert joined == separated
        assert joined.number == "D23145890"

    @pytest.mark.parametrize(
        "document_format",
        [DocumentFormat.TD1, DocumentFormat.TD2, DocumentFormat.TD3, DocumentFormat.MRV_A, DocumentFormat.MRV_B],
    )
    def test_round_trip(self, document_format):
        fields = make_fields(
            type_code="ID",
            number="AB12",
            full_name="Müller-Lüdenscheidt, Jörg",
            gender_marker="M",
            birth_date="1988-02-29",
            expiration_date="2035-11-30",
            optional_data="X7",
        )

        parsed = parse_mrz(document_format, compose_mrz(document_format, fields))

        assert parsed.number == "AB12"
        assert parsed.type_code == "ID"
        assert parsed.full_name == "MULLER LUDENSCHEIDT, JORG"
        assert parsed.birth_date == fields.birth_date
        assert parsed.expiration_date == fields.expiration_date
        assert parsed.gender_marker == "M"
        assert parsed.optional_data == "X7"

    def test_expiry_after_year_cutoff_stays_in_2000s(self):
        fields = make_fields(birth_date="1998-04-17", expiration_date="2033-08-23")

        parsed = TD3Composer().parse(TD3Composer().compose(fields))

        assert parsed.birth_date == date(1998, 4, 17)
        assert parsed.expiration_date == date(2033, 8, 23)

    def test_td1_expiry_after_year_cutoff(self):
        fields = make_fields(type_code="I", expiration_date="2040-01-31")

        assert TD1Composer().parse(TD1Composer().compose(fields)).expiration_date == date(2040, 1, 31)

    def test_filler_stands_for_zero_optional_check_digit(self):
        # "A" weighs 10 x 7, so its check digit is 0
        line1, line2 = TD3Composer().compose(make_fields(optional_data="A"))
        assert line2[42] == "0"

        parsed = TD3Composer().parse([line1, line2[:42] + "<" + line2[43:]])

        assert parsed.optional_data == "A"

    def test_filler_rejected_for_nonzero_optional_check_digit(self):
        line1, line2 = TD3Composer().compose(make_fields(optional_data="B"))

        with pytest.raises(CheckDigitError) as excinfo:
            TD3Composer().parse([line1, line2[:42] + "<" + line2[43:]])

        assert excinfo.value.field == "optional data"

    def test_unspecified_gender_is_a_filler(self):
        lines = TD3Composer().compose(make_fields(gender_marker="X"))

        assert lines[1][20] == "<"
        assert TD3Composer().parse(lines).gender_marker == "X"


class TestErrors:
    def test_tampered_document_number_check_digit(self):
        line2 = TD3_SPECIMEN[1][:9] + "7" + TD3_SPECIMEN[1][10:]

        with pytest.raises(CheckDigitError) as excinfo:
            TD3Composer().parse([TD3_SPECIMEN[0], line2])

        assert excinfo.value.field == "document number"
        assert excinfo.value.expected == "6"
        assert excinfo.value.actual == "7"

    def test_tampered_birth_date(self):
        line2 = TD3_SPECIMEN[1][:13] + "750812" + TD3_SPECIMEN[1][19:]

        with pytest.raises(CheckDigitError) as excinfo:
            TD3Composer().parse([TD3_SPECIMEN[0], line2])

        assert excinfo.value.field == "date of birth"

    def test_tampered_composite(self):
        line2 = TD2_SPECIMEN[1][:35] + "5"

        with pytest.raises(CheckDigitError) as excinfo:
            TD2Composer().parse([TD2_SPECIMEN[0], line2])

        assert excinfo.value.field == "composite"

    def test_tampered_td3_optional_data(self):
        line2 = TD3_SPECIMEN[1][:28] + "ZE184226C" + TD3_SPECIMEN[1][37:]

        with pytest.raises(CheckDigitError) as excinfo:
            TD3Composer().parse([TD3_SPECIMEN[0], line2])

        assert excinfo.value.field == "optional data"

    def test_wrong_line_count(self):
        with pytest.raises(LineLengthError) as excinfo:
            TD1Composer().parse(TD1_SPECIMEN[:2])

        assert excinfo.value.expected == 3
        assert excinfo.value.actual == 2

    def test_wrong_line_length(self):
        with pytest.raises(LineLengthError):
            TD3Composer().parse([TD3_SPECIMEN[0], TD3_SPECIMEN[1][:-1]])

    def test_wrong_total_length(self):
        with pytest.raises(LineLengthError):
            MRVBComposer().parse("".join(MRVA_SPECIMEN))


class TestFactory:
    def test_create_composer(self):
        assert isinstance(MRZComposerFactory.create_composer("TD1"), TD1Composer)
        assert isinstance(MRZComposerFactory.create_composer(DocumentFormat.MRV_B), MRVBComposer)
        assert isinstance(MRZComposerFactory.create_composer("MRV-A"), MRVAComposer)

    def test_unknown_format(self):
        with pytest.raises(ValueError, match="No MRZ composer"):
            MRZComposerFactory.create_composer("TD4")

    def test_supported_formats(self):
        assert set(MRZComposerFactory.get_supported_formats()) == set(DocumentFormat)

    def test_layouts(self):
        layouts = {fmt: MRZComposerFactory.create_composer(fmt).layout for fmt in DocumentFormat}

        assert layouts[DocumentFormat.TD1].total_length == 90
        assert layouts[DocumentFormat.TD2].total_length == 72
        assert layouts[DocumentFormat.TD3].total_length == 88
        assert layouts[DocumentFormat.MRV_A].total_length == 88
        assert layouts[DocumentFormat.MRV_B].total_length == 72
