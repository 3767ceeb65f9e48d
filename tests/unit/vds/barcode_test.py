from datetime import date

import pytest

from icao9303.exceptions import FieldRangeError
from icao9303.vds import DigitalSealV4, decode_barcode_payload, encode_barcode_payload, generate_qr_code

pytestmark = pytest.mark.vds


@pytest.fixture
def seal():
    seal = DigitalSealV4(
        issue_date=date(2007, 4, 15),
        signature_date=date(2007, 4, 15),
        features={0x03: b"\x00"},
    )
    seal.stub_sign()
    return seal


def test_encode_known_value():
    assert encode_barcode_payload(b"AB") == "BB8"


def test_seal_payload_round_trip(seal):
    payload = encode_barcode_payload(seal)

    assert decode_barcode_payload(payload) == seal.signed_seal
    assert DigitalSealV4.from_signed_seal(decode_barcode_payload(payload)).signed_seal == seal.signed_seal


def test_decode_invalid_payload():
    with pytest.raises(FieldRangeError):
        decode_barcode_payload("A")


def test_generate_qr_code(seal):
    image = generate_qr_code(encode_barcode_payload(seal), error_correction="q")

    assert image.startswith(b"\x89PNG")
