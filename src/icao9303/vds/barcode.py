"""
Barcode payload helpers.

Signed seal bytes travel as Base45 text inside a QR code.
"""

from __future__ import annotations

import io
import logging

import base45
import qrcode

from ..exceptions import FieldRangeError
from .seal import DigitalSeal

logger = logging.getLogger(__name__)

ERROR_CORRECTION_LEVELS = {
    "L": qrcode.constants.ERROR_CORRECT_L,
    "M": qrcode.constants.ERROR_CORRECT_M,
    "Q": qrcode.constants.ERROR_CORRECT_Q,
    "H": qrcode.constants.ERROR_CORRECT_H,
}


def encode_barcode_payload(seal: DigitalSeal | bytes) -> str:
    """Base45-encode a seal's signed bytes (or raw seal bytes)."""
    data = seal.signed_seal if isinstance(seal, DigitalSeal) else bytes(seal)
    return base45.b45encode(data).decode("ascii")


def decode_barcode_payload(payload: str) -> bytes:
    """
    Decode Base45 barcode text back to seal bytes.

    Raises:
        FieldRangeError: If the text is not valid Base45
    """
    try:
        return base45.b45decode(payload)
    except ValueError as e:
        msg = f"Barcode payload is not valid Base45: {e}"
        raise FieldRangeError(msg) from e


def generate_qr_code(
    payload: str,
    error_correction: str = "M",
    border: int = 4,
    box_size: int = 10,
) -> bytes:
    """
    Generate a QR code for a barcode payload.

    Args:
        payload: Base45 text to encode
        error_correction: Error correction level (L, M, Q, H)
        border: Border size in boxes
        box_size: Pixel size of each box

    Returns:
        PNG image bytes
    """
    qr = qrcode.QRCode(
        version=None,
        error_correction=ERROR_CORRECTION_LEVELS.get(
            error_correction.upper(), qrcode.constants.ERROR_CORRECT_M
        ),
        box_size=box_size,
        border=border,
    )
    qr.add_data(payload)
    qr.make(fit=True)
    logger.debug("Generated QR code version %d for %d characters", qr.version, len(payload))

    img = qr.make_image(fill_color="black", back_color="white")
    img_bytes = io.BytesIO()
    img.save(img_bytes, format="PNG")
    return img_bytes.getvalue()
