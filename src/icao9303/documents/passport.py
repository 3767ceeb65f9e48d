"""Passport booklet with a visible digital seal."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, ClassVar

from ..codecs.c40 import c40_decode, c40_encode
from ..models.base import FieldModel
from ..models.credentials import PassportSealFields
from ..models.fields import DocumentFieldSet
from ..utils.mrz_string import mrz_to_text
from ..vds.constants import (
    PASSPORT_TYPE_CATEGORY,
    TAG_ENDORSEMENTS,
    TAG_MRZ_PASSPORT,
    TAG_PASSPORT_SUBAUTHORITY_CODE,
    TAG_PLACE_OF_BIRTH,
)
from ..vds.features import PASSPORT_SEAL_LAYOUT, decode_hex_code, encode_hex_code
from ..vds.seal import DigitalSealV4
from .base import TD3Document
from .sealed import SealedCredential

logger = logging.getLogger(__name__)


class SealedPassport(TD3Document, SealedCredential):
    """
    TD3 passport whose data page is mirrored in a seal (type category 0x02).

    Features:
        0x01: C40 of ``line1 + line2[0:28]``
        0x02: C40 of the place of birth
        0x03: subauthority code, hex
        0x04: C40 of the endorsements

    Loading a seal reads the MRZ fields, the issue date, the place of birth
    and the endorsements back; the optional data is not carried.
    """

    seal_layout = PASSPORT_SEAL_LAYOUT
    type_category = PASSPORT_TYPE_CATEGORY
    details_model = PassportSealFields
    details_defaults: ClassVar[dict[str, Any]] = {
        "url": "https://example.org/",
        "place_of_birth": "UTOPIA",
        "issue_date": "2023-09-29",
        "subauthority": "Unknown",
        "endorsements": "NONE",
    }
    feature_defaults: ClassVar[dict[str, Any]] = {"subauthority_code": "0"}
    feature_names = frozenset({"subauthority_code"})

    details: PassportSealFields

    def _features(
        self,
        current: Mapping[int, bytes],
        fields: DocumentFieldSet,
        details: FieldModel,
        feature_changes: Mapping[str, Any],
    ) -> dict[int, bytes]:
        features = dict(current)
        features[TAG_MRZ_PASSPORT] = self._mrz_feature(fields, fields.number)
        features[TAG_PLACE_OF_BIRTH] = c40_encode(details.place_of_birth)
        if "subauthority_code" in feature_changes:
            features[TAG_PASSPORT_SUBAUTHORITY_CODE] = encode_hex_code(
                feature_changes["subauthority_code"], "Subauthority code (subauthority_code)"
            )
        features[TAG_ENDORSEMENTS] = c40_encode(details.endorsements)
        return dict(sorted(features.items()))

    def _seal_details(self, seal: DigitalSealV4) -> dict[str, Any]:
        values = {}
        for name, tag in (("place_of_birth", TAG_PLACE_OF_BIRTH), ("endorsements", TAG_ENDORSEMENTS)):
            if tag in seal.features:
                values[name] = mrz_to_text(c40_decode(seal.features[tag]))
        return values

    @property
    def subauthority_code(self) -> str:
        return decode_hex_code(self.seal.features.get(TAG_PASSPORT_SUBAUTHORITY_CODE, b""))
