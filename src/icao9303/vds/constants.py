"""Byte values and feature tags of ICAO 9303 Part 13 visible digital seals."""

from __future__ import annotations

from ..codecs.der import SIGNATURE_MARKER

MAGIC = 0xDC

VERSION_3 = 0x02
VERSION_4 = 0x03

# Header layout sizes in bytes
AUTHORITY_C40_LENGTH = 2
DATE_FIELD_LENGTH = 3

# Visa feature tags (type category 0x0A)
TAG_MRZ_MRVA = 0x01
TAG_MRZ_MRVB = 0x02
TAG_NUMBER_OF_ENTRIES = 0x03
TAG_DURATION_OF_STAY = 0x04
TAG_PASSPORT_NUMBER = 0x05
TAG_VISA_TYPE = 0x06
TAG_ADDITIONAL_FEATURE = 0x07

# Crew member certificate feature tags (type category 0x04)
TAG_MRZ_CREW = 0x01
TAG_EMPLOYER_CODE = 0x02
TAG_OCCUPATION_CODE = 0x03

# Sealed passport feature tags (type category 0x02)
TAG_MRZ_PASSPORT = 0x01
TAG_PLACE_OF_BIRTH = 0x02
TAG_PASSPORT_SUBAUTHORITY_CODE = 0x03
TAG_ENDORSEMENTS = 0x04

# Crew license feature tags (type category 0x06); crew ID cards (0x08) use
# TAG_MRZ_CREW and TAG_EMPLOYER_CODE
TAG_LICENSE_SUBAUTHORITY_CODE = 0x02
TAG_PRIVILEGE_CODE = 0x03

PASSPORT_TYPE_CATEGORY = 0x02
CREW_TYPE_CATEGORY = 0x04
CREW_LICENSE_TYPE_CATEGORY = 0x06
CREW_ID_TYPE_CATEGORY = 0x08
VISA_TYPE_CATEGORY = 0x0A

__all__ = [
    "AUTHORITY_C40_LENGTH",
    "CREW_ID_TYPE_CATEGORY",
    "CREW_LICENSE_TYPE_CATEGORY",
    "CREW_TYPE_CATEGORY",
    "DATE_FIELD_LENGTH",
    "MAGIC",
    "PASSPORT_TYPE_CATEGORY",
    "SIGNATURE_MARKER",
    "TAG_ADDITIONAL_FEATURE",
    "TAG_DURATION_OF_STAY",
    "TAG_EMPLOYER_CODE",
    "TAG_ENDORSEMENTS",
    "TAG_LICENSE_SUBAUTHORITY_CODE",
    "TAG_MRZ_CREW",
    "TAG_MRZ_MRVA",
    "TAG_MRZ_MRVB",
    "TAG_MRZ_PASSPORT",
    "TAG_NUMBER_OF_ENTRIES",
    "TAG_OCCUPATION_CODE",
    "TAG_PASSPORT_NUMBER",
    "TAG_PASSPORT_SUBAUTHORITY_CODE",
    "TAG_PLACE_OF_BIRTH",
    "TAG_PRIVILEGE_CODE",
    "TAG_VISA_TYPE",
    "VERSION_3",
    "VERSION_4",
    "VISA_TYPE_CATEGORY",
]
