"""Travel documents, visas and crew documents built on the encoding core."""

from __future__ import annotations

from .base import TD1Document, TD2Document, TD3Document, TravelDocument
from .crew import CrewCertificate, CrewID, CrewLicense
from .passport import SealedPassport
from .sealed import SealedCredential, SealedDocument
from .visa import MRVADocument, MRVBDocument, VisaDocument

__all__ = [
    "CrewCertificate",
    "CrewID",
    "CrewLicense",
    "MRVADocument",
    "MRVBDocument",
    "SealedCredential",
    "SealedDocument",
    "SealedPassport",
    "TD1Document",
    "TD2Document",
    "TD3Document",
    "TravelDocument",
    "VisaDocument",
]
