"""FHIR Reference type."""

from typing import TypedDict

from fhir.identifier import Identifier


class Reference(TypedDict, total=False):
    reference: str
    display: str
    identifier: Identifier
