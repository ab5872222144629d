"""FHIR Identifier type."""

from typing import TypedDict

from fhir.codeable_concept import CodeableConcept


class Identifier(TypedDict, total=False):
    system: str
    value: str
    type: CodeableConcept
