"""FHIR Meta and Extension types."""

from typing import TypedDict

from fhir.codeable_concept import CodeableConcept


class Meta(TypedDict, total=False):
    versionId: str
    lastUpdated: str
    profile: list[str]
    tag: list[CodeableConcept]
    security: list[CodeableConcept]


class Extension(TypedDict, total=False):
    url: str
    valueString: str
    valueBoolean: bool
    valueInteger: int
    valueDecimal: float
    valueDateTime: str
    valueCodeableConcept: CodeableConcept
