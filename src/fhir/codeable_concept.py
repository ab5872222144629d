"""FHIR Coding and CodeableConcept types."""

from typing import TypedDict


class Coding(TypedDict, total=False):
    system: str
    code: str
    display: str


class CodeableConcept(TypedDict, total=False):
    coding: list[Coding]
    text: str
