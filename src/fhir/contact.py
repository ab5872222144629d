"""FHIR Address and ContactPoint types."""

from typing import TypedDict


class Address(TypedDict, total=False):
    use: str
    type: str
    text: str
    line: list[str]
    city: str
    district: str
    state: str
    postalCode: str
    country: str


class ContactPoint(TypedDict, total=False):
    system: str
    value: str
    use: str
