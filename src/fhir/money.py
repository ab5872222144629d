"""FHIR Money and Quantity types."""

from typing import TypedDict


class Money(TypedDict, total=False):
    value: float
    currency: str


class Quantity(TypedDict, total=False):
    value: float
    unit: str
    system: str
    code: str
