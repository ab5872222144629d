"""FHIR Period type."""

from typing import TypedDict


class Period(TypedDict, total=False):
    start: str
    end: str
