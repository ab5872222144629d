"""FHIR HumanName type."""

from typing import TypedDict


class HumanName(TypedDict, total=False):
    use: str
    text: str
    family: str
    given: list[str]
    prefix: list[str]
    suffix: list[str]
