"""FHIR Patient resource."""

from typing import TypedDict

from fhir.contact import Address, ContactPoint
from fhir.human_name import HumanName
from fhir.identifier import Identifier
from fhir.meta import Meta


class Patient(TypedDict, total=False):
    resourceType: str
    id: str
    meta: Meta
    status: str
    identifier: list[Identifier]
    name: list[HumanName]
    telecom: list[ContactPoint]
    gender: str
    birthDate: str
    address: list[Address]
