"""FHIR Organization resource."""

from typing import TypedDict

from fhir.codeable_concept import CodeableConcept
from fhir.contact import Address, ContactPoint
from fhir.identifier import Identifier
from fhir.meta import Meta


class Organization(TypedDict, total=False):
    resourceType: str
    id: str
    meta: Meta
    status: str
    identifier: list[Identifier]
    name: str
    type: list[CodeableConcept]
    telecom: list[ContactPoint]
    address: list[Address]
