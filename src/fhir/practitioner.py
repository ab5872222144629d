"""FHIR Practitioner resource."""

from typing import Any, TypedDict

from fhir.contact import Address, ContactPoint
from fhir.human_name import HumanName
from fhir.identifier import Identifier
from fhir.meta import Meta


class Practitioner(TypedDict, total=False):
    resourceType: str
    id: str
    meta: Meta
    status: str
    identifier: list[Identifier]
    name: list[HumanName]
    telecom: list[ContactPoint]
    address: list[Address]
    qualification: list[dict[str, Any]]
