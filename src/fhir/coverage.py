"""FHIR Coverage resource."""

from typing import TypedDict

from fhir.codeable_concept import CodeableConcept
from fhir.identifier import Identifier
from fhir.meta import Meta
from fhir.period import Period
from fhir.reference import Reference


class Coverage(TypedDict, total=False):
    resourceType: str
    id: str
    meta: Meta
    identifier: list[Identifier]
    status: str
    type: CodeableConcept
    beneficiary: Reference
    payor: list[Reference]
    period: Period
