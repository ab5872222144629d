"""FHIR InsurancePlan resource."""

from typing import TypedDict

from fhir.codeable_concept import CodeableConcept
from fhir.identifier import Identifier
from fhir.meta import Extension, Meta
from fhir.money import Quantity
from fhir.period import Period
from fhir.reference import Reference


class Limit(TypedDict, total=False):
    value: Quantity
    code: CodeableConcept


class Benefit(TypedDict, total=False):
    extension: list[Extension]
    type: CodeableConcept
    limit: list[Limit]


class PlanCoverage(TypedDict, total=False):
    extension: list[Extension]
    type: CodeableConcept
    benefit: list[Benefit]


class InsurancePlan(TypedDict, total=False):
    resourceType: str
    id: str
    meta: Meta
    extension: list[Extension]
    identifier: list[Identifier]
    status: str
    type: list[CodeableConcept]
    name: str
    period: Period
    ownedBy: Reference
    administeredBy: Reference
    coverageArea: list[Reference]
    coverage: list[PlanCoverage]
