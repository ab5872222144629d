"""FHIR CoverageEligibilityRequest and CoverageEligibilityResponse resources."""

from typing import Any, TypedDict

from fhir.codeable_concept import CodeableConcept
from fhir.identifier import Identifier
from fhir.meta import Meta
from fhir.money import Money, Quantity
from fhir.period import Period
from fhir.reference import Reference


class EligibilityRequestItem(TypedDict, total=False):
    category: CodeableConcept
    productOrService: CodeableConcept
    quantity: Quantity
    unitPrice: Money


class CoverageEligibilityRequest(TypedDict, total=False):
    resourceType: str
    id: str
    meta: Meta
    identifier: list[Identifier]
    status: str
    priority: CodeableConcept
    purpose: list[str]
    patient: Reference
    created: str
    enterer: Reference
    provider: Reference
    insurer: Reference
    facility: Reference
    insurance: list[dict[str, Any]]
    item: list[EligibilityRequestItem]


class EligibilityBenefit(TypedDict, total=False):
    type: CodeableConcept
    allowedMoney: Money
    usedMoney: Money


class EligibilityResponseItem(TypedDict, total=False):
    category: CodeableConcept
    productOrService: CodeableConcept
    excluded: bool
    name: str
    description: str
    authorizationRequired: bool
    benefit: list[EligibilityBenefit]


class EligibilityInsurance(TypedDict, total=False):
    coverage: Reference
    inforce: bool
    benefitPeriod: Period
    item: list[EligibilityResponseItem]


class CoverageEligibilityResponse(TypedDict, total=False):
    resourceType: str
    id: str
    meta: Meta
    identifier: list[Identifier]
    status: str
    purpose: list[str]
    patient: Reference
    created: str
    requestor: Reference
    request: Reference
    outcome: str
    disposition: str
    insurer: Reference
    insurance: list[EligibilityInsurance]
    error: list[dict[str, Any]]
