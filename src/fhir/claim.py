"""FHIR Claim and ClaimResponse resources."""

from typing import Any, TypedDict

from fhir.codeable_concept import CodeableConcept
from fhir.identifier import Identifier
from fhir.meta import Meta
from fhir.money import Money, Quantity
from fhir.period import Period
from fhir.reference import Reference


class ClaimDiagnosis(TypedDict, total=False):
    sequence: int
    diagnosisCodeableConcept: CodeableConcept
    type: list[CodeableConcept]


class ClaimProcedure(TypedDict, total=False):
    sequence: int
    type: list[CodeableConcept]
    date: str
    procedureCodeableConcept: CodeableConcept


class ClaimItem(TypedDict, total=False):
    sequence: int
    category: CodeableConcept
    productOrService: CodeableConcept
    quantity: Quantity
    unitPrice: Money
    net: Money


class Claim(TypedDict, total=False):
    resourceType: str
    id: str
    meta: Meta
    identifier: list[Identifier]
    status: str
    type: CodeableConcept
    use: str
    patient: Reference
    billablePeriod: Period
    created: str
    insurer: Reference
    provider: Reference
    priority: CodeableConcept
    diagnosis: list[ClaimDiagnosis]
    procedure: list[ClaimProcedure]
    insurance: list[dict[str, Any]]
    item: list[ClaimItem]
    total: Money


class Adjudication(TypedDict, total=False):
    category: CodeableConcept
    amount: Money
    value: float


class ClaimResponseItem(TypedDict, total=False):
    itemSequence: int
    productOrService: CodeableConcept
    quantity: Quantity
    adjudication: list[Adjudication]


class ClaimResponseTotal(TypedDict, total=False):
    category: CodeableConcept
    amount: Money


class ClaimResponse(TypedDict, total=False):
    resourceType: str
    id: str
    meta: Meta
    identifier: list[Identifier]
    status: str
    type: CodeableConcept
    use: str
    patient: Reference
    created: str
    insurer: Reference
    requestor: Reference
    request: Reference
    outcome: str
    disposition: str
    preAuthRef: str
    preAuthPeriod: Period
    item: list[ClaimResponseItem]
    total: list[ClaimResponseTotal]
    payment: dict[str, Any]
    error: list[dict[str, Any]]
