"""FHIR data types and resources."""

from fhir.bundle import Bundle, BundleEntry
from fhir.claim import Claim, ClaimResponse
from fhir.codeable_concept import CodeableConcept, Coding
from fhir.contact import Address, ContactPoint
from fhir.coverage import Coverage
from fhir.coverage_eligibility import (
    CoverageEligibilityRequest,
    CoverageEligibilityResponse,
)
from fhir.human_name import HumanName
from fhir.identifier import Identifier
from fhir.insurance_plan import InsurancePlan
from fhir.meta import Extension, Meta
from fhir.money import Money, Quantity
from fhir.operation_outcome import OperationOutcome, OperationOutcomeIssue
from fhir.organization import Organization
from fhir.patient import Patient
from fhir.period import Period
from fhir.practitioner import Practitioner
from fhir.reference import Reference
from fhir.resource import Resource, UnknownResource

__all__ = [
    "Address",
    "Bundle",
    "BundleEntry",
    "Claim",
    "ClaimResponse",
    "CodeableConcept",
    "Coding",
    "ContactPoint",
    "Coverage",
    "CoverageEligibilityRequest",
    "CoverageEligibilityResponse",
    "Extension",
    "HumanName",
    "Identifier",
    "InsurancePlan",
    "Meta",
    "Money",
    "OperationOutcome",
    "OperationOutcomeIssue",
    "Organization",
    "Patient",
    "Period",
    "Practitioner",
    "Quantity",
    "Reference",
    "Resource",
    "UnknownResource",
]
