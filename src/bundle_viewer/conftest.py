"""Pytest configuration and shared fixtures for bundle viewer tests."""

from collections.abc import Callable
from typing import Any

import pytest
from fhir.bundle import Bundle
from fhir.claim import Claim, ClaimResponse
from fhir.coverage_eligibility import CoverageEligibilityResponse
from fhir.insurance_plan import InsurancePlan
from fhir.patient import Patient


def bundle_of(*resources: dict[str, Any], **fields: Any) -> dict[str, Any]:
    """Wrap resources in a collection bundle; ``fields`` are set on the bundle."""
    bundle: dict[str, Any] = {
        "resourceType": "Bundle",
        "id": "test-bundle",
        "type": "collection",
        "entry": [{"resource": resource} for resource in resources],
    }
    bundle.update(fields)
    return bundle


def total(code: str, value: float, currency: str = "INR") -> dict[str, Any]:
    """A ClaimResponse ``total`` or adjudication entry tagged with ``code``."""
    return {
        "category": {"coding": [{"code": code}]},
        "amount": {"value": value, "currency": currency},
    }


@pytest.fixture
def make_bundle() -> Callable[..., dict[str, Any]]:
    return bundle_of


@pytest.fixture
def make_total() -> Callable[..., dict[str, Any]]:
    return total


@pytest.fixture
def empty_bundle() -> Bundle:
    return {"resourceType": "Bundle", "id": "empty", "type": "collection", "entry": []}


@pytest.fixture
def patient() -> Patient:
    return {
        "resourceType": "Patient",
        "id": "PAT-0042",
        "identifier": [
            {"system": "https://ndhm.gov.in/abha", "value": "91-1234-5678-9012"}
        ],
        "name": [{"given": ["Asha"], "family": "Verma"}],
        "gender": "female",
        "birthDate": "1981-07-22",
        "telecom": [{"system": "phone", "value": "+91-9876543210"}],
        "address": [
            {
                "line": ["14 Marine Drive"],
                "city": "Mumbai",
                "state": "Maharashtra",
                "postalCode": "400020",
            }
        ],
    }


@pytest.fixture
def eligibility_response() -> CoverageEligibilityResponse:
    return {
        "resourceType": "CoverageEligibilityResponse",
        "id": "cer-001",
        "status": "active",
        "outcome": "complete",
        "purpose": ["benefits"],
        "patient": {"reference": "Patient/PAT-0042"},
        "insurer": {"reference": "Organization/star-health@hcx"},
        "insurance": [
            {
                "coverage": {"reference": "Coverage/COV-7781"},
                "inforce": True,
                "benefitPeriod": {"start": "2024-01-01", "end": "2024-12-31"},
                "item": [
                    {
                        "benefit": [
                            {"allowedMoney": {"value": 500000}},
                            {"allowedUnsignedInt": 10},
                        ]
                    },
                    {"excluded": True},
                ],
            }
        ],
    }


@pytest.fixture
def claim() -> Claim:
    return {
        "resourceType": "Claim",
        "id": "CLM-2024-0187",
        "status": "active",
        "type": {"coding": [{"code": "institutional", "display": "Institutional"}]},
        "use": "claim",
        "patient": {"reference": "Patient/PAT-0042"},
        "insurer": {"display": "Star Health Insurance"},
        "created": "2024-04-02T09:15:00+05:30",
        "diagnosis": [
            {
                "diagnosisCodeableConcept": {
                    "coding": [
                        {"code": "I25.1", "display": "Atherosclerotic heart disease"}
                    ]
                }
            }
        ],
        "procedure": [
            {
                "procedureCodeableConcept": {
                    "coding": [{"display": "Coronary artery bypass grafting"}]
                }
            }
        ],
        "item": [
            {
                "productOrService": {"coding": [{"display": "CABG"}]},
                "net": {"value": 150000, "currency": "INR"},
            }
        ],
        "total": {"value": 150000, "currency": "INR"},
    }


@pytest.fixture
def claim_response() -> ClaimResponse:
    return {
        "resourceType": "ClaimResponse",
        "id": "CLR-2024-0187",
        "status": "active",
        "outcome": "partial",
        "disposition": "Room charges reduced",
        "patient": {"reference": "Patient/PAT-0042"},
        "insurer": {"reference": "Organization/star-health@hcx"},
        "item": [
            {
                "productOrService": {"coding": [{"display": "CABG"}]},
                "adjudication": [total("submitted", 150000), total("benefit", 150000)],
            },
            {
                "productOrService": {"coding": [{"display": "Room charges"}]},
                "adjudication": [total("submitted", 40000), total("benefit", 24000)],
            },
        ],
        "total": [total("submitted", 190000), total("benefit", 174000)],
    }


@pytest.fixture
def insurance_plan() -> InsurancePlan:
    return {
        "resourceType": "InsurancePlan",
        "id": "IP-STAR-FHO",
        "status": "active",
        "name": "Family Health Optima",
        "ownedBy": {"display": "Star Health Insurance"},
        "coverageArea": [{"display": "Maharashtra"}],
        "coverage": [
            {
                "type": {"coding": [{"display": "Inpatient Care"}]},
                "benefit": [
                    {"limit": [{"value": {"value": 5000, "unit": "INR"}}]},
                    {"limit": [{"value": {"value": 3000, "unit": "INR"}}]},
                ],
            }
        ],
    }
