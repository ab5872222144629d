"""
The union of resource kinds a bundle entry may carry.

Known kinds are typed; anything else is carried as an
:class:`UnknownResource`, i.e. the raw JSON object.
"""

from typing import Any, TypeAlias

from fhir.claim import Claim, ClaimResponse
from fhir.coverage import Coverage
from fhir.coverage_eligibility import (
    CoverageEligibilityRequest,
    CoverageEligibilityResponse,
)
from fhir.insurance_plan import InsurancePlan
from fhir.organization import Organization
from fhir.patient import Patient
from fhir.practitioner import Practitioner

UnknownResource: TypeAlias = dict[str, Any]

Resource: TypeAlias = (
    Patient
    | Organization
    | Practitioner
    | Coverage
    | Claim
    | ClaimResponse
    | CoverageEligibilityRequest
    | CoverageEligibilityResponse
    | InsurancePlan
    | UnknownResource
)
