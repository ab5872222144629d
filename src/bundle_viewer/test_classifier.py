"""
Unit tests for :mod:`bundle_viewer.classifier`.
"""

import copy
from collections.abc import Callable
from typing import Any, TypeAlias

import pytest

from bundle_viewer.classifier import (
    classify_bundle,
    first_profile,
    is_response,
    main_resource,
)
from bundle_viewer.workflow import WorkflowCategory, progress_percentage

MakeBundle: TypeAlias = Callable[..., dict[str, Any]]

NRCES = "https://nrces.in/ndhm/fhir/r4/StructureDefinition"


class TestEmptyAndUnknown:
    def test_bundle_without_entries(self, empty_bundle: dict[str, Any]) -> None:
        result = classify_bundle(empty_bundle)

        assert result.category is WorkflowCategory.UNKNOWN
        assert result.title == "FHIR Bundle"
        assert result.description == "FHIR resource bundle"
        assert result.workflow == "NHCX Workflow"
        assert result.resource_count == 0
        assert result.stage_id is None
        assert result.direction == "request"

    @pytest.mark.parametrize("bundle", [None, [], "bundle", {"entry": "x"}])
    def test_malformed_bundle_is_unknown(self, bundle: Any) -> None:
        result = classify_bundle(bundle)
        assert result.category is WorkflowCategory.UNKNOWN
        assert result.title == "FHIR Bundle"
        assert result.resource_count == 0

    def test_entry_without_resource(self) -> None:
        result = classify_bundle({"entry": [{"fullUrl": "urn:uuid:1"}]})
        assert result.category is WorkflowCategory.UNKNOWN
        assert result.title == "FHIR Bundle"
        assert result.resource_count == 1

    def test_unrecognised_resource_type_becomes_title(
        self, make_bundle: MakeBundle
    ) -> None:
        result = classify_bundle(make_bundle({"resourceType": "Observation"}))
        assert result.category is WorkflowCategory.UNKNOWN
        assert result.title == "Observation"
        assert result.description == "Observation resource bundle"

    def test_unknown_direction_is_inferred(self, make_bundle: MakeBundle) -> None:
        result = classify_bundle(make_bundle({"resourceType": "PaymentResponse"}))
        assert result.category is WorkflowCategory.UNKNOWN
        assert result.direction == "response"


class TestClassification:
    def test_eligibility_response(self, make_bundle: MakeBundle) -> None:
        bundle = make_bundle(
            {"resourceType": "CoverageEligibilityResponse", "outcome": "complete"}
        )
        result = classify_bundle(bundle)

        assert result.category is WorkflowCategory.ELIGIBILITY
        assert result.direction == "response"
        assert result.stage_id == "CE02"
        assert progress_percentage(result.stage_id) == 100
        assert result.title == "Eligibility Check Response"
        assert result.workflow == "Eligibility Verification"

    def test_eligibility_request(self, make_bundle: MakeBundle) -> None:
        result = classify_bundle(
            make_bundle({"resourceType": "CoverageEligibilityRequest"})
        )
        assert result.category is WorkflowCategory.ELIGIBILITY
        assert result.direction == "request"
        assert result.stage_id == "CE01"
        assert result.description == "Coverage eligibility verification request"

    def test_claim_request(self, make_bundle: MakeBundle) -> None:
        result = classify_bundle(make_bundle({"resourceType": "Claim"}))

        assert result.category is WorkflowCategory.CLAIM
        assert result.direction == "request"
        assert result.stage_id == "CL01"
        assert result.stage_id is not None
        assert progress_percentage(result.stage_id) == 15
        assert result.title == "Claim Request"

    @pytest.mark.parametrize(
        ("outcome", "stage_id"),
        [("complete", "CL04"), ("partial", "CL06"), ("error", "CL01")],
    )
    def test_claim_response_stage_follows_outcome(
        self, make_bundle: MakeBundle, outcome: str, stage_id: str
    ) -> None:
        result = classify_bundle(
            make_bundle({"resourceType": "ClaimResponse", "outcome": outcome})
        )
        assert result.category is WorkflowCategory.CLAIM
        assert result.direction == "response"
        assert result.stage_id == stage_id

    def test_insurance_plan(self, make_bundle: MakeBundle) -> None:
        result = classify_bundle(make_bundle({"resourceType": "InsurancePlan"}))
        assert result.category is WorkflowCategory.PLAN
        assert result.direction == "response"
        assert result.stage_id == "IP02"
        assert result.workflow == "Insurance Plan Discovery"

    def test_insurance_plan_by_bundle_profile(self, make_bundle: MakeBundle) -> None:
        bundle = make_bundle(
            {"resourceType": "Organization"},
            meta={"profile": [f"{NRCES}/InsurancePlanBundle"]},
        )
        assert classify_bundle(bundle).category is WorkflowCategory.PLAN

    def test_claim_by_bundle_profile(self, make_bundle: MakeBundle) -> None:
        bundle = make_bundle(
            {"resourceType": "Patient"}, meta={"profile": [f"{NRCES}/ClaimBundle"]}
        )
        result = classify_bundle(bundle)
        assert result.category is WorkflowCategory.CLAIM
        assert result.direction == "request"

    def test_claim_response_by_bundle_profile(self, make_bundle: MakeBundle) -> None:
        bundle = make_bundle(
            {"resourceType": "Patient"},
            meta={"profile": [f"{NRCES}/ClaimResponseBundle"]},
        )
        result = classify_bundle(bundle)
        assert result.category is WorkflowCategory.CLAIM
        assert result.direction == "response"
        assert result.title == "Claim Response"

    def test_preauthorization_claim_stays_claim_with_preauth_stage(
        self, make_bundle: MakeBundle
    ) -> None:
        bundle = make_bundle(
            {
                "resourceType": "ClaimResponse",
                "type": {"coding": [{"code": "preauthorization"}]},
                "outcome": "complete",
            }
        )
        result = classify_bundle(bundle)
        assert result.category is WorkflowCategory.CLAIM
        assert result.stage_id == "PA04"

    def test_preauth_by_profile(self, make_bundle: MakeBundle) -> None:
        bundle = make_bundle(
            {"resourceType": "Task"},
            meta={"profile": [f"{NRCES}/PreAuthResponseBundle"]},
        )
        result = classify_bundle(bundle)
        assert result.category is WorkflowCategory.PREAUTH
        assert result.direction == "response"
        assert result.title == "Pre-Authorization Response"
        assert result.stage_id == "PA01"

    def test_preauth_by_type_code(self, make_bundle: MakeBundle) -> None:
        bundle = make_bundle(
            {
                "resourceType": "Communication",
                "type": {"coding": [{"code": "preauthorization"}]},
            }
        )
        result = classify_bundle(bundle)
        assert result.category is WorkflowCategory.PREAUTH
        assert result.direction == "request"

    def test_coverage(self, make_bundle: MakeBundle) -> None:
        result = classify_bundle(make_bundle({"resourceType": "Coverage"}))
        assert result.category is WorkflowCategory.COVERAGE_INFO
        assert result.stage_id is None
        assert result.title == "Coverage Information"

    @pytest.mark.parametrize("resource_type", ["Task", "Communication"])
    def test_claim_status(self, make_bundle: MakeBundle, resource_type: str) -> None:
        result = classify_bundle(make_bundle({"resourceType": resource_type}))
        assert result.category is WorkflowCategory.CLAIM_STATUS
        assert result.title == "Claim Status Check"

    def test_first_matching_rule_wins(self, make_bundle: MakeBundle) -> None:
        bundle = make_bundle(
            {"resourceType": "Claim"},
            meta={"profile": [f"{NRCES}/InsurancePlanBundle"]},
        )
        assert classify_bundle(bundle).category is WorkflowCategory.PLAN

    def test_response_substring_in_profile_flips_direction(
        self, make_bundle: MakeBundle
    ) -> None:
        bundle = make_bundle(
            {
                "resourceType": "Coverage",
                "meta": {"profile": ["https://example.org/CoverageResponseProfile"]},
            }
        )
        assert classify_bundle(bundle).direction == "response"

    def test_resource_count(self, make_bundle: MakeBundle) -> None:
        bundle = make_bundle(
            {"resourceType": "Claim"},
            {"resourceType": "Patient"},
            {"resourceType": "Organization"},
        )
        assert classify_bundle(bundle).resource_count == 3

    def test_classification_is_repeatable(
        self, make_bundle: MakeBundle, claim_response: dict[str, Any]
    ) -> None:
        bundle = make_bundle(claim_response)
        assert classify_bundle(bundle) == classify_bundle(bundle)

    def test_bundle_is_not_mutated(
        self, make_bundle: MakeBundle, claim_response: dict[str, Any]
    ) -> None:
        bundle = make_bundle(claim_response)
        snapshot = copy.deepcopy(bundle)
        classify_bundle(bundle)
        assert bundle == snapshot


class TestHelpers:
    def test_main_resource_is_first_entry(self, make_bundle: MakeBundle) -> None:
        bundle = make_bundle({"resourceType": "Claim"}, {"resourceType": "Patient"})
        assert main_resource(bundle) == {"resourceType": "Claim"}
        assert main_resource({}) == {}

    def test_first_profile(self) -> None:
        assert first_profile({"meta": {"profile": ["a", "b"]}}) == "a"
        assert first_profile({"meta": {"profile": []}}) == ""
        assert first_profile({"meta": {}}) == ""
        assert first_profile(None) == ""

    def test_is_response(self) -> None:
        assert is_response("ClaimResponse", "", "")
        assert is_response("Claim", "x/ClaimResponseBundle", "")
        assert is_response("Claim", "", "x/SomeResponse")
        assert not is_response("Claim", "x/ClaimBundle", "")
