"""
Bundle classification.

Bundles carry no explicit workflow tag, so the workflow is inferred from the
shape of the bundle's main resource (the resource of its first entry) and
from the profile URIs on the bundle and on that resource.

Profile matching is deliberately lenient: profiles are never validated, and a
plain substring test on the URI is what decides. A profile which happens to
contain ``"Response"`` therefore reads as a response. The predicates below
are evaluated in a fixed order and the first match wins.
"""

from dataclasses import dataclass
from typing import Any

from bundle_viewer.common.common import (
    as_dict,
    as_list,
    as_str,
    first,
    first_coding_code,
)
from bundle_viewer.workflow import (
    PREAUTHORIZATION_CODE,
    Direction,
    WorkflowCategory,
    select_stage,
)

DEFAULT_TITLE = "FHIR Bundle"


@dataclass(frozen=True)
class WorkflowClassification:
    """
    The workflow a bundle represents.

    :param category: Workflow category.
    :param direction: Whether the bundle is a request or a response.
    :param title: Short human readable title.
    :param description: One line description.
    :param workflow: Workflow label used to group bundles in listings.
    :param resource_count: Number of entries in the bundle.
    :param stage_id: Current workflow stage, ``None`` when the category has
        no lifecycle.
    """

    category: WorkflowCategory
    direction: Direction
    title: str
    description: str
    workflow: str
    resource_count: int
    stage_id: str | None


@dataclass(frozen=True)
class _Branch:
    category: WorkflowCategory
    title: str
    description: str
    workflow: str


_PLAN = _Branch(
    WorkflowCategory.PLAN,
    "Insurance Plan",
    "Insurance plan details with coverage and benefits",
    "Insurance Plan Discovery",
)
_ELIGIBILITY_REQUEST = _Branch(
    WorkflowCategory.ELIGIBILITY,
    "Eligibility Check Request",
    "Coverage eligibility verification request",
    "Eligibility Verification",
)
_ELIGIBILITY_RESPONSE = _Branch(
    WorkflowCategory.ELIGIBILITY,
    "Eligibility Check Response",
    "Coverage eligibility verification response",
    "Eligibility Verification",
)
_CLAIM_REQUEST = _Branch(
    WorkflowCategory.CLAIM,
    "Claim Request",
    "Medical claim submission",
    "Claim Processing",
)
_CLAIM_RESPONSE = _Branch(
    WorkflowCategory.CLAIM,
    "Claim Response",
    "Medical claim processing response",
    "Claim Processing",
)
_PREAUTH_REQUEST = _Branch(
    WorkflowCategory.PREAUTH,
    "Pre-Authorization Request",
    "Pre-authorization requirements and approval",
    "Pre-Authorization",
)
_PREAUTH_RESPONSE = _Branch(
    WorkflowCategory.PREAUTH,
    "Pre-Authorization Response",
    "Pre-authorization requirements and approval",
    "Pre-Authorization",
)
_COVERAGE = _Branch(
    WorkflowCategory.COVERAGE_INFO,
    "Coverage Information",
    "Insurance coverage details",
    "Coverage Information",
)
_CLAIM_STATUS = _Branch(
    WorkflowCategory.CLAIM_STATUS,
    "Claim Status Check",
    "Claim processing status inquiry",
    "Claim Status",
)


def main_resource(bundle: Any) -> dict[str, Any]:
    """
    Return the bundle's main resource: the resource of its first entry.

    An empty dict means there is no main resource.
    """
    return as_dict(first(as_dict(bundle).get("entry")).get("resource"))


def resource_type(resource: Any) -> str | None:
    return as_str(as_dict(resource).get("resourceType"))


def first_profile(value: Any) -> str:
    """First ``meta.profile`` URI of a bundle or resource, ``""`` if absent."""
    profile = as_list(as_dict(as_dict(value).get("meta")).get("profile"))
    if not profile:
        return ""
    return as_str(profile[0]) or ""


def is_response(type_name: str, bundle_profile: str, resource_profile: str) -> bool:
    """
    Infer response direction from naming alone.

    True if the resource type name, the bundle profile or the resource
    profile contains ``"Response"``. Resource kinds which do not follow the
    naming convention read as requests.
    """
    return (
        "Response" in type_name
        or "Response" in bundle_profile
        or "Response" in resource_profile
    )


def _match_branch(
    type_name: str, bundle_profile: str, resource_profile: str, type_code: str | None
) -> tuple[_Branch, Direction] | None:
    inferred: Direction = (
        "response"
        if is_response(type_name, bundle_profile, resource_profile)
        else "request"
    )

    def mentions(keyword: str) -> bool:
        return (
            type_name == keyword
            or keyword in bundle_profile
            or keyword in resource_profile
        )

    if mentions("InsurancePlan"):
        return _PLAN, "response"

    if mentions("CoverageEligibilityRequest"):
        return _ELIGIBILITY_REQUEST, "request"

    if mentions("CoverageEligibilityResponse"):
        return _ELIGIBILITY_RESPONSE, "response"

    if type_name == "Claim" or (
        "Claim" in bundle_profile and "Response" not in bundle_profile
    ):
        return _CLAIM_REQUEST, "request"

    if type_name == "ClaimResponse" or "ClaimResponse" in bundle_profile:
        return _CLAIM_RESPONSE, "response"

    if (
        "PreAuth" in bundle_profile
        or "PreAuth" in resource_profile
        or type_code == PREAUTHORIZATION_CODE
    ):
        if inferred == "response":
            return _PREAUTH_RESPONSE, inferred
        return _PREAUTH_REQUEST, inferred

    if type_name == "Coverage":
        return _COVERAGE, inferred

    if type_name in ("Task", "Communication"):
        return _CLAIM_STATUS, inferred

    return None


def classify_bundle(bundle: Any) -> WorkflowClassification:
    """
    Classify a bundle into a workflow category and direction.

    Never raises. A bundle without a main resource, or with a resource kind
    that matches no rule, is classified ``Unknown``; its title is the main
    resource's type, or ``"FHIR Bundle"`` if there is none.

    :param bundle: Decoded bundle JSON.
    :returns: A fresh :class:`WorkflowClassification`.
    """
    data = as_dict(bundle)
    entries = as_list(data.get("entry"))
    resource = main_resource(data)

    type_name = resource_type(resource) or ""
    bundle_profile = first_profile(data)
    resource_profile = first_profile(resource)
    type_code = first_coding_code(resource.get("type"))

    matched = _match_branch(type_name, bundle_profile, resource_profile, type_code)
    if matched is None:
        direction: Direction = (
            "response"
            if is_response(type_name, bundle_profile, resource_profile)
            else "request"
        )
        return WorkflowClassification(
            category=WorkflowCategory.UNKNOWN,
            direction=direction,
            title=type_name or DEFAULT_TITLE,
            description=f"{type_name or 'FHIR'} resource bundle",
            workflow="NHCX Workflow",
            resource_count=len(entries),
            stage_id=None,
        )

    branch, direction = matched
    stage = select_stage(
        branch.category,
        direction,
        outcome=as_str(resource.get("outcome")),
        type_code=type_code,
    )
    return WorkflowClassification(
        category=branch.category,
        direction=direction,
        title=branch.title,
        description=branch.description,
        workflow=branch.workflow,
        resource_count=len(entries),
        stage_id=stage.stage_id if stage else None,
    )
