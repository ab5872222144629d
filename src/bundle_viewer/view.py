"""
Display-ready view model for a bundle.

:func:`build_bundle_view` is the one entry point the presentation layer
needs: it classifies the bundle, derives the workflow stage, folds the
relevant aggregates for the main resource and renders a card of fields for
every entry. The result is a tree of frozen dataclasses; :func:`to_json`
turns it into plain JSON-compatible data.
"""

from dataclasses import asdict, dataclass, field
from typing import Any

from fhir.bundle import Bundle
from fhir.resource import Resource

from bundle_viewer import aggregators, extractors
from bundle_viewer.classifier import (
    WorkflowClassification,
    classify_bundle,
    main_resource,
    resource_type,
)
from bundle_viewer.common.common import (
    as_dict,
    as_list,
    as_number,
    as_str,
    first,
    first_coding_code,
    last_segment,
)
from bundle_viewer.workflow import (
    NextAction,
    StatusVisual,
    TimelineStep,
    WorkflowCategory,
    get_stage,
    next_actions,
    resource_actions,
    stage_machine,
    stage_timeline,
    status_visual,
)

# Items shown in a card's nested lists and in the service breakdown.
CARD_ITEM_LIMIT = 3
BREAKDOWN_ITEM_LIMIT = 10

PAYER_DISPLAY_NAMES = {
    "star-health@hcx": "Star Health Insurance",
    "icici-lombard@hcx": "ICICI Lombard",
    "hdfc-ergo@hcx": "HDFC ERGO",
    "max-bupa@hcx": "Max Bupa",
}

RESOURCE_LABELS: dict[str, tuple[str, str]] = {
    "InsurancePlan": ("🛡️", "Insurance Plan"),
    "CoverageEligibilityRequest": ("🔍", "Eligibility Request"),
    "CoverageEligibilityResponse": ("✅", "Eligibility Response"),
    "Claim": ("📋", "Claim"),
    "ClaimResponse": ("📄", "Claim Response"),
    "Patient": ("👤", "Patient"),
    "Practitioner": ("👨‍⚕️", "Practitioner"),
    "Organization": ("🏥", "Organization"),
    "Coverage": ("🛡️", "Coverage"),
}


def payer_display_name(payer_id: str) -> str:
    return PAYER_DISPLAY_NAMES.get(payer_id, payer_id)


@dataclass(frozen=True)
class WorkflowContext:
    """Key facts about the main resource, each ``None`` when absent."""

    resource_type: str | None
    patient_id: str | None
    payer: str | None
    status: str | None
    outcome: str | None
    amount: float | None
    currency: str | None


def _headline_amount(total: Any) -> dict[str, Any] | None:
    if isinstance(total, list):
        for entry in total:
            data = as_dict(entry)
            if first_coding_code(data.get("category")) in (
                aggregators.SUBMITTED,
                aggregators.BENEFIT,
            ):
                return as_dict(data.get("amount"))
        return None
    money = as_dict(total)
    if as_number(money.get("value")):
        return money
    return None


def extract_workflow_context(bundle: Bundle) -> WorkflowContext:
    resource = main_resource(bundle)

    patient = as_dict(resource.get("patient"))
    identifier = patient.get("identifier")
    if not isinstance(identifier, list):
        identifier = [identifier]
    patient_id = extractors.reference_id(patient) or as_str(
        first(identifier).get("value")
    )

    insurer = as_dict(resource.get("insurer"))
    insurer_ref = as_str(insurer.get("reference"))
    payer = (
        as_str(insurer.get("display"))
        or (last_segment(insurer_ref) if insurer_ref else None)
        or as_str(as_dict(resource.get("provider")).get("display"))
    )

    amount = _headline_amount(resource.get("total"))
    return WorkflowContext(
        resource_type=resource_type(resource),
        patient_id=patient_id,
        payer=payer_display_name(payer) if payer else None,
        status=as_str(resource.get("status")),
        outcome=as_str(resource.get("outcome")),
        amount=as_number(amount.get("value")) if amount else None,
        currency=as_str(amount.get("currency")) if amount else None,
    )


@dataclass(frozen=True)
class StageView:
    stage_id: str
    label: str
    status: str
    progress: int
    next_stage: str | None
    terminal: bool
    visual: StatusVisual
    timeline: list[TimelineStep]


def build_stage_view(
    classification: WorkflowClassification, resource: dict[str, Any]
) -> StageView | None:
    if classification.stage_id is None:
        return None
    stage = get_stage(classification.stage_id)
    machine = stage_machine(
        classification.category, first_coding_code(resource.get("type"))
    )
    if stage is None or machine is None:
        return None
    return StageView(
        stage_id=stage.stage_id,
        label=stage.label,
        status=stage.status,
        progress=stage.progress,
        next_stage=stage.next_stage,
        terminal=stage.terminal,
        visual=status_visual(stage.status),
        timeline=stage_timeline(machine, stage.stage_id),
    )


@dataclass(frozen=True)
class ClinicalSummary:
    diagnosis: str | None
    procedures: list[str]
    notes: str | None


def clinical_summary(resource: dict[str, Any]) -> ClinicalSummary | None:
    """Diagnosis and procedures of a Claim or ClaimResponse, if it has any."""
    if resource_type(resource) not in ("Claim", "ClaimResponse"):
        return None
    diagnoses = as_list(resource.get("diagnosis"))
    procedures = as_list(resource.get("procedure"))
    if not diagnoses and not procedures:
        return None
    diagnosis = first(diagnoses).get("diagnosisCodeableConcept")
    return ClinicalSummary(
        diagnosis=(
            extractors.codeable_concept(diagnosis) if diagnoses else None
        ),
        procedures=[
            extractors.codeable_concept(
                as_dict(procedure).get("procedureCodeableConcept")
            )
            for procedure in procedures
        ],
        notes=as_str(resource.get("disposition")),
    )


@dataclass(frozen=True)
class ResourceCard:
    resource_type: str
    id: str
    icon: str
    label: str
    status: str | None
    fields: dict[str, str]
    details: list[str] = field(default_factory=list)


def _item_lines(items: Any, render: Any) -> list[str]:
    entries = as_list(items)
    lines = [render(as_dict(item)) for item in entries[:CARD_ITEM_LIMIT]]
    if len(entries) > CARD_ITEM_LIMIT:
        lines.append(f"... and {len(entries) - CARD_ITEM_LIMIT} more")
    return lines


def _claim_response_total(total: Any) -> str:
    if isinstance(total, list):
        return extractors.money(first(total).get("amount"))
    return extractors.money(total)


def _card_fields(resource: dict[str, Any]) -> tuple[dict[str, str], list[str]]:
    get = resource.get
    match resource_type(resource):
        case "Patient":
            return {
                "Name": extractors.human_name(get("name")),
                "Gender": extractors.text(get("gender")),
                "Birth Date": extractors.format_date(get("birthDate")),
                "Address": extractors.address(get("address")),
                "Contact": extractors.contact_points(get("telecom")),
                "Identifiers": extractors.identifiers(get("identifier")),
            }, []
        case "Practitioner":
            return {
                "Name": extractors.human_name(get("name")),
                "Contact": extractors.contact_points(get("telecom")),
                "Address": extractors.address(get("address")),
                "Identifiers": extractors.identifiers(get("identifier")),
            }, []
        case "Organization":
            return {
                "Name": extractors.text(get("name")),
                "Type": extractors.codeable_concepts(get("type")),
                "Contact": extractors.contact_points(get("telecom")),
                "Address": extractors.address(get("address")),
                "Identifiers": extractors.identifiers(get("identifier")),
            }, []
        case "Coverage":
            return {
                "Type": extractors.codeable_concept(get("type")),
                "Beneficiary": extractors.reference(get("beneficiary")),
                "Payor": ", ".join(
                    extractors.reference(payor) for payor in as_list(get("payor"))
                )
                or extractors.NOT_AVAILABLE,
                "Period": extractors.period(get("period")),
                "Identifiers": extractors.identifiers(get("identifier")),
            }, []
        case "Claim":
            details = [
                f"Diagnosis: {extractors.codeable_concept(d.get('diagnosisCodeableConcept'))}"
                for d in map(as_dict, as_list(get("diagnosis")))
            ] + _item_lines(
                get("item"),
                lambda item: (
                    f"{extractors.codeable_concept(item.get('productOrService'))}"
                    f" - {extractors.money(item.get('net'))}"
                ),
            )
            return {
                "Type": extractors.codeable_concept(get("type")),
                "Use": extractors.text(get("use")),
                "Created": extractors.format_datetime(get("created")),
                "Billable Period": extractors.period(get("billablePeriod")),
                "Total": extractors.money(get("total")),
                "Priority": extractors.codeable_concept(get("priority")),
            }, details
        case "ClaimResponse":
            return {
                "Type": extractors.codeable_concept(get("type")),
                "Use": extractors.text(get("use")),
                "Created": extractors.format_datetime(get("created")),
                "Outcome": extractors.text(get("outcome")),
                "Disposition": extractors.text(get("disposition")),
                "Total": _claim_response_total(get("total")),
            }, []
        case "CoverageEligibilityRequest":
            return {
                "Purpose": extractors.joined(get("purpose")),
                "Priority": extractors.codeable_concept(get("priority")),
                "Created": extractors.format_datetime(get("created")),
                "Patient": extractors.reference(get("patient")),
                "Provider": extractors.reference(get("provider")),
                "Insurer": extractors.reference(get("insurer")),
                "Identifiers": extractors.identifiers(get("identifier")),
            }, _item_lines(
                get("item"),
                lambda item: extractors.codeable_concept(item.get("productOrService")),
            )
        case "CoverageEligibilityResponse":
            details = [
                f"In Force: {'Yes' if coverage.inforce else 'No'}"
                + (f", Benefits: {coverage.item_count} items" if coverage.item_count else "")
                for coverage in aggregators.eligibility_summary(resource)
            ]
            return {
                "Purpose": extractors.joined(get("purpose")),
                "Outcome": extractors.text(get("outcome")),
                "Disposition": extractors.text(get("disposition")),
                "Created": extractors.format_datetime(get("created")),
                "Request": extractors.reference(get("request")),
            }, details
        case "InsurancePlan":
            details = [
                f"{category.name} ({category.benefit_count} benefits)"
                for category in aggregators.plan_overview(resource).categories
            ]
            return {
                "Name": extractors.text(get("name")),
                "Type": extractors.codeable_concepts(get("type")),
                "Period": extractors.period(get("period")),
                "Administered By": extractors.text(
                    as_dict(get("administeredBy")).get("display")
                ),
                "Owned By": extractors.text(as_dict(get("ownedBy")).get("display")),
            }, details
        case _:
            fields = {
                "Type": (
                    extractors.codeable_concept(get("type"))
                    if isinstance(get("type"), dict)
                    else extractors.codeable_concepts(get("type"))
                ),
                "Created": extractors.text(get("created")),
                "Identifier": extractors.text(first(get("identifier")).get("value")),
            }
            return fields, []


def resource_card(resource: Resource) -> ResourceCard:
    """Render one resource as a labelled card of display fields."""
    data = as_dict(resource)
    type_name = resource_type(data) or "Unknown"
    icon, label = RESOURCE_LABELS.get(type_name, ("📄", type_name))
    fields, details = _card_fields(data)
    return ResourceCard(
        resource_type=type_name,
        id=extractors.text(data.get("id")),
        icon=icon,
        label=label,
        status=as_str(data.get("status")),
        fields=fields,
        details=details,
    )


@dataclass(frozen=True)
class BundleView:
    bundle_id: str
    bundle_type: str
    timestamp: str
    classification: WorkflowClassification
    stage: StageView | None
    context: WorkflowContext
    actions: list[NextAction]
    benefit_summary: aggregators.BenefitSummary
    plan: aggregators.PlanOverview | None
    settlement: aggregators.SettlementComparison | None
    items: list[aggregators.AdjudicatedItem]
    item_totals: aggregators.BreakdownTotals
    eligibility: list[aggregators.EligibilityCoverage]
    clinical: ClinicalSummary | None
    resources: list[ResourceCard]


def _action_status(stage: StageView | None, outcome: str | None) -> str | None:
    """
    Status handed to :func:`next_actions`.

    A pre-authorization approved in full or in part counts as approved.
    """
    if stage is None:
        return None
    if stage.stage_id in ("PA04", "PA06") and (outcome or "").lower() in (
        "complete",
        "partial",
    ):
        return "approved"
    return stage.status


def _bundle_actions(
    resource: dict[str, Any], stage: StageView | None
) -> list[NextAction]:
    outcome = as_str(resource.get("outcome"))
    stage_actions = next_actions(
        stage.stage_id if stage else None, _action_status(stage, outcome)
    )
    # A resource suggestion is dropped when a stage suggestion leads to the same place.
    stage_routes = [action.route for action in stage_actions if action.route]
    return [
        action
        for action in resource_actions(
            resource_type(resource), as_str(resource.get("status")), outcome
        )
        if not (
            action.route
            and any(route.startswith(action.route) for route in stage_routes)
        )
    ] + stage_actions


def _find_plan(bundle: dict[str, Any]) -> dict[str, Any] | None:
    for entry in as_list(bundle.get("entry")):
        candidate = as_dict(as_dict(entry).get("resource"))
        if resource_type(candidate) == "InsurancePlan":
            return candidate
    return None


def build_bundle_view(bundle: Bundle) -> BundleView:
    """
    Build the complete view model for a bundle.

    Never raises on malformed input; an empty bundle yields an ``Unknown``
    classification, no stage, zeroed summaries and no resource cards.

    Plan aggregates come from the first ``InsurancePlan`` entry of a Plan
    bundle, wherever it sits in the bundle.
    """
    data = as_dict(bundle)
    classification = classify_bundle(data)
    resource = main_resource(data)
    type_name = resource_type(resource)
    stage = build_stage_view(classification, resource)

    plan = (
        _find_plan(data)
        if classification.category is WorkflowCategory.PLAN
        or type_name == "InsurancePlan"
        else None
    )
    is_claim_response = type_name == "ClaimResponse"
    items = (
        aggregators.item_breakdown(resource, limit=BREAKDOWN_ITEM_LIMIT)
        if is_claim_response
        else []
    )

    return BundleView(
        bundle_id=extractors.text(data.get("id")),
        bundle_type=extractors.text(data.get("type")),
        timestamp=extractors.format_datetime(data.get("timestamp")),
        classification=classification,
        stage=stage,
        context=extract_workflow_context(data),
        actions=_bundle_actions(resource, stage),
        benefit_summary=aggregators.summarize_plan_benefits(plan or {}),
        plan=aggregators.plan_overview(plan) if plan is not None else None,
        settlement=aggregators.settlement_totals(resource) if is_claim_response else None,
        items=items,
        item_totals=aggregators.breakdown_totals(items),
        eligibility=(
            aggregators.eligibility_summary(resource)
            if type_name == "CoverageEligibilityResponse"
            else []
        ),
        clinical=clinical_summary(resource),
        resources=[
            resource_card(entry_resource)
            for entry_resource in (
                as_dict(entry).get("resource") for entry in as_list(data.get("entry"))
            )
            if isinstance(entry_resource, dict)
        ],
    )


def to_json(view: Any) -> Any:
    """Convert a view model (or any dataclass tree) to JSON-compatible data."""
    return asdict(view)
