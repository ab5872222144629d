"""
NHCX workflow stages.

Each workflow category that has a lifecycle is a small state machine of
stages (``CE01``..``CE02`` for eligibility, ``PA01``..``PA06`` for
pre-authorization, ``CL01``..``CL07`` for claims, ``IP01``..``IP02`` for
insurance plans). The current stage is never stored: it is re-derived from
the main resource's outcome every time a bundle is viewed, and the engine
only reports progress and advisory next actions. It never rejects an
out-of-order transition.
"""

from dataclasses import dataclass
from enum import StrEnum
from typing import Literal, TypeAlias

Direction: TypeAlias = Literal["request", "response"]
TimelineState: TypeAlias = Literal["complete", "current", "pending"]


class WorkflowCategory(StrEnum):
    ELIGIBILITY = "Eligibility"
    PREAUTH = "PreAuth"
    CLAIM = "Claim"
    PLAN = "Plan"
    COVERAGE_INFO = "CoverageInfo"
    CLAIM_STATUS = "ClaimStatus"
    UNKNOWN = "Unknown"


@dataclass(frozen=True)
class WorkflowStage:
    """
    One stage of a workflow state machine.

    :param stage_id: Stage identifier, e.g. ``"CL04"``.
    :param label: Human readable stage name.
    :param status: Visual status token, see :data:`STATUS_VISUALS`.
    :param next_stage: Identifier of the following stage, ``None`` if terminal.
    :param progress: Progress through the workflow, 0-100.
    """

    stage_id: str
    label: str
    status: str
    next_stage: str | None
    progress: int

    @property
    def terminal(self) -> bool:
        return self.next_stage is None


def _stages(*stages: WorkflowStage) -> dict[str, WorkflowStage]:
    return {stage.stage_id: stage for stage in stages}


NHCX_WORKFLOWS: dict[WorkflowCategory, dict[str, WorkflowStage]] = {
    WorkflowCategory.ELIGIBILITY: _stages(
        WorkflowStage("CE01", "Request Initiated", "initiated", "CE02", 50),
        WorkflowStage("CE02", "Response Received", "complete", None, 100),
    ),
    WorkflowCategory.PREAUTH: _stages(
        WorkflowStage("PA01", "Pre-Auth Submitted", "initiated", "PA02", 20),
        WorkflowStage("PA02", "Information Requested", "info_required", "PA03", 40),
        WorkflowStage("PA03", "Information Submitted", "processing", "PA04", 60),
        WorkflowStage("PA04", "Approved", "approved", None, 100),
        WorkflowStage("PA05", "Rejected", "rejected", None, 100),
        WorkflowStage("PA06", "Partially Approved", "partial", None, 100),
    ),
    WorkflowCategory.CLAIM: _stages(
        WorkflowStage("CL01", "Claim Submitted", "initiated", "CL02", 15),
        WorkflowStage("CL02", "Information Requested", "info_required", "CL03", 30),
        WorkflowStage("CL03", "Information Submitted", "processing", "CL04", 50),
        WorkflowStage("CL04", "Approved", "approved", "CL07", 85),
        WorkflowStage("CL05", "Rejected", "rejected", None, 100),
        WorkflowStage("CL06", "Partially Approved", "partial", "CL07", 85),
        WorkflowStage("CL07", "Payment Notice Issued", "payment", None, 100),
    ),
    WorkflowCategory.PLAN: _stages(
        WorkflowStage("IP01", "Plan Request Initiated", "initiated", "IP02", 50),
        WorkflowStage("IP02", "Plan Details Received", "complete", None, 100),
    ),
}

# (initial, approved, partial) stage per category with an adjudicated outcome.
_OUTCOME_STAGES: dict[WorkflowCategory, tuple[str, str, str]] = {
    WorkflowCategory.PREAUTH: ("PA01", "PA04", "PA06"),
    WorkflowCategory.CLAIM: ("CL01", "CL04", "CL06"),
}

_STAGE_PREFIXES: dict[str, WorkflowCategory] = {
    "CE": WorkflowCategory.ELIGIBILITY,
    "PA": WorkflowCategory.PREAUTH,
    "CL": WorkflowCategory.CLAIM,
    "IP": WorkflowCategory.PLAN,
}

PREAUTHORIZATION_CODE = "preauthorization"


@dataclass(frozen=True)
class StatusVisual:
    background: str
    text: str
    icon: str


STATUS_VISUALS: dict[str, StatusVisual] = {
    "initiated": StatusVisual("#EFF6FF", "#1E40AF", "⏳"),
    "processing": StatusVisual("#FEF3C7", "#92400E", "🔄"),
    "info_required": StatusVisual("#FEF3C7", "#B45309", "⚠️"),
    "approved": StatusVisual("#D1FAE5", "#065F46", "✅"),
    "partial": StatusVisual("#FED7AA", "#9A3412", "⚠️"),
    "rejected": StatusVisual("#FEE2E2", "#991B1B", "❌"),
    "payment": StatusVisual("#E0E7FF", "#3730A3", "💰"),
    "complete": StatusVisual("#D1FAE5", "#065F46", "✓"),
}

NEUTRAL_VISUAL = StatusVisual("#F3F4F6", "#374151", "•")


def status_visual(status: str | None) -> StatusVisual:
    """Return the colour/icon token for a stage status, gray if unknown."""
    if status is None:
        return NEUTRAL_VISUAL
    return STATUS_VISUALS.get(status, NEUTRAL_VISUAL)


def get_stage(stage_id: str) -> WorkflowStage | None:
    """Look a stage up by identifier; the prefix selects the workflow."""
    category = _STAGE_PREFIXES.get(stage_id[:2])
    if category is None:
        return None
    return NHCX_WORKFLOWS[category].get(stage_id)


def progress_percentage(stage_id: str) -> int:
    """Progress of a stage, ``0`` for unknown stages."""
    stage = get_stage(stage_id)
    return stage.progress if stage else 0


def stage_machine(
    category: WorkflowCategory, type_code: str | None = None
) -> WorkflowCategory | None:
    """
    Return the state machine that applies to a classified resource.

    A ``Claim`` whose type is coded ``preauthorization`` follows the
    pre-authorization machine. Categories without a lifecycle
    (coverage information, claim status, unknown) have none.
    """
    if category is WorkflowCategory.CLAIM and type_code == PREAUTHORIZATION_CODE:
        return WorkflowCategory.PREAUTH
    if category in NHCX_WORKFLOWS:
        return category
    return None


def select_stage(
    category: WorkflowCategory,
    direction: Direction,
    outcome: str | None = None,
    type_code: str | None = None,
) -> WorkflowStage | None:
    """
    Select the current stage for a classified main resource.

    Requests sit at the machine's initial stage. For pre-authorization and
    claim responses an outcome of ``complete`` selects the approved stage,
    ``partial`` the partially-approved stage, anything else the initial stage.
    Eligibility and plan responses are at their terminal stage.

    :param category: Workflow category from classification.
    :param direction: ``"request"`` or ``"response"``.
    :param outcome: The main resource's ``outcome`` field, if any.
    :param type_code: Code of the main resource's first type coding, if any.
    :returns: The stage, or ``None`` for categories without a lifecycle.
    """
    machine = stage_machine(category, type_code)
    if machine is None:
        return None

    stages = NHCX_WORKFLOWS[machine]
    initial = next(iter(stages.values()))

    if direction != "response":
        return initial

    if machine in _OUTCOME_STAGES:
        initial_id, approved_id, partial_id = _OUTCOME_STAGES[machine]
        match (outcome or "").lower():
            case "complete":
                return stages[approved_id]
            case "partial":
                return stages[partial_id]
            case _:
                return stages[initial_id]

    return next(stage for stage in stages.values() if stage.terminal)


@dataclass(frozen=True)
class TimelineStep:
    stage: WorkflowStage
    state: TimelineState


def _follow(stages: dict[str, WorkflowStage], start: WorkflowStage) -> list[WorkflowStage]:
    path = [start]
    while path[-1].next_stage is not None:
        following = stages.get(path[-1].next_stage)
        if following is None or following in path:
            break
        path.append(following)
    return path


def _branch_prefix(
    machine: WorkflowCategory, main_path: list[WorkflowStage], current: WorkflowStage
) -> list[WorkflowStage]:
    if machine in _OUTCOME_STAGES:
        approved_id = _OUTCOME_STAGES[machine][1]
        for index, stage in enumerate(main_path):
            if stage.stage_id == approved_id:
                return main_path[:index]
    return [stage for stage in main_path if stage.progress < current.progress]


def stage_timeline(
    machine: WorkflowCategory, current_stage_id: str
) -> list[TimelineStep]:
    """
    Lay the stages of a workflow out as a timeline around the current stage.

    The main path follows ``next_stage`` pointers from the initial stage. A
    current stage off that path (rejected or partially approved) replaces
    the main path from the adjudication point, i.e. the approved stage.
    """
    stages = NHCX_WORKFLOWS.get(machine, {})
    current = stages.get(current_stage_id)
    if current is None:
        return []

    main_path = _follow(stages, next(iter(stages.values())))
    if current in main_path:
        path = main_path
    else:
        path = _branch_prefix(machine, main_path, current) + _follow(stages, current)

    position = path.index(current)
    steps = []
    for index, stage in enumerate(path):
        state: TimelineState
        if index < position:
            state = "complete"
        elif index == position:
            state = "current"
        else:
            state = "pending"
        steps.append(TimelineStep(stage=stage, state=state))
    return steps


@dataclass(frozen=True)
class NextAction:
    label: str
    icon: str
    route: str | None = None


VIEW_BUNDLE_ACTION = NextAction(label="View FHIR Bundle", icon="📄")


def next_actions(stage_id: str | None, status: str | None) -> list[NextAction]:
    """
    Suggest follow-up actions for a stage.

    Advisory only. "View FHIR Bundle" is always the last suggestion.
    """
    actions: list[NextAction] = []

    if stage_id == "CE02" and status == "complete":
        actions.append(NextAction("Submit Pre-Auth", "📋", "/preauth/new"))

    if stage_id in ("PA04", "PA06") and status == "approved":
        actions.append(NextAction("Submit Claim", "💰", "/claim/new"))

    if stage_id in ("PA02", "CL02"):
        actions.append(NextAction("Submit Documents", "📎", "/documents/upload"))

    actions.append(VIEW_BUNDLE_ACTION)
    return actions


def resource_actions(
    resource_type: str | None, status: str | None, outcome: str | None
) -> list[NextAction]:
    """Suggestions driven directly by the main resource's state."""
    actions: list[NextAction] = []

    if resource_type == "CoverageEligibilityResponse" and status == "active":
        actions.append(NextAction("Submit Pre-Authorization", "📋", "/preauth"))

    if resource_type == "ClaimResponse" and outcome == "complete":
        actions.append(NextAction("View Settlement", "💰", "/settlement"))

    return actions
