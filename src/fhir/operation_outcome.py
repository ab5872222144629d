"""FHIR OperationOutcome resource, as returned for bundle retrieval failures."""

from typing import Literal, NotRequired, TypeAlias, TypedDict

from fhir.codeable_concept import CodeableConcept

IssueSeverity: TypeAlias = Literal["fatal", "error", "warning", "information"]


class OperationOutcomeIssue(TypedDict):
    severity: IssueSeverity
    code: str
    diagnostics: str
    details: NotRequired[CodeableConcept]


class OperationOutcome(TypedDict):
    resourceType: Literal["OperationOutcome"]
    issue: list[OperationOutcomeIssue]
