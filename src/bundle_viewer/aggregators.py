"""
Summary values folded out of nested benefit, item and adjudication arrays.

All functions are pure and tolerate partial input: missing arrays fold to
empty summaries and missing amounts count as zero unless stated otherwise.
"""

from dataclasses import dataclass
from typing import Any, Literal, TypeAlias

from bundle_viewer import extractors
from bundle_viewer.common.common import (
    as_dict,
    as_list,
    as_number,
    as_str,
    first,
    first_coding_code,
)

ItemStatus: TypeAlias = Literal["approved", "reduced", "rejected"]

SUBMITTED = "submitted"
BENEFIT = "benefit"


@dataclass(frozen=True)
class BenefitSummary:
    count: int
    total_value: float


def summarize_benefits(benefits: Any) -> BenefitSummary:
    """
    Count benefits and total their first limit values.

    A benefit without a numeric first limit contributes ``0`` to the total.
    """
    items = as_list(benefits)
    total = 0.0
    for benefit in items:
        limit = first(as_dict(benefit).get("limit"))
        total += extractors.money_value(limit.get("value")) or 0
    return BenefitSummary(count=len(items), total_value=total)


def summarize_plan_benefits(plan: Any) -> BenefitSummary:
    """Benefit summary across every coverage category of an InsurancePlan."""
    benefits = [
        benefit
        for coverage in as_list(as_dict(plan).get("coverage"))
        for benefit in as_list(as_dict(coverage).get("benefit"))
    ]
    return summarize_benefits(benefits)


@dataclass(frozen=True)
class CoverageCategory:
    name: str
    benefit_count: int


@dataclass(frozen=True)
class PlanOverview:
    owner: str
    coverage_areas: int
    total_services: int
    service_categories: int
    categories: list[CoverageCategory]


def plan_overview(plan: Any) -> PlanOverview:
    data = as_dict(plan)
    coverages = [as_dict(coverage) for coverage in as_list(data.get("coverage"))]
    categories = [
        CoverageCategory(
            name=(
                extractors.codeable_concept(coverage.get("type"))
                if as_dict(coverage.get("type")).get("coding")
                else f"Category {index + 1}"
            ),
            benefit_count=len(as_list(coverage.get("benefit"))),
        )
        for index, coverage in enumerate(coverages)
    ]
    return PlanOverview(
        owner=extractors.text(as_dict(data.get("ownedBy")).get("display")),
        coverage_areas=len(as_list(data.get("coverageArea"))),
        total_services=sum(category.benefit_count for category in categories),
        service_categories=len(categories),
        categories=categories,
    )


def _find_amount(entries: Any, category_code: str) -> dict[str, Any] | None:
    """Amount (Money) of the first entry tagged with ``category_code``."""
    for entry in as_list(entries):
        data = as_dict(entry)
        if first_coding_code(data.get("category")) == category_code:
            return as_dict(data.get("amount"))
    return None


@dataclass(frozen=True)
class SettlementComparison:
    requested: float
    approved: float
    difference: float
    currency: str


def settlement_totals(resource: Any) -> SettlementComparison | None:
    """
    Compare the ``submitted`` and ``benefit`` totals of a ClaimResponse.

    :returns: ``None`` unless both totals carry a numeric amount. A missing
        total means no comparison, not a zero one.
    """
    totals = as_dict(resource).get("total")
    requested_money = _find_amount(totals, SUBMITTED)
    approved_money = _find_amount(totals, BENEFIT)

    requested = as_number((requested_money or {}).get("value"))
    approved = as_number((approved_money or {}).get("value"))
    if requested is None or approved is None:
        return None

    currency = (
        as_str((approved_money or {}).get("currency"))
        or as_str((requested_money or {}).get("currency"))
        or extractors.DEFAULT_CURRENCY
    )
    return SettlementComparison(
        requested=requested,
        approved=approved,
        difference=requested - approved,
        currency=currency,
    )


def classify_adjudication(submitted: float, benefit: float) -> ItemStatus:
    """
    Classify an adjudicated item.

    ``rejected`` when nothing was approved (including when nothing was
    submitted either), ``reduced`` when less was approved than submitted,
    otherwise ``approved``.
    """
    if benefit == 0:
        return "rejected"
    if benefit < submitted:
        return "reduced"
    return "approved"


@dataclass(frozen=True)
class AdjudicatedItem:
    service: str
    description: str | None
    quantity: float | None
    requested: float | None
    approved: float | None
    status: ItemStatus


def adjudicate_item(item: Any) -> AdjudicatedItem:
    data = as_dict(item)
    adjudication = data.get("adjudication")
    requested = extractors.money_value(_find_amount(adjudication, SUBMITTED))
    approved = extractors.money_value(_find_amount(adjudication, BENEFIT))
    product = as_dict(data.get("productOrService"))
    return AdjudicatedItem(
        service=as_str(first(product.get("coding")).get("display")) or "Service",
        description=as_str(product.get("text")),
        quantity=extractors.money_value(data.get("quantity")),
        requested=requested,
        approved=approved,
        status=classify_adjudication(requested or 0, approved or 0),
    )


def item_breakdown(resource: Any, limit: int | None = None) -> list[AdjudicatedItem]:
    """
    Per-item adjudication breakdown of a ClaimResponse.

    :param resource: ClaimResponse JSON.
    :param limit: Optional maximum number of items to return.
    """
    items = as_list(as_dict(resource).get("item"))
    if limit is not None:
        items = items[:limit]
    return [adjudicate_item(item) for item in items]


@dataclass(frozen=True)
class BreakdownTotals:
    requested: float
    approved: float


def breakdown_totals(items: list[AdjudicatedItem]) -> BreakdownTotals:
    return BreakdownTotals(
        requested=sum(item.requested or 0 for item in items),
        approved=sum(item.approved or 0 for item in items),
    )


@dataclass(frozen=True)
class EligibilityCoverage:
    coverage: str
    inforce: bool
    benefit_period: str
    item_count: int
    covered_count: int
    excluded_count: int
    benefit_count: int


def eligibility_summary(resource: Any) -> list[EligibilityCoverage]:
    """Summarise each insurance entry of a CoverageEligibilityResponse."""
    summaries = []
    for insurance in as_list(as_dict(resource).get("insurance")):
        data = as_dict(insurance)
        items = [as_dict(item) for item in as_list(data.get("item"))]
        excluded = sum(1 for item in items if item.get("excluded") is True)
        summaries.append(
            EligibilityCoverage(
                coverage=extractors.reference(data.get("coverage")),
                inforce=data.get("inforce") is True,
                benefit_period=extractors.period(data.get("benefitPeriod")),
                item_count=len(items),
                covered_count=len(items) - excluded,
                excluded_count=excluded,
                benefit_count=sum(len(as_list(item.get("benefit"))) for item in items),
            )
        )
    return summaries
