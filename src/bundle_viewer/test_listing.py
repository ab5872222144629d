"""
Unit tests for :mod:`bundle_viewer.listing`.
"""

from typing import Any

import pytest

from bundle_viewer.errors import (
    BundleFormatError,
    BundleNetworkError,
    BundleNotFoundError,
    BundleTimeoutError,
)
from bundle_viewer.listing import BundleListingItem, BundleListingService


class FakeBundleSource:
    """
    In-memory data source.

    :param bundles: Bundle (or exception to raise) per identifier, offered in
        insertion order.
    """

    def __init__(self, bundles: dict[str, dict[str, Any] | Exception]) -> None:
        self.bundles = bundles

    def load_bundle(self, identifier: str) -> dict[str, Any]:
        if identifier not in self.bundles:
            raise BundleNotFoundError(identifier, "Bundle not found")
        bundle = self.bundles[identifier]
        if isinstance(bundle, Exception):
            raise bundle
        return bundle

    def list_bundles(self) -> list[dict[str, Any]]:
        return [{"id": identifier} for identifier in self.bundles]


def _bundle(resource_type: str, **resource: Any) -> dict[str, Any]:
    return {
        "resourceType": "Bundle",
        "entry": [{"resource": {"resourceType": resource_type, **resource}}],
    }


@pytest.fixture
def source() -> FakeBundleSource:
    return FakeBundleSource(
        {
            "insurancePlanResp.json": _bundle("InsurancePlan"),
            "claimResp.json": _bundle("ClaimResponse", outcome="complete"),
            "eligibilityCheckResp.json": _bundle("CoverageEligibilityResponse"),
            "claimReq.json": _bundle("Claim"),
            "broken.json": BundleFormatError("broken.json", "not JSON"),
            "eligibilityCheckReq.json": _bundle("CoverageEligibilityRequest"),
        }
    )


class TestListBundles:
    def test_sorted_by_workflow_then_direction_then_title(
        self, source: FakeBundleSource
    ) -> None:
        items = BundleListingService(source).list_bundles()

        assert [(item.workflow, item.type, item.id) for item in items] == [
            ("Claim Processing", "request", "claimReq.json"),
            ("Claim Processing", "response", "claimResp.json"),
            ("Eligibility Verification", "request", "eligibilityCheckReq.json"),
            ("Eligibility Verification", "response", "eligibilityCheckResp.json"),
            ("Insurance Plan Discovery", "response", "insurancePlanResp.json"),
        ]

    def test_item_metadata(self, source: FakeBundleSource) -> None:
        items = BundleListingService(source).list_bundles()

        assert items[0] == BundleListingItem(
            id="claimReq.json",
            name="claimReq.json",
            title="Claim Request",
            description="Medical claim submission",
            type="request",
            workflow="Claim Processing",
            resource_count=1,
        )

    def test_failing_bundles_are_skipped(self) -> None:
        source = FakeBundleSource(
            {
                "claimReq.json": _bundle("Claim"),
                "slow.json": BundleTimeoutError("slow.json", "timed out"),
                "down.json": BundleNetworkError("down.json", "refused"),
            }
        )
        items = BundleListingService(source).list_bundles()
        assert [item.id for item in items] == ["claimReq.json"]

    def test_entries_without_id_are_skipped(self) -> None:
        class NamelessSource(FakeBundleSource):
            def list_bundles(self) -> list[dict[str, Any]]:
                return [{"name": "nameless"}, {"id": "claimReq.json", "name": "Claim"}]

        service = BundleListingService(
            NamelessSource({"claimReq.json": _bundle("Claim")})
        )
        [item] = service.list_bundles()
        assert item.name == "Claim"

    def test_listing_failure_propagates(self) -> None:
        class DownSource(FakeBundleSource):
            def list_bundles(self) -> list[dict[str, Any]]:
                raise BundleNetworkError(None, "Invalid API response format")

        with pytest.raises(BundleNetworkError):
            BundleListingService(DownSource({})).list_bundles()


class TestLookup:
    def test_lookup_classifies(self, source: FakeBundleSource) -> None:
        lookup = BundleListingService(source).lookup("claimResp.json")

        assert lookup.identifier == "claimResp.json"
        assert lookup.bundle is source.bundles["claimResp.json"]
        assert lookup.classification.stage_id == "CL04"

    def test_lookup_errors_propagate_unchanged(self, source: FakeBundleSource) -> None:
        service = BundleListingService(source)

        with pytest.raises(BundleNotFoundError):
            service.lookup("missing.json")
        with pytest.raises(BundleFormatError) as excinfo:
            service.lookup("broken.json")
        assert excinfo.value is source.bundles["broken.json"]
