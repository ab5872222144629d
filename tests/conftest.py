"""Pytest configuration and shared fixtures for integration tests."""

from pathlib import Path

import pytest
from bundle_viewer.data_source import LocalBundleSource
from bundle_viewer.listing import BundleListingService

RESOURCES = Path(__file__).resolve().parent.parent / "resources"


@pytest.fixture
def local_source() -> LocalBundleSource:
    """Local data source over the sample bundles shipped in ``resources/``."""
    return LocalBundleSource(RESOURCES)


@pytest.fixture
def listing_service(local_source: LocalBundleSource) -> BundleListingService:
    return BundleListingService(local_source)
