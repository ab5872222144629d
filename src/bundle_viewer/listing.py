"""
Bundle listing and lookup on top of a data source.
"""

import logging
from dataclasses import dataclass

from fhir.bundle import Bundle

from bundle_viewer.classifier import WorkflowClassification, classify_bundle
from bundle_viewer.common.common import as_str
from bundle_viewer.data_source import BundleSource
from bundle_viewer.errors import BundleSourceError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BundleListingItem:
    """
    Classified metadata for one available bundle.

    :param id: Identifier to pass back to :meth:`BundleListingService.lookup`.
    :param name: Display name, the file name for local bundles.
    :param title: Classification title.
    :param description: Classification description.
    :param type: ``"request"`` or ``"response"``.
    :param workflow: Workflow label used for grouping.
    :param resource_count: Number of entries in the bundle.
    """

    id: str
    name: str
    title: str
    description: str
    type: str
    workflow: str
    resource_count: int


@dataclass(frozen=True)
class BundleLookup:
    identifier: str
    bundle: Bundle
    classification: WorkflowClassification


def _sort_key(item: BundleListingItem) -> tuple[str, int, str]:
    return (item.workflow, 0 if item.type == "request" else 1, item.title)


class BundleListingService:
    """
    Lists the bundles a data source offers and looks single bundles up.

    Entry points:
        - ``list_bundles() -> list[BundleListingItem]``
        - ``lookup(identifier) -> BundleLookup``
    """

    def __init__(self, source: BundleSource) -> None:
        self.source = source

    def list_bundles(self) -> list[BundleListingItem]:
        """
        Load and classify every bundle the source offers.

        Bundles that fail to load are skipped. The result is sorted by workflow
        label, then requests before responses, then title.

        :raises BundleSourceError: If the source cannot produce a listing at all.
        """
        items = []
        for candidate in self.source.list_bundles():
            identifier = as_str(candidate.get("id"))
            if identifier is None:
                logger.debug("Skipping listing entry without an id: %r", candidate)
                continue
            try:
                bundle = self.source.load_bundle(identifier)
            except BundleSourceError as err:
                logger.warning("Skipping bundle %s: %s", identifier, err)
                continue

            classification = classify_bundle(bundle)
            items.append(
                BundleListingItem(
                    id=identifier,
                    name=as_str(candidate.get("name")) or identifier,
                    title=classification.title,
                    description=classification.description,
                    type=classification.direction,
                    workflow=classification.workflow,
                    resource_count=classification.resource_count,
                )
            )

        items.sort(key=_sort_key)
        logger.info("Listed %d bundles", len(items))
        return items

    def lookup(self, identifier: str) -> BundleLookup:
        """
        Load one bundle and classify it.

        :raises BundleSourceError: Propagated unchanged from the data source.
        """
        bundle = self.source.load_bundle(identifier)
        return BundleLookup(
            identifier=identifier,
            bundle=bundle,
            classification=classify_bundle(bundle),
        )
