"""FHIR Bundle resource."""

from typing import TypedDict

from fhir.identifier import Identifier
from fhir.meta import Meta
from fhir.resource import Resource


class BundleEntry(TypedDict, total=False):
    id: str
    fullUrl: str
    resource: Resource


class Bundle(TypedDict, total=False):
    resourceType: str
    id: str
    meta: Meta
    identifier: Identifier
    type: str
    timestamp: str
    entry: list[BundleEntry]
