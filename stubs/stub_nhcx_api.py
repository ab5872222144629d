"""
Minimal in-memory stub for the NHCX bundle API.

Implements:
    - GET {base}/abdm/nhcx/v1/bundle/{id}: the stored bundle, or an
      OperationOutcome with 404
    - GET {base}/bundles: the listing, as a bare array or wrapped in
      ``{"bundles": [...]}`` depending on ``listing_format``

Call :meth:`NhcxBundleApiStub.get` where ``requests.get`` would be called.
"""

import json
import re
from typing import Any, Literal, TypeAlias
from urllib.parse import unquote

from requests import Response
from requests.structures import CaseInsensitiveDict

ListingFormat: TypeAlias = Literal["array", "object", "invalid"]

_BUNDLE_URL = re.compile(r"^(?P<base>.+)/abdm/nhcx/v1/bundle/(?P<id>[^/]+)$")
_LISTING_URL = re.compile(r"^(?P<base>.+)/bundles$")


def _create_response(
    status_code: int,
    body: Any,
    reason: str = "",
    content_type: str = "application/fhir+json",
) -> Response:
    """
    Create a :class:`requests.Response` object for the stub.

    :param status_code: HTTP status code.
    :param body: JSON-serialisable body, or ``bytes`` to send as-is.
    :param reason: HTTP reason phrase.
    :param content_type: Value of the Content-Type header.
    """
    response = Response()
    response.status_code = status_code
    response.headers = CaseInsensitiveDict({"Content-Type": content_type})
    response._content = (  # noqa: SLF001
        body if isinstance(body, bytes) else json.dumps(body).encode("utf-8")
    )
    response.reason = reason
    response.encoding = "utf-8"
    return response


class NhcxBundleApiStub:
    """
    In-memory bundle API.

    :param listing_format: Shape of the ``/bundles`` reply.
    """

    def __init__(self, listing_format: ListingFormat = "array") -> None:
        self.listing_format = listing_format
        self._bundles: dict[str, dict[str, Any]] = {}
        # Status codes to answer with instead of the stored bundle.
        self._failures: dict[str, int] = {}
        self.requests: list[dict[str, Any]] = []

        self.upsert_bundle(
            "eligibility-response-001",
            {
                "resourceType": "Bundle",
                "id": "eligibility-response-001",
                "type": "collection",
                "timestamp": "2024-03-15T10:30:00+05:30",
                "entry": [
                    {
                        "resource": {
                            "resourceType": "CoverageEligibilityResponse",
                            "id": "cer-001",
                            "status": "active",
                            "outcome": "complete",
                            "insurer": {"reference": "Organization/star-health@hcx"},
                            "patient": {"reference": "Patient/PAT-001"},
                        }
                    }
                ],
            },
        )

    # ---------------------------
    # Public API for tests
    # ---------------------------

    def upsert_bundle(self, identifier: str, bundle: dict[str, Any]) -> None:
        """Add or replace a bundle in the stub store."""
        self._bundles[identifier] = bundle

    def fail_with(self, identifier: str, status_code: int) -> None:
        """Answer requests for ``identifier`` with ``status_code``."""
        self._failures[identifier] = status_code

    def get(
        self,
        url: str,
        headers: dict[str, str] | None = None,
        params: Any = None,
        timeout: Any = None,
    ) -> Response:
        """Route a GET request to the matching endpoint."""
        self.requests.append(
            {"url": url, "headers": dict(headers or {}), "timeout": timeout}
        )

        if match := _BUNDLE_URL.match(url):
            return self.get_bundle(unquote(match.group("id")))
        if _LISTING_URL.match(url):
            return self.list_bundles()
        return self._operation_outcome(404, "not-found", f"No route for {url}")

    def get_bundle(self, identifier: str) -> Response:
        """Implements GET /abdm/nhcx/v1/bundle/{id}."""
        if identifier in self._failures:
            status = self._failures[identifier]
            return self._operation_outcome(status, "exception", "Simulated failure")
        if identifier not in self._bundles:
            return self._operation_outcome(404, "not-found", "Bundle not found")
        return _create_response(200, self._bundles[identifier], reason="OK")

    def list_bundles(self) -> Response:
        """Implements GET /bundles."""
        items = [
            {"id": identifier, "name": identifier} for identifier in self._bundles
        ]
        match self.listing_format:
            case "array":
                body: Any = items
            case "object":
                body = {"bundles": items}
            case _:
                body = {"items": items}
        return _create_response(200, body, reason="OK", content_type="application/json")

    # ---------------------------
    # Internal helpers
    # ---------------------------

    @staticmethod
    def _operation_outcome(status_code: int, code: str, diagnostics: str) -> Response:
        body = {
            "resourceType": "OperationOutcome",
            "issue": [{"severity": "error", "code": code, "diagnostics": diagnostics}],
        }
        reason = "Not Found" if status_code == 404 else "Error"
        return _create_response(status_code, body, reason=reason)
