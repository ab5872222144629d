"""
Bundle data sources.

Two sources share one interface: :class:`LocalBundleSource` reads bundle
files from a directory, :class:`ApiBundleSource` fetches them from the NHCX
bundle API. Both raise the :class:`~bundle_viewer.errors.BundleSourceError`
hierarchy and nothing else. Use :func:`make_data_source` to build the one a
:class:`~bundle_viewer.config.DataSourceConfig` asks for.
"""

import json
import logging
from pathlib import Path
from typing import Any, Protocol, cast
from urllib.parse import quote

import requests
from fhir.bundle import Bundle

from bundle_viewer.common.common import as_dict, as_list
from bundle_viewer.config import DataSourceConfig
from bundle_viewer.errors import (
    BundleFormatError,
    BundleNetworkError,
    BundleNotFoundError,
    BundleSourceError,
    BundleTimeoutError,
    ConfigurationError,
)

logger = logging.getLogger(__name__)

# Conventional file names of NHCX sample bundles.
LOCAL_BUNDLE_FILES = (
    "authRequirementsReq.json",
    "authRequirementsResp.json",
    "claimReq.json",
    "claimResp.json",
    "claimStatusReq.json",
    "claimStatusResp.json",
    "eligibilityCheckReq.json",
    "eligibilityCheckResp.json",
    "insurancePlanReq.json",
    "insurancePlanResp.json",
    "preAuthReq.json",
    "preAuthResp.json",
    "coverageReq.json",
    "coverageResp.json",
)

MANIFEST_FILE = "manifest.json"
FHIR_JSON = "application/fhir+json"


class BundleSource(Protocol):
    """Anything that can load bundles and list which ones are available."""

    def load_bundle(self, identifier: str) -> Bundle: ...

    def list_bundles(self) -> list[dict[str, Any]]: ...


class LocalBundleSource:
    """
    Reads bundles from JSON files in a directory.

    Identifiers are plain file names; anything that would leave the
    directory is treated as not found.
    """

    def __init__(
        self,
        resource_path: str | Path,
        candidates: tuple[str, ...] = LOCAL_BUNDLE_FILES,
    ) -> None:
        """
        :param resource_path: Directory holding bundle files.
        :param candidates: File names offered by :meth:`list_bundles` when the
            directory has no ``manifest.json``.
        """
        self.resource_path = Path(resource_path)
        self.candidates = candidates

    def _path_for(self, identifier: str) -> Path:
        if (
            not identifier
            or "/" in identifier
            or "\\" in identifier
            or identifier in (".", "..")
        ):
            raise BundleNotFoundError(identifier, "Invalid bundle identifier")
        return self.resource_path / identifier

    def load_bundle(self, identifier: str) -> Bundle:
        """
        Read and decode ``<resource_path>/<identifier>``.

        :raises BundleNotFoundError: If the file does not exist.
        :raises BundleFormatError: If the file is not a JSON object.
        """
        path = self._path_for(identifier)
        try:
            with path.open(encoding="utf-8") as handle:
                bundle = json.load(handle)
        except (FileNotFoundError, IsADirectoryError) as err:
            raise BundleNotFoundError(identifier, "Bundle file not found") from err
        except json.JSONDecodeError as err:
            raise BundleFormatError(
                identifier, f"Bundle file is not valid JSON: {err.msg}"
            ) from err
        except OSError as err:
            raise BundleNetworkError(
                identifier, f"Bundle file could not be read: {err.strerror}"
            ) from err

        if not isinstance(bundle, dict):
            raise BundleFormatError(identifier, "Bundle file is not a JSON object")

        logger.info("Loaded bundle %s from %s", identifier, self.resource_path)
        return cast("Bundle", bundle)

    def _manifest_files(self) -> list[str]:
        path = self.resource_path / MANIFEST_FILE
        if not path.is_file():
            return []
        try:
            with path.open(encoding="utf-8") as handle:
                manifest = json.load(handle)
        except (OSError, json.JSONDecodeError) as err:
            logger.warning("Ignoring unreadable %s: %s", path, err)
            return []
        return [
            name
            for name in as_list(as_dict(manifest).get("files"))
            if isinstance(name, str) and name
        ]

    def list_bundles(self) -> list[dict[str, Any]]:
        """
        Bundle files that exist in the resource directory.

        The names come from the ``files`` array of ``manifest.json`` in that
        directory, or from the candidate names when it lists none.
        """
        names = self._manifest_files() or list(self.candidates)
        available = []
        for name in names:
            is_plain = "/" not in name and "\\" not in name
            if is_plain and (self.resource_path / name).is_file():
                available.append({"id": name, "name": name})
            else:
                logger.debug("Skipping missing bundle file %s", name)
        logger.info(
            "Found %d of %d bundle files in %s",
            len(available),
            len(names),
            self.resource_path,
        )
        return available


class ApiBundleSource:
    """
    Client for the NHCX bundle API.

    Calls:
        - ``GET {base_url}/abdm/nhcx/v1/bundle/{identifier}`` for one bundle
        - ``GET {base_url}/bundles`` for the listing
    """

    BUNDLE_PATH = "abdm/nhcx/v1/bundle"
    LISTING_PATH = "bundles"

    def __init__(self, base_url: str, timeout: float = 30) -> None:
        """
        :param base_url: Base URL of the bundle API. Trailing slashes are stripped.
        :param timeout: Timeout in seconds for HTTP calls.
        :raises ConfigurationError: If ``base_url`` is empty.
        """
        if not base_url:
            raise ConfigurationError("API data source requires a base URL")
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _get(self, url: str, identifier: str | None) -> Any:
        try:
            response = requests.get(
                url,
                headers={"Accept": FHIR_JSON},
                timeout=self.timeout,
            )
        except requests.Timeout as err:
            logger.warning("Bundle API timed out after %ss: %s", self.timeout, url)
            raise BundleTimeoutError(
                identifier, f"Request timed out after {self.timeout}s"
            ) from err
        except requests.RequestException as err:
            logger.warning("Bundle API unreachable: %s", url)
            raise BundleNetworkError(identifier, f"Request failed: {err}") from err

        if response.status_code == 404:
            raise BundleNotFoundError(identifier, "Bundle not found")

        try:
            response.raise_for_status()
        except requests.HTTPError as err:
            logger.warning(
                "Bundle API returned %s for %s", response.status_code, url
            )
            raise BundleNetworkError(
                identifier, f"HTTP {response.status_code}: {response.reason}"
            ) from err

        try:
            return response.json()
        except ValueError as err:
            raise BundleFormatError(identifier, "Response is not valid JSON") from err

    def load_bundle(self, identifier: str) -> Bundle:
        """
        Fetch one bundle.

        :raises BundleNotFoundError: On HTTP 404.
        :raises BundleNetworkError: On any other HTTP error or connection failure.
        :raises BundleTimeoutError: If the request times out.
        """
        url = f"{self.base_url}/{self.BUNDLE_PATH}/{quote(identifier, safe='')}"
        bundle = self._get(url, identifier)
        if not isinstance(bundle, dict):
            raise BundleFormatError(identifier, "Response is not a JSON object")
        logger.info("Fetched bundle %s from %s", identifier, self.base_url)
        return cast("Bundle", bundle)

    def list_bundles(self) -> list[dict[str, Any]]:
        """
        Fetch the listing, given either as a bare array or as ``{"bundles": [...]}``.

        :raises BundleNetworkError: If the reply has neither shape.
        """
        body = self._get(f"{self.base_url}/{self.LISTING_PATH}", None)
        if isinstance(body, dict) and isinstance(body.get("bundles"), list):
            body = body["bundles"]
        if not isinstance(body, list):
            raise BundleFormatError(None, "Invalid API response format")
        items = [item for item in body if isinstance(item, dict)]
        logger.info("Listed %d bundles from %s", len(items), self.base_url)
        return items


def make_data_source(config: DataSourceConfig) -> LocalBundleSource | ApiBundleSource:
    """
    Build the data source described by ``config``.

    :raises ConfigurationError: If the configuration has problems.
    """
    problems = config.validate()
    if problems:
        raise ConfigurationError("; ".join(problems))

    if config.source_type == "api":
        logger.info("Using bundle API at %s", config.api_base_url)
        return ApiBundleSource(config.api_base_url, config.api_timeout_seconds)

    logger.info("Using local bundles in %s", config.resource_path)
    return LocalBundleSource(config.resource_path)


__all__ = [
    "ApiBundleSource",
    "BundleSource",
    "BundleSourceError",
    "LocalBundleSource",
    "make_data_source",
]
