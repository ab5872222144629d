import logging
import os
from dataclasses import asdict
from typing import Any

from fhir.operation_outcome import OperationOutcome
from flask import Flask, Response, jsonify

from bundle_viewer.config import DataSourceConfig
from bundle_viewer.data_source import FHIR_JSON, make_data_source
from bundle_viewer.errors import (
    BundleNetworkError,
    BundleNotFoundError,
    BundleSourceError,
    BundleTimeoutError,
)
from bundle_viewer.listing import BundleListingService
from bundle_viewer.view import build_bundle_view, to_json

logger = logging.getLogger(__name__)

app = Flask(__name__)

LISTING_SERVICE_KEY = "bundle_listing"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Configure root logging from ``level`` or the ``LOG_LEVEL`` variable."""
    logging.basicConfig(
        level=(level or os.getenv("LOG_LEVEL", "INFO")).upper(),
        format=LOG_FORMAT,
    )


def get_app_host() -> str:
    host = os.getenv("FLASK_HOST")
    if host is None:
        raise RuntimeError("FLASK_HOST environment variable is not set.")
    return host


def get_app_port() -> int:
    port = os.getenv("FLASK_PORT")
    if port is None:
        raise RuntimeError("FLASK_PORT environment variable is not set.")
    return int(port)


def get_listing_service() -> BundleListingService:
    """
    Return the listing service for this app, building it from the
    environment on first use.
    """
    service = app.extensions.get(LISTING_SERVICE_KEY)
    if service is None:
        config = DataSourceConfig.from_env()
        service = BundleListingService(make_data_source(config))
        app.extensions[LISTING_SERVICE_KEY] = service
    return service


def error_status(err: BundleSourceError) -> int:
    """HTTP status for a data source failure."""
    match err:
        case BundleNotFoundError():
            return 404
        case BundleTimeoutError():
            return 504
        case BundleNetworkError():
            return 502
        case _:
            return 500


def operation_outcome(code: str, diagnostics: str) -> OperationOutcome:
    return {
        "resourceType": "OperationOutcome",
        "issue": [{"severity": "error", "code": code, "diagnostics": diagnostics}],
    }


@app.errorhandler(BundleSourceError)
def handle_bundle_source_error(err: BundleSourceError) -> tuple[Response, int]:
    status = error_status(err)
    code = "not-found" if status == 404 else "exception"
    logger.log(
        logging.INFO if status == 404 else logging.ERROR,
        "Bundle request failed with %s: %s",
        status,
        err,
    )
    response = jsonify(operation_outcome(code, str(err)))
    response.mimetype = FHIR_JSON
    return response, status


@app.route("/health", methods=["GET"])
def health_check() -> dict[str, Any]:
    """Health check endpoint."""
    return {"status": "healthy"}


@app.route("/bundles", methods=["GET"])
def list_bundles() -> Response:
    """Classified metadata for every available bundle."""
    items = get_listing_service().list_bundles()
    return jsonify([asdict(item) for item in items])


@app.route("/bundles/<identifier>", methods=["GET"])
def get_bundle_view(identifier: str) -> Response:
    """The display view model of one bundle."""
    lookup = get_listing_service().lookup(identifier)
    return jsonify(to_json(build_bundle_view(lookup.bundle)))


@app.route("/bundles/<identifier>/raw", methods=["GET"])
def get_raw_bundle(identifier: str) -> Response:
    """The bundle exactly as the data source returned it."""
    lookup = get_listing_service().lookup(identifier)
    response = jsonify(lookup.bundle)
    response.mimetype = FHIR_JSON
    return response


if __name__ == "__main__":
    configure_logging()
    app.run(host=get_app_host(), port=get_app_port())
