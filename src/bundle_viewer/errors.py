"""
Exceptions raised by the bundle data sources and the configuration layer.

The classification core never raises for data-shape problems; everything
here comes from I/O or from startup configuration.
"""

from dataclasses import dataclass


@dataclass
class BundleSourceError(Exception):
    """
    Raised when a bundle cannot be retrieved from its data source.

    Wraps file system and ``requests`` failures so callers are not coupled to
    either.

    :param identifier: Bundle identifier that was requested, ``None`` for
        listing failures.
    :param message: Human-readable description of the cause.
    """

    identifier: str | None
    message: str

    def __str__(self) -> str:
        if self.identifier is None:
            return self.message
        return f"{self.message} (bundle: {self.identifier})"


class BundleNotFoundError(BundleSourceError):
    """The bundle does not exist in the data source."""


class BundleNetworkError(BundleSourceError):
    """The data source could not be reached or returned an unusable reply."""


class BundleFormatError(BundleNetworkError):
    """The data source answered, but not with a JSON bundle or listing."""


class BundleTimeoutError(BundleSourceError):
    """The data source did not answer within the configured timeout."""


class ConfigurationError(Exception):
    """
    Raised when the data source configuration is invalid.
    """
