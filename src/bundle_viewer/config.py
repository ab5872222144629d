"""
Data source configuration read from environment variables.

Variables:
    - ``DATA_SOURCE_TYPE``: ``local`` (default) or ``api``
    - ``DATA_SOURCE_API_URL``: base URL of the bundle API
    - ``DATA_SOURCE_API_TIMEOUT``: API timeout in milliseconds (default 30000)
    - ``LOCAL_RESOURCE_PATH``: directory holding bundle files (default
      ``resources``)
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Literal, TypeAlias, cast

from bundle_viewer.errors import ConfigurationError

SourceType: TypeAlias = Literal["local", "api"]

SOURCE_TYPES: tuple[SourceType, ...] = ("local", "api")
DEFAULT_API_TIMEOUT_MS = 30000
DEFAULT_RESOURCE_PATH = "resources"


@dataclass(frozen=True)
class DataSourceConfig:
    """
    Where bundles come from.

    :param source_type: ``"local"`` to read files, ``"api"`` to call the bundle API.
    :param api_base_url: Base URL of the bundle API, required in ``api`` mode.
    :param api_timeout_ms: Timeout for API calls in milliseconds.
    :param resource_path: Directory holding bundle files in ``local`` mode.
    """

    source_type: SourceType = "local"
    api_base_url: str = ""
    api_timeout_ms: int = DEFAULT_API_TIMEOUT_MS
    resource_path: str = DEFAULT_RESOURCE_PATH

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "DataSourceConfig":
        """
        Build a configuration from environment variables.

        :param environ: Mapping to read instead of ``os.environ``.
        :raises ConfigurationError: If the source type is not ``local`` or
            ``api``, or the timeout is not a positive integer.
        """
        env = os.environ if environ is None else environ

        source_type = env.get("DATA_SOURCE_TYPE", "local").strip().lower()
        if source_type not in SOURCE_TYPES:
            raise ConfigurationError(
                f"DATA_SOURCE_TYPE must be one of {', '.join(SOURCE_TYPES)}, "
                f"got {source_type!r}"
            )

        raw_timeout = env.get("DATA_SOURCE_API_TIMEOUT", str(DEFAULT_API_TIMEOUT_MS))
        try:
            timeout = int(raw_timeout)
        except ValueError as err:
            raise ConfigurationError(
                f"DATA_SOURCE_API_TIMEOUT must be an integer, got {raw_timeout!r}"
            ) from err
        if timeout <= 0:
            raise ConfigurationError("DATA_SOURCE_API_TIMEOUT must be positive")

        return cls(
            source_type=cast("SourceType", source_type),
            api_base_url=env.get("DATA_SOURCE_API_URL", "").strip(),
            api_timeout_ms=timeout,
            resource_path=env.get("LOCAL_RESOURCE_PATH", DEFAULT_RESOURCE_PATH),
        )

    @property
    def api_timeout_seconds(self) -> float:
        return self.api_timeout_ms / 1000

    def validate(self) -> list[str]:
        """Return the configuration problems found, empty if there are none."""
        problems = []
        if self.source_type == "api" and not self.api_base_url:
            problems.append("DATA_SOURCE_API_URL is required when DATA_SOURCE_TYPE=api")
        if self.source_type == "local" and not self.resource_path:
            problems.append(
                "LOCAL_RESOURCE_PATH is required when DATA_SOURCE_TYPE=local"
            )
        return problems
