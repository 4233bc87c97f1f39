"""
Minimal HTTP client for the Nexus (Maven repository) REST API.

Used to check that a rule artifact exists before a native Drools policy is
accepted:

    GET http://<host>:<port>/nexus/service/local/artifact/maven/resolve?r=releases&g=..&a=..&v=..

No authentication is sent. The caller interprets the status code.
"""

import logging
from typing import Mapping, Optional

import requests

from .exceptions import HttpClientConfigError

logger = logging.getLogger(__name__)

NEXUS_BASE_PATH = "nexus/service/local/artifact/maven"
DEFAULT_TIMEOUT_SECONDS = 10.0


class NexusClient:
    """Unauthenticated HTTP client bound to one Nexus base URL."""

    def __init__(
        self,
        host: str,
        port,
        base_path: str = NEXUS_BASE_PATH,
        https: bool = False,
        timeout: Optional[float] = DEFAULT_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the client.

        Args:
            host: Nexus host name
            port: Nexus port (int or numeric string)
            base_path: Path prefix of the Maven artifact service
            https: Use TLS (plain HTTP by default)
            timeout: Request timeout in seconds, None to wait forever
            session: Optional requests.Session to reuse

        Raises:
            HttpClientConfigError: If host or port cannot form a valid URL
        """
        if host is None or not str(host).strip():
            raise HttpClientConfigError("a host must be specified for nexus access")
        try:
            port_number = int(str(port).strip())
        except (TypeError, ValueError) as e:
            raise HttpClientConfigError(f"invalid port for nexus access: {port!r}") from e
        if not 0 < port_number < 65536:
            raise HttpClientConfigError(f"port out of range for nexus access: {port_number}")

        self.host = str(host).strip()
        self.port = port_number
        self.timeout = timeout
        scheme = "https" if https else "http"
        self.base_url = f"{scheme}://{self.host}:{self.port}/{base_path.strip('/')}/"
        self.session = session or requests.Session()

    @classmethod
    def from_parameters(cls, parameters) -> "NexusClient":
        """Build a client from PolicyValidatorParameters."""
        return cls(
            parameters.nexus_name,
            parameters.nexus_port,
            timeout=parameters.nexus_timeout_seconds,
        )

    def get(self, path: str, params: Optional[Mapping[str, str]] = None) -> requests.Response:
        """
        Issue a GET relative to the base URL.

        Args:
            path: Relative path, e.g. "resolve"
            params: Query parameters; requests percent-encodes the values

        Returns:
            The response, whatever its status

        Raises:
            requests.RequestException: On transport failures (refused, timeout, ...)
        """
        url = self.base_url + path.lstrip("/")
        logger.debug("Nexus GET", extra={"url": url, "params": dict(params or {})})
        return self.session.get(url, params=params, timeout=self.timeout)

    def close(self) -> None:
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
