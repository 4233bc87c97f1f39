"""Error types raised by policy-validation."""

from http import HTTPStatus
from typing import Any, Dict, Optional, Union


class PolicyModelError(Exception):
    """
    Structured validation error.

    Carries an HTTP status code so the caller can render it directly as an
    API error response. The status code is kept as a plain int because remote
    repositories may answer with codes HTTPStatus does not know about.
    """

    def __init__(self, status: Union[HTTPStatus, int], message: str):
        super().__init__(message)
        self.status_code = int(status)
        self.message = message

    @property
    def status(self) -> Optional[HTTPStatus]:
        """Return the status as an HTTPStatus, or None for unknown codes."""
        try:
            return HTTPStatus(self.status_code)
        except ValueError:
            return None

    def to_dict(self) -> Dict[str, Any]:
        return {"status_code": self.status_code, "message": self.message}


class InvalidArgumentError(ValueError):
    """Raised when a required argument (e.g. validator parameters) is None."""


class ConfigurationError(ValueError):
    """Raised when the configuration document is missing or invalid."""

    def __init__(self, message: str, validation_result=None):
        super().__init__(message)
        self.validation_result = validation_result


class ArtifactCoordinateError(ValueError):
    """Raised when a rule artifact coordinate cannot be decoded."""


class HttpClientConfigError(Exception):
    """Raised when an HTTP client cannot be built for the configured remote."""
