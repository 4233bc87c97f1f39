"""
Immutable parameter records for the validators and the storage provider.

Parameters are built once at startup (usually by ConfigLoader) and passed to
the factories, which hand them to the implementation constructor unchanged.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

DEFAULT_IMPLEMENTATION = "default"
DEFAULT_VALIDATOR_NAME = "defaultValidator"
DEFAULT_PAYLOAD_VALIDATOR_NAME = "defaultPayloadValidator"
DEFAULT_NEXUS_NAME = "nexus"
DEFAULT_NEXUS_PORT = "8081"
DEFAULT_NEXUS_TIMEOUT_SECONDS = 10.0
DEFAULT_RETRY_PERIOD_SECONDS = 30
DEFAULT_RETRY_SEARCH_STRING = "Connection refused"


def _is_blank(value: Any) -> bool:
    return value is None or not str(value).strip()


@dataclass
class ParameterValidationResult:
    """Outcome of validating a parameter group: one message per invalid field."""

    group_name: str
    errors: List[Tuple[str, str]] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def set_result(self, field_name: str, message: str) -> None:
        self.errors.append((field_name, message))

    def result(self) -> str:
        """Return a one-line summary, empty when valid."""
        if self.is_valid:
            return ""
        details = "; ".join(f"{name}: {message}" for name, message in self.errors)
        return f'parameter group "{self.group_name}" is invalid: {details}'


def _require(result: ParameterValidationResult, params: Any, *field_names: str) -> None:
    for field_name in field_names:
        if _is_blank(getattr(params, field_name)):
            result.set_result(field_name, f"{field_name} must be specified")


@dataclass(frozen=True)
class PolicyValidatorParameters:
    """Parameters for a PolicyValidator, including the Nexus coordinates."""

    name: Optional[str] = DEFAULT_VALIDATOR_NAME
    implementation: Optional[str] = DEFAULT_IMPLEMENTATION
    nexus_name: Optional[str] = DEFAULT_NEXUS_NAME
    nexus_port: Optional[str] = DEFAULT_NEXUS_PORT
    nexus_timeout_seconds: float = DEFAULT_NEXUS_TIMEOUT_SECONDS

    def validate(self) -> ParameterValidationResult:
        result = ParameterValidationResult(type(self).__name__)
        _require(result, self, "implementation", "nexus_name", "nexus_port", "name")
        if self.nexus_timeout_seconds is not None and self.nexus_timeout_seconds <= 0:
            result.set_result("nexus_timeout_seconds", "nexus_timeout_seconds must be positive")
        return result


@dataclass(frozen=True)
class PayloadValidatorParameters:
    """Parameters for a PayloadValidator."""

    name: Optional[str] = DEFAULT_PAYLOAD_VALIDATOR_NAME
    implementation: Optional[str] = DEFAULT_IMPLEMENTATION

    def validate(self) -> ParameterValidationResult:
        result = ParameterValidationResult(type(self).__name__)
        _require(result, self, "implementation", "name")
        return result


@dataclass(frozen=True)
class ProviderParameters:
    """
    Parameters handed to a storage provider factory.

    retry_period_seconds and retry_search_string drive ProviderRetriever;
    everything else the provider needs (URL, credentials, ...) goes in extra.
    """

    retry_period_seconds: float = DEFAULT_RETRY_PERIOD_SECONDS
    retry_search_string: str = DEFAULT_RETRY_SEARCH_STRING
    extra: Mapping[str, Any] = field(default_factory=dict)

    def validate(self) -> ParameterValidationResult:
        result = ParameterValidationResult(type(self).__name__)
        if self.retry_period_seconds is None or self.retry_period_seconds < 0:
            result.set_result("retry_period_seconds", "retry_period_seconds must not be negative")
        _require(result, self, "retry_search_string")
        return result

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "ProviderParameters":
        data = dict(data or {})
        return cls(
            retry_period_seconds=data.pop("retry_period_seconds", DEFAULT_RETRY_PERIOD_SECONDS),
            retry_search_string=data.pop("retry_search_string", DEFAULT_RETRY_SEARCH_STRING),
            extra=data,
        )
