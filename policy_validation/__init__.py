"""
policy-validation: validator plugins and rule artifact checks for policy services

This library provides:
- Named plugin factories resolving configured validator implementations
- Native policy validation (Drools rule artifacts checked against Nexus)
- Storage provider retrieval with cancellable retry
- YAML configuration with field validation

Example:
    from policy_validation import PolicyValidationService

    service = PolicyValidationService()
    outcome = service.validate_service_template(template)
"""

from .api import PolicyValidationService
from .config_loader import ConfigLoader
from .default_policy_validator import DefaultPolicyValidator
from .exceptions import (
    ArtifactCoordinateError,
    ConfigurationError,
    HttpClientConfigError,
    InvalidArgumentError,
    PolicyModelError,
)
from .models import (
    ArtifactCoordinate,
    NativePolicyType,
    Policy,
    PolicyEntityKey,
    ValidationOutcome,
    policy_set_from_service_template,
)
from .parameters import PayloadValidatorParameters, PolicyValidatorParameters, ProviderParameters
from .payload_validator import DefaultPayloadValidator, PayloadValidator, PayloadValidatorFactory
from .policy_validator import PolicyValidator, PolicyValidatorFactory
from .provider_retriever import ProviderRetriever

__version__ = "0.1.0"
__all__ = [
    "PolicyValidationService",
    "ConfigLoader",
    "PolicyValidator",
    "PolicyValidatorFactory",
    "DefaultPolicyValidator",
    "PayloadValidator",
    "PayloadValidatorFactory",
    "DefaultPayloadValidator",
    "ProviderRetriever",
    "PolicyValidatorParameters",
    "PayloadValidatorParameters",
    "ProviderParameters",
    "Policy",
    "PolicyEntityKey",
    "NativePolicyType",
    "ArtifactCoordinate",
    "ValidationOutcome",
    "policy_set_from_service_template",
    "PolicyModelError",
    "InvalidArgumentError",
    "ConfigurationError",
    "ArtifactCoordinateError",
    "HttpClientConfigError",
]
